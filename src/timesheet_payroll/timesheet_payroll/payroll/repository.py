from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import PayrollBreakdown, PayslipView


class PayslipRepository(Protocol):
    def insert_payslip(
        self,
        *,
        user_id: int,
        week_start: date,
        week_end: date,
        breakdown: PayrollBreakdown,
    ) -> int:
        raise NotImplementedError

    def exists_for_user_and_week(self, user_id: int, week_start: date) -> bool:
        raise NotImplementedError

    def delete_for_user_and_week(self, user_id: int, week_start: date) -> int:
        raise NotImplementedError

    def query_payslips(self, week_start: date) -> Sequence[PayslipView]:
        """Payslips of the week joined with user identity, ordered by department then username."""

        raise NotImplementedError
