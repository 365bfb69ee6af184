from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import OvertimeRequestRow, TimeEntry


class TimeEntryRepository(Protocol):
    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def get_open_for_user(self, user_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def get_latest_for_user_and_date(self, user_id: int, work_date: date) -> Optional[TimeEntry]:
        raise NotImplementedError

    def create_clock_in(self, *, user_id: int, week_start: date, clock_in: datetime) -> int:
        raise NotImplementedError

    def update_clock_out(
        self,
        *,
        entry_id: int,
        clock_out: datetime,
        overtime_requested: bool,
        overtime_note: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def list_pending_overtime(self) -> Sequence[OvertimeRequestRow]:
        raise NotImplementedError

    def decide_overtime(self, *, entry_id: int, approved: bool, decided_by: int, decided_at: datetime) -> bool:
        """Record an admin decision; only pending requests are updated."""

        raise NotImplementedError

    def fetch_completed_for_week(self, user_id: int, week_start: date) -> Sequence[TimeEntry]:
        """Entries of the week with a clock-out, the only ones eligible for payroll."""

        raise NotImplementedError

    def list_user_ids_for_week(self, week_start: date) -> Sequence[int]:
        """Distinct users with at least one entry in the week."""

        raise NotImplementedError
