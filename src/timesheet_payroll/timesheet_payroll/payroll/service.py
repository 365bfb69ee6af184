from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import week_end_for
from ..core.enums import DuplicatePolicy
from ..core.exceptions import DuplicatePayslipError
from ..core.result import Result
from ..time_entries.repository import TimeEntryRepository
from ..users.repository import UserRepository
from .engine import PayrollEngine
from .model import PayrollBreakdown, PayslipView
from .repository import PayslipRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Runs the payroll engine against stored time entries and persists payslips.

    Users are processed one after another. A failure for one user is logged
    and that user is left out of the result; the rest of the batch carries on.
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        users: UserRepository,
        payslips: PayslipRepository,
        *,
        engine: Optional[PayrollEngine] = None,
    ):
        self._entries = entries
        self._users = users
        self._payslips = payslips
        self._engine = engine or PayrollEngine()

    @property
    def duplicate_policy(self) -> DuplicatePolicy:
        return self._engine.policy.duplicate_policy

    def calculate_weekly_payroll(self, user_id: int, week_start: date) -> Result[PayrollBreakdown]:
        try:
            entries = self._entries.fetch_completed_for_week(int(user_id), week_start)
            user = self._users.get_by_id(int(user_id))
        except Exception:
            logger.exception("payroll lookup failed for user %s, week %s", user_id, week_start)
            return Result.fault(f"Could not load time entries for user {user_id}")

        breakdown = self._engine.compute_weekly_payroll(entries, user)
        if breakdown is None:
            return Result.empty()
        return Result.ok(breakdown)

    def generate_weekly_payslips(self, week_start: date) -> Result[list[PayslipView]]:
        try:
            user_ids = list(self._entries.list_user_ids_for_week(week_start))
        except Exception:
            logger.exception("could not resolve users with time entries for week %s", week_start)
            return Result.fault("Could not resolve users for the week", [])

        week_end = week_end_for(week_start)
        payslips: list[PayslipView] = []
        failed: list[int] = []

        for user_id in user_ids:
            try:
                payslip = self._generate_for_user(user_id, week_start, week_end)
            except DuplicatePayslipError as e:
                logger.info("%s", e)
                continue
            except Exception:
                logger.exception("payslip generation failed for user %s, week %s", user_id, week_start)
                failed.append(user_id)
                continue
            if payslip is not None:
                payslips.append(payslip)

        logger.info(
            "week %s: %d payslip(s) generated for %d user(s), %d failed",
            week_start,
            len(payslips),
            len(user_ids),
            len(failed),
        )

        if payslips:
            return Result.ok(payslips)
        if failed:
            return Result.fault(f"Payslip generation failed for {len(failed)} user(s)", [])
        return Result.empty([])

    def _generate_for_user(self, user_id: int, week_start: date, week_end: date) -> Optional[PayslipView]:
        entries = self._entries.fetch_completed_for_week(user_id, week_start)
        user = self._users.get_by_id(user_id)
        breakdown = self._engine.compute_weekly_payroll(entries, user)
        if breakdown is None:
            logger.warning("user %s has time entries but no profile; skipped", user_id)
            return None

        if self.duplicate_policy == DuplicatePolicy.REJECT:
            if self._payslips.exists_for_user_and_week(user_id, week_start):
                raise DuplicatePayslipError(f"payslip for user {user_id}, week {week_start} already exists; skipped")
        elif self.duplicate_policy == DuplicatePolicy.REPLACE:
            removed = self._payslips.delete_for_user_and_week(user_id, week_start)
            if removed:
                logger.info("replaced %d payslip(s) for user %s, week %s", removed, user_id, week_start)

        payslip_id = self._payslips.insert_payslip(
            user_id=user_id,
            week_start=week_start,
            week_end=week_end,
            breakdown=breakdown,
        )

        return PayslipView(
            payslip_id=payslip_id,
            user_id=user_id,
            username=user.username,
            department=user.department,
            week_start=week_start,
            week_end=week_end,
            breakdown=breakdown,
        )
