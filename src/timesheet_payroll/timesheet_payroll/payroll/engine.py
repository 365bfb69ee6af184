from __future__ import annotations

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..common.datetime_utils import at_time_of_day, hours_between
from ..core.constants import STORED_SCALE
from ..time_entries.model import TimeEntry
from ..users.model import User
from .factory import UndertimeStrategyFactory
from .model import PayrollBreakdown
from .policy import PayPolicy
from .rules.base import ZERO, EntryHours, UndertimeStrategy

logger = logging.getLogger(__name__)


def _stored(value: Decimal) -> Decimal:
    """Round to the payslip column scale the same way MySQL does on insert."""
    return value.quantize(STORED_SCALE, rounding=ROUND_HALF_UP)


class PayrollEngine:
    """Turns one user's completed time entries for a week into hours and pay.

    Pure computation: no I/O, no shared state. Entries may come in any order.
    """

    def __init__(
        self,
        policy: Optional[PayPolicy] = None,
        *,
        strategy: Optional[UndertimeStrategy] = None,
        strategy_factory: Optional[UndertimeStrategyFactory] = None,
    ):
        self._policy = policy or PayPolicy()
        factory = strategy_factory or UndertimeStrategyFactory()
        self._strategy = strategy or factory.for_rule(self._policy.undertime_rule)

    @property
    def policy(self) -> PayPolicy:
        return self._policy

    def compute_weekly_payroll(self, entries: Iterable[TimeEntry], user: Optional[User]) -> Optional[PayrollBreakdown]:
        """Return the week's breakdown, or None when the user does not exist."""

        if user is None:
            return None

        policy = self._policy
        total_hours = ZERO
        overtime_hours = ZERO
        undertime_hours = ZERO
        first_clock_in: Optional[datetime] = None
        last_clock_out: Optional[datetime] = None

        for entry in entries:
            if not self._is_payable(entry, user):
                continue

            worked = hours_between(entry.clock_in, entry.clock_out)
            hours = EntryHours(
                clock_in=entry.clock_in,
                clock_out=entry.clock_out,
                worked_hours=worked,
                approved_overtime=entry.has_approved_overtime,
            )

            if hours.approved_overtime:
                shift_end = at_time_of_day(entry.clock_in, policy.shift_end)
                if entry.clock_out > shift_end:
                    # overtime shift is credited as a complete base shift
                    total_hours += policy.full_shift_hours
                    overtime_start = max(entry.clock_out - policy.overtime_grace, shift_end)
                    overtime_hours += max(ZERO, hours_between(overtime_start, entry.clock_out))
                else:
                    total_hours += self._strategy.short_overtime_credit(hours, policy)
            else:
                total_hours += min(worked, policy.full_shift_hours)

            undertime_hours += self._strategy.undertime_for(hours, policy)

            if first_clock_in is None or entry.clock_in < first_clock_in:
                first_clock_in = entry.clock_in
            if last_clock_out is None or entry.clock_out > last_clock_out:
                last_clock_out = entry.clock_out

        base_salary = _stored(min(total_hours, policy.weekly_hour_cap) * policy.base_rate)
        overtime_pay = _stored(overtime_hours * policy.overtime_rate)
        undertime_deduction = _stored(undertime_hours * policy.undertime_rate)
        staff_house_deduction = _stored(policy.staff_house_deduction if user.staff_house else ZERO)

        # summed from the rounded parts so the stored row keeps the identity;
        # not floored: a staff-house deduction can push the total below zero
        total_salary = base_salary + overtime_pay - undertime_deduction - staff_house_deduction

        return PayrollBreakdown(
            total_hours=_stored(total_hours),
            overtime_hours=_stored(overtime_hours),
            undertime_hours=_stored(undertime_hours),
            base_salary=base_salary,
            overtime_pay=overtime_pay,
            undertime_deduction=undertime_deduction,
            staff_house_deduction=staff_house_deduction,
            total_salary=total_salary,
            clock_in_time=first_clock_in,
            clock_out_time=last_clock_out,
        )

    @staticmethod
    def _is_payable(entry: TimeEntry, user: User) -> bool:
        if entry.user_id != user.user_id:
            logger.warning("entry %s belongs to user %s, not %s; skipped", entry.entry_id, entry.user_id, user.user_id)
            return False
        if not entry.is_complete:
            return False
        if entry.clock_out <= entry.clock_in:
            logger.warning(
                "entry %s has clock-out %s not after clock-in %s; skipped",
                entry.entry_id,
                entry.clock_out.isoformat(),
                entry.clock_in.isoformat(),
            )
            return False
        return True
