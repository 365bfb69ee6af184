from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ...common.datetime_utils import at_time_of_day, hours_between
from ..policy import PayPolicy

ZERO = Decimal(0)


@dataclass(frozen=True)
class EntryHours:
    """One completed time entry as seen by the undertime rules."""

    clock_in: datetime
    clock_out: datetime
    worked_hours: Decimal
    approved_overtime: bool


def shortfall_hours(entry: EntryHours, policy: PayPolicy) -> Decimal:
    """Hours short of a full shift; approved-overtime entries never fall short."""
    if entry.approved_overtime or entry.worked_hours >= policy.full_shift_hours:
        return ZERO
    return policy.full_shift_hours - entry.worked_hours


def boundary_hours(entry: EntryHours, policy: PayPolicy) -> Decimal:
    """Lateness after shift start plus early leave before shift end."""
    shift_start = at_time_of_day(entry.clock_in, policy.shift_start)
    shift_end = at_time_of_day(entry.clock_in, policy.shift_end)

    hours = ZERO
    if entry.clock_in > shift_start:
        hours += hours_between(shift_start, entry.clock_in)
    if entry.clock_out < shift_end:
        hours += hours_between(entry.clock_out, shift_end)
    return hours


class UndertimeStrategy(ABC):
    """Strategy Pattern: how undertime accrues and how short overtime is credited."""

    @abstractmethod
    def undertime_for(self, entry: EntryHours, policy: PayPolicy) -> Decimal:
        raise NotImplementedError

    def short_overtime_credit(self, entry: EntryHours, policy: PayPolicy) -> Decimal:
        """Hours credited when approved overtime ends at or before the nominal shift end."""
        return min(entry.worked_hours, policy.full_shift_hours)
