from __future__ import annotations

from decimal import Decimal

from ..policy import PayPolicy
from .base import EntryHours, UndertimeStrategy, shortfall_hours


class ShortfallStrategy(UndertimeStrategy):
    """Full shift assumed; any shortfall below it counts as undertime."""

    def undertime_for(self, entry: EntryHours, policy: PayPolicy) -> Decimal:
        return shortfall_hours(entry, policy)

    def short_overtime_credit(self, entry: EntryHours, policy: PayPolicy) -> Decimal:
        # credited as worked, not capped at a full shift
        return entry.worked_hours
