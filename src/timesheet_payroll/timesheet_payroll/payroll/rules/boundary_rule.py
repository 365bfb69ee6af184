from __future__ import annotations

from decimal import Decimal

from ..policy import PayPolicy
from .base import EntryHours, UndertimeStrategy, boundary_hours, shortfall_hours


class BoundaryStrategy(UndertimeStrategy):
    """Shortfall plus lateness/earliness against the shift window.

    Both checks fire independently, so a late arrival on a short shift is
    counted once as shortfall and again as lateness.
    """

    def undertime_for(self, entry: EntryHours, policy: PayPolicy) -> Decimal:
        return shortfall_hours(entry, policy) + boundary_hours(entry, policy)


class BoundaryOnlyStrategy(UndertimeStrategy):
    """Lateness/earliness against the shift window, no shortfall."""

    def undertime_for(self, entry: EntryHours, policy: PayPolicy) -> Decimal:
        return boundary_hours(entry, policy)
