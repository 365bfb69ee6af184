from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import UndertimeRule
from .rules.base import UndertimeStrategy
from .rules.boundary_rule import BoundaryOnlyStrategy, BoundaryStrategy
from .rules.shortfall_rule import ShortfallStrategy


@dataclass
class UndertimeStrategyFactory:
    """Factory Pattern: choose the undertime strategy named by the pay policy."""

    def for_rule(self, rule: UndertimeRule) -> UndertimeStrategy:
        if rule == UndertimeRule.BOUNDARY:
            return BoundaryStrategy()
        if rule == UndertimeRule.BOUNDARY_ONLY:
            return BoundaryOnlyStrategy()
        return ShortfallStrategy()
