from __future__ import annotations

from dataclasses import dataclass
from datetime import time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_clock_time
from ..core import constants
from ..core.enums import DuplicatePolicy, UndertimeRule
from ..core.exceptions import ValidationError


def _decimal(settings: Mapping[str, Any], key: str, default: Decimal) -> Decimal:
    raw = settings.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        raise ValidationError(f"{key} must be a number, got {raw!r}")
    if not value.is_finite():
        raise ValidationError(f"{key} must be a number, got {raw!r}")
    if value < 0:
        raise ValidationError(f"{key} must not be negative")
    return value


def _clock(settings: Mapping[str, Any], key: str, default: time) -> time:
    raw = settings.get(key)
    if raw is None or raw == "":
        return default
    if isinstance(raw, time):
        return raw
    try:
        return parse_clock_time(str(raw))
    except ValueError:
        raise ValidationError(f"{key} must be HH:MM, got {raw!r}")


def _choice(settings: Mapping[str, Any], key: str, enum_cls, default):
    raw = settings.get(key)
    if raw is None or raw == "":
        return default
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(str(raw).strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{key} must be one of: {allowed}")


@dataclass(frozen=True)
class PayPolicy:
    """Pay rates and the shift window used by the payroll engine.

    All hour and money values are Decimal so that the salary identity
    (total = base + overtime - undertime - staff house) holds exactly.
    """

    base_rate: Decimal = constants.DEFAULT_BASE_RATE
    overtime_rate: Decimal = constants.DEFAULT_OVERTIME_RATE
    undertime_rate: Decimal = constants.DEFAULT_UNDERTIME_RATE
    staff_house_deduction: Decimal = constants.DEFAULT_STAFF_HOUSE_DEDUCTION
    shift_start: time = constants.DEFAULT_SHIFT_START
    shift_end: time = constants.DEFAULT_SHIFT_END
    full_shift_hours: Decimal = constants.DEFAULT_FULL_SHIFT_HOURS
    weekly_hour_cap: Decimal = constants.DEFAULT_WEEKLY_HOUR_CAP
    overtime_grace_minutes: int = constants.DEFAULT_OVERTIME_GRACE_MINUTES
    undertime_rule: UndertimeRule = UndertimeRule.SHORTFALL
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.APPEND

    def __post_init__(self):
        if self.shift_end <= self.shift_start:
            raise ValidationError("Shift end must be after shift start")

    @property
    def overtime_grace(self) -> timedelta:
        return timedelta(minutes=self.overtime_grace_minutes)

    @classmethod
    def from_settings(cls, settings: Optional[Mapping[str, Any]] = None) -> "PayPolicy":
        """Build a policy from a PAYROLL settings dict (missing keys use defaults)."""

        s = settings or {}
        grace = _decimal(s, "OVERTIME_GRACE_MINUTES", Decimal(constants.DEFAULT_OVERTIME_GRACE_MINUTES))
        if grace != grace.to_integral_value():
            raise ValidationError(f"OVERTIME_GRACE_MINUTES must be a whole number of minutes, got {grace}")
        return cls(
            base_rate=_decimal(s, "BASE_RATE", constants.DEFAULT_BASE_RATE),
            overtime_rate=_decimal(s, "OVERTIME_RATE", constants.DEFAULT_OVERTIME_RATE),
            undertime_rate=_decimal(s, "UNDERTIME_RATE", constants.DEFAULT_UNDERTIME_RATE),
            staff_house_deduction=_decimal(s, "STAFF_HOUSE_DEDUCTION", constants.DEFAULT_STAFF_HOUSE_DEDUCTION),
            shift_start=_clock(s, "SHIFT_START", constants.DEFAULT_SHIFT_START),
            shift_end=_clock(s, "SHIFT_END", constants.DEFAULT_SHIFT_END),
            full_shift_hours=_decimal(s, "FULL_SHIFT_HOURS", constants.DEFAULT_FULL_SHIFT_HOURS),
            weekly_hour_cap=_decimal(s, "WEEKLY_HOUR_CAP", constants.DEFAULT_WEEKLY_HOUR_CAP),
            overtime_grace_minutes=int(grace),
            undertime_rule=_choice(s, "UNDERTIME_RULE", UndertimeRule, UndertimeRule.SHORTFALL),
            duplicate_policy=_choice(s, "DUPLICATE_POLICY", DuplicatePolicy, DuplicatePolicy.APPEND),
        )
