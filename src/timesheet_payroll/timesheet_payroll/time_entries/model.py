from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one clock-in/clock-out session."""

    entry_id: int
    user_id: int
    week_start: date
    clock_in: datetime
    clock_out: Optional[datetime] = None
    overtime_requested: bool = False
    overtime_approved: bool = False
    overtime_note: Optional[str] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None

    @property
    def is_complete(self) -> bool:
        return self.clock_out is not None

    @property
    def has_approved_overtime(self) -> bool:
        return self.overtime_requested and self.overtime_approved

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "user_id": self.user_id,
            "week_start": self.week_start.isoformat(),
            "clock_in": self.clock_in.isoformat(),
            "clock_out": self.clock_out.isoformat() if self.clock_out else None,
            "overtime_requested": self.overtime_requested,
            "overtime_approved": self.overtime_approved,
            "overtime_note": self.overtime_note,
        }


@dataclass(frozen=True)
class OvertimeRequestRow:
    """Read-model for the admin overtime queue."""

    entry_id: int
    user_id: int
    username: str
    department: str
    clock_in: datetime
    clock_out: Optional[datetime]
    overtime_note: Optional[str]

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "user_id": self.user_id,
            "username": self.username,
            "department": self.department,
            "clock_in": self.clock_in.isoformat(),
            "clock_out": self.clock_out.isoformat() if self.clock_out else None,
            "overtime_note": self.overtime_note,
        }
