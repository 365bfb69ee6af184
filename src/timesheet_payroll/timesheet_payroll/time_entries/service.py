from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local, week_start_for
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import TimeEntry
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)


class TimeTrackingService:
    """Use cases: clock in/out and the admin overtime approval queue."""

    def __init__(self, entries: TimeEntryRepository, users: UserRepository):
        self._entries = entries
        self._users = users

    def _require_active_user(self, user_id: int):
        user = self._users.get_by_id(int(user_id))
        if not user or not user.is_active:
            raise ValidationError("Employee does not exist or is inactive")
        return user

    def clock_in(self, user_id: int, *, now: datetime | None = None) -> TimeEntry:
        now = now or now_local()
        self._require_active_user(user_id)

        if self._entries.get_open_for_user(int(user_id)):
            raise ValidationError("You are already clocked in")

        week_start = week_start_for(now.date())
        entry_id = self._entries.create_clock_in(user_id=int(user_id), week_start=week_start, clock_in=now)
        logger.info("user %s clocked in (entry %s, week %s)", user_id, entry_id, week_start)
        return TimeEntry(entry_id=entry_id, user_id=int(user_id), week_start=week_start, clock_in=now)

    def clock_out(
        self,
        user_id: int,
        *,
        overtime_note: Optional[str] = None,
        now: datetime | None = None,
    ) -> TimeEntry:
        now = now or now_local()

        entry = self._entries.get_open_for_user(int(user_id))
        if not entry:
            raise ValidationError("You are not clocked in")
        if now < entry.clock_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        note = (overtime_note or "").strip() or None
        if not self._entries.update_clock_out(
            entry_id=entry.entry_id,
            clock_out=now,
            overtime_requested=note is not None,
            overtime_note=note,
        ):
            raise ValidationError("Clock-out failed")

        logger.info("user %s clocked out (entry %s, overtime requested=%s)", user_id, entry.entry_id, note is not None)
        return TimeEntry(
            entry_id=entry.entry_id,
            user_id=entry.user_id,
            week_start=entry.week_start,
            clock_in=entry.clock_in,
            clock_out=now,
            overtime_requested=note is not None,
            overtime_note=note,
        )

    def get_today_entry(self, user_id: int, *, today: date | None = None) -> Optional[TimeEntry]:
        today = today or now_local().date()
        return self._entries.get_latest_for_user_and_date(int(user_id), today)

    def list_overtime_requests(self) -> list[dict]:
        return [r.to_dict() for r in self._entries.list_pending_overtime()]

    def decide_overtime(
        self,
        entry_id: int,
        *,
        approved: bool,
        admin_user_id: int,
        now: datetime | None = None,
    ) -> None:
        decider = self._users.get_by_id(int(admin_user_id))
        if not decider or not decider.is_active or decider.role != Role.ADMIN:
            raise AuthorizationError("Only an active admin can decide overtime")

        entry = self._entries.get_by_id(int(entry_id))
        if not entry:
            raise NotFoundError("Time entry not found")
        if not entry.overtime_requested:
            raise ValidationError("No overtime was requested for this entry")
        if entry.approved_by is not None:
            raise ValidationError("Overtime request was already decided")

        if not self._entries.decide_overtime(
            entry_id=entry.entry_id,
            approved=bool(approved),
            decided_by=int(admin_user_id),
            decided_at=now or now_local(),
        ):
            raise ValidationError("Overtime request was already decided")
        logger.info("overtime for entry %s %s by admin %s", entry_id, "approved" if approved else "rejected", admin_user_id)
