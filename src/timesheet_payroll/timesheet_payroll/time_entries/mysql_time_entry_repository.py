from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import OvertimeRequestRow, TimeEntry
from .repository import TimeEntryRepository

_ENTRY_COLUMNS = (
    "entry_id, user_id, week_start, clock_in, clock_out, overtime_requested, "
    "overtime_approved, overtime_note, approved_by, approved_at"
)


def _row_to_entry(r: dict) -> TimeEntry:
    return TimeEntry(
        entry_id=int(r["entry_id"]),
        user_id=int(r["user_id"]),
        week_start=r["week_start"],
        clock_in=r["clock_in"],
        clock_out=r.get("clock_out"),
        overtime_requested=bool(r.get("overtime_requested")),
        overtime_approved=bool(r.get("overtime_approved")),
        overtime_note=r.get("overtime_note"),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_ENTRY_COLUMNS} FROM time_entries WHERE entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def get_open_for_user(self, user_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ENTRY_COLUMNS}
                FROM time_entries
                WHERE user_id=%s AND clock_out IS NULL
                ORDER BY clock_in DESC
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def get_latest_for_user_and_date(self, user_id: int, work_date: date) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ENTRY_COLUMNS}
                FROM time_entries
                WHERE user_id=%s AND DATE(clock_in)=%s
                ORDER BY clock_in DESC
                LIMIT 1
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def create_clock_in(self, *, user_id: int, week_start: date, clock_in: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(user_id, week_start, clock_in)
                VALUES(%s,%s,%s)
                """,
                (int(user_id), week_start, clock_in),
            )
            return int(cur.lastrowid)

    def update_clock_out(
        self,
        *,
        entry_id: int,
        clock_out: datetime,
        overtime_requested: bool,
        overtime_note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET clock_out=%s, overtime_requested=%s, overtime_note=%s
                WHERE entry_id=%s AND clock_out IS NULL
                """,
                (clock_out, int(overtime_requested), overtime_note, int(entry_id)),
            )
            return cur.rowcount > 0

    def list_pending_overtime(self) -> Sequence[OvertimeRequestRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT te.entry_id, te.user_id, u.username, u.department,
                       te.clock_in, te.clock_out, te.overtime_note
                FROM time_entries te
                JOIN users u ON u.user_id = te.user_id
                WHERE te.overtime_requested = 1 AND te.approved_by IS NULL
                ORDER BY te.clock_in DESC
                """
            )
            return [
                OvertimeRequestRow(
                    entry_id=int(r["entry_id"]),
                    user_id=int(r["user_id"]),
                    username=r["username"],
                    department=r.get("department") or "",
                    clock_in=r["clock_in"],
                    clock_out=r.get("clock_out"),
                    overtime_note=r.get("overtime_note"),
                )
                for r in fetchall(cur)
            ]

    def decide_overtime(self, *, entry_id: int, approved: bool, decided_by: int, decided_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET overtime_approved=%s, approved_by=%s, approved_at=%s
                WHERE entry_id=%s AND overtime_requested=1 AND approved_by IS NULL
                """,
                (int(approved), int(decided_by), decided_at, int(entry_id)),
            )
            return cur.rowcount > 0

    def fetch_completed_for_week(self, user_id: int, week_start: date) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ENTRY_COLUMNS}
                FROM time_entries
                WHERE user_id=%s AND week_start=%s AND clock_out IS NOT NULL
                ORDER BY clock_in
                """,
                (int(user_id), week_start),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def list_user_ids_for_week(self, week_start: date) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT u.user_id
                FROM users u
                JOIN time_entries te ON te.user_id = u.user_id
                WHERE te.week_start=%s
                """,
                (week_start,),
            )
            return [int(r["user_id"]) for r in fetchall(cur)]
