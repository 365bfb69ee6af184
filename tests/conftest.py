from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.timesheet_payroll.timesheet_payroll.core.enums import Role
from src.timesheet_payroll.timesheet_payroll.payroll.model import PayrollBreakdown, PayslipView
from src.timesheet_payroll.timesheet_payroll.time_entries.model import OvertimeRequestRow, TimeEntry
from src.timesheet_payroll.timesheet_payroll.users.model import User


class InMemoryUsers:
    def __init__(self, users=()):
        self._by_id: dict[int, User] = {u.user_id: u for u in users}

    def add(self, user: User) -> User:
        self._by_id[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.username == username), None)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda u: u.username)

    def create_user(self, *, username, password_hash, role, department, staff_house) -> int:
        user_id = max(self._by_id, default=0) + 1
        self._by_id[user_id] = User(
            user_id=user_id,
            username=username,
            password_hash=password_hash,
            role=role,
            department=department,
            staff_house=staff_house,
        )
        return user_id

    def update_user(self, user_id, *, role, department, staff_house, is_active, password_hash=None) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(
            user,
            role=role,
            department=department,
            staff_house=staff_house,
            is_active=is_active,
            password_hash=password_hash or user.password_hash,
        )
        return True


class InMemoryTimeEntries:
    def __init__(self, users: Optional[InMemoryUsers] = None):
        self._users = users
        self._by_id: dict[int, TimeEntry] = {}

    def add(self, entry: TimeEntry) -> TimeEntry:
        self._by_id[entry.entry_id] = entry
        return entry

    def all(self) -> list[TimeEntry]:
        return list(self._by_id.values())

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        return self._by_id.get(int(entry_id))

    def get_open_for_user(self, user_id: int) -> Optional[TimeEntry]:
        return next((e for e in self._by_id.values() if e.user_id == user_id and e.clock_out is None), None)

    def get_latest_for_user_and_date(self, user_id: int, work_date: date) -> Optional[TimeEntry]:
        items = [e for e in self._by_id.values() if e.user_id == user_id and e.clock_in.date() == work_date]
        return max(items, key=lambda e: e.clock_in, default=None)

    def create_clock_in(self, *, user_id: int, week_start: date, clock_in: datetime) -> int:
        entry_id = max(self._by_id, default=0) + 1
        self._by_id[entry_id] = TimeEntry(entry_id=entry_id, user_id=user_id, week_start=week_start, clock_in=clock_in)
        return entry_id

    def update_clock_out(self, *, entry_id, clock_out, overtime_requested, overtime_note=None) -> bool:
        entry = self._by_id.get(int(entry_id))
        if not entry or entry.clock_out is not None:
            return False
        self._by_id[entry.entry_id] = replace(
            entry,
            clock_out=clock_out,
            overtime_requested=overtime_requested,
            overtime_note=overtime_note,
        )
        return True

    def list_pending_overtime(self):
        rows = []
        for e in self._by_id.values():
            if e.overtime_requested and e.approved_by is None:
                user = self._users.get_by_id(e.user_id) if self._users else None
                rows.append(
                    OvertimeRequestRow(
                        entry_id=e.entry_id,
                        user_id=e.user_id,
                        username=user.username if user else "",
                        department=user.department if user else "",
                        clock_in=e.clock_in,
                        clock_out=e.clock_out,
                        overtime_note=e.overtime_note,
                    )
                )
        return rows

    def decide_overtime(self, *, entry_id, approved, decided_by, decided_at) -> bool:
        entry = self._by_id.get(int(entry_id))
        if not entry or not entry.overtime_requested or entry.approved_by is not None:
            return False
        self._by_id[entry.entry_id] = replace(
            entry,
            overtime_approved=approved,
            approved_by=decided_by,
            approved_at=decided_at,
        )
        return True

    def fetch_completed_for_week(self, user_id: int, week_start: date):
        return [
            e
            for e in self._by_id.values()
            if e.user_id == user_id and e.week_start == week_start and e.clock_out is not None
        ]

    def list_user_ids_for_week(self, week_start: date):
        seen: list[int] = []
        for e in self._by_id.values():
            if e.week_start == week_start and e.user_id not in seen:
                seen.append(e.user_id)
        return seen


class InMemoryPayslips:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.rows: list[dict] = []
        self._next_id = 1

    def insert_payslip(self, *, user_id, week_start, week_end, breakdown: PayrollBreakdown) -> int:
        payslip_id = self._next_id
        self._next_id += 1
        self.rows.append(
            {
                "payslip_id": payslip_id,
                "user_id": user_id,
                "week_start": week_start,
                "week_end": week_end,
                "breakdown": breakdown,
            }
        )
        return payslip_id

    def exists_for_user_and_week(self, user_id, week_start) -> bool:
        return any(r["user_id"] == user_id and r["week_start"] == week_start for r in self.rows)

    def delete_for_user_and_week(self, user_id, week_start) -> int:
        before = len(self.rows)
        self.rows = [r for r in self.rows if not (r["user_id"] == user_id and r["week_start"] == week_start)]
        return before - len(self.rows)

    def query_payslips(self, week_start):
        views = []
        for r in self.rows:
            if r["week_start"] != week_start:
                continue
            user = self._users.get_by_id(r["user_id"])
            views.append(
                PayslipView(
                    payslip_id=r["payslip_id"],
                    user_id=r["user_id"],
                    username=user.username,
                    department=user.department,
                    week_start=r["week_start"],
                    week_end=r["week_end"],
                    breakdown=r["breakdown"],
                )
            )
        views.sort(key=lambda v: (v.department, v.username))
        return views


def make_user(user_id=1, username="alice", *, department="Production", staff_house=False, role=Role.EMPLOYEE,
              password="secret1", is_active=True) -> User:
    return User(
        user_id=user_id,
        username=username,
        password_hash=generate_password_hash(password),
        role=role,
        department=department,
        staff_house=staff_house,
        is_active=is_active,
    )


def make_entry(entry_id, user_id, clock_in, clock_out, *, week_start=date(2025, 1, 6), requested=False,
               approved=False, approved_by=None) -> TimeEntry:
    return TimeEntry(
        entry_id=entry_id,
        user_id=user_id,
        week_start=week_start,
        clock_in=clock_in,
        clock_out=clock_out,
        overtime_requested=requested,
        overtime_approved=approved,
        approved_by=approved_by,
    )


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2025, 1, 6, 7, 0, 0)


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def time_entries(users) -> InMemoryTimeEntries:
    return InMemoryTimeEntries(users)


@pytest.fixture
def payslips(users) -> InMemoryPayslips:
    return InMemoryPayslips(users)
