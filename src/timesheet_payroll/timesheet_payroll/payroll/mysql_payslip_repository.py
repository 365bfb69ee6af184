from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import PayrollBreakdown, PayslipView
from .repository import PayslipRepository


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_payslip(
        self,
        *,
        user_id: int,
        week_start: date,
        week_end: date,
        breakdown: PayrollBreakdown,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payslips(
                    user_id, week_start, week_end, total_hours, overtime_hours, undertime_hours,
                    base_salary, overtime_pay, undertime_deduction, staff_house_deduction,
                    total_salary, clock_in_time, clock_out_time
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    week_start,
                    week_end,
                    breakdown.total_hours,
                    breakdown.overtime_hours,
                    breakdown.undertime_hours,
                    breakdown.base_salary,
                    breakdown.overtime_pay,
                    breakdown.undertime_deduction,
                    breakdown.staff_house_deduction,
                    breakdown.total_salary,
                    breakdown.clock_in_time,
                    breakdown.clock_out_time,
                ),
            )
            return int(cur.lastrowid)

    def exists_for_user_and_week(self, user_id: int, week_start: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM payslips WHERE user_id=%s AND week_start=%s LIMIT 1",
                (int(user_id), week_start),
            )
            return fetchone(cur) is not None

    def delete_for_user_and_week(self, user_id: int, week_start: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payslips WHERE user_id=%s AND week_start=%s", (int(user_id), week_start))
            return int(cur.rowcount)

    def query_payslips(self, week_start: date) -> Sequence[PayslipView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.*, u.username, u.department
                FROM payslips p
                JOIN users u ON u.user_id = p.user_id
                WHERE p.week_start=%s
                ORDER BY u.department, u.username
                """,
                (week_start,),
            )
            return [
                PayslipView(
                    payslip_id=int(r["payslip_id"]),
                    user_id=int(r["user_id"]),
                    username=r["username"],
                    department=r.get("department") or "",
                    week_start=r["week_start"],
                    week_end=r["week_end"],
                    breakdown=PayrollBreakdown(
                        total_hours=to_decimal(r.get("total_hours")),
                        overtime_hours=to_decimal(r.get("overtime_hours")),
                        undertime_hours=to_decimal(r.get("undertime_hours")),
                        base_salary=to_decimal(r.get("base_salary")),
                        overtime_pay=to_decimal(r.get("overtime_pay")),
                        undertime_deduction=to_decimal(r.get("undertime_deduction")),
                        staff_house_deduction=to_decimal(r.get("staff_house_deduction")),
                        total_salary=to_decimal(r.get("total_salary")),
                        clock_in_time=r.get("clock_in_time"),
                        clock_out_time=r.get("clock_out_time"),
                    ),
                )
                for r in fetchall(cur)
            ]
