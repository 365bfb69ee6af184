from __future__ import annotations

import csv
import io
from typing import Iterable

from .model import PayslipView

PAYROLL_CSV_COLUMNS = (
    "Employee",
    "Department",
    "Total Hours",
    "Overtime Hours",
    "Undertime Hours",
    "Base Salary",
    "Overtime Pay",
    "Undertime Deduction",
    "Staff House Deduction",
    "Total Salary",
    "Week Start",
    "Week End",
)


def _csv_row(p: PayslipView) -> list:
    b = p.breakdown
    return [
        p.username,
        p.department,
        b.total_hours,
        b.overtime_hours,
        b.undertime_hours,
        b.base_salary,
        b.overtime_pay,
        b.undertime_deduction,
        b.staff_house_deduction,
        b.total_salary,
        p.week_start.isoformat(),
        p.week_end.isoformat(),
    ]


def payroll_report_csv(rows: Iterable[PayslipView]) -> str:
    """Render report rows as CSV, every field quoted, header first."""

    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(PAYROLL_CSV_COLUMNS)
    for p in rows:
        writer.writerow(_csv_row(p))
    return out.getvalue()
