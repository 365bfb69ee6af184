from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional


@dataclass(frozen=True)
class PayrollBreakdown:
    """Hours and pay for one user and one week, as computed by the engine."""

    total_hours: Decimal
    overtime_hours: Decimal
    undertime_hours: Decimal
    base_salary: Decimal
    overtime_pay: Decimal
    undertime_deduction: Decimal
    staff_house_deduction: Decimal
    total_salary: Decimal
    clock_in_time: Optional[datetime] = None
    clock_out_time: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "total_hours": self.total_hours,
            "overtime_hours": self.overtime_hours,
            "undertime_hours": self.undertime_hours,
            "base_salary": self.base_salary,
            "overtime_pay": self.overtime_pay,
            "undertime_deduction": self.undertime_deduction,
            "staff_house_deduction": self.staff_house_deduction,
            "total_salary": self.total_salary,
            "clock_in_time": self.clock_in_time.isoformat() if self.clock_in_time else None,
            "clock_out_time": self.clock_out_time.isoformat() if self.clock_out_time else None,
        }


@dataclass(frozen=True)
class PayslipView:
    """Persisted payslip joined with the employee's identity."""

    payslip_id: int
    user_id: int
    username: str
    department: str
    week_start: date
    week_end: date
    breakdown: PayrollBreakdown

    def to_dict(self) -> dict:
        out = {
            "id": self.payslip_id,
            "user_id": self.user_id,
            "username": self.username,
            "department": self.department,
            "week_start": self.week_start.isoformat(),
            "week_end": self.week_end.isoformat(),
        }
        out.update(self.breakdown.to_dict())
        return out


@dataclass(frozen=True)
class PayrollReportSummary:
    """Week totals shown above the payroll report."""

    employee_count: int
    total_salary: Decimal
    total_overtime_pay: Decimal
    total_deductions: Decimal

    @classmethod
    def from_rows(cls, rows: Iterable[PayslipView]) -> "PayrollReportSummary":
        rows = list(rows)
        return cls(
            employee_count=len({p.user_id for p in rows}),
            total_salary=sum((p.breakdown.total_salary for p in rows), Decimal(0)),
            total_overtime_pay=sum((p.breakdown.overtime_pay for p in rows), Decimal(0)),
            total_deductions=sum(
                (p.breakdown.undertime_deduction + p.breakdown.staff_house_deduction for p in rows),
                Decimal(0),
            ),
        )

    def to_dict(self) -> dict:
        return {
            "employee_count": self.employee_count,
            "total_salary": self.total_salary,
            "total_overtime_pay": self.total_overtime_pay,
            "total_deductions": self.total_deductions,
        }
