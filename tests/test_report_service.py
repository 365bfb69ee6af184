from __future__ import annotations

from datetime import date
from decimal import Decimal

from conftest import InMemoryPayslips, InMemoryUsers, make_user
from src.timesheet_payroll.timesheet_payroll.core.enums import ResultStatus
from src.timesheet_payroll.timesheet_payroll.payroll.export import PAYROLL_CSV_COLUMNS, payroll_report_csv
from src.timesheet_payroll.timesheet_payroll.payroll.model import PayrollBreakdown
from src.timesheet_payroll.timesheet_payroll.payroll.report_service import PayrollReportService

WEEK = date(2025, 1, 6)


def _breakdown(total_salary="200") -> PayrollBreakdown:
    return PayrollBreakdown(
        total_hours=Decimal("8"),
        overtime_hours=Decimal("0"),
        undertime_hours=Decimal("0"),
        base_salary=Decimal("200"),
        overtime_pay=Decimal("0"),
        undertime_deduction=Decimal("0"),
        staff_house_deduction=Decimal("0"),
        total_salary=Decimal(total_salary),
    )


def _store(users, payslips, *names_and_departments):
    for i, (name, dept) in enumerate(names_and_departments, start=1):
        users.add(make_user(i, name, department=dept))
        payslips.insert_payslip(user_id=i, week_start=WEEK, week_end=date(2025, 1, 12), breakdown=_breakdown())


def test_report_is_ordered_by_department_then_username(users, payslips):
    _store(users, payslips, ("zoe", "Admin"), ("carl", "Production"), ("amy", "Production"), ("bea", "Admin"))

    result = PayrollReportService(payslips).get_payroll_report(WEEK)

    assert result.status == ResultStatus.OK
    assert [(p.department, p.username) for p in result.value] == [
        ("Admin", "bea"),
        ("Admin", "zoe"),
        ("Production", "amy"),
        ("Production", "carl"),
    ]


def test_week_without_payslips_is_empty(users, payslips):
    _store(users, payslips, ("amy", "Production"))

    result = PayrollReportService(payslips).get_payroll_report(date(2025, 1, 13))

    assert result.is_empty
    assert result.value == []


def test_store_failure_is_a_fault_with_empty_rows(caplog):
    class BrokenPayslips:
        def query_payslips(self, week_start):
            raise RuntimeError("connection refused")

    result = PayrollReportService(BrokenPayslips()).get_payroll_report(WEEK)

    assert result.is_fault
    assert result.value == []
    assert "payroll report query failed" in caplog.text


def test_csv_has_fixed_header_and_quotes_every_field(users, payslips):
    users.add(make_user(1, "dela cruz, juan", department="Production"))
    payslips.insert_payslip(
        user_id=1, week_start=WEEK, week_end=date(2025, 1, 12), breakdown=_breakdown(total_salary="-50")
    )

    result = PayrollReportService(payslips).export_csv(WEEK)

    lines = result.value.splitlines()
    assert result.is_ok
    assert lines[0] == ",".join(f'"{c}"' for c in PAYROLL_CSV_COLUMNS)
    assert lines[1] == (
        '"dela cruz, juan","Production","8","0","0","200","0","0","0","-50","2025-01-06","2025-01-12"'
    )


def test_csv_for_empty_week_is_header_only():
    assert payroll_report_csv([]) == ",".join(f'"{c}"' for c in PAYROLL_CSV_COLUMNS) + "\n"


def test_summary_totals_salary_overtime_and_deductions(users, payslips):
    users.add(make_user(1, "amy", department="Production"))
    users.add(make_user(2, "bea", department="Admin"))
    payslips.insert_payslip(
        user_id=1,
        week_start=WEEK,
        week_end=date(2025, 1, 12),
        breakdown=PayrollBreakdown(
            total_hours=Decimal("8"),
            overtime_hours=Decimal("0.5"),
            undertime_hours=Decimal("0"),
            base_salary=Decimal("200"),
            overtime_pay=Decimal("17.5"),
            undertime_deduction=Decimal("0"),
            staff_house_deduction=Decimal("250"),
            total_salary=Decimal("-32.5"),
        ),
    )
    payslips.insert_payslip(
        user_id=2,
        week_start=WEEK,
        week_end=date(2025, 1, 12),
        breakdown=PayrollBreakdown(
            total_hours=Decimal("7.33333333"),
            overtime_hours=Decimal("0"),
            undertime_hours=Decimal("0.66666667"),
            base_salary=Decimal("183.33333333"),
            overtime_pay=Decimal("0"),
            undertime_deduction=Decimal("16.66666667"),
            staff_house_deduction=Decimal("0"),
            total_salary=Decimal("166.66666666"),
        ),
    )

    result = PayrollReportService(payslips).get_payroll_summary(WEEK)

    assert result.is_ok
    assert result.value.employee_count == 2
    assert result.value.total_salary == Decimal("134.16666666")
    assert result.value.total_overtime_pay == Decimal("17.5")
    assert result.value.total_deductions == Decimal("266.66666667")


def test_summary_for_empty_week_is_zero():
    result = PayrollReportService(InMemoryPayslips(InMemoryUsers())).get_payroll_summary(WEEK)

    assert result.is_empty
    assert result.value.employee_count == 0
    assert result.value.total_salary == 0
    assert result.value.total_deductions == 0


def test_summary_fault_when_store_fails():
    class BrokenPayslips:
        def query_payslips(self, week_start):
            raise RuntimeError("connection refused")

    result = PayrollReportService(BrokenPayslips()).get_payroll_summary(WEEK)

    assert result.is_fault
    assert result.value is None
