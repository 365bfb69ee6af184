from __future__ import annotations

import logging
from datetime import date

from ..core.result import Result
from .export import payroll_report_csv
from .model import PayrollReportSummary, PayslipView
from .repository import PayslipRepository

logger = logging.getLogger(__name__)


class PayrollReportService:
    """Read-only view over persisted payslips."""

    def __init__(self, payslips: PayslipRepository):
        self._payslips = payslips

    def get_payroll_report(self, week_start: date) -> Result[list[PayslipView]]:
        try:
            rows = list(self._payslips.query_payslips(week_start))
        except Exception:
            logger.exception("payroll report query failed for week %s", week_start)
            return Result.fault("Could not load the payroll report", [])

        if not rows:
            return Result.empty([])
        return Result.ok(rows)

    def get_payroll_summary(self, week_start: date) -> Result[PayrollReportSummary]:
        """Week totals over the same rows as the report; zeros for an empty week."""
        report = self.get_payroll_report(week_start)
        if report.is_fault:
            return Result.fault(report.error or "")
        summary = PayrollReportSummary.from_rows(report.value or [])
        return Result.ok(summary) if report.is_ok else Result.empty(summary)

    def export_csv(self, week_start: date) -> Result[str]:
        report = self.get_payroll_report(week_start)
        if report.is_fault:
            return Result.fault(report.error or "", "")
        csv_text = payroll_report_csv(report.value or [])
        return Result.ok(csv_text) if report.is_ok else Result.empty(csv_text)
