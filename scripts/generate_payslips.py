"""Generate payslips for one week without going through Flask.

Usage: python scripts/generate_payslips.py 2025-01-06 [--csv out.csv]
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.timesheet_payroll.timesheet_payroll.common.datetime_utils import parse_week_start
from src.timesheet_payroll.timesheet_payroll.container import build_container


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("week_start", help="week anchor date, YYYY-MM-DD")
    parser.add_argument("--csv", dest="csv_path", help="also write the week's payroll report to this file")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    week_start = parse_week_start(args.week_start)
    container = build_container(db_config=settings.DB_CONFIG, payroll_settings=getattr(settings, "PAYROLL", None))

    result = container.payroll_service.generate_weekly_payslips(week_start)
    if result.is_fault:
        print(f"FAILED: {result.error}", file=sys.stderr)
        return 1

    for p in result.value or []:
        print(f"{p.department:<20} {p.username:<20} total={p.breakdown.total_salary}")
    print(f"OK: {len(result.value or [])} payslip(s) for week {week_start.isoformat()}")

    summary = container.payroll_report_service.get_payroll_summary(week_start)
    if summary.value is not None:
        s = summary.value
        print(f"totals: salary={s.total_salary} overtime={s.total_overtime_pay} deductions={s.total_deductions}")

    if args.csv_path:
        exported = container.payroll_report_service.export_csv(week_start)
        if exported.is_fault:
            print(f"FAILED: {exported.error}", file=sys.stderr)
            return 1
        Path(args.csv_path).write_text(exported.value or "", encoding="utf-8-sig")
        print(f"OK: report written to {args.csv_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
