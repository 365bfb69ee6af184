from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .database.connection import DBConfig, DatabaseConnection
from .payroll.engine import PayrollEngine
from .payroll.mysql_payslip_repository import MySQLPayslipRepository
from .payroll.policy import PayPolicy
from .payroll.report_service import PayrollReportService
from .payroll.repository import PayslipRepository
from .payroll.service import PayrollService
from .time_entries.mysql_time_entry_repository import MySQLTimeEntryRepository
from .time_entries.repository import TimeEntryRepository
from .time_entries.service import TimeTrackingService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    time_entries_repo: TimeEntryRepository
    payslips_repo: PayslipRepository

    auth_service: AuthService
    user_service: UserService
    time_tracking_service: TimeTrackingService
    payroll_service: PayrollService
    payroll_report_service: PayrollReportService


def wire_services(
    *,
    users_repo: UserRepository,
    time_entries_repo: TimeEntryRepository,
    payslips_repo: PayslipRepository,
    policy: Optional[PayPolicy] = None,
) -> Container:
    """Wire services on top of the given store handles (MySQL or in-memory)."""

    engine = PayrollEngine(policy or PayPolicy())
    return Container(
        users_repo=users_repo,
        time_entries_repo=time_entries_repo,
        payslips_repo=payslips_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        time_tracking_service=TimeTrackingService(time_entries_repo, users_repo),
        payroll_service=PayrollService(time_entries_repo, users_repo, payslips_repo, engine=engine),
        payroll_report_service=PayrollReportService(payslips_repo),
    )


def build_container(*, db_config: dict, payroll_settings: Optional[Mapping[str, Any]] = None) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    return wire_services(
        users_repo=MySQLUserRepository(conn),
        time_entries_repo=MySQLTimeEntryRepository(conn),
        payslips_repo=MySQLPayslipRepository(conn),
        policy=PayPolicy.from_settings(payroll_settings),
    )
