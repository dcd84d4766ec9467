from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.repository import PunchRepository
from .punches.service import PunchService
from .reports.email import SMTPConfig, SMTPReportMailer
from .reports.scheduler import ReportScheduler
from .reports.service import ReportAggregator
from .reports.spreadsheet import ExcelReportWriter


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    punches_repo: PunchRepository

    employee_service: EmployeeService
    attendance_service: AttendanceService
    punch_service: PunchService
    report_aggregator: ReportAggregator
    excel_writer: ExcelReportWriter
    report_scheduler: ReportScheduler

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    employees_repo: EmployeeRepository,
    punches_repo: PunchRepository,
    mailer_send,
    report_timezone: str,
    report_timeout_seconds: float,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of any repository implementation (MySQL or fakes)."""
    employee_service = EmployeeService(employees_repo)
    attendance_service = AttendanceService(punches_repo, employees_repo)
    punch_service = PunchService(punches_repo, employee_service, attendance_service)
    report_aggregator = ReportAggregator(punches_repo, employees_repo, employee_service, attendance_service)
    report_scheduler = ReportScheduler(
        report_aggregator,
        mailer_send,
        timezone=report_timezone,
        timeout_seconds=report_timeout_seconds,
    )

    return Container(
        employees_repo=employees_repo,
        punches_repo=punches_repo,
        employee_service=employee_service,
        attendance_service=attendance_service,
        punch_service=punch_service,
        report_aggregator=report_aggregator,
        excel_writer=ExcelReportWriter(),
        report_scheduler=report_scheduler,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    smtp_config: dict,
    report_timezone: str,
    report_timeout_seconds: float,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connection_timeout=int(db_config.get("connection_timeout", 10)),
    )
    conn = DatabaseConnection.get_instance(config)

    mailer = SMTPReportMailer(
        SMTPConfig(
            host=str(smtp_config.get("host", "localhost")),
            port=int(smtp_config.get("port", 587)),
            username=str(smtp_config.get("username", "")),
            password=str(smtp_config.get("password", "")),
            use_tls=bool(smtp_config.get("use_tls", True)),
            sender=str(smtp_config.get("sender", "")),
            recipients=tuple(smtp_config.get("recipients", ())),
        )
    )

    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        punches_repo=MySQLPunchRepository(conn),
        mailer_send=mailer.send,
        report_timezone=report_timezone,
        report_timeout_seconds=report_timeout_seconds,
        conn=conn,
    )
