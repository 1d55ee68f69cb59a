from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceSessionTracker
from .core.constants import DEFAULT_DATASTORE_TIMEOUT_SECONDS, DEFAULT_TAX_RATE
from .database.connection import DatabaseConnection, DBConfig
from .employees.memory_employee_repository import InMemoryEmployeeDirectory
from .employees.model import Employee
from .employees.mysql_employee_repository import MySQLEmployeeDirectory
from .employees.repository import EmployeeDirectory
from .leaves.memory_leave_repository import InMemoryLeaveRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveLedger
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.memory_payroll_repository import InMemoryPayrollRepository
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .payroll.store import PayrollRecordStore
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeDirectory
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    payrolls_repo: PayrollRepository

    attendance_tracker: AttendanceSessionTracker
    leave_ledger: LeaveLedger
    payroll_store: PayrollRecordStore
    payroll_service: PayrollService
    report_service: ReportService


def _wire(
    *,
    employees_repo: EmployeeDirectory,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    payrolls_repo: PayrollRepository,
    tax_rate: Decimal | str | float,
) -> Container:
    attendance_tracker = AttendanceSessionTracker(attendance_repo, employees_repo)
    leave_ledger = LeaveLedger(leaves_repo, employees_repo)
    payroll_store = PayrollRecordStore(payrolls_repo)
    payroll_service = PayrollService(
        employees_repo,
        attendance_tracker,
        leave_ledger,
        payroll_store,
        calculator=StandardPayrollCalculator(tax_rate=tax_rate),
    )
    report_service = ReportService(employees_repo, leaves_repo, payrolls_repo)

    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        payrolls_repo=payrolls_repo,
        attendance_tracker=attendance_tracker,
        leave_ledger=leave_ledger,
        payroll_store=payroll_store,
        payroll_service=payroll_service,
        report_service=report_service,
    )


def build_container(
    *,
    db_config: dict,
    timeout_seconds: float | None = None,
    tax_rate: Decimal | str | float = DEFAULT_TAX_RATE,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config, timeout_seconds=timeout_seconds))
    return _wire(
        employees_repo=MySQLEmployeeDirectory(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        payrolls_repo=MySQLPayrollRepository(conn),
        tax_rate=tax_rate,
    )


def build_memory_container(
    *,
    employees: Iterable[Employee] = (),
    timeout_seconds: float = DEFAULT_DATASTORE_TIMEOUT_SECONDS,
    tax_rate: Decimal | str | float = DEFAULT_TAX_RATE,
) -> Container:
    return _wire(
        employees_repo=InMemoryEmployeeDirectory(employees),
        attendance_repo=InMemoryAttendanceRepository(timeout_seconds=timeout_seconds),
        leaves_repo=InMemoryLeaveRepository(timeout_seconds=timeout_seconds),
        payrolls_repo=InMemoryPayrollRepository(timeout_seconds=timeout_seconds),
        tax_rate=tax_rate,
    )
