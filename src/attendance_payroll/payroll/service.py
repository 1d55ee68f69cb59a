from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..attendance.service import AttendanceSessionTracker
from ..common.datetime_utils import end_of_day, format_pay_period, month_bounds, start_of_day, validate_year_month
from ..common.validators import require_id
from ..core.exceptions import NotFoundError
from ..employees.repository import EmployeeDirectory
from ..leaves.service import LeaveLedger
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollFigures, PayrollRecord
from .store import PayrollRecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollOutcome:
    record: PayrollRecord
    is_new: bool
    figures: Optional[PayrollFigures] = None

    @property
    def message(self) -> str:
        if self.figures is None:
            return f"Payroll for {self.record.pay_period} already exists."
        return "Payroll calculated and summary generated successfully"


@dataclass(frozen=True)
class PaymentOutcome:
    record: PayrollRecord
    newly_paid: bool

    @property
    def message(self) -> str:
        if not self.newly_paid:
            return "Payroll is already marked as Paid."
        return f"Payroll for {self.record.pay_period} successfully marked as Paid."


class PayrollService:
    """Closes a pay period for one employee: attendance + approved unpaid leave -> payslip."""

    def __init__(
        self,
        employees: EmployeeDirectory,
        attendance: AttendanceSessionTracker,
        leaves: LeaveLedger,
        store: PayrollRecordStore,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves
        self._store = store
        self._calculator = calculator or StandardPayrollCalculator()

    def compute(self, employee_id: int, year: int, month: int) -> PayrollFigures:
        """Figures for the period without touching the stored record."""
        employee_id = require_id(employee_id, "Employee")
        year, month = validate_year_month(year, month)

        employee = self._employees.get_by_id(employee_id)
        if employee is None:
            raise NotFoundError("Employee not found")

        first_day, last_day = month_bounds(year, month)
        attendance_days = self._attendance.count_closed_sessions_in_range(
            employee_id, start_of_day(first_day), end_of_day(last_day)
        )
        unpaid_days = self._leaves.approved_unpaid_days_in_period(employee_id, first_day, last_day)

        return self._calculator.calculate(
            base_salary=employee.base_salary,
            year=year,
            month=month,
            paid_attendance_days=attendance_days,
            unpaid_leave_days=unpaid_days,
        )

    def generate(self, employee_id: int, year: int, month: int, force_regenerate: bool = False) -> PayrollOutcome:
        employee_id = require_id(employee_id, "Employee")
        pay_period = format_pay_period(year, month)

        if not force_regenerate:
            existing = self._store.find(employee_id, pay_period)
            if existing is not None:
                return PayrollOutcome(record=existing, is_new=False)

        figures = self.compute(employee_id, year, month)
        record, is_new = self._store.generate(employee_id, pay_period, figures, force_regenerate)
        logger.info(
            "Payroll %s for employee %s: gross=%s tax=%s net=%s",
            pay_period,
            employee_id,
            record.gross_earnings,
            record.tax_deduction,
            record.net_salary,
        )
        return PayrollOutcome(record=record, is_new=is_new, figures=figures)

    def mark_paid(self, payroll_id: int) -> PaymentOutcome:
        record, newly_paid = self._store.mark_paid(payroll_id)
        return PaymentOutcome(record=record, newly_paid=newly_paid)

    def history_for(self, employee_id: int) -> Sequence[PayrollRecord]:
        return self._store.history_for(employee_id)
