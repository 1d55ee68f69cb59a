from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, require_pay_period
from ..common.validators import require_id
from ..core.enums import PayrollStatus
from ..core.exceptions import NotFoundError, StateConflictError
from .model import PayrollFigures, PayrollRecord
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollRecordStore:
    """One payroll record per (employee, pay period); paid records are immutable."""

    def __init__(self, payrolls: PayrollRepository):
        self._payrolls = payrolls

    def find(self, employee_id: int, pay_period: str) -> Optional[PayrollRecord]:
        require_pay_period(pay_period)
        return self._payrolls.get_for_employee_and_period(employee_id=require_id(employee_id, "Employee"), pay_period=pay_period)

    def get(self, payroll_id: int) -> PayrollRecord:
        record = self._payrolls.get_by_id(require_id(payroll_id, "Payroll"))
        if record is None:
            raise NotFoundError("Payroll record not found")
        return record

    def generate(
        self,
        employee_id: int,
        pay_period: str,
        figures: PayrollFigures,
        force_regenerate: bool = False,
    ) -> tuple[PayrollRecord, bool]:
        """Create or (when forced) recompute in place. Returns (record, is_new)."""
        employee_id = require_id(employee_id, "Employee")
        require_pay_period(pay_period)

        existing = self._payrolls.get_for_employee_and_period(employee_id=employee_id, pay_period=pay_period)
        if existing is None:
            payroll_id = self._payrolls.insert(employee_id=employee_id, pay_period=pay_period, figures=figures)
            if payroll_id is not None:
                logger.info("Payroll %s created for employee %s, period %s", payroll_id, employee_id, pay_period)
                return self.get(payroll_id), True
            # A concurrent generate inserted first; continue as if it had existed.
            existing = self._payrolls.get_for_employee_and_period(employee_id=employee_id, pay_period=pay_period)
            if existing is None:
                raise StateConflictError(f"Payroll for {pay_period} could not be created")

        if not force_regenerate:
            return existing, False

        if existing.is_paid:
            raise StateConflictError(f"Payroll for {pay_period} is already paid and cannot be regenerated.")
        if not self._payrolls.overwrite_unpaid(payroll_id=existing.payroll_id, figures=figures):
            raise StateConflictError(f"Payroll for {pay_period} was paid before it could be regenerated.")

        logger.info("Payroll %s regenerated for employee %s, period %s", existing.payroll_id, employee_id, pay_period)
        return self.get(existing.payroll_id), False

    def mark_paid(self, payroll_id: int, *, now: datetime | None = None) -> tuple[PayrollRecord, bool]:
        """Move a Calculated record to Paid. Returns (record, newly_paid)."""
        record = self.get(payroll_id)
        if record.is_paid:
            return record, False
        if record.status != PayrollStatus.CALCULATED:
            raise StateConflictError(
                f"Payroll status must be 'Calculated' to be marked Paid. Current status: {record.status.value}"
            )

        if not self._payrolls.mark_paid(payroll_id=record.payroll_id, payment_date=now or now_local()):
            current = self.get(record.payroll_id)
            if current.is_paid:
                return current, False
            raise StateConflictError(
                f"Payroll status must be 'Calculated' to be marked Paid. Current status: {current.status.value}"
            )

        logger.info("Payroll %s for period %s marked as paid", record.payroll_id, record.pay_period)
        return self.get(record.payroll_id), True

    def history_for(self, employee_id: int) -> Sequence[PayrollRecord]:
        records = self._payrolls.list_for_employee(require_id(employee_id, "Employee"))
        if not records:
            raise NotFoundError("No payroll records found for this employee.")
        return list(records)
