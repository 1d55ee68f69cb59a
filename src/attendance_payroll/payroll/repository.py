from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollFigures, PayrollRecord


class PayrollRepository(Protocol):
    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_employee_and_period(self, *, employee_id: int, pay_period: str) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def insert(self, *, employee_id: int, pay_period: str, figures: PayrollFigures) -> Optional[int]:
        """Insert a CALCULATED record.

        Returns the new payroll_id, or None if (employee_id, pay_period) already exists.
        """

        raise NotImplementedError

    def overwrite_unpaid(self, *, payroll_id: int, figures: PayrollFigures) -> bool:
        """Replace all figures and reset status to CALCULATED unless the record is PAID."""

        raise NotImplementedError

    def mark_paid(self, *, payroll_id: int, payment_date: datetime) -> bool:
        """CALCULATED -> PAID as one conditional write."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[PayrollRecord]:
        """Ordered by pay_period descending."""

        raise NotImplementedError

    def count_by_status(self, *, pay_period: str) -> Mapping[PayrollStatus, int]:
        raise NotImplementedError
