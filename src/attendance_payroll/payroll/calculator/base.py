from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ..model import PayrollFigures


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        *,
        base_salary: Decimal,
        year: int,
        month: int,
        paid_attendance_days: int,
        unpaid_leave_days: Decimal,
    ) -> PayrollFigures:
        raise NotImplementedError
