from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayrollFigures:
    """Output of a payroll calculation; monetary values already rounded to cents."""

    base_salary: Decimal
    total_working_days: int
    daily_rate: Decimal
    attendance_days: int
    paid_days: Decimal
    gross_earnings: Decimal
    unpaid_leave_days: Decimal
    leave_deduction: Decimal
    tax_rate: Decimal
    tax_deduction: Decimal
    net_salary: Decimal


@dataclass(frozen=True)
class PayrollRecord:
    payroll_id: int
    employee_id: int
    pay_period: str
    base_salary: Decimal
    total_working_days: int
    attendance_days: int
    paid_days: Decimal
    gross_earnings: Decimal
    unpaid_leave_days: Decimal
    leave_deduction: Decimal
    tax_deduction: Decimal
    net_salary: Decimal
    status: PayrollStatus
    payment_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return self.status == PayrollStatus.PAID
