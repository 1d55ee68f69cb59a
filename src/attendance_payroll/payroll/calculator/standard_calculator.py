from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ...common.datetime_utils import days_in_month, validate_year_month
from ...common.money import is_finite_positive, round_money, to_decimal
from ...core.constants import DEFAULT_TAX_RATE
from ...core.exceptions import CalculationError, ValidationError
from ..model import PayrollFigures
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Calendar-day proration with a flat tax.

    daily_rate = base / days_in_month
    paid_days  = max(0, days_in_month - unpaid_leave_days)
    gross      = paid_days * daily_rate
    tax        = gross * tax_rate
    net        = gross - tax

    The attendance count is carried into the figures for reporting only; gross
    pay is driven by calendar days minus unpaid leave. Each monetary figure is
    rounded once, from unrounded intermediates.
    """

    def __init__(self, *, tax_rate: Decimal | str | float = DEFAULT_TAX_RATE):
        try:
            rate = to_decimal(tax_rate)
        except (InvalidOperation, TypeError, ValueError):
            raise ValidationError(f"Invalid tax rate: {tax_rate!r}")
        if not rate.is_finite() or rate < 0 or rate > 1:
            raise ValidationError(f"Tax rate must be between 0 and 1, got {tax_rate!r}")
        self._tax_rate = rate

    @property
    def tax_rate(self) -> Decimal:
        return self._tax_rate

    def calculate(
        self,
        *,
        base_salary: Decimal,
        year: int,
        month: int,
        paid_attendance_days: int,
        unpaid_leave_days: Decimal,
    ) -> PayrollFigures:
        year, month = validate_year_month(year, month)

        attendance_days = int(paid_attendance_days or 0)
        if attendance_days < 0:
            raise ValidationError("Attendance day count cannot be negative")
        try:
            unpaid = to_decimal(unpaid_leave_days or 0)
        except (InvalidOperation, TypeError, ValueError):
            raise ValidationError(f"Invalid unpaid leave days: {unpaid_leave_days!r}")
        if not unpaid.is_finite() or unpaid < 0:
            raise ValidationError("Unpaid leave days cannot be negative")

        total_days = days_in_month(year, month)
        try:
            base = to_decimal(base_salary)
            daily_rate = base / total_days
        except (InvalidOperation, TypeError, ValueError):
            raise CalculationError("Payroll calculation failed due to invalid base salary or month days.")
        if not is_finite_positive(daily_rate):
            raise CalculationError("Payroll calculation failed due to invalid base salary or month days.")

        paid_days = max(Decimal("0"), total_days - unpaid)
        gross = paid_days * daily_rate
        leave_deduction = unpaid * daily_rate
        tax = gross * self._tax_rate
        net = gross - tax

        return PayrollFigures(
            base_salary=round_money(base),
            total_working_days=total_days,
            daily_rate=round_money(daily_rate),
            attendance_days=attendance_days,
            paid_days=paid_days,
            gross_earnings=round_money(gross),
            unpaid_leave_days=unpaid,
            leave_deduction=round_money(leave_deduction),
            tax_rate=self._tax_rate,
            tax_deduction=round_money(tax),
            net_salary=round_money(net),
        )
