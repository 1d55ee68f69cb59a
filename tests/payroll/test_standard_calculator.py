from decimal import Decimal

import pytest

from attendance_payroll.core.exceptions import CalculationError, ValidationError
from attendance_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator


def test_march_example_with_two_unpaid_days():
    calc = StandardPayrollCalculator()

    f = calc.calculate(
        base_salary=Decimal("3100"),
        year=2024,
        month=3,
        paid_attendance_days=20,
        unpaid_leave_days=Decimal("2"),
    )

    assert f.total_working_days == 31
    assert f.daily_rate == Decimal("100.00")
    assert f.paid_days == Decimal("29")
    assert f.gross_earnings == Decimal("2900.00")
    assert f.leave_deduction == Decimal("200.00")
    assert f.tax_deduction == Decimal("290.00")
    assert f.net_salary == Decimal("2610.00")
    assert f.attendance_days == 20


def test_attendance_count_does_not_drive_gross_pay():
    calc = StandardPayrollCalculator()

    none = calc.calculate(base_salary=Decimal("3000"), year=2023, month=4, paid_attendance_days=0, unpaid_leave_days=0)
    full = calc.calculate(base_salary=Decimal("3000"), year=2023, month=4, paid_attendance_days=30, unpaid_leave_days=0)

    assert none.gross_earnings == full.gross_earnings == Decimal("3000.00")


def test_rounding_is_half_away_from_zero_on_final_figures():
    # 1000 / 29 = 34.4827...; 28 paid days -> 965.5172... -> 965.52
    calc = StandardPayrollCalculator(tax_rate="0.125")
    f = calc.calculate(base_salary=Decimal("1000"), year=2024, month=2, paid_attendance_days=0, unpaid_leave_days=Decimal("1"))

    assert f.total_working_days == 29
    assert f.daily_rate == Decimal("34.48")
    assert f.gross_earnings == Decimal("965.52")
    assert f.leave_deduction == Decimal("34.48")
    # tax = 965.5172... * 0.125 = 120.6896... -> 120.69; net from unrounded = 844.8275... -> 844.83
    assert f.tax_deduction == Decimal("120.69")
    assert f.net_salary == Decimal("844.83")


def test_half_cent_rounds_up():
    calc = StandardPayrollCalculator(tax_rate="0.05")
    # 30 days, daily 10.03, gross 300.90, tax 15.045 -> 15.05, net 285.855 -> 285.86
    f = calc.calculate(base_salary=Decimal("300.90"), year=2023, month=6, paid_attendance_days=0, unpaid_leave_days=0)
    assert f.tax_deduction == Decimal("15.05")
    assert f.net_salary == Decimal("285.86")


def test_unpaid_days_beyond_month_clamp_paid_days_to_zero():
    calc = StandardPayrollCalculator()
    f = calc.calculate(base_salary=Decimal("3000"), year=2023, month=6, paid_attendance_days=0, unpaid_leave_days=Decimal("45"))

    assert f.paid_days == Decimal("0")
    assert f.gross_earnings == Decimal("0.00")
    assert f.net_salary == Decimal("0.00")
    assert f.leave_deduction == Decimal("4500.00")


def test_half_day_unpaid_leave():
    calc = StandardPayrollCalculator()
    f = calc.calculate(base_salary=Decimal("3000"), year=2023, month=6, paid_attendance_days=0, unpaid_leave_days=Decimal("0.5"))

    assert f.paid_days == Decimal("29.5")
    assert f.gross_earnings == Decimal("2950.00")


@pytest.mark.parametrize("base", [Decimal("0"), Decimal("-10"), None, "abc", Decimal("NaN"), Decimal("Infinity")])
def test_invalid_base_salary_is_a_calculation_error(base):
    with pytest.raises(CalculationError):
        StandardPayrollCalculator().calculate(base_salary=base, year=2024, month=3, paid_attendance_days=0, unpaid_leave_days=0)


@pytest.mark.parametrize("month", [0, 13])
def test_invalid_month_is_a_validation_error(month):
    with pytest.raises(ValidationError):
        StandardPayrollCalculator().calculate(
            base_salary=Decimal("100"), year=2024, month=month, paid_attendance_days=0, unpaid_leave_days=0
        )


def test_negative_inputs_and_bad_tax_rate_are_rejected():
    calc = StandardPayrollCalculator()
    with pytest.raises(ValidationError):
        calc.calculate(base_salary=Decimal("100"), year=2024, month=3, paid_attendance_days=-1, unpaid_leave_days=0)
    with pytest.raises(ValidationError):
        calc.calculate(base_salary=Decimal("100"), year=2024, month=3, paid_attendance_days=0, unpaid_leave_days=Decimal("-1"))
    with pytest.raises(ValidationError):
        StandardPayrollCalculator(tax_rate="1.5")
