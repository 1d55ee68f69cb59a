from __future__ import annotations

import calendar
from datetime import date, datetime, time
from typing import Union

from ..core.constants import PAY_PERIOD_FORMAT
from ..core.exceptions import ValidationError

DateLike = Union[date, datetime, str]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def start_of_day(value: date) -> datetime:
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.min)


def end_of_day(value: date) -> datetime:
    return datetime.combine(value, time.max)


def as_date(value: DateLike, field_name: str) -> date:
    """Normalize a date/datetime/ISO string to a calendar day (time part dropped)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return parse_iso_date(value.strip()[:10])
        except ValueError:
            raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")
    raise ValidationError(f"{field_name} is required")


def validate_year_month(year: int, month: int) -> tuple[int, int]:
    try:
        year, month = int(year), int(month)
    except (TypeError, ValueError):
        raise ValidationError("Year and month must be integers")
    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")
    if not 1 <= year <= 9999:
        raise ValidationError(f"Year out of range: {year}")
    return year, month


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of the month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def format_pay_period(year: int, month: int) -> str:
    year, month = validate_year_month(year, month)
    return PAY_PERIOD_FORMAT.format(year=year, month=month)


def parse_pay_period(value: str) -> tuple[int, int]:
    """Parse canonical YYYY-MM into (year, month)."""
    try:
        parsed = datetime.strptime((value or "").strip(), "%Y-%m")
    except ValueError:
        raise ValidationError(f"Pay period must be YYYY-MM, got {value!r}")
    return parsed.year, parsed.month


def require_pay_period(value: str) -> str:
    """Accept only the canonical zero-padded YYYY-MM form."""
    year, month = parse_pay_period(value)
    canonical = format_pay_period(year, month)
    if value != canonical:
        raise ValidationError(f"Pay period must be YYYY-MM, got {value!r}")
    return canonical
