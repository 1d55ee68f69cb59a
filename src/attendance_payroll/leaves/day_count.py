"""Leave day-count derivation.

Kept apart from persistence: the ledger calls `derive_total_days` whenever the
dates of a request are set, before anything is written.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.constants import MIN_LEAVE_DAYS
from ..core.exceptions import ValidationError


def inclusive_day_count(start: date, end: date) -> int:
    """Calendar days from start to end, both ends included."""
    return (end - start).days + 1


def derive_total_days(start_date: Optional[date], end_date: Optional[date]) -> Decimal:
    if start_date is None or end_date is None:
        raise ValidationError("Start date and end date are required")
    if end_date < start_date:
        raise ValidationError("End date must be on or after start date")

    total = Decimal(inclusive_day_count(start_date, end_date))
    if total <= 0 or total < MIN_LEAVE_DAYS:
        raise ValidationError("Leave duration must be at least one day.")
    return total
