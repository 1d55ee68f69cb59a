"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_TAX_RATE = Decimal("0.10")
DEFAULT_ATTENDANCE_PAGE_LIMIT = 30
DEFAULT_LEAVE_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 500
DEFAULT_DATASTORE_TIMEOUT_SECONDS = 5.0
MIN_LEAVE_DAYS = Decimal("0.5")
PAY_PERIOD_FORMAT = "{year:04d}-{month:02d}"
