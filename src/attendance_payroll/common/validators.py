from __future__ import annotations

from typing import Optional

from ..core.constants import MAX_PAGE_LIMIT
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_id(value, field_name: str) -> int:
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is required")
    if ident <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return ident


def normalize_paging(page, limit, *, default_limit: int) -> tuple[int, int]:
    """Coerce page/limit the forgiving way list endpoints do (bad input -> defaults)."""
    try:
        page = int(page or 1)
    except (TypeError, ValueError):
        page = 1
    try:
        limit = int(limit or default_limit)
    except (TypeError, ValueError):
        limit = default_limit
    return max(page, 1), min(max(limit, 1), MAX_PAGE_LIMIT)
