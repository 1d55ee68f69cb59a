from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import DateLike, as_date, now_local
from ..common.paging import Page
from ..common.validators import normalize_paging, require_id, require_non_empty
from ..core.constants import DEFAULT_LEAVE_PAGE_LIMIT
from ..core.enums import LeaveStatus, LeaveType, ReviewAction
from ..core.exceptions import NotFoundError, StateConflictError, ValidationError
from ..employees.repository import EmployeeDirectory
from .day_count import derive_total_days
from .model import LeaveFilter, LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def _parse_leave_type(value) -> LeaveType:
    if isinstance(value, LeaveType):
        return value
    if not value:
        raise ValidationError("Leave type is required")
    try:
        return LeaveType(str(value).strip())
    except ValueError:
        allowed = ", ".join(t.value for t in LeaveType)
        raise ValidationError(f"Unknown leave type {value!r}. Allowed: {allowed}")


def _parse_action(value) -> ReviewAction:
    if isinstance(value, ReviewAction):
        return value
    try:
        return ReviewAction(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("Invalid action. Must be 'approve' or 'reject'.")


def _parse_status(value) -> Optional[LeaveStatus]:
    if value is None or value == "":
        return None
    if isinstance(value, LeaveStatus):
        return value
    try:
        return LeaveStatus(str(value).strip().capitalize())
    except ValueError:
        raise ValidationError(f"Unknown leave status {value!r}")


class LeaveLedger:
    """Leave request lifecycle: submit (PENDING), optional edit while pending, one-shot review."""

    def __init__(self, leaves: LeaveRepository, employees: Optional[EmployeeDirectory] = None):
        self._leaves = leaves
        self._employees = employees

    def submit(
        self,
        employee_id: int,
        leave_type: LeaveType | str,
        start_date: DateLike,
        end_date: DateLike,
        reason: str,
        *,
        now: datetime | None = None,
    ) -> LeaveRequest:
        employee_id = require_id(employee_id, "Employee")
        leave_type = _parse_leave_type(leave_type)
        start = as_date(start_date, "Start date")
        end = as_date(end_date, "End date")
        reason = require_non_empty(reason, "Reason")
        total_days = derive_total_days(start, end)

        if self._employees is not None and self._employees.get_by_id(employee_id) is None:
            raise NotFoundError("Employee record not found")

        leave_id = self._leaves.create(
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start,
            end_date=end,
            total_days=total_days,
            reason=reason,
            created_at=now or now_local(),
        )
        logger.info("Leave %s submitted by employee %s: %s, %s day(s)", leave_id, employee_id, leave_type.value, total_days)
        return self._load(leave_id)

    def update(
        self,
        leave_id: int,
        *,
        leave_type: LeaveType | str | None = None,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        reason: str | None = None,
    ) -> LeaveRequest:
        leave = self._load(require_id(leave_id, "Leave"))
        if not leave.is_pending:
            raise StateConflictError(f"Leave is already {leave.status.value.lower()}.")

        new_type = _parse_leave_type(leave_type) if leave_type is not None else leave.leave_type
        start = as_date(start_date, "Start date") if start_date is not None else leave.start_date
        end = as_date(end_date, "End date") if end_date is not None else leave.end_date
        new_reason = require_non_empty(reason, "Reason") if reason is not None else leave.reason
        total_days = derive_total_days(start, end)

        ok = self._leaves.update_pending(
            leave_id=leave.leave_id,
            leave_type=new_type,
            start_date=start,
            end_date=end,
            total_days=total_days,
            reason=new_reason,
        )
        if not ok:
            raise StateConflictError("Leave was reviewed before the update could be applied.")
        return self._load(leave.leave_id)

    def review(self, leave_id: int, reviewer_id: int, action: ReviewAction | str, *, now: datetime | None = None) -> LeaveRequest:
        action = _parse_action(action)
        reviewer_id = require_id(reviewer_id, "Reviewer")
        leave = self._load(require_id(leave_id, "Leave"))

        if not leave.is_pending:
            raise StateConflictError(f"Leave is already {leave.status.value.lower()}.")

        ok = self._leaves.decide(
            leave_id=leave.leave_id,
            status=action.resulting_status,
            reviewer_id=reviewer_id,
            review_date=now or now_local(),
        )
        if not ok:
            current = self._load(leave.leave_id)
            raise StateConflictError(f"Leave is already {current.status.value.lower()}.")

        logger.info("Leave %s %s by reviewer %s", leave.leave_id, action.resulting_status.value.lower(), reviewer_id)
        return self._load(leave.leave_id)

    def approved_unpaid_days_in_period(self, employee_id: int, period_start: DateLike, period_end: DateLike) -> Decimal:
        """Sum of total_days of approved unpaid requests overlapping the period.

        A request that only partly overlaps still counts in full.
        """
        start = as_date(period_start, "Period start")
        end = as_date(period_end, "Period end")
        if end < start:
            raise ValidationError("Period end must not precede period start")

        leaves = self._leaves.list_approved_overlapping(
            employee_id=require_id(employee_id, "Employee"),
            leave_type=LeaveType.UNPAID,
            period_start=start,
            period_end=end,
        )
        return sum((leave.total_days for leave in leaves), Decimal("0"))

    def list(
        self,
        *,
        employee_id: int | None = None,
        status: LeaveStatus | str | None = None,
        page: int = 1,
        limit: int = DEFAULT_LEAVE_PAGE_LIMIT,
    ) -> Page[LeaveRequest]:
        flt = LeaveFilter(
            employee_id=require_id(employee_id, "Employee") if employee_id is not None else None,
            status=_parse_status(status),
        )
        page, limit = normalize_paging(page, limit, default_limit=DEFAULT_LEAVE_PAGE_LIMIT)
        total = self._leaves.count(flt)
        items = self._leaves.list_requests(flt, offset=(page - 1) * limit, limit=limit)
        return Page(items=list(items), page=page, limit=limit, total_records=total)

    def get(self, leave_id: int) -> LeaveRequest:
        return self._load(require_id(leave_id, "Leave"))

    def _load(self, leave_id: int) -> LeaveRequest:
        leave = self._leaves.get_by_id(leave_id)
        if leave is None:
            raise NotFoundError("Leave application not found.")
        return leave
