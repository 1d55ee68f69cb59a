from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveFilter, LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        total_days: Decimal,
        reason: str,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def update_pending(
        self,
        *,
        leave_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        total_days: Decimal,
        reason: str,
    ) -> bool:
        """Rewrite a request only while it is still PENDING."""

        raise NotImplementedError

    def decide(self, *, leave_id: int, status: LeaveStatus, reviewer_id: int, review_date: datetime) -> bool:
        """PENDING -> status as one conditional write. False if no longer PENDING."""

        raise NotImplementedError

    def list_requests(self, flt: LeaveFilter, *, offset: int, limit: int) -> Sequence[LeaveRequest]:
        """Newest first."""

        raise NotImplementedError

    def count(self, flt: LeaveFilter) -> int:
        raise NotImplementedError

    def list_approved_overlapping(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        period_start: date,
        period_end: date,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def count_by_status(self) -> Mapping[LeaveStatus, int]:
        raise NotImplementedError
