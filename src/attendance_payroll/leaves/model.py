from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    total_days: Decimal
    reason: str
    status: LeaveStatus
    created_at: datetime
    reviewer_id: Optional[int] = None
    review_date: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.PENDING

    def overlaps(self, period_start: date, period_end: date) -> bool:
        return self.start_date <= period_end and self.end_date >= period_start


@dataclass(frozen=True)
class LeaveFilter:
    """Supported list predicates. Unset fields do not filter."""

    employee_id: Optional[int] = None
    status: Optional[LeaveStatus] = None

    def matches(self, leave: LeaveRequest) -> bool:
        if self.employee_id is not None and leave.employee_id != self.employee_id:
            return False
        if self.status is not None and leave.status != self.status:
            return False
        return True
