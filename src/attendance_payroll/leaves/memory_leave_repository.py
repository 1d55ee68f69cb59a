from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from ..common.locks import bounded_lock
from ..core.constants import DEFAULT_DATASTORE_TIMEOUT_SECONDS
from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveFilter, LeaveRequest
from .repository import LeaveRepository


class InMemoryLeaveRepository(LeaveRepository):
    def __init__(self, *, timeout_seconds: float = DEFAULT_DATASTORE_TIMEOUT_SECONDS):
        self._lock = threading.Lock()
        self._timeout = timeout_seconds
        self._leaves: dict[int, LeaveRequest] = {}
        self._next_id = 1

    def _locked(self):
        return bounded_lock(self._lock, self._timeout, resource="leave store")

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
        with self._locked():
            leave_id = self._next_id
            self._next_id += 1
            self._leaves[leave_id] = LeaveRequest(
                leave_id=leave_id,
                employee_id=int(employee_id),
                leave_type=leave_type,
                start_date=start_date,
                end_date=end_date,
                total_days=total_days,
                reason=reason,
                status=LeaveStatus.PENDING,
                created_at=created_at,
            )
            return leave_id

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with self._locked():
            return self._leaves.get(int(leave_id))

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
        with self._locked():
            leave = self._leaves.get(int(leave_id))
            if leave is None or not leave.is_pending:
                return False
            self._leaves[leave.leave_id] = replace(
                leave,
                leave_type=leave_type,
                start_date=start_date,
                end_date=end_date,
                total_days=total_days,
                reason=reason,
            )
            return True

    def decide(self, *, leave_id: int, status: LeaveStatus, reviewer_id: int, review_date: datetime) -> bool:
        with self._locked():
            leave = self._leaves.get(int(leave_id))
            if leave is None or not leave.is_pending:
                return False
            self._leaves[leave.leave_id] = replace(
                leave, status=status, reviewer_id=int(reviewer_id), review_date=review_date
            )
            return True

    def list_requests(self, flt: LeaveFilter, *, offset: int, limit: int) -> Sequence[LeaveRequest]:
        with self._locked():
            items = [leave for leave in self._leaves.values() if flt.matches(leave)]
        items.sort(key=lambda leave: (leave.created_at, leave.leave_id), reverse=True)
        return items[offset : offset + limit]

    def count(self, flt: LeaveFilter) -> int:
        with self._locked():
            return sum(1 for leave in self._leaves.values() if flt.matches(leave))

    def list_approved_overlapping(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        period_start: date,
        period_end: date,
    ) -> Sequence[LeaveRequest]:
        with self._locked():
            items = [
                leave
                for leave in self._leaves.values()
                if leave.employee_id == int(employee_id)
                and leave.status == LeaveStatus.APPROVED
                and leave.leave_type == leave_type
                and leave.overlaps(period_start, period_end)
            ]
        items.sort(key=lambda leave: leave.start_date)
        return items

    def count_by_status(self) -> Mapping[LeaveStatus, int]:
        with self._locked():
            counts = {status: 0 for status in LeaveStatus}
            for leave in self._leaves.values():
                counts[leave.status] += 1
            return counts
