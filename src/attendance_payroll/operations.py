"""Transport-agnostic entry points.

Every public operation returns an OperationResult: domain failures are caught
here and reported with their kind; anything else propagates to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .common.datetime_utils import DateLike
from .container import Container
from .core.constants import DEFAULT_ATTENDANCE_PAGE_LIMIT, DEFAULT_LEAVE_PAGE_LIMIT
from .core.enums import LeaveStatus, LeaveType, ReviewAction
from .core.exceptions import DomainError
from .core.result import OperationResult

logger = logging.getLogger(__name__)


class CoreOperations:
    def __init__(self, container: Container):
        self._c = container

    def _run(self, operation: str, fn: Callable[[], Any], message: str | Callable[[Any], str] = "Success") -> OperationResult:
        try:
            data = fn()
        except DomainError as e:
            logger.warning("%s failed (%s): %s", operation, e.kind.value, e)
            return OperationResult.from_error(e)
        return OperationResult.ok(data, message(data) if callable(message) else message)

    # Attendance
    def punch_in(self, employee_id: int, note: Optional[str] = None) -> OperationResult:
        return self._run(
            "punch_in",
            lambda: self._c.attendance_tracker.punch_in(employee_id, note),
            "Attendance recorded.",
        )

    def punch_out(self, employee_id: int) -> OperationResult:
        return self._run(
            "punch_out",
            lambda: self._c.attendance_tracker.punch_out(employee_id),
            "Attendance session closed.",
        )

    def attendance_history(
        self,
        employee_id: int,
        *,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        page: int = 1,
        limit: int = DEFAULT_ATTENDANCE_PAGE_LIMIT,
    ) -> OperationResult:
        return self._run(
            "attendance_history",
            lambda: self._c.attendance_tracker.history(
                employee_id, start_date=start_date, end_date=end_date, page=page, limit=limit
            ),
            "Attendance history fetched successfully",
        )

    # Leave
    def submit_leave(
        self,
        employee_id: int,
        leave_type: LeaveType | str,
        start_date: DateLike,
        end_date: DateLike,
        reason: str,
    ) -> OperationResult:
        return self._run(
            "submit_leave",
            lambda: self._c.leave_ledger.submit(employee_id, leave_type, start_date, end_date, reason),
            "Leave application submitted successfully. Status: Pending.",
        )

    def update_leave(self, leave_id: int, **changes) -> OperationResult:
        return self._run(
            "update_leave",
            lambda: self._c.leave_ledger.update(leave_id, **changes),
            "Leave application updated.",
        )

    def review_leave(self, leave_id: int, reviewer_id: int, action: ReviewAction | str) -> OperationResult:
        return self._run(
            "review_leave",
            lambda: self._c.leave_ledger.review(leave_id, reviewer_id, action),
            lambda leave: f"Leave application successfully {leave.status.value.lower()}.",
        )

    def list_leaves(
        self,
        *,
        employee_id: int | None = None,
        status: LeaveStatus | str | None = None,
        page: int = 1,
        limit: int = DEFAULT_LEAVE_PAGE_LIMIT,
    ) -> OperationResult:
        return self._run(
            "list_leaves",
            lambda: self._c.leave_ledger.list(employee_id=employee_id, status=status, page=page, limit=limit),
            "Leave applications fetched successfully",
        )

    # Payroll
    def generate_payroll(self, employee_id: int, year: int, month: int, force_regenerate: bool = False) -> OperationResult:
        return self._run(
            "generate_payroll",
            lambda: self._c.payroll_service.generate(employee_id, year, month, force_regenerate),
            lambda outcome: outcome.message,
        )

    def mark_payroll_paid(self, payroll_id: int) -> OperationResult:
        return self._run(
            "mark_payroll_paid",
            lambda: self._c.payroll_service.mark_paid(payroll_id),
            lambda outcome: outcome.message,
        )

    def payroll_history(self, employee_id: int) -> OperationResult:
        return self._run(
            "payroll_history",
            lambda: self._c.payroll_service.history_for(employee_id),
            "Payroll history fetched successfully",
        )

    # Reports
    def summary_report(self, pay_period: Optional[str] = None) -> OperationResult:
        return self._run(
            "summary_report",
            lambda: self._c.report_service.summary(pay_period).as_dict(),
            "Dashboard summary report generated",
        )
