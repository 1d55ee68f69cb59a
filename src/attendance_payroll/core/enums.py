from __future__ import annotations

from enum import Enum


class EmployeeStatus(str, Enum):
    """Employment status as supplied by the employee directory."""

    ACTIVE = "Active"
    ON_LEAVE = "On Leave"
    TERMINATED = "Terminated"


class LeaveType(str, Enum):
    SICK = "Sick Leave"
    CASUAL = "Casual Leave"
    ANNUAL = "Annual Leave"
    MATERNITY = "Maternity Leave"
    PATERNITY = "Paternity Leave"
    UNPAID = "Unpaid Leave"


class LeaveStatus(str, Enum):
    """Leave approval flow: PENDING -> APPROVED | REJECTED, terminal afterwards."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ReviewAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"

    @property
    def resulting_status(self) -> LeaveStatus:
        return LeaveStatus.APPROVED if self is ReviewAction.APPROVE else LeaveStatus.REJECTED


class PayrollStatus(str, Enum):
    CALCULATED = "Calculated"
    PENDING = "Pending"
    PAID = "Paid"


class ErrorKind(str, Enum):
    """Failure categories reported at the operation boundary."""

    VALIDATION = "Validation"
    NOT_FOUND = "NotFound"
    STATE_CONFLICT = "StateConflict"
    CALCULATION_ERROR = "CalculationError"
    TIMEOUT = "Timeout"

    @property
    def retryable(self) -> bool:
        return self is ErrorKind.TIMEOUT
