from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind: ErrorKind = ErrorKind.VALIDATION


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""

    kind = ErrorKind.VALIDATION


class NotFoundError(DomainError):
    """Raised when a referenced employee, session, leave or payroll record does not exist."""

    kind = ErrorKind.NOT_FOUND


class StateConflictError(DomainError):
    """Raised when an operation violates a lifecycle invariant."""

    kind = ErrorKind.STATE_CONFLICT


class CalculationError(DomainError):
    """Raised when payroll arithmetic cannot proceed."""

    kind = ErrorKind.CALCULATION_ERROR


class DatastoreTimeoutError(DomainError):
    """Raised when the datastore does not answer within the configured bound."""

    kind = ErrorKind.TIMEOUT
