from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .enums import ErrorKind
from .exceptions import DomainError


@dataclass(frozen=True)
class OperationResult:
    """Structured outcome of a public operation (success payload or typed failure)."""

    success: bool
    data: Any = None
    message: str = "Success"
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, data: Any, message: str = "Success") -> "OperationResult":
        return cls(success=True, data=data, message=message)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "OperationResult":
        return cls(success=False, message=message, error_kind=kind)

    @classmethod
    def from_error(cls, error: DomainError) -> "OperationResult":
        return cls.failure(error.kind, str(error) or error.kind.value)

    @property
    def retryable(self) -> bool:
        return bool(self.error_kind and self.error_kind.retryable)
