from __future__ import annotations

from typing import Mapping, Optional, Protocol

from ..core.enums import EmployeeStatus
from .model import Employee


class EmployeeDirectory(Protocol):
    """Employee lookups owned by the external directory; the core never writes here."""

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def count_by_status(self) -> Mapping[EmployeeStatus, int]:
        raise NotImplementedError
