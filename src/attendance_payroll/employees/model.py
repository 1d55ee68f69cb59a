from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Read-only view of an employee as supplied by the directory."""

    employee_id: int
    base_salary: Decimal
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    employee_code: str = ""
    first_name: str = ""
    last_name: str = ""
    department: str = ""
    designation: str = ""
