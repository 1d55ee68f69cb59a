from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from attendance_payroll.container import build_memory_container
from attendance_payroll.core.enums import EmployeeStatus
from attendance_payroll.employees.model import Employee


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 15, 8, 30, 0)


@pytest.fixture
def employee() -> Employee:
    return Employee(
        employee_id=1,
        base_salary=Decimal("3100"),
        status=EmployeeStatus.ACTIVE,
        employee_code="E-001",
        first_name="An",
        last_name="Nguyen",
        department="Engineering",
        designation="Developer",
    )


@pytest.fixture
def container(employee):
    return build_memory_container(
        employees=[
            employee,
            Employee(employee_id=2, base_salary=Decimal("0"), status=EmployeeStatus.TERMINATED),
        ],
        timeout_seconds=1.0,
    )
