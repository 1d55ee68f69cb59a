from __future__ import annotations

import threading
from typing import Iterable, Mapping, Optional

from ..core.enums import EmployeeStatus
from .model import Employee
from .repository import EmployeeDirectory


class InMemoryEmployeeDirectory(EmployeeDirectory):
    def __init__(self, employees: Iterable[Employee] = ()):
        self._lock = threading.Lock()
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees}

    def add(self, employee: Employee) -> None:
        with self._lock:
            self._by_id[employee.employee_id] = employee

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with self._lock:
            return self._by_id.get(int(employee_id))

    def count_by_status(self) -> Mapping[EmployeeStatus, int]:
        with self._lock:
            counts = {status: 0 for status in EmployeeStatus}
            for e in self._by_id.values():
                counts[e.status] += 1
            return counts
