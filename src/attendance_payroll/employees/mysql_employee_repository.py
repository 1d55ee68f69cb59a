from __future__ import annotations

from typing import Mapping, Optional

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeDirectory


class MySQLEmployeeDirectory(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, employee_code, first_name, last_name,
                       department, designation, base_salary, status
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Employee(
                employee_id=int(r["employee_id"]),
                base_salary=as_decimal(r["base_salary"]),
                status=EmployeeStatus(r["status"]),
                employee_code=r.get("employee_code") or "",
                first_name=r.get("first_name") or "",
                last_name=r.get("last_name") or "",
                department=r.get("department") or "",
                designation=r.get("designation") or "",
            )

    def count_by_status(self) -> Mapping[EmployeeStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT status, COUNT(*) AS n FROM employees GROUP BY status")
            counts = {status: 0 for status in EmployeeStatus}
            for r in fetchall(cur):
                counts[EmployeeStatus(r["status"])] = int(r["n"])
            return counts
