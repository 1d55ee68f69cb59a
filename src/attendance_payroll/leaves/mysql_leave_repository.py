from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import LeaveFilter, LeaveRequest
from .repository import LeaveRepository

_COLUMNS = (
    "leave_id, employee_id, leave_type, start_date, end_date, total_days, reason, "
    "status, created_at, reviewer_id, review_date"
)


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        total_days=as_decimal(r["total_days"]),
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        reviewer_id=int(r["reviewer_id"]) if r.get("reviewer_id") is not None else None,
        review_date=r.get("review_date"),
    )


def _where(flt: LeaveFilter) -> tuple[str, list[object]]:
    clauses = ["1=1"]
    params: list[object] = []
    if flt.employee_id is not None:
        clauses.append("employee_id=%s")
        params.append(int(flt.employee_id))
    if flt.status is not None:
        clauses.append("status=%s")
        params.append(flt.status.value)
    return " AND ".join(clauses), params


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    employee_id, leave_type, start_date, end_date, total_days, reason, status, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    total_days,
                    reason,
                    LeaveStatus.PENDING.value,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET leave_type=%s, start_date=%s, end_date=%s, total_days=%s, reason=%s
                WHERE leave_id=%s AND status=%s
                """,
                (
                    leave_type.value,
                    start_date,
                    end_date,
                    total_days,
                    reason,
                    int(leave_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def decide(self, *, leave_id: int, status: LeaveStatus, reviewer_id: int, review_date: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, reviewer_id=%s, review_date=%s
                WHERE leave_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(reviewer_id),
                    review_date,
                    int(leave_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def list_requests(self, flt: LeaveFilter, *, offset: int, limit: int) -> Sequence[LeaveRequest]:
        where, params = _where(flt)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY created_at DESC, leave_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def count(self, flt: LeaveFilter) -> int:
        where, params = _where(flt)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM leave_requests WHERE {where}", tuple(params))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def list_approved_overlapping(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        period_start: date,
        period_end: date,
    ) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE employee_id=%s AND status=%s AND leave_type=%s
                  AND start_date <= %s AND end_date >= %s
                ORDER BY start_date ASC
                """,
                (
                    int(employee_id),
                    LeaveStatus.APPROVED.value,
                    leave_type.value,
                    period_end,
                    period_start,
                ),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def count_by_status(self) -> Mapping[LeaveStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT status, COUNT(*) AS n FROM leave_requests GROUP BY status")
            counts = {status: 0 for status in LeaveStatus}
            for r in fetchall(cur):
                counts[LeaveStatus(r["status"])] = int(r["n"])
            return counts
