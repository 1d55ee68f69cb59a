from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceFilter, AttendanceSession
from .repository import AttendanceRepository

_COLUMNS = "session_id, employee_id, work_date, punch_in, punch_out, duration_minutes, note"


def _to_session(r: dict) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(r["session_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        punch_in=r["punch_in"],
        punch_out=r.get("punch_out"),
        duration_minutes=int(r.get("duration_minutes") or 0),
        note=r.get("note"),
    )


def _where(flt: AttendanceFilter) -> tuple[str, list[object]]:
    clauses = ["employee_id=%s"]
    params: list[object] = [int(flt.employee_id)]
    if flt.start_date is not None:
        clauses.append("work_date >= %s")
        params.append(flt.start_date)
    if flt.end_date is not None:
        clauses.append("work_date <= %s")
        params.append(flt.end_date)
    return " AND ".join(clauses), params


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE employee_id=%s AND punch_out IS NULL
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def create_open_session(
        self,
        *,
        employee_id: int,
        work_date: date,
        punch_in: datetime,
        note: Optional[str] = None,
    ) -> Optional[int]:
        # uq_attendance_open rejects a second open session for the employee.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_sessions(employee_id, work_date, punch_in, note)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(employee_id), work_date, punch_in, note),
                )
                return int(cur.lastrowid)
        except mysql.connector.errors.IntegrityError as exc:
            if exc.errno == errorcode.ER_DUP_ENTRY:
                return None
            raise

    def close_session(self, *, session_id: int, punch_out: datetime, duration_minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sessions
                SET punch_out=%s, duration_minutes=%s
                WHERE session_id=%s AND punch_out IS NULL
                """,
                (punch_out, int(duration_minutes), int(session_id)),
            )
            return cur.rowcount > 0

    def list_sessions(self, flt: AttendanceFilter, *, offset: int, limit: int) -> Sequence[AttendanceSession]:
        where, params = _where(flt)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE {where}
                ORDER BY punch_in DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def count_sessions(self, flt: AttendanceFilter) -> int:
        where, params = _where(flt)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM attendance_sessions WHERE {where}", tuple(params))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def count_closed_in_range(self, *, employee_id: int, start: datetime, end: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS n
                FROM attendance_sessions
                WHERE employee_id=%s AND punch_out IS NOT NULL AND punch_out BETWEEN %s AND %s
                """,
                (int(employee_id), start, end),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0
