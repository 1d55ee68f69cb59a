from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.locks import bounded_lock
from ..core.constants import DEFAULT_DATASTORE_TIMEOUT_SECONDS
from .model import AttendanceFilter, AttendanceSession
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Process-local store; every read and check-then-write runs under one lock."""

    def __init__(self, *, timeout_seconds: float = DEFAULT_DATASTORE_TIMEOUT_SECONDS):
        self._lock = threading.Lock()
        self._timeout = timeout_seconds
        self._sessions: dict[int, AttendanceSession] = {}
        self._next_id = 1

    def _locked(self):
        return bounded_lock(self._lock, self._timeout, resource="attendance store")

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        with self._locked():
            return self._sessions.get(int(session_id))

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceSession]:
        with self._locked():
            return self._find_open(int(employee_id))

    def _find_open(self, employee_id: int) -> Optional[AttendanceSession]:
        for s in self._sessions.values():
            if s.employee_id == employee_id and s.is_open:
                return s
        return None

    def create_open_session(
        self,
        *,
        employee_id: int,
        work_date: date,
        punch_in: datetime,
        note: Optional[str] = None,
    ) -> Optional[int]:
        with self._locked():
            if self._find_open(int(employee_id)) is not None:
                return None
            session_id = self._next_id
            self._next_id += 1
            self._sessions[session_id] = AttendanceSession(
                session_id=session_id,
                employee_id=int(employee_id),
                work_date=work_date,
                punch_in=punch_in,
                note=note,
            )
            return session_id

    def close_session(self, *, session_id: int, punch_out: datetime, duration_minutes: int) -> bool:
        with self._locked():
            s = self._sessions.get(int(session_id))
            if s is None or not s.is_open:
                return False
            self._sessions[s.session_id] = replace(s, punch_out=punch_out, duration_minutes=int(duration_minutes))
            return True

    def list_sessions(self, flt: AttendanceFilter, *, offset: int, limit: int) -> Sequence[AttendanceSession]:
        with self._locked():
            items = [s for s in self._sessions.values() if flt.matches(s)]
        items.sort(key=lambda s: s.punch_in, reverse=True)
        return items[offset : offset + limit]

    def count_sessions(self, flt: AttendanceFilter) -> int:
        with self._locked():
            return sum(1 for s in self._sessions.values() if flt.matches(s))

    def count_closed_in_range(self, *, employee_id: int, start: datetime, end: datetime) -> int:
        with self._locked():
            return sum(
                1
                for s in self._sessions.values()
                if s.employee_id == int(employee_id) and s.punch_out is not None and start <= s.punch_out <= end
            )
