from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceFilter, AttendanceSession


class AttendanceRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def create_open_session(
        self,
        *,
        employee_id: int,
        work_date: date,
        punch_in: datetime,
        note: Optional[str] = None,
    ) -> Optional[int]:
        """Insert an open session unless the employee already has one.

        Returns the new session_id, or None when an open session exists.
        The check and the insert are a single atomic write.
        """

        raise NotImplementedError

    def close_session(self, *, session_id: int, punch_out: datetime, duration_minutes: int) -> bool:
        """Close the session if it is still open. Returns False if it was already closed."""

        raise NotImplementedError

    def list_sessions(self, flt: AttendanceFilter, *, offset: int, limit: int) -> Sequence[AttendanceSession]:
        """Newest punch-in first."""

        raise NotImplementedError

    def count_sessions(self, flt: AttendanceFilter) -> int:
        raise NotImplementedError

    def count_closed_in_range(self, *, employee_id: int, start: datetime, end: datetime) -> int:
        """Closed sessions whose punch_out falls within [start, end]."""

        raise NotImplementedError
