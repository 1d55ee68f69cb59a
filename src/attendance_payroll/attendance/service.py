from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import DateLike, as_date, end_of_day, now_local, start_of_day
from ..common.paging import Page
from ..common.validators import normalize_paging, require_id
from ..core.constants import DEFAULT_ATTENDANCE_PAGE_LIMIT
from ..core.exceptions import NotFoundError, StateConflictError, ValidationError
from ..employees.repository import EmployeeDirectory
from .model import AttendanceFilter, AttendanceSession
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def session_duration_minutes(punch_in: datetime, punch_out: datetime) -> int:
    """Whole minutes between punch-in and punch-out, never negative."""
    return max(int((punch_out - punch_in).total_seconds() // 60), 0)


class AttendanceSessionTracker:
    """Punch-in/punch-out state machine: at most one open session per employee."""

    def __init__(self, attendance: AttendanceRepository, employees: Optional[EmployeeDirectory] = None):
        self._attendance = attendance
        self._employees = employees

    def _require_employee(self, employee_id) -> int:
        employee_id = require_id(employee_id, "Employee")
        if self._employees is not None and self._employees.get_by_id(employee_id) is None:
            raise NotFoundError("Employee record not found")
        return employee_id

    def punch_in(self, employee_id: int, note: Optional[str] = None, *, now: datetime | None = None) -> AttendanceSession:
        employee_id = self._require_employee(employee_id)
        now = now or now_local()

        if self._attendance.get_open_for_employee(employee_id) is not None:
            raise StateConflictError("You are already punched in. Please punch out first.")

        session_id = self._attendance.create_open_session(
            employee_id=employee_id,
            work_date=now.date(),
            punch_in=now,
            note=(note or "").strip() or None,
        )
        if session_id is None:
            # Lost the race to a concurrent punch-in.
            raise StateConflictError("You are already punched in. Please punch out first.")

        logger.info("Employee %s punched in (session %s)", employee_id, session_id)
        return self._load(session_id)

    def punch_out(self, employee_id: int, *, now: datetime | None = None) -> AttendanceSession:
        employee_id = self._require_employee(employee_id)
        now = now or now_local()

        session = self._attendance.get_open_for_employee(employee_id)
        if session is None:
            raise StateConflictError("You are not currently punched in. Please punch in first.")

        duration = session_duration_minutes(session.punch_in, now)
        if not self._attendance.close_session(session_id=session.session_id, punch_out=now, duration_minutes=duration):
            raise StateConflictError("Attendance session was already closed.")

        logger.info("Employee %s punched out after %s min (session %s)", employee_id, duration, session.session_id)
        return self._load(session.session_id)

    def current_session(self, employee_id: int) -> Optional[AttendanceSession]:
        return self._attendance.get_open_for_employee(require_id(employee_id, "Employee"))

    def history(
        self,
        employee_id: int,
        *,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        page: int = 1,
        limit: int = DEFAULT_ATTENDANCE_PAGE_LIMIT,
    ) -> Page[AttendanceSession]:
        flt = AttendanceFilter(
            employee_id=require_id(employee_id, "Employee"),
            start_date=as_date(start_date, "Start date") if start_date else None,
            end_date=as_date(end_date, "End date") if end_date else None,
        )
        if flt.start_date and flt.end_date and flt.end_date < flt.start_date:
            raise ValidationError("End date must be on or after start date")

        page, limit = normalize_paging(page, limit, default_limit=DEFAULT_ATTENDANCE_PAGE_LIMIT)
        total = self._attendance.count_sessions(flt)
        items = self._attendance.list_sessions(flt, offset=(page - 1) * limit, limit=limit)
        return Page(items=list(items), page=page, limit=limit, total_records=total)

    def count_closed_sessions_in_range(self, employee_id: int, start: datetime | date, end: datetime | date) -> int:
        """Closed sessions whose punch-out lies in [start, end]; the payroll attendance-day count."""
        if not isinstance(start, datetime):
            start = start_of_day(start)
        if not isinstance(end, datetime):
            end = end_of_day(end)
        if end < start:
            raise ValidationError("Range end must not precede range start")
        return self._attendance.count_closed_in_range(employee_id=require_id(employee_id, "Employee"), start=start, end=end)

    def _load(self, session_id: int) -> AttendanceSession:
        session = self._attendance.get_by_id(session_id)
        if session is None:
            raise NotFoundError("Attendance session not found")
        return session
