from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceSession:
    """One work interval of one employee, opened at punch-in and closed at punch-out."""

    session_id: int
    employee_id: int
    work_date: date
    punch_in: datetime
    punch_out: Optional[datetime] = None
    duration_minutes: int = 0
    note: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.punch_out is None

    @property
    def duration_hours(self) -> str:
        return f"{self.duration_minutes / 60:.2f}"


@dataclass(frozen=True)
class AttendanceFilter:
    """Supported history predicates: employee plus an inclusive work-date range."""

    employee_id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def matches(self, session: AttendanceSession) -> bool:
        if session.employee_id != self.employee_id:
            return False
        if self.start_date and session.work_date < self.start_date:
            return False
        if self.end_date and session.work_date > self.end_date:
            return False
        return True
