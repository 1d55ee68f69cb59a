from __future__ import annotations

import threading
from datetime import date, datetime

import pytest

from attendance_payroll.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from attendance_payroll.common.locks import bounded_lock
from attendance_payroll.core.exceptions import DatastoreTimeoutError


def test_bounded_lock_releases_after_block():
    lock = threading.Lock()

    with bounded_lock(lock, 0.1, resource="test"):
        assert lock.locked()

    assert not lock.locked()


def test_bounded_lock_times_out_when_held():
    lock = threading.Lock()
    lock.acquire()
    try:
        with pytest.raises(DatastoreTimeoutError, match="test store"):
            with bounded_lock(lock, 0.05, resource="test store"):
                pass
    finally:
        lock.release()


def test_in_memory_repository_times_out_instead_of_blocking():
    repo = InMemoryAttendanceRepository(timeout_seconds=0.05)
    repo._lock.acquire()
    try:
        with pytest.raises(DatastoreTimeoutError):
            repo.create_open_session(employee_id=1, work_date=date(2024, 3, 15), punch_in=datetime(2024, 3, 15, 8, 0))
    finally:
        repo._lock.release()

    assert repo.get_open_for_employee(1) is None
