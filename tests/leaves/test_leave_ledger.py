from __future__ import annotations

import threading
from datetime import date, datetime
from decimal import Decimal

import pytest

from attendance_payroll.core.enums import LeaveStatus, LeaveType, ReviewAction
from attendance_payroll.core.exceptions import NotFoundError, StateConflictError, ValidationError
from attendance_payroll.leaves.memory_leave_repository import InMemoryLeaveRepository
from attendance_payroll.leaves.service import LeaveLedger


@pytest.fixture
def ledger(container) -> LeaveLedger:
    return container.leave_ledger


def test_submit_derives_total_days_and_starts_pending(ledger):
    leave = ledger.submit(1, LeaveType.CASUAL, "2024-03-01", "2024-03-03", "Trip")

    assert leave.total_days == Decimal("3")
    assert leave.status == LeaveStatus.PENDING
    assert leave.reviewer_id is None
    assert leave.review_date is None


def test_submit_accepts_leave_type_value_and_datetimes(ledger):
    leave = ledger.submit(1, "Sick Leave", datetime(2024, 3, 4, 15, 0), datetime(2024, 3, 4, 9, 0), "Flu")

    assert leave.leave_type == LeaveType.SICK
    assert leave.start_date == leave.end_date == date(2024, 3, 4)
    assert leave.total_days == Decimal("1")


@pytest.mark.parametrize(
    "leave_type,start,end,reason",
    [
        (None, "2024-03-01", "2024-03-02", "x"),
        ("Holiday", "2024-03-01", "2024-03-02", "x"),
        (LeaveType.ANNUAL, None, "2024-03-02", "x"),
        (LeaveType.ANNUAL, "2024-03-01", "", "x"),
        (LeaveType.ANNUAL, "2024-03-05", "2024-03-01", "x"),
        (LeaveType.ANNUAL, "2024-03-01", "2024-03-02", "   "),
        (LeaveType.ANNUAL, "03/01/2024", "2024-03-02", "x"),
    ],
)
def test_submit_validation_failures(ledger, leave_type, start, end, reason):
    with pytest.raises(ValidationError):
        ledger.submit(1, leave_type, start, end, reason)


def test_submit_for_unknown_employee_is_not_found(ledger):
    with pytest.raises(NotFoundError):
        ledger.submit(404, LeaveType.ANNUAL, "2024-03-01", "2024-03-02", "x")


def test_review_is_one_shot(ledger, fixed_now):
    leave = ledger.submit(1, LeaveType.ANNUAL, "2024-03-01", "2024-03-02", "Rest")

    approved = ledger.review(leave.leave_id, 99, "approve", now=fixed_now)
    assert approved.status == LeaveStatus.APPROVED
    assert approved.reviewer_id == 99
    assert approved.review_date == fixed_now

    with pytest.raises(StateConflictError):
        ledger.review(leave.leave_id, 99, ReviewAction.APPROVE)
    with pytest.raises(StateConflictError):
        ledger.review(leave.leave_id, 99, ReviewAction.REJECT)


def test_review_unknown_leave_and_bad_action(ledger):
    with pytest.raises(NotFoundError):
        ledger.review(12345, 99, "approve")

    leave = ledger.submit(1, LeaveType.ANNUAL, "2024-03-01", "2024-03-02", "Rest")
    with pytest.raises(ValidationError):
        ledger.review(leave.leave_id, 99, "maybe")
    assert ledger.get(leave.leave_id).status == LeaveStatus.PENDING


def test_concurrent_reviews_only_one_wins(ledger):
    leave = ledger.submit(1, LeaveType.ANNUAL, "2024-03-01", "2024-03-02", "Rest")
    workers = 8
    barrier = threading.Barrier(workers)
    wins: list[str] = []
    lock = threading.Lock()

    def attempt(i: int) -> None:
        barrier.wait()
        action = "approve" if i % 2 else "reject"
        try:
            ledger.review(leave.leave_id, 100 + i, action)
        except StateConflictError:
            return
        with lock:
            wins.append(action)

    threads = [threading.Thread(target=attempt, args=(i,)) for i in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(wins) == 1
    assert ledger.get(leave.leave_id).status.value.lower().startswith(wins[0][:4])


def test_update_recomputes_days_while_pending(ledger):
    leave = ledger.submit(1, LeaveType.ANNUAL, "2024-03-01", "2024-03-02", "Rest")

    updated = ledger.update(leave.leave_id, end_date="2024-03-10", leave_type="Unpaid Leave")

    assert updated.total_days == Decimal("10")
    assert updated.leave_type == LeaveType.UNPAID
    assert updated.reason == "Rest"

    with pytest.raises(ValidationError):
        ledger.update(leave.leave_id, start_date="2024-03-11")


def test_update_after_review_is_a_conflict(ledger):
    leave = ledger.submit(1, LeaveType.ANNUAL, "2024-03-01", "2024-03-02", "Rest")
    ledger.review(leave.leave_id, 99, "reject")

    with pytest.raises(StateConflictError):
        ledger.update(leave.leave_id, reason="Changed my mind")


def _approved(ledger, leave_type, start, end):
    leave = ledger.submit(1, leave_type, start, end, "r")
    return ledger.review(leave.leave_id, 99, "approve")


def test_unpaid_days_sum_full_requests_that_overlap(ledger):
    _approved(ledger, LeaveType.UNPAID, "2024-03-04", "2024-03-05")
    # Spans Feb/Mar: counted in full for March.
    _approved(ledger, LeaveType.UNPAID, "2024-02-27", "2024-03-01")
    # Paid leave type and pending/rejected requests are ignored.
    _approved(ledger, LeaveType.SICK, "2024-03-10", "2024-03-12")
    ledger.submit(1, LeaveType.UNPAID, "2024-03-20", "2024-03-21", "pending")
    rejected = ledger.submit(1, LeaveType.UNPAID, "2024-03-22", "2024-03-22", "no")
    ledger.review(rejected.leave_id, 99, "reject")
    _approved(ledger, LeaveType.UNPAID, "2024-04-01", "2024-04-02")

    assert ledger.approved_unpaid_days_in_period(1, date(2024, 3, 1), date(2024, 3, 31)) == Decimal("6")
    assert ledger.approved_unpaid_days_in_period(1, date(2024, 2, 1), date(2024, 2, 29)) == Decimal("4")
    assert ledger.approved_unpaid_days_in_period(2, date(2024, 3, 1), date(2024, 3, 31)) == Decimal("0")


def test_list_filters_by_employee_and_status_newest_first():
    ledger = LeaveLedger(InMemoryLeaveRepository())
    for day in range(1, 5):
        ledger.submit(1, LeaveType.ANNUAL, f"2024-03-0{day}", f"2024-03-0{day}", "r", now=datetime(2024, 2, day, 9, 0))
    other = ledger.submit(2, LeaveType.ANNUAL, "2024-03-01", "2024-03-01", "r", now=datetime(2024, 2, 10, 9, 0))
    ledger.review(other.leave_id, 99, "approve")

    page = ledger.list(employee_id=1, page=1, limit=3)
    assert page.total_records == 4
    assert page.pages == 2
    assert [leave.start_date.day for leave in page.items] == [4, 3, 2]

    approved = ledger.list(status="approved")
    assert [leave.leave_id for leave in approved.items] == [other.leave_id]

    everything = ledger.list()
    assert everything.items[0].leave_id == other.leave_id
