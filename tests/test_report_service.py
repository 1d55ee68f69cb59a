from __future__ import annotations

from datetime import datetime

import pytest

from attendance_payroll.core.enums import LeaveType
from attendance_payroll.core.exceptions import ValidationError


def test_summary_counts(container):
    ledger = container.leave_ledger
    a = ledger.submit(1, LeaveType.SICK, "2024-03-04", "2024-03-04", "Flu")
    b = ledger.submit(1, LeaveType.ANNUAL, "2024-03-20", "2024-03-22", "Trip")
    ledger.submit(2, LeaveType.CASUAL, "2024-03-25", "2024-03-25", "Errand")
    ledger.review(a.leave_id, 9, "approve")
    ledger.review(b.leave_id, 9, "reject")

    record = container.payroll_service.generate(1, 2024, 3).record
    container.payroll_service.mark_paid(record.payroll_id)
    container.payroll_service.generate(1, 2024, 4)

    report = container.report_service.summary("2024-03").as_dict()

    assert report["employeeSummary"] == {"totalEmployees": 2, "activeEmployees": 1, "inactiveEmployees": 1}
    assert report["leaveSummary"] == {
        "pendingLeaves": 1,
        "approvedLeaves": 1,
        "rejectedLeaves": 1,
        "totalApplications": 3,
    }
    assert report["payrollSummary"] == {"payPeriod": "2024-03", "calculated": 0, "pending": 0, "paid": 1}


def test_summary_defaults_to_current_period(container):
    container.payroll_service.generate(1, 2024, 4)

    report = container.report_service.summary(now=datetime(2024, 4, 30, 23, 0))

    assert report.payroll_summary["payPeriod"] == "2024-04"
    assert report.payroll_summary["calculated"] == 1


def test_summary_rejects_bad_period(container):
    with pytest.raises(ValidationError):
        container.report_service.summary("April 2024")
