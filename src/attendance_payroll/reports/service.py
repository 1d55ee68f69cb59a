from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_pay_period, now_local, require_pay_period
from ..core.enums import EmployeeStatus, LeaveStatus, PayrollStatus
from ..employees.repository import EmployeeDirectory
from ..leaves.repository import LeaveRepository
from ..payroll.repository import PayrollRepository


@dataclass(frozen=True)
class SummaryReport:
    employee_summary: dict
    leave_summary: dict
    payroll_summary: dict

    def as_dict(self) -> dict:
        return {
            "employeeSummary": self.employee_summary,
            "leaveSummary": self.leave_summary,
            "payrollSummary": self.payroll_summary,
        }


class ReportService:
    """Dashboard counters across employees, leave and payroll."""

    def __init__(self, employees: EmployeeDirectory, leaves: LeaveRepository, payrolls: PayrollRepository):
        self._employees = employees
        self._leaves = leaves
        self._payrolls = payrolls

    def summary(self, pay_period: Optional[str] = None, *, now: datetime | None = None) -> SummaryReport:
        if pay_period is None:
            now = now or now_local()
            pay_period = format_pay_period(now.year, now.month)
        else:
            pay_period = require_pay_period(pay_period)

        employees = self._employees.count_by_status()
        total_employees = sum(employees.values())
        active = employees.get(EmployeeStatus.ACTIVE, 0)

        leaves = self._leaves.count_by_status()
        pending = leaves.get(LeaveStatus.PENDING, 0)
        approved = leaves.get(LeaveStatus.APPROVED, 0)
        rejected = leaves.get(LeaveStatus.REJECTED, 0)

        payrolls = self._payrolls.count_by_status(pay_period=pay_period)

        return SummaryReport(
            employee_summary={
                "totalEmployees": total_employees,
                "activeEmployees": active,
                "inactiveEmployees": total_employees - active,
            },
            leave_summary={
                "pendingLeaves": pending,
                "approvedLeaves": approved,
                "rejectedLeaves": rejected,
                "totalApplications": pending + approved + rejected,
            },
            payroll_summary={
                "payPeriod": pay_period,
                "calculated": payrolls.get(PayrollStatus.CALCULATED, 0),
                "pending": payrolls.get(PayrollStatus.PENDING, 0),
                "paid": payrolls.get(PayrollStatus.PAID, 0),
            },
        )
