"""Example: closing a pay period through the operations layer with in-memory storage."""

from datetime import datetime, timedelta
from decimal import Decimal

from attendance_payroll.container import build_memory_container
from attendance_payroll.core.enums import LeaveType
from attendance_payroll.employees.model import Employee
from attendance_payroll.operations import CoreOperations


def main():
    container = build_memory_container(employees=[Employee(employee_id=1, base_salary=Decimal("3100"))])
    ops = CoreOperations(container)

    start = datetime(2024, 3, 4, 9, 0)
    container.attendance_tracker.punch_in(1, now=start)
    container.attendance_tracker.punch_out(1, now=start + timedelta(hours=8))

    leave = ops.submit_leave(1, LeaveType.UNPAID, "2024-03-11", "2024-03-12", "Family matter").data
    ops.review_leave(leave.leave_id, reviewer_id=99, action="approve")

    result = ops.generate_payroll(1, 2024, 3)
    print(result.message)
    print(result.data.record)


if __name__ == "__main__":
    main()
