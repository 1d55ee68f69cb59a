from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.locks import bounded_lock
from ..core.constants import DEFAULT_DATASTORE_TIMEOUT_SECONDS
from ..core.enums import PayrollStatus
from .model import PayrollFigures, PayrollRecord
from .repository import PayrollRepository


def _apply_figures(record: PayrollRecord, figures: PayrollFigures, *, updated_at: datetime) -> PayrollRecord:
    return replace(
        record,
        base_salary=figures.base_salary,
        total_working_days=figures.total_working_days,
        attendance_days=figures.attendance_days,
        paid_days=figures.paid_days,
        gross_earnings=figures.gross_earnings,
        unpaid_leave_days=figures.unpaid_leave_days,
        leave_deduction=figures.leave_deduction,
        tax_deduction=figures.tax_deduction,
        net_salary=figures.net_salary,
        status=PayrollStatus.CALCULATED,
        payment_date=None,
        updated_at=updated_at,
    )


class InMemoryPayrollRepository(PayrollRepository):
    """Keyed by payroll_id with a (employee_id, pay_period) unique index."""

    def __init__(
        self,
        *,
        timeout_seconds: float = DEFAULT_DATASTORE_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._lock = threading.Lock()
        self._timeout = timeout_seconds
        self._clock = clock
        self._records: dict[int, PayrollRecord] = {}
        self._by_key: dict[tuple[int, str], int] = {}
        self._next_id = 1

    def _locked(self):
        return bounded_lock(self._lock, self._timeout, resource="payroll store")

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with self._locked():
            return self._records.get(int(payroll_id))

    def get_for_employee_and_period(self, *, employee_id: int, pay_period: str) -> Optional[PayrollRecord]:
        with self._locked():
            payroll_id = self._by_key.get((int(employee_id), pay_period))
            return self._records.get(payroll_id) if payroll_id is not None else None

    def insert(self, *, employee_id: int, pay_period: str, figures: PayrollFigures) -> Optional[int]:
        with self._locked():
            key = (int(employee_id), pay_period)
            if key in self._by_key:
                return None
            payroll_id = self._next_id
            self._next_id += 1
            now = self._clock()
            record = PayrollRecord(
                payroll_id=payroll_id,
                employee_id=key[0],
                pay_period=pay_period,
                base_salary=figures.base_salary,
                total_working_days=figures.total_working_days,
                attendance_days=figures.attendance_days,
                paid_days=figures.paid_days,
                gross_earnings=figures.gross_earnings,
                unpaid_leave_days=figures.unpaid_leave_days,
                leave_deduction=figures.leave_deduction,
                tax_deduction=figures.tax_deduction,
                net_salary=figures.net_salary,
                status=PayrollStatus.CALCULATED,
                created_at=now,
                updated_at=now,
            )
            self._records[payroll_id] = record
            self._by_key[key] = payroll_id
            return payroll_id

    def overwrite_unpaid(self, *, payroll_id: int, figures: PayrollFigures) -> bool:
        with self._locked():
            record = self._records.get(int(payroll_id))
            if record is None or record.is_paid:
                return False
            self._records[record.payroll_id] = _apply_figures(record, figures, updated_at=self._clock())
            return True

    def mark_paid(self, *, payroll_id: int, payment_date: datetime) -> bool:
        with self._locked():
            record = self._records.get(int(payroll_id))
            if record is None or record.status != PayrollStatus.CALCULATED:
                return False
            self._records[record.payroll_id] = replace(
                record, status=PayrollStatus.PAID, payment_date=payment_date, updated_at=payment_date
            )
            return True

    def list_for_employee(self, employee_id: int) -> Sequence[PayrollRecord]:
        with self._locked():
            items = [r for r in self._records.values() if r.employee_id == int(employee_id)]
        items.sort(key=lambda r: r.pay_period, reverse=True)
        return items

    def count_by_status(self, *, pay_period: str) -> Mapping[PayrollStatus, int]:
        with self._locked():
            counts = {status: 0 for status in PayrollStatus}
            for r in self._records.values():
                if r.pay_period == pay_period:
                    counts[r.status] += 1
            return counts

    def set_status(self, payroll_id: int, status: PayrollStatus) -> None:
        """Administrative override (e.g. parking a record as PENDING); not part of the repository protocol."""
        with self._locked():
            record = self._records[int(payroll_id)]
            self._records[record.payroll_id] = replace(record, status=status)
