from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import PayrollFigures, PayrollRecord
from .repository import PayrollRepository

_COLUMNS = (
    "payroll_id, employee_id, pay_period, base_salary, total_working_days, attendance_days, "
    "paid_days, gross_earnings, unpaid_leave_days, leave_deduction, tax_deduction, net_salary, "
    "status, payment_date, created_at, updated_at"
)


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        employee_id=int(r["employee_id"]),
        pay_period=r["pay_period"],
        base_salary=as_decimal(r["base_salary"]),
        total_working_days=int(r["total_working_days"]),
        attendance_days=int(r.get("attendance_days") or 0),
        paid_days=as_decimal(r["paid_days"]),
        gross_earnings=as_decimal(r["gross_earnings"]),
        unpaid_leave_days=as_decimal(r["unpaid_leave_days"]),
        leave_deduction=as_decimal(r["leave_deduction"]),
        tax_deduction=as_decimal(r["tax_deduction"]),
        net_salary=as_decimal(r["net_salary"]),
        status=PayrollStatus(r["status"]),
        payment_date=r.get("payment_date"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _figure_params(f: PayrollFigures) -> tuple:
    return (
        f.base_salary,
        f.total_working_days,
        f.attendance_days,
        f.paid_days,
        f.gross_earnings,
        f.unpaid_leave_days,
        f.leave_deduction,
        f.tax_deduction,
        f.net_salary,
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_records WHERE payroll_id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_and_period(self, *, employee_id: int, pay_period: str) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll_records WHERE employee_id=%s AND pay_period=%s",
                (int(employee_id), pay_period),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def insert(self, *, employee_id: int, pay_period: str, figures: PayrollFigures) -> Optional[int]:
        # uq_payroll_employee_period keeps one record per employee and period.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO payroll_records(
                        employee_id, pay_period, base_salary, total_working_days, attendance_days,
                        paid_days, gross_earnings, unpaid_leave_days, leave_deduction, tax_deduction,
                        net_salary, status
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (int(employee_id), pay_period) + _figure_params(figures) + (PayrollStatus.CALCULATED.value,),
                )
                return int(cur.lastrowid)
        except mysql.connector.errors.IntegrityError as exc:
            if exc.errno == errorcode.ER_DUP_ENTRY:
                return None
            raise

    def overwrite_unpaid(self, *, payroll_id: int, figures: PayrollFigures) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll_records
                SET base_salary=%s, total_working_days=%s, attendance_days=%s, paid_days=%s,
                    gross_earnings=%s, unpaid_leave_days=%s, leave_deduction=%s, tax_deduction=%s,
                    net_salary=%s, status=%s, payment_date=NULL, updated_at=CURRENT_TIMESTAMP
                WHERE payroll_id=%s AND status<>%s
                """,
                _figure_params(figures)
                + (PayrollStatus.CALCULATED.value, int(payroll_id), PayrollStatus.PAID.value),
            )
            # Unchanged figures report rowcount 0 on MySQL, so confirm through the status.
            if cur.rowcount > 0:
                return True
            cur.execute(
                "SELECT status FROM payroll_records WHERE payroll_id=%s",
                (int(payroll_id),),
            )
            r = fetchone(cur)
            return bool(r) and r["status"] == PayrollStatus.CALCULATED.value

    def mark_paid(self, *, payroll_id: int, payment_date: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll_records
                SET status=%s, payment_date=%s
                WHERE payroll_id=%s AND status=%s
                """,
                (PayrollStatus.PAID.value, payment_date, int(payroll_id), PayrollStatus.CALCULATED.value),
            )
            return cur.rowcount > 0

    def list_for_employee(self, employee_id: int) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payroll_records
                WHERE employee_id=%s
                ORDER BY pay_period DESC
                """,
                (int(employee_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_by_status(self, *, pay_period: str) -> Mapping[PayrollStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT status, COUNT(*) AS n FROM payroll_records WHERE pay_period=%s GROUP BY status",
                (pay_period,),
            )
            counts = {status: 0 for status in PayrollStatus}
            for r in fetchall(cur):
                counts[PayrollStatus(r["status"])] = int(r["n"])
            return counts
