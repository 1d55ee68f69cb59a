from __future__ import annotations

import socket
from datetime import date, datetime
from decimal import Decimal

import mysql.connector
import pytest
from mysql.connector import errorcode

from attendance_payroll.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from attendance_payroll.core.enums import LeaveStatus, PayrollStatus
from attendance_payroll.core.exceptions import DatastoreTimeoutError
from attendance_payroll.database.bootstrap import iter_sql_statements
from attendance_payroll.database.mysql_base import as_decimal, db_cursor, is_timeout_error
from attendance_payroll.leaves.mysql_leave_repository import MySQLLeaveRepository
from attendance_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator
from attendance_payroll.payroll.mysql_payroll_repository import MySQLPayrollRepository


class FakeCursor:
    def __init__(self, error: Exception | None = None, lastrowid: int = 1, rowcount: int = 0, rows=()):
        self.error = error
        self.lastrowid = lastrowid
        self.rowcount = rowcount
        self.rows = list(rows)
        self.closed = False
        self.executed: list[tuple[str, tuple]] = []

    def execute(self, sql, params=()):
        self.executed.append((sql, params))
        if self.error is not None:
            raise self.error

    def fetchone(self):
        return self.rows.pop(0) if self.rows else None

    def fetchall(self):
        return []

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: FakeCursor, rollback_error: Exception | None = None):
        self._cursor = cursor
        self.rollback_error = rollback_error
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True
        if self.rollback_error is not None:
            raise self.rollback_error

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn: FakeConnection | None = None, connect_error: Exception | None = None):
        self.conn = conn
        self.connect_error = connect_error

    def connect(self):
        if self.connect_error is not None:
            raise self.connect_error
        return self.conn


def test_commit_and_close_on_success():
    cur = FakeCursor()
    conn = FakeConnection(cur)

    with db_cursor(FakeFactory(conn)) as (_, c):
        c.execute("SELECT 1")

    assert conn.committed and not conn.rolled_back
    assert conn.closed and cur.closed


def test_rollback_and_propagate_on_error():
    conn = FakeConnection(FakeCursor(error=mysql.connector.errors.ProgrammingError(msg="bad sql", errno=1064)))

    with pytest.raises(mysql.connector.errors.ProgrammingError):
        with db_cursor(FakeFactory(conn)) as (_, c):
            c.execute("SELEC 1")

    assert conn.rolled_back and not conn.committed
    assert conn.closed


def test_lock_wait_timeout_becomes_datastore_timeout():
    err = mysql.connector.errors.OperationalError(msg="Lock wait timeout exceeded", errno=errorcode.ER_LOCK_WAIT_TIMEOUT)
    conn = FakeConnection(FakeCursor(error=err))

    with pytest.raises(DatastoreTimeoutError):
        with db_cursor(FakeFactory(conn)) as (_, c):
            c.execute("UPDATE payroll_records SET status='Paid'")

    assert conn.rolled_back


def test_timeout_still_reported_when_rollback_fails():
    lost = mysql.connector.errors.OperationalError(
        msg="Lost connection to MySQL server at 'db:3306', system error: timed out",
        errno=errorcode.CR_SERVER_LOST_EXTENDED,
    )
    dead = mysql.connector.errors.OperationalError(msg="MySQL Connection not available", errno=errorcode.CR_SERVER_LOST_EXTENDED)
    conn = FakeConnection(FakeCursor(error=lost), rollback_error=dead)

    with pytest.raises(DatastoreTimeoutError) as info:
        with db_cursor(FakeFactory(conn)) as (_, c):
            c.execute("SELECT 1")

    assert info.value.__cause__ is lost
    assert conn.rolled_back and conn.closed


def test_original_error_kept_when_rollback_fails():
    bad_sql = mysql.connector.errors.ProgrammingError(msg="bad sql", errno=1064)
    dead = mysql.connector.errors.OperationalError(msg="MySQL Connection not available", errno=errorcode.CR_SERVER_LOST_EXTENDED)
    conn = FakeConnection(FakeCursor(error=bad_sql), rollback_error=dead)

    with pytest.raises(mysql.connector.errors.ProgrammingError):
        with db_cursor(FakeFactory(conn)) as (_, c):
            c.execute("SELEC 1")


def test_unreachable_server_on_connect_becomes_datastore_timeout():
    err = mysql.connector.errors.InterfaceError(msg="Can't connect", errno=errorcode.CR_CONN_HOST_ERROR)

    with pytest.raises(DatastoreTimeoutError):
        with db_cursor(FakeFactory(connect_error=err)):
            pass


@pytest.mark.parametrize(
    "exc, expected",
    [
        (socket.timeout("timed out"), True),
        (TimeoutError(), True),
        (mysql.connector.errors.OperationalError(msg="Lost connection", errno=errorcode.CR_SERVER_LOST), True),
        (mysql.connector.errors.InterfaceError(msg="read timed out"), True),
        (mysql.connector.errors.OperationalError(msg="Unknown column", errno=errorcode.ER_BAD_FIELD_ERROR), False),
        (ValueError("nope"), False),
    ],
)
def test_is_timeout_error(exc, expected):
    assert is_timeout_error(exc) is expected


def test_duplicate_open_session_insert_returns_none():
    dup = mysql.connector.errors.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)
    conn = FakeConnection(FakeCursor(error=dup))
    repo = MySQLAttendanceRepository(FakeFactory(conn))

    result = repo.create_open_session(employee_id=1, work_date=date(2024, 3, 15), punch_in=datetime(2024, 3, 15, 8, 30))

    assert result is None
    assert conn.rolled_back


def test_open_session_insert_returns_new_id():
    conn = FakeConnection(FakeCursor(lastrowid=42))
    repo = MySQLAttendanceRepository(FakeFactory(conn))

    assert repo.create_open_session(employee_id=1, work_date=date(2024, 3, 15), punch_in=datetime(2024, 3, 15, 8, 30)) == 42
    assert conn.committed


def test_as_decimal():
    assert as_decimal(None) == Decimal("0")
    assert as_decimal(2.5) == Decimal("2.5")
    assert as_decimal(Decimal("1.50")) == Decimal("1.50")


def test_iter_sql_statements_ignores_semicolons_in_strings():
    sql = "CREATE TABLE a (x INT);\nINSERT INTO a VALUES ('x;y');\n  \nSELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (x INT)",
        "INSERT INTO a VALUES ('x;y')",
        "SELECT 1",
    ]


def _figures():
    return StandardPayrollCalculator().calculate(
        base_salary=Decimal("3100"), year=2024, month=3, paid_attendance_days=0, unpaid_leave_days=Decimal("2")
    )


def _payroll_repo(cur: FakeCursor):
    conn = FakeConnection(cur)
    return MySQLPayrollRepository(FakeFactory(conn)), conn


def test_overwrite_unpaid_is_guarded_by_status():
    cur = FakeCursor(rowcount=1)
    repo, conn = _payroll_repo(cur)

    assert repo.overwrite_unpaid(payroll_id=7, figures=_figures()) is True

    sql, params = cur.executed[0]
    assert "WHERE payroll_id=%s AND status<>%s" in sql
    assert params[-2:] == (7, PayrollStatus.PAID.value)
    assert params[-3] == PayrollStatus.CALCULATED.value
    assert conn.committed


def test_overwrite_unpaid_refuses_paid_record():
    cur = FakeCursor(rowcount=0, rows=[{"status": PayrollStatus.PAID.value}])
    repo, _ = _payroll_repo(cur)

    assert repo.overwrite_unpaid(payroll_id=7, figures=_figures()) is False
    assert cur.executed[1][1] == (7,)


def test_overwrite_unpaid_with_unchanged_figures_still_succeeds():
    cur = FakeCursor(rowcount=0, rows=[{"status": PayrollStatus.CALCULATED.value}])
    repo, _ = _payroll_repo(cur)

    assert repo.overwrite_unpaid(payroll_id=7, figures=_figures()) is True


def test_overwrite_unpaid_missing_record():
    repo, _ = _payroll_repo(FakeCursor(rowcount=0))

    assert repo.overwrite_unpaid(payroll_id=7, figures=_figures()) is False


@pytest.mark.parametrize("rowcount, expected", [(1, True), (0, False)])
def test_mark_paid_only_moves_calculated_records(rowcount, expected):
    cur = FakeCursor(rowcount=rowcount)
    repo, _ = _payroll_repo(cur)
    paid_at = datetime(2024, 4, 1, 9, 0)

    assert repo.mark_paid(payroll_id=7, payment_date=paid_at) is expected

    sql, params = cur.executed[0]
    assert "WHERE payroll_id=%s AND status=%s" in sql
    assert params == (PayrollStatus.PAID.value, paid_at, 7, PayrollStatus.CALCULATED.value)


def test_duplicate_payroll_insert_returns_none():
    dup = mysql.connector.errors.IntegrityError(msg="Duplicate entry '1-2024-03'", errno=errorcode.ER_DUP_ENTRY)
    repo, conn = _payroll_repo(FakeCursor(error=dup))

    assert repo.insert(employee_id=1, pay_period="2024-03", figures=_figures()) is None
    assert conn.rolled_back


def test_other_integrity_errors_on_payroll_insert_propagate():
    fk = mysql.connector.errors.IntegrityError(msg="Cannot add or update a child row", errno=errorcode.ER_NO_REFERENCED_ROW_2)
    repo, _ = _payroll_repo(FakeCursor(error=fk))

    with pytest.raises(mysql.connector.errors.IntegrityError):
        repo.insert(employee_id=1, pay_period="2024-03", figures=_figures())


@pytest.mark.parametrize("rowcount, expected", [(1, True), (0, False)])
def test_leave_decision_only_applies_to_pending(rowcount, expected):
    cur = FakeCursor(rowcount=rowcount)
    repo = MySQLLeaveRepository(FakeFactory(FakeConnection(cur)))
    reviewed_at = datetime(2024, 3, 2, 10, 0)

    decided = repo.decide(leave_id=5, status=LeaveStatus.APPROVED, reviewer_id=9, review_date=reviewed_at)

    assert decided is expected
    sql, params = cur.executed[0]
    assert "WHERE leave_id=%s AND status=%s" in sql
    assert params == (LeaveStatus.APPROVED.value, 9, reviewed_at, 5, LeaveStatus.PENDING.value)
