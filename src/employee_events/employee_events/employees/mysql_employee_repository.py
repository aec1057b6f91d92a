from __future__ import annotations

from typing import Optional, Sequence

from ..common.cancellation import CancellationToken
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee, EmployeeAttendanceCount, EmployeeDraft
from .repository import EmployeeRepository


def row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        date_of_birth=r["date_of_birth"],
        favourite_drink=r.get("favourite_drink"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, employee_id: int, *, cancel: Optional[CancellationToken] = None) -> bool:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                "SELECT EXISTS(SELECT 1 FROM employees WHERE employee_id=%s) AS found",
                (int(employee_id),),
            )
            r = fetchone(cur)
            return bool(r and r["found"])

    def get_by_id(self, employee_id: int, *, cancel: Optional[CancellationToken] = None) -> Optional[Employee]:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, first_name, last_name, date_of_birth, favourite_drink
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return row_to_employee(r) if r else None

    def get_all(self, *, cancel: Optional[CancellationToken] = None) -> Sequence[Employee]:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, first_name, last_name, date_of_birth, favourite_drink
                FROM employees
                ORDER BY last_name ASC, first_name ASC, employee_id ASC
                """
            )
            return [row_to_employee(r) for r in fetchall(cur)]

    def create(self, draft: EmployeeDraft, *, cancel: Optional[CancellationToken] = None) -> Employee:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(first_name, last_name, date_of_birth, favourite_drink)
                VALUES(%s,%s,%s,%s)
                """,
                (draft.first_name, draft.last_name, draft.date_of_birth, draft.favourite_drink),
            )
            return Employee(
                employee_id=int(cur.lastrowid),
                first_name=draft.first_name,
                last_name=draft.last_name,
                date_of_birth=draft.date_of_birth,
                favourite_drink=draft.favourite_drink,
            )

    def update(self, employee: Employee, *, cancel: Optional[CancellationToken] = None) -> bool:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET first_name=%s, last_name=%s, date_of_birth=%s, favourite_drink=%s
                WHERE employee_id=%s
                """,
                (
                    employee.first_name,
                    employee.last_name,
                    employee.date_of_birth,
                    employee.favourite_drink,
                    int(employee.employee_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, employee_id: int, *, cancel: Optional[CancellationToken] = None) -> bool:
        # Explicit two-step delete in one transaction; the FK cascade is not relied upon.
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute("DELETE FROM employee_events WHERE employee_id=%s", (int(employee_id),))
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0

    def get_top_by_attendance(
        self, limit: int, *, cancel: Optional[CancellationToken] = None
    ) -> Sequence[EmployeeAttendanceCount]:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                """
                SELECT e.employee_id, e.first_name, e.last_name, e.date_of_birth, e.favourite_drink,
                       COUNT(ee.event_id) AS events_attended
                FROM employees e
                JOIN employee_events ee ON ee.employee_id = e.employee_id
                GROUP BY e.employee_id, e.first_name, e.last_name, e.date_of_birth, e.favourite_drink
                ORDER BY events_attended DESC, e.employee_id ASC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                EmployeeAttendanceCount(employee=row_to_employee(r), events_attended=int(r["events_attended"]))
                for r in fetchall(cur)
            ]
