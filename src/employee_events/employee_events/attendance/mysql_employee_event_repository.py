from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from ..common.cancellation import CancellationToken
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders
from ..employees.model import Employee
from ..employees.mysql_employee_repository import row_to_employee
from ..events.model import Event
from ..events.mysql_event_repository import row_to_event
from .model import EmployeeEvent
from .mysql_statements import INSERT_SQL, write_attendance_changes
from .repository import EmployeeEventRepository


class MySQLEmployeeEventRepository(EmployeeEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, employee_id: int, event_id: int, *, cancel: Optional[CancellationToken] = None) -> bool:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                """
                SELECT EXISTS(
                    SELECT 1 FROM employee_events WHERE employee_id=%s AND event_id=%s
                ) AS found
                """,
                (int(employee_id), int(event_id)),
            )
            r = fetchone(cur)
            return bool(r and r["found"])

    def create(self, employee_event: EmployeeEvent, *, cancel: Optional[CancellationToken] = None) -> EmployeeEvent:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(INSERT_SQL, (int(employee_event.employee_id), int(employee_event.event_id)))
            return employee_event

    def create_many(
        self, employee_events: Iterable[EmployeeEvent], *, cancel: Optional[CancellationToken] = None
    ) -> int:
        params = [(int(ee.employee_id), int(ee.event_id)) for ee in employee_events]
        if not params:
            return 0

        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.executemany(INSERT_SQL, params)
            return len(params)

    def delete(self, employee_id: int, event_id: int, *, cancel: Optional[CancellationToken] = None) -> bool:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                "DELETE FROM employee_events WHERE employee_id=%s AND event_id=%s",
                (int(employee_id), int(event_id)),
            )
            return cur.rowcount > 0

    def delete_many(
        self, employee_ids: Iterable[int], event_id: int, *, cancel: Optional[CancellationToken] = None
    ) -> int:
        ids = [int(i) for i in employee_ids]
        if not ids:
            return 0

        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                f"DELETE FROM employee_events WHERE event_id=%s AND employee_id IN ({in_placeholders(ids)})",
                (int(event_id), *ids),
            )
            return int(cur.rowcount)

    def apply_changes(
        self,
        event_id: int,
        *,
        remove: Iterable[int],
        add: Iterable[int],
        cancel: Optional[CancellationToken] = None,
    ) -> None:
        remove_ids = sorted(int(i) for i in remove)
        add_ids = sorted(int(i) for i in add)
        if not remove_ids and not add_ids:
            return

        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            write_attendance_changes(cur, event_id, remove_ids, add_ids)

    def get_attendees(self, event_id: int, *, cancel: Optional[CancellationToken] = None) -> Sequence[Employee]:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                """
                SELECT e.employee_id, e.first_name, e.last_name, e.date_of_birth, e.favourite_drink
                FROM employees e
                JOIN employee_events ee ON ee.employee_id = e.employee_id
                WHERE ee.event_id=%s
                ORDER BY e.last_name ASC, e.first_name ASC, e.employee_id ASC
                """,
                (int(event_id),),
            )
            return [row_to_employee(r) for r in fetchall(cur)]

    def get_attendee_counts(
        self, event_ids: Iterable[int], *, cancel: Optional[CancellationToken] = None
    ) -> Mapping[int, int]:
        ids = sorted({int(i) for i in event_ids})
        if not ids:
            return {}

        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                f"""
                SELECT event_id, COUNT(employee_id) AS employee_count
                FROM employee_events
                WHERE event_id IN ({in_placeholders(ids)})
                GROUP BY event_id
                """,
                tuple(ids),
            )
            return {int(r["event_id"]): int(r["employee_count"]) for r in fetchall(cur)}

    def get_events_for_employee(
        self, employee_id: int, *, cancel: Optional[CancellationToken] = None
    ) -> Sequence[Event]:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                """
                SELECT ev.event_id, ev.description, ev.start_datetime, ev.end_datetime, ev.maximum_capacity
                FROM events ev
                JOIN employee_events ee ON ee.event_id = ev.event_id
                WHERE ee.employee_id=%s
                ORDER BY ev.start_datetime ASC, ev.event_id ASC
                """,
                (int(employee_id),),
            )
            return [row_to_event(r) for r in fetchall(cur)]
