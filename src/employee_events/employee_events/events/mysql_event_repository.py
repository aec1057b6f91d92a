from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..attendance.mysql_statements import write_attendance_changes
from ..common.cancellation import CancellationToken
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Event, EventDraft
from .repository import EventRepository

_EVENT_COLUMNS = "event_id, description, start_datetime, end_datetime, maximum_capacity"


def row_to_event(r: dict) -> Event:
    return Event(
        event_id=int(r["event_id"]),
        description=r["description"],
        start_datetime=r["start_datetime"],
        end_datetime=r["end_datetime"],
        maximum_capacity=int(r["maximum_capacity"]),
    )


def _update_row(cur, event: Event) -> bool:
    cur.execute(
        """
        UPDATE events
        SET description=%s, start_datetime=%s, end_datetime=%s, maximum_capacity=%s
        WHERE event_id=%s
        """,
        (
            event.description,
            event.start_datetime,
            event.end_datetime,
            int(event.maximum_capacity),
            int(event.event_id),
        ),
    )
    # MySQL reports 0 affected rows when nothing changed, so check existence instead.
    cur.execute("SELECT 1 AS found FROM events WHERE event_id=%s", (int(event.event_id),))
    return fetchone(cur) is not None


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, event_id: int, *, cancel: Optional[CancellationToken] = None) -> bool:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute("SELECT EXISTS(SELECT 1 FROM events WHERE event_id=%s) AS found", (int(event_id),))
            r = fetchone(cur)
            return bool(r and r["found"])

    def get_by_id(self, event_id: int, *, cancel: Optional[CancellationToken] = None) -> Optional[Event]:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(f"SELECT {_EVENT_COLUMNS} FROM events WHERE event_id=%s", (int(event_id),))
            r = fetchone(cur)
            return row_to_event(r) if r else None

    def get_all(
        self,
        *,
        include_historic: bool,
        now: datetime,
        cancel: Optional[CancellationToken] = None,
    ) -> Sequence[Event]:
        clauses: list[str] = []
        params: list[object] = []
        if not include_historic:
            clauses.append("start_datetime >= %s")
            params.append(now)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EVENT_COLUMNS}
                FROM events
                {where}
                ORDER BY start_datetime ASC, event_id ASC
                """,
                tuple(params),
            )
            return [row_to_event(r) for r in fetchall(cur)]

    def create(self, draft: EventDraft, *, cancel: Optional[CancellationToken] = None) -> Event:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(description, start_datetime, end_datetime, maximum_capacity)
                VALUES(%s,%s,%s,%s)
                """,
                (draft.description, draft.start_datetime, draft.end_datetime, int(draft.maximum_capacity)),
            )
            return draft.with_id(int(cur.lastrowid))

    def update(self, event: Event, *, cancel: Optional[CancellationToken] = None) -> bool:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            return _update_row(cur, event)

    def update_with_attendance(
        self,
        event: Event,
        *,
        remove: Iterable[int],
        add: Iterable[int],
        cancel: Optional[CancellationToken] = None,
    ) -> bool:
        remove_ids = sorted(int(i) for i in remove)
        add_ids = sorted(int(i) for i in add)

        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            if not _update_row(cur, event):
                return False
            write_attendance_changes(cur, event.event_id, remove_ids, add_ids)
            return True

    def delete(self, event_id: int, *, cancel: Optional[CancellationToken] = None) -> bool:
        with db_cursor(self._conn_factory, cancel=cancel) as (_, cur):
            cur.execute("DELETE FROM employee_events WHERE event_id=%s", (int(event_id),))
            cur.execute("DELETE FROM events WHERE event_id=%s", (int(event_id),))
            return cur.rowcount > 0
