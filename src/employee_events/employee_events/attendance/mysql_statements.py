from __future__ import annotations

from typing import Sequence

from ..database.mysql_base import in_placeholders

INSERT_SQL = "INSERT INTO employee_events(employee_id, event_id) VALUES(%s,%s)"


def write_attendance_changes(cur, event_id: int, remove_ids: Sequence[int], add_ids: Sequence[int]) -> None:
    """Run the removals, then the additions, on an open cursor.

    The caller owns the transaction.
    """
    if remove_ids:
        cur.execute(
            f"DELETE FROM employee_events WHERE event_id=%s AND employee_id IN ({in_placeholders(remove_ids)})",
            (int(event_id), *remove_ids),
        )
    if add_ids:
        cur.executemany(INSERT_SQL, [(employee_id, int(event_id)) for employee_id in add_ids])
