from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EmployeeEvent:
    """Attendance row: this employee attends this event."""

    employee_id: int
    event_id: int
