from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from ..employees.model import Employee
from .model import Event


@dataclass(frozen=True)
class EventListViewModel:
    is_showing_historic: bool
    events: Sequence[Event]
    # Every listed event has an entry; zero when nobody attends.
    attendee_counts: Mapping[int, int]

    def count_for(self, event_id: int) -> int:
        return int(self.attendee_counts.get(event_id, 0))


@dataclass(frozen=True)
class EventDetailsViewModel:
    event: Event
    employees: Sequence[Employee]


@dataclass(frozen=True)
class EventFormViewModel:
    """Create form state: raw values plus field errors."""

    values: Mapping[str, str] = field(default_factory=dict)
    errors: Mapping[str, Sequence[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class EventEditViewModel:
    event_id: int
    values: Mapping[str, str]
    employees: Sequence[Employee]
    # employee_id -> is the employee attending?
    employee_attendance: Mapping[int, bool]
    errors: Mapping[str, Sequence[str]] = field(default_factory=dict)

    def is_attending(self, employee_id: int) -> bool:
        return bool(self.employee_attendance.get(employee_id, False))
