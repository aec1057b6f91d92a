from __future__ import annotations

from typing import Iterable, Mapping, Optional, Protocol, Sequence

from ..common.cancellation import CancellationToken
from ..employees.model import Employee
from ..events.model import Event
from .model import EmployeeEvent


class EmployeeEventRepository(Protocol):
    def exists(self, employee_id: int, event_id: int, *, cancel: Optional[CancellationToken] = None) -> bool:
        raise NotImplementedError

    def create(self, employee_event: EmployeeEvent, *, cancel: Optional[CancellationToken] = None) -> EmployeeEvent:
        raise NotImplementedError

    def create_many(
        self, employee_events: Iterable[EmployeeEvent], *, cancel: Optional[CancellationToken] = None
    ) -> int:
        raise NotImplementedError

    def delete(self, employee_id: int, event_id: int, *, cancel: Optional[CancellationToken] = None) -> bool:
        raise NotImplementedError

    def delete_many(
        self, employee_ids: Iterable[int], event_id: int, *, cancel: Optional[CancellationToken] = None
    ) -> int:
        raise NotImplementedError

    def apply_changes(
        self,
        event_id: int,
        *,
        remove: Iterable[int],
        add: Iterable[int],
        cancel: Optional[CancellationToken] = None,
    ) -> None:
        """Delete ``remove`` then insert ``add`` for one event, in one transaction."""

        raise NotImplementedError

    def get_attendees(self, event_id: int, *, cancel: Optional[CancellationToken] = None) -> Sequence[Employee]:
        """Employees attending the event, ordered by last name."""

        raise NotImplementedError

    def get_attendee_counts(
        self, event_ids: Iterable[int], *, cancel: Optional[CancellationToken] = None
    ) -> Mapping[int, int]:
        """Attendee count per event id.

        Events without attendance rows are omitted; callers treat absence as 0.
        """

        raise NotImplementedError

    def get_events_for_employee(
        self, employee_id: int, *, cancel: Optional[CancellationToken] = None
    ) -> Sequence[Event]:
        """Events the employee attends, ordered by start time."""

        raise NotImplementedError
