from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from ..attendance.reconciliation import attending_ids, plan_attendance_changes
from ..attendance.repository import EmployeeEventRepository
from ..common.cancellation import CancellationToken, raise_if_cancelled
from ..common.datetime_utils import now_local
from ..core.exceptions import CapacityExceededError, EventLockedError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .forms import ATTENDANCE_FIELD, event_form_values, form_values, validate_event_form
from .model import Event
from .repository import EventRepository
from .view_models import EventDetailsViewModel, EventEditViewModel, EventListViewModel

logger = logging.getLogger(__name__)


class EventService:
    """Use cases: list, show, create, edit (with attendance) and delete events."""

    def __init__(
        self,
        events: EventRepository,
        employees: EmployeeRepository,
        attendance: EmployeeEventRepository,
    ):
        self._events = events
        self._employees = employees
        self._attendance = attendance

    def _require_event(self, event_id: int, *, cancel: Optional[CancellationToken]) -> Event:
        event = self._events.get_by_id(event_id, cancel=cancel)
        if not event:
            raise NotFoundError(f"Event {event_id} does not exist")
        return event

    def list_events(
        self,
        *,
        show_historic: bool = False,
        now: Optional[datetime] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> EventListViewModel:
        now = now or now_local()
        events = self._events.get_all(include_historic=show_historic, now=now, cancel=cancel)
        counts = self._attendance.get_attendee_counts([e.event_id for e in events], cancel=cancel)
        return EventListViewModel(
            is_showing_historic=show_historic,
            events=list(events),
            attendee_counts={e.event_id: int(counts.get(e.event_id, 0)) for e in events},
        )

    def get_details(self, event_id: int, *, cancel: Optional[CancellationToken] = None) -> EventDetailsViewModel:
        event = self._require_event(event_id, cancel=cancel)
        employees = self._attendance.get_attendees(event.event_id, cancel=cancel)
        return EventDetailsViewModel(event=event, employees=list(employees))

    def create_event(self, form: Mapping[str, Any], *, cancel: Optional[CancellationToken] = None) -> Event:
        draft = validate_event_form(form)
        raise_if_cancelled(cancel)
        event = self._events.create(draft, cancel=cancel)
        logger.info("Created event %s (%r)", event.event_id, event.description)
        return event

    def get_edit_view(
        self,
        event_id: int,
        *,
        now: Optional[datetime] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> EventEditViewModel:
        """Edit form for an upcoming event.

        Raises ``NotFoundError`` for unknown ids and ``EventLockedError`` once
        the event has started.
        """
        now = now or now_local()
        event = self._require_event(event_id, cancel=cancel)
        if event.is_historic(now):
            raise EventLockedError(f"Event {event_id} has already started")

        employees = self._employees.get_all(cancel=cancel)
        current = {e.employee_id for e in self._attendance.get_attendees(event_id, cancel=cancel)}
        return EventEditViewModel(
            event_id=event.event_id,
            values=event_form_values(event),
            employees=list(employees),
            employee_attendance={e.employee_id: e.employee_id in current for e in employees},
        )

    def build_rejected_edit_view(
        self,
        event_id: int,
        form: Mapping[str, Any],
        attendance: Mapping[int, bool],
        error: ValidationError,
        *,
        now: Optional[datetime] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> EventEditViewModel:
        """Re-render state for an edit submission that was rejected.

        Missing and started events raise like ``get_edit_view`` does.
        """
        now = now or now_local()
        existing = self._require_event(event_id, cancel=cancel)
        if existing.is_historic(now):
            raise EventLockedError(f"Event {event_id} has already started")

        employees = self._employees.get_all(cancel=cancel)
        return EventEditViewModel(
            event_id=existing.event_id,
            values=form_values(form),
            employees=list(employees),
            employee_attendance={e.employee_id: bool(attendance.get(e.employee_id, False)) for e in employees},
            errors=error.errors,
        )

    def update_event(
        self,
        event_id: int,
        form: Mapping[str, Any],
        attendance: Mapping[int, bool],
        *,
        now: Optional[datetime] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> Event:
        """Update the event fields and reconcile who attends it.

        Every check (fields, unknown employees, capacity) runs before the single
        write transaction, so a rejected or cancelled submission leaves the
        store untouched.
        """
        now = now or now_local()
        existing = self._require_event(event_id, cancel=cancel)
        if existing.is_historic(now):
            raise EventLockedError(f"Event {event_id} has already started")

        draft = validate_event_form(form)

        known_ids = {e.employee_id for e in self._employees.get_all(cancel=cancel)}
        unknown = sorted(set(attendance) - known_ids)
        if unknown:
            message = f"Unknown employee id(s): {', '.join(str(i) for i in unknown)}."
            raise ValidationError(message, {ATTENDANCE_FIELD: [message]})

        current = [e.employee_id for e in self._attendance.get_attendees(event_id, cancel=cancel)]
        try:
            changes = plan_attendance_changes(desired=attendance, current=current, capacity=draft.maximum_capacity)
        except CapacityExceededError as e:
            logger.warning(
                "Rejected attendance for event %s: %s > %s", event_id, e.attending, e.capacity
            )
            raise

        event = draft.with_id(existing.event_id)
        updated = self._events.update_with_attendance(
            event, remove=changes.to_remove, add=changes.to_add, cancel=cancel
        )
        if not updated:
            raise NotFoundError(f"Event {event_id} does not exist")

        logger.info(
            "Updated event %s: %d attending (+%d / -%d)",
            event.event_id,
            len(attending_ids(attendance)),
            len(changes.to_add),
            len(changes.to_remove),
        )
        return event

    def delete_event(self, event_id: int, *, cancel: Optional[CancellationToken] = None) -> None:
        if not self._events.exists(event_id, cancel=cancel):
            raise NotFoundError(f"Event {event_id} does not exist")

        self._events.delete(event_id, cancel=cancel)
        logger.info("Deleted event %s", event_id)
