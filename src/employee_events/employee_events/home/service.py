from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..attendance.repository import EmployeeEventRepository
from ..common.cancellation import CancellationToken
from ..common.datetime_utils import now_local
from ..core.constants import TOP_EMPLOYEES_LIMIT, UPCOMING_EVENT_DAYS
from ..employees.model import EmployeeAttendanceCount
from ..employees.repository import EmployeeRepository
from ..events.model import Event
from ..events.repository import EventRepository


@dataclass(frozen=True)
class HomeViewModel:
    upcoming_events: Sequence[Event]
    upcoming_events_with_attendees: Sequence[Event]
    upcoming_events_without_attendees: Sequence[Event]
    top_employees: Sequence[EmployeeAttendanceCount]
    window_days: int = UPCOMING_EVENT_DAYS


class HomeService:
    """Dashboard digest: events in the coming week and the most active employees."""

    def __init__(
        self,
        events: EventRepository,
        employees: EmployeeRepository,
        attendance: EmployeeEventRepository,
        *,
        window_days: int = UPCOMING_EVENT_DAYS,
        top_limit: int = TOP_EMPLOYEES_LIMIT,
    ):
        self._events = events
        self._employees = employees
        self._attendance = attendance
        self._window = timedelta(days=int(window_days))
        self._window_days = int(window_days)
        self._top_limit = int(top_limit)

    def build_home(
        self,
        *,
        now: Optional[datetime] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> HomeViewModel:
        now = now or now_local()
        window_end = now + self._window

        events = self._events.get_all(include_historic=False, now=now, cancel=cancel)
        # [now, now + window)
        upcoming = [e for e in events if now <= e.start_datetime < window_end]

        counts = self._attendance.get_attendee_counts([e.event_id for e in upcoming], cancel=cancel)
        with_attendees = [e for e in upcoming if counts.get(e.event_id, 0) > 0]
        without_attendees = [e for e in upcoming if counts.get(e.event_id, 0) == 0]

        top = self._employees.get_top_by_attendance(self._top_limit, cancel=cancel)

        return HomeViewModel(
            upcoming_events=upcoming,
            upcoming_events_with_attendees=with_attendees,
            upcoming_events_without_attendees=without_attendees,
            top_employees=list(top),
            window_days=self._window_days,
        )
