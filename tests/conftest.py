from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional

import pytest

from src.employee_events.employee_events.attendance.model import EmployeeEvent
from src.employee_events.employee_events.common.cancellation import raise_if_cancelled
from src.employee_events.employee_events.container import Container
from src.employee_events.employee_events.employees.model import Employee, EmployeeAttendanceCount, EmployeeDraft
from src.employee_events.employee_events.employees.service import EmployeeService
from src.employee_events.employee_events.events.model import Event, EventDraft
from src.employee_events.employee_events.events.service import EventService
from src.employee_events.employee_events.home.service import HomeService
from src.employee_events.employee_events.main import create_app


class InMemoryStore:
    """Shared tables behind the in-memory repositories."""

    def __init__(self):
        self.employees: dict[int, Employee] = {}
        self.events: dict[int, Event] = {}
        self.attendance: set[tuple[int, int]] = set()  # (employee_id, event_id)
        self.writes: list[str] = []
        self._next_event_id = 1
        self._next_employee_id = 1

    def add_employee(self, employee_id: int, first_name: str, last_name: str, favourite_drink=None) -> Employee:
        employee = Employee(
            employee_id=employee_id,
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date(1990, 1, 1),
            favourite_drink=favourite_drink,
        )
        self.employees[employee_id] = employee
        self._next_employee_id = max(self._next_employee_id, employee_id + 1)
        return employee

    def add_event(
        self,
        event_id: int,
        description: str,
        start: datetime,
        end: Optional[datetime] = None,
        capacity: int = 10,
    ) -> Event:
        event = Event(
            event_id=event_id,
            description=description,
            start_datetime=start,
            end_datetime=end or start,
            maximum_capacity=capacity,
        )
        self.events[event_id] = event
        self._next_event_id = max(self._next_event_id, event_id + 1)
        return event

    def attend(self, employee_id: int, event_id: int) -> None:
        self.attendance.add((employee_id, event_id))

    def attendees_of(self, event_id: int) -> set[int]:
        return {emp for emp, ev in self.attendance if ev == event_id}


class InMemoryEmployees:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def exists(self, employee_id: int, *, cancel=None) -> bool:
        raise_if_cancelled(cancel)
        return employee_id in self._store.employees

    def get_by_id(self, employee_id: int, *, cancel=None) -> Optional[Employee]:
        raise_if_cancelled(cancel)
        return self._store.employees.get(employee_id)

    def get_all(self, *, cancel=None):
        raise_if_cancelled(cancel)
        return sorted(self._store.employees.values(), key=lambda e: (e.last_name, e.first_name, e.employee_id))

    def create(self, draft: EmployeeDraft, *, cancel=None) -> Employee:
        raise_if_cancelled(cancel)
        employee = Employee(employee_id=self._store._next_employee_id, **draft.__dict__)
        self._store.employees[employee.employee_id] = employee
        self._store._next_employee_id += 1
        return employee

    def update(self, employee: Employee, *, cancel=None) -> bool:
        raise_if_cancelled(cancel)
        if employee.employee_id not in self._store.employees:
            return False
        self._store.employees[employee.employee_id] = employee
        return True

    def delete(self, employee_id: int, *, cancel=None) -> bool:
        raise_if_cancelled(cancel)
        self._store.attendance = {(emp, ev) for emp, ev in self._store.attendance if emp != employee_id}
        return self._store.employees.pop(employee_id, None) is not None

    def get_top_by_attendance(self, limit: int, *, cancel=None):
        raise_if_cancelled(cancel)
        counts: dict[int, int] = {}
        for emp, _ in self._store.attendance:
            counts[emp] = counts.get(emp, 0) + 1
        ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))[:limit]
        return [EmployeeAttendanceCount(employee=self._store.employees[emp], events_attended=n) for emp, n in ranked]


class InMemoryEvents:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def exists(self, event_id: int, *, cancel=None) -> bool:
        raise_if_cancelled(cancel)
        return event_id in self._store.events

    def get_by_id(self, event_id: int, *, cancel=None) -> Optional[Event]:
        raise_if_cancelled(cancel)
        return self._store.events.get(event_id)

    def get_all(self, *, include_historic: bool, now: datetime, cancel=None):
        raise_if_cancelled(cancel)
        events = [e for e in self._store.events.values() if include_historic or e.start_datetime >= now]
        return sorted(events, key=lambda e: (e.start_datetime, e.event_id))

    def create(self, draft: EventDraft, *, cancel=None) -> Event:
        raise_if_cancelled(cancel)
        event = draft.with_id(self._store._next_event_id)
        self._store._next_event_id += 1
        self._store.events[event.event_id] = event
        self._store.writes.append(f"create_event:{event.event_id}")
        return event

    def update(self, event: Event, *, cancel=None) -> bool:
        raise_if_cancelled(cancel)
        if event.event_id not in self._store.events:
            return False
        self._store.events[event.event_id] = event
        self._store.writes.append(f"update_event:{event.event_id}")
        return True

    def update_with_attendance(self, event: Event, *, remove: Iterable[int], add: Iterable[int], cancel=None) -> bool:
        # checked again before applying, the way db_cursor checks before commit
        raise_if_cancelled(cancel)
        if event.event_id not in self._store.events:
            return False
        remove_rows = {(emp, event.event_id) for emp in remove}
        add_rows = {(emp, event.event_id) for emp in add}
        raise_if_cancelled(cancel)
        self._store.events[event.event_id] = event
        self._store.attendance = (self._store.attendance - remove_rows) | add_rows
        self._store.writes.append(f"update_with_attendance:{event.event_id}")
        return True

    def delete(self, event_id: int, *, cancel=None) -> bool:
        raise_if_cancelled(cancel)
        self._store.attendance = {(emp, ev) for emp, ev in self._store.attendance if ev != event_id}
        self._store.writes.append(f"delete_event:{event_id}")
        return self._store.events.pop(event_id, None) is not None


class InMemoryAttendance:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def exists(self, employee_id: int, event_id: int, *, cancel=None) -> bool:
        raise_if_cancelled(cancel)
        return (employee_id, event_id) in self._store.attendance

    def create(self, employee_event: EmployeeEvent, *, cancel=None) -> EmployeeEvent:
        raise_if_cancelled(cancel)
        self._store.attendance.add((employee_event.employee_id, employee_event.event_id))
        return employee_event

    def create_many(self, employee_events: Iterable[EmployeeEvent], *, cancel=None) -> int:
        raise_if_cancelled(cancel)
        rows = [(ee.employee_id, ee.event_id) for ee in employee_events]
        self._store.attendance.update(rows)
        return len(rows)

    def delete(self, employee_id: int, event_id: int, *, cancel=None) -> bool:
        raise_if_cancelled(cancel)
        key = (employee_id, event_id)
        if key not in self._store.attendance:
            return False
        self._store.attendance.remove(key)
        return True

    def delete_many(self, employee_ids: Iterable[int], event_id: int, *, cancel=None) -> int:
        raise_if_cancelled(cancel)
        return sum(1 for emp in list(employee_ids) if self.delete(emp, event_id))

    def apply_changes(self, event_id: int, *, remove: Iterable[int], add: Iterable[int], cancel=None) -> None:
        raise_if_cancelled(cancel)
        remove, add = set(remove), set(add)
        if not remove and not add:
            return
        self._store.attendance -= {(emp, event_id) for emp in remove}
        self._store.attendance |= {(emp, event_id) for emp in add}
        self._store.writes.append(f"apply_changes:{event_id}")

    def get_attendees(self, event_id: int, *, cancel=None):
        raise_if_cancelled(cancel)
        employees = [self._store.employees[emp] for emp in self._store.attendees_of(event_id)]
        return sorted(employees, key=lambda e: (e.last_name, e.first_name, e.employee_id))

    def get_attendee_counts(self, event_ids: Iterable[int], *, cancel=None):
        raise_if_cancelled(cancel)
        counts: dict[int, int] = {}
        wanted = set(event_ids)
        for _, ev in self._store.attendance:
            if ev in wanted:
                counts[ev] = counts.get(ev, 0) + 1
        return counts

    def get_events_for_employee(self, employee_id: int, *, cancel=None):
        raise_if_cancelled(cancel)
        events = [self._store.events[ev] for emp, ev in self._store.attendance if emp == employee_id]
        return sorted(events, key=lambda e: (e.start_datetime, e.event_id))


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def employees_repo(store):
    return InMemoryEmployees(store)


@pytest.fixture
def events_repo(store):
    return InMemoryEvents(store)


@pytest.fixture
def attendance_repo(store):
    return InMemoryAttendance(store)


@pytest.fixture
def event_service(events_repo, employees_repo, attendance_repo) -> EventService:
    return EventService(events_repo, employees_repo, attendance_repo)


@pytest.fixture
def home_service(events_repo, employees_repo, attendance_repo) -> HomeService:
    return HomeService(events_repo, employees_repo, attendance_repo)


@pytest.fixture
def employee_service(employees_repo, attendance_repo) -> EmployeeService:
    return EmployeeService(employees_repo, attendance_repo)


@pytest.fixture
def container(store, employees_repo, events_repo, attendance_repo, event_service, home_service, employee_service):
    return Container(
        conn=None,
        employees_repo=employees_repo,
        events_repo=events_repo,
        attendance_repo=attendance_repo,
        employee_service=employee_service,
        event_service=event_service,
        home_service=home_service,
    )


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()
