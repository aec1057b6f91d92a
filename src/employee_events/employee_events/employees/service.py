from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..attendance.repository import EmployeeEventRepository
from ..common.cancellation import CancellationToken
from ..core.exceptions import NotFoundError
from ..events.model import Event
from .model import Employee
from .repository import EmployeeRepository


@dataclass(frozen=True)
class EmployeeListViewModel:
    employees: Sequence[Employee]


@dataclass(frozen=True)
class EmployeeDetailsViewModel:
    employee: Employee
    events: Sequence[Event]


class EmployeeService:
    """Use case: browse employees and the events they attend (read-only)."""

    def __init__(self, employees: EmployeeRepository, attendance: EmployeeEventRepository):
        self._employees = employees
        self._attendance = attendance

    def list_employees(self, *, cancel: Optional[CancellationToken] = None) -> EmployeeListViewModel:
        return EmployeeListViewModel(employees=list(self._employees.get_all(cancel=cancel)))

    def get_details(self, employee_id: int, *, cancel: Optional[CancellationToken] = None) -> EmployeeDetailsViewModel:
        employee = self._employees.get_by_id(employee_id, cancel=cancel)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")

        events = self._attendance.get_events_for_employee(employee.employee_id, cancel=cancel)
        return EmployeeDetailsViewModel(employee=employee, events=list(events))
