from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Plain data object (no DB access code).
    """

    employee_id: int
    first_name: str
    last_name: str
    date_of_birth: date
    favourite_drink: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class EmployeeDraft:
    first_name: str
    last_name: str
    date_of_birth: date
    favourite_drink: Optional[str] = None


@dataclass(frozen=True)
class EmployeeAttendanceCount:
    """Read-model for the home page ranking."""

    employee: Employee
    events_attended: int
