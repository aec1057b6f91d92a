from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.cancellation import CancellationToken
from .model import Employee, EmployeeAttendanceCount, EmployeeDraft


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def exists(self, employee_id: int, *, cancel: Optional[CancellationToken] = None) -> bool:
        raise NotImplementedError

    def get_by_id(self, employee_id: int, *, cancel: Optional[CancellationToken] = None) -> Optional[Employee]:
        raise NotImplementedError

    def get_all(self, *, cancel: Optional[CancellationToken] = None) -> Sequence[Employee]:
        """All employees ordered by last name, then first name."""

        raise NotImplementedError

    def create(self, draft: EmployeeDraft, *, cancel: Optional[CancellationToken] = None) -> Employee:
        raise NotImplementedError

    def update(self, employee: Employee, *, cancel: Optional[CancellationToken] = None) -> bool:
        raise NotImplementedError

    def delete(self, employee_id: int, *, cancel: Optional[CancellationToken] = None) -> bool:
        """Delete the employee and their attendance rows."""

        raise NotImplementedError

    def get_top_by_attendance(
        self, limit: int, *, cancel: Optional[CancellationToken] = None
    ) -> Sequence[EmployeeAttendanceCount]:
        """Employees with their lifetime attendance count, highest first.

        Ties are ordered by employee_id ascending.
        """

        raise NotImplementedError
