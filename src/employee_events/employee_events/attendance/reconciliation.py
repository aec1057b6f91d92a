"""Attendance reconciliation for the event edit flow.

Given the attendance submitted for an event (employee id -> attending flag)
and the attendees currently stored, work out which rows to delete and which to
insert, refusing the whole change when it would exceed the event's capacity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Mapping

from ..core.exceptions import CapacityExceededError


@dataclass(frozen=True)
class AttendanceChanges:
    to_remove: frozenset[int]
    to_add: frozenset[int]

    @property
    def is_empty(self) -> bool:
        return not self.to_remove and not self.to_add

    def apply_to(self, current: AbstractSet[int]) -> frozenset[int]:
        """Attendee set after applying the changes (removals first)."""
        return frozenset((set(current) - self.to_remove) | self.to_add)


def attending_ids(desired: Mapping[int, bool]) -> frozenset[int]:
    return frozenset(int(employee_id) for employee_id, attending in desired.items() if attending is True)


def plan_attendance_changes(
    *,
    desired: Mapping[int, bool],
    current: Iterable[int],
    capacity: int,
) -> AttendanceChanges:
    """Compute the minimal removals/additions to reach ``desired``.

    Raises ``CapacityExceededError`` when more employees are marked as
    attending than ``capacity`` allows; nothing should be written then.
    """
    attending = attending_ids(desired)
    if len(attending) > int(capacity):
        raise CapacityExceededError(attending=len(attending), capacity=int(capacity))

    current_ids = frozenset(int(employee_id) for employee_id in current)
    return AttendanceChanges(
        to_remove=current_ids - attending,
        to_add=attending - current_ids,
    )
