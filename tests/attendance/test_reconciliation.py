from __future__ import annotations

import pytest

from src.employee_events.employee_events.attendance.reconciliation import (
    AttendanceChanges,
    attending_ids,
    plan_attendance_changes,
)
from src.employee_events.employee_events.core.exceptions import CapacityExceededError, ValidationError


def test_over_capacity_is_rejected_with_count_and_limit():
    with pytest.raises(CapacityExceededError) as exc:
        plan_attendance_changes(desired={1: True, 2: True, 3: True}, current={1, 2}, capacity=2)

    assert exc.value.attending == 3
    assert exc.value.capacity == 2
    assert "3 > 2" in str(exc.value)
    assert exc.value.errors == {"maximum_capacity": [str(exc.value)]}


def test_capacity_error_is_a_validation_error():
    assert issubclass(CapacityExceededError, ValidationError)


def test_swap_one_attendee():
    changes = plan_attendance_changes(desired={1: True, 3: True}, current={1, 2}, capacity=5)

    assert changes.to_remove == {2}
    assert changes.to_add == {3}
    assert changes.apply_to({1, 2}) == {1, 3}


def test_explicit_false_removes_current_attendee():
    changes = plan_attendance_changes(desired={1: True, 2: False}, current={1, 2}, capacity=5)

    assert changes.to_remove == {2}
    assert changes.to_add == frozenset()


def test_same_state_is_a_no_op():
    current = {4, 5, 6}
    changes = plan_attendance_changes(desired={i: True for i in current}, current=current, capacity=3)

    assert changes == AttendanceChanges(to_remove=frozenset(), to_add=frozenset())
    assert changes.is_empty


def test_empty_desired_removes_everyone():
    changes = plan_attendance_changes(desired={}, current={1, 2, 3}, capacity=0)

    assert changes.to_remove == {1, 2, 3}
    assert changes.to_add == frozenset()


def test_zero_capacity_rejects_any_attendee():
    with pytest.raises(CapacityExceededError):
        plan_attendance_changes(desired={1: True}, current=set(), capacity=0)

    changes = plan_attendance_changes(desired={1: False, 2: False}, current=set(), capacity=0)
    assert changes.is_empty


def test_false_entries_do_not_count_towards_capacity():
    changes = plan_attendance_changes(desired={1: True, 2: False, 3: False}, current=set(), capacity=1)

    assert changes.to_add == {1}


@pytest.mark.parametrize(
    "current, desired",
    [
        ({1, 2}, {1: True, 3: True}),
        (set(), {1: True, 2: True}),
        ({1, 2, 3}, {2: False}),
        ({7}, {7: True, 8: False, 9: True}),
    ],
)
def test_result_matches_desired_attendees(current, desired):
    changes = plan_attendance_changes(desired=desired, current=current, capacity=10)

    assert changes.apply_to(current) == attending_ids(desired)
    assert not (changes.to_add & changes.to_remove)
