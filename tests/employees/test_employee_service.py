from datetime import timedelta

import pytest

from src.employee_events.employee_events.core.exceptions import NotFoundError


def test_list_employees_sorted_by_name(store, employee_service):
    store.add_employee(1, "Alan", "Turing")
    store.add_employee(2, "Ada", "Lovelace")

    model = employee_service.list_employees()

    assert [e.employee_id for e in model.employees] == [2, 1]


def test_details_list_attended_events_by_start(store, employee_service, fixed_now):
    store.add_employee(1, "Grace", "Hopper", favourite_drink="Tea")
    store.add_event(1, "Later", fixed_now + timedelta(days=5))
    store.add_event(2, "Sooner", fixed_now + timedelta(days=1))
    store.add_event(3, "Not attending", fixed_now + timedelta(days=2))
    store.attend(1, 1)
    store.attend(1, 2)

    model = employee_service.get_details(1)

    assert model.employee.full_name == "Grace Hopper"
    assert [e.description for e in model.events] == ["Sooner", "Later"]


def test_details_of_missing_employee(employee_service):
    with pytest.raises(NotFoundError):
        employee_service.get_details(99)
