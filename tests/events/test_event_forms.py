from __future__ import annotations

from datetime import datetime

import pytest
from werkzeug.datastructures import MultiDict

from src.employee_events.employee_events.core.exceptions import ValidationError
from src.employee_events.employee_events.events.forms import parse_attendance_form, validate_event_form


def _form(**overrides):
    data = {
        "description": "Team lunch",
        "start_datetime": "2026-03-10T12:00",
        "end_datetime": "2026-03-10T13:30",
        "maximum_capacity": "8",
    }
    data.update(overrides)
    return data


def test_valid_form_gives_draft():
    draft = validate_event_form(_form(description="  Team lunch  "))

    assert draft.description == "Team lunch"
    assert draft.start_datetime == datetime(2026, 3, 10, 12, 0)
    assert draft.end_datetime == datetime(2026, 3, 10, 13, 30)
    assert draft.maximum_capacity == 8


def test_all_field_errors_are_reported_together():
    with pytest.raises(ValidationError) as exc:
        validate_event_form({"description": " ", "start_datetime": "", "end_datetime": "nope", "maximum_capacity": "x"})

    assert set(exc.value.errors) == {"description", "start_datetime", "end_datetime", "maximum_capacity"}


def test_end_before_start_is_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_event_form(_form(end_datetime="2026-03-10T11:00"))

    assert list(exc.value.errors) == ["end_datetime"]


def test_negative_capacity_is_rejected_but_zero_is_fine():
    with pytest.raises(ValidationError) as exc:
        validate_event_form(_form(maximum_capacity="-1"))
    assert "maximum_capacity" in exc.value.errors

    assert validate_event_form(_form(maximum_capacity="0")).maximum_capacity == 0


def test_description_length_limit():
    with pytest.raises(ValidationError) as exc:
        validate_event_form(_form(description="x" * 256))

    assert "description" in exc.value.errors


def test_attendance_checkbox_pairs():
    form = MultiDict(
        [
            ("description", "ignored"),
            ("employee_attendance[1]", "false"),
            ("employee_attendance[1]", "true"),
            ("employee_attendance[2]", "false"),
            ("employee_attendance[3]", "on"),
        ]
    )

    assert parse_attendance_form(form) == {1: True, 2: False, 3: True}


def test_any_truthy_value_marks_attendance_regardless_of_order():
    form = MultiDict([("employee_attendance[4]", "true"), ("employee_attendance[4]", "false")])

    assert parse_attendance_form(form) == {4: True}


def test_attendance_with_bad_employee_id():
    with pytest.raises(ValidationError) as exc:
        parse_attendance_form(MultiDict([("employee_attendance[abc]", "true")]))

    assert "employee_attendance" in exc.value.errors


def test_no_attendance_fields_means_nobody():
    assert parse_attendance_form(MultiDict([("description", "x")])) == {}
