from __future__ import annotations

import re
from typing import Any, Mapping

from ..common.datetime_utils import format_form_datetime
from ..common.validators import collect_errors, require_datetime, require_int, require_max_length, require_non_empty
from ..core.constants import DESCRIPTION_MAX_LENGTH
from ..core.exceptions import ValidationError
from .model import Event, EventDraft

EVENT_FIELDS = ("description", "start_datetime", "end_datetime", "maximum_capacity")
ATTENDANCE_FIELD = "employee_attendance"

_ATTENDANCE_KEY = re.compile(r"^employee_attendance\[(?P<employee_id>[^\]]*)\]$")
_TRUTHY = {"true", "on", "1", "yes"}


def _description(value):
    value = require_non_empty(value, "description", "Description")
    return require_max_length(value, "description", "Description", DESCRIPTION_MAX_LENGTH)


def validate_event_form(form: Mapping[str, Any]) -> EventDraft:
    """Validate a submitted event form.

    Raises ``ValidationError`` carrying every field error at once.
    """
    errors: dict[str, list[str]] = {}

    description = collect_errors(errors, _description, form.get("description"))
    start = collect_errors(errors, require_datetime, form.get("start_datetime"), "start_datetime", "Start")
    end = collect_errors(errors, require_datetime, form.get("end_datetime"), "end_datetime", "End")
    capacity = collect_errors(
        errors, require_int, form.get("maximum_capacity"), "maximum_capacity", "Maximum capacity", min_value=0
    )

    if start is not None and end is not None and end < start:
        errors.setdefault("end_datetime", []).append("End must not be before start.")

    if errors:
        raise ValidationError("The event has invalid fields.", errors)

    return EventDraft(
        description=description,
        start_datetime=start,
        end_datetime=end,
        maximum_capacity=capacity,
    )


def parse_attendance_form(form: Mapping[str, Any]) -> dict[int, bool]:
    """Read ``employee_attendance[<id>]`` fields into ``{employee_id: attending}``.

    Each employee row posts a hidden ``false`` and, when ticked, a checkbox
    ``true``; any truthy value wins.
    """
    attendance: dict[int, bool] = {}
    for key in form.keys():
        m = _ATTENDANCE_KEY.match(key)
        if not m:
            continue

        raw_id = m.group("employee_id").strip()
        if not raw_id.isdigit():
            message = f"Unknown employee id {raw_id!r}."
            raise ValidationError(message, {ATTENDANCE_FIELD: [message]})

        values = form.getlist(key) if hasattr(form, "getlist") else [form.get(key)]
        attendance[int(raw_id)] = any(str(v).strip().lower() in _TRUTHY for v in values if v is not None)

    return attendance


def form_values(form: Mapping[str, Any]) -> dict[str, str]:
    """Raw submitted values, for re-rendering a rejected form."""
    return {name: str(form.get(name) or "") for name in EVENT_FIELDS}


def event_form_values(event: Event) -> dict[str, str]:
    return {
        "description": event.description,
        "start_datetime": format_form_datetime(event.start_datetime),
        "end_datetime": format_form_datetime(event.end_datetime),
        "maximum_capacity": str(event.maximum_capacity),
    }
