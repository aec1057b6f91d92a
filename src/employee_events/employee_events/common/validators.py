from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_form_datetime

T = TypeVar("T")


def _fail(field: str, message: str) -> ValidationError:
    return ValidationError(message, {field: [message]})


def require_non_empty(value: Optional[str], field: str, label: str) -> str:
    if not value or not value.strip():
        raise _fail(field, f"{label} is required.")
    return value.strip()


def require_max_length(value: str, field: str, label: str, max_len: int) -> str:
    if value is not None and len(value) > max_len:
        raise _fail(field, f"{label} must be at most {max_len} characters.")
    return value


def require_int(value: Optional[str], field: str, label: str, *, min_value: Optional[int] = None) -> int:
    raw = (value or "").strip()
    if not raw:
        raise _fail(field, f"{label} is required.")
    try:
        number = int(raw)
    except ValueError:
        raise _fail(field, f"{label} must be a whole number.")
    if min_value is not None and number < min_value:
        raise _fail(field, f"{label} must be at least {min_value}.")
    return number


def require_datetime(value: Optional[str], field: str, label: str) -> datetime:
    raw = require_non_empty(value, field, label)
    try:
        return parse_form_datetime(raw)
    except ValueError:
        raise _fail(field, f"{label} is not a valid date and time.")


def collect_errors(errors: dict[str, list[str]], check: Callable[..., T], *args: Any, **kwargs: Any) -> Optional[T]:
    """Run one field check; on failure merge its messages into ``errors`` and return None."""
    try:
        return check(*args, **kwargs)
    except ValidationError as e:
        for field, messages in e.errors.items():
            errors.setdefault(field, []).extend(messages)
        return None
