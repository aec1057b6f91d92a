from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.constants import FORM_DATETIME_FORMAT


def parse_form_datetime(value: str) -> datetime:
    """Parse a ``datetime-local`` input value (YYYY-MM-DDTHH:MM)."""
    value = value.strip()
    try:
        return datetime.strptime(value, FORM_DATETIME_FORMAT)
    except ValueError:
        # Browsers may submit seconds too.
        return datetime.strptime(value, FORM_DATETIME_FORMAT + ":%S")


def format_form_datetime(value: Optional[datetime]) -> str:
    return value.strftime(FORM_DATETIME_FORMAT) if value else ""


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
