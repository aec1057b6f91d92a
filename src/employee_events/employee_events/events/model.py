from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Event:
    """Domain entity: Event."""

    event_id: int
    description: str
    start_datetime: datetime
    end_datetime: datetime
    maximum_capacity: int

    def is_historic(self, now: datetime) -> bool:
        """An event is historic once its start time has passed."""
        return self.start_datetime < now


@dataclass(frozen=True)
class EventDraft:
    """Validated event fields, without identity (create/update payload)."""

    description: str
    start_datetime: datetime
    end_datetime: datetime
    maximum_capacity: int

    def with_id(self, event_id: int) -> Event:
        return Event(
            event_id=int(event_id),
            description=self.description,
            start_datetime=self.start_datetime,
            end_datetime=self.end_datetime,
            maximum_capacity=self.maximum_capacity,
        )
