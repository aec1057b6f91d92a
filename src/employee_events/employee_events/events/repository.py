from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..common.cancellation import CancellationToken
from .model import Event, EventDraft


class EventRepository(Protocol):
    def exists(self, event_id: int, *, cancel: Optional[CancellationToken] = None) -> bool:
        raise NotImplementedError

    def get_by_id(self, event_id: int, *, cancel: Optional[CancellationToken] = None) -> Optional[Event]:
        raise NotImplementedError

    def get_all(
        self,
        *,
        include_historic: bool,
        now: datetime,
        cancel: Optional[CancellationToken] = None,
    ) -> Sequence[Event]:
        """Events ordered by start time.

        Events starting before ``now`` are skipped unless ``include_historic``.
        """

        raise NotImplementedError

    def create(self, draft: EventDraft, *, cancel: Optional[CancellationToken] = None) -> Event:
        raise NotImplementedError

    def update(self, event: Event, *, cancel: Optional[CancellationToken] = None) -> bool:
        raise NotImplementedError

    def update_with_attendance(
        self,
        event: Event,
        *,
        remove: Iterable[int],
        add: Iterable[int],
        cancel: Optional[CancellationToken] = None,
    ) -> bool:
        """Update the event row and its attendance rows in one transaction.

        Removals run before additions. Returns False, writing nothing, when the
        event no longer exists.
        """

        raise NotImplementedError

    def delete(self, event_id: int, *, cancel: Optional[CancellationToken] = None) -> bool:
        """Delete the event and its attendance rows."""

        raise NotImplementedError
