from __future__ import annotations

import threading
import time
from typing import Optional

from ..core.exceptions import OperationCancelledError


class CancellationToken:
    """Cooperative cancellation signal for one request.

    A token is cancelled either explicitly via :meth:`cancel` or once its
    deadline (``time.monotonic()`` based) has passed. Repositories check it
    before every store call and before committing.
    """

    def __init__(self, *, deadline: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: Optional[float]) -> "CancellationToken":
        if not seconds:
            return cls()
        return cls(deadline=time.monotonic() + float(seconds))

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise OperationCancelledError("Operation was cancelled")


def raise_if_cancelled(cancel: Optional[CancellationToken]) -> None:
    if cancel is not None:
        cancel.raise_if_cancelled()
