import logging
from uuid import uuid4

from flask import g, has_request_context


class RequestIdFilter(logging.Filter):
    """Adds the current request ID to the log record if there is one."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id() or "-"
        return True


def new_request_id() -> str:
    return uuid4().hex[:10]


def current_request_id():
    if has_request_context():
        return getattr(g, "request_id", None)
    return None
