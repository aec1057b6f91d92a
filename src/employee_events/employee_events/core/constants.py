"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

UPCOMING_EVENT_DAYS = 7
TOP_EMPLOYEES_LIMIT = 5
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30
DESCRIPTION_MAX_LENGTH = 255
FORM_DATETIME_FORMAT = "%Y-%m-%dT%H:%M"
