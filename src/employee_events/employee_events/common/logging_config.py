import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from .request_id_filter import RequestIdFilter

LOG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(request_id)s - %(message)s"

# Parent of every module logger, whatever prefix the package is imported under.
APP_LOGGER_NAME = __name__.rsplit(".", 2)[0]
MAX_LOG_SIZE_BYTES = 10 * 1024 * 1024  # 10MB


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    """Configure the application logger (console, plus a rotating file when ``log_dir`` is set)."""
    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # create_app can run several times in one process (tests).
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    request_id_filter = RequestIdFilter()
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(request_id_filter)
    logger.addHandler(console_handler)

    if log_dir:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "application.log"), maxBytes=MAX_LOG_SIZE_BYTES, backupCount=5
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(request_id_filter)
        logger.addHandler(file_handler)

    return logger
