"""
Logging setup shared by the API and the summarization pipeline.

Every record carries a ``request_id`` so that the racer, fallback and
rework lines emitted for one summarize call can be correlated.
"""

import logging
from contextvars import ContextVar
from typing import Optional

from docdigest.config import Settings

current_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(request_id)-12s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


class RequestIdFilter(logging.Filter):
    """Filter that adds request_id to log records."""

    def filter(self, record):
        request_id = current_request_id.get()
        record.request_id = request_id if request_id else "-"
        return True


def set_request_id(request_id: str):
    """Set the current request_id for logging context."""
    return current_request_id.set(request_id)


def clear_request_id(token=None):
    """Clear the current request_id, restoring the previous value if a token is given."""
    if token is not None:
        current_request_id.reset(token)
    else:
        current_request_id.set(None)


def configure_logging(settings: Settings) -> None:
    """Install a console handler on the package logger. Safe to call repeatedly."""
    global _configured
    logger = logging.getLogger("docdigest")
    logger.setLevel(settings.log_level.upper())
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(RequestIdFilter())
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True
