"""
Logging setup.

WHY: Every module logs through ``logging.getLogger(__name__)``. This module
configures the root handler once and stamps each record with the current
request id so lines from one request can be grepped together.
"""

import logging
from typing import Optional

from proposal_desk.core.config import settings
from proposal_desk.middleware.request_context import get_request_id


LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"


class RequestIdFilter(logging.Filter):
    """Attach the active request id (or "-") to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Safe to call more than once; the handler is only installed the first time.

    Args:
        level: Log level name; defaults to settings.LOG_LEVEL
    """
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())

    if any(getattr(h, "_proposal_desk", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    handler._proposal_desk = True
    root.addHandler(handler)
