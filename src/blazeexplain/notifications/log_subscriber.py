"""
Debug logging of every statement that passes through the notifier.
"""

from __future__ import annotations

import logging

from ..core.binds import column_name
from ..security.redaction import redact_bind
from ..utils import get_logger
from .events import SQLEvent


class SQLLogSubscriber:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or get_logger("sql")

    def __call__(self, event: SQLEvent) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        binds = [
            (column_name(column), redact_bind(column_name(column), value))
            for column, value in event.binds
        ]
        self.logger.debug(
            "%s (%.1fms) %s",
            event.name,
            event.duration_ms,
            event.sql,
            extra={
                "sql": event.sql,
                "params": binds,
                "elapsed_ms": event.duration_ms,
                "failed": event.exception is not None,
            },
        )
