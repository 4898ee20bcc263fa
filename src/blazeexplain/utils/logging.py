"""Structured logging helpers for BlazeExplain."""

from __future__ import annotations

import logging
import os
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

ROOT_LOGGER = "blazeexplain"
LOG_LEVEL_ENV = "BLAZE_EXPLAIN_LOG_LEVEL"

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def _level_from_env(default: int) -> int:
    raw = os.getenv(LOG_LEVEL_ENV)
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.strip().upper())
    if isinstance(level, int):
        return level
    raise ValueError(f"Invalid log level in {LOG_LEVEL_ENV}: {raw!r}")


def configure_logging(level: int | None = None) -> None:
    """
    Attach the package handler once. Later calls are no-ops so applications
    can install their own handlers first.
    """

    logger = logging.getLogger(ROOT_LOGGER)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)
    logger.setLevel(level if level is not None else _level_from_env(logging.INFO))


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def set_correlation_id(value: Optional[str] = None) -> str:
    token = value or str(uuid.uuid4())
    _correlation_id.set(token)
    return token


def get_correlation_id() -> str:
    cid = _correlation_id.get()
    if cid is None:
        cid = set_correlation_id()
    return cid


@contextmanager
def correlation_scope(value: Optional[str] = None) -> Iterator[str]:
    """Bind a correlation id for the duration of the block."""

    token = _correlation_id.set(value or str(uuid.uuid4()))
    try:
        yield _correlation_id.get() or ""
    finally:
        _correlation_id.reset(token)
