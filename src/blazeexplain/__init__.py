"""
BlazeExplain public package initialization.

Exposes the session, adapters and the auto-explain primitives.
"""

from .adapters import (  # noqa: F401
    AdapterError,
    AdapterExecutionError,
    ConnectionConfig,
    MySQLAdapter,
    PostgresAdapter,
    SQLiteAdapter,
)
from .core import Column, Statement  # noqa: F401
from .explain import (  # noqa: F401
    AutoExplainer,
    ExplainConfigurationError,
    ExplainError,
    ExplainSettings,
)
from .notifications import SQL_EVENT, Notifier, SQLEvent  # noqa: F401
from .persistence import Session  # noqa: F401
from .utils import configure_logging  # noqa: F401

__all__ = [
    "AdapterError",
    "AdapterExecutionError",
    "AutoExplainer",
    "Column",
    "ConnectionConfig",
    "ExplainConfigurationError",
    "ExplainError",
    "ExplainSettings",
    "MySQLAdapter",
    "Notifier",
    "PostgresAdapter",
    "SQL_EVENT",
    "SQLEvent",
    "SQLiteAdapter",
    "Session",
    "Statement",
    "configure_logging",
]
