"""
SQLite dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import DialectCapabilities


class SQLiteDialect:
    """
    SQLite dialect using qmark params and ``EXPLAIN QUERY PLAN``.
    """

    name: Final[str] = "sqlite"
    param_style: Final[str] = "qmark"
    explain_prefix: Final[str] = "EXPLAIN QUERY PLAN"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_savepoints=True,
        supports_explain=True,
    )

    def quote_identifier(self, identifier: str) -> str:
        escaped = identifier.replace('"', '""')
        return f'"{escaped}"'

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "?"

    def explain_sql(self, sql: str) -> str:
        return f"{self.explain_prefix} {sql}"
