"""
MySQL dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import DialectCapabilities


class MySQLDialect:
    """
    MySQL dialect using percent-style placeholders and backtick quoting.
    """

    name: Final[str] = "mysql"
    param_style: Final[str] = "pyformat"
    explain_prefix: Final[str] = "EXPLAIN"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_savepoints=True,
        supports_explain=True,
    )

    def quote_identifier(self, identifier: str) -> str:
        escaped = identifier.replace("`", "``")
        return f"`{escaped}`"

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "%s"

    def explain_sql(self, sql: str) -> str:
        return f"{self.explain_prefix} {sql}"
