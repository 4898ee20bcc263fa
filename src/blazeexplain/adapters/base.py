"""
Adapter protocol definitions for BlazeExplain.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Iterable, Protocol, Sequence

from ..dialects.base import Dialect
from ..security.dsns import DSNConfig, parse_dsn
from ..utils.parsing import parse_bool, parse_float, parse_int


class AdapterError(RuntimeError):
    """Base error for adapter-related failures."""


class AdapterConfigurationError(AdapterError):
    """Raised when configuration or required dependencies are invalid."""


class AdapterConnectionError(AdapterError):
    """Raised when establishing or using a connection fails."""


class AdapterExecutionError(AdapterError):
    """Raised when SQL execution, EXPLAIN or parameter validation fails."""


class AdapterTransactionError(AdapterError):
    """Raised when transaction operations fail."""


def _pop_bool(query: dict[str, str], key: str) -> bool | None:
    if key not in query:
        return None
    return parse_bool(query.pop(key), key=key, error=AdapterConfigurationError)


def _pop_float(query: dict[str, str], key: str) -> float | None:
    if key not in query:
        return None
    return parse_float(query.pop(key), key=key, error=AdapterConfigurationError)


def _parse_option_values(query: dict[str, str]) -> dict[str, Any]:
    options: dict[str, Any] = {}
    for key, value in query.items():
        if key == "connect_timeout":
            options[key] = parse_int(value, key=key, error=AdapterConfigurationError)
        else:
            options[key] = value
    return options


@dataclass
class ConnectionConfig:
    """
    Normalized connection configuration for adapters.
    """

    url: str
    autocommit: bool = False
    isolation_level: str | None = None
    timeout: float | None = None
    options: dict[str, Any] | None = None
    dsn: DSNConfig | None = None
    source: str | None = None

    @classmethod
    def from_dsn(cls, dsn: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a connection config by parsing the DSN string. Keyword arguments
        override values found in the query string.
        """

        parsed = parse_dsn(dsn)
        query = dict(parsed.query)

        parsed_autocommit = _pop_bool(query, "autocommit")
        parsed_timeout = _pop_float(query, "timeout")
        parsed_isolation_level = query.pop("isolation_level", None)

        options = _parse_option_values(query)
        options.update(kwargs.pop("options", None) or {})

        autocommit = kwargs.pop("autocommit", parsed_autocommit)
        return cls(
            url=dsn,
            dsn=parsed,
            autocommit=bool(autocommit),
            isolation_level=kwargs.pop("isolation_level", parsed_isolation_level),
            timeout=kwargs.pop("timeout", parsed_timeout),
            options=options or None,
            **kwargs,
        )

    @classmethod
    def from_env(cls, env_var: str, **kwargs: Any) -> "ConnectionConfig":
        value = os.getenv(env_var)
        if not value:
            raise AdapterConfigurationError(f"Environment variable {env_var} is not set")
        return cls.from_dsn(value, source=env_var, **kwargs)

    def redacted_dsn(self) -> str:
        """
        Return a DSN safe for logging (credentials removed).
        """

        if self.dsn:
            return self.dsn.redacted()
        return self.url

    def descriptive_label(self) -> str:
        redacted = self.redacted_dsn()
        if self.source:
            return f"{self.source} ({redacted})"
        return redacted


def count_pyformat_placeholders(sql: str) -> int:
    count = 0
    idx = 0
    while idx < len(sql) - 1:
        pair = sql[idx : idx + 2]
        if pair == "%s":
            count += 1
            idx += 2
        elif pair == "%%":
            idx += 2
        else:
            idx += 1
    return count


def validate_pyformat_params(sql: str, params: Sequence[Any]) -> None:
    placeholder_count = count_pyformat_placeholders(sql)
    if placeholder_count == 0:
        if params:
            raise AdapterExecutionError(
                "Parameters provided but SQL statement has no placeholders."
            )
        return
    if placeholder_count != len(params):
        raise AdapterExecutionError(
            f"Parameter count mismatch: expected {placeholder_count}, received {len(params)}."
        )


def render_bordered_table(
    columns: Sequence[str], rows: Iterable[Sequence[Any]], *, footer: str | None = None
) -> str:
    """
    Render rows the way the mysql command-line client prints result sets.
    Numbers are right aligned, everything else left aligned, ``None`` is NULL.
    """

    materialized = [list(row) for row in rows]

    def cell(value: Any) -> str:
        return "NULL" if value is None else str(value)

    widths = [
        max([len(str(name))] + [len(cell(row[idx])) for row in materialized])
        for idx, name in enumerate(columns)
    ]
    separator = "+" + "+".join("-" * (width + 2) for width in widths) + "+"
    lines = [
        separator,
        "| " + " | ".join(str(name).ljust(width) for name, width in zip(columns, widths)) + " |",
        separator,
    ]
    for row in materialized:
        cells = []
        for value, width in zip(row, widths):
            text = cell(value)
            numeric = isinstance(value, (int, float)) and not isinstance(value, bool)
            cells.append(text.rjust(width) if numeric else text.ljust(width))
        lines.append("| " + " | ".join(cells) + " |")
    lines.append(separator)
    if footer:
        lines.append(footer)
    return "\n".join(lines)


class DatabaseAdapter(Protocol):
    """
    Adapter interface exposing database operations used by higher layers.
    """

    dialect: Dialect

    @property
    def connection_id(self) -> int | None:
        """
        Identifier of the live connection, ``None`` when disconnected.
        """

    def connect(self, config: ConnectionConfig) -> Any:
        """
        Establish a connection handle using the supplied configuration.
        """

    def close(self) -> None:
        """
        Close underlying resources. Implementations should be idempotent.
        """

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> Any:
        """
        Execute a single SQL statement returning a cursor-like object.
        """

    def executemany(self, sql: str, seq_of_params: Sequence[Sequence[Any]]) -> Any:
        """
        Execute a prepared statement against multiple parameter sets.
        """

    def explain(self, sql: str, params: Sequence[Any] | None = None) -> str:
        """
        Return the engine's query plan for ``sql`` as display text.
        """

    def begin(self) -> None:
        """
        Start a transaction.
        """

    def commit(self) -> None:
        """
        Commit the current transaction context.
        """

    def rollback(self) -> None:
        """
        Roll back the current transaction context.
        """

    def last_insert_id(self, cursor: Any, table: str, pk_column: str) -> Any:
        """
        Retrieve the primary key value generated by the previous insert.
        """
