"""
PostgreSQL database adapter implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from ..dialects.postgres import PostgresDialect
from ..utils import get_logger
from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterExecutionError,
    ConnectionConfig,
    DatabaseAdapter,
    validate_pyformat_params,
)


def _load_driver():
    try:
        import psycopg

        return psycopg
    except ImportError:
        return None


@dataclass
class PostgresConnectionState:
    connection: Any
    config: ConnectionConfig
    driver: Any


def render_query_plan(header: str, lines: Sequence[str]) -> str:
    """
    Format EXPLAIN output the way psql prints a single-column result.
    """

    # one char of padding on each side
    width = max([len(header)] + [len(line) for line in lines]) + 2
    rendered = [header.center(width).rstrip(), "-" * width]
    rendered.extend(f" {line}" for line in lines)
    label = "row" if len(lines) == 1 else "rows"
    rendered.append(f"({len(lines)} {label})")
    return "\n".join(rendered)


class PostgresAdapter(DatabaseAdapter):
    """
    Adapter wrapping the psycopg PostgreSQL driver.
    """

    def __init__(self) -> None:
        self.dialect = PostgresDialect()
        self._state: PostgresConnectionState | None = None
        self.logger = get_logger("adapters.postgres")

    def connect(self, config: ConnectionConfig) -> Any:
        driver = _load_driver()
        if driver is None:
            raise AdapterConfigurationError("psycopg is required to use PostgresAdapter.")

        options = dict(config.options or {})
        if config.timeout and "connect_timeout" not in options:
            options["connect_timeout"] = int(config.timeout)

        self.logger.info(
            "Connecting to PostgreSQL %s (autocommit=%s)",
            config.descriptive_label(),
            config.autocommit,
        )

        try:
            connection = driver.connect(config.url, **options)
        except Exception as exc:
            raise AdapterConnectionError("Failed to connect to PostgreSQL.") from exc
        connection.autocommit = bool(config.autocommit)
        if config.isolation_level:
            setattr(connection, "isolation_level", config.isolation_level)

        self._state = PostgresConnectionState(connection, config, driver)
        return connection

    def close(self) -> None:
        if self._state:
            try:
                self._state.connection.close()
            finally:
                self._state = None

    @property
    def connection_id(self) -> int | None:
        if not self._state:
            return None
        return id(self._state.connection)

    def _ensure_connection(self):
        if not self._state:
            raise AdapterConnectionError("PostgresAdapter is not connected.")
        conn = self._state.connection
        if getattr(conn, "closed", False):
            self.logger.warning("PostgreSQL connection closed; reconnecting.")
            conn = self.connect(self._state.config)
        return conn

    def execute(self, sql: str, params: Sequence[Any] | None = None):
        connection = self._ensure_connection()
        cursor = connection.cursor()
        params = tuple(params or ())
        validate_pyformat_params(sql, params)
        cursor.execute(sql, params)
        return cursor

    def executemany(
        self,
        sql: str,
        seq_of_params: Sequence[Sequence[Any]] | Iterable[Sequence[Any]],
    ):
        connection = self._ensure_connection()
        cursor = connection.cursor()
        seq = list(seq_of_params)
        for params in seq:
            validate_pyformat_params(sql, params)
        cursor.executemany(sql, seq)
        return cursor

    def explain(self, sql: str, params: Sequence[Any] | None = None) -> str:
        try:
            cursor = self.execute(self.dialect.explain_sql(sql), params)
            rows = cursor.fetchall()
        except AdapterExecutionError:
            raise
        except Exception as exc:
            raise AdapterExecutionError("EXPLAIN failed for PostgreSQL statement.") from exc
        header = "QUERY PLAN"
        if getattr(cursor, "description", None):
            header = str(cursor.description[0][0])
        return render_query_plan(header, [str(row[0]) for row in rows])

    def begin(self) -> None:
        if self._state and getattr(self._state.connection, "autocommit", False):
            return
        connection = self._ensure_connection()
        connection.cursor().execute("BEGIN")

    def commit(self) -> None:
        connection = self._ensure_connection()
        connection.commit()

    def rollback(self) -> None:
        connection = self._ensure_connection()
        connection.rollback()

    def last_insert_id(self, cursor: Any, table: str, pk_column: str) -> Any:
        row = cursor.fetchone()
        if not row:
            raise AdapterExecutionError("No RETURNING data available for last insert id.")
        return row[0]
