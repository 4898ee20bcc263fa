"""
MySQL database adapter implementation.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from ..dialects.mysql import MySQLDialect
from ..utils import get_logger
from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterExecutionError,
    ConnectionConfig,
    DatabaseAdapter,
    render_bordered_table,
    validate_pyformat_params,
)


def _load_driver():
    try:
        import pymysql  # type: ignore[import-untyped]

        return pymysql
    except ImportError:
        try:
            import MySQLdb

            return MySQLdb
        except ImportError:
            return None


@dataclass
class MySQLConnectionState:
    connection: Any
    config: ConnectionConfig
    driver: Any


class MySQLAdapter(DatabaseAdapter):
    """
    Adapter wrapping a MySQL DB-API driver (PyMySQL or mysqlclient).
    """

    def __init__(self) -> None:
        self.dialect = MySQLDialect()
        self._state: MySQLConnectionState | None = None
        self.logger = get_logger("adapters.mysql")

    def connect(self, config: ConnectionConfig) -> Any:
        driver = _load_driver()
        if driver is None:
            raise AdapterConfigurationError(
                "PyMySQL or mysqlclient is required to use MySQLAdapter."
            )
        if not config.dsn:
            raise AdapterConfigurationError(
                "ConnectionConfig must be built from a DSN for MySQL connections."
            )

        options = dict(config.options or {})
        if config.timeout and "connect_timeout" not in options:
            options["connect_timeout"] = int(config.timeout)

        self.logger.info(
            "Connecting to MySQL %s (autocommit=%s)",
            config.descriptive_label(),
            config.autocommit,
        )

        dsn = config.dsn
        connect_kwargs = {
            "host": dsn.host or "localhost",
            "user": dsn.username,
            "password": dsn.password,
            "database": dsn.database,
            **options,
        }
        if dsn.port:
            connect_kwargs["port"] = dsn.port

        try:
            connection = driver.connect(**connect_kwargs)
        except Exception as exc:
            raise AdapterConnectionError("Failed to connect to MySQL.") from exc
        if hasattr(connection, "autocommit"):
            connection.autocommit(config.autocommit)

        self._state = MySQLConnectionState(connection, config, driver)
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
            raise AdapterConnectionError("MySQLAdapter is not connected.")
        conn = self._state.connection
        if getattr(conn, "closed", False):
            self.logger.warning("MySQL connection closed; reconnecting.")
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
        start = time.monotonic()
        try:
            cursor = self.execute(self.dialect.explain_sql(sql), params)
            rows = cursor.fetchall()
        except AdapterExecutionError:
            raise
        except Exception as exc:
            raise AdapterExecutionError("EXPLAIN failed for MySQL statement.") from exc
        elapsed = time.monotonic() - start
        columns = [str(col[0]) for col in (cursor.description or ())]
        label = "row" if len(rows) == 1 else "rows"
        return render_bordered_table(
            columns, rows, footer=f"{len(rows)} {label} in set ({elapsed:.2f} sec)"
        )

    def begin(self) -> None:
        # PyMySQL tracks autocommit privately; mysqlclient exposes a callable setter only.
        if self._state and getattr(self._state.connection, "_autocommit", False):
            return
        connection = self._ensure_connection()
        connection.cursor().execute("START TRANSACTION")

    def commit(self) -> None:
        connection = self._ensure_connection()
        connection.commit()

    def rollback(self) -> None:
        connection = self._ensure_connection()
        connection.rollback()

    def last_insert_id(self, cursor: Any, table: str, pk_column: str) -> Any:
        return cursor.lastrowid
