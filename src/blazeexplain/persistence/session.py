"""
Session coordinating an adapter, statement notifications and auto-explain.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, ContextManager, Iterable, Iterator, List, Optional, Sequence

from ..adapters.base import ConnectionConfig, DatabaseAdapter
from ..core.binds import Bind, Statement, bind_values, build_binds
from ..dialects.base import Dialect
from ..explain import AutoExplainer, ExplainError, ExplainSettings
from ..notifications import SQL_EVENT, Notifier, SQLLogSubscriber
from ..utils import get_logger
from .transaction import TransactionManager


class Session:
    """
    Executes statements against one adapter connection.

    Each ``fetch_*`` call, and each :meth:`operation` block, is one logical
    operation for auto-explain purposes.
    """

    def __init__(
        self,
        adapter: DatabaseAdapter,
        *,
        connection_config: Optional[ConnectionConfig] = None,
        dsn: Optional[str] = None,
        explain_settings: Optional[ExplainSettings] = None,
        notifier: Optional[Notifier] = None,
        log_sql: bool = True,
    ) -> None:
        if connection_config is not None and dsn is not None:
            raise ValueError("Provide either connection_config or dsn, not both.")
        if dsn is not None:
            connection_config = ConnectionConfig.from_dsn(dsn)
        self.adapter = adapter
        self.dialect: Dialect = adapter.dialect
        self.connection_config = connection_config or ConnectionConfig(url="sqlite:///:memory:")
        self.notifier = notifier or Notifier()
        self.logger = get_logger("persistence.session")
        self.transaction_manager = TransactionManager(adapter, self.dialect, self.notifier)
        self.explainer = AutoExplainer(
            self,
            self.notifier,
            settings=explain_settings or ExplainSettings.from_env(),
        )
        self._sql_logger: Optional[SQLLogSubscriber] = None
        # subscribers go on the notifier only once a connection exists
        self.adapter.connect(self.connection_config)
        self.explainer.install()
        if log_sql:
            self._sql_logger = SQLLogSubscriber()
            self.notifier.subscribe(SQL_EVENT, self._sql_logger)

    @property
    def explain_settings(self) -> ExplainSettings:
        return self.explainer.settings

    @property
    def connection_id(self) -> Optional[int]:
        return self.adapter.connection_id

    # ------------------------------------------------------------------ #
    # Context management
    # ------------------------------------------------------------------ #
    def __enter__(self) -> "Session":
        self.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type:
                self.rollback()
            else:
                self.commit()
        finally:
            self.close()

    def begin(self) -> None:
        self.transaction_manager.begin()

    def commit(self) -> None:
        self.transaction_manager.commit()

    def rollback(self) -> None:
        self.transaction_manager.rollback()

    def close(self) -> None:
        self.explainer.uninstall()
        if self._sql_logger is not None:
            self.notifier.unsubscribe(SQL_EVENT, self._sql_logger)
            self._sql_logger = None
        self.adapter.close()

    @contextmanager
    def transaction(self) -> Iterator["Session"]:
        """
        Provide nested transaction context with savepoint support.
        """

        with self.transaction_manager.transaction():
            yield self

    # ------------------------------------------------------------------ #
    # Statements
    # ------------------------------------------------------------------ #
    def execute(
        self,
        sql: str,
        params: Iterable[Any] | None = None,
        *,
        columns: Sequence[Any] | None = None,
        name: str = "SQL",
    ):
        binds = build_binds(params, columns)
        with self.notifier.instrument(sql, binds, name=name, connection_id=self.connection_id):
            return self.adapter.execute(sql, bind_values(binds))

    def executemany(self, sql: str, seq_of_params: Iterable[Sequence[Any]], *, name: str = "SQL"):
        rows = [list(params) for params in seq_of_params]
        with self.notifier.instrument(sql, name=name, connection_id=self.connection_id):
            return self.adapter.executemany(sql, rows)

    def fetch_all(
        self,
        sql: str,
        params: Iterable[Any] | None = None,
        *,
        columns: Sequence[Any] | None = None,
    ) -> List[Any]:
        with self.explainer.logging_query_plan():
            return self.execute(sql, params, columns=columns).fetchall()

    def fetch_one(
        self,
        sql: str,
        params: Iterable[Any] | None = None,
        *,
        columns: Sequence[Any] | None = None,
    ) -> Any:
        with self.explainer.logging_query_plan():
            return self.execute(sql, params, columns=columns).fetchone()

    def operation(self) -> ContextManager[None]:
        """
        Group several statements into a single logical operation.
        """

        return self.explainer.logging_query_plan()

    # ------------------------------------------------------------------ #
    # Explain
    # ------------------------------------------------------------------ #
    def explain(
        self,
        sql: str,
        params: Iterable[Any] | None = None,
        *,
        columns: Sequence[Any] | None = None,
    ) -> str:
        """
        Run ``sql`` and return the query plan report for it, whatever the
        configured threshold.
        """

        if not self.dialect.capabilities.supports_explain:
            raise ExplainError(f"The {self.dialect.name} dialect does not support EXPLAIN.")
        with self.explainer.collecting_queries_for_explain() as queries:
            self.execute(sql, params, columns=columns).fetchall()
        return self.explainer.exec_explain(queries)

    def explain_statement(self, sql: str, binds: Sequence[Bind]) -> str:
        with self.notifier.instrument(
            sql, tuple(binds), name="EXPLAIN", connection_id=self.connection_id
        ):
            return self.adapter.explain(sql, bind_values(binds))

    def collecting_queries_for_explain(self) -> ContextManager[List[Statement]]:
        return self.explainer.collecting_queries_for_explain()

    def silence_auto_explain(self) -> ContextManager[None]:
        return self.explainer.silence_auto_explain()

    def explain_threshold(self, value: Optional[float]) -> ContextManager[ExplainSettings]:
        return self.explainer.threshold(value)
