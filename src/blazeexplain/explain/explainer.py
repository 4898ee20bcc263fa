"""
Auto-explain: threshold-gated EXPLAIN logging for slow logical operations.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterable, Iterator, List, Optional, Protocol, Sequence, Tuple

from ..core.binds import Bind, Statement
from ..notifications.dispatcher import Notifier
from ..notifications.events import SQL_EVENT
from ..utils import get_logger
from .config import ExplainSettings
from .formatter import render_report
from .subscriber import CollectionState, ExplainSubscriber, ignore_payload


class ExplainEngine(Protocol):
    def explain_statement(self, sql: str, binds: Sequence[Bind]) -> str: ...


class AutoExplainer:
    """
    Collects the statements issued during a logical operation and, when the
    operation is slower than ``settings.threshold_seconds``, logs their query
    plans at WARNING level.

    Collection state is private to this instance and to the current thread
    or asyncio task, so concurrent operations never see each other's
    statements.
    """

    ignore_payload = staticmethod(ignore_payload)

    def __init__(
        self,
        engine: ExplainEngine,
        notifier: Notifier,
        *,
        settings: Optional[ExplainSettings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.engine = engine
        self.notifier = notifier
        self.settings = settings or ExplainSettings()
        self.logger = logger or get_logger("explain")
        self._state: ContextVar[CollectionState] = ContextVar(
            f"blazeexplain_queries_{id(self)}", default=None
        )
        self.subscriber = ExplainSubscriber(
            self._state, connection_id=lambda: getattr(engine, "connection_id", None)
        )
        self._installed = False

    # ------------------------------------------------------------------ #
    # Subscription
    # ------------------------------------------------------------------ #
    def install(self) -> "AutoExplainer":
        if not self._installed:
            self.notifier.subscribe(SQL_EVENT, self.subscriber)
            self._installed = True
        return self

    def uninstall(self) -> None:
        if self._installed:
            self.notifier.unsubscribe(SQL_EVENT, self.subscriber)
            self._installed = False

    @property
    def collecting(self) -> bool:
        return isinstance(self._state.get(), list)

    @property
    def silenced(self) -> bool:
        return self._state.get() is False

    # ------------------------------------------------------------------ #
    # Scopes
    # ------------------------------------------------------------------ #
    @contextmanager
    def logging_query_plan(self) -> Iterator[None]:
        """
        Wrap one logical operation. Nested scopes defer to the outermost one,
        and a silenced context never collects.
        """

        if (
            not self.settings.enabled
            or self._state.get() is not None
            or not self.logger.isEnabledFor(logging.WARNING)
        ):
            yield
            return

        queries: List[Statement] = []
        token = self._state.set(queries)
        try:
            start = time.monotonic()
            yield
            elapsed = time.monotonic() - start
        finally:
            self._state.reset(token)

        if queries and self.settings.should_explain(elapsed):
            self._log_query_plan(queries, elapsed)

    @contextmanager
    def collecting_queries_for_explain(self) -> Iterator[List[Statement]]:
        queries: List[Statement] = []
        token = self._state.set(queries)
        try:
            yield queries
        finally:
            self._state.reset(token)

    @contextmanager
    def silence_auto_explain(self) -> Iterator[None]:
        token = self._state.set(False)
        try:
            yield
        finally:
            self._state.reset(token)

    @contextmanager
    def threshold(self, value: Optional[float]) -> Iterator[ExplainSettings]:
        with self.settings.override(value) as settings:
            yield settings

    # ------------------------------------------------------------------ #
    # EXPLAIN
    # ------------------------------------------------------------------ #
    def exec_explain(
        self,
        queries: Iterable[Any],
        binds: Optional[Sequence[Sequence[Bind]]] = None,
    ) -> str:
        """
        Explain each statement in order and render the combined report.

        ``queries`` holds :class:`Statement` objects or ``(sql, binds)``
        pairs; alternatively pass bare SQL strings with a parallel ``binds``
        sequence. Engine errors propagate.
        """

        entries: List[Tuple[str, Sequence[Bind], str]] = []
        for sql, statement_binds in self._pair_queries(queries, binds):
            plan = self.engine.explain_statement(sql, statement_binds)
            entries.append((sql, statement_binds, plan))
        return render_report(entries, redact=self.settings.redact_binds)

    def _log_query_plan(self, queries: List[Statement], elapsed: float) -> None:
        try:
            report = self.exec_explain(queries)
        except Exception:
            if self.settings.raise_on_error:
                raise
            self.logger.exception(
                "Auto-explain failed for %s statement(s)", len(queries)
            )
            return
        self.logger.warning(
            "%s",
            report,
            extra={"elapsed_ms": elapsed * 1000, "statements": len(queries)},
        )

    @staticmethod
    def _pair_queries(
        queries: Iterable[Any], binds: Optional[Sequence[Sequence[Bind]]]
    ) -> List[Tuple[str, Sequence[Bind]]]:
        items = list(queries)
        if binds is not None:
            if len(binds) != len(items):
                raise ValueError(
                    f"Expected one bind list per statement, got {len(binds)} for {len(items)}."
                )
            return [(str(sql), list(item_binds)) for sql, item_binds in zip(items, binds)]
        pairs: List[Tuple[str, Sequence[Bind]]] = []
        for item in items:
            if isinstance(item, Statement):
                pairs.append((item.sql, item.binds))
            elif isinstance(item, str):
                raise TypeError(
                    f"Bare SQL {item!r} needs a parallel binds sequence; pass binds=[...] or a Statement."
                )
            else:
                sql, item_binds = item
                pairs.append((sql, item_binds))
        return pairs
