"""
Capture of issued statements for the auto-explain collector.
"""

from __future__ import annotations

import re
from contextvars import ContextVar
from typing import Callable, List, Optional, Union

from ..core.binds import Statement
from ..notifications.events import SQLEvent

CollectionState = Union[List[Statement], bool, None]

IGNORED_NAMES = frozenset({"SCHEMA", "EXPLAIN", "CACHE", "TRANSACTION"})
EXPLAINED_SQL = re.compile(r"\A\s*(select|update|delete|insert)\b", re.IGNORECASE)


def ignore_payload(event: SQLEvent) -> bool:
    """
    True for statements that should never be explained: failed statements,
    internal bookkeeping (schema, transaction control, cached reads, EXPLAIN
    itself) and anything that is not plain DML.
    """

    return (
        event.exception is not None
        or event.name in IGNORED_NAMES
        or EXPLAINED_SQL.match(event.sql) is None
    )


class ExplainSubscriber:
    """
    Appends statements to the collection list active in the current context.
    Does nothing while idle (``None``) or silenced (``False``).
    """

    def __init__(
        self,
        state: ContextVar[CollectionState],
        *,
        connection_id: Optional[Callable[[], Optional[int]]] = None,
    ) -> None:
        self.state = state
        self._connection_id = connection_id

    def __call__(self, event: SQLEvent) -> None:
        queries = self.state.get()
        if not isinstance(queries, list):
            return
        if ignore_payload(event) or not self._owns(event):
            return
        queries.append(event.statement())

    def _owns(self, event: SQLEvent) -> bool:
        if self._connection_id is None or event.connection_id is None:
            return True
        own = self._connection_id()
        return own is None or own == event.connection_id
