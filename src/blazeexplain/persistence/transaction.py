"""
Transaction manager handling nested transactions and savepoints.
"""

from __future__ import annotations

import itertools
from contextlib import contextmanager
from typing import Generator, List, Optional

from ..adapters.base import AdapterTransactionError, DatabaseAdapter
from ..dialects.base import Dialect
from ..notifications.dispatcher import Notifier


class TransactionError(AdapterTransactionError):
    pass


class TransactionManager:
    """
    Coordinates begin/commit/rollback with optional savepoint support.
    Every control statement is published with the ``TRANSACTION`` name.
    """

    def __init__(self, adapter: DatabaseAdapter, dialect: Dialect, notifier: Optional[Notifier] = None) -> None:
        self.adapter = adapter
        self.dialect = dialect
        self.notifier = notifier or Notifier()
        self._stack: List[str | None] = []
        self._savepoint_counter = itertools.count(1)

    @property
    def depth(self) -> int:
        return len(self._stack)

    def begin(self) -> None:
        if self.depth == 0:
            with self._instrument("BEGIN"):
                self.adapter.begin()
            self._stack.append(None)
            return

        if not self.dialect.capabilities.supports_savepoints:
            raise TransactionError("Nested transactions not supported by current dialect.")

        name = f"sp_{next(self._savepoint_counter)}"
        self._execute(f"SAVEPOINT {name}")
        self._stack.append(name)

    def commit(self) -> None:
        if self.depth == 0:
            raise TransactionError("No active transaction to commit.")

        savepoint_name = self._stack.pop()
        if savepoint_name is None:
            with self._instrument("COMMIT"):
                self.adapter.commit()
            return
        self._execute(f"RELEASE SAVEPOINT {savepoint_name}")

    def rollback(self) -> None:
        if self.depth == 0:
            raise TransactionError("No active transaction to roll back.")

        savepoint_name = self._stack.pop()
        if savepoint_name is None:
            with self._instrument("ROLLBACK"):
                self.adapter.rollback()
            return
        self._execute(f"ROLLBACK TO SAVEPOINT {savepoint_name}")
        self._execute(f"RELEASE SAVEPOINT {savepoint_name}")

    @contextmanager
    def transaction(self) -> Generator[None, None, None]:
        self.begin()
        try:
            yield
        except Exception:
            self.rollback()
            raise
        else:
            self.commit()

    def _instrument(self, sql: str):
        return self.notifier.instrument(
            sql, name="TRANSACTION", connection_id=self.adapter.connection_id
        )

    def _execute(self, sql: str) -> None:
        with self._instrument(sql):
            self.adapter.execute(sql)
