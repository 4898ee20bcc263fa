"""
Notifier coordinating instrumentation events and their subscribers.
"""

from __future__ import annotations

import time
from collections import defaultdict
from contextlib import contextmanager
from threading import RLock
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from ..core.binds import Bind
from .events import SQL_EVENT, SQLEvent

Handler = Callable[[Any], None]


class Notifier:
    """
    Maintains subscribers per event name and delivers payloads to them in
    subscription order.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)
        self._lock = RLock()

    def subscribe(self, event: str, handler: Handler) -> Handler:
        with self._lock:
            self._handlers[event].append(handler)
        return handler

    def unsubscribe(self, event: str, handler: Handler) -> None:
        with self._lock:
            handlers = self._handlers.get(event, [])
            if handler in handlers:
                handlers.remove(handler)

    @contextmanager
    def subscribed(self, handler: Handler, event: str = SQL_EVENT) -> Iterator[Handler]:
        """
        Subscribe ``handler`` for the duration of the block only.
        """

        self.subscribe(event, handler)
        try:
            yield handler
        finally:
            self.unsubscribe(event, handler)

    def has_subscribers(self, event: str) -> bool:
        with self._lock:
            return bool(self._handlers.get(event))

    def publish(self, event: str, payload: Any) -> None:
        with self._lock:
            handlers = list(self._handlers.get(event, []))
        for handler in handlers:
            handler(payload)

    @contextmanager
    def instrument(
        self,
        sql: str,
        binds: Tuple[Bind, ...] = (),
        *,
        name: str = "SQL",
        connection_id: Optional[int] = None,
        event: str = SQL_EVENT,
    ) -> Iterator[None]:
        """
        Time the wrapped block and publish an :class:`SQLEvent` once it exits.
        A raised exception is recorded on the event and re-raised.
        """

        start = time.monotonic()
        error: BaseException | None = None
        try:
            yield
        except BaseException as exc:
            error = exc
            raise
        finally:
            self.publish(
                event,
                SQLEvent(
                    sql=sql,
                    binds=tuple(binds),
                    name=name,
                    duration=time.monotonic() - start,
                    exception=error,
                    connection_id=connection_id,
                ),
            )

    def clear(self) -> None:
        with self._lock:
            self._handlers.clear()

