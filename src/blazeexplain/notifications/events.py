"""
Payload types published through the notifier.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..core.binds import Bind, Statement

SQL_EVENT = "sql.blazeexplain"


@dataclass(frozen=True)
class SQLEvent:
    sql: str
    binds: Tuple[Bind, ...] = field(default_factory=tuple)
    name: str = "SQL"
    duration: float = 0.0
    exception: Optional[BaseException] = None
    connection_id: Optional[int] = None

    @property
    def duration_ms(self) -> float:
        return self.duration * 1000

    def statement(self) -> Statement:
        return Statement(self.sql, self.binds)
