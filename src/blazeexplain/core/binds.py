"""
Statement and bind-parameter value types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence, Tuple

UNKNOWN_COLUMN = "unknown"

Bind = Tuple[Any, Any]


@dataclass(frozen=True)
class Column:
    """
    Describes the column a bound value is compared against or written to.
    Only ``name`` is used for display.
    """

    name: Optional[str]
    sql_type: Optional[str] = None

    @classmethod
    def positional(cls, index: int) -> "Column":
        return cls(name=f"${index}")


@dataclass(frozen=True)
class Statement:
    """
    A SQL text plus its ordered ``(column, value)`` bind pairs.
    """

    sql: str
    binds: Tuple[Bind, ...] = field(default_factory=tuple)


def build_binds(
    params: Iterable[Any] | None,
    columns: Sequence[Any] | None = None,
) -> Tuple[Bind, ...]:
    """
    Pair parameter values with column descriptors.

    Values without a descriptor are labelled positionally (``$1``, ``$2``...).
    """

    values = list(params or ())
    if columns is None:
        descriptors: Sequence[Any] = [Column.positional(idx) for idx in range(1, len(values) + 1)]
    else:
        descriptors = list(columns)
        if len(descriptors) != len(values):
            raise ValueError(
                f"Column count mismatch: {len(descriptors)} columns for {len(values)} parameters."
            )
    return tuple(zip(descriptors, values))


def bind_values(binds: Iterable[Bind]) -> list[Any]:
    return [value for _, value in binds]


def column_name(column: Any) -> str:
    name = column if isinstance(column, str) else getattr(column, "name", None)
    if name is None or name == "":
        return UNKNOWN_COLUMN
    return str(name)
