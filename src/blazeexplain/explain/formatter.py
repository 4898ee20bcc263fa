"""
Rendering of explained statements for the log.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Sequence, Tuple

from ..core.binds import Bind, column_name
from ..security.redaction import redact_bind

HEADER = "EXPLAIN for:"
ENTRY_SEPARATOR = "\n\n"


def format_binds(binds: Sequence[Bind], *, redact: bool = True) -> str:
    """
    Render binds as a literal list of ``[column, value]`` pairs::

        [["name", "honda"], ["id", 1]]
    """

    pairs: list[list[Any]] = []
    for column, value in binds:
        name = column_name(column)
        pairs.append([name, redact_bind(name, value) if redact else value])
    return json.dumps(pairs, default=str, ensure_ascii=False)


def render_entry(sql: str, binds: Sequence[Bind], plan: str, *, redact: bool = True) -> str:
    message = f"{HEADER} {sql}"
    if binds:
        message += f" {format_binds(binds, redact=redact)}"
    plan_text = plan.rstrip("\n")
    return f"{message}\n{plan_text}"


def render_report(entries: Iterable[Tuple[str, Sequence[Bind], str]], *, redact: bool = True) -> str:
    return ENTRY_SEPARATOR.join(
        render_entry(sql, binds, plan, redact=redact) for sql, binds, plan in entries
    )
