"""
Dialect strategy interfaces describing backend SQL behaviors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class DialectCapabilities:
    """
    Feature flags describing backend capabilities.
    """

    supports_savepoints: bool = True
    supports_explain: bool = True


class Dialect(Protocol):
    """
    Strategy interface consumed by adapters and the session.
    """

    @property
    def name(self) -> str: ...

    @property
    def param_style(self) -> str: ...

    @property
    def capabilities(self) -> DialectCapabilities: ...

    @property
    def explain_prefix(self) -> str: ...

    def quote_identifier(self, identifier: str) -> str: ...

    def parameter_placeholder(self, position: int | None = None) -> str: ...

    def explain_sql(self, sql: str) -> str: ...
