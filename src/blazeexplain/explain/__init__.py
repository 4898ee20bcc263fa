"""
Auto-explain: log query plans for slow logical operations.
"""

from .config import ExplainSettings, resolve_threshold_seconds
from .errors import ExplainConfigurationError, ExplainError
from .explainer import AutoExplainer, ExplainEngine
from .formatter import format_binds, render_entry, render_report
from .subscriber import ExplainSubscriber, ignore_payload

__all__ = [
    "AutoExplainer",
    "ExplainEngine",
    "ExplainSettings",
    "ExplainSubscriber",
    "ExplainError",
    "ExplainConfigurationError",
    "format_binds",
    "ignore_payload",
    "render_entry",
    "render_report",
    "resolve_threshold_seconds",
]
