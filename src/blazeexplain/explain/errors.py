"""
Exceptions raised by the auto-explain layer.
"""


class ExplainError(RuntimeError):
    """Base error for auto-explain failures."""


class ExplainConfigurationError(ExplainError, ValueError):
    """Raised when explain settings are invalid."""
