"""
Auto-explain settings and their environment-backed defaults.
"""

from __future__ import annotations

import math
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from ..utils.parsing import parse_bool, parse_float
from .errors import ExplainConfigurationError

ENV_PREFIX = "BLAZE_EXPLAIN_"
THRESHOLD_ENV = f"{ENV_PREFIX}THRESHOLD"

_DISABLED_VALUES = {"", "none", "null", "off", "disabled"}


def validate_threshold(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ExplainConfigurationError(
            f"Explain threshold must be a number of seconds or None, got {value!r}"
        )
    if math.isnan(value) or value < 0:
        raise ExplainConfigurationError(f"Explain threshold must be non-negative, got {value!r}")
    return float(value)


def parse_threshold(raw: str, *, key: str = THRESHOLD_ENV) -> Optional[float]:
    if raw.strip().lower() in _DISABLED_VALUES:
        return None
    return validate_threshold(parse_float(raw, key=key, error=ExplainConfigurationError))


def resolve_threshold_seconds(
    *,
    default: Optional[float] = None,
    override: Optional[float] = None,
    env_var: str = THRESHOLD_ENV,
) -> Optional[float]:
    """
    Explicit override first, then ``env_var``, then ``default``.
    """

    if override is not None:
        return validate_threshold(override)
    raw = os.getenv(env_var)
    if raw is not None:
        return parse_threshold(raw, key=env_var)
    return validate_threshold(default)


@dataclass
class ExplainSettings:
    """
    Per-session auto-explain configuration.

    ``threshold_seconds`` of ``None`` disables auto-explain, ``0`` explains
    every logical operation.
    """

    threshold_seconds: Optional[float] = None
    redact_binds: bool = True
    raise_on_error: bool = True

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "threshold_seconds":
            value = validate_threshold(value)
        super().__setattr__(name, value)

    @property
    def enabled(self) -> bool:
        return self.threshold_seconds is not None

    def should_explain(self, duration: float) -> bool:
        threshold = self.threshold_seconds
        if threshold is None:
            return False
        return duration >= threshold

    @contextmanager
    def override(self, threshold: Optional[float]) -> Iterator["ExplainSettings"]:
        """
        Temporarily replace the threshold, restoring it on every exit path.
        """

        previous = self.threshold_seconds
        self.threshold_seconds = threshold
        try:
            yield self
        finally:
            self.threshold_seconds = previous

    @classmethod
    def from_env(
        cls, prefix: str = ENV_PREFIX, *, threshold_seconds: Optional[float] = None
    ) -> "ExplainSettings":
        """
        Build settings from ``<prefix>*`` variables. An explicit
        ``threshold_seconds`` wins over ``<prefix>THRESHOLD``.
        """

        settings = cls(
            threshold_seconds=resolve_threshold_seconds(
                override=threshold_seconds, env_var=f"{prefix}THRESHOLD"
            )
        )
        redact = os.getenv(f"{prefix}REDACT_BINDS")
        if redact is not None:
            settings.redact_binds = parse_bool(
                redact, key=f"{prefix}REDACT_BINDS", error=ExplainConfigurationError
            )
        raise_on_error = os.getenv(f"{prefix}RAISE_ON_ERROR")
        if raise_on_error is not None:
            settings.raise_on_error = parse_bool(
                raise_on_error, key=f"{prefix}RAISE_ON_ERROR", error=ExplainConfigurationError
            )
        return settings
