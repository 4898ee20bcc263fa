"""Strict parsers for configuration values read from DSNs and the environment."""

from __future__ import annotations

from typing import Type

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: str, *, key: str, error: Type[Exception] = ValueError) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise error(f"Invalid boolean value for '{key}': {value!r}")


def parse_float(value: str, *, key: str, error: Type[Exception] = ValueError) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise error(f"Invalid float value for '{key}': {value!r}") from exc


def parse_int(value: str, *, key: str, error: Type[Exception] = ValueError) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise error(f"Invalid integer value for '{key}': {value!r}") from exc
