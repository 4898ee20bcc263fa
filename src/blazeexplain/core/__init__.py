"""
Core value types describing issued statements and their bind parameters.
"""

from .binds import (
    UNKNOWN_COLUMN,
    Bind,
    Column,
    Statement,
    bind_values,
    build_binds,
    column_name,
)

__all__ = [
    "UNKNOWN_COLUMN",
    "Bind",
    "Column",
    "Statement",
    "bind_values",
    "build_binds",
    "column_name",
]
