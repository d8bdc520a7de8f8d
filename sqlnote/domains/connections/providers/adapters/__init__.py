"""Base adapter types."""

from .base import (
    ColumnInfo,
    CursorBasedAdapter,
    DatabaseAdapter,
    StatementResult,
    TableInfo,
)

__all__ = [
    "ColumnInfo",
    "CursorBasedAdapter",
    "DatabaseAdapter",
    "StatementResult",
    "TableInfo",
]
