"""Refresh policy: when the schema vocabulary must be re-read."""

from __future__ import annotations

from enum import Enum, auto

import sqlparse

from sqlnote.config import RefreshTrigger

# Statement types that can add, remove or rename schema objects
SCHEMA_CHANGING_TYPES = frozenset(["CREATE", "ALTER", "DROP", "RENAME", "TRUNCATE", "USE"])


class RefreshState(Enum):
    """Whether the published vocabulary reflects the last known schema."""

    STALE = auto()  # nothing fetched yet, or connection just opened/closed
    FRESH = auto()


def _statement_kinds(sql: str) -> list[str]:
    kinds: list[str] = []
    for statement in sqlparse.parse(sql):
        first = statement.token_first(skip_ws=True, skip_cm=True)
        if first is None:
            continue
        kind = statement.get_type()
        if kind == "UNKNOWN":
            kind = first.normalized.upper()
        kinds.append(kind)
    return kinds


def is_schema_changing(sql: str) -> bool:
    """True if any statement in ``sql`` is DDL or switches database."""
    return any(kind in SCHEMA_CHANGING_TYPES for kind in _statement_kinds(sql))


def should_refresh_after(
    statement: str,
    returned_rows: bool,
    trigger: RefreshTrigger = RefreshTrigger.NON_QUERY,
) -> bool:
    """Decide whether an executed statement warrants a metadata refresh.

    With NON_QUERY every statement that did not return a result set
    triggers a refresh, including plain INSERT/UPDATE/DELETE. DDL narrows
    this to statements that can change the schema.
    """
    if trigger is RefreshTrigger.NEVER:
        return False
    if trigger is RefreshTrigger.DDL:
        return is_schema_changing(statement)
    return not returned_rows
