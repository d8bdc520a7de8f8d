"""Statement execution for notebook hosts.

QueryService runs one statement on a session and tells the completion
engine when the statement may have changed the schema, so hosts do not
have to wire the refresh trigger themselves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from textual import log

if TYPE_CHECKING:
    from sqlnote.domains.connections.app.session import ConnectionSession
    from sqlnote.domains.query.completion.engine import CompletionEngine

# Matches: USE dbname, USE `dbname`, USE "dbname", USE [dbname]
_USE_PATTERN = re.compile(
    r"^\s*USE\s+"
    r"(?:"
    r"\[([^\]]+)\]"
    r"|`([^`]+)`"
    r"|\"([^\"]+)\""
    r"|(\w+)"
    r")"
    r"\s*;?\s*$",
    re.IGNORECASE,
)


def parse_use_statement(query: str) -> str | None:
    """Return the database named by a USE statement, or None."""
    match = _USE_PATTERN.match(query)
    if not match:
        return None
    return next((g for g in match.groups() if g is not None), None)


@dataclass
class QueryResult:
    """Result of a statement that returned rows."""

    columns: list[str]
    rows: list[tuple]
    row_count: int
    truncated: bool


@dataclass
class NonQueryResult:
    """Result of a statement that returned an update count."""

    rows_affected: int


class QueryService:
    """Executes statements on a session and keeps completion metadata current.

    Args:
        engine: Completion engine to notify after statements that may have
            changed the schema. Optional.
        max_rows: Row cap for result sets. None means unlimited.
    """

    def __init__(self, engine: CompletionEngine | None = None, max_rows: int | None = None):
        self._engine = engine
        if max_rows is None and engine is not None:
            max_rows = engine.settings.max_rows or None
        self._max_rows = max_rows

    @property
    def max_rows(self) -> int | None:
        return self._max_rows

    def execute(self, session: ConnectionSession, query: str) -> QueryResult | NonQueryResult:
        """Execute ``query`` on ``session`` through its executor.

        The driver decides whether the statement produced a result set.

        Raises:
            Any exception raised by the underlying database driver.
        """
        adapter = session.adapter
        log.info(f"Run SQL on '{session.name}': {query}")
        outcome = session.executor.run(adapter.execute, session.connection, query, self._max_rows)

        result: QueryResult | NonQueryResult
        if outcome.returned_rows:
            rows = list(outcome.rows)
            result = QueryResult(
                columns=list(outcome.columns), rows=rows, row_count=len(rows), truncated=outcome.truncated
            )
        else:
            result = NonQueryResult(rows_affected=outcome.rowcount)

        database = parse_use_statement(query)
        if database is not None:
            session.config.database = database

        if self._engine is not None and self._engine.session is session:
            self._engine.notify_statement_executed(query, outcome.returned_rows)
        return result

    def cancel(self, session: ConnectionSession) -> bool:
        """Interrupt the statement running on ``session``.

        Call from a thread other than the one blocked in execute(). The
        interrupted execute() raises the driver's error.
        """
        cancelled = session.cancel()
        if cancelled:
            log.info(f"Cancelled running statement on '{session.name}'")
        else:
            log.warning(f"Nothing to cancel on '{session.name}'")
        return cancelled
