"""Base class and common types for database adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sqlnote.domains.connections.domain.config import ConnectionConfig


def resolve_file_path(path_str: str) -> Path:
    """Resolve a file path for file-based databases (SQLite).

    Expands ``~`` and resolves to an absolute path. ``:memory:`` is returned
    unchanged.
    """
    path_str = path_str.strip()
    if path_str == ":memory:":
        return Path(path_str)
    return Path(path_str).expanduser().resolve()


@dataclass
class ColumnInfo:
    """Information about a database column."""

    name: str
    data_type: str
    is_primary_key: bool = False


# Type alias for table/view info: (schema, name)
TableInfo = tuple[str, str]


@dataclass
class StatementResult:
    """Outcome of one executed statement.

    ``columns`` is None when the statement produced no result set; ``rowcount``
    then holds the driver's update count (-1 when unknown).
    """

    columns: list[str] | None
    rows: list[tuple]
    truncated: bool
    rowcount: int = -1

    @property
    def returned_rows(self) -> bool:
        return self.columns is not None


class DatabaseAdapter(ABC):
    """Abstract base class for database adapters.

    Adapters handle database connectivity and introspection. Completion
    metadata is gathered exclusively through the introspection methods
    here, so the completion engine never issues SQL of its own.
    """

    @property
    def install_extra(self) -> str | None:
        """Name of the [extra] for pip install."""
        return None

    @property
    def install_package(self) -> str | None:
        """Name of the package providing the driver."""
        return None

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this database type."""
        pass

    @property
    @abstractmethod
    def supports_multiple_databases(self) -> bool:
        """Whether this database type supports multiple databases (catalogs)."""
        pass

    @property
    def system_databases(self) -> frozenset[str]:
        """Lowercase names of system databases excluded from listings."""
        return frozenset()

    @property
    def default_schema(self) -> str:
        """The default schema for this database type, or empty if unsupported."""
        return ""

    def disconnect(self, conn: Any) -> None:
        """Close a connection if the driver exposes a close method."""
        close_fn = getattr(conn, "close", None)
        if callable(close_fn):
            close_fn()

    def is_connection_closed(self, conn: Any) -> bool:
        """Best-effort check whether a driver connection has been closed."""
        if conn is None:
            return True
        closed = getattr(conn, "closed", None)
        if isinstance(closed, bool):
            return closed
        is_open = getattr(conn, "open", None)
        if isinstance(is_open, bool):
            return not is_open
        return False

    @abstractmethod
    def connect(self, config: ConnectionConfig) -> Any:
        """Create a connection to the database."""
        pass

    @abstractmethod
    def get_databases(self, conn: Any) -> list[str]:
        """Get list of databases (if supported)."""
        pass

    def get_schemas(self, conn: Any, database: str | None = None) -> list[str]:
        """Get list of schema names (empty if schemas are not supported)."""
        return []

    @abstractmethod
    def get_tables(self, conn: Any, database: str | None = None) -> list[TableInfo]:
        """Get list of tables in the database.

        Returns:
            List of (schema, table_name) tuples.
        """
        pass

    @abstractmethod
    def get_views(self, conn: Any, database: str | None = None) -> list[TableInfo]:
        """Get list of views in the database.

        Returns:
            List of (schema, view_name) tuples.
        """
        pass

    @abstractmethod
    def get_columns(
        self, conn: Any, table: str, database: str | None = None, schema: str | None = None
    ) -> list[ColumnInfo]:
        """Get list of columns for a table.

        Args:
            conn: Database connection.
            table: Table name.
            database: Database name (if supported).
            schema: Schema name (if supported).
        """
        pass

    def get_all_column_names(self, conn: Any, database: str | None = None) -> list[str]:
        """Get the column names of every table and view in one pass.

        The default implementation asks for each relation's columns in turn.
        Adapters with an information schema override this with one query.
        """
        names: list[str] = []
        relations = self.get_tables(conn, database) + self.get_views(conn, database)
        for schema, table in relations:
            names.extend(c.name for c in self.get_columns(conn, table, database, schema or None))
        return names

    def get_sql_keywords(self, conn: Any) -> list[str]:
        """Dialect-specific keywords and function names reported by the server."""
        return []

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Quote an identifier (table name, column name, etc.)."""
        pass

    @abstractmethod
    def execute(self, conn: Any, query: str, max_rows: int | None = None) -> StatementResult:
        """Execute one statement and report what the driver returned.

        Whether a result set was produced comes from the driver
        (``cursor.description``), not from the statement text.

        Args:
            conn: Database connection.
            query: SQL statement to execute.
            max_rows: Maximum rows to fetch. None means no limit.
        """
        pass

    def cancel(self, conn: Any, config: ConnectionConfig) -> bool:
        """Interrupt the statement currently running on ``conn``.

        Called from a thread other than the one executing the statement.
        Returns False if the database type cannot cancel statements.
        """
        return False


class CursorBasedAdapter(DatabaseAdapter):
    """Base class for adapters using DB-API cursor-based execution."""

    def execute(self, conn: Any, query: str, max_rows: int | None = None) -> StatementResult:
        cursor = conn.cursor()
        try:
            cursor.execute(query)
            if cursor.description:
                columns = [col[0] for col in cursor.description]
                if max_rows is not None:
                    # Fetch one extra row to detect if there are more
                    rows = cursor.fetchmany(max_rows + 1)
                    truncated = len(rows) > max_rows
                    if truncated:
                        rows = rows[:max_rows]
                else:
                    rows = cursor.fetchall()
                    truncated = False
                result = StatementResult(columns, [tuple(row) for row in rows], truncated)
            else:
                result = StatementResult(None, [], False, int(cursor.rowcount))
        finally:
            cursor.close()
        conn.commit()
        return result


__all__ = [
    "ColumnInfo",
    "CursorBasedAdapter",
    "DatabaseAdapter",
    "StatementResult",
    "TableInfo",
    "resolve_file_path",
]
