"""SQLite adapter using built-in sqlite3."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from textual import log

from sqlnote.domains.connections.providers.adapters.base import (
    ColumnInfo,
    CursorBasedAdapter,
    TableInfo,
    resolve_file_path,
)

if TYPE_CHECKING:
    from sqlnote.domains.connections.domain.config import ConnectionConfig


class SQLiteAdapter(CursorBasedAdapter):
    """Adapter for SQLite using built-in sqlite3."""

    @property
    def name(self) -> str:
        return "SQLite"

    @property
    def supports_multiple_databases(self) -> bool:
        return False

    def connect(self, config: ConnectionConfig) -> Any:
        """Connect to SQLite database file."""
        import sqlite3

        file_path = resolve_file_path(config.file_path or ":memory:")
        # check_same_thread=False lets the session executor thread use the connection.
        # The executor serializes access.
        return sqlite3.connect(str(file_path), check_same_thread=False)

    def is_connection_closed(self, conn: Any) -> bool:
        import sqlite3

        if conn is None:
            return True
        try:
            conn.total_changes
        except sqlite3.ProgrammingError:
            return True
        return False

    def cancel(self, conn: Any, config: ConnectionConfig) -> bool:
        """Abort the running statement; it fails with ``sqlite3.OperationalError``."""
        conn.interrupt()
        return True

    def get_databases(self, conn: Any) -> list[str]:
        """SQLite doesn't support multiple databases - return empty list."""
        return []

    def get_schemas(self, conn: Any, database: str | None = None) -> list[str]:
        """Attached database names (main, temp, and any ATTACHed files)."""
        cursor = conn.cursor()
        cursor.execute("PRAGMA database_list")
        # PRAGMA database_list returns: seq, name, file
        return [row[1] for row in cursor.fetchall()]

    def get_tables(self, conn: Any, database: str | None = None) -> list[TableInfo]:
        """Get list of tables from SQLite. Returns (schema, name) with empty schema."""
        cursor = conn.cursor()
        cursor.execute(
            "SELECT name FROM sqlite_master WHERE type='table' " "AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
        return [("", row[0]) for row in cursor.fetchall()]

    def get_views(self, conn: Any, database: str | None = None) -> list[TableInfo]:
        """Get list of views from SQLite. Returns (schema, name) with empty schema."""
        cursor = conn.cursor()
        cursor.execute("SELECT name FROM sqlite_master WHERE type='view' ORDER BY name")
        return [("", row[0]) for row in cursor.fetchall()]

    def get_columns(
        self, conn: Any, table: str, database: str | None = None, schema: str | None = None
    ) -> list[ColumnInfo]:
        """Get columns for a table from SQLite. Schema parameter is ignored."""
        cursor = conn.cursor()
        cursor.execute(f"PRAGMA table_info({self.quote_identifier(table)})")
        # PRAGMA table_info returns: cid, name, type, notnull, dflt_value, pk
        return [
            ColumnInfo(name=row[1], data_type=row[2] or "TEXT", is_primary_key=row[5] > 0)
            for row in cursor.fetchall()
        ]

    def get_all_column_names(self, conn: Any, database: str | None = None) -> list[str]:
        """Column names of all tables and views, one relation at a time.

        A view over a dropped table cannot be described; it is skipped so the
        rest of the schema still reads.
        """
        import sqlite3

        names: list[str] = []
        for _, relation in self.get_tables(conn, database) + self.get_views(conn, database):
            try:
                names.extend(column.name for column in self.get_columns(conn, relation))
            except sqlite3.Error as error:
                log.warning(f"Skipping columns of '{relation}': {error}")
        return names

    def quote_identifier(self, name: str) -> str:
        """Quote identifier using double quotes for SQLite.

        Escapes embedded double quotes by doubling them.
        """
        escaped = name.replace('"', '""')
        return f'"{escaped}"'
