"""MySQL adapter using PyMySQL (pure Python).

Also used for MariaDB and Percona Server, which speak the same protocol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlnote.domains.connections.providers.adapters.base import ColumnInfo, CursorBasedAdapter, TableInfo
from sqlnote.domains.connections.providers.driver import import_driver_module
from sqlnote.domains.connections.providers.registry import get_default_port

if TYPE_CHECKING:
    from sqlnote.domains.connections.domain.config import ConnectionConfig


class MySQLAdapter(CursorBasedAdapter):
    """Adapter for MySQL using PyMySQL."""

    @property
    def name(self) -> str:
        return "MySQL"

    @property
    def install_extra(self) -> str:
        return "mysql"

    @property
    def install_package(self) -> str:
        return "PyMySQL"

    @property
    def supports_multiple_databases(self) -> bool:
        return True

    @property
    def system_databases(self) -> frozenset[str]:
        return frozenset({"mysql", "information_schema", "performance_schema", "sys"})

    def connect(self, config: ConnectionConfig) -> Any:
        """Connect to MySQL database."""
        pymysql = import_driver_module(
            "pymysql",
            driver_name=self.name,
            extra_name=self.install_extra,
            package_name=self.install_package,
        )

        port = int(config.port or get_default_port("mysql"))
        return pymysql.connect(
            host=config.server or "localhost",
            port=port,
            database=config.database or None,
            user=config.username or "root",
            password=config.password or "",
            connect_timeout=int(config.get_option("connect_timeout", 10)),
            autocommit=True,
            charset=config.get_option("charset", "utf8mb4"),
        )

    def cancel(self, conn: Any, config: ConnectionConfig) -> bool:
        """Run ``KILL QUERY`` for ``conn``'s server thread over a second connection.

        The connection that runs the statement is blocked until the server
        answers, so the kill has to travel on its own connection.
        """
        thread_id = int(conn.thread_id())
        killer = self.connect(config)
        try:
            cursor = killer.cursor()
            try:
                cursor.execute(f"KILL QUERY {thread_id}")
            finally:
                cursor.close()
        finally:
            killer.close()
        return True

    def get_databases(self, conn: Any) -> list[str]:
        cursor = conn.cursor()
        cursor.execute("SHOW DATABASES")
        return [row[0] for row in cursor.fetchall()]

    def get_tables(self, conn: Any, database: str | None = None) -> list[TableInfo]:
        """Get list of tables. Returns (schema, name) with empty schema."""
        cursor = conn.cursor()
        if database:
            cursor.execute(
                "SELECT table_name FROM information_schema.tables "
                "WHERE table_schema = %s AND table_type = 'BASE TABLE' "
                "ORDER BY table_name",
                (database,),
            )
        else:
            cursor.execute(
                "SELECT table_name FROM information_schema.tables "
                "WHERE table_schema = DATABASE() AND table_type = 'BASE TABLE' "
                "ORDER BY table_name"
            )
        return [("", row[0]) for row in cursor.fetchall()]

    def get_views(self, conn: Any, database: str | None = None) -> list[TableInfo]:
        """Get list of views. Returns (schema, name) with empty schema."""
        cursor = conn.cursor()
        if database:
            cursor.execute(
                "SELECT table_name FROM information_schema.views WHERE table_schema = %s ORDER BY table_name",
                (database,),
            )
        else:
            cursor.execute(
                "SELECT table_name FROM information_schema.views WHERE table_schema = DATABASE() ORDER BY table_name"
            )
        return [("", row[0]) for row in cursor.fetchall()]

    def get_columns(
        self, conn: Any, table: str, database: str | None = None, schema: str | None = None
    ) -> list[ColumnInfo]:
        """Get columns for a table. Schema parameter is ignored."""
        cursor = conn.cursor()
        if database:
            cursor.execute(
                "SELECT column_name, data_type, column_key FROM information_schema.columns "
                "WHERE table_schema = %s AND table_name = %s ORDER BY ordinal_position",
                (database, table),
            )
        else:
            cursor.execute(
                "SELECT column_name, data_type, column_key FROM information_schema.columns "
                "WHERE table_schema = DATABASE() AND table_name = %s ORDER BY ordinal_position",
                (table,),
            )
        return [
            ColumnInfo(name=row[0], data_type=row[1], is_primary_key=row[2] == "PRI")
            for row in cursor.fetchall()
        ]

    def get_all_column_names(self, conn: Any, database: str | None = None) -> list[str]:
        cursor = conn.cursor()
        if database:
            cursor.execute(
                "SELECT DISTINCT column_name FROM information_schema.columns WHERE table_schema = %s",
                (database,),
            )
        else:
            cursor.execute(
                "SELECT DISTINCT column_name FROM information_schema.columns WHERE table_schema = DATABASE()"
            )
        return [row[0] for row in cursor.fetchall()]

    def get_sql_keywords(self, conn: Any) -> list[str]:
        """Keywords from information_schema.KEYWORDS (MySQL 8.0+).

        Older servers and MariaDB lack the table; they get the static list only.
        """
        cursor = conn.cursor()
        try:
            cursor.execute("SELECT word FROM information_schema.keywords")
        except Exception:
            return []
        return [row[0] for row in cursor.fetchall()]

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace("`", "``")
        return f"`{escaped}`"


class MariaDBAdapter(MySQLAdapter):
    """MariaDB over the MySQL protocol."""

    @property
    def name(self) -> str:
        return "MariaDB"
