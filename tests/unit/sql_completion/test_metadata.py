"""Tests for reading schema object names from a connection."""

from __future__ import annotations

from concurrent.futures import Future
from unittest.mock import MagicMock

import pytest

from sqlnote.domains.query.completion import MetadataError, collect_schema_names, fetch_schema_names


def _make_adapter(multi_db: bool = True) -> MagicMock:
    """Adapter with one user database and one system database."""
    adapter = MagicMock()
    adapter.supports_multiple_databases = multi_db
    adapter.system_databases = frozenset({"mysql", "information_schema"})
    adapter.get_databases.return_value = ["shop", "mysql"]
    adapter.get_schemas.return_value = []
    adapter.get_tables.return_value = [("shop", "orders"), ("shop", "order_items")]
    adapter.get_views.return_value = [("shop", "big_orders")]
    adapter.get_all_column_names.return_value = ["id", "total", "", None]
    return adapter


def _make_session(future: Future | None = None, closed: bool = False) -> MagicMock:
    session = MagicMock()
    session.name = "test"
    session.is_closed = closed
    session.config.database = ""
    if future is not None:
        session.executor.submit.return_value = future
    return session


class TestCollectSchemaNames:
    """Tests for collect_schema_names."""

    def test_flattens_catalogs_relations_and_columns(self):
        adapter = _make_adapter()
        names = collect_schema_names(adapter, MagicMock())
        assert names == {"shop", "mysql", "orders", "order_items", "big_orders", "id", "total"}

    def test_system_databases_not_introspected(self):
        adapter = _make_adapter()
        conn = MagicMock()
        collect_schema_names(adapter, conn)
        adapter.get_tables.assert_called_once_with(conn, "shop")

    def test_current_database_only(self):
        adapter = _make_adapter()
        conn = MagicMock()
        collect_schema_names(adapter, conn, current_database="mysql")
        adapter.get_tables.assert_called_once_with(conn, "mysql")

    def test_columns_can_be_skipped(self):
        adapter = _make_adapter()
        names = collect_schema_names(adapter, MagicMock(), include_columns=False)
        assert "id" not in names
        adapter.get_all_column_names.assert_not_called()

    def test_single_database_adapter(self):
        adapter = _make_adapter(multi_db=False)
        adapter.get_tables.return_value = [("", "orders")]
        adapter.get_views.return_value = []
        adapter.get_schemas.return_value = ["main"]
        conn = MagicMock()
        names = collect_schema_names(adapter, conn)
        assert names == {"main", "orders", "id", "total"}
        adapter.get_databases.assert_not_called()
        adapter.get_tables.assert_called_once_with(conn, None)

    def test_column_error_keeps_relation_names(self):
        adapter = _make_adapter()
        adapter.get_all_column_names.side_effect = RuntimeError("view is invalid")
        names = collect_schema_names(adapter, MagicMock())
        assert names == {"shop", "mysql", "orders", "order_items", "big_orders"}

    def test_driver_error_propagates(self):
        adapter = _make_adapter()
        adapter.get_tables.side_effect = RuntimeError("lost connection")
        with pytest.raises(RuntimeError):
            collect_schema_names(adapter, MagicMock())


class TestFetchSchemaNames:
    """Tests for fetch_schema_names error mapping."""

    def test_returns_frozenset(self):
        future: Future = Future()
        future.set_result({"orders"})
        result = fetch_schema_names(_make_session(future))
        assert result == frozenset({"orders"})
        assert isinstance(result, frozenset)

    def test_closed_session(self):
        session = _make_session(closed=True)
        with pytest.raises(MetadataError) as exc_info:
            fetch_schema_names(session)
        assert exc_info.value.connection_name == "test"
        session.executor.submit.assert_not_called()

    def test_executor_shut_down(self):
        session = _make_session()
        session.executor.submit.side_effect = RuntimeError("Executor has been shut down")
        with pytest.raises(MetadataError):
            fetch_schema_names(session)

    def test_driver_error_is_chained(self):
        future: Future = Future()
        error = OSError("connection reset")
        future.set_exception(error)
        with pytest.raises(MetadataError) as exc_info:
            fetch_schema_names(_make_session(future))
        assert exc_info.value.__cause__ is error

    def test_timeout(self):
        future: Future = Future()
        with pytest.raises(MetadataError, match="Timed out"):
            fetch_schema_names(_make_session(future), timeout=0.01)
        assert future.cancelled()

    def test_cancelled(self):
        future: Future = Future()
        future.cancel()
        with pytest.raises(MetadataError, match="cancelled"):
            fetch_schema_names(_make_session(future))


class TestFetchSchemaNamesSQLite:
    """Tests against a real SQLite database."""

    def test_reads_tables_views_and_columns(self, sqlite_session):
        names = fetch_schema_names(sqlite_session, timeout=5)
        assert {"main", "orders", "order_items", "big_orders"} <= names
        assert {"id", "customer", "total", "order_id", "sku"} <= names

    def test_sqlite_internal_tables_hidden(self, sqlite_session):
        sqlite_session.executor.run(
            sqlite_session.adapter.execute,
            sqlite_session.connection,
            "CREATE TABLE counters (id INTEGER PRIMARY KEY AUTOINCREMENT)",
        )
        names = fetch_schema_names(sqlite_session, timeout=5)
        assert "counters" in names
        assert "sqlite_sequence" not in names

    def test_view_over_dropped_table(self, sqlite_session):
        """A view whose base table is gone does not hide the rest of the schema."""
        sqlite_session.executor.run(
            sqlite_session.adapter.execute, sqlite_session.connection, "DROP TABLE orders"
        )
        names = fetch_schema_names(sqlite_session, timeout=5)
        assert {"order_items", "big_orders", "order_id", "sku"} <= names
        assert "orders" not in names
        assert "customer" not in names

    def test_closed_session(self, sqlite_session):
        sqlite_session.close()
        with pytest.raises(MetadataError):
            fetch_schema_names(sqlite_session)
