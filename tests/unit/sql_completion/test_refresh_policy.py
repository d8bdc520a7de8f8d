"""Tests for deciding when executed statements trigger a metadata refresh."""

import pytest

from sqlnote.config import RefreshTrigger
from sqlnote.domains.query.completion import is_schema_changing, should_refresh_after


class TestIsSchemaChanging:
    """Tests for DDL detection."""

    @pytest.mark.parametrize(
        "sql",
        [
            "CREATE TABLE customers (id INT)",
            "create view v as select 1",
            "ALTER TABLE orders ADD COLUMN note TEXT",
            "DROP TABLE orders",
            "DROP VIEW IF EXISTS v",
            "TRUNCATE TABLE orders",
            "RENAME TABLE orders TO old_orders",
            "USE shop",
            "  -- make a table\n  CREATE TABLE t (id INT)",
            "INSERT INTO orders VALUES (1); CREATE TABLE t (id INT)",
        ],
    )
    def test_schema_changing(self, sql):
        assert is_schema_changing(sql)

    @pytest.mark.parametrize(
        "sql",
        [
            "SELECT * FROM orders",
            "INSERT INTO orders VALUES (1)",
            "UPDATE orders SET total = 0",
            "DELETE FROM orders",
            "",
            "   ",
            "-- just a comment",
        ],
    )
    def test_not_schema_changing(self, sql):
        assert not is_schema_changing(sql)


class TestShouldRefreshAfter:
    """Tests for the configured refresh trigger."""

    def test_default_refreshes_after_any_non_query(self):
        assert should_refresh_after("INSERT INTO orders VALUES (1)", returned_rows=False)
        assert should_refresh_after("CREATE TABLE t (id INT)", returned_rows=False)

    def test_default_skips_result_sets(self):
        assert not should_refresh_after("SELECT * FROM orders", returned_rows=True)

    def test_ddl_trigger(self):
        trigger = RefreshTrigger.DDL
        assert should_refresh_after("CREATE TABLE t (id INT)", False, trigger)
        assert not should_refresh_after("INSERT INTO orders VALUES (1)", False, trigger)

    def test_never_trigger(self):
        assert not should_refresh_after("CREATE TABLE t (id INT)", False, RefreshTrigger.NEVER)
