"""Unit tests for provider registry and connection config parsing."""

from __future__ import annotations

import pytest

from sqlnote.domains.connections.domain.config import ConnectionConfig
from sqlnote.domains.connections.providers import registry
from sqlnote.domains.connections.providers.exceptions import UnknownDatabaseTypeError
from sqlnote.domains.connections.providers.mysql.adapter import MariaDBAdapter, MySQLAdapter
from sqlnote.domains.connections.providers.sqlite.adapter import SQLiteAdapter


class TestProviderRegistry:
    """Tests for provider discovery and adapter lookup."""

    def test_supported_types(self):
        assert {"sqlite", "mysql", "mariadb"} <= set(registry.get_supported_db_types())

    @pytest.mark.parametrize(
        "db_type,adapter_class",
        [("sqlite", SQLiteAdapter), ("mysql", MySQLAdapter), ("mariadb", MariaDBAdapter)],
    )
    def test_get_adapter(self, db_type, adapter_class):
        assert type(registry.get_adapter(db_type)) is adapter_class

    def test_unknown_type(self):
        with pytest.raises(UnknownDatabaseTypeError) as exc_info:
            registry.get_adapter("nosuchdb")
        assert exc_info.value.db_type == "nosuchdb"

    def test_default_ports(self):
        assert registry.get_default_port("mysql") == "3306"
        assert registry.get_default_port("sqlite") == ""

    def test_display_name_falls_back_to_type(self):
        assert registry.get_display_name("nosuchdb") == "nosuchdb"

    def test_normalize_fills_port(self):
        config = registry.normalize_connection_config(ConnectionConfig(name="m", db_type="mysql"))
        assert config.port == "3306"

    def test_normalize_keeps_explicit_port(self):
        config = registry.normalize_connection_config(ConnectionConfig(name="m", db_type="mysql", port="3307"))
        assert config.port == "3307"

    def test_normalize_file_based(self):
        config = registry.normalize_connection_config(ConnectionConfig(name="s", db_type="sqlite"))
        assert config.port == ""


class TestConnectionConfig:
    """Tests for ConnectionConfig.from_dict."""

    def test_host_alias(self):
        config = ConnectionConfig.from_dict({"name": "m", "db_type": "mysql", "host": "db.local"})
        assert config.server == "db.local"

    def test_unknown_keys_become_options(self):
        config = ConnectionConfig.from_dict({"name": "s", "file_path": "/tmp/x.db", "charset": "utf8"})
        assert config.file_path == "/tmp/x.db"
        assert config.get_option("charset") == "utf8"

    def test_explicit_options_win(self):
        config = ConnectionConfig.from_dict({"name": "s", "file_path": "a.db", "options": {"file_path": "b.db"}})
        assert config.file_path == "b.db"

    def test_missing_db_type_defaults_to_sqlite(self):
        assert ConnectionConfig.from_dict({"name": "s", "db_type": None}).db_type == "sqlite"

    def test_set_option(self):
        config = ConnectionConfig(name="s")
        config.set_option("file_path", ":memory:")
        assert config.file_path == ":memory:"
