"""Pytest fixtures for sqlnote tests."""

from __future__ import annotations

import os
import sqlite3
import tempfile
from pathlib import Path

import pytest

_TEST_CONFIG_DIR = Path(tempfile.mkdtemp(prefix="sqlnote-test-config-"))
os.environ.setdefault("SQLNOTE_CONFIG_DIR", str(_TEST_CONFIG_DIR))


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point the settings store at a per-test file."""
    monkeypatch.setenv("SQLNOTE_SETTINGS_PATH", str(tmp_path / "settings.json"))
    yield


@pytest.fixture(scope="function")
def sqlite_db_path(tmp_path: Path) -> Path:
    """Create a temporary SQLite database file path."""
    return tmp_path / "test_database.db"


@pytest.fixture(scope="function")
def sqlite_db(sqlite_db_path: Path) -> Path:
    """Create a temporary SQLite database with an orders schema."""
    conn = sqlite3.connect(sqlite_db_path)
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE orders (
            id INTEGER PRIMARY KEY,
            customer TEXT NOT NULL,
            total REAL
        )
    """)

    cursor.execute("""
        CREATE TABLE order_items (
            id INTEGER PRIMARY KEY,
            order_id INTEGER NOT NULL,
            sku TEXT
        )
    """)

    cursor.execute("""
        CREATE VIEW big_orders AS
        SELECT id, customer FROM orders WHERE total > 100
    """)

    cursor.executemany(
        "INSERT INTO orders (id, customer, total) VALUES (?, ?, ?)",
        [(1, "Alice", 50.0), (2, "Bob", 150.0), (3, "Carol", 300.0)],
    )

    conn.commit()
    conn.close()

    return sqlite_db_path


@pytest.fixture(scope="function")
def sqlite_config(sqlite_db: Path):
    """Connection config for the temporary SQLite database."""
    from sqlnote.domains.connections.domain.config import ConnectionConfig

    return ConnectionConfig(name="test-sqlite", db_type="sqlite", options={"file_path": str(sqlite_db)})


@pytest.fixture(scope="function")
def sqlite_session(sqlite_config):
    """An open session on the temporary SQLite database."""
    from sqlnote.domains.connections.app.session import ConnectionSession

    session = ConnectionSession.create(sqlite_config)
    yield session
    session.close()
