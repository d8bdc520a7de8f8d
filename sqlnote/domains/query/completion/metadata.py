"""Metadata source: schema object names reflected from the live database."""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import CancelledError
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import TYPE_CHECKING, Any

from textual import log

from .errors import MetadataError

if TYPE_CHECKING:
    from sqlnote.domains.connections.app.session import ConnectionSession
    from sqlnote.domains.connections.providers.adapters.base import DatabaseAdapter


def _add_names(target: set[str], names: Iterable[Any]) -> None:
    for name in names:
        if isinstance(name, str) and name:
            target.add(name)


def _target_databases(adapter: DatabaseAdapter, current: str, catalogs: list[str]) -> list[str | None]:
    if not adapter.supports_multiple_databases:
        return [None]
    if current:
        return [current]
    system = {s.lower() for s in adapter.system_databases}
    return [db for db in catalogs if db.lower() not in system] or [None]


def collect_schema_names(
    adapter: DatabaseAdapter,
    conn: Any,
    *,
    current_database: str = "",
    include_columns: bool = True,
) -> set[str]:
    """Gather catalog, schema, table, view and column names with ``adapter``.

    Runs synchronously on the calling thread. Multiple databases and schemas
    are flattened into one namespace.
    """
    names: set[str] = set()

    catalogs: list[str] = []
    if adapter.supports_multiple_databases:
        catalogs = [db for db in adapter.get_databases(conn) if isinstance(db, str)]
        _add_names(names, catalogs)

    for database in _target_databases(adapter, current_database, catalogs):
        _add_names(names, adapter.get_schemas(conn, database))
        relations = adapter.get_tables(conn, database) + adapter.get_views(conn, database)
        _add_names(names, (schema for schema, _ in relations))
        _add_names(names, (name for _, name in relations))
        if include_columns:
            try:
                _add_names(names, adapter.get_all_column_names(conn, database))
            except Exception as error:
                # Columns are optional; the relation names above still publish
                log.warning(f"Cannot read column names from {adapter.name}: {error}")

    return names


def fetch_schema_names(
    session: ConnectionSession,
    *,
    timeout: float | None = None,
    include_columns: bool = True,
) -> frozenset[str]:
    """Read schema object names for a session.

    All driver calls run as one job on the session's executor, so they are
    serialized with statement execution on the same connection.

    Raises:
        MetadataError: If the session is closed, the driver fails, or
            ``timeout`` seconds elapse.
    """
    name = session.name
    if session.is_closed:
        raise MetadataError(f"Connection '{name}' is closed", connection_name=name)

    try:
        future = session.executor.submit(
            collect_schema_names,
            session.adapter,
            session.connection,
            current_database=session.config.database,
            include_columns=include_columns,
        )
    except RuntimeError as e:
        raise MetadataError(f"Connection '{name}' is closed", connection_name=name) from e

    try:
        names = future.result(timeout=timeout)
    except FutureTimeoutError as e:
        future.cancel()
        raise MetadataError(
            f"Timed out after {timeout}s reading metadata for '{name}'", connection_name=name
        ) from e
    except CancelledError as e:
        raise MetadataError(f"Metadata read for '{name}' was cancelled", connection_name=name) from e
    except Exception as e:
        raise MetadataError(f"Cannot read metadata for '{name}': {e}", connection_name=name) from e

    return frozenset(names)
