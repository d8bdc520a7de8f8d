"""Connection session management for sqlnote.

A ConnectionSession is the explicit, per-caller owner of one database
connection. Hosts create one when the user connects and close it on
disconnect; the completion engine only borrows the session handle.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from textual import log

if TYPE_CHECKING:
    from sqlnote.domains.connections.domain.config import ConnectionConfig
    from sqlnote.domains.connections.providers.adapters.base import DatabaseAdapter

    from .executor import DatabaseExecutor


class ConnectionSession:
    """A database connection session with automatic cleanup.

    Usage:
        with ConnectionSession.create(config) as session:
            result = session.executor.run(
                session.adapter.execute, session.connection, query
            )

    Or for long-lived connections (like in a notebook):
        session = ConnectionSession.create(config)
        # ... use session ...
        session.close()  # Must be called explicitly

    Attributes:
        connection: The raw database connection object.
        adapter: The database adapter for this connection.
        config: The original connection configuration.
    """

    def __init__(
        self,
        connection: Any,
        adapter: DatabaseAdapter,
        config: ConnectionConfig,
    ):
        self._connection = connection
        self._adapter = adapter
        self._config = config
        self._closed = False
        self._executor: DatabaseExecutor | None = None

    @classmethod
    def create(
        cls,
        config: ConnectionConfig,
        adapter_factory: Callable[[str], DatabaseAdapter] | None = None,
    ) -> ConnectionSession:
        """Create a new connection session.

        Args:
            config: Connection configuration.
            adapter_factory: Optional factory for creating adapters.
                Defaults to get_adapter from the provider registry.

        Raises:
            MissingDriverError: If the database driver is not installed.
            Any database-specific connection errors.
        """
        from sqlnote.domains.connections.providers.registry import get_adapter, normalize_connection_config

        get_adapter_fn = adapter_factory or get_adapter
        if adapter_factory is None:
            config = normalize_connection_config(config)

        adapter = get_adapter_fn(config.db_type)
        connection = adapter.connect(config)
        log.info(f"Opened {adapter.name} connection '{config.name}'")
        return cls(connection, adapter, config)

    @property
    def connection(self) -> Any:
        """Get the raw database connection object."""
        return self._connection

    @property
    def adapter(self) -> DatabaseAdapter:
        return self._adapter

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def is_closed(self) -> bool:
        """True if the session was closed or the driver reports the connection closed."""
        if self._closed:
            return True
        return self._adapter.is_connection_closed(self._connection)

    @property
    def executor(self) -> DatabaseExecutor:
        """Get or create the database executor for serialized operations.

        Raises:
            RuntimeError: If the session has been closed.
        """
        if self._closed:
            raise RuntimeError("Cannot get executor for closed session")
        if self._executor is None:
            from .executor import DatabaseExecutor

            self._executor = DatabaseExecutor(self)
        return self._executor

    def cancel(self) -> bool:
        """Interrupt the statement currently running on this session.

        Runs on the calling thread: the executor is busy with the statement
        being cancelled. Returns False if nothing could be interrupted.
        """
        if self.is_closed:
            return False
        return self._adapter.cancel(self._connection, self._config)

    def close(self) -> None:
        """Close the session and release all resources.

        Idempotent. Shuts down the executor first so pending operations
        stop, then closes the database connection.
        """
        if self._closed:
            return
        self._closed = True

        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

        if self._connection is not None:
            try:
                self._adapter.disconnect(self._connection)
            except Exception as error:
                log.error(f"Cannot close connection '{self.name}': {error}")
            self._connection = None
        log.info(f"Closed connection '{self.name}'")

    def __enter__(self) -> ConnectionSession:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
