"""Database operation executor with connection serialization.

This module provides a DatabaseExecutor that serializes all database
operations for a connection session, ensuring thread-safe access to
database connections that may not support concurrent operations.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from .session import ConnectionSession

T = TypeVar("T")


class DatabaseExecutor:
    """Serializes database operations for a connection session.

    All operations are submitted to a single-thread executor so only one
    operation runs at a time on the connection. Statement execution from the
    host and metadata introspection from the completion engine share it.

    Usage:
        future = executor.submit(adapter.get_tables, connection, database)
        result = future.result(timeout=5)
    """

    def __init__(self, session: ConnectionSession):
        self._session = session
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="sqlnote-db-",
        )
        self._lock = threading.Lock()
        self._shutdown = False

    @property
    def session(self) -> ConnectionSession:
        """Get the session this executor is bound to."""
        return self._session

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown

    def submit(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> Future[T]:
        """Submit an operation to the executor.

        Raises:
            RuntimeError: If the executor has been shut down.
        """
        with self._lock:
            if self._shutdown:
                raise RuntimeError("Executor has been shut down")
            return self._executor.submit(fn, *args, **kwargs)

    def run(self, fn: Callable[..., T], *args: Any, timeout: float | None = None, **kwargs: Any) -> T:
        """Submit an operation and wait for its result.

        Raises:
            concurrent.futures.TimeoutError: If ``timeout`` seconds elapse.
            Any exception raised by ``fn``.
        """
        return self.submit(fn, *args, **kwargs).result(timeout=timeout)

    def shutdown(self, wait: bool = True) -> None:
        """Shutdown the executor.

        Args:
            wait: If True, wait for pending operations to complete.
                  If False, cancel pending operations immediately.
        """
        with self._lock:
            if self._shutdown:
                return
            self._shutdown = True

        self._executor.shutdown(wait=wait, cancel_futures=not wait)
