"""Completion engine: vocabulary lifecycle and per-keystroke completion.

The host calls ``on_connect``/``on_disconnect`` around a session,
``notify_schema_may_have_changed`` after statements that may have altered
the schema, and ``complete`` on every completion request.

``complete`` only ever reads the currently published CandidateSet. Metadata
is fetched on a background pool and published by swapping one reference.
Each fetch is numbered when it starts; a fetch publishes only if no newer
fetch has published already and no disconnect happened since it started.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING

from textual import log

from sqlnote.config import CompletionSettings, load_completion_settings

from .candidates import CandidateSet, build_candidate_set, refresh_schema
from .errors import NotReadyError
from .keywords import load_keywords
from .matcher import complete as complete_candidates
from .metadata import fetch_schema_names
from .refresh import RefreshState, should_refresh_after
from .tokenizer import validate_cursor

if TYPE_CHECKING:
    from sqlnote.domains.connections.app.session import ConnectionSession

KeywordLoader = Callable[..., frozenset[str]]
MetadataFetcher = Callable[..., frozenset[str]]


def _resolved(value: bool) -> Future[bool]:
    future: Future[bool] = Future()
    future.set_result(value)
    return future


class CompletionEngine:
    """SQL completion for one interactive session at a time.

    Args:
        settings: Engine settings. Loaded from settings.json when omitted.
        keyword_loader: Builds the keyword vocabulary for a session.
        metadata_fetcher: Reads schema object names for a session; raises
            MetadataError on failure.
    """

    def __init__(
        self,
        settings: CompletionSettings | None = None,
        *,
        keyword_loader: KeywordLoader = load_keywords,
        metadata_fetcher: MetadataFetcher = fetch_schema_names,
    ) -> None:
        self._settings = settings if settings is not None else load_completion_settings()
        self._keyword_loader = keyword_loader
        self._metadata_fetcher = metadata_fetcher
        self._pool = ThreadPoolExecutor(
            max_workers=max(1, self._settings.max_workers),
            thread_name_prefix="sqlnote-refresh-",
        )
        # Guards writers only; complete() reads _candidates without locking.
        self._lock = threading.Lock()
        self._session: ConnectionSession | None = None
        self._candidates: CandidateSet | None = None
        self._state = RefreshState.STALE
        self._sequence = 0
        self._published_sequence = 0
        self._floor = 0
        self._closed = False

    @property
    def settings(self) -> CompletionSettings:
        return self._settings

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def session(self) -> ConnectionSession | None:
        return self._session

    @property
    def candidates(self) -> CandidateSet | None:
        """The currently published vocabulary, or None before the first build."""
        return self._candidates

    @property
    def is_ready(self) -> bool:
        return self._candidates is not None

    def on_connect(self, session: ConnectionSession, *, wait: bool = False) -> Future[bool]:
        """Attach a session and start the initial vocabulary build.

        Returns a future resolving to True once the build is published. With
        ``wait=True`` the call blocks until the build has finished.
        """
        with self._lock:
            self._session = session
            self._candidates = None
            self._state = RefreshState.STALE
            self._floor = self._sequence
        log.info(f"Completion engine attached to '{session.name}'")
        future = self._schedule(session)
        if wait:
            future.result()
        return future

    def on_disconnect(self) -> None:
        """Discard the vocabulary; in-flight fetches will not publish."""
        with self._lock:
            session = self._session
            self._session = None
            self._candidates = None
            self._state = RefreshState.STALE
            self._floor = self._sequence
        if session is not None:
            log.info(f"Completion engine detached from '{session.name}'")

    def notify_schema_may_have_changed(self, *, wait: bool = False) -> Future[bool]:
        """Re-read schema metadata in the background and republish.

        On failure the previous vocabulary keeps being served. Without an
        attached session this does nothing and resolves to False.
        """
        session = self._session
        if session is None:
            return _resolved(False)
        future = self._schedule(session)
        if wait:
            future.result()
        return future

    def notify_statement_executed(self, statement: str, returned_rows: bool) -> Future[bool] | None:
        """Refresh if the configured trigger says ``statement`` may have changed the schema."""
        if not should_refresh_after(statement, returned_rows, self._settings.refresh_trigger):
            return None
        return self.notify_schema_may_have_changed()

    def complete(self, buffer: str, cursor: int) -> list[str]:
        """Completion candidates for the partial word before ``cursor``.

        Returns an empty list when no vocabulary has been built yet.

        Raises:
            InvalidArgumentError: If ``buffer`` or ``cursor`` are malformed.
        """
        validate_cursor(buffer, cursor)
        candidates = self._candidates
        if candidates is None:
            return []
        return complete_candidates(candidates, buffer, cursor, self._settings.max_results)

    def complete_or_raise(self, buffer: str, cursor: int) -> list[str]:
        """Like complete(), but raises NotReadyError before the first build."""
        validate_cursor(buffer, cursor)
        candidates = self._candidates
        if candidates is None:
            raise NotReadyError()
        return complete_candidates(candidates, buffer, cursor, self._settings.max_results)

    def close(self) -> None:
        """Detach and stop the background pool. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self.on_disconnect()
        self._pool.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> CompletionEngine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _schedule(self, session: ConnectionSession) -> Future[bool]:
        with self._lock:
            self._sequence += 1
            sequence = self._sequence
        try:
            return self._pool.submit(self._refresh, session, sequence)
        except RuntimeError:
            # Pool already shut down by close()
            return _resolved(False)

    def _refresh(self, session: ConnectionSession, sequence: int) -> bool:
        # Runs on the pool; nothing may escape into the Future handed to the host.
        try:
            candidates = self._build(session)
        except Exception as error:
            self._on_refresh_failed(session, sequence, error)
            return False
        return self._publish(session, sequence, candidates)

    def _build(self, session: ConnectionSession) -> CandidateSet:
        names = self._metadata_fetcher(
            session,
            timeout=self._settings.metadata_timeout,
            include_columns=self._settings.include_columns,
        )
        current = self._candidates
        if current is not None:
            return refresh_schema(current, names)
        keywords = self._keyword_loader(
            session,
            include_driver_keywords=self._settings.include_driver_keywords,
            timeout=self._settings.metadata_timeout,
        )
        return build_candidate_set(keywords, names)

    def _is_current(self, session: ConnectionSession, sequence: int) -> bool:
        return session is self._session and sequence > self._floor

    def _publish(self, session: ConnectionSession, sequence: int, candidates: CandidateSet) -> bool:
        with self._lock:
            if not self._is_current(session, sequence) or sequence <= self._published_sequence:
                superseded = True
            else:
                superseded = False
                self._candidates = candidates
                self._published_sequence = sequence
                self._state = RefreshState.FRESH
        if superseded:
            log.warning(f"Discarded superseded metadata fetch #{sequence} for '{session.name}'")
            return False
        log.info(
            f"Published completion vocabulary #{sequence} for '{session.name}': "
            f"{len(candidates.keywords)} keywords, {len(candidates.schema_names)} schema names"
        )
        return True

    def _on_refresh_failed(self, session: ConnectionSession, sequence: int, error: Exception) -> None:
        with self._lock:
            if not self._is_current(session, sequence):
                return
            has_previous = self._candidates is not None
        if has_previous:
            log.warning(f"Metadata refresh failed for '{session.name}', keeping previous vocabulary: {error}")
        else:
            log.error(f"Cannot build completion vocabulary for '{session.name}': {error}")
