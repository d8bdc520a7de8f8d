"""Prefix matching over a candidate vocabulary."""

from __future__ import annotations

from collections.abc import Iterable

from .candidates import CandidateSet, candidate_sort_key
from .tokenizer import extract_partial_token


def match_candidates(token: str, candidates: Iterable[str], limit: int | None = None) -> list[str]:
    """Candidates starting with ``token`` (case-insensitive), deduplicated and ordered.

    Args:
        token: Partial word typed by the user. Empty matches everything.
        candidates: Any iterable of candidate strings; repeats are dropped.
        limit: Maximum number of results. None or 0 means unlimited.
    """
    prefix = token.casefold()
    matches = {c for c in candidates if c.casefold().startswith(prefix)}
    ordered = sorted(matches, key=candidate_sort_key)
    if limit:
        return ordered[:limit]
    return ordered


def complete(candidates: CandidateSet, buffer: str, cursor: int, limit: int | None = None) -> list[str]:
    """Completions for the partial token before ``cursor``.

    An empty token returns the whole vocabulary in completion order.

    Raises:
        InvalidArgumentError: If ``cursor`` is outside the buffer.
    """
    token, _ = extract_partial_token(buffer, cursor)
    if not token:
        ordered = list(candidates.sorted_all)
        return ordered[:limit] if limit else ordered
    return match_candidates(token, candidates.sorted_all, limit)
