"""Candidate store: the immutable completion vocabulary.

A CandidateSet is built once per connect and replaced wholesale on every
metadata refresh. Both views ("all" and "schema-only") and the sorted
fallback list are computed together at build time, so a published set is
never touched again.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .errors import InvalidArgumentError


def candidate_sort_key(text: str) -> tuple[str, bytes]:
    """Case-insensitive order; case variants ordered by byte value."""
    return text.casefold(), text.encode("utf-8")


def _validate_names(names: Iterable[str] | None, label: str) -> frozenset[str]:
    if names is None:
        raise InvalidArgumentError(f"{label} must not be None")
    if isinstance(names, (str, bytes)):
        raise InvalidArgumentError(f"{label} must be a collection of strings, not a single string")
    try:
        items = frozenset(names)
    except TypeError as e:
        raise InvalidArgumentError(f"{label} must be an iterable of strings") from e
    for item in items:
        if not isinstance(item, str):
            raise InvalidArgumentError(f"{label} contains a non-string entry: {item!r}")
        if not item:
            raise InvalidArgumentError(f"{label} contains an empty string")
    return items


@dataclass(frozen=True)
class CandidateSet:
    """Deduplicated completion vocabulary.

    Attributes:
        keywords: SQL keywords and function names.
        schema_names: Catalog, schema, table, view and column names.
        all_completions: keywords | schema_names.
        schema_completions: schema_names alone (always a subset of all_completions).
        sorted_all: all_completions in completion order.
    """

    keywords: frozenset[str]
    schema_names: frozenset[str]
    all_completions: frozenset[str] = field(init=False, repr=False)
    schema_completions: frozenset[str] = field(init=False, repr=False)
    sorted_all: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        combined = self.keywords | self.schema_names
        object.__setattr__(self, "all_completions", combined)
        object.__setattr__(self, "schema_completions", self.schema_names)
        object.__setattr__(self, "sorted_all", tuple(sorted(combined, key=candidate_sort_key)))

    @classmethod
    def empty(cls) -> CandidateSet:
        return cls(frozenset(), frozenset())

    def __len__(self) -> int:
        return len(self.all_completions)

    def __contains__(self, item: object) -> bool:
        return item in self.all_completions


def build_candidate_set(keywords: Iterable[str], schema_names: Iterable[str]) -> CandidateSet:
    """Build a CandidateSet from keywords and schema object names.

    Pure; raises InvalidArgumentError on None, a bare string, or entries
    that are not non-empty strings.
    """
    return CandidateSet(
        keywords=_validate_names(keywords, "keywords"),
        schema_names=_validate_names(schema_names, "schema_names"),
    )


def refresh_schema(current: CandidateSet, new_schema_names: Iterable[str]) -> CandidateSet:
    """Return a new set with ``current``'s keywords and a replaced schema partition."""
    if current is None:
        raise InvalidArgumentError("current candidate set must not be None")
    return CandidateSet(
        keywords=current.keywords,
        schema_names=_validate_names(new_schema_names, "schema_names"),
    )
