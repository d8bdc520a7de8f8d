"""SQL completion engine.

Provides keystroke-time SQL completion with:
- A keyword vocabulary (ANSI keywords, common functions, dialect words)
- Schema object names reflected from the live database
- Case-insensitive prefix matching with deterministic ordering
- Background metadata refresh that never blocks completion
"""

from .candidates import CandidateSet, build_candidate_set, candidate_sort_key, refresh_schema
from .engine import CompletionEngine
from .errors import CompletionError, InvalidArgumentError, MetadataError, NotReadyError
from .keywords import (
    SQL_FUNCTIONS,
    SQL_KEYWORDS,
    get_all_functions,
    get_all_keywords,
    load_keywords,
    normalize_keywords,
    static_keywords,
)
from .matcher import complete, match_candidates
from .metadata import collect_schema_names, fetch_schema_names
from .refresh import RefreshState, is_schema_changing, should_refresh_after
from .tokenizer import PartialToken, extract_partial_token, is_identifier_char

__all__ = [
    # Main API
    "CompletionEngine",
    "complete",
    "match_candidates",
    # Types
    "CandidateSet",
    "PartialToken",
    "RefreshState",
    # Errors
    "CompletionError",
    "InvalidArgumentError",
    "MetadataError",
    "NotReadyError",
    # Vocabulary
    "SQL_FUNCTIONS",
    "SQL_KEYWORDS",
    "build_candidate_set",
    "candidate_sort_key",
    "collect_schema_names",
    "fetch_schema_names",
    "get_all_functions",
    "get_all_keywords",
    "load_keywords",
    "normalize_keywords",
    "refresh_schema",
    "static_keywords",
    # Helpers
    "extract_partial_token",
    "is_identifier_char",
    "is_schema_changing",
    "should_refresh_after",
]
