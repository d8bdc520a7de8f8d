"""Configuration for the sqlnote completion engine.

Settings live under the ``completion`` key of ``settings.json`` in the
config directory (``$SQLNOTE_CONFIG_DIR``, default ``~/.sqlnote``).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from typing import TYPE_CHECKING, Any

from textual import log

if TYPE_CHECKING:
    from sqlnote.domains.shell.store.settings import SettingsStore

SETTINGS_KEY = "completion"


class RefreshTrigger(str, Enum):
    """Which executed statements cause a metadata refresh."""

    NON_QUERY = "non_query"  # every statement that did not return a result set
    DDL = "ddl"
    NEVER = "never"


@dataclass(frozen=True)
class CompletionSettings:
    """Tunable behaviour of the completion engine."""

    metadata_timeout: float = 10.0
    refresh_trigger: RefreshTrigger = RefreshTrigger.NON_QUERY
    include_columns: bool = True
    include_driver_keywords: bool = True
    max_results: int = 0  # 0 means unlimited
    max_workers: int = 2
    max_rows: int = 1000

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CompletionSettings:
        """Create settings from a mapping, ignoring unknown keys and bad values."""
        defaults = cls()
        values: dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            raw = data[f.name]
            default = getattr(defaults, f.name)
            try:
                values[f.name] = _coerce(raw, default)
            except (TypeError, ValueError):
                log.warning(f"Ignoring invalid completion setting {f.name}={raw!r}")
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.value if isinstance(value, Enum) else value
        return result


def _coerce(raw: Any, default: Any) -> Any:
    if isinstance(default, RefreshTrigger):
        return RefreshTrigger(raw)
    if isinstance(default, bool):
        if not isinstance(raw, bool):
            raise TypeError(f"expected bool, got {type(raw).__name__}")
        return raw
    if isinstance(default, int):
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
            raise ValueError(f"expected non-negative int, got {raw!r}")
        return raw
    if isinstance(default, float):
        if isinstance(raw, bool) or not isinstance(raw, (int, float)) or raw <= 0:
            raise ValueError(f"expected positive number, got {raw!r}")
        return float(raw)
    return raw


def load_completion_settings(store: SettingsStore | None = None) -> CompletionSettings:
    """Load completion settings from the settings store."""
    if store is None:
        from sqlnote.domains.shell.store.settings import SettingsStore

        store = SettingsStore()
    return CompletionSettings.from_dict(store.get_section(SETTINGS_KEY))


def save_completion_settings(settings: CompletionSettings, store: SettingsStore | None = None) -> None:
    """Persist completion settings, keeping other settings untouched."""
    if store is None:
        from sqlnote.domains.shell.store.settings import SettingsStore

        store = SettingsStore()
    store.set_section(SETTINGS_KEY, settings.to_dict())
