"""settings.json access for sqlnote.

The file holds one JSON object whose top-level keys are sections, e.g.
``{"completion": {...}}``. Each reader takes its own section and leaves
the others alone on write.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from textual import log


def settings_path() -> Path:
    """Resolve settings.json from the environment.

    ``SQLNOTE_SETTINGS_PATH`` names the file directly; otherwise it lives in
    ``$SQLNOTE_CONFIG_DIR`` (default ``~/.sqlnote``). Read on every call so
    tests and hosts can redirect it at runtime.
    """
    override = os.environ.get("SQLNOTE_SETTINGS_PATH", "").strip()
    if override:
        return Path(override).expanduser()
    config_dir = os.environ.get("SQLNOTE_CONFIG_DIR", "").strip()
    base = Path(config_dir).expanduser() if config_dir else Path.home() / ".sqlnote"
    return base / "settings.json"


class SettingsStore:
    """Sectioned JSON settings file.

    Args:
        file_path: Location of settings.json. Resolved with settings_path()
            when omitted.
    """

    def __init__(self, file_path: Path | None = None) -> None:
        self._file_path = file_path or settings_path()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def read(self) -> dict[str, Any]:
        """The whole settings object; empty when the file is missing or unusable."""
        if not self._file_path.exists():
            return {}
        try:
            with open(self._file_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as error:
            log.warning(f"Ignoring unreadable settings file {self._file_path}: {error}")
            return {}
        if not isinstance(data, dict):
            log.warning(f"Ignoring settings file {self._file_path}: top level is not an object")
            return {}
        return data

    def get_section(self, key: str) -> dict[str, Any]:
        section = self.read().get(key, {})
        if not isinstance(section, dict):
            log.warning(f"Ignoring settings section '{key}': not an object")
            return {}
        return section

    def set_section(self, key: str, values: dict[str, Any]) -> None:
        """Replace one section and write the file atomically."""
        data = self.read()
        data[key] = values
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self._file_path.parent, prefix=".tmp_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self._file_path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
