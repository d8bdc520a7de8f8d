"""Connection domain models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any


@dataclass
class ConnectionConfig:
    """Database connection configuration."""

    name: str
    db_type: str = "sqlite"  # Database type: sqlite, mysql, mariadb
    # Server-based database fields (MySQL, MariaDB)
    server: str = ""
    port: str = ""  # Default derived from the provider
    database: str = ""
    username: str = ""
    password: str | None = None
    # Provider-specific options (file_path, charset, connect_timeout, etc.)
    options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConnectionConfig:
        """Create a ConnectionConfig from a dict.

        Accepts ``host`` as an alias for ``server``; keys that are not
        dataclass fields are moved into ``options``.
        """
        payload = dict(data)

        if "host" in payload and "server" not in payload:
            payload["server"] = payload.pop("host")

        db_type = payload.get("db_type")
        if not isinstance(db_type, str) or not db_type:
            payload["db_type"] = "sqlite"

        raw_options = payload.pop("options", None)
        options: dict[str, Any] = {}
        if isinstance(raw_options, dict):
            options.update(raw_options)

        base_fields = {f.name for f in fields(cls)}
        for key in list(payload.keys()):
            if key in base_fields:
                continue
            if key not in options:
                options[key] = payload.pop(key)
            else:
                payload.pop(key)

        payload["options"] = options
        return cls(**payload)

    @property
    def file_path(self) -> str:
        return str(self.options.get("file_path", ""))

    def get_option(self, name: str, default: Any | None = None) -> Any:
        return self.options.get(name, default)

    def set_option(self, name: str, value: Any) -> None:
        self.options[name] = value
