"""Provider registry and lazy loading for database adapters."""

from __future__ import annotations

import pkgutil
from dataclasses import dataclass
from functools import lru_cache
from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlnote.domains.connections.domain.config import ConnectionConfig
    from sqlnote.domains.connections.providers.adapters.base import DatabaseAdapter


@dataclass(frozen=True)
class ProviderSpec:
    db_type: str
    display_name: str
    adapter_path: tuple[str, str]
    is_file_based: bool = False
    default_port: str = ""


_PROVIDERS: dict[str, ProviderSpec] = {}
_DISCOVERED = False


def register_provider(spec: ProviderSpec) -> None:
    """Register a provider specification."""
    _PROVIDERS[spec.db_type] = spec


def _discover_providers() -> None:
    """Discover provider packages and import their registrations."""
    global _DISCOVERED
    if _DISCOVERED:
        return

    if __package__ is None:
        return
    package = import_module(__package__)
    for module_info in pkgutil.iter_modules(package.__path__):
        name = module_info.name
        if not module_info.ispkg:
            continue
        if name in {"adapters", "__pycache__"}:
            continue
        import_module(f"{__package__}.{name}.provider")

    _DISCOVERED = True


def get_supported_db_types() -> list[str]:
    _discover_providers()
    return list(_PROVIDERS.keys())


def get_provider_spec(db_type: str) -> ProviderSpec:
    _discover_providers()
    spec = _PROVIDERS.get(db_type)
    if spec is None:
        from sqlnote.domains.connections.providers.exceptions import UnknownDatabaseTypeError

        raise UnknownDatabaseTypeError(db_type)
    return spec


def normalize_connection_config(config: ConnectionConfig) -> ConnectionConfig:
    """Fill in provider defaults such as the port."""
    spec = get_provider_spec(config.db_type)
    if not config.port and spec.default_port and not spec.is_file_based:
        config.port = spec.default_port
    return config


def get_adapter(db_type: str) -> DatabaseAdapter:
    return get_adapter_class(db_type)()


def get_adapter_class(db_type: str) -> type[DatabaseAdapter]:
    spec = get_provider_spec(db_type)
    module_name, class_name = spec.adapter_path
    return _load_adapter_class(module_name, class_name)


@lru_cache(maxsize=None)
def _load_adapter_class(module_name: str, class_name: str) -> type[DatabaseAdapter]:
    module = import_module(module_name)
    adapter_class = getattr(module, class_name, None)
    if not isinstance(adapter_class, type):
        raise ImportError(f"Adapter class '{class_name}' not found in {module_name}")
    return adapter_class


def get_default_port(db_type: str) -> str:
    return get_provider_spec(db_type).default_port


def get_display_name(db_type: str) -> str:
    _discover_providers()
    spec = _PROVIDERS.get(db_type)
    return spec.display_name if spec else db_type
