"""Database provider interfaces and registry."""

from sqlnote.domains.connections.providers.adapters.base import ColumnInfo, DatabaseAdapter, TableInfo
from sqlnote.domains.connections.providers.exceptions import MissingDriverError, UnknownDatabaseTypeError
from sqlnote.domains.connections.providers.registry import (
    ProviderSpec,
    get_adapter,
    get_adapter_class,
    get_display_name,
    get_provider_spec,
    get_supported_db_types,
    normalize_connection_config,
    register_provider,
)

__all__ = [
    "ColumnInfo",
    "DatabaseAdapter",
    "MissingDriverError",
    "ProviderSpec",
    "TableInfo",
    "UnknownDatabaseTypeError",
    "get_adapter",
    "get_adapter_class",
    "get_display_name",
    "get_provider_spec",
    "get_supported_db_types",
    "normalize_connection_config",
    "register_provider",
]
