"""Provider registration for SQLite."""

from sqlnote.domains.connections.providers.registry import ProviderSpec, register_provider

SPEC = ProviderSpec(
    db_type="sqlite",
    display_name="SQLite",
    adapter_path=("sqlnote.domains.connections.providers.sqlite.adapter", "SQLiteAdapter"),
    is_file_based=True,
)

register_provider(SPEC)
