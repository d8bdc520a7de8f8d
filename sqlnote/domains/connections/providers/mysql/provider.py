"""Provider registration for MySQL and MariaDB."""

from sqlnote.domains.connections.providers.registry import ProviderSpec, register_provider

SPEC = ProviderSpec(
    db_type="mysql",
    display_name="MySQL",
    adapter_path=("sqlnote.domains.connections.providers.mysql.adapter", "MySQLAdapter"),
    default_port="3306",
)

MARIADB_SPEC = ProviderSpec(
    db_type="mariadb",
    display_name="MariaDB",
    adapter_path=("sqlnote.domains.connections.providers.mysql.adapter", "MariaDBAdapter"),
    default_port="3306",
)

register_provider(SPEC)
register_provider(MARIADB_SPEC)
