"""Database migrations module."""

from stockledger.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    REQUIRED_TRIGGERS,
    MigrationInfo,
    MigrationResult,
    discover_migrations,
    get_migration_status,
    initialize_database,
    run_migrations,
    verify_schema_integrity,
)

__all__ = [
    "REQUIRED_TABLES",
    "REQUIRED_TRIGGERS",
    "MigrationInfo",
    "MigrationResult",
    "discover_migrations",
    "get_migration_status",
    "initialize_database",
    "run_migrations",
    "verify_schema_integrity",
]
