"""
Schema migrations for the ledger database.

Scripts live next to this module as ``vNNN_name.sql`` and run in version
order. Each script and its ``schema_migrations`` row are written in one
transaction, so a failed script leaves no partial schema behind. A recorded
script whose file has changed since is reported as drifted and is not re-run.
"""

import hashlib
import re
import time
from dataclasses import dataclass
from pathlib import Path

import aiosqlite

from stockledger.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

_FILENAME = re.compile(r"v(\d+)_(\w+)\.sql")

REQUIRED_TABLES = [
    "catalog_items",
    "catalog_bom",
    "inventory_records",
    "stock_movements",
    "source_documents",
    "metadata",
    "schema_migrations",
]

# Movement log rows may only be inserted
REQUIRED_TRIGGERS = [
    "stock_movements_no_update",
    "stock_movements_no_delete",
]


@dataclass
class MigrationInfo:
    """A migration script found on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = _FILENAME.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        checksum = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=checksum,
        )


@dataclass
class MigrationResult:
    """Outcome of applying one migration."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations() -> list[MigrationInfo]:
    """Migration scripts in version order; misnamed files are skipped."""
    migrations = []
    for path in sorted(MIGRATIONS_DIR.glob("v*.sql")):
        try:
            migrations.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


async def _recorded(conn: aiosqlite.Connection) -> dict[str, str]:
    """Recorded migration versions mapped to their checksums."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def _apply(conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
    logger.info("applying_migration", version=migration.version, name=migration.name)
    started = time.perf_counter()

    def elapsed() -> int:
        return int((time.perf_counter() - started) * 1000)

    try:
        sql = migration.path.read_text(encoding="utf-8")
        await conn.executescript(f"BEGIN IMMEDIATE;\n{sql}\n")
        await conn.execute(
            """
            INSERT INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, elapsed()),
        )
        await conn.execute("COMMIT")
    except aiosqlite.Error as e:
        if conn.in_transaction:
            await conn.execute("ROLLBACK")
        logger.error(
            "migration_failed",
            version=migration.version,
            name=migration.name,
            error=str(e),
        )
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=elapsed(),
            error=str(e),
        )

    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        execution_time_ms=elapsed(),
    )
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed(),
    )


async def initialize_database(db_path: Path | None = None) -> list[MigrationResult]:
    """
    Apply pending migrations to the ledger database.

    Stops at the first failing migration. Already recorded migrations are
    skipped, including drifted ones.

    Returns:
        Results of the migrations attempted in this run, in order.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    results: list[MigrationResult] = []
    async with aiosqlite.connect(db_path, isolation_level=None) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")

        recorded = await _recorded(conn)
        for migration in discover_migrations():
            if migration.version in recorded:
                if recorded[migration.version] != migration.checksum:
                    logger.warning("migration_checksum_drift", version=migration.version)
                continue

            result = await _apply(conn, migration)
            results.append(result)
            if not result.success:
                break

    return results


run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Current version plus applied, pending and drifted migration versions."""
    db_path = db_path or get_settings().storage.db_path
    discovered = discover_migrations()

    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": [m.version for m in discovered],
            "drifted_migrations": [],
            "total_migrations": len(discovered),
        }

    async with aiosqlite.connect(db_path) as conn:
        recorded = await _recorded(conn)

    applied = sorted(recorded)
    return {
        "exists": True,
        "current_version": applied[-1] if applied else None,
        "applied_migrations": applied,
        "pending_migrations": [m.version for m in discovered if m.version not in recorded],
        "drifted_migrations": [
            m.version
            for m in discovered
            if m.version in recorded and recorded[m.version] != m.checksum
        ],
        "total_migrations": len(discovered),
    }


def _check(name: str, passed: bool, **details) -> dict:
    return {"check": name, "status": "PASS" if passed else "FAIL", **details}


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """
    Check the ledger database for damage and missing schema objects.

    Returns one dict per check with ``check``, ``status`` (PASS or FAIL) and
    the details of any failure.
    """
    db_path = db_path or get_settings().storage.db_path
    status = await get_migration_status(db_path)

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA integrity_check")
        integrity = (await cursor.fetchone())[0]

        cursor = await conn.execute("PRAGMA foreign_key_check")
        fk_violations = await cursor.fetchall()

        cursor = await conn.execute("SELECT type, name FROM sqlite_master")
        objects = await cursor.fetchall()

    tables = {name for kind, name in objects if kind == "table"}
    triggers = {name for kind, name in objects if kind == "trigger"}
    missing_tables = [t for t in REQUIRED_TABLES if t not in tables]
    missing_triggers = [t for t in REQUIRED_TRIGGERS if t not in triggers]

    return [
        _check("integrity", integrity == "ok", result=integrity),
        _check("foreign_keys", not fk_violations, violations=len(fk_violations)),
        _check(
            "migrations_current",
            not status["pending_migrations"] and not status["drifted_migrations"],
            pending=status["pending_migrations"],
            drifted=status["drifted_migrations"],
        ),
        _check("required_tables", not missing_tables, missing=missing_tables),
        _check("movement_immutability", not missing_triggers, missing=missing_triggers),
    ]
