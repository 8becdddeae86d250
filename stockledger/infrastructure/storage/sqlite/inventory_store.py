"""SQLite implementation of the inventory ledger."""

import aiosqlite

from stockledger.config import get_logger, get_settings
from stockledger.config.settings import LedgerSettings
from stockledger.core.entities.catalog import ItemCategory
from stockledger.core.entities.inventory import InventoryRecord
from stockledger.core.exceptions import InventoryRecordNotFoundError
from stockledger.core.interfaces.inventory_store import IInventoryLedger
from stockledger.infrastructure.storage.sqlite.base import (
    SQLiteStore,
    parse_timestamp,
    utcnow,
)

logger = get_logger(__name__)


class SQLiteInventoryLedger(SQLiteStore, IInventoryLedger):
    """Stock level per SKU, updated by signed deltas."""

    def __init__(
        self,
        conn: aiosqlite.Connection | None = None,
        settings: LedgerSettings | None = None,
    ):
        super().__init__(conn)
        self._settings = settings or get_settings().ledger

    async def get(self, sku: str) -> InventoryRecord | None:
        async with self._reader() as conn:
            return await self._fetch(conn, sku.strip())

    async def apply_delta(
        self,
        sku: str,
        quantity: float,
        name: str,
        category: ItemCategory,
    ) -> InventoryRecord:
        """Add a signed delta, provisioning the record on first touch."""
        sku = sku.strip()
        now = utcnow().isoformat()
        async with self._writer() as conn:
            await conn.execute(
                """
                INSERT INTO inventory_records (
                    sku, name, category, unit, stock_level,
                    min_threshold, created_at, last_updated
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(sku) DO UPDATE SET
                    stock_level = stock_level + excluded.stock_level,
                    last_updated = excluded.last_updated
                """,
                (
                    sku,
                    name or sku,
                    category.value,
                    self._settings.default_unit,
                    quantity,
                    self._settings.default_min_threshold,
                    now,
                    now,
                ),
            )
            record = await self._fetch(conn, sku)

        logger.debug(
            "stock_level_changed",
            sku=sku,
            delta=quantity,
            stock_level=record.stock_level,
        )
        return record

    async def update_details(self, record: InventoryRecord) -> InventoryRecord:
        """Update descriptive fields; the stock level is left untouched."""
        async with self._writer() as conn:
            cursor = await conn.execute(
                """
                UPDATE inventory_records SET
                    name = ?,
                    category = ?,
                    unit = ?,
                    min_threshold = ?,
                    last_updated = ?
                WHERE sku = ?
                """,
                (
                    record.name,
                    record.category.value,
                    record.unit,
                    record.min_threshold,
                    utcnow().isoformat(),
                    record.sku,
                ),
            )
            if cursor.rowcount == 0:
                raise InventoryRecordNotFoundError(record.sku)
            updated = await self._fetch(conn, record.sku)

        logger.info("inventory_record_updated", sku=record.sku)
        return updated

    async def list_records(
        self, limit: int = 100, offset: int = 0
    ) -> list[InventoryRecord]:
        async with self._reader() as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory_records ORDER BY sku LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def list_low_stock(
        self, limit: int = 100, offset: int = 0
    ) -> list[InventoryRecord]:
        async with self._reader() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_records
                WHERE stock_level <= min_threshold
                ORDER BY stock_level - min_threshold, sku
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def _fetch(self, conn: aiosqlite.Connection, sku: str) -> InventoryRecord | None:
        cursor = await conn.execute(
            "SELECT * FROM inventory_records WHERE sku = ?", (sku,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    def _row_to_record(self, row: aiosqlite.Row) -> InventoryRecord:
        """Convert database row to InventoryRecord."""
        return InventoryRecord(
            sku=row["sku"],
            name=row["name"],
            category=ItemCategory(row["category"]),
            unit=row["unit"],
            stock_level=row["stock_level"],
            min_threshold=row["min_threshold"],
            created_at=parse_timestamp(row["created_at"]),
            last_updated=parse_timestamp(row["last_updated"]),
        )
