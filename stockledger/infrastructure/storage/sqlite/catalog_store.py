"""SQLite implementation of catalog storage."""

import aiosqlite

from stockledger.config import get_logger
from stockledger.core.entities.catalog import (
    BOMComponent,
    CatalogEntry,
    ItemCategory,
    ItemKind,
)
from stockledger.core.interfaces.catalog_store import ICatalogStore
from stockledger.infrastructure.storage.sqlite.base import (
    SQLiteStore,
    parse_timestamp,
    utcnow,
)

logger = get_logger(__name__)


class SQLiteCatalogStore(SQLiteStore, ICatalogStore):
    """SQLite implementation of catalog entries and their BOM lines."""

    async def get(self, sku: str) -> CatalogEntry | None:
        """Get catalog entry by SKU."""
        async with self._reader() as conn:
            cursor = await conn.execute(
                "SELECT * FROM catalog_items WHERE sku = ?", (sku.strip(),)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            bom = await self._load_bom(conn, row["sku"])
            return self._row_to_entry(row, bom)

    async def save(self, entry: CatalogEntry) -> CatalogEntry:
        """Create or replace a catalog entry and its BOM."""
        saved = entry.model_copy(deep=True)
        existing = await self.get(saved.sku)
        now = utcnow()
        if existing is not None:
            saved.created_at = existing.created_at
        saved.updated_at = now

        async with self._writer() as conn:
            await conn.execute(
                """
                INSERT INTO catalog_items (
                    sku, id, name, description, hsn_code, gst_percentage,
                    base_price, selling_price, unit_of_measure, category,
                    kind, image_url, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(sku) DO UPDATE SET
                    id = excluded.id,
                    name = excluded.name,
                    description = excluded.description,
                    hsn_code = excluded.hsn_code,
                    gst_percentage = excluded.gst_percentage,
                    base_price = excluded.base_price,
                    selling_price = excluded.selling_price,
                    unit_of_measure = excluded.unit_of_measure,
                    category = excluded.category,
                    kind = excluded.kind,
                    image_url = excluded.image_url,
                    updated_at = excluded.updated_at
                """,
                (
                    saved.sku,
                    saved.id,
                    saved.name,
                    saved.description,
                    saved.hsn_code,
                    saved.gst_percentage,
                    saved.base_price,
                    saved.selling_price,
                    saved.unit_of_measure,
                    saved.category.value,
                    saved.kind.value,
                    saved.image_url,
                    saved.created_at.isoformat(),
                    saved.updated_at.isoformat(),
                ),
            )
            await conn.execute("DELETE FROM catalog_bom WHERE parent_sku = ?", (saved.sku,))
            await conn.executemany(
                """
                INSERT INTO catalog_bom (parent_sku, position, component_sku, quantity)
                VALUES (?, ?, ?, ?)
                """,
                [
                    (saved.sku, position, component.sku, component.quantity)
                    for position, component in enumerate(saved.bom)
                ],
            )

        logger.info(
            "catalog_item_saved",
            sku=saved.sku,
            bom_components=len(saved.bom),
            created=existing is None,
        )
        return saved

    async def delete(self, sku: str) -> bool:
        """Delete a catalog entry; its BOM lines cascade."""
        async with self._writer() as conn:
            cursor = await conn.execute(
                "DELETE FROM catalog_items WHERE sku = ?", (sku.strip(),)
            )
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("catalog_item_deleted", sku=sku)
        return deleted

    async def list_entries(
        self,
        category: ItemCategory | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[CatalogEntry]:
        """List catalog entries ordered by SKU."""
        async with self._reader() as conn:
            if category is not None:
                cursor = await conn.execute(
                    """
                    SELECT * FROM catalog_items
                    WHERE category = ?
                    ORDER BY sku
                    LIMIT ? OFFSET ?
                    """,
                    (category.value, limit, offset),
                )
            else:
                cursor = await conn.execute(
                    "SELECT * FROM catalog_items ORDER BY sku LIMIT ? OFFSET ?",
                    (limit, offset),
                )
            rows = await cursor.fetchall()
            return [
                self._row_to_entry(row, await self._load_bom(conn, row["sku"]))
                for row in rows
            ]

    @staticmethod
    async def _load_bom(conn: aiosqlite.Connection, sku: str) -> list[BOMComponent]:
        cursor = await conn.execute(
            """
            SELECT component_sku, quantity FROM catalog_bom
            WHERE parent_sku = ?
            ORDER BY position
            """,
            (sku,),
        )
        rows = await cursor.fetchall()
        return [BOMComponent(sku=row["component_sku"], quantity=row["quantity"]) for row in rows]

    def _row_to_entry(self, row: aiosqlite.Row, bom: list[BOMComponent]) -> CatalogEntry:
        """Convert database row to CatalogEntry."""
        return CatalogEntry(
            id=row["id"],
            sku=row["sku"],
            name=row["name"],
            description=row["description"],
            hsn_code=row["hsn_code"],
            gst_percentage=row["gst_percentage"],
            base_price=row["base_price"],
            selling_price=row["selling_price"],
            unit_of_measure=row["unit_of_measure"],
            category=ItemCategory(row["category"]),
            kind=ItemKind(row["kind"]),
            image_url=row["image_url"],
            bom=bom,
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )
