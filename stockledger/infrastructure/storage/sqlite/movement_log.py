"""SQLite implementation of the append-only movement log."""

import math

import aiosqlite

from stockledger.config import get_logger
from stockledger.core.entities.inventory import Movement, MovementKind
from stockledger.core.exceptions import ValidationError
from stockledger.core.interfaces.inventory_store import IMovementLog
from stockledger.infrastructure.storage.sqlite.base import SQLiteStore, parse_timestamp

logger = get_logger(__name__)


class SQLiteMovementLog(SQLiteStore, IMovementLog):
    """
    Stock movements in insertion order.

    Rows are never updated or deleted; the schema enforces it with triggers.
    """

    async def record(
        self,
        sku: str,
        kind: MovementKind,
        quantity: float,
        reference_id: str,
        note: str | None = None,
    ) -> Movement:
        sku = sku.strip() if sku else ""
        if not sku:
            raise ValidationError("sku", "must not be empty", sku)
        if not math.isfinite(quantity):
            raise ValidationError("quantity", "must be a finite number", quantity)

        movement = Movement(
            sku=sku,
            kind=kind,
            quantity=quantity,
            reference_id=reference_id,
            note=note,
        )
        async with self._writer() as conn:
            await conn.execute(
                """
                INSERT INTO stock_movements (
                    id, sku, kind, quantity, reference_id, note, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    movement.id,
                    movement.sku,
                    movement.kind.value,
                    movement.quantity,
                    movement.reference_id,
                    movement.note,
                    movement.created_at.isoformat(),
                ),
            )
        return movement

    async def list_for_sku(self, sku: str, limit: int = 100) -> list[Movement]:
        async with self._reader() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM stock_movements
                WHERE sku = ?
                ORDER BY seq DESC
                LIMIT ?
                """,
                (sku.strip(), limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def list_for_reference(self, reference_id: str) -> list[Movement]:
        async with self._reader() as conn:
            cursor = await conn.execute(
                "SELECT * FROM stock_movements WHERE reference_id = ? ORDER BY seq",
                (reference_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def list_all(self, limit: int = 100, offset: int = 0) -> list[Movement]:
        async with self._reader() as conn:
            cursor = await conn.execute(
                "SELECT * FROM stock_movements ORDER BY seq DESC LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def sum_by_sku(self) -> dict[str, float]:
        async with self._reader() as conn:
            cursor = await conn.execute(
                "SELECT sku, SUM(quantity) AS total FROM stock_movements GROUP BY sku"
            )
            rows = await cursor.fetchall()
            return {row["sku"]: row["total"] for row in rows}

    def _row_to_movement(self, row: aiosqlite.Row) -> Movement:
        """Convert database row to Movement."""
        return Movement(
            id=row["id"],
            sku=row["sku"],
            kind=MovementKind(row["kind"]),
            quantity=row["quantity"],
            reference_id=row["reference_id"],
            note=row["note"],
            created_at=parse_timestamp(row["created_at"]),
        )
