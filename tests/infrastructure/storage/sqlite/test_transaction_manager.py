"""Tests for SQLiteTransactionManager."""

import pytest

from stockledger.core.entities.catalog import ItemCategory
from stockledger.core.entities.documents import ManualAdjustment
from stockledger.core.entities.inventory import MovementKind
from stockledger.infrastructure.storage.sqlite import (
    SQLiteDocumentStore,
    SQLiteInventoryLedger,
    SQLiteMovementLog,
    SQLiteTransactionManager,
)


@pytest.fixture
def manager(ledger_db) -> SQLiteTransactionManager:
    return SQLiteTransactionManager()


class TestSQLiteTransactionManager:
    async def test_session_stores_share_one_connection(self, manager):
        async with manager.transaction() as session:
            assert session.ledger.is_bound
            assert session.movements._conn is session.documents._conn
            assert session.catalog._conn is session.ledger._conn

    async def test_writes_commit_together(self, manager):
        adjustment = ManualAdjustment(sku="CELL-A", quantity=3, is_stocked=True)
        async with manager.transaction() as session:
            await session.ledger.apply_delta("CELL-A", 3, "Cell", ItemCategory.PARTS)
            await session.movements.record(
                "CELL-A", MovementKind.MANUAL_ADJUSTMENT, 3, adjustment.id
            )
            await session.documents.save(adjustment)
            # reads inside the session see its own writes
            assert (await session.ledger.get("CELL-A")).stock_level == 3

        assert (await SQLiteInventoryLedger().get("CELL-A")).stock_level == 3
        assert len(await SQLiteMovementLog().list_for_reference(adjustment.id)) == 1

    async def test_error_rolls_back_every_store(self, manager):
        adjustment = ManualAdjustment(sku="CELL-A", quantity=3)
        with pytest.raises(RuntimeError):
            async with manager.transaction() as session:
                await session.ledger.apply_delta("CELL-A", 3, "Cell", ItemCategory.PARTS)
                await session.movements.record(
                    "CELL-A", MovementKind.MANUAL_ADJUSTMENT, 3, adjustment.id
                )
                await session.documents.save(adjustment)
                raise RuntimeError("crash before commit")

        assert await SQLiteInventoryLedger().get("CELL-A") is None
        assert await SQLiteMovementLog().list_for_reference(adjustment.id) == []
        assert await SQLiteDocumentStore().get(adjustment.kind, adjustment.id) is None

    async def test_read_session_sees_one_snapshot(self, manager):
        ledger = SQLiteInventoryLedger()
        await ledger.apply_delta("CELL-A", 3, "Cell", ItemCategory.PARTS)

        async with manager.read_transaction() as session:
            assert (await session.ledger.get("CELL-A")).stock_level == 3
            # committed by another connection while the read is open
            await ledger.apply_delta("CELL-A", 2, "Cell", ItemCategory.PARTS)
            assert (await session.ledger.get("CELL-A")).stock_level == 3

        assert (await ledger.get("CELL-A")).stock_level == 5
