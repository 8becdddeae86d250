"""Tests for SQLiteDocumentStore."""

from datetime import UTC, datetime, timedelta

import pytest

from stockledger.core.entities.documents import (
    DocumentKind,
    ExpenseDocument,
    ExpenseType,
    LineItem,
    ManualAdjustment,
    ProductionOrder,
    SalesDocument,
    SalesStatus,
)
from stockledger.infrastructure.storage.sqlite.connection import get_connection
from stockledger.infrastructure.storage.sqlite.document_store import SQLiteDocumentStore


@pytest.fixture
def store(ledger_db) -> SQLiteDocumentStore:
    return SQLiteDocumentStore()


class TestSQLiteDocumentStore:
    async def test_round_trips_each_kind(self, store):
        documents = [
            ExpenseDocument(
                vendor_name="Cell Co",
                type=ExpenseType.INVOICE,
                line_items=[
                    LineItem(description="Cells", sku="CELL-A", quantity=10, is_stocked=True)
                ],
            ),
            SalesDocument(customer_name="Acme", status=SalesStatus.ISSUED),
            ProductionOrder(product_sku="BATT-01", quantity=5, is_stocked=True),
            ManualAdjustment(sku="CELL-A", quantity=-1, note="damaged"),
        ]
        for document in documents:
            await store.save(document)

        for document in documents:
            loaded = await store.get(document.kind, document.id)
            assert type(loaded) is type(document)
            assert loaded == document

    async def test_get_is_scoped_by_kind(self, store):
        document = SalesDocument(customer_name="Acme")
        await store.save(document)
        assert await store.get(DocumentKind.EXPENSE, document.id) is None

    async def test_save_replaces_payload_and_status(self, store):
        document = SalesDocument(customer_name="Acme")
        await store.save(document)

        issued = document.model_copy(update={"status": SalesStatus.ISSUED})
        await store.save(issued)

        assert (await store.get(DocumentKind.SALES, document.id)).status == SalesStatus.ISSUED
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT status FROM source_documents WHERE id = ?", (document.id,)
            )
            assert (await cursor.fetchone())["status"] == "issued"

    async def test_list_newest_first(self, store):
        now = datetime.now(UTC)
        older = SalesDocument(customer_name="Old", created_at=now - timedelta(days=1))
        newer = SalesDocument(customer_name="New", created_at=now)
        await store.save(older)
        await store.save(newer)
        await store.save(ExpenseDocument(vendor_name="Other kind"))

        listed = await store.list_documents(DocumentKind.SALES)
        assert [d.customer_name for d in listed] == ["New", "Old"]
        assert len(await store.list_documents(DocumentKind.SALES, limit=1, offset=1)) == 1

    async def test_delete(self, store):
        document = ExpenseDocument(vendor_name="Cell Co")
        await store.save(document)

        assert await store.delete(DocumentKind.EXPENSE, document.id) is True
        assert await store.get(DocumentKind.EXPENSE, document.id) is None
        assert await store.delete(DocumentKind.EXPENSE, document.id) is False

    async def test_is_empty_counts_only_expense_and_sales(self, store):
        assert await store.is_empty() is True
        await store.save(ManualAdjustment(sku="CELL-A", quantity=1))
        assert await store.is_empty() is True
        await store.save(SalesDocument(customer_name="Acme"))
        assert await store.is_empty() is False
