"""In-memory store doubles for commit service tests.

The doubles share one state object; a transaction snapshots it on entry and
restores it when the block raises, so atomicity can be asserted without SQLite.
"""

import copy
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import pytest

from stockledger.config.settings import LedgerSettings
from stockledger.core.entities.catalog import CatalogEntry
from stockledger.core.entities.documents import DocumentKind
from stockledger.core.entities.inventory import InventoryRecord, Movement
from stockledger.core.interfaces import (
    ICatalogStore,
    IDocumentStore,
    IInventoryLedger,
    IMovementLog,
    ITransactionManager,
)
from stockledger.core.interfaces.transaction import StoreSession
from stockledger.core.services.document_commit import DocumentCommitService


@dataclass
class LedgerState:
    catalog: dict = field(default_factory=dict)
    records: dict = field(default_factory=dict)
    movements: list = field(default_factory=list)
    documents: dict = field(default_factory=dict)


class FakeCatalog(ICatalogStore):
    def __init__(self, state: LedgerState):
        self.state = state

    async def get(self, sku):
        return self.state.catalog.get(sku)

    async def save(self, entry):
        self.state.catalog[entry.sku] = entry
        return entry

    async def delete(self, sku):
        return self.state.catalog.pop(sku, None) is not None

    async def list_entries(self, category=None, limit=100, offset=0):
        return list(self.state.catalog.values())[offset : offset + limit]


class FakeLedger(IInventoryLedger):
    def __init__(self, state: LedgerState):
        self.state = state

    async def get(self, sku):
        return self.state.records.get(sku)

    async def apply_delta(self, sku, quantity, name, category):
        record = self.state.records.get(sku) or InventoryRecord(
            sku=sku, name=name, category=category
        )
        record = record.model_copy(update={"stock_level": record.stock_level + quantity})
        self.state.records[sku] = record
        return record

    async def update_details(self, record):
        self.state.records[record.sku] = record
        return record

    async def list_records(self, limit=100, offset=0):
        return sorted(self.state.records.values(), key=lambda r: r.sku)[offset : offset + limit]

    async def list_low_stock(self, limit=100, offset=0):
        return [r for r in await self.list_records(limit, offset) if r.is_low_stock]


class FakeMovements(IMovementLog):
    def __init__(self, state: LedgerState):
        self.state = state

    async def record(self, sku, kind, quantity, reference_id, note=None):
        movement = Movement(
            sku=sku, kind=kind, quantity=quantity, reference_id=reference_id, note=note
        )
        self.state.movements.append(movement)
        return movement

    async def list_for_sku(self, sku, limit=100):
        return [m for m in reversed(self.state.movements) if m.sku == sku][:limit]

    async def list_for_reference(self, reference_id):
        return [m for m in self.state.movements if m.reference_id == reference_id]

    async def list_all(self, limit=100, offset=0):
        return list(reversed(self.state.movements))[offset : offset + limit]

    async def sum_by_sku(self):
        totals: dict[str, float] = {}
        for m in self.state.movements:
            totals[m.sku] = totals.get(m.sku, 0.0) + m.quantity
        return totals


class FakeDocuments(IDocumentStore):
    def __init__(self, state: LedgerState):
        self.state = state
        self.fail_on_save: Exception | None = None

    async def save(self, document):
        if self.fail_on_save is not None:
            raise self.fail_on_save
        self.state.documents[(DocumentKind(document.kind), document.id)] = document
        return document

    async def get(self, kind, doc_id):
        return self.state.documents.get((kind, doc_id))

    async def list_documents(self, kind, limit=100, offset=0):
        return [d for (k, _), d in self.state.documents.items() if k == kind]

    async def delete(self, kind, doc_id):
        return self.state.documents.pop((kind, doc_id), None) is not None

    async def is_empty(self):
        return not any(
            k in (DocumentKind.EXPENSE, DocumentKind.SALES) for k, _ in self.state.documents
        )


class FakeTransactions(ITransactionManager):
    """Snapshot-and-restore transactions over the shared state."""

    def __init__(self, state: LedgerState):
        self.state = state
        self.documents = FakeDocuments(state)
        self.opened = 0
        self.conflicts_before_success: list[Exception] = []

    @asynccontextmanager
    async def transaction(self):
        self.opened += 1
        if self.conflicts_before_success:
            raise self.conflicts_before_success.pop(0)
        snapshot = copy.deepcopy(self.state.__dict__)
        try:
            yield StoreSession(
                catalog=FakeCatalog(self.state),
                ledger=FakeLedger(self.state),
                movements=FakeMovements(self.state),
                documents=self.documents,
            )
        except BaseException:
            self.state.__dict__.update(snapshot)
            raise

    @asynccontextmanager
    async def read_transaction(self):
        yield StoreSession(
            catalog=FakeCatalog(self.state),
            ledger=FakeLedger(self.state),
            movements=FakeMovements(self.state),
            documents=self.documents,
        )


@pytest.fixture
def state(cell: CatalogEntry, battery: CatalogEntry) -> LedgerState:
    return LedgerState(catalog={cell.sku: cell, battery.sku: battery})


@pytest.fixture
def transactions(state: LedgerState) -> FakeTransactions:
    return FakeTransactions(state)


@pytest.fixture
def ledger_settings() -> LedgerSettings:
    return LedgerSettings(retry_delay=0.001)


@pytest.fixture
def commit_service(
    state: LedgerState, transactions: FakeTransactions, ledger_settings: LedgerSettings
) -> DocumentCommitService:
    return DocumentCommitService(
        transactions=transactions,
        catalog=FakeCatalog(state),
        ledger=FakeLedger(state),
        settings=ledger_settings,
    )


@pytest.fixture
def service_factory(state: LedgerState, transactions: FakeTransactions):
    """Build a commit service over the shared state with custom settings."""

    def build(settings: LedgerSettings) -> DocumentCommitService:
        return DocumentCommitService(
            transactions=transactions,
            catalog=FakeCatalog(state),
            ledger=FakeLedger(state),
            settings=settings,
        )

    return build
