"""Tests for the document commit protocol."""

from unittest.mock import AsyncMock

import pytest

from stockledger.config.settings import LedgerSettings
from stockledger.core.entities.catalog import ItemCategory
from stockledger.core.entities.documents import (
    DocumentKind,
    ExpenseDocument,
    ExpenseType,
    LineItem,
    ProductionOrder,
    ProductionStatus,
    SalesDocType,
    SalesDocument,
    SalesStatus,
)
from stockledger.core.entities.inventory import InventoryRecord, MovementKind
from stockledger.core.exceptions import (
    BOMNotDefinedError,
    CatalogItemNotFoundError,
    CatalogReferenceError,
    ConfigurationError,
    DocumentNotFoundError,
    ShortageError,
    TransactionConflictError,
    ValidationError,
)


def _stock(state, sku: str, level: float) -> None:
    state.records[sku] = InventoryRecord(sku=sku, name=sku, stock_level=level)


def _issued_invoice(*lines: LineItem, **kwargs) -> SalesDocument:
    return SalesDocument(
        customer_name="Acme", status=SalesStatus.ISSUED, line_items=list(lines), **kwargs
    )


class TestLineDocuments:
    async def test_purchase_invoice_receives_stock(self, commit_service, state):
        document = ExpenseDocument(
            vendor_name="Cell Co",
            type=ExpenseType.INVOICE,
            line_items=[LineItem(description="Cells", sku="CELL-A", quantity=10)],
        )
        result = await commit_service.save_expense(document)

        assert state.records["CELL-A"].stock_level == 10
        assert state.records["CELL-A"].name == "Li-ion Cell"
        [movement] = result.movements
        assert movement.kind == MovementKind.RECEIPT
        assert movement.reference_id == document.id
        assert result.document.line_items[0].is_stocked is True
        assert result.stock_changed is True
        assert result.attempts == 1

    async def test_argument_is_not_modified(self, commit_service):
        document = _issued_invoice(LineItem(description="x", sku="CELL-A", quantity=1))
        await commit_service.commit(document)
        assert document.line_items[0].is_stocked is False

    async def test_recommit_is_idempotent(self, commit_service, state):
        document = _issued_invoice(LineItem(description="x", sku="CELL-A", quantity=3))
        first = await commit_service.commit(document)
        second = await commit_service.commit(first.document)

        assert state.records["CELL-A"].stock_level == -3
        assert len(state.movements) == 1
        assert second.movements == []
        assert second.stock_changed is False

    async def test_added_line_on_edit_moves_only_new_line(self, commit_service, state):
        first = await commit_service.commit(
            _issued_invoice(LineItem(description="a", sku="CELL-A", quantity=2))
        )
        edited = first.document.model_copy(deep=True)
        edited.line_items.append(LineItem(description="b", sku="WIRE", quantity=5))

        await commit_service.commit(edited)

        assert state.records["CELL-A"].stock_level == -2
        assert state.records["WIRE"].stock_level == -5
        assert len(state.movements) == 2

    async def test_unflagged_resave_uses_stored_flags(self, commit_service, state):
        first = await commit_service.commit(
            _issued_invoice(LineItem(description="x", sku="CELL-A", quantity=3), id="INV-1")
        )
        resubmitted = _issued_invoice(
            LineItem(description="x", sku="CELL-A", quantity=3),
            LineItem(description="y", sku="WIRE", quantity=1),
            id="INV-1",
        )

        result = await commit_service.commit(resubmitted)

        assert state.records["CELL-A"].stock_level == -3
        assert [m.sku for m in result.movements] == ["WIRE"]
        assert [line.is_stocked for line in result.document.line_items] == [True, True]
        assert result.document.created_at == first.document.created_at

    async def test_resubmitted_adjustment_applies_once(self, commit_service, state):
        first = await commit_service.adjust_stock("CELL-A", 2)
        again = first.document.model_copy(update={"is_stocked": False})

        result = await commit_service.commit(again)

        assert result.movements == []
        assert state.records["CELL-A"].stock_level == 2

    async def test_draft_is_saved_without_stock_effect(self, commit_service, state):
        draft = SalesDocument(
            customer_name="Acme",
            line_items=[LineItem(description="x", sku="CELL-A", quantity=2)],
        )
        result = await commit_service.commit(draft)

        assert result.movements == []
        assert state.records == {}
        assert result.document.line_items[0].is_stocked is False
        assert (DocumentKind.SALES, draft.id) in state.documents

    async def test_draft_then_issue_applies_once(self, commit_service, state):
        draft = await commit_service.commit(
            SalesDocument(
                customer_name="Acme",
                line_items=[LineItem(description="x", sku="CELL-A", quantity=2)],
            )
        )
        issued = draft.document.model_copy(update={"status": SalesStatus.ISSUED})
        await commit_service.commit(issued)

        assert state.records["CELL-A"].stock_level == -2

    async def test_credit_note_returns_stock(self, commit_service, state):
        _stock(state, "CELL-A", 1)
        await commit_service.commit(
            _issued_invoice(
                LineItem(description="x", sku="CELL-A", quantity=2),
                type=SalesDocType.CREDIT_NOTE,
            )
        )
        assert state.records["CELL-A"].stock_level == 3
        assert state.movements[0].kind == MovementKind.SALES_RETURN

    async def test_dispatch_may_go_negative(self, commit_service, state):
        _stock(state, "CELL-A", 1)
        await commit_service.commit(
            _issued_invoice(LineItem(description="x", sku="CELL-A", quantity=4))
        )
        assert state.records["CELL-A"].stock_level == -3

    async def test_unknown_sku_is_provisioned(self, commit_service, state):
        await commit_service.commit(
            _issued_invoice(
                LineItem(
                    description="Mystery part",
                    sku="NEW-1",
                    quantity=1,
                    category=ItemCategory.PARTS,
                )
            )
        )
        record = state.records["NEW-1"]
        assert record.name == "Mystery part"
        assert record.category == ItemCategory.PARTS

    async def test_unknown_sku_rejected_under_reject_policy(self, state, service_factory):
        service = service_factory(LedgerSettings(unknown_sku_policy="reject"))
        with pytest.raises(CatalogReferenceError):
            await service.commit(
                _issued_invoice(
                    LineItem(description="ok", sku="CELL-A", quantity=1),
                    LineItem(description="unknown", sku="NEW-1", quantity=1),
                )
            )
        assert state.movements == []
        assert state.documents == {}

    async def test_validation_runs_before_any_transaction(self, commit_service, transactions):
        with pytest.raises(ValidationError):
            await commit_service.commit(SalesDocument(customer_name=""))
        assert transactions.opened == 0


class TestAtomicity:
    async def test_failed_document_save_rolls_back_stock(self, commit_service, state, transactions):
        transactions.documents.fail_on_save = RuntimeError("disk full")
        document = _issued_invoice(LineItem(description="x", sku="CELL-A", quantity=2))

        with pytest.raises(RuntimeError):
            await commit_service.commit(document)

        assert state.records == {}
        assert state.movements == []
        assert state.documents == {}


class TestProduction:
    async def test_run_consumes_and_outputs(self, commit_service, state):
        _stock(state, "CELL-A", 20)
        result = await commit_service.complete_production("BATT-01", 5)

        assert state.records["CELL-A"].stock_level == 0
        assert state.records["BATT-01"].stock_level == 5
        assert [m.kind for m in result.movements] == [
            MovementKind.MANUFACTURING_CONSUMPTION,
            MovementKind.MANUFACTURING_OUTPUT,
        ]
        assert result.document.is_stocked is True

    async def test_shortage_rejects_whole_run(self, commit_service, state, transactions):
        _stock(state, "CELL-A", 4)
        with pytest.raises(ShortageError) as exc_info:
            await commit_service.complete_production("BATT-01", 5)

        [shortage] = exc_info.value.shortages
        assert shortage == {"sku": "CELL-A", "required": 20, "available": 4, "missing": 16}
        assert state.records["CELL-A"].stock_level == 4
        assert state.movements == []
        assert transactions.opened == 0

    async def test_missing_record_counts_as_zero(self, commit_service):
        with pytest.raises(ShortageError) as exc_info:
            await commit_service.complete_production("BATT-01", 1)
        assert exc_info.value.shortages[0]["available"] == 0

    async def test_unknown_product(self, commit_service):
        with pytest.raises(CatalogItemNotFoundError):
            await commit_service.complete_production("NOPE", 1)

    async def test_product_without_bom(self, commit_service):
        with pytest.raises(BOMNotDefinedError):
            await commit_service.complete_production("CELL-A", 1)

    async def test_cancelled_run_has_no_effect(self, commit_service, state):
        order = ProductionOrder(
            product_sku="BATT-01", quantity=5, status=ProductionStatus.CANCELLED
        )
        result = await commit_service.commit(order)
        assert result.movements == []
        assert state.records == {}

    async def test_check_shortages_preview(self, commit_service, state):
        _stock(state, "CELL-A", 8)
        assert await commit_service.check_shortages("BATT-01", 2) == []
        [shortage] = await commit_service.check_shortages("BATT-01", 3)
        assert shortage.missing == 4
        assert state.movements == []

    async def test_check_shortages_rejects_non_positive(self, commit_service):
        with pytest.raises(ValidationError):
            await commit_service.check_shortages("BATT-01", 0)


class TestAdjustments:
    async def test_negative_adjustment(self, commit_service, state):
        _stock(state, "CELL-A", 10)
        result = await commit_service.adjust_stock("CELL-A", -2, note="broken")

        assert state.records["CELL-A"].stock_level == 8
        assert result.movements[0].note == "broken"
        assert result.movements[0].kind == MovementKind.MANUAL_ADJUSTMENT

    async def test_zero_adjustment_rejected(self, commit_service):
        with pytest.raises(ValidationError):
            await commit_service.adjust_stock("CELL-A", 0)

    async def test_new_sku_uses_default_category(self, commit_service, state):
        await commit_service.adjust_stock("NEW-1", 3)
        assert state.records["NEW-1"].category == ItemCategory.OTHER


class TestRetries:
    async def test_conflict_is_retried(self, commit_service, state, transactions):
        transactions.conflicts_before_success = [
            TransactionConflictError("transaction", "database is locked")
        ]
        result = await commit_service.adjust_stock("CELL-A", 1)

        assert result.attempts == 2
        assert state.records["CELL-A"].stock_level == 1

    async def test_retries_exhausted(self, commit_service, transactions):
        transactions.conflicts_before_success = [
            TransactionConflictError("transaction", "database is locked") for _ in range(5)
        ]
        with pytest.raises(TransactionConflictError):
            await commit_service.adjust_stock("CELL-A", 1)
        assert transactions.opened == 3

    async def test_other_errors_are_not_retried(self, commit_service, transactions):
        transactions.documents.fail_on_save = RuntimeError("boom")
        with pytest.raises(RuntimeError):
            await commit_service.adjust_stock("CELL-A", 1)
        assert transactions.opened == 1


class TestListenersAndDeletion:
    async def test_listener_receives_event(self, commit_service):
        listener = AsyncMock()
        commit_service.add_listener(listener)

        result = await commit_service.adjust_stock("CELL-A", 1)

        [event] = [call.args[0] for call in listener.await_args_list]
        assert event.entity == "adjustment"
        assert event.entity_id == result.document.id
        assert event.action == "committed"

    async def test_listener_failure_does_not_fail_commit(self, commit_service, state):
        commit_service.add_listener(AsyncMock(side_effect=RuntimeError("offline")))
        await commit_service.adjust_stock("CELL-A", 1)
        assert state.records["CELL-A"].stock_level == 1

    async def test_delete_keeps_movements(self, commit_service, state):
        listener = AsyncMock()
        commit_service.add_listener(listener)
        result = await commit_service.commit(
            _issued_invoice(LineItem(description="x", sku="CELL-A", quantity=1))
        )

        await commit_service.delete_document(DocumentKind.SALES, result.document.id)

        assert state.documents == {}
        assert len(state.movements) == 1
        assert state.records["CELL-A"].stock_level == -1
        assert listener.await_args_list[-1].args[0].action == "deleted"

    async def test_delete_missing_document(self, commit_service):
        with pytest.raises(DocumentNotFoundError):
            await commit_service.delete_document(DocumentKind.SALES, "missing")


class TestDefaultCategory:
    def test_from_settings(self, service_factory):
        service = service_factory(LedgerSettings(default_category="Consumables"))
        assert service.default_category == ItemCategory.CONSUMABLES

    async def test_unknown_category_is_a_configuration_error(self, service_factory):
        service = service_factory(LedgerSettings(default_category="Widgets"))
        with pytest.raises(ConfigurationError):
            await service.adjust_stock("NEW-1", 1)

