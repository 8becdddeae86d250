"""Tests for sales document endpoints."""

import pytest

from stockledger.api.dependencies import get_save_sales_document_use_case
from stockledger.api.main import app
from stockledger.core.exceptions import TransactionConflictError


def _invoice(**overrides) -> dict:
    return {
        "customer_name": "Acme",
        "line_items": [{"description": "Battery", "sku": "BATT-01", "quantity": 2}],
        **overrides,
    }


class TestSalesAPI:
    async def test_draft_then_issue(self, api_client):
        draft = (await api_client.post("/api/sales", json=_invoice())).json()
        assert draft["stock_changed"] is False
        doc_id = draft["document"]["id"]

        issued = await api_client.post(
            "/api/sales", json=_invoice(id=doc_id, status="issued")
        )

        data = issued.json()
        assert data["stock_changed"] is True
        assert data["movements"][0]["kind"] == "Sales_Dispatch"
        assert data["records"][0]["stock_level"] == -2

    async def test_reissue_does_not_double_dispatch(self, api_client):
        doc_id = (await api_client.post("/api/sales", json=_invoice(status="issued"))).json()[
            "document"
        ]["id"]
        await api_client.post("/api/sales", json=_invoice(id=doc_id, status="issued"))

        record = (await api_client.get("/api/inventory/BATT-01")).json()
        assert record["stock_level"] == -2

    async def test_credit_note(self, api_client):
        response = await api_client.post(
            "/api/sales", json=_invoice(type="credit_note", status="issued")
        )
        assert response.json()["movements"][0]["kind"] == "Sale_Return"
        assert response.json()["records"][0]["stock_level"] == 2

    async def test_unknown_status_rejected(self, api_client):
        response = await api_client.post("/api/sales", json=_invoice(status="posted"))
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_get_unknown(self, api_client):
        assert (await api_client.get("/api/sales/missing")).status_code == 404


@pytest.fixture
def conflicting_use_case():
    class ConflictingUseCase:
        async def execute(self, request):
            raise TransactionConflictError("transaction", "database is locked")

    app.dependency_overrides[get_save_sales_document_use_case] = ConflictingUseCase
    yield
    app.dependency_overrides.pop(get_save_sales_document_use_case, None)


class TestConflicts:
    async def test_exhausted_retries_map_to_409(self, api_client, conflicting_use_case):
        response = await api_client.post("/api/sales", json=_invoice(status="issued"))
        assert response.status_code == 409
        assert response.json()["error_code"] == "TRANSACTION_CONFLICT"
