"""Tests for expense endpoints."""

PURCHASE_INVOICE = {
    "vendor_name": "Cell Co",
    "type": "invoice",
    "line_items": [
        {"description": "Li-ion cells", "sku": "CELL-A", "quantity": 10, "category": "Parts"},
        {"description": "Freight", "amount": 200},
    ],
}


class TestExpensesAPI:
    async def test_purchase_invoice_receives_stock(self, api_client):
        response = await api_client.post("/api/expenses", json=PURCHASE_INVOICE)

        assert response.status_code == 200
        data = response.json()
        assert data["stock_changed"] is True
        assert [line["is_stocked"] for line in data["document"]["line_items"]] == [True, False]
        assert data["records"][0]["stock_level"] == 10

    async def test_resave_with_id_is_idempotent(self, api_client):
        first = (await api_client.post("/api/expenses", json=PURCHASE_INVOICE)).json()
        doc_id = first["document"]["id"]

        second = await api_client.post("/api/expenses", json={**PURCHASE_INVOICE, "id": doc_id})

        assert second.json()["stock_changed"] is False
        record = (await api_client.get("/api/inventory/CELL-A")).json()
        assert record["stock_level"] == 10
        movements = (await api_client.get(f"/api/expenses/{doc_id}/movements")).json()
        assert len(movements) == 1

    async def test_plain_expense_has_no_effect(self, api_client):
        response = await api_client.post(
            "/api/expenses", json={**PURCHASE_INVOICE, "type": "expense"}
        )
        assert response.json()["stock_changed"] is False
        assert (await api_client.get("/api/inventory/CELL-A")).status_code == 404

    async def test_missing_vendor(self, api_client):
        response = await api_client.post(
            "/api/expenses", json={**PURCHASE_INVOICE, "vendor_name": " "}
        )
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "vendor_name"

    async def test_get_list_and_delete(self, api_client):
        doc_id = (await api_client.post("/api/expenses", json=PURCHASE_INVOICE)).json()[
            "document"
        ]["id"]

        assert (await api_client.get(f"/api/expenses/{doc_id}")).json()["vendor_name"] == "Cell Co"
        assert len((await api_client.get("/api/expenses")).json()["items"]) == 1

        assert (await api_client.delete(f"/api/expenses/{doc_id}")).status_code == 204
        assert (await api_client.get(f"/api/expenses/{doc_id}")).status_code == 404
        # stock received before deletion stays
        record = (await api_client.get("/api/inventory/CELL-A")).json()
        assert record["stock_level"] == 10

    async def test_delete_unknown(self, api_client):
        response = await api_client.delete("/api/expenses/missing")
        assert response.status_code == 404
        assert response.json()["error_code"] == "DOCUMENT_NOT_FOUND"
