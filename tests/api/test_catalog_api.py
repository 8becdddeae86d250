"""Tests for catalog endpoints."""

BATTERY = {
    "sku": "BATT-01",
    "name": "Battery Pack",
    "category": "Product",
    "bom": [{"sku": "CELL-A", "quantity": 4}],
}


class TestCatalogAPI:
    async def test_save_and_get(self, api_client):
        response = await api_client.post("/api/catalog", json=BATTERY)
        assert response.status_code == 200
        assert response.json()["bom"] == [{"sku": "CELL-A", "quantity": 4.0}]

        response = await api_client.get("/api/catalog/BATT-01")
        assert response.status_code == 200
        assert response.json()["name"] == "Battery Pack"

    async def test_list_by_category(self, api_client):
        await api_client.post("/api/catalog", json=BATTERY)
        await api_client.post(
            "/api/catalog", json={"sku": "CELL-A", "name": "Cell", "category": "Parts"}
        )

        data = (await api_client.get("/api/catalog", params={"category": "Parts"})).json()
        assert [item["sku"] for item in data["items"]] == ["CELL-A"]
        assert data["has_more"] is False

    async def test_unknown_item(self, api_client):
        response = await api_client.get("/api/catalog/NOPE")
        assert response.status_code == 404
        assert response.json()["error_code"] == "CATALOG_ITEM_NOT_FOUND"

    async def test_self_referencing_bom(self, api_client):
        response = await api_client.post(
            "/api/catalog",
            json={**BATTERY, "bom": [{"sku": "BATT-01", "quantity": 1}]},
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "BOM_CYCLE"

    async def test_indirect_cycle(self, api_client):
        await api_client.post("/api/catalog", json=BATTERY)
        response = await api_client.post(
            "/api/catalog",
            json={"sku": "CELL-A", "name": "Cell", "bom": [{"sku": "BATT-01", "quantity": 1}]},
        )
        assert response.status_code == 422
        assert response.json()["details"]["path"] == ["CELL-A", "BATT-01", "CELL-A"]

    async def test_non_positive_component_quantity(self, api_client):
        response = await api_client.post(
            "/api/catalog",
            json={**BATTERY, "bom": [{"sku": "CELL-A", "quantity": 0}]},
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_delete(self, api_client):
        await api_client.post("/api/catalog", json=BATTERY)

        assert (await api_client.delete("/api/catalog/BATT-01")).status_code == 204
        assert (await api_client.delete("/api/catalog/BATT-01")).status_code == 404
