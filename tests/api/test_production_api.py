"""Tests for production endpoints."""

import pytest


@pytest.fixture
async def battery_catalog(api_client):
    await api_client.post(
        "/api/catalog", json={"sku": "CELL-A", "name": "Li-ion Cell", "category": "Parts"}
    )
    await api_client.post(
        "/api/catalog",
        json={
            "sku": "BATT-01",
            "name": "Battery Pack",
            "category": "Product",
            "bom": [{"sku": "CELL-A", "quantity": 4}],
        },
    )


async def _stock_cells(client, quantity: float) -> None:
    await client.post("/api/inventory/adjustments", json={"sku": "CELL-A", "quantity": quantity})


class TestProductionAPI:
    async def test_complete_run(self, api_client, battery_catalog):
        await _stock_cells(api_client, 20)

        response = await api_client.post(
            "/api/production", json={"product_sku": "BATT-01", "quantity": 5}
        )

        assert response.status_code == 201
        data = response.json()
        assert {r["sku"]: r["stock_level"] for r in data["records"]} == {
            "CELL-A": 0,
            "BATT-01": 5,
        }
        order_id = data["document"]["id"]
        movements = (await api_client.get(f"/api/production/{order_id}/movements")).json()
        assert [m["kind"] for m in movements] == [
            "Manufacturing_Consumption",
            "Manufacturing_Output",
        ]
        assert (await api_client.get(f"/api/production/{order_id}")).json()["is_stocked"] is True

    async def test_shortage(self, api_client, battery_catalog):
        await _stock_cells(api_client, 4)

        response = await api_client.post(
            "/api/production", json={"product_sku": "BATT-01", "quantity": 5}
        )

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "INSUFFICIENT_STOCK"
        assert body["details"]["shortages"] == [
            {"sku": "CELL-A", "required": 20.0, "available": 4.0, "missing": 16.0}
        ]
        assert (await api_client.get("/api/inventory/CELL-A")).json()["stock_level"] == 4
        assert (await api_client.get("/api/production")).json()["items"] == []

    async def test_shortage_preview(self, api_client, battery_catalog):
        await _stock_cells(api_client, 4)

        response = await api_client.post(
            "/api/production/shortages", json={"product_sku": "BATT-01", "quantity": 1}
        )

        assert response.json()["can_produce"] is True
        response = await api_client.post(
            "/api/production/shortages", json={"product_sku": "BATT-01", "quantity": 2}
        )
        assert response.json()["can_produce"] is False
        assert response.json()["shortages"][0]["missing"] == 4

    async def test_unknown_product(self, api_client):
        response = await api_client.post(
            "/api/production", json={"product_sku": "NOPE", "quantity": 1}
        )
        assert response.status_code == 404

    async def test_product_without_bom(self, api_client, battery_catalog):
        response = await api_client.post(
            "/api/production", json={"product_sku": "CELL-A", "quantity": 1}
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "BOM_NOT_DEFINED"

    async def test_non_positive_quantity(self, api_client, battery_catalog):
        response = await api_client.post(
            "/api/production", json={"product_sku": "BATT-01", "quantity": 0}
        )
        assert response.status_code == 422
