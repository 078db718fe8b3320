"""
Integration Tests — Inventory Endpoints

Tests:
- GET /api/inventory, /low-stock, /summary, /{part_id}, /{part_id}/logs
- POST adjust / receive / ship / count
- PUT settings
- Domain error → HTTP mapping
"""
from fastapi.testclient import TestClient

from tests.factories import make_part


class TestInventoryReads:

    def test_list_inventory(self, client: TestClient, part):
        resp = client.get("/api/inventory")
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 1
        assert data["items"][0]["part"]["part_number"] == "P-100"

    def test_list_low_stock_only(self, client: TestClient, db, vendor, part):
        make_part(db, "LOW", vendor=vendor, on_hand=2)
        resp = client.get("/api/inventory", params={"low_stock": True})
        assert resp.status_code == 200
        assert [i["part"]["part_number"] for i in resp.json()["items"]] == ["LOW"]

    def test_get_inventory(self, client: TestClient, part):
        resp = client.get(f"/api/inventory/{part.id}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["part_id"] == part.id
        assert data["quantity_on_hand"] == 100

    def test_get_unknown_inventory_returns_404(self, client: TestClient):
        resp = client.get("/api/inventory/99999")
        assert resp.status_code == 404
        body = resp.json()
        assert body["success"] is False
        assert body["error"]["code"] == "NOT_FOUND"

    def test_low_stock_endpoint(self, client: TestClient, db, vendor):
        make_part(db, "LOW", vendor=vendor, on_hand=4, reorder_point=10)
        resp = client.get("/api/inventory/low-stock")
        assert resp.status_code == 200
        item = resp.json()[0]
        assert item["shortfall"] == 6
        assert item["available"] == 4

    def test_summary_endpoint(self, client: TestClient, part):
        resp = client.get("/api/inventory/summary")
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_items"] == 1
        assert data["total_value"] == "250.00"


class TestInventoryMutations:

    def test_adjust(self, client: TestClient, part):
        resp = client.post(f"/api/inventory/{part.id}/adjust", json={
            "quantity": -10, "reason": "damaged", "performed_by": "alice",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["inventory"]["quantity_on_hand"] == 90
        assert data["log"]["change_type"] == "ADJUST"
        assert data["log"]["previous_qty"] == 100
        assert data["log"]["new_qty"] == 90

    def test_adjust_without_reason_is_rejected(self, client: TestClient, part):
        resp = client.post(f"/api/inventory/{part.id}/adjust", json={"quantity": 1, "reason": ""})
        assert resp.status_code == 422

    def test_ship_insufficient_returns_400(self, client: TestClient, part):
        resp = client.post(f"/api/inventory/{part.id}/ship", json={"quantity": 101})
        assert resp.status_code == 400
        assert resp.json()["error"] == {"code": "VALIDATION_ERROR", "message": "Insufficient inventory"}

        logs = client.get(f"/api/inventory/{part.id}/logs").json()
        assert logs == []

    def test_receive_then_ship(self, client: TestClient, part):
        assert client.post(f"/api/inventory/{part.id}/receive", json={"quantity": 5}).status_code == 200
        resp = client.post(f"/api/inventory/{part.id}/ship", json={"quantity": 30, "reason": "work order 12"})
        assert resp.status_code == 200
        assert resp.json()["inventory"]["quantity_on_hand"] == 75

        logs = client.get(f"/api/inventory/{part.id}/logs").json()
        assert [log["change_type"] for log in logs] == ["SHIP", "RECEIVE"]

    def test_count_reports_variance(self, client: TestClient, part):
        resp = client.post(f"/api/inventory/{part.id}/count", json={"actual_quantity": 97})
        assert resp.status_code == 200
        data = resp.json()
        assert data["variance"] == -3
        assert data["inventory"]["quantity_on_hand"] == 97

    def test_update_settings(self, client: TestClient, part):
        resp = client.put(f"/api/inventory/{part.id}", json={"reorder_point": 15, "location": "B2"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["reorder_point"] == 15
        assert data["location"] == "B2"
        assert data["quantity_on_hand"] == 100

    def test_receive_for_unknown_order_returns_404(self, client: TestClient, part):
        resp = client.post(f"/api/inventory/{part.id}/receive", json={"quantity": 5, "order_id": 9999})
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "NOT_FOUND"

        assert client.get(f"/api/inventory/{part.id}").json()["quantity_on_hand"] == 100
        assert client.get(f"/api/inventory/{part.id}/logs").json() == []

    def test_update_settings_rejects_null_reorder_point(self, client: TestClient, part):
        resp = client.put(f"/api/inventory/{part.id}", json={"reorder_point": None})
        assert resp.status_code == 422
        assert client.get(f"/api/inventory/{part.id}").json()["reorder_point"] == 10
