"""
Integration Tests — Order Endpoints

Tests:
- POST /api/orders
- PATCH /api/orders/{id}/status through to RECEIVED
- DELETE /api/orders/{id}
- GET list / detail / summary
"""
from fastapi.testclient import TestClient


def _create(client: TestClient, vendor, part, quantity=4):
    resp = client.post("/api/orders", json={
        "vendor_id": vendor.id,
        "items": [{"part_id": part.id, "quantity": quantity}],
        "notes": "restock",
    })
    assert resp.status_code == 201
    return resp.json()


class TestOrderCreate:

    def test_create_order(self, client: TestClient, vendor, part):
        data = _create(client, vendor, part)
        assert data["status"] == "DRAFT"
        assert data["vendor_name"] == "Acme Supply"
        assert data["total"] == "10.00"
        assert data["items"][0]["part_number"] == "P-100"
        assert data["order_number"].startswith("PO")

    def test_create_order_without_items_is_rejected(self, client: TestClient, vendor):
        resp = client.post("/api/orders", json={"vendor_id": vendor.id, "items": []})
        assert resp.status_code == 422

    def test_create_order_unknown_vendor(self, client: TestClient, part):
        resp = client.post("/api/orders", json={
            "vendor_id": 999, "items": [{"part_id": part.id, "quantity": 1}],
        })
        assert resp.status_code == 404


class TestOrderLifecycle:

    def test_receive_order_updates_inventory(self, client: TestClient, vendor, part):
        order = _create(client, vendor, part, quantity=6)
        for status in ("PENDING", "APPROVED", "ORDERED"):
            resp = client.patch(f"/api/orders/{order['id']}/status", json={"status": status})
            assert resp.status_code == 200
        resp = client.patch(f"/api/orders/{order['id']}/status", json={
            "status": "SHIPPED", "tracking_number": "TRK-1",
        })
        assert resp.json()["tracking_number"] == "TRK-1"

        resp = client.patch(f"/api/orders/{order['id']}/status", json={
            "status": "RECEIVED", "performed_by": "dock",
        })
        assert resp.status_code == 200
        assert resp.json()["items"][0]["quantity_received"] == 6

        inventory = client.get(f"/api/inventory/{part.id}").json()
        assert inventory["quantity_on_hand"] == 106

        detail = client.get(f"/api/orders/{order['id']}").json()
        assert len(detail["inventory_logs"]) == 1
        assert detail["inventory_logs"][0]["order_id"] == order["id"]

    def test_invalid_transition_returns_409(self, client: TestClient, vendor, part):
        order = _create(client, vendor, part)
        resp = client.patch(f"/api/orders/{order['id']}/status", json={"status": "SHIPPED"})
        assert resp.status_code == 409
        assert resp.json()["error"]["message"] == "Cannot transition from DRAFT to SHIPPED"
        assert client.get(f"/api/orders/{order['id']}").json()["status"] == "DRAFT"

    def test_unknown_status_is_rejected(self, client: TestClient, vendor, part):
        order = _create(client, vendor, part)
        resp = client.patch(f"/api/orders/{order['id']}/status", json={"status": "LOST"})
        assert resp.status_code == 422

    def test_delete_draft(self, client: TestClient, vendor, part):
        order = _create(client, vendor, part)
        assert client.delete(f"/api/orders/{order['id']}").status_code == 204
        assert client.get(f"/api/orders/{order['id']}").status_code == 404

    def test_delete_non_draft_returns_409(self, client: TestClient, vendor, part):
        order = _create(client, vendor, part)
        client.patch(f"/api/orders/{order['id']}/status", json={"status": "PENDING"})
        resp = client.delete(f"/api/orders/{order['id']}")
        assert resp.status_code == 409


class TestOrderReads:

    def test_list_and_filter(self, client: TestClient, vendor, part):
        first = _create(client, vendor, part)
        _create(client, vendor, part)
        client.patch(f"/api/orders/{first['id']}/status", json={"status": "PENDING"})

        resp = client.get("/api/orders", params={"status": "PENDING"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 1
        assert data["items"][0]["id"] == first["id"]
        assert client.get("/api/orders").json()["total"] == 2

    def test_summary(self, client: TestClient, vendor, part):
        _create(client, vendor, part)
        resp = client.get("/api/orders/summary")
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 1
        assert data["by_status"] == {"DRAFT": 1}
