"""
Integration Tests — Reorder Endpoints

Tests:
- POST /api/reorder/check
- GET /api/reorder/alerts, /alerts/pending, /suggestions
- POST process / dismiss / process-all / create-orders
- /health and /ready
"""
from fastapi.testclient import TestClient

from tests.factories import make_part, make_vendor


class TestReorderScan:

    def test_check_creates_alerts_once(self, client: TestClient, db, vendor):
        make_part(db, "LOW", vendor=vendor, on_hand=3)

        first = client.post("/api/reorder/check").json()
        assert first["message"] == "Created 1 new reorder alerts"
        assert first["alerts"][0]["part_number"] == "LOW"

        second = client.post("/api/reorder/check").json()
        assert second["alerts"] == []

        pending = client.get("/api/reorder/alerts/pending").json()
        assert pending["count"] == 1

    def test_suggestions(self, client: TestClient, db, vendor):
        make_part(db, "LOW", vendor=vendor, on_hand=0, reorder_quantity=4, unit_price="5.00")
        data = client.get("/api/reorder/suggestions").json()
        assert data["summary"]["total_items"] == 1
        assert data["suggestions"][0]["estimated_cost"] == "20.00"
        assert data["by_vendor"][0]["vendor_name"] == "Acme Supply"


class TestAlertProcessing:

    def test_process_alert_creates_order(self, client: TestClient, db, vendor):
        make_part(db, "LOW", vendor=vendor, on_hand=5, reorder_point=10, reorder_quantity=20, unit_price="2.00")
        alert = client.post("/api/reorder/check").json()["alerts"][0]

        resp = client.post(f"/api/reorder/alerts/{alert['id']}/process")
        assert resp.status_code == 200
        order = resp.json()
        assert order["status"] == "PENDING"
        assert order["is_auto_generated"] is True
        assert order["total"] == "40.00"

        ordered = client.get("/api/reorder/alerts", params={"status": "ORDERED"}).json()
        assert ordered[0]["order_id"] == order["id"]

    def test_process_vendorless_alert_returns_409(self, client: TestClient, db):
        make_part(db, "ORPHAN", vendor=None, on_hand=0)
        alert = client.post("/api/reorder/check").json()["alerts"][0]

        resp = client.post(f"/api/reorder/alerts/{alert['id']}/process")
        assert resp.status_code == 409
        assert resp.json()["error"]["message"] == "No vendor assigned to this part"

    def test_process_unknown_alert_returns_404(self, client: TestClient):
        assert client.post("/api/reorder/alerts/999/process").status_code == 404

    def test_dismiss(self, client: TestClient, db, vendor):
        make_part(db, "LOW", vendor=vendor, on_hand=0)
        alert = client.post("/api/reorder/check").json()["alerts"][0]

        resp = client.post(f"/api/reorder/alerts/{alert['id']}/dismiss")
        assert resp.status_code == 200
        assert resp.json()["status"] == "DISMISSED"
        assert client.post(f"/api/reorder/alerts/{alert['id']}/dismiss").status_code == 409

    def test_process_all(self, client: TestClient, db, vendor):
        make_part(db, "A", vendor=vendor, on_hand=0)
        make_part(db, "X", vendor=None, on_hand=0)
        client.post("/api/reorder/check")

        data = client.post("/api/reorder/process-all").json()
        assert data["message"] == "Processed 2 alerts: 1 successful, 1 failed"
        assert client.get("/api/reorder/alerts/pending").json()["count"] == 1

    def test_create_orders_for_vendors(self, client: TestClient, db):
        acme = make_vendor(db, code="ACME", name="Acme")
        bolt = make_vendor(db, code="BOLT", name="Bolt Bros")
        make_part(db, "A1", vendor=acme, on_hand=0)
        make_part(db, "B1", vendor=bolt, on_hand=0)

        resp = client.post("/api/reorder/create-orders", json={"vendor_ids": [acme.id]})
        assert resp.status_code == 200
        data = resp.json()
        assert data["message"] == "Created 1 orders"
        assert data["orders"][0]["vendor_id"] == acme.id

        everything = client.post("/api/reorder/create-orders").json()
        assert len(everything["orders"]) == 2


class TestHealth:

    def test_health(self, client: TestClient):
        assert client.get("/health").json()["status"] == "healthy"

    def test_ready_includes_request_id(self, client: TestClient):
        resp = client.get("/ready", headers={"X-Request-ID": "req-1"})
        assert resp.status_code == 200
        assert resp.json()["request_id"] == "req-1"
        assert resp.headers["X-Request-ID"] == "req-1"
