from fastapi.testclient import TestClient
from dashboard.main import app

client = TestClient(app)


def test_health_ok():
    r = client.get("/api/health")
    assert r.status_code == 200
    data = r.json()
    # Basic contract checks
    assert data.get("status") == "ok"
    assert isinstance(data.get("upstream"), dict)
    assert data["upstream"]["orders_api_url"].endswith("/api/orders/")
    assert data["features"]["default_theme"] in {"light", "dark"}


def test_meta_lists_dashboard_routes():
    r = client.get("/meta")
    assert r.status_code == 200
    tips = r.json()["tips"]
    assert tips["state"] == "/api/dashboard"
    assert tips["health"] == "/api/health"
