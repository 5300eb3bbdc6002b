from fastapi.testclient import TestClient


def test_health(client: TestClient):
    r = client.get("/api/v1/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_missing_user_header_is_rejected(client: TestClient):
    r = client.get("/api/v1/sheets/", headers={"X-User-Id": ""})
    assert r.status_code == 401, r.text


def test_metrics_exposed(client: TestClient):
    client.get("/api/v1/health")
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "wellum_workout_sessions_started_total" in r.text
