from fastapi.testclient import TestClient

OTHER_USER = {"X-User-Id": "athlete-2"}


def _create_sheet(client: TestClient, **overrides) -> dict:
    payload = {
        "name": "Push day",
        "exercises": [
            {"exercise_id": "1", "repetitions": 8, "weight": 60},
            {"exercise_id": "2", "serie": 4, "repetitions": 10, "notes": "slow eccentric"},
        ],
    }
    payload.update(overrides)
    r = client.post("/api/v1/sheets/", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def test_sheet_crud(client: TestClient):
    sheet = _create_sheet(client)
    assert sheet["user_id"] == "athlete-1"
    # serie defaults to one set when omitted
    assert sheet["exercises"][0]["serie"] == 1
    assert sheet["exercises"][1]["serie"] == 4
    sid = sheet["id"]

    r_list = client.get("/api/v1/sheets/")
    assert r_list.status_code == 200
    assert [s["id"] for s in r_list.json()] == [sid]

    r_update = client.put(f"/api/v1/sheets/{sid}", json={"name": "Push day B"})
    assert r_update.status_code == 200, r_update.text
    updated = r_update.json()
    assert updated["name"] == "Push day B"
    assert len(updated["exercises"]) == 2

    r_delete = client.delete(f"/api/v1/sheets/{sid}")
    assert r_delete.status_code == 204
    assert client.get(f"/api/v1/sheets/{sid}").status_code == 404


def test_sheet_validation(client: TestClient):
    r_reps = client.post(
        "/api/v1/sheets/",
        json={"name": "Bad", "exercises": [{"exercise_id": "1", "repetitions": 0}]},
    )
    assert r_reps.status_code == 422

    r_weight = client.post(
        "/api/v1/sheets/",
        json={"name": "Bad", "exercises": [{"exercise_id": "1", "repetitions": 5, "weight": 1001}]},
    )
    assert r_weight.status_code == 422

    r_owner = client.post("/api/v1/sheets/", json={"name": "Bad", "user_id": "athlete-2"})
    assert r_owner.status_code == 422


def test_sheet_belongs_to_owner(client: TestClient):
    sid = _create_sheet(client)["id"]

    assert client.get(f"/api/v1/sheets/{sid}", headers=OTHER_USER).status_code == 403
    assert client.put(f"/api/v1/sheets/{sid}", json={"name": "Mine"}, headers=OTHER_USER).status_code == 403
    assert client.delete(f"/api/v1/sheets/{sid}", headers=OTHER_USER).status_code == 403

    r_other_list = client.get("/api/v1/sheets/", headers=OTHER_USER)
    assert r_other_list.status_code == 200
    assert r_other_list.json() == []

    r_owner = client.get(f"/api/v1/sheets/{sid}")
    assert r_owner.status_code == 200
    assert r_owner.json()["name"] == "Push day"
    assert r_owner.json()["user_id"] == "athlete-1"
