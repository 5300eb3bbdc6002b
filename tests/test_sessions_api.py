from fastapi.testclient import TestClient

OTHER_USER = {"X-User-Id": "athlete-2"}


def _prepare_sheet(client: TestClient) -> int:
    r_ex = client.post(
        "/api/v1/exercises/",
        json={
            "name": "Bench Press",
            "description": "Flat barbell bench press",
            "image_url": "https://cdn.example.com/bench.png",
            "group": "chest",
        },
    )
    assert r_ex.status_code == 201, r_ex.text
    exercise_id = r_ex.json()["id"]

    r_sheet = client.post(
        "/api/v1/sheets/",
        json={
            "name": "Chest",
            "exercises": [
                {"exercise_id": str(exercise_id), "repetitions": 1, "weight": 60},
                # Not in the catalog: the session still runs without metadata
                {"exercise_id": "999999", "serie": 2, "repetitions": 1, "weight": 40},
            ],
        },
    )
    assert r_sheet.status_code == 201, r_sheet.text
    return r_sheet.json()["id"]


def _open_session(client: TestClient, sheet_id: int, rest_minutes: int = 1) -> dict:
    r = client.post("/api/v1/sessions/", json={"sheet_id": sheet_id, "rest_minutes": rest_minutes})
    assert r.status_code == 201, r.text
    return r.json()


def test_guided_session_flow(client: TestClient):
    sheet_id = _prepare_sheet(client)
    state = _open_session(client, sheet_id, rest_minutes=2)
    sid = state["id"]
    assert state["phase"] == "idle"
    assert state["ready"] is True
    assert state["completed"] is False
    assert state["current_exercise_index"] == 0
    assert state["current_rep"] == 1
    assert state["current_exercise"]["serie"] == 1
    assert state["current_exercise_info"]["name"] == "Bench Press"

    # Rest is only reachable from working
    r_rest = client.post(f"/api/v1/sessions/{sid}/rest")
    assert r_rest.status_code == 409, r_rest.text

    r_start = client.post(f"/api/v1/sessions/{sid}/start")
    assert r_start.status_code == 200, r_start.text
    assert r_start.json()["phase"] == "working"
    assert r_start.json()["phase_timer_seconds"] == 0

    assert client.post(f"/api/v1/sessions/{sid}/start").status_code == 409
    assert client.put(f"/api/v1/sessions/{sid}/weight", json={"weight": 65}).status_code == 409

    r_rest = client.post(f"/api/v1/sessions/{sid}/rest")
    assert r_rest.status_code == 200
    assert r_rest.json()["phase"] == "resting"
    assert r_rest.json()["phase_timer_seconds"] == 120

    r_end = client.post(f"/api/v1/sessions/{sid}/end-repetition")
    assert r_end.status_code == 200
    state = r_end.json()
    assert state["phase"] == "idle"
    assert state["phase_timer_seconds"] == 0
    assert state["current_exercise_index"] == 1
    assert state["current_rep"] == 1
    assert state["current_exercise_info"] is None
    assert state["exercise_info_error"] is None

    r_weight = client.put(f"/api/v1/sessions/{sid}/weight", json={"weight": 42.5})
    assert r_weight.status_code == 200, r_weight.text
    assert r_weight.json()["exercises"][1]["weight"] == 42.5

    r_sheet = client.get(f"/api/v1/sheets/{sheet_id}")
    assert [e["weight"] for e in r_sheet.json()["exercises"]] == [60, 42.5]

    assert client.post(f"/api/v1/sessions/{sid}/save").status_code == 409

    r_advance = client.post(f"/api/v1/sessions/{sid}/advance")
    assert r_advance.status_code == 200
    assert r_advance.json()["phase"] == "working"

    r_skip = client.post(f"/api/v1/sessions/{sid}/skip")
    assert r_skip.status_code == 200
    assert r_skip.json()["completed"] is True

    assert client.post(f"/api/v1/sessions/{sid}/advance").status_code == 409

    r_save = client.post(f"/api/v1/sessions/{sid}/save")
    assert r_save.status_code == 200, r_save.text
    saved = r_save.json()
    assert saved["session_id"] == sid
    assert saved["total_seconds"] == 0

    # Saved sessions are no longer live
    assert client.get(f"/api/v1/sessions/{sid}").status_code == 404

    r_workout = client.get(f"/api/v1/workouts/{saved['workout_id']}")
    assert r_workout.status_code == 200
    workout = r_workout.json()
    assert workout["sheet_id"] == sheet_id
    assert workout["user_id"] == "athlete-1"
    assert [e["weight"] for e in workout["exercises"]] == [60, 42.5]


def test_abandon_session(client: TestClient):
    sheet_id = _prepare_sheet(client)
    sid = _open_session(client, sheet_id)["id"]
    assert client.post(f"/api/v1/sessions/{sid}/start").status_code == 200

    r_delete = client.delete(f"/api/v1/sessions/{sid}")
    assert r_delete.status_code == 204
    assert client.get(f"/api/v1/sessions/{sid}").status_code == 404
    assert client.get("/api/v1/workouts/").json() == []


def test_session_belongs_to_owner(client: TestClient):
    sheet_id = _prepare_sheet(client)
    sid = _open_session(client, sheet_id)["id"]

    assert client.get(f"/api/v1/sessions/{sid}", headers=OTHER_USER).status_code == 403
    assert client.post(f"/api/v1/sessions/{sid}/start", headers=OTHER_USER).status_code == 403
    assert client.delete(f"/api/v1/sessions/{sid}", headers=OTHER_USER).status_code == 403

    r_other_sheet = client.post(
        "/api/v1/sessions/",
        json={"sheet_id": sheet_id, "rest_minutes": 1},
        headers=OTHER_USER,
    )
    assert r_other_sheet.status_code == 403


def test_session_create_errors(client: TestClient):
    r_missing = client.post("/api/v1/sessions/", json={"sheet_id": 999999, "rest_minutes": 1})
    assert r_missing.status_code == 404, r_missing.text

    sheet_id = _prepare_sheet(client)
    for rest_minutes in (0, 6):
        r = client.post("/api/v1/sessions/", json={"sheet_id": sheet_id, "rest_minutes": rest_minutes})
        assert r.status_code == 422

    assert client.get("/api/v1/sessions/unknown").status_code == 404


def test_empty_sheet_session_stays_idle(client: TestClient):
    r_sheet = client.post("/api/v1/sheets/", json={"name": "Empty"})
    assert r_sheet.status_code == 201
    state = _open_session(client, r_sheet.json()["id"])
    assert state["ready"] is False
    assert state["current_exercise"] is None

    r_start = client.post(f"/api/v1/sessions/{state['id']}/start")
    assert r_start.status_code == 200
    assert r_start.json()["phase"] == "idle"


def test_weight_out_of_range(client: TestClient):
    sheet_id = _prepare_sheet(client)
    sid = _open_session(client, sheet_id)["id"]
    assert client.put(f"/api/v1/sessions/{sid}/weight", json={"weight": -1}).status_code == 422
    assert client.put(f"/api/v1/sessions/{sid}/weight", json={"weight": 1000.5}).status_code == 422
