from fastapi.testclient import TestClient

OTHER_USER = {"X-User-Id": "athlete-2"}


def _record(client: TestClient, completed_at: str, total_seconds: int = 600, sheet_id: int = 1) -> dict:
    r = client.post(
        "/api/v1/workouts/",
        json={
            "sheet_id": sheet_id,
            "total_seconds": total_seconds,
            "completed_at": completed_at,
            "exercises": [{"exercise_id": "1", "serie": 3, "repetitions": 5, "weight": 80}],
        },
    )
    assert r.status_code == 201, r.text
    return r.json()


def test_workout_crud(client: TestClient):
    workout = _record(client, "2026-03-05T10:00:00Z")
    assert workout["user_id"] == "athlete-1"
    assert workout["exercises"][0]["weight"] == 80
    wid = workout["id"]

    r_get = client.get(f"/api/v1/workouts/{wid}")
    assert r_get.status_code == 200
    assert r_get.json()["total_seconds"] == 600

    assert client.get(f"/api/v1/workouts/{wid}", headers=OTHER_USER).status_code == 403
    assert client.delete(f"/api/v1/workouts/{wid}", headers=OTHER_USER).status_code == 403

    assert client.delete(f"/api/v1/workouts/{wid}").status_code == 204
    assert client.get(f"/api/v1/workouts/{wid}").status_code == 404


def test_owner_cannot_be_set_by_payload(client: TestClient):
    r = client.post(
        "/api/v1/workouts/",
        json={"sheet_id": 1, "total_seconds": 10, "user_id": "athlete-2"},
    )
    assert r.status_code == 422

    r_negative = client.post("/api/v1/workouts/", json={"sheet_id": 1, "total_seconds": -1})
    assert r_negative.status_code == 422


def test_list_is_newest_first_and_per_user(client: TestClient):
    older = _record(client, "2026-03-01T08:00:00Z")
    newer = _record(client, "2026-03-09T08:00:00Z")

    r = client.get("/api/v1/workouts/")
    assert r.status_code == 200
    assert [w["id"] for w in r.json()] == [newer["id"], older["id"]]

    r_other = client.get("/api/v1/workouts/", headers=OTHER_USER)
    assert r_other.status_code == 200
    assert r_other.json() == []


def test_calendar_groups_by_day(client: TestClient):
    _record(client, "2026-03-05T07:00:00Z", total_seconds=300)
    _record(client, "2026-03-05T18:30:00Z", total_seconds=450)
    _record(client, "2026-03-20T12:00:00Z", total_seconds=200)
    _record(client, "2026-04-02T12:00:00Z", total_seconds=999)

    r = client.get("/api/v1/workouts/calendar", params={"year": 2026, "month": 3})
    assert r.status_code == 200, r.text
    days = r.json()
    assert [d["day"] for d in days] == ["2026-03-05", "2026-03-20"]
    assert days[0]["total_seconds"] == 750
    assert len(days[0]["workouts"]) == 2
    assert days[1]["total_seconds"] == 200

    r_year = client.get("/api/v1/workouts/calendar", params={"year": 2026})
    assert r_year.status_code == 200
    assert len(r_year.json()) == 3

    r_bad = client.get("/api/v1/workouts/calendar", params={"year": 2026, "month": 13})
    assert r_bad.status_code == 422
