"""Tests for the mood HTTP routes."""

from __future__ import annotations

from tests.conftest import OTHER_OWNER, OWNER


def test_record_mood(client, moods, auth_headers) -> None:
    resp = client.post("/api/v1/moods", json={"mood": "calm", "note": " slept well "}, headers=auth_headers)

    assert resp.status_code == 201
    body = resp.json()
    assert body["mood"] == "calm"
    assert body["note"] == "slept well"
    assert body["user_id"] == OWNER
    assert len(moods.rows) == 1


def test_blank_note_is_stored_as_absent(client, auth_headers) -> None:
    resp = client.post("/api/v1/moods", json={"mood": "sad", "note": "   "}, headers=auth_headers)

    assert resp.status_code == 201
    assert resp.json()["note"] is None


def test_unknown_mood_label_is_rejected(client, moods, auth_headers) -> None:
    resp = client.post("/api/v1/moods", json={"mood": "ecstatic"}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"
    assert moods.rows == {}


def test_store_failure(client, moods, auth_headers) -> None:
    moods.fail_create = True

    resp = client.post("/api/v1/moods", json={"mood": "happy"}, headers=auth_headers)

    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "DATABASE_ERROR"


def test_history_is_scoped_and_limited(client, moods, auth_headers) -> None:
    moods.create(OWNER, "happy")
    moods.create(OTHER_OWNER, "angry")
    moods.create(OWNER, "anxious")
    moods.create(OWNER, "neutral")

    resp = client.get("/api/v1/moods?limit=2", headers=auth_headers)

    assert resp.status_code == 200
    assert [m["mood"] for m in resp.json()] == ["neutral", "anxious"]


def test_delete_mood(client, moods, auth_headers, other_headers) -> None:
    mine = moods.create(OWNER, "happy")
    theirs = moods.create(OTHER_OWNER, "sad")

    assert client.delete(f"/api/v1/moods/{theirs.id}", headers=auth_headers).status_code == 404
    assert client.delete(f"/api/v1/moods/{mine.id}", headers=auth_headers).status_code == 204
    assert client.get("/api/v1/moods", headers=auth_headers).json() == []
    assert [m["id"] for m in client.get("/api/v1/moods", headers=other_headers).json()] == [theirs.id]


def test_moods_cannot_be_edited(client, moods, auth_headers) -> None:
    entry = moods.create(OWNER, "happy")

    resp = client.patch(f"/api/v1/moods/{entry.id}", json={"mood": "sad"}, headers=auth_headers)

    assert resp.status_code == 405
    assert moods.rows[entry.id].mood.value == "happy"


def test_requires_authentication(client) -> None:
    assert client.get("/api/v1/moods").status_code == 401
