"""HTTP surface: status codes and payload shapes."""

from unittest.mock import patch

import pytest


@pytest.fixture
def t1(make_traveler):
    return make_traveler(first_name="Ada", last_name="Cole", email="ada@example.com")


@pytest.fixture
def t2(make_traveler):
    return make_traveler(first_name="Ben", last_name="Ortiz", email="ben@example.com")


@pytest.fixture
def created(client, t1):
    resp = client.post("/tripcrews/", json={"name": "Beach Trip 2025", "traveler_id": t1.id})
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_trip_crew(created, t1):
    assert created["trip_crew"]["name"] == "Beach Trip 2025"
    assert created["trip_crew"]["handle"] == "beach-trip-2025"
    assert created["trip_crew"]["created_by_traveler_id"] == t1.id
    assert len(created["join_code"]) == 6
    assert created["invite_url"].endswith("/join/beach-trip-2025")


def test_create_trip_crew_validation(client, t1):
    resp = client.post("/tripcrews/", json={"name": "   ", "traveler_id": t1.id})
    assert resp.status_code == 400
    assert client.post("/tripcrews/", json={"traveler_id": t1.id}).status_code == 422
    assert client.post("/tripcrews/", json={"name": "Crew", "traveler_id": 999}).status_code == 404


def test_preview_by_handle_and_code(client, created):
    by_handle = client.get("/join/beach-trip-2025")
    assert by_handle.status_code == 200
    body = by_handle.json()
    assert body["id"] == created["trip_crew"]["id"]
    assert body["member_count"] == 1
    assert body["trip_count"] == 0
    assert body["admin"]["first_name"] == "Ada"

    by_query = client.get("/join", params={"code": created["join_code"].lower()})
    assert by_query.status_code == 200
    assert by_query.json() == body


def test_preview_unknown_code(client):
    resp = client.get("/join/NOPE99")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Invalid or expired invite code"}
    assert client.get("/join").status_code == 400


def test_join_flow(client, created, t2):
    resp = client.post("/join", json={"code": "beach-trip-2025", "traveler_id": t2.id})
    assert resp.status_code == 200
    assert resp.json() == {"trip_crew_id": created["trip_crew"]["id"]}

    again = client.post("/join", json={"code": "beach-trip-2025", "traveler_id": t2.id})
    assert again.status_code == 409
    assert again.json()["detail"] == "You are already a member of this TripCrew"

    assert client.get("/join/beach-trip-2025").json()["member_count"] == 2


def test_join_invalid_code(client, t2):
    resp = client.post("/join", json={"code": "NOPE99", "traveler_id": t2.id})
    assert resp.status_code == 404


def test_crew_detail_and_listing(client, created, t1, t2):
    crew_id = created["trip_crew"]["id"]

    assert client.get(f"/tripcrews/{crew_id}", params={"traveler_id": t2.id}).status_code == 403

    detail = client.get(f"/tripcrews/{crew_id}", params={"traveler_id": t1.id}).json()
    assert [m["traveler_id"] for m in detail["memberships"]] == [t1.id]
    assert detail["roles"][0]["role"] == "admin"

    listing = client.get("/tripcrews/", params={"traveler_id": t1.id}).json()
    assert listing[0]["id"] == crew_id
    assert listing[0]["member_count"] == 1


def test_invite_management(client, created, t1, t2):
    crew_id = created["trip_crew"]["id"]
    client.post("/join", json={"code": created["join_code"], "traveler_id": t2.id})

    assert client.post(f"/tripcrews/{crew_id}/invite", json={"traveler_id": t2.id}).status_code == 403

    fresh = client.post(f"/tripcrews/{crew_id}/invite", json={"traveler_id": t1.id})
    assert fresh.status_code == 201
    new_code = fresh.json()["join_code"]

    link = client.get(f"/tripcrews/{crew_id}/invite", params={"traveler_id": t2.id}).json()
    assert link["join_code"] == new_code
    assert link["handle"] == "beach-trip-2025"

    resp = client.post(f"/tripcrews/{crew_id}/join-codes/{new_code}/deactivate", json={"traveler_id": t1.id})
    assert resp.status_code == 200
    assert client.get(f"/join/{new_code}").status_code == 404


def test_add_member_by_email(client, created, t1, t2):
    crew_id = created["trip_crew"]["id"]
    resp = client.post(f"/tripcrews/{crew_id}/members", json={"email": t2.email, "traveler_id": t1.id})
    assert resp.status_code == 201
    again = client.post(f"/tripcrews/{crew_id}/members", json={"email": t2.email, "traveler_id": t1.id})
    assert again.status_code == 409


def test_trip_lifecycle(client, created, t1, t2):
    crew_id = created["trip_crew"]["id"]
    payload = {
        "trip_crew_id": crew_id,
        "traveler_id": t1.id,
        "name": "Outer Banks",
        "destination": "Outer Banks, NC",
        "purpose": "FAMILY",
        "trip_type": "BEACH",
        "start_date": "2025-06-30",
        "end_date": "2025-07-02",
    }
    resp = client.post("/trips/", json=payload)
    assert resp.status_code == 201, resp.text
    trip = resp.json()
    assert trip["season"] == "Summer"
    assert trip["days_total"] == 3
    assert trip["date_range"] == "Jun 30 – Jul 2"
    assert trip["purpose"] == "FAMILY"

    assert client.post("/trips/", json={**payload, "traveler_id": t2.id}).status_code == 403
    assert client.post("/trips/", json={**payload, "end_date": "2025-06-01"}).status_code == 400
    assert client.post("/trips/", json={**payload, "purpose": "HOLIDAY"}).status_code == 422

    updated = client.put(f"/trips/{trip['id']}", json={"traveler_id": t1.id, "end_date": "2025-07-05"})
    assert updated.status_code == 200
    assert updated.json()["days_total"] == 6
    assert updated.json()["date_range"] == "Jun 30 – Jul 5"

    assert client.get("/join/beach-trip-2025").json()["trip_count"] == 1
    trips = client.get(f"/tripcrews/{crew_id}/trips", params={"traveler_id": t1.id}).json()
    assert [t["id"] for t in trips] == [trip["id"]]

    assert client.get(f"/trips/{trip['id']}", params={"traveler_id": t2.id}).status_code == 403
    assert client.delete(f"/trips/{trip['id']}", params={"traveler_id": t1.id}).status_code == 204
    assert client.get(f"/trips/{trip['id']}", params={"traveler_id": t1.id}).status_code == 404


def test_hydrate_requires_token(client):
    assert client.post("/auth/hydrate").status_code == 401
    assert client.post("/auth/hydrate", headers={"Authorization": "Basic abc"}).status_code == 401


def test_hydrate_rejects_invalid_token(client):
    with patch("routes.auth.verify_id_token", return_value=None):
        resp = client.post("/auth/hydrate", headers={"Authorization": "Bearer bad"})
    assert resp.status_code == 401


def test_hydrate_creates_then_updates_traveler(client):
    claims = {"uid": "firebase-123", "email": "dana@example.com", "name": "Dana Mae Ruiz", "picture": None}
    with patch("routes.auth.verify_id_token", return_value=claims):
        first = client.post("/auth/hydrate", headers={"Authorization": "Bearer good"})
        claims["name"] = "Dana Ruiz"
        second = client.post("/auth/hydrate", headers={"Authorization": "Bearer good"})

    assert first.status_code == 200
    body = first.json()
    assert body["firebase_id"] == "firebase-123"
    assert body["first_name"] == "Dana"
    assert body["last_name"] == "Mae Ruiz"
    assert body["enterprise_id"] == "tripwell-enterprises-master-container"

    assert second.json()["id"] == body["id"]
    assert second.json()["last_name"] == "Ruiz"


def test_hydrate_claims_pre_provisioned_email(client, db_session):
    from models.Traveler import Traveler

    invited = Traveler(email="erin@example.com")
    db_session.add(invited)
    db_session.commit()

    claims = {"uid": "firebase-erin", "email": "erin@example.com", "name": "Erin"}
    with patch("routes.auth.verify_id_token", return_value=claims):
        resp = client.post("/auth/hydrate", headers={"Authorization": "Bearer good"})

    assert resp.json()["id"] == invited.id
    assert resp.json()["firebase_id"] == "firebase-erin"


def test_traveler_find_or_create_and_profile(client):
    payload = {"firebase_id": "fb-xyz", "email": "fay@example.com", "display_name": "Fay"}
    first = client.post("/travelers/", json=payload).json()
    second = client.post("/travelers/", json=payload).json()
    assert first["id"] == second["id"]

    patched = client.patch(f"/travelers/{first['id']}", json={"last_name": "Nguyen"})
    assert patched.status_code == 200
    assert patched.json()["last_name"] == "Nguyen"
    assert patched.json()["first_name"] == "Fay"

    assert client.get("/travelers/999").status_code == 404
    assert client.post("/travelers/", json={"firebase_id": ""}).status_code == 400
