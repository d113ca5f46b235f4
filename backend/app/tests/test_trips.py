"""
Tests for trip endpoints across both stores.
"""
from decimal import Decimal
from app.core.config import settings
from conftest import create_trip

LOCAL_TRIP_ID = "temp-1700000000-abc123"


def _seed_local_trip(local_store, **fields):
    record = {
        "id": LOCAL_TRIP_ID,
        "owner_id": settings.ANONYMOUS_USER_ID,
        "name": "Offline Weekend",
        "start_date": "2026-03-01",
        "end_date": "2026-03-03",
        "is_public": False,
        "total_budget": "300",
    }
    record.update(fields)
    return local_store.upsert_trip(record)


def test_create_remote_trip(client, user_headers):
    trip = create_trip(client, user_headers)
    assert trip["store"] == "remote"
    assert not trip["id"].startswith(("temp-", "mock-"))
    assert trip["is_public"] is False
    assert Decimal(trip["total_budget"]) == Decimal("1000")


def test_anonymous_trip_goes_to_local_store(client, local_store):
    trip = create_trip(client)
    assert trip["store"] == "local"
    assert trip["id"].startswith("temp-")
    assert local_store.get_trip(trip["id"])["name"] == "Spring in Europe"


def test_end_before_start_rejected(client, user_headers):
    response = client.post(
        "/api/trips",
        json={"name": "Backwards", "start_date": "2026-05-10", "end_date": "2026-05-01"},
        headers=user_headers
    )
    assert response.status_code == 400
    assert response.json()["error"] == "End date must be after start date"
    assert client.get("/api/trips", headers=user_headers).json() == []


def test_missing_dates_rejected(client, user_headers):
    response = client.post("/api/trips", json={"name": "Someday"}, headers=user_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Please select both start and end dates"


def test_blank_budget_is_zero(client, user_headers):
    trip = create_trip(client, user_headers, total_budget="")
    assert Decimal(trip["total_budget"]) == 0


def test_anonymous_list_falls_back_to_local(client):
    """With no remote rows the whole local collection is returned."""
    created = create_trip(client, start_date="2026-01-01", end_date="2026-01-05")
    trips = client.get("/api/trips").json()
    ids = [t["id"] for t in trips]
    assert set(ids) == {"mock-1", "mock-2", "mock-3", created["id"]}
    starts = [t["start_date"] for t in trips]
    assert starts == sorted(starts, reverse=True)


def test_user_list_excludes_other_owners(client, user_headers, other_headers):
    mine = create_trip(client, user_headers)
    create_trip(client, other_headers, name="Not mine")
    trips = client.get("/api/trips", headers=user_headers).json()
    assert [t["id"] for t in trips] == [mine["id"]]


def test_visibility_toggle_on_local_trip(client, local_store):
    _seed_local_trip(local_store)

    response = client.post(f"/api/trips/{LOCAL_TRIP_ID}/visibility")
    assert response.status_code == 200
    assert response.json()["is_public"] is True
    assert response.json()["store"] == "local"
    assert local_store.get_trip(LOCAL_TRIP_ID)["is_public"] is True

    response = client.post(f"/api/trips/{LOCAL_TRIP_ID}/visibility")
    assert response.json()["is_public"] is False


def test_visibility_explicit_value(client, user_headers):
    trip = create_trip(client, user_headers)
    response = client.post(f"/api/trips/{trip['id']}/visibility", json={"is_public": True}, headers=user_headers)
    assert response.json()["is_public"] is True
    response = client.post(f"/api/trips/{trip['id']}/visibility", json={"is_public": True}, headers=user_headers)
    assert response.json()["is_public"] is True


def test_delete_is_idempotent(client, user_headers):
    trip = create_trip(client, user_headers)
    assert client.delete(f"/api/trips/{trip['id']}", headers=user_headers).status_code == 204
    assert client.delete(f"/api/trips/{trip['id']}", headers=user_headers).status_code == 204
    assert client.get(f"/api/trips/{trip['id']}", headers=user_headers).status_code == 404


def test_delete_local_trip_purges_sections(client, local_store):
    _seed_local_trip(local_store)
    local_store.save_sections(LOCAL_TRIP_ID, [{"id": "s1", "title": "Day one"}])
    assert client.delete(f"/api/trips/{LOCAL_TRIP_ID}").status_code == 204
    assert local_store.get_trip(LOCAL_TRIP_ID) is None
    assert local_store.get_sections(LOCAL_TRIP_ID) is None


def test_update_revalidates_merged_dates(client, user_headers):
    trip = create_trip(client, user_headers)
    response = client.patch(f"/api/trips/{trip['id']}", json={"end_date": "2026-04-01"}, headers=user_headers)
    assert response.status_code == 400
    detail = client.get(f"/api/trips/{trip['id']}", headers=user_headers).json()
    assert detail["end_date"] == "2026-05-10"

    response = client.patch(f"/api/trips/{trip['id']}", json={"name": "Renamed"}, headers=user_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"


def test_only_owner_can_change_trip(client, user_headers, other_headers, admin_headers):
    trip = create_trip(client, user_headers)
    assert client.patch(f"/api/trips/{trip['id']}", json={"name": "Mine now"}, headers=other_headers).status_code == 403
    assert client.patch(f"/api/trips/{trip['id']}", json={"name": "Admin edit"}, headers=admin_headers).status_code == 403
    assert client.get(f"/api/trips/{trip['id']}", headers=other_headers).status_code == 403


def test_duplicate_public_trip(client, user_headers, other_headers):
    source = create_trip(client, user_headers, name="Rome in Spring")
    client.post(f"/api/trips/{source['id']}/visibility", json={"is_public": True}, headers=user_headers)

    response = client.post(
        f"/api/trips/{source['id']}/duplicate",
        json={"start_date": "2026-09-01", "end_date": "2026-09-07"},
        headers=other_headers
    )
    assert response.status_code == 201
    copy = response.json()
    assert copy["id"] != source["id"]
    assert copy["name"] == "Rome in Spring"
    assert copy["description"] == source["description"]
    assert copy["total_budget"] == source["total_budget"]
    assert copy["is_public"] is False
    assert copy["start_date"] == "2026-09-01"
    assert copy["owner_id"] != source["owner_id"]


def test_duplicate_rejects_bad_dates(client, user_headers, other_headers):
    source = create_trip(client, user_headers)
    client.post(f"/api/trips/{source['id']}/visibility", json={"is_public": True}, headers=user_headers)
    response = client.post(
        f"/api/trips/{source['id']}/duplicate",
        json={"start_date": "2024-09-10", "end_date": "2024-09-05"},
        headers=other_headers
    )
    assert response.status_code == 400
    assert client.get("/api/trips", headers=other_headers).json() == []


def test_duplicate_private_trip_not_found(client, user_headers, other_headers):
    source = create_trip(client, user_headers)
    response = client.post(
        f"/api/trips/{source['id']}/duplicate",
        json={"start_date": "2026-09-01", "end_date": "2026-09-07"},
        headers=other_headers
    )
    assert response.status_code == 404


def test_public_trips_from_both_stores(client, user_headers):
    trip = create_trip(client, user_headers, name="Public Lisbon", city="Lisbon", country="Portugal")
    client.post(f"/api/trips/{trip['id']}/visibility", json={"is_public": True}, headers=user_headers)

    trips = client.get("/api/public/trips").json()
    by_id = {t["id"]: t for t in trips}
    assert "mock-2" in by_id
    assert "mock-1" not in by_id
    assert by_id[trip["id"]]["author"]["full_name"] == "Alice Walker"
    assert by_id["mock-2"]["author"] is None

    filtered = client.get("/api/public/trips", params={"country": "portugal"}).json()
    assert [t["id"] for t in filtered] == [trip["id"]]


def test_public_trip_detail(client, user_headers):
    trip = create_trip(client, user_headers)
    assert client.get(f"/api/public/trips/{trip['id']}").status_code == 404
    client.post(f"/api/trips/{trip['id']}/visibility", headers=user_headers)
    detail = client.get(f"/api/public/trips/{trip['id']}").json()
    assert detail["total_days"] == 10
    assert detail["stops"] == []
