"""
Tests for trip, stop and scheduled-activity endpoints.
"""
from decimal import Decimal

EUROPE = {"trip_name": "Europe", "start_date": "2025-06-01", "end_date": "2025-06-15"}


def _create_trip(client, headers, **overrides):
    payload = dict(EUROPE)
    payload.update(overrides)
    response = client.post("/api/trips", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_trips_require_authentication(client):
    assert client.get("/api/trips").status_code == 401
    assert client.post("/api/trips", json=EUROPE).status_code == 401


def test_europe_itinerary(client, auth_headers):
    """Create a trip, add a stop and an activity, then read it back."""
    trip = _create_trip(client, auth_headers)
    assert trip["is_public"] is False

    stop_response = client.post(
        f"/api/trips/{trip['trip_id']}/stops",
        json={"city_id": 1, "arrival_date": "2025-06-01", "departure_date": "2025-06-05", "stop_order": 1},
        headers=auth_headers
    )
    assert stop_response.status_code == 201
    stop = stop_response.json()
    assert Decimal(stop["accommodation_cost"]) == 0

    activity_response = client.post(
        f"/api/stops/{stop['stop_id']}/activities",
        json={"activity_id": 1, "scheduled_date": "2025-06-02"},
        headers=auth_headers
    )
    assert activity_response.status_code == 201
    assert Decimal(activity_response.json()["actual_cost"]) == 0

    detail = client.get(f"/api/trips/{trip['trip_id']}", headers=auth_headers).json()
    assert detail["start_date"] == "2025-06-01"
    assert detail["end_date"] == "2025-06-15"
    assert len(detail["stops"]) == 1
    assert detail["stops"][0]["city_name"] == "Paris"
    assert detail["stops"][0]["country"] == "France"
    assert len(detail["stops"][0]["activities"]) == 1
    assert detail["stops"][0]["activities"][0]["activity_name"] == "Eiffel Tower Visit"

    trips = client.get("/api/trips", headers=auth_headers).json()
    assert len(trips) == 1
    assert trips[0]["stop_count"] == 1


def test_create_trip_missing_field(client, auth_headers):
    response = client.post(
        "/api/trips",
        json={"trip_name": "No dates"},
        headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_create_trip_inverted_dates(client, auth_headers):
    response = client.post(
        "/api/trips",
        json={"trip_name": "Backwards", "start_date": "2025-06-15", "end_date": "2025-06-01"},
        headers=auth_headers
    )
    assert response.status_code == 400


def test_list_trips_only_returns_own(client, auth_headers, other_auth_headers):
    mine = _create_trip(client, auth_headers)
    _create_trip(client, other_auth_headers, trip_name="Theirs")

    trips = client.get("/api/trips", headers=auth_headers).json()

    assert [t["trip_id"] for t in trips] == [mine["trip_id"]]


def test_other_users_trip_is_not_found(client, auth_headers, other_auth_headers):
    trip = _create_trip(client, auth_headers)
    trip_id = trip["trip_id"]

    assert client.get(f"/api/trips/{trip_id}", headers=other_auth_headers).status_code == 404
    assert client.put(
        f"/api/trips/{trip_id}", json={"trip_name": "Hijacked"}, headers=other_auth_headers
    ).status_code == 404
    assert client.delete(f"/api/trips/{trip_id}", headers=other_auth_headers).status_code == 404
    # Same response as a trip that never existed
    assert client.get("/api/trips/9999", headers=other_auth_headers).status_code == 404


def test_update_trip_is_public_toggle(client, auth_headers):
    trip = _create_trip(client, auth_headers)
    url = f"/api/trips/{trip['trip_id']}"

    assert client.put(url, json={"is_public": True}, headers=auth_headers).json()["is_public"] is True

    response = client.put(url, json={"is_public": False}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["is_public"] is False
    assert response.json()["trip_name"] == "Europe"


def test_delete_trip(client, auth_headers):
    trip = _create_trip(client, auth_headers)
    url = f"/api/trips/{trip['trip_id']}"
    client.post(
        f"{url}/stops",
        json={"city_id": 2, "arrival_date": "2025-06-01", "departure_date": "2025-06-03", "stop_order": 1},
        headers=auth_headers
    )
    client.post(f"{url}/budget", json={"category": "Food", "estimated_amount": "50"}, headers=auth_headers)

    response = client.delete(url, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Trip deleted successfully"
    assert client.get(url, headers=auth_headers).status_code == 404
    assert client.get("/api/trips", headers=auth_headers).json() == []


def test_add_stop_unknown_city(client, auth_headers):
    trip = _create_trip(client, auth_headers)
    url = f"/api/trips/{trip['trip_id']}"

    response = client.post(
        f"{url}/stops",
        json={"city_id": 999, "arrival_date": "2025-06-01", "departure_date": "2025-06-05", "stop_order": 1},
        headers=auth_headers
    )

    assert response.status_code == 400
    assert client.get(url, headers=auth_headers).json()["stops"] == []


def test_stops_returned_in_order(client, auth_headers):
    trip = _create_trip(client, auth_headers)
    url = f"/api/trips/{trip['trip_id']}"
    for city_id, order in ((2, 2), (1, 1)):
        client.post(
            f"{url}/stops",
            json={
                "city_id": city_id,
                "arrival_date": "2025-06-01",
                "departure_date": "2025-06-05",
                "stop_order": order
            },
            headers=auth_headers
        )

    stops = client.get(url, headers=auth_headers).json()["stops"]

    assert [s["stop_order"] for s in stops] == [1, 2]


def test_budget_totals_in_listing(client, auth_headers):
    trip = _create_trip(client, auth_headers)
    url = f"/api/trips/{trip['trip_id']}/budget"
    client.post(url, json={"category": "Lodging", "estimated_amount": "400"}, headers=auth_headers)
    response = client.post(url, json={"category": "Food", "estimated_amount": 99.5}, headers=auth_headers)
    assert response.status_code == 201

    trips = client.get("/api/trips", headers=auth_headers).json()

    assert Decimal(trips[0]["total_budget"]) == Decimal("499.5")


def test_add_activity_to_someone_elses_stop(client, auth_headers, other_auth_headers):
    trip = _create_trip(client, auth_headers)
    stop = client.post(
        f"/api/trips/{trip['trip_id']}/stops",
        json={"city_id": 1, "arrival_date": "2025-06-01", "departure_date": "2025-06-05", "stop_order": 1},
        headers=auth_headers
    ).json()

    response = client.post(
        f"/api/stops/{stop['stop_id']}/activities",
        json={"activity_id": 1},
        headers=other_auth_headers
    )

    assert response.status_code == 404


def test_add_unknown_activity(client, auth_headers):
    trip = _create_trip(client, auth_headers)
    stop = client.post(
        f"/api/trips/{trip['trip_id']}/stops",
        json={"city_id": 1, "arrival_date": "2025-06-01", "departure_date": "2025-06-05", "stop_order": 1},
        headers=auth_headers
    ).json()

    response = client.post(
        f"/api/stops/{stop['stop_id']}/activities",
        json={"activity_id": 999},
        headers=auth_headers
    )

    assert response.status_code == 400
