"""
Tests for the city and activity catalogs.
"""
import pytest
from decimal import Decimal
from app.core.exceptions import NotFoundError
from app.services import catalog_service


def test_search_cities_by_text(db):
    cities = catalog_service.search_cities(db, query="lon")
    assert [c.city_name for c in cities] == ["London"]


def test_search_cities_matches_country(db):
    cities = catalog_service.search_cities(db, query="japan")
    assert [c.city_name for c in cities] == ["Tokyo"]


def test_search_cities_by_country_and_region(db):
    assert [c.city_name for c in catalog_service.search_cities(db, country="france")] == ["Paris"]
    # Europe: Paris (95) ranks above London (93)
    assert [c.city_name for c in catalog_service.search_cities(db, region="Europe")] == ["Paris", "London"]


def test_search_cities_limit(db):
    assert len(catalog_service.search_cities(db, limit=2)) == 2


def test_popular_cities(db):
    names = [c.city_name for c in catalog_service.popular_cities(db)]
    assert names == ["Tokyo", "New York", "Paris", "London", "Sydney"]


def test_get_city(db):
    assert catalog_service.get_city(1, db).city_name == "Paris"
    with pytest.raises(NotFoundError):
        catalog_service.get_city(999, db)


def test_city_activities_grouped_by_category(db):
    activities = catalog_service.get_city_activities(1, db)
    assert [a.category for a in activities] == ["Landmark", "Museum"]


def test_search_activities_filters(db):
    assert {a.activity_id for a in catalog_service.search_activities(db, city_id=1)} == {1, 2}
    assert {a.activity_id for a in catalog_service.search_activities(db, category="landmark")} == {1, 3, 4}
    assert [a.activity_name for a in catalog_service.search_activities(
        db, min_cost=Decimal("18"), max_cost=Decimal("20")
    )] == ["Louvre Museum", "Statue of Liberty"]
    assert [a.activity_id for a in catalog_service.search_activities(db, query="art")] == [2]


def test_activity_categories(db):
    assert catalog_service.activity_categories(db) == ["Landmark", "Museum"]


def test_resolve_activity(db):
    assert catalog_service.resolve_activity(3, db).activity_name == "Shibuya Crossing"
    assert catalog_service.resolve_activity(999, db) is None


def test_catalog_endpoints(client, auth_headers):
    search = client.get("/api/cities/search", params={"query": "paris"}, headers=auth_headers)
    assert search.status_code == 200
    assert search.json()[0]["city_id"] == 1

    city = client.get("/api/cities/1", headers=auth_headers).json()
    assert [a["activity_name"] for a in city["activities"]] == ["Eiffel Tower Visit", "Louvre Museum"]

    assert len(client.get("/api/cities/popular", headers=auth_headers).json()) == 5
    assert client.get("/api/cities/999", headers=auth_headers).status_code == 404

    categories = client.get("/api/activities/categories", headers=auth_headers)
    assert categories.json() == ["Landmark", "Museum"]

    activities = client.get("/api/activities/search", params={"city_id": 2}, headers=auth_headers).json()
    assert [a["activity_name"] for a in activities] == ["Shibuya Crossing"]

    assert client.get("/api/activities/4", headers=auth_headers).json()["activity_name"] == "Statue of Liberty"
    assert client.get("/api/activities/999", headers=auth_headers).status_code == 404


def test_catalog_requires_authentication(client):
    assert client.get("/api/cities/popular").status_code == 401
    assert client.get("/api/activities/categories").status_code == 401
