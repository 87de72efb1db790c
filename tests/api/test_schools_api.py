"""GET /schools/nearby, /schools/{id} and /schools/{id}/zone."""

from __future__ import annotations


def test_nearby_defaults(client) -> None:
    resp = client.get("/schools/nearby", params={"lat": -36.8485, "lng": 174.7633})
    assert resp.status_code == 200
    body = resp.json()
    assert body["center"] == {"lat": -36.8485, "lng": 174.7633}
    assert body["radius"] == 5000
    assert [s["id"] for s in body["schools"]] == ["4", "1", "5", "10", "2"]
    assert all("distanceMeters" in s for s in body["schools"])


def test_nearby_limit_is_capped(client) -> None:
    body = client.get(
        "/schools/nearby",
        params={"lat": -36.87, "lng": 174.78, "radius": 100000, "limit": 500},
    ).json()
    assert len(body["schools"]) == 13


def test_nearby_zero_radius_is_empty(client) -> None:
    body = client.get(
        "/schools/nearby", params={"lat": -36.8717, "lng": 174.7708, "radius": 0}
    ).json()
    assert body["schools"] == []


def test_nearby_requires_coordinates(client) -> None:
    resp = client.get("/schools/nearby", params={"lat": -36.8})
    assert resp.status_code == 400
    assert resp.json() == {"detail": "lat and lng are required"}


def test_nearby_rejects_out_of_range_and_negative_values(client) -> None:
    assert client.get("/schools/nearby", params={"lat": 91, "lng": 174}).status_code == 400
    assert (
        client.get("/schools/nearby", params={"lat": -36.8, "lng": 174.7, "radius": -5}).status_code
        == 400
    )
    assert client.get("/schools/nearby", params={"lat": "north", "lng": 174}).status_code == 422


def test_school_by_id(client) -> None:
    resp = client.get("/schools/1")
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Auckland Grammar School"
    assert body["akaNames"]
    assert body["proprietor"] == "State"


def test_unknown_school_is_not_found(client) -> None:
    resp = client.get("/schools/999")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "school not found"}


def test_school_zone(client) -> None:
    resp = client.get("/schools/1/zone")
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == "zone-1"
    assert body["schoolId"] == "1"
    assert body["geometry"]["type"] == "MultiPolygon"
    ring = body["geometry"]["coordinates"][0][0]
    assert ring[0] == ring[-1]
    assert body["lastUpdated"].startswith("2024-01-15")


def test_school_without_zone(client) -> None:
    assert client.get("/schools/5/zone").status_code == 404
