"""GET /zones, /zones/contains and /zones/{id}."""

from __future__ import annotations


def test_point_inside_one_zone(client) -> None:
    resp = client.get("/zones/contains", params={"lat": -36.8717, "lng": 174.7708})
    assert resp.status_code == 200
    assert resp.json() == {
        "queryPoint": {"lat": -36.8717, "lng": 174.7708},
        "matches": [
            {
                "schoolId": "1",
                "schoolName": "Auckland Grammar School",
                "zoneLastUpdated": "2024-01-15",
            }
        ],
    }


def test_point_outside_every_zone(client) -> None:
    body = client.get("/zones/contains", params={"lat": -36.5, "lng": 175.5}).json()
    assert body["matches"] == []


def test_contains_requires_coordinates(client) -> None:
    assert client.get("/zones/contains", params={"lng": 174.7}).status_code == 400


def test_zones_in_bounds(client) -> None:
    resp = client.get("/zones", params={"bbox": "174.70,-36.80,174.80,-36.74"})
    assert resp.status_code == 200
    assert sorted(z["id"] for z in resp.json()["zones"]) == ["zone-12", "zone-13"]


def test_zones_in_bounds_requires_bbox(client) -> None:
    resp = client.get("/zones")
    assert resp.status_code == 400
    assert resp.json() == {"detail": "bbox is required"}


def test_inverted_bbox_is_a_bad_request(client) -> None:
    assert client.get("/zones", params={"bbox": "174.8,-36.8,174.7,-36.7"}).status_code == 400


def test_zone_by_id(client) -> None:
    body = client.get("/zones/zone-4").json()
    assert body["schoolId"] == "4"
    assert "notes" not in body
    assert client.get("/zones/zone-5").status_code == 404
