"""Seed dataset validation and ORM row construction."""

from __future__ import annotations

import json
import uuid

import pytest
from geoalchemy2.shape import to_shape
from shapely.geometry import MultiPolygon

from app.core.exceptions import ValidationError
from app.services.seed import (
    SeedDataset,
    build_rows,
    builtin_dataset,
    load_dataset,
    zone_geometry,
)

pytestmark = pytest.mark.unit


def _minimal(**zone) -> dict:
    school = {
        "id": "a",
        "name": "Alpha School",
        "type": "Primary",
        "yearLevels": "Y1-6",
        "gender": "Co-ed",
        "proprietor": "State",
        "location": {"lat": -36.9, "lng": 174.8},
    }
    payload = {"schools": [school], "zones": []}
    if zone:
        payload["zones"].append(
            {
                "schoolId": "a",
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[[174.79, -36.91], [174.81, -36.91], [174.81, -36.89], [174.79, -36.91]]],
                },
                **zone,
            }
        )
    return payload


def test_builtin_dataset_builds_fourteen_schools_and_seven_zones() -> None:
    dataset = builtin_dataset()
    schools, zones, id_map = build_rows(dataset, source_provider="builtin", source_file_id="auckland-sample")

    assert (len(schools), len(zones)) == (14, 7)
    assert set(id_map) == {str(i) for i in range(1, 15)}
    for new_id in id_map.values():
        uuid.UUID(new_id)

    ags = next(s for s in schools if s.id == id_map["1"])
    assert (ags.min_year, ags.max_year) == (9, 13)
    assert ags.source_provider == "builtin"
    point = to_shape(ags.location)
    assert point.y == pytest.approx(-36.8717, abs=1e-6)
    assert point.x == pytest.approx(174.7708, abs=1e-6)

    te_kura = next(s for s in schools if s.id == id_map["14"])
    assert te_kura.location is None

    assert {z.school_id for z in zones} <= set(id_map.values())


def test_polygon_is_promoted_to_multipolygon() -> None:
    dataset = SeedDataset.model_validate(_minimal(notes="east"))
    _, zones, _ = build_rows(dataset, source_provider="file", source_file_id="x.json")
    assert isinstance(to_shape(zones[0].geometry), MultiPolygon)
    assert zones[0].notes == "east"


def test_self_intersecting_zone_is_rejected() -> None:
    bow_tie = {
        "type": "Polygon",
        "coordinates": [[[0, 0], [1, 1], [1, 0], [0, 1], [0, 0]]],
    }
    with pytest.raises(ValidationError, match="invalid zone geometry"):
        zone_geometry(bow_tie)


def test_point_geometry_is_rejected() -> None:
    with pytest.raises(ValidationError, match="Polygon or MultiPolygon"):
        zone_geometry({"type": "Point", "coordinates": [174.8, -36.9]})


def test_zone_for_unknown_school_is_rejected() -> None:
    payload = _minimal(notes=None)
    payload["zones"][0]["schoolId"] = "missing"
    with pytest.raises(ValidationError, match="unknown school"):
        build_rows(SeedDataset.model_validate(payload), source_provider="file", source_file_id="x")


def test_second_zone_for_a_school_is_rejected() -> None:
    payload = _minimal(notes=None)
    payload["zones"].append(dict(payload["zones"][0]))
    with pytest.raises(ValidationError, match="more than one zone"):
        build_rows(SeedDataset.model_validate(payload), source_provider="file", source_file_id="x")


def test_duplicate_school_ids_are_rejected() -> None:
    payload = _minimal()
    payload["schools"].append(dict(payload["schools"][0]))
    with pytest.raises(ValidationError, match="duplicate school id"):
        build_rows(SeedDataset.model_validate(payload), source_provider="file", source_file_id="x")


def test_load_dataset_from_file(tmp_path) -> None:
    path = tmp_path / "schools.json"
    path.write_text(json.dumps(_minimal(lastUpdated="2024-02-01T00:00:00Z")), encoding="utf-8")

    dataset = load_dataset(path)

    assert [s.name for s in dataset.schools] == ["Alpha School"]
    _, zones, _ = build_rows(dataset, source_provider="file", source_file_id=path.name)
    assert zones[0].last_updated.tzinfo is None


def test_load_dataset_reports_bad_files(tmp_path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValidationError, match="invalid JSON"):
        load_dataset(broken)

    wrong = tmp_path / "wrong.json"
    wrong.write_text(json.dumps({"schools": [{"id": "a", "name": "No type"}]}), encoding="utf-8")
    with pytest.raises(ValidationError, match="invalid record"):
        load_dataset(wrong)


def test_seed_cli_rejects_invalid_file_without_touching_the_database(tmp_path, monkeypatch) -> None:
    from scripts import seed as seed_cli

    async def _unexpected(*args, **kwargs):
        raise AssertionError("seed_database must not run")

    monkeypatch.setattr(seed_cli, "seed_database", _unexpected)
    broken = tmp_path / "broken.json"
    broken.write_text("[", encoding="utf-8")

    assert seed_cli.main(["--file", str(broken)]) == 2


def test_missing_dataset_file_is_a_validation_error(tmp_path) -> None:
    with pytest.raises(ValidationError, match="cannot read dataset"):
        load_dataset(tmp_path / "missing.json")


def test_seed_cli_exits_with_two_for_missing_file(tmp_path) -> None:
    from scripts import seed as seed_cli

    assert seed_cli.main(["--file", str(tmp_path / "missing.json")]) == 2
