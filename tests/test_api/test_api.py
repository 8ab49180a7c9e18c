"""Tests for API endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from kolam.main import app
from tests.conftest import CIRCLE_SVG


client = TestClient(app)

PULLI_REQUEST = {
    "style": "pulli",
    "grid": {"rows": 3, "cols": 3, "spacing": 20},
    "iterations": 1,
    "seed": 0,
}


def _generated(**overrides) -> dict:
    response = client.post("/api/generate", json={**PULLI_REQUEST, **overrides})
    assert response.status_code == 200
    return response.json()


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["styles"] == ["kambi", "padi", "pulli", "sikku"]


def test_generate():
    data = _generated(include_svg=True)
    pattern = data["pattern"]
    assert pattern["style"] == "pulli"
    assert pattern["id"].startswith("pulli-")
    assert len(pattern["paths"]) == 9
    segment = pattern["paths"][0]["segments"][0]
    assert segment["type"] in ("line", "quadratic", "cubic")
    assert data["svg"].startswith("<?xml")


def test_generate_is_deterministic():
    assert _generated()["pattern"] == _generated()["pattern"]


def test_generate_invalid_grid():
    response = client.post("/api/generate", json={**PULLI_REQUEST, "grid": {"rows": 0, "cols": 3, "spacing": 20}})
    assert response.status_code == 422
    assert response.json()["error"] == "invalid_dimension"


def test_generate_stroke_would_lift():
    response = client.post("/api/generate", json={
        "style": "sikku",
        "grid": {"rows": 2, "cols": 2, "spacing": 20},
        "iterations": 9,
    })
    assert response.status_code == 422
    assert response.json()["error"] == "non_eulerian_construction"


def test_generate_unknown_style():
    response = client.post("/api/generate", json={**PULLI_REQUEST, "style": "rangoli"})
    assert response.status_code == 422


def test_analyze_pattern():
    pattern = _generated()["pattern"]
    response = client.post("/api/analyze", json={"pattern": pattern})
    assert response.status_code == 200
    data = response.json()
    assert data["pattern_id"] == pattern["id"]
    assert data["symmetry"]["rotational_order"] == 4
    assert data["symmetry"]["symmetry_group"] == "D4"
    assert data["centroid"] == pytest.approx([20.0, 20.0])
    assert len(data["motif"]) + data["placements"] == 36
    assert data["transforms"][0]["kind"] == "rotation"
    assert data["transforms"][0]["description"].startswith("rotation")
    assert "polar coordinates" in data["math_concepts"]


def test_analyze_svg_matches_pattern():
    data = _generated(include_svg=True)
    from_json = client.post("/api/analyze", json={"pattern": data["pattern"]}).json()
    from_svg = client.post("/api/analyze", json={"svg": data["svg"]}).json()
    assert from_svg["symmetry"] == from_json["symmetry"]
    assert from_svg["motif"] == from_json["motif"]


def test_analyze_external_svg():
    response = client.post("/api/analyze", json={"svg": CIRCLE_SVG})
    assert response.status_code == 200
    assert response.json()["symmetry"]["rotational_order"] >= 4


def test_analyze_needs_one_source():
    assert client.post("/api/analyze", json={}).status_code == 422
    pattern = _generated()["pattern"]
    assert client.post("/api/analyze", json={"pattern": pattern, "svg": CIRCLE_SVG}).status_code == 422


def test_analyze_empty_pattern():
    pattern = {"style": "kambi", "grid": {"rows": 2, "cols": 2, "spacing": 10}, "paths": []}
    response = client.post("/api/analyze", json={"pattern": pattern})
    assert response.status_code == 422
    assert response.json()["error"] == "analysis_inconclusive"


def test_discontinuous_path_rejected():
    pattern = {
        "style": "kambi",
        "grid": {"rows": 2, "cols": 2, "spacing": 10},
        "paths": [{"segments": [
            {"type": "line", "points": [[0, 0], [5, 0]]},
            {"type": "line", "points": [[6, 0], [9, 0]]},
        ]}],
    }
    response = client.post("/api/sequence", json={"pattern": pattern})
    assert response.status_code == 422
    assert response.json()["error"] == "discontinuity"


def test_segment_point_count_validated():
    pattern = {
        "style": "kambi",
        "grid": {"rows": 2, "cols": 2, "spacing": 10},
        "paths": [{"segments": [{"type": "cubic", "points": [[0, 0], [5, 0]]}]}],
    }
    assert client.post("/api/sequence", json={"pattern": pattern}).status_code == 422


def test_sequence():
    pattern = _generated()["pattern"]
    response = client.post("/api/sequence", json={"pattern": pattern})
    assert response.status_code == 200
    steps = response.json()["steps"]
    assert len(steps) == 9
    assert [s["index"] for s in steps] == list(range(9))
    covered = [tuple(ref) for s in steps for ref in s["segment_refs"]]
    assert len(covered) == len(set(covered)) == 36


def test_export():
    pattern = _generated()["pattern"]
    response = client.post("/api/export", json={"pattern": pattern, "options": {"palette": "neon-blue"}})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert f'data-kolam-id="{pattern["id"]}"' in response.text
    assert "#06B6D4" in response.text


def test_export_step_prefix():
    pattern = _generated()["pattern"]
    response = client.post("/api/export", json={"pattern": pattern, "step_prefix": 2})
    assert response.status_code == 200
    assert response.text.count("<path ") == 2


def test_export_bad_prefix():
    pattern = _generated()["pattern"]
    response = client.post("/api/export", json={"pattern": pattern, "step_prefix": 99})
    assert response.status_code == 422
    assert response.json()["error"] == "out_of_range"


def test_export_unknown_palette():
    pattern = _generated()["pattern"]
    response = client.post("/api/export", json={"pattern": pattern, "options": {"palette": "plaid"}})
    assert response.status_code == 422


def test_gallery():
    response = client.get("/api/gallery")
    assert response.status_code == 200
    items = response.json()["items"]
    assert {item["style"] for item in items} == {"sikku", "pulli", "kambi", "padi"}

    sikku = client.get("/api/gallery", params={"style": "sikku"}).json()["items"]
    assert sikku and all(item["style"] == "sikku" for item in sikku)


def test_gallery_item():
    response = client.get("/api/gallery/lotus-sikku")
    assert response.status_code == 200
    data = response.json()
    assert data["item"]["name"] == "Lotus Sikku"
    assert data["pattern"]["style"] == "sikku"
    assert 'data-role="grid-dot"' in data["svg"]


def test_gallery_unknown_item():
    assert client.get("/api/gallery/missing").status_code == 404


def test_engine_config_follows_settings():
    from kolam.config import Settings
    from kolam.dependencies import get_engine_config, get_settings

    app.dependency_overrides[get_settings] = lambda: Settings(kolam_symmetry_tolerance=0.02)
    try:
        pattern = _generated()["pattern"]
        assert client.post("/api/analyze", json={"pattern": pattern}).status_code == 200
    finally:
        app.dependency_overrides.clear()
    assert get_engine_config(Settings(kolam_samples_per_segment=16)).samples_per_segment == 16
