import pytest
from fastapi.testclient import TestClient

from api.main import app, get_sizer


@pytest.fixture
def client(sizer):
    app.dependency_overrides[get_sizer] = lambda: sizer
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_catalog_filtered_by_type(client, catalog):
    resp = client.get("/api/catalog", params={"type": "joist"})
    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == len(catalog.entries_for("joist"))
    assert {row["type"] for row in body} == {"joist"}

    assert len(client.get("/api/catalog").json()) == len(catalog)
    assert client.get("/api/catalog", params={"type": "rafter"}).status_code == 422


def test_materials(client):
    body = client.get("/api/materials").json()
    grades = {m["grade"]: m for m in body}
    assert grades["ML38"]["is_default"]
    assert grades["ML38"]["E_MPa"] == 14500.0


def test_size_joist(client):
    resp = client.post(
        "/api/size/joist",
        json={"span_m": 9.0, "spacing_mm": 800, "load_kPa": 3.0, "width_mm": 250,
              "deflection_limit": 300},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["member_type"] == "joist"
    assert body["depth_mm"] == 335
    assert body["snapped"]
    assert body["governing"] == "deflection"
    assert body["passes"]


def test_size_joist_load_type_picks_deflection_limit(client):
    body = client.post(
        "/api/size/joist",
        json={"span_m": 5.0, "load_kPa": 2.0, "load_type": "residential"},
    ).json()
    assert body["deflection_limit"] == 300


def test_size_beam_with_fire_rating(client):
    body = client.post(
        "/api/size/beam",
        json={"span_m": 6.0, "tributary_width_m": 4.0, "load_kPa": 3.0,
              "fire_rating": "60/60/60"},
    ).json()
    assert body["width_mm"] == 165
    assert body["fire_allowance_mm"] == pytest.approx(42.0)
    assert body["depth_mm"] >= body["fire_adjusted_depth_mm"]


def test_size_column(client):
    resp = client.post(
        "/api/size/column",
        json={"beam_width_mm": 335, "load_kPa": 3.0, "tributary_area_m2": 42.0,
              "num_floors": 3, "fire_rating": "60/60/60"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert (body["width_mm"], body["depth_mm"]) == (420, 550)
    assert body["total_load_kN"] == pytest.approx(378.0)


def test_span_table(client):
    resp = client.post(
        "/api/span-table",
        json={"member_type": "joist", "load_kPa": 2.0, "start_m": 3.0, "stop_m": 6.0,
              "step_m": 1.0},
    )
    assert resp.status_code == 200
    assert [row["span_m"] for row in resp.json()] == [3.0, 4.0, 5.0, 6.0]

    resp = client.post("/api/span-table", json={"member_type": "beam", "load_kPa": 2.0})
    assert resp.status_code == 422


def test_building_design(client):
    resp = client.post(
        "/api/building/design",
        json={"name": "API frame", "length_m": 12.0, "width_m": 8.0, "num_floors": 2,
              "floor_height_m": 3.0},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "API frame"
    assert body["all_pass"]
    assert body["column"]["num_floors"] == 2
    assert [q["role"] for q in body["quantities"]] == [
        "joist", "interior_beam", "edge_beam", "column",
    ]
    assert body["cost"]["total_formatted"].startswith("$")
    assert body["carbon"]["volume_m3"] == pytest.approx(body["total_volume_m3"], abs=1e-3)


def test_building_design_applies_safety_factor(client):
    payload = {"length_m": 12.0, "width_m": 8.0, "safety_factor": 1.5}
    body = client.post("/api/building/design", json=payload).json()
    assert body["joist"]["line_load_kN_m"] == pytest.approx(2.0 * 0.8 * 1.5)
    assert body["interior_beam"]["line_load_kN_m"] == pytest.approx(2.0 * 4.0 * 1.5)

    payload["safety_factor"] = 0.9
    assert client.post("/api/building/design", json=payload).status_code == 422


def test_span_table_stops_at_requested_span(client):
    resp = client.post(
        "/api/span-table",
        json={"load_kPa": 2.0, "start_m": 3.0, "stop_m": 9.0, "step_m": 4.0},
    )
    assert [row["span_m"] for row in resp.json()] == [3.0, 7.0]


@pytest.mark.parametrize(
    "route, payload",
    [
        ("/api/size/joist", {"span_m": 5.0, "load_kPa": 2.0, "deflection_limit": 0}),
        ("/api/size/joist", {"span_m": 0, "load_kPa": 2.0}),
        ("/api/size/joist", {"span_m": 5.0, "load_kPa": 2.0, "fire_rating": "45/45/45"}),
        ("/api/size/beam", {"span_m": 5.0, "tributary_width_m": -1, "load_kPa": 2.0}),
        ("/api/size/column", {"beam_width_mm": 335, "load_kPa": 3.0,
                              "tributary_area_m2": 40.0, "num_floors": 0}),
        ("/api/building/design", {"length_m": 12.0, "width_m": 8.0, "lengthwise_bays": 0}),
        ("/api/size/joist", {"load_kPa": 2.0}),
    ],
)
def test_invalid_input_is_422(client, route, payload):
    resp = client.post(route, json=payload)
    assert resp.status_code == 422
