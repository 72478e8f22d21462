import pytest

from timberframe import (
    BuildingDesigner,
    BuildingInput,
    ElementRole,
    InvalidSizingInput,
)


@pytest.fixture
def building():
    return BuildingInput(
        length=12.0,
        width=8.0,
        num_floors=2,
        floor_height=3.0,
        lengthwise_bays=3,
        widthwise_bays=2,
    )


def test_grid_geometry(building):
    assert building.bay_length == pytest.approx(4.0)
    assert building.bay_width == pytest.approx(4.0)
    assert building.joist_span == building.bay_length
    assert building.design_load == 2.0

    across = BuildingInput(length=12.0, width=6.0, widthwise_bays=2, joists_run_lengthwise=False)
    assert across.joist_span == pytest.approx(3.0)
    assert across.beam_span == pytest.approx(4.0)


def test_design_sizes_every_member(sizer, building):
    res = BuildingDesigner(sizer).design(building, name="Test frame")

    assert res.name == "Test frame"
    assert set(res.members) == set(ElementRole)
    assert res.joist.span == pytest.approx(4.0)
    assert res.joist.line_load == pytest.approx(2.0 * 0.8)
    # Interior beams carry a full joist span, edge beams half
    assert res.interior_beam.line_load == pytest.approx(2.0 * 4.0)
    assert res.edge_beam.line_load == pytest.approx(2.0 * 2.0)
    assert res.edge_beam.depth <= res.interior_beam.depth

    assert res.column.beam_width == res.interior_beam.width
    assert res.column.tributary_area == pytest.approx(16.0)
    assert res.column.num_floors == 2

    assert res.joist.deflection_limit == 300
    assert res.all_pass
    assert not res.using_fallback
    assert res.warnings == []


def test_design_aggregates_quantities_cost_and_carbon(sizer, building):
    res = BuildingDesigner(sizer).design(building)
    q = res.quantities
    assert q.columns.count == 12
    assert q.edge_beams.count == 8
    assert q.floor_area == pytest.approx(192.0)
    assert res.cost.total > 0
    assert res.cost.joists.cost == pytest.approx(192.0 * 390)
    assert res.carbon.volume == pytest.approx(q.total_volume)


def test_summary_table_rows(sizer, building):
    rows = BuildingDesigner(sizer).design(building).summary_table()
    assert [r["role"] for r in rows] == ["joist", "interior_beam", "edge_beam", "column"]
    assert rows[3]["governing"] == "floors"
    assert rows[3]["length_m"] == pytest.approx(6.0)
    assert all(r["ok"] for r in rows)


def test_commercial_building_uses_commercial_limit(sizer):
    b = BuildingInput(length=12.0, width=8.0, load_type="commercial")
    res = BuildingDesigner(sizer).design(b)
    assert res.joist.line_load == pytest.approx(3.0 * 0.8)
    assert res.joist.deflection_limit == 360


def test_explicit_load_and_fire_rating(sizer):
    b = BuildingInput(length=18.0, width=12.0, load=5.0, fire_rating="90/90/90")
    res = BuildingDesigner(sizer).design(b)
    assert res.joist.line_load == pytest.approx(5.0 * 0.8)
    assert res.joist.width == 205
    assert res.column.fire_allowance == pytest.approx(90 * 0.7)


def test_degraded_catalog_marks_fallback(empty_sizer, building):
    res = BuildingDesigner(empty_sizer).design(building)
    assert res.using_fallback
    assert any(w.startswith("joist:") for w in res.warnings)
    assert any(w.startswith("column:") for w in res.warnings)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"length": 0},
        {"width": -8.0},
        {"lengthwise_bays": 0},
        {"widthwise_bays": 1.5},
        {"num_floors": 0},
        {"floor_height": 0},
        {"load_type": "industrial"},
        {"fire_rating": "45/45/45"},
    ],
)
def test_invalid_building(sizer, kwargs):
    b = BuildingInput(**{"length": 12.0, "width": 8.0, **kwargs})
    with pytest.raises(InvalidSizingInput):
        BuildingDesigner(sizer).design(b)


def test_print_summary(sizer, building, capsys):
    BuildingDesigner(sizer).design(building, name="Printed").print_summary()
    out = capsys.readouterr().out
    assert "Printed" in out
    assert "interior_beam" in out
    assert "OVERALL: PASS" in out
