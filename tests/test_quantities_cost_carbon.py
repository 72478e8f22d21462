import pytest

from timberframe import (
    CarbonFactors,
    CostRates,
    compute_quantities,
    estimate_carbon,
    estimate_cost,
    format_currency,
)


@pytest.fixture
def quantities():
    return compute_quantities(
        joist_size=(120, 200),
        interior_beam_size=(250, 410),
        edge_beam_size=(250, 410),
        column_size=(250, 250),
        length=12.0,
        width=8.0,
        lengthwise_bays=3,
        widthwise_bays=2,
        num_floors=2,
        floor_height=3.0,
        joist_spacing=0.5,
    )


def test_element_counts(quantities):
    q = quantities
    # 4 m bays, joists at 500 crs: 8 spaces + 1 per bay, 6 bays, 2 floors
    assert q.joists.count == 108
    assert q.joists.length == pytest.approx(4.0)
    # 4 grid lines across the joists, 2 segments each
    assert q.edge_beams.count == 8
    assert q.interior_beams.count == 8
    assert q.columns.count == 12
    assert q.columns.length == pytest.approx(6.0)
    assert q.floor_area == pytest.approx(192.0)


def test_volumes_and_weight(quantities):
    q = quantities
    assert q.joists.volume == pytest.approx(0.12 * 0.2 * 4 * 108)
    assert q.beam_volume == pytest.approx(2 * 0.25 * 0.41 * 4 * 8)
    assert q.columns.volume == pytest.approx(0.25 * 0.25 * 6 * 12)
    assert q.total_volume == pytest.approx(10.368 + 6.56 + 4.5)
    assert q.weight == pytest.approx(q.total_volume * 600)


def test_joists_running_widthwise_swap_beam_lines():
    q = compute_quantities(
        joist_size=(120, 200),
        interior_beam_size=(250, 410),
        edge_beam_size=(250, 410),
        column_size=(250, 250),
        length=12.0,
        width=8.0,
        lengthwise_bays=3,
        widthwise_bays=2,
        num_floors=1,
        floor_height=3.0,
        joists_run_lengthwise=False,
        joist_spacing=0.5,
    )
    # 3 grid lines across the joists, 3 segments each
    assert q.edge_beams.count == 6
    assert q.interior_beams.count == 3
    assert q.interior_beams.length == pytest.approx(4.0)


def test_quantities_reject_zero_bays():
    with pytest.raises(ValueError):
        compute_quantities(
            joist_size=(120, 200),
            interior_beam_size=(250, 410),
            edge_beam_size=(250, 410),
            column_size=(250, 250),
            length=12.0,
            width=8.0,
            lengthwise_bays=0,
            widthwise_bays=2,
            num_floors=1,
            floor_height=3.0,
        )


def test_cost_breakdown(quantities):
    cost = estimate_cost(quantities, joist_size=(120, 200))
    assert cost.beams.cost == pytest.approx(6.56 * 3200)
    assert cost.columns.cost == pytest.approx(4.5 * 3200)
    assert cost.joists.unit == "m2"
    assert cost.joists.cost == pytest.approx(192 * 390)
    assert cost.joist_size_used == "120x200"
    assert cost.total == pytest.approx(20992 + 14400 + 74880)


def test_joist_rate_falls_back_to_closest_size():
    rates = CostRates(joist_rates={"120x200": 300.0, "165x270": 350.0, "205x335": 400.0})
    assert rates.joist_rate_for(165, 300) == ("165x270", 350.0)
    assert rates.joist_rate_for(205, 335) == ("205x335", 400.0)
    assert CostRates(joist_rates={}).joist_rate_for(165, 300) == (None, 390.0)


def test_cost_rates_must_be_positive():
    with pytest.raises(ValueError):
        CostRates(beam_rate=0)


def test_format_currency():
    assert format_currency(12345.6) == "$12,346"
    assert format_currency(0) == "$0"
    assert format_currency(-5) == "-$5"


def test_carbon_estimate():
    c = estimate_carbon(10.0)
    assert c.carbon_storage == pytest.approx(9.0)
    assert c.embodied_carbon == pytest.approx(2.0)
    assert c.baseline_emissions == pytest.approx(25.0)
    assert c.carbon_savings == pytest.approx(23.0)


def test_carbon_custom_factors_and_validation():
    c = estimate_carbon(4.0, CarbonFactors(storage=1.0, embodied=0.5, baseline=2.0))
    assert c.carbon_savings == pytest.approx(6.0)
    with pytest.raises(ValueError):
        estimate_carbon(-1.0)
