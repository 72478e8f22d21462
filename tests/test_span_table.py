import pytest

from timberframe import span_range, span_table


def test_span_range_is_inclusive():
    assert span_range(3.0, 4.0, 0.25) == [3.0, 3.25, 3.5, 3.75, 4.0]
    assert span_range(3.0, 9.0, 0.5)[-1] == 9.0
    assert len(span_range()) == 13


def test_span_range_never_passes_stop():
    assert span_range(3.0, 9.0, 4.0) == [3.0, 7.0]
    assert span_range(3.0, 4.0, 0.3) == [3.0, 3.3, 3.6, 3.9]
    assert span_range(0.1, 0.7, 0.1)[-1] == 0.7
    assert span_range(5.0, 5.0, 1.0) == [5.0]


@pytest.mark.parametrize("args", [(3.0, 9.0, 0.0), (9.0, 3.0, 0.5)])
def test_span_range_rejects_bad_arguments(args):
    with pytest.raises(ValueError):
        span_range(*args)


def test_joist_span_table_matches_single_sizing(sizer):
    rows = span_table(sizer, "joist", [6.0, 3.0, 9.0], 3.0, spacing=800, width=250,
                      deflection_limit=300)
    assert [r.span for r in rows] == [3.0, 6.0, 9.0]
    single = sizer.size_joist(9.0, 800, 3.0, width=250, deflection_limit=300)
    assert rows[-1].depth == single.depth == 335
    assert rows[-1].governing == "deflection"


def test_span_table_depths_never_decrease(sizer):
    rows = span_table(sizer, "beam", span_range(3.0, 12.0, 0.5), 3.0,
                      tributary_width=5.0, fire_rating="90/90/90")
    depths = [r.depth for r in rows]
    assert depths == sorted(depths)
    assert all(r.width == 205 for r in rows)


def test_beam_span_table_needs_tributary_width(sizer):
    with pytest.raises(ValueError):
        span_table(sizer, "beam", [4.0], 3.0)


def test_columns_have_no_span_table(sizer):
    with pytest.raises(ValueError):
        span_table(sizer, "column", [4.0], 3.0)
