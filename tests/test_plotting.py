import pytest

from timberframe import span_range, span_table
from timberframe.plotting import plot_span_chart


@pytest.fixture
def rows(sizer):
    return span_table(sizer, "joist", span_range(3.0, 8.0, 1.0), 2.0, spacing=600)


def test_png_chart(rows, tmp_path):
    path = plot_span_chart(rows, tmp_path, title="Joists 2 kPa")
    assert path == tmp_path / "joists_2_kpa.png"
    assert path.stat().st_size > 0


def test_html_chart(rows, tmp_path):
    path = plot_span_chart(rows, tmp_path / "charts", title="Joists", renderer="plotly")
    assert path.suffix == ".html"
    assert "plotly" in path.read_text(encoding="utf-8").lower()


def test_chart_rejects_bad_input(rows, tmp_path):
    with pytest.raises(ValueError):
        plot_span_chart([], tmp_path)
    with pytest.raises(ValueError):
        plot_span_chart(rows, tmp_path, renderer="bokeh")
