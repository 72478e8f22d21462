"""Span chart export — selected depth against span, PNG (matplotlib) or HTML (plotly)."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import plotly.graph_objects as go

from .span_table import SpanTableRow

logger = logging.getLogger(__name__)

_BG = "#ffffff"
_GRID_MAJOR = "#d4d4d4"
_GRID_MINOR = "#eeeeee"
_TEXT = "#1f2937"
_TEXT_MUTED = "#6b7280"
_SELECTED = "#2563eb"
_REQUIRED = "#dc2626"


def _slugify(name: str) -> str:
    return name.lower().replace(" ", "_").replace("/", "-")


def _style_axes(ax, title: str) -> None:
    fig = ax.figure
    fig.patch.set_facecolor(_BG)
    ax.set_facecolor(_BG)
    ax.set_title(title, color=_TEXT, fontsize=12, pad=6)
    ax.set_xlabel("Span (m)", color=_TEXT_MUTED)
    ax.set_ylabel("Depth (mm)", color=_TEXT_MUTED)
    ax.tick_params(colors=_TEXT_MUTED)
    for spine in ax.spines.values():
        spine.set_color(_GRID_MAJOR)
    ax.grid(True, color=_GRID_MAJOR, alpha=0.6, linewidth=0.8)
    ax.minorticks_on()
    ax.grid(which="minor", color=_GRID_MINOR, alpha=0.6, linewidth=0.5)


def _plot_matplotlib(rows: Sequence[SpanTableRow], title: str, path: Path) -> Path:
    spans = [r.span for r in rows]
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.step(spans, [r.depth for r in rows], where="post", color=_SELECTED,
            linewidth=2, label="Selected depth")
    ax.plot(spans, [r.fire_adjusted_depth for r in rows], color=_REQUIRED,
            linestyle="--", linewidth=1.2, label="Required depth")
    _style_axes(ax, title)
    ax.legend(frameon=False)
    fig.savefig(path, dpi=170, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    return path


def _plot_plotly(rows: Sequence[SpanTableRow], title: str, path: Path) -> Path:
    spans = [r.span for r in rows]
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=spans,
            y=[r.depth for r in rows],
            mode="lines+markers",
            name="Selected depth",
            line={"width": 2, "color": _SELECTED, "shape": "hv"},
        )
    )
    fig.add_trace(
        go.Scatter(
            x=spans,
            y=[r.fire_adjusted_depth for r in rows],
            mode="lines",
            name="Required depth",
            line={"width": 1.2, "color": _REQUIRED, "dash": "dash"},
        )
    )
    fig.update_layout(
        title=title,
        template="plotly_white",
        xaxis_title="Span (m)",
        yaxis_title="Depth (mm)",
        margin={"t": 70, "r": 30, "b": 60, "l": 70},
    )
    fig.write_html(str(path), include_plotlyjs="cdn")
    return path


def plot_span_chart(
    rows: Sequence[SpanTableRow],
    output_dir: str | Path = "output",
    *,
    title: str = "Span table",
    renderer: str = "matplotlib",
) -> Path:
    """Save a span chart and return its path."""
    if not rows:
        raise ValueError("No span table rows to plot")
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    if renderer == "matplotlib":
        path = _plot_matplotlib(rows, title, output_dir / f"{_slugify(title)}.png")
    elif renderer == "plotly":
        path = _plot_plotly(rows, title, output_dir / f"{_slugify(title)}.html")
    else:
        raise ValueError("renderer must be 'matplotlib' or 'plotly'")

    logger.info("Saved span chart: %s", path)
    return path
