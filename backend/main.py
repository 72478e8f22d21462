"""Demo: three-storey office frame — member sizing, quantities and span chart."""

import logging

from timberframe import (
    BuildingDesigner,
    BuildingInput,
    FireRating,
    build_sizer,
    load_settings,
    span_range,
    span_table,
)
from timberframe.plotting import plot_span_chart


def main():
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sizer = build_sizer(settings)

    # ── Single members ────────────────────────────────────────────
    joist = sizer.size_joist(5.0, 800, 2.0)  # 5 m span, 800 crs, 2 kPa
    joist.print_summary()

    beam = sizer.size_beam(8.0, 5.0, 3.0, fire_rating=FireRating.FRL_120)
    beam.print_summary()

    column = sizer.size_column(335, 3.0, 40.0, 3, 3.2, "60/60/60")
    column.print_summary()

    # ── Whole building ────────────────────────────────────────────
    building = BuildingInput(
        length=24.0,
        width=16.0,
        num_floors=3,
        floor_height=3.6,
        lengthwise_bays=4,
        widthwise_bays=2,
        load_type="commercial",
        fire_rating="60/60/60",
    )
    results = BuildingDesigner(sizer).design(building, name="Office frame")
    results.print_summary()

    # ── Span chart ────────────────────────────────────────────────
    rows = span_table(sizer, "joist", span_range(3.0, 9.0, 0.5), 2.0, spacing=800)
    plot_span_chart(rows, "output", title="Joist span table 2 kPa")
    plot_span_chart(rows, "output", title="Joist span table 2 kPa", renderer="plotly")


if __name__ == "__main__":
    main()
