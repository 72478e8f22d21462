"""Span tables — selected joist/beam sizes over a range of spans."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from .fire import FireRating
from .sizing import MemberSizer
from .types import MemberType


@dataclass(frozen=True)
class SpanTableRow:
    span: float              # m
    width: float             # mm
    depth: float             # mm
    bending_depth: float     # mm
    deflection_depth: float  # mm
    fire_adjusted_depth: float  # mm
    governing: str
    passes: bool
    using_fallback: bool


def span_range(start: float = 3.0, stop: float = 9.0, step: float = 0.5) -> list[float]:
    """Spans from ``start`` up to and including ``stop`` where the step lands on it."""
    if step <= 0:
        raise ValueError("step must be positive")
    if stop < start:
        raise ValueError("stop must not be less than start")
    # Tolerate float error at the end point
    n = int(math.floor((stop - start) / step + 1e-9))
    return [round(start + i * step, 6) for i in range(n + 1)]


def span_table(
    sizer: MemberSizer,
    member_type: MemberType | str,
    spans: Iterable[float],
    load: float,
    *,
    spacing: float = 800.0,
    tributary_width: float | None = None,
    grade: str | None = None,
    fire_rating: FireRating | str | None = FireRating.NONE,
    width: float | None = None,
    deflection_limit: int | None = None,
    safety_factor: float = 1.0,
) -> list[SpanTableRow]:
    """Size one member per span.

    Joists use ``spacing`` (mm); beams need ``tributary_width`` (m).
    """
    mt = MemberType.parse(member_type)
    if mt is MemberType.COLUMN:
        raise ValueError("Span tables are only available for joists and beams")
    if mt is MemberType.BEAM and tributary_width is None:
        raise ValueError("tributary_width is required for beam span tables")

    rows: list[SpanTableRow] = []
    for span in sorted(spans):
        if mt is MemberType.JOIST:
            r = sizer.size_joist(
                span, spacing, load, grade, fire_rating,
                width=width, deflection_limit=deflection_limit,
                safety_factor=safety_factor,
            )
        else:
            r = sizer.size_beam(
                span, tributary_width, load, grade, fire_rating,
                width=width, deflection_limit=deflection_limit,
                safety_factor=safety_factor,
            )
        rows.append(
            SpanTableRow(
                span=r.span,
                width=r.width,
                depth=r.depth,
                bending_depth=r.bending_depth,
                deflection_depth=r.deflection_depth,
                fire_adjusted_depth=r.fire_adjusted_depth,
                governing=r.governing_criterion,
                passes=r.passes,
                using_fallback=r.using_fallback,
            )
        )
    return rows
