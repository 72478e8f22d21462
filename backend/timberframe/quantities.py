"""Element counts, timber volumes and weight for a regular post-and-beam grid."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ElementQuantity:
    count: int
    length: float  # m, per piece
    volume: float  # m³, all pieces


@dataclass(frozen=True)
class Quantities:
    joists: ElementQuantity
    interior_beams: ElementQuantity
    edge_beams: ElementQuantity
    columns: ElementQuantity
    floor_area: float  # m², all floors
    density: float     # kg/m³

    @property
    def beam_volume(self) -> float:
        return self.interior_beams.volume + self.edge_beams.volume

    @property
    def total_volume(self) -> float:
        return self.joists.volume + self.beam_volume + self.columns.volume

    @property
    def weight(self) -> float:
        """Total timber mass (kg)."""
        return self.total_volume * self.density


def _section_area(size: tuple[float, float]) -> float:
    w, d = size
    return w / 1e3 * d / 1e3


def compute_quantities(
    *,
    joist_size: tuple[float, float],
    interior_beam_size: tuple[float, float],
    edge_beam_size: tuple[float, float],
    column_size: tuple[float, float],
    length: float,
    width: float,
    lengthwise_bays: int,
    widthwise_bays: int,
    num_floors: int,
    floor_height: float,
    joists_run_lengthwise: bool = True,
    joist_spacing: float = 0.8,
    density: float = 600.0,
) -> Quantities:
    """Take off joists, beams and columns for the whole building.

    Sizes are ``(width, depth)`` in mm; lengths in m; ``joist_spacing`` in m.
    Beams run perpendicular to the joists on every grid line; the two
    outermost lines carry edge beams.
    """
    if lengthwise_bays < 1 or widthwise_bays < 1:
        raise ValueError("At least one bay is required in each direction")
    if joist_spacing <= 0:
        raise ValueError("joist_spacing must be positive")

    bay_length = length / lengthwise_bays
    bay_width = width / widthwise_bays
    bays = lengthwise_bays * widthwise_bays

    if joists_run_lengthwise:
        joist_length = bay_length
        joists_per_bay = math.ceil(bay_width / joist_spacing) + 1
        beam_lines = lengthwise_bays + 1
        segments_per_line = widthwise_bays
        beam_length = bay_width
    else:
        joist_length = bay_width
        joists_per_bay = math.ceil(bay_length / joist_spacing) + 1
        beam_lines = widthwise_bays + 1
        segments_per_line = lengthwise_bays
        beam_length = bay_length

    joist_count = joists_per_bay * bays * num_floors
    edge_count = 2 * segments_per_line * num_floors
    interior_count = (beam_lines - 2) * segments_per_line * num_floors
    column_count = (lengthwise_bays + 1) * (widthwise_bays + 1)
    column_height = floor_height * num_floors

    return Quantities(
        joists=ElementQuantity(
            count=joist_count,
            length=joist_length,
            volume=_section_area(joist_size) * joist_length * joist_count,
        ),
        interior_beams=ElementQuantity(
            count=interior_count,
            length=beam_length,
            volume=_section_area(interior_beam_size) * beam_length * interior_count,
        ),
        edge_beams=ElementQuantity(
            count=edge_count,
            length=beam_length,
            volume=_section_area(edge_beam_size) * beam_length * edge_count,
        ),
        columns=ElementQuantity(
            count=column_count,
            length=column_height,
            volume=_section_area(column_size) * column_height * column_count,
        ),
        floor_area=length * width * num_floors,
        density=density,
    )
