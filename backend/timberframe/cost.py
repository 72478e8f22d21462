"""Cost estimate from timber quantities and supply rates."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .quantities import Quantities

DEFAULT_BEAM_RATE = 3200.0    # $/m³
DEFAULT_COLUMN_RATE = 3200.0  # $/m³
DEFAULT_JOIST_RATE = 390.0    # $/m² of floor

DEFAULT_JOIST_RATES: dict[str, float] = {
    "120x200": 390.0,
    "165x270": 390.0,
    "205x335": 390.0,
    "250x410": 390.0,
    "290x480": 390.0,
    "335x550": 390.0,
    "380x620": 390.0,
    "420x690": 390.0,
    "450x760": 390.0,
    "450x830": 390.0,
}


def size_key(width: float, depth: float) -> str:
    return f"{width:g}x{depth:g}"


@dataclass(frozen=True)
class CostRates:
    beam_rate: float = DEFAULT_BEAM_RATE
    column_rate: float = DEFAULT_COLUMN_RATE
    joist_rate: float = DEFAULT_JOIST_RATE
    joist_rates: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_JOIST_RATES)
    )

    def __post_init__(self) -> None:
        for name in ("beam_rate", "column_rate", "joist_rate"):
            if not getattr(self, name) > 0:
                raise ValueError(f"{name} must be positive")

    def joist_rate_for(self, width: float, depth: float) -> tuple[str | None, float]:
        """Rate for a joist size: exact key, else the closest size by area."""
        if not self.joist_rates:
            return None, self.joist_rate
        key = size_key(width, depth)
        if key in self.joist_rates:
            return key, self.joist_rates[key]

        target = width * depth

        def _area_gap(k: str) -> float:
            w, d = (float(v) for v in k.split("x"))
            return abs(w * d - target)

        closest = min(self.joist_rates, key=_area_gap)
        return closest, self.joist_rates[closest]


@dataclass(frozen=True)
class CostLine:
    quantity: float  # m³ or m²
    unit: str
    rate: float
    cost: float


@dataclass(frozen=True)
class CostBreakdown:
    beams: CostLine
    columns: CostLine
    joists: CostLine
    joist_size_used: str | None = None

    @property
    def total(self) -> float:
        return self.beams.cost + self.columns.cost + self.joists.cost


def estimate_cost(
    quantities: Quantities,
    rates: CostRates | None = None,
    joist_size: tuple[float, float] | None = None,
) -> CostBreakdown:
    """Beams and columns are priced by volume, joists by floor area."""
    rates = rates or CostRates()
    joist_rate = rates.joist_rate
    key = None
    if joist_size is not None:
        key, joist_rate = rates.joist_rate_for(*joist_size)

    beam_volume = max(0.0, quantities.beam_volume)
    column_volume = max(0.0, quantities.columns.volume)
    floor_area = max(0.0, quantities.floor_area)

    return CostBreakdown(
        beams=CostLine(beam_volume, "m3", rates.beam_rate, beam_volume * rates.beam_rate),
        columns=CostLine(
            column_volume, "m3", rates.column_rate, column_volume * rates.column_rate
        ),
        joists=CostLine(floor_area, "m2", joist_rate, floor_area * joist_rate),
        joist_size_used=key,
    )


def format_currency(amount: float) -> str:
    """Whole-dollar AUD string, e.g. ``"$12,345"``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.0f}"
