"""BuildingDesigner — grid geometry to member sizes, quantities, cost and carbon."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from .carbon import CarbonEstimate, CarbonFactors, estimate_carbon
from .cost import CostBreakdown, CostRates, estimate_cost, format_currency
from .errors import InvalidSizingInput
from .fire import FireRating, parse_fire_rating
from .quantities import Quantities, compute_quantities
from .results import ColumnSizingResult, SizingResult
from .sizing import MemberSizer


class ElementRole(Enum):
    JOIST = auto()
    INTERIOR_BEAM = auto()
    EDGE_BEAM = auto()
    COLUMN = auto()


# Design floor load per load type (kPa)
LOAD_TYPE_LOADS: dict[str, float] = {
    "residential": 2.0,
    "commercial": 3.0,
}


@dataclass(frozen=True)
class BuildingInput:
    length: float  # m
    width: float   # m
    num_floors: int = 1
    floor_height: float = 3.2  # m
    lengthwise_bays: int = 3
    widthwise_bays: int = 2
    joists_run_lengthwise: bool = True
    load_type: str = "residential"
    load: float | None = None  # kPa, overrides the load type's default
    fire_rating: FireRating | str = FireRating.NONE
    grade: str | None = None
    joist_spacing: float = 800.0  # mm
    deflection_limit: int | None = None
    safety_factor: float = 1.0

    @property
    def bay_length(self) -> float:
        return self.length / self.lengthwise_bays

    @property
    def bay_width(self) -> float:
        return self.width / self.widthwise_bays

    @property
    def joist_span(self) -> float:
        return self.bay_length if self.joists_run_lengthwise else self.bay_width

    @property
    def beam_span(self) -> float:
        return self.bay_width if self.joists_run_lengthwise else self.bay_length

    @property
    def design_load(self) -> float:
        if self.load is not None:
            return self.load
        try:
            return LOAD_TYPE_LOADS[self.load_type.lower().strip()]
        except KeyError:
            raise InvalidSizingInput(
                f"Unknown load type {self.load_type!r}. "
                f"Use one of: {', '.join(LOAD_TYPE_LOADS)}"
            ) from None


def _validate(b: BuildingInput) -> None:
    if not (b.length > 0 and b.width > 0):
        raise InvalidSizingInput("Building length and width must be positive")
    for name in ("lengthwise_bays", "widthwise_bays", "num_floors"):
        v = getattr(b, name)
        if isinstance(v, bool) or not isinstance(v, int) or v < 1:
            raise InvalidSizingInput(f"{name} must be a whole number >= 1, got {v!r}")
    if not b.floor_height > 0:
        raise InvalidSizingInput("floor_height must be positive")


@dataclass
class BuildingDesignResults:
    name: str
    building: BuildingInput
    joist: SizingResult
    interior_beam: SizingResult
    edge_beam: SizingResult
    column: ColumnSizingResult
    quantities: Quantities
    cost: CostBreakdown
    carbon: CarbonEstimate
    warnings: list[str] = field(default_factory=list)

    @property
    def members(self) -> dict[ElementRole, SizingResult | ColumnSizingResult]:
        return {
            ElementRole.JOIST: self.joist,
            ElementRole.INTERIOR_BEAM: self.interior_beam,
            ElementRole.EDGE_BEAM: self.edge_beam,
            ElementRole.COLUMN: self.column,
        }

    @property
    def all_pass(self) -> bool:
        return all(r.passes for r in self.members.values())

    @property
    def using_fallback(self) -> bool:
        return any(r.using_fallback for r in self.members.values())

    def summary_table(self) -> list[dict[str, Any]]:
        q = self.quantities
        counts = {
            ElementRole.JOIST: q.joists.count,
            ElementRole.INTERIOR_BEAM: q.interior_beams.count,
            ElementRole.EDGE_BEAM: q.edge_beams.count,
            ElementRole.COLUMN: q.columns.count,
        }
        rows = []
        for role, r in self.members.items():
            if isinstance(r, SizingResult):
                length_m = r.span
                governing = r.governing_criterion
            else:
                length_m = r.height
                governing = "floors"
            rows.append(
                {
                    "role": role.name.lower(),
                    "size": f"{r.width:g}x{r.depth:g}",
                    "length_m": round(length_m, 2),
                    "count": counts[role],
                    "governing": governing,
                    "ok": r.passes,
                    "fallback": r.using_fallback,
                }
            )
        return rows

    def print_summary(self) -> None:
        print(f"\n{'='*64}")
        print(f"  {self.name} — {self.building.length:g} x {self.building.width:g} m, "
              f"{self.building.num_floors} floor(s)")
        print(f"{'='*64}")
        print(f"  {'Role':<15}{'Size':<12}{'L [m]':>7}{'Count':>7}  {'Governing':<12}OK")
        print(f"{'─'*64}")
        for row in self.summary_table():
            ok = "PASS" if row["ok"] else "FAIL"
            if row["fallback"]:
                ok += "*"
            print(f"  {row['role']:<15}{row['size']:<12}{row['length_m']:>7.2f}"
                  f"{row['count']:>7}  {row['governing']:<12}{ok}")
        print(f"{'─'*64}")
        q = self.quantities
        print(f"  Timber volume   {q.total_volume:>10.2f} m³   weight {q.weight / 1e3:.1f} t")
        print(f"  Cost            {format_currency(self.cost.total):>10}")
        print(f"  Carbon stored   {self.carbon.carbon_storage:>10.2f} t CO2e   "
              f"savings {self.carbon.carbon_savings:.2f} t CO2e")
        for w in self.warnings:
            print(f"  ! {w}")
        print(f"  OVERALL: {'PASS' if self.all_pass else 'FAIL'}")
        print(f"{'='*64}")


class BuildingDesigner:
    """Sizes every member type of a regular grid building and aggregates results."""

    def __init__(
        self,
        sizer: MemberSizer,
        rates: CostRates | None = None,
        carbon_factors: CarbonFactors | None = None,
    ) -> None:
        self.sizer = sizer
        self.rates = rates or CostRates()
        self.carbon_factors = carbon_factors or CarbonFactors()

    def design(self, building: BuildingInput, name: str = "Building") -> BuildingDesignResults:
        _validate(building)
        frl = parse_fire_rating(building.fire_rating)
        load = building.design_load
        limit = building.deflection_limit
        if limit is None:
            try:
                limit = self.sizer.deflection_limit_for(building.load_type)
            except ValueError as exc:
                raise InvalidSizingInput(str(exc)) from None
        common = dict(deflection_limit=limit, safety_factor=building.safety_factor)

        joist = self.sizer.size_joist(
            building.joist_span, building.joist_spacing, load,
            building.grade, frl, **common,
        )

        # Beams carry half the joist span from each side; edge beams one side only
        interior_beam = self.sizer.size_beam(
            building.beam_span, building.joist_span, load,
            building.grade, frl, **common,
        )
        edge_beam = self.sizer.size_beam(
            building.beam_span, building.joist_span / 2, load,
            building.grade, frl, **common,
        )

        column = self.sizer.size_column(
            interior_beam.width,
            load,
            building.bay_length * building.bay_width,
            building.num_floors,
            building.floor_height,
            frl,
            grade=building.grade,
        )

        props = self.sizer.materials.get(building.grade)
        quantities = compute_quantities(
            joist_size=(joist.width, joist.depth),
            interior_beam_size=(interior_beam.width, interior_beam.depth),
            edge_beam_size=(edge_beam.width, edge_beam.depth),
            column_size=(column.width, column.depth),
            length=building.length,
            width=building.width,
            lengthwise_bays=building.lengthwise_bays,
            widthwise_bays=building.widthwise_bays,
            num_floors=building.num_floors,
            floor_height=building.floor_height,
            joists_run_lengthwise=building.joists_run_lengthwise,
            joist_spacing=building.joist_spacing / 1000,
            density=props.density,
        )
        cost = estimate_cost(quantities, self.rates, (joist.width, joist.depth))
        carbon = estimate_carbon(quantities.total_volume, self.carbon_factors)

        warnings = [
            f"{role.name.lower()}: {w}"
            for role, r in (
                (ElementRole.JOIST, joist),
                (ElementRole.INTERIOR_BEAM, interior_beam),
                (ElementRole.EDGE_BEAM, edge_beam),
                (ElementRole.COLUMN, column),
            )
            for w in r.warnings
        ]

        return BuildingDesignResults(
            name=name,
            building=building,
            joist=joist,
            interior_beam=interior_beam,
            edge_beam=edge_beam,
            column=column,
            quantities=quantities,
            cost=cost,
            carbon=carbon,
            warnings=warnings,
        )
