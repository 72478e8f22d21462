"""Member sizing engine — joists, beams and columns from catalog sizes.

Joists and beams share one simply-supported UDL algorithm:

  1. Line load        w = q · s · γ                      (kN/m ≡ N/mm)
  2. Bending moment   M = w·L²/8
  3. Bending depth    d_b = √(6·M / (f_b · b))
  4. Deflection depth d_δ = ∛(12 · 5·w·L⁴ / (384·E·δ_allow·b)),  δ_allow = L/n
  5. Required depth   max(d_b, d_δ)
  6. Fire allowance   max(140, ⌈required⌉) + t·β
  7. Catalog snap     smallest catalog depth ≥ requirement (largest if none)
  8. Verification     δ = 5·w·L⁴ / (384·E·I) with the selected depth

Columns take the supporting beam's width and step the depth by floor count.
"""

from __future__ import annotations

import logging
import math

from .catalog import TimberCatalog, load_catalog
from .config import Settings
from .errors import CatalogError, InvalidSizingInput
from .fire import FireRating, fire_allowance, parse_fire_rating, width_for_fire_rating
from .material import MaterialLibrary, MaterialProperties, load_material_library
from .results import ColumnSizingResult, SizingResult
from .types import MemberType

logger = logging.getLogger(__name__)

MIN_PRACTICAL_DEPTH = 140.0  # mm
COLUMN_STEP_PER_FLOOR = 50.0  # mm added to column depth per floor above the first
GRAVITY = 9.81  # m/s²


def _require_positive(name: str, value: float) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InvalidSizingInput(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(v) or v <= 0:
        raise InvalidSizingInput(f"{name} must be a positive finite number, got {value!r}")
    return v


class MemberSizer:
    """Sizes members against an injected catalog and material library.

    Holds no mutable state; every call is a pure function of its arguments
    and the two read-only lookups.
    """

    def __init__(
        self,
        catalog: TimberCatalog,
        materials: MaterialLibrary,
        settings: Settings | None = None,
    ) -> None:
        self.catalog = catalog
        self.materials = materials
        self.settings = settings or Settings()

    def deflection_limit_for(self, load_type: str | None) -> int:
        return self.settings.deflection_limit_for(load_type)

    def material(self, grade: str | None) -> MaterialProperties:
        props = self.materials.get(grade)
        _require_positive("bending strength", props.bending_strength)
        _require_positive("modulus of elasticity", props.modulus_of_elasticity)
        return props

    # ── Joists and beams ─────────────────────────────────────────

    def size_joist(
        self,
        span: float,
        spacing: float,
        load: float,
        grade: str | None = None,
        fire_rating: FireRating | str | None = FireRating.NONE,
        *,
        width: float | None = None,
        deflection_limit: int | None = None,
        safety_factor: float = 1.0,
    ) -> SizingResult:
        """Size a joist; ``spacing`` is the joist centre spacing in mm."""
        spacing_m = _require_positive("spacing", spacing) / 1000
        return self._size_flexural(
            MemberType.JOIST, span, spacing_m, load, grade, fire_rating,
            width, deflection_limit, safety_factor,
        )

    def size_beam(
        self,
        span: float,
        tributary_width: float,
        load: float,
        grade: str | None = None,
        fire_rating: FireRating | str | None = FireRating.NONE,
        *,
        width: float | None = None,
        deflection_limit: int | None = None,
        safety_factor: float = 1.0,
    ) -> SizingResult:
        """Size a beam; ``tributary_width`` is the loaded strip width in m."""
        trib_m = _require_positive("tributary width", tributary_width)
        return self._size_flexural(
            MemberType.BEAM, span, trib_m, load, grade, fire_rating,
            width, deflection_limit, safety_factor,
        )

    def _size_flexural(
        self,
        member_type: MemberType,
        span: float,
        tributary_m: float,
        load: float,
        grade: str | None,
        fire_rating: FireRating | str | None,
        width: float | None,
        deflection_limit: int | None,
        safety_factor: float,
    ) -> SizingResult:
        L = _require_positive("span", span)
        q = _require_positive("load", load)
        gamma = _require_positive("safety factor", safety_factor)
        if gamma < 1.0:
            raise InvalidSizingInput(f"safety factor must be >= 1, got {safety_factor!r}")
        frl = parse_fire_rating(fire_rating)
        b = (
            float(width_for_fire_rating(frl))
            if width is None
            else _require_positive("width", width)
        )
        limit = self.settings.default_deflection_limit if deflection_limit is None else deflection_limit
        n = _require_positive("deflection limit", limit)
        if isinstance(limit, bool) or not n.is_integer():
            raise InvalidSizingInput(f"deflection limit must be a whole number, got {limit!r}")
        limit = int(n)
        props = self.material(grade)
        fb = props.bending_strength
        E = props.modulus_of_elasticity

        # 1-2. Loads and moment
        w = q * tributary_m * gamma  # kN/m == N/mm
        M = w * L**2 / 8  # kNm
        M_Nmm = M * 1e6

        # 3. Bending
        S_req = M_Nmm / fb
        d_bending = math.sqrt(6 * S_req / b)

        # 4. Deflection, solved directly for every span
        L_mm = L * 1e3
        delta_allow = L_mm / limit
        d_deflection = (12 * 5 * w * L_mm**4 / (384 * E * delta_allow * b)) ** (1 / 3)

        # 5. Governing criterion
        required = max(d_bending, d_deflection)
        deflection_governs = d_deflection > d_bending

        # 6. Fire
        allowance = fire_allowance(frl, props.charring_rate)
        fire_adjusted = max(MIN_PRACTICAL_DEPTH, math.ceil(required)) + allowance

        # 7. Snap
        snap = self.catalog.snap_depth(member_type, b, fire_adjusted)
        warnings: list[str] = []
        if not snap.is_snapped:
            warnings.append(f"Using fallback depth: {snap.reason}")
        elif snap.value < fire_adjusted:
            warnings.append(
                f"Largest catalog depth {snap.value:g}mm is below the required "
                f"{fire_adjusted:.1f}mm"
            )

        # 8. Verification with the selected depth
        d = snap.value
        I = b * d**3 / 12
        final_deflection = 5 * w * L_mm**4 / (384 * E * I)
        if final_deflection > delta_allow:
            warnings.append(
                f"Deflection {final_deflection:.1f}mm exceeds L/{limit} = {delta_allow:.1f}mm"
            )

        logger.debug(
            "%s span=%.2fm w=%.3fkN/m M=%.2fkNm d_b=%.1f d_defl=%.1f governing=%s "
            "fire=%.1f required=%.1f selected=%gx%g",
            member_type.value, L, w, M, d_bending, d_deflection,
            "deflection" if deflection_governs else "bending",
            allowance, fire_adjusted, b, d,
        )
        for msg in warnings:
            logger.warning("%s: %s", member_type.value, msg)

        return SizingResult(
            member_type=member_type,
            width=b,
            snap=snap,
            bending_depth=d_bending,
            deflection_depth=d_deflection,
            fire_adjusted_depth=fire_adjusted,
            fire_allowance=allowance,
            is_deflection_governing=deflection_governs,
            final_deflection=final_deflection,
            allowable_deflection=delta_allow,
            span=L,
            line_load=w,
            bending_moment=M,
            required_section_modulus=S_req,
            grade=props.grade,
            fire_rating=frl,
            deflection_limit=limit,
            safety_factor=gamma,
            warnings=tuple(warnings),
        )

    # ── Columns ──────────────────────────────────────────────────

    def size_column(
        self,
        beam_width: float,
        floor_load: float,
        tributary_area: float,
        num_floors: int,
        floor_height: float,
        fire_rating: FireRating | str | None = FireRating.NONE,
        *,
        grade: str | None = None,
    ) -> ColumnSizingResult:
        """Size a column stack under ``num_floors`` floors."""
        width = _require_positive("beam width", beam_width)
        q = _require_positive("floor load", floor_load)
        area = _require_positive("tributary area", tributary_area)
        h = _require_positive("floor height", floor_height)
        n = _require_positive("number of floors", num_floors)
        if isinstance(num_floors, bool) or not n.is_integer():
            raise InvalidSizingInput(f"number of floors must be a whole number, got {num_floors!r}")
        floors = int(n)
        frl = parse_fire_rating(fire_rating)
        props = self.materials.get(grade)

        load_per_floor = q * area
        total_load = load_per_floor * floors

        depth = width + (floors - 1) * COLUMN_STEP_PER_FLOOR
        depth = max(depth, width)

        allowance = fire_allowance(frl, props.charring_rate)
        fa_width = width + 2 * allowance
        fa_depth = depth + 2 * allowance

        width_snap = self.catalog.snap_width(MemberType.COLUMN, fa_width)
        depth_snap = self.catalog.snap_depth(MemberType.COLUMN, width_snap.value, fa_depth)

        warnings: list[str] = []
        for label, snap, target in (
            ("width", width_snap, fa_width),
            ("depth", depth_snap, fa_depth),
        ):
            if not snap.is_snapped:
                warnings.append(f"Using fallback {label}: {snap.reason}")
            elif snap.value < target:
                warnings.append(
                    f"Largest catalog column {label} {snap.value:g}mm is below the "
                    f"required {target:.1f}mm"
                )

        self_weight = (
            width_snap.value / 1e3 * depth_snap.value / 1e3
            * h * floors * props.density * GRAVITY / 1e3
        )

        logger.debug(
            "column beam_width=%g floors=%d N=%.1fkN stepped=%gx%g fire=%gx%g selected=%gx%g",
            width, floors, total_load, width, depth, fa_width, fa_depth,
            width_snap.value, depth_snap.value,
        )
        for msg in warnings:
            logger.warning("column: %s", msg)

        return ColumnSizingResult(
            width_snap=width_snap,
            depth_snap=depth_snap,
            beam_width=width,
            base_depth=depth,
            fire_allowance=allowance,
            fire_adjusted_width=fa_width,
            fire_adjusted_depth=fa_depth,
            tributary_area=area,
            load_per_floor=load_per_floor,
            total_load=total_load,
            self_weight=self_weight,
            num_floors=floors,
            floor_height=h,
            grade=props.grade,
            fire_rating=frl,
            warnings=tuple(warnings),
        )


def build_sizer(settings: Settings) -> MemberSizer:
    """Load the catalog and grade tables named by ``settings`` into a sizer.

    A missing or unusable catalog file gives an empty catalog, so every
    result degrades to an unsnapped depth instead of failing.
    """
    try:
        catalog = load_catalog(settings.catalog_path)
    except (OSError, CatalogError) as exc:
        logger.warning("Catalog unavailable (%s), sizes will not be snapped", exc)
        catalog = TimberCatalog.empty()
    materials = load_material_library(settings.grades_path, settings.default_grade)
    return MemberSizer(catalog, materials, settings)
