"""Member sizing result records."""

from __future__ import annotations

from dataclasses import dataclass

from .fire import FireRating
from .types import MemberType, SnapResult


@dataclass(frozen=True)
class SizingResult:
    """Outcome of sizing one joist or beam.

    Theoretical depths are unrounded (mm); ``depth`` is the catalog depth,
    or the raw fire-adjusted requirement when ``using_fallback`` is set.
    """

    member_type: MemberType
    width: float                    # mm
    snap: SnapResult
    bending_depth: float            # mm
    deflection_depth: float         # mm
    fire_adjusted_depth: float      # mm
    fire_allowance: float           # mm
    is_deflection_governing: bool
    final_deflection: float         # mm
    allowable_deflection: float     # mm
    span: float                     # m
    line_load: float                # kN/m
    bending_moment: float           # kNm
    required_section_modulus: float  # mm³
    grade: str
    fire_rating: FireRating
    deflection_limit: int           # L/n
    safety_factor: float = 1.0
    warnings: tuple[str, ...] = ()

    @property
    def depth(self) -> float:
        return self.snap.value

    @property
    def using_fallback(self) -> bool:
        return not self.snap.is_snapped

    @property
    def required_depth(self) -> float:
        return max(self.bending_depth, self.deflection_depth)

    @property
    def governing_criterion(self) -> str:
        return "deflection" if self.is_deflection_governing else "bending"

    @property
    def deflection_ratio(self) -> float:
        if self.allowable_deflection <= 0:
            return float("inf")
        return self.final_deflection / self.allowable_deflection

    @property
    def passes(self) -> bool:
        return (
            self.final_deflection <= self.allowable_deflection
            and self.depth >= self.fire_adjusted_depth
        )

    def print_summary(self) -> None:
        P = "PASS"
        F = "FAIL"
        label = self.member_type.value.capitalize()
        print(f"\n{'='*64}")
        print(f"  {label} — {self.width:g} x {self.depth:g} mm  ({self.grade}, FRL {self.fire_rating.value})")
        print(f"{'='*64}")
        print(f"  Span = {self.span:.2f} m   w = {self.line_load:.2f} kN/m   "
              f"M = {self.bending_moment:.2f} kNm")
        print(f"{'─'*64}")
        print(f"  Bending depth      {self.bending_depth:>8.1f} mm")
        print(f"  Deflection depth   {self.deflection_depth:>8.1f} mm   (L/{self.deflection_limit})")
        print(f"  Governing          {self.governing_criterion}")
        print(f"  Fire allowance     {self.fire_allowance:>8.1f} mm")
        print(f"  Fire-adjusted      {self.fire_adjusted_depth:>8.1f} mm")
        snapped = "catalog" if self.snap.is_snapped else "FALLBACK (unsnapped)"
        print(f"  Selected depth     {self.depth:>8g} mm   {snapped}")
        print(f"  Deflection    {self.final_deflection:.2f} mm"
              f" <= {self.allowable_deflection:.2f} mm   "
              f"ratio = {self.deflection_ratio:.3f}  {P if self.passes else F}")
        for w in self.warnings:
            print(f"  ! {w}")
        print(f"{'='*64}")


@dataclass(frozen=True)
class ColumnSizingResult:
    """Outcome of sizing one column stack.

    ``total_load`` and ``self_weight`` are reported only; the depth is
    stepped by floor count, not by axial load.
    """

    width_snap: SnapResult
    depth_snap: SnapResult
    beam_width: float           # mm
    base_depth: float           # mm, stepped depth before fire allowance
    fire_allowance: float       # mm per face
    fire_adjusted_width: float  # mm
    fire_adjusted_depth: float  # mm
    tributary_area: float       # m²
    load_per_floor: float       # kN
    total_load: float           # kN
    self_weight: float          # kN
    num_floors: int
    floor_height: float         # m
    grade: str
    fire_rating: FireRating
    warnings: tuple[str, ...] = ()

    @property
    def member_type(self) -> MemberType:
        return MemberType.COLUMN

    @property
    def width(self) -> float:
        return self.width_snap.value

    @property
    def depth(self) -> float:
        return self.depth_snap.value

    @property
    def height(self) -> float:
        return self.floor_height * self.num_floors

    @property
    def using_fallback(self) -> bool:
        return not (self.width_snap.is_snapped and self.depth_snap.is_snapped)

    @property
    def passes(self) -> bool:
        return (
            self.width >= self.fire_adjusted_width
            and self.depth >= self.fire_adjusted_depth
        )

    def print_summary(self) -> None:
        print(f"\n{'='*64}")
        print(f"  Column — {self.width:g} x {self.depth:g} mm  ({self.grade}, FRL {self.fire_rating.value})")
        print(f"{'='*64}")
        print(f"  Floors = {self.num_floors}   height = {self.height:.2f} m   "
              f"tributary = {self.tributary_area:.2f} m²")
        print(f"  Axial load   {self.total_load:>8.1f} kN   "
              f"(+ self-weight {self.self_weight:.2f} kN)")
        print(f"{'─'*64}")
        print(f"  Stepped size       {self.beam_width:g} x {self.base_depth:g} mm")
        print(f"  Fire-adjusted      {self.fire_adjusted_width:g} x {self.fire_adjusted_depth:g} mm")
        snapped = "catalog" if not self.using_fallback else "FALLBACK (unsnapped)"
        print(f"  Selected           {self.width:g} x {self.depth:g} mm   {snapped}")
        for w in self.warnings:
            print(f"  ! {w}")
        print(f"{'='*64}")
