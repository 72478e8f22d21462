"""Pydantic request/response models for the API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


MemberTypeName = Literal["joist", "beam", "column"]
LoadTypeName = Literal["residential", "commercial"]


# ── Request Models ────────────────────────────────────────────


class FlexuralOptions(BaseModel):
    load_kPa: float
    grade: str | None = None
    fire_rating: str | None = None  # e.g. "60/60/60"
    width_mm: float | None = None  # defaults to the FRL width
    deflection_limit: int | None = None  # L/n
    load_type: LoadTypeName | None = None  # picks L/n when no limit is given
    safety_factor: float = 1.0


class JoistRequest(FlexuralOptions):
    span_m: float
    spacing_mm: float = 800.0


class BeamRequest(FlexuralOptions):
    span_m: float
    tributary_width_m: float


class ColumnRequest(BaseModel):
    beam_width_mm: float
    load_kPa: float
    tributary_area_m2: float
    num_floors: int
    floor_height_m: float = 3.2
    fire_rating: str | None = None
    grade: str | None = None


class SpanTableRequest(FlexuralOptions):
    member_type: Literal["joist", "beam"] = "joist"
    spans_m: list[float] | None = None  # explicit spans, else the range below
    start_m: float = 3.0
    stop_m: float = 9.0
    step_m: float = 0.5
    spacing_mm: float = 800.0
    tributary_width_m: float | None = None


class BuildingRequest(BaseModel):
    name: str = "Building"
    length_m: float
    width_m: float
    num_floors: int = 1
    floor_height_m: float = 3.2
    lengthwise_bays: int = 3
    widthwise_bays: int = 2
    joists_run_lengthwise: bool = True
    load_type: LoadTypeName = "residential"
    load_kPa: float | None = None  # overrides the load type's default
    fire_rating: str | None = None
    grade: str | None = None
    joist_spacing_mm: float = 800.0
    deflection_limit: int | None = None
    safety_factor: float = 1.0


# ── Response Models ───────────────────────────────────────────


class CatalogEntryOutput(BaseModel):
    width_mm: int
    depth_mm: int
    type: MemberTypeName


class MaterialOutput(BaseModel):
    grade: str
    fb_MPa: float
    E_MPa: float
    fs_MPa: float
    fc_MPa: float
    density_kg_m3: float
    charring_rate_mm_min: float
    is_default: bool = False


class MemberSizeOutput(BaseModel):
    member_type: MemberTypeName
    width_mm: float
    depth_mm: float
    snapped: bool
    bending_depth_mm: float
    deflection_depth_mm: float
    fire_adjusted_depth_mm: float
    fire_allowance_mm: float
    governing: Literal["bending", "deflection"]
    final_deflection_mm: float
    allowable_deflection_mm: float
    deflection_ratio: float
    span_m: float
    line_load_kN_m: float
    moment_kNm: float
    grade: str
    fire_rating: str
    deflection_limit: int
    passes: bool
    warnings: list[str] = []


class ColumnSizeOutput(BaseModel):
    member_type: Literal["column"] = "column"
    width_mm: float
    depth_mm: float
    snapped: bool
    base_depth_mm: float
    fire_allowance_mm: float
    fire_adjusted_width_mm: float
    fire_adjusted_depth_mm: float
    load_per_floor_kN: float
    total_load_kN: float
    self_weight_kN: float
    num_floors: int
    height_m: float
    grade: str
    fire_rating: str
    passes: bool
    warnings: list[str] = []


class SpanTableRowOutput(BaseModel):
    span_m: float
    width_mm: float
    depth_mm: float
    bending_depth_mm: float
    deflection_depth_mm: float
    fire_adjusted_depth_mm: float
    governing: Literal["bending", "deflection"]
    passes: bool
    snapped: bool


class QuantityOutput(BaseModel):
    role: str
    count: int
    length_m: float
    volume_m3: float


class CostOutput(BaseModel):
    beams: float
    columns: float
    joists: float
    total: float
    total_formatted: str
    joist_size_used: str | None = None


class CarbonOutput(BaseModel):
    volume_m3: float
    carbon_storage_t: float
    embodied_carbon_t: float
    baseline_emissions_t: float
    carbon_savings_t: float


class SummaryRowOutput(BaseModel):
    role: str
    size: str
    length_m: float
    count: int
    governing: str
    ok: bool
    fallback: bool


class BuildingDesignOutput(BaseModel):
    name: str
    joist: MemberSizeOutput
    interior_beam: MemberSizeOutput
    edge_beam: MemberSizeOutput
    column: ColumnSizeOutput
    summary: list[SummaryRowOutput]
    quantities: list[QuantityOutput]
    total_volume_m3: float
    weight_kg: float
    floor_area_m2: float
    cost: CostOutput
    carbon: CarbonOutput
    all_pass: bool
    using_fallback: bool
    warnings: list[str] = Field(default_factory=list)
