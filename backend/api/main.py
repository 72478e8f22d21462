"""FastAPI application — timber member sizing API."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from timberframe import (
    BuildingDesigner,
    BuildingDesignResults,
    BuildingInput,
    ColumnSizingResult,
    MemberSizer,
    MemberType,
    SizingResult,
    build_sizer,
    format_currency,
    load_settings,
    span_range,
    span_table,
)

from .schemas import (
    BeamRequest,
    BuildingDesignOutput,
    BuildingRequest,
    CarbonOutput,
    CatalogEntryOutput,
    ColumnRequest,
    ColumnSizeOutput,
    CostOutput,
    FlexuralOptions,
    JoistRequest,
    MaterialOutput,
    MemberSizeOutput,
    QuantityOutput,
    SpanTableRequest,
    SpanTableRowOutput,
    SummaryRowOutput,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = load_settings()
    app.state.sizer = build_sizer(settings)
    logger.info("Sizer ready: %r", app.state.sizer.catalog)
    yield


app = FastAPI(title="timberframe API", version="0.1.0", lifespan=lifespan)


def _cors_origins() -> list[str]:
    raw_origins = os.getenv("CORS_ORIGINS", "")
    parsed = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

    if parsed == ["*"]:
        return ["*"]

    defaults = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    return [*defaults, *parsed]


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_sizer(request: Request) -> MemberSizer:
    return request.app.state.sizer


def _deflection_limit(sizer: MemberSizer, opts: FlexuralOptions) -> int | None:
    if opts.deflection_limit is not None or opts.load_type is None:
        return opts.deflection_limit
    return sizer.deflection_limit_for(opts.load_type)


# ── Output conversion ─────────────────────────────────────────


def _member_output(r: SizingResult) -> MemberSizeOutput:
    return MemberSizeOutput(
        member_type=r.member_type.value,
        width_mm=r.width,
        depth_mm=r.depth,
        snapped=r.snap.is_snapped,
        bending_depth_mm=round(r.bending_depth, 2),
        deflection_depth_mm=round(r.deflection_depth, 2),
        fire_adjusted_depth_mm=round(r.fire_adjusted_depth, 2),
        fire_allowance_mm=round(r.fire_allowance, 2),
        governing=r.governing_criterion,
        final_deflection_mm=round(r.final_deflection, 3),
        allowable_deflection_mm=round(r.allowable_deflection, 3),
        deflection_ratio=round(r.deflection_ratio, 4),
        span_m=r.span,
        line_load_kN_m=round(r.line_load, 4),
        moment_kNm=round(r.bending_moment, 4),
        grade=r.grade,
        fire_rating=r.fire_rating.value,
        deflection_limit=r.deflection_limit,
        passes=r.passes,
        warnings=list(r.warnings),
    )


def _column_output(r: ColumnSizingResult) -> ColumnSizeOutput:
    return ColumnSizeOutput(
        width_mm=r.width,
        depth_mm=r.depth,
        snapped=not r.using_fallback,
        base_depth_mm=r.base_depth,
        fire_allowance_mm=round(r.fire_allowance, 2),
        fire_adjusted_width_mm=round(r.fire_adjusted_width, 2),
        fire_adjusted_depth_mm=round(r.fire_adjusted_depth, 2),
        load_per_floor_kN=round(r.load_per_floor, 3),
        total_load_kN=round(r.total_load, 3),
        self_weight_kN=round(r.self_weight, 3),
        num_floors=r.num_floors,
        height_m=r.height,
        grade=r.grade,
        fire_rating=r.fire_rating.value,
        passes=r.passes,
        warnings=list(r.warnings),
    )


def _building_output(res: BuildingDesignResults) -> BuildingDesignOutput:
    q = res.quantities
    return BuildingDesignOutput(
        name=res.name,
        joist=_member_output(res.joist),
        interior_beam=_member_output(res.interior_beam),
        edge_beam=_member_output(res.edge_beam),
        column=_column_output(res.column),
        summary=[SummaryRowOutput(**row) for row in res.summary_table()],
        quantities=[
            QuantityOutput(
                role=role,
                count=eq.count,
                length_m=round(eq.length, 3),
                volume_m3=round(eq.volume, 3),
            )
            for role, eq in (
                ("joist", q.joists),
                ("interior_beam", q.interior_beams),
                ("edge_beam", q.edge_beams),
                ("column", q.columns),
            )
        ],
        total_volume_m3=round(q.total_volume, 3),
        weight_kg=round(q.weight, 1),
        floor_area_m2=round(q.floor_area, 2),
        cost=CostOutput(
            beams=round(res.cost.beams.cost, 2),
            columns=round(res.cost.columns.cost, 2),
            joists=round(res.cost.joists.cost, 2),
            total=round(res.cost.total, 2),
            total_formatted=format_currency(res.cost.total),
            joist_size_used=res.cost.joist_size_used,
        ),
        carbon=CarbonOutput(
            volume_m3=round(res.carbon.volume, 3),
            carbon_storage_t=round(res.carbon.carbon_storage, 3),
            embodied_carbon_t=round(res.carbon.embodied_carbon, 3),
            baseline_emissions_t=round(res.carbon.baseline_emissions, 3),
            carbon_savings_t=round(res.carbon.carbon_savings, 3),
        ),
        all_pass=res.all_pass,
        using_fallback=res.using_fallback,
        warnings=res.warnings,
    )


# ── Lookups ───────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    """Lightweight healthcheck for deployment platforms."""
    return {"status": "ok"}


@app.get("/api/catalog", response_model=list[CatalogEntryOutput])
def get_catalog(
    type: str = "all", sizer: MemberSizer = Depends(get_sizer)
) -> list[CatalogEntryOutput]:
    """List catalog sizes, optionally for one member type."""
    try:
        member_type = None if type == "all" else MemberType.parse(type)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return [
        CatalogEntryOutput(width_mm=e.width, depth_mm=e.depth, type=e.member_type.value)
        for e in sizer.catalog.entries_for(member_type)
    ]


@app.get("/api/materials", response_model=list[MaterialOutput])
def get_materials(sizer: MemberSizer = Depends(get_sizer)) -> list[MaterialOutput]:
    """List timber grades and their properties."""
    lib = sizer.materials
    results: list[MaterialOutput] = []
    for grade in lib.grades():
        p = lib.get(grade)
        results.append(
            MaterialOutput(
                grade=p.grade,
                fb_MPa=p.bending_strength,
                E_MPa=p.modulus_of_elasticity,
                fs_MPa=p.shear_strength,
                fc_MPa=p.compressive_strength,
                density_kg_m3=p.density,
                charring_rate_mm_min=p.charring_rate,
                is_default=grade == lib.default_grade,
            )
        )
    return results


# ── Member sizing ─────────────────────────────────────────────


@app.post("/api/size/joist", response_model=MemberSizeOutput)
def size_joist(data: JoistRequest, sizer: MemberSizer = Depends(get_sizer)) -> MemberSizeOutput:
    try:
        r = sizer.size_joist(
            data.span_m,
            data.spacing_mm,
            data.load_kPa,
            data.grade,
            data.fire_rating,
            width=data.width_mm,
            deflection_limit=_deflection_limit(sizer, data),
            safety_factor=data.safety_factor,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _member_output(r)


@app.post("/api/size/beam", response_model=MemberSizeOutput)
def size_beam(data: BeamRequest, sizer: MemberSizer = Depends(get_sizer)) -> MemberSizeOutput:
    try:
        r = sizer.size_beam(
            data.span_m,
            data.tributary_width_m,
            data.load_kPa,
            data.grade,
            data.fire_rating,
            width=data.width_mm,
            deflection_limit=_deflection_limit(sizer, data),
            safety_factor=data.safety_factor,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _member_output(r)


@app.post("/api/size/column", response_model=ColumnSizeOutput)
def size_column(data: ColumnRequest, sizer: MemberSizer = Depends(get_sizer)) -> ColumnSizeOutput:
    try:
        r = sizer.size_column(
            data.beam_width_mm,
            data.load_kPa,
            data.tributary_area_m2,
            data.num_floors,
            data.floor_height_m,
            data.fire_rating,
            grade=data.grade,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _column_output(r)


@app.post("/api/span-table", response_model=list[SpanTableRowOutput])
def get_span_table(
    data: SpanTableRequest, sizer: MemberSizer = Depends(get_sizer)
) -> list[SpanTableRowOutput]:
    """Selected sizes over a range of spans."""
    try:
        spans = data.spans_m or span_range(data.start_m, data.stop_m, data.step_m)
        rows = span_table(
            sizer,
            data.member_type,
            spans,
            data.load_kPa,
            spacing=data.spacing_mm,
            tributary_width=data.tributary_width_m,
            grade=data.grade,
            fire_rating=data.fire_rating,
            width=data.width_mm,
            deflection_limit=_deflection_limit(sizer, data),
            safety_factor=data.safety_factor,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return [
        SpanTableRowOutput(
            span_m=row.span,
            width_mm=row.width,
            depth_mm=row.depth,
            bending_depth_mm=round(row.bending_depth, 2),
            deflection_depth_mm=round(row.deflection_depth, 2),
            fire_adjusted_depth_mm=round(row.fire_adjusted_depth, 2),
            governing=row.governing,
            passes=row.passes,
            snapped=not row.using_fallback,
        )
        for row in rows
    ]


# ── Building design ───────────────────────────────────────────


@app.post("/api/building/design", response_model=BuildingDesignOutput)
def design_building(
    data: BuildingRequest, sizer: MemberSizer = Depends(get_sizer)
) -> BuildingDesignOutput:
    """Size every member of a regular grid building and estimate cost and carbon."""
    building = BuildingInput(
        length=data.length_m,
        width=data.width_m,
        num_floors=data.num_floors,
        floor_height=data.floor_height_m,
        lengthwise_bays=data.lengthwise_bays,
        widthwise_bays=data.widthwise_bays,
        joists_run_lengthwise=data.joists_run_lengthwise,
        load_type=data.load_type,
        load=data.load_kPa,
        fire_rating=data.fire_rating,
        grade=data.grade,
        joist_spacing=data.joist_spacing_mm,
        deflection_limit=data.deflection_limit,
        safety_factor=data.safety_factor,
    )
    try:
        res = BuildingDesigner(sizer).design(building, name=data.name)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _building_output(res)
