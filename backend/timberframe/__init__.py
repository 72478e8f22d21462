"""timberframe — member sizing for timber post-and-beam structures."""

from .carbon import CarbonEstimate, CarbonFactors, estimate_carbon
from .catalog import TimberCatalog, load_catalog, nearest_at_least
from .config import Settings, load_settings
from .cost import CostBreakdown, CostRates, estimate_cost, format_currency
from .designer import BuildingDesigner, BuildingDesignResults, BuildingInput, ElementRole
from .errors import CatalogError, InvalidSizingInput, TimberFrameError
from .fire import FireRating, fire_allowance, parse_fire_rating, residual_section, width_for_fire_rating
from .material import MaterialLibrary, MaterialProperties, load_material_library
from .quantities import Quantities, compute_quantities
from .results import ColumnSizingResult, SizingResult
from .sizing import MemberSizer, build_sizer
from .span_table import SpanTableRow, span_range, span_table
from .types import CatalogEntry, MemberType, Snapped, SnapResult, Unsnapped

__all__ = [
    "BuildingDesignResults",
    "BuildingDesigner",
    "BuildingInput",
    "CarbonEstimate",
    "CarbonFactors",
    "CatalogEntry",
    "CatalogError",
    "ColumnSizingResult",
    "CostBreakdown",
    "CostRates",
    "ElementRole",
    "FireRating",
    "InvalidSizingInput",
    "MaterialLibrary",
    "MaterialProperties",
    "MemberSizer",
    "MemberType",
    "Quantities",
    "Settings",
    "SizingResult",
    "SnapResult",
    "Snapped",
    "SpanTableRow",
    "TimberCatalog",
    "TimberFrameError",
    "Unsnapped",
    "build_sizer",
    "compute_quantities",
    "estimate_carbon",
    "estimate_cost",
    "fire_allowance",
    "format_currency",
    "load_catalog",
    "load_material_library",
    "load_settings",
    "nearest_at_least",
    "parse_fire_rating",
    "residual_section",
    "span_range",
    "span_table",
    "width_for_fire_rating",
]
