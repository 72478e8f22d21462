"""Fire resistance levels and charring allowances for mass timber members.

The sacrificial-layer method: a member exposed for ``t`` minutes loses
``t × β`` mm of section to char (β = charring rate), plus a 7 mm
zero-strength layer behind the char line when the residual section is
checked in detail.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidSizingInput

ZERO_STRENGTH_LAYER = 7.0  # mm


class FireRating(str, Enum):
    NONE = "none"
    FRL_30 = "30/30/30"
    FRL_60 = "60/60/60"
    FRL_90 = "90/90/90"
    FRL_120 = "120/120/120"

    @property
    def minutes(self) -> int:
        if self is FireRating.NONE:
            return 0
        return int(self.value.split("/")[0])


_BY_MINUTES = {r.minutes: r for r in FireRating}

# Fixed joist/beam width per FRL (mm)
_WIDTH_FOR_RATING = {
    FireRating.NONE: 120,
    FireRating.FRL_30: 165,
    FireRating.FRL_60: 165,
    FireRating.FRL_90: 205,
    FireRating.FRL_120: 250,
}


def parse_fire_rating(value: FireRating | str | None) -> FireRating:
    """Accept ``"none"``, ``"0"``, ``None`` or an ``"N/N/N"`` FRL string."""
    if isinstance(value, FireRating):
        return value
    if value is None:
        return FireRating.NONE
    key = str(value).strip().lower()
    if key in ("", "none", "0"):
        return FireRating.NONE
    head = key.split("/")[0]
    try:
        return _BY_MINUTES[int(head)]
    except (ValueError, KeyError):
        raise InvalidSizingInput(
            f"Unknown fire rating {value!r}. "
            f"Use one of: {', '.join(r.value for r in FireRating)}"
        ) from None


def fire_allowance(
    rating: FireRating | str | None,
    charring_rate: float,
    *,
    zero_strength_layer: bool = False,
) -> float:
    """Sacrificial depth per exposed face (mm)."""
    frl = parse_fire_rating(rating)
    if frl is FireRating.NONE:
        return 0.0
    allowance = frl.minutes * charring_rate
    if zero_strength_layer:
        allowance += ZERO_STRENGTH_LAYER
    return allowance


def width_for_fire_rating(rating: FireRating | str | None) -> int:
    return _WIDTH_FOR_RATING[parse_fire_rating(rating)]


@dataclass(frozen=True)
class ResidualSection:
    char_depth: float         # mm
    effective_width: float    # mm
    effective_depth: float    # mm
    residual_percentage: float
    capacity_reduction: float
    passes: bool


def residual_section(
    width: float,
    depth: float,
    rating: FireRating | str | None,
    charring_rate: float,
) -> ResidualSection:
    """Section left after charring all four faces for the FRL duration."""
    if width <= 0 or depth <= 0:
        raise InvalidSizingInput("Section width and depth must be positive")
    frl = parse_fire_rating(rating)
    char_depth = charring_rate * frl.minutes
    loss = 2 * char_depth + (2 * ZERO_STRENGTH_LAYER if frl.minutes else 0.0)
    eff_w = max(0.0, width - loss)
    eff_d = max(0.0, depth - loss)
    residual = eff_w * eff_d / (width * depth) * 100
    return ResidualSection(
        char_depth=char_depth,
        effective_width=eff_w,
        effective_depth=eff_d,
        residual_percentage=residual,
        capacity_reduction=100 - residual,
        passes=eff_w > 0 and eff_d > 0,
    )
