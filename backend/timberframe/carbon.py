"""Carbon storage and savings estimate from timber volume."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CarbonFactors:
    storage: float = 0.9   # t CO2e sequestered per m³ timber
    embodied: float = 0.2  # t CO2e emitted per m³ timber
    baseline: float = 2.5  # t CO2e per m³ of equivalent steel/concrete frame


@dataclass(frozen=True)
class CarbonEstimate:
    volume: float             # m³
    carbon_storage: float     # t CO2e
    embodied_carbon: float    # t CO2e
    baseline_emissions: float  # t CO2e
    carbon_savings: float     # t CO2e


def estimate_carbon(volume: float, factors: CarbonFactors | None = None) -> CarbonEstimate:
    if volume < 0:
        raise ValueError("volume must not be negative")
    f = factors or CarbonFactors()
    embodied = volume * f.embodied
    baseline = volume * f.baseline
    return CarbonEstimate(
        volume=volume,
        carbon_storage=volume * f.storage,
        embodied_carbon=embodied,
        baseline_emissions=baseline,
        carbon_savings=baseline - embodied,
    )
