"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    catalog_file: str = "masslam_sizes.csv"
    grades_file: str = "timber_grades.csv"
    default_grade: str = "ML38"
    # Deflection limit denominators (L/n) per load type
    deflection_residential: int = 300
    deflection_commercial: int = 360
    log_level: str = "INFO"

    @property
    def catalog_path(self) -> Path:
        return self.data_dir / self.catalog_file

    @property
    def grades_path(self) -> Path:
        return self.data_dir / self.grades_file

    @property
    def default_deflection_limit(self) -> int:
        return self.deflection_commercial

    def deflection_limit_for(self, load_type: str | None) -> int:
        """Return the L/n denominator for ``"residential"`` or ``"commercial"``."""
        if load_type is None:
            return self.default_deflection_limit
        key = load_type.lower().strip()
        if key == "residential":
            return self.deflection_residential
        if key == "commercial":
            return self.deflection_commercial
        raise ValueError(
            f"Unknown load type {load_type!r}. Use 'residential' or 'commercial'."
        )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_settings() -> Settings:
    """Build settings from ``TIMBERFRAME_*`` environment variables."""
    data_dir = os.getenv("TIMBERFRAME_DATA_DIR", "").strip()
    return Settings(
        data_dir=Path(data_dir) if data_dir else _DEFAULT_DATA_DIR,
        catalog_file=os.getenv("TIMBERFRAME_CATALOG_FILE", "").strip()
        or "masslam_sizes.csv",
        grades_file=os.getenv("TIMBERFRAME_GRADES_FILE", "").strip()
        or "timber_grades.csv",
        default_grade=os.getenv("TIMBERFRAME_DEFAULT_GRADE", "").strip().upper()
        or "ML38",
        deflection_residential=_env_int("TIMBERFRAME_DEFLECTION_RESIDENTIAL", 300),
        deflection_commercial=_env_int("TIMBERFRAME_DEFLECTION_COMMERCIAL", 360),
        log_level=os.getenv("TIMBERFRAME_LOG_LEVEL", "").strip().upper() or "INFO",
    )
