"""Timber grade properties — loads mechanical properties per grade from CSV data."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaterialProperties:
    """Characteristic properties of an engineered timber grade."""

    grade: str
    bending_strength: float       # MPa, f'b
    modulus_of_elasticity: float  # MPa, E mean
    shear_strength: float         # MPa, f's
    compressive_strength: float   # MPa, f'c parallel
    density: float                # kg/m³
    charring_rate: float          # mm/min


DEFAULT_GRADE = "ML38"

DEFAULT_PROPERTIES: dict[str, MaterialProperties] = {
    "ML38": MaterialProperties("ML38", 38.0, 14500.0, 5.0, 38.0, 600.0, 0.7),
    "GL17": MaterialProperties("GL17", 17.0, 16700.0, 2.6, 18.0, 600.0, 0.65),
    "GL18": MaterialProperties("GL18", 18.0, 11500.0, 3.5, 18.0, 600.0, 0.65),
    "GL21": MaterialProperties("GL21", 21.0, 13000.0, 3.8, 21.0, 650.0, 0.65),
    "GL24": MaterialProperties("GL24", 24.0, 14500.0, 4.0, 24.0, 700.0, 0.65),
}

# Legacy product names that map onto a current grade
_ALIASES = {"MASSLAM_SL33": "ML38"}

# CSV column -> field
_COLUMNS = {
    "fb[MPa]": "bending_strength",
    "E[MPa]": "modulus_of_elasticity",
    "fs[MPa]": "shear_strength",
    "fc[MPa]": "compressive_strength",
    "density[kg/m3]": "density",
    "charring_rate[mm/min]": "charring_rate",
}


def _normalise(grade: str) -> str:
    key = grade.strip().upper()
    return _ALIASES.get(key, key)


class MaterialLibrary:
    """Immutable grade -> :class:`MaterialProperties` lookup with a default grade."""

    def __init__(
        self,
        records: Iterable[MaterialProperties] | Mapping[str, MaterialProperties],
        default_grade: str = DEFAULT_GRADE,
    ) -> None:
        if isinstance(records, Mapping):
            records = records.values()
        self._records: dict[str, MaterialProperties] = {
            _normalise(r.grade): r for r in records
        }
        self.default_grade = _normalise(default_grade)
        if self.default_grade not in self._records:
            fallback = DEFAULT_PROPERTIES.get(self.default_grade)
            if fallback is None:
                logger.warning(
                    "Default grade %s unknown, using %s", self.default_grade, DEFAULT_GRADE
                )
                self.default_grade = DEFAULT_GRADE
                fallback = DEFAULT_PROPERTIES[DEFAULT_GRADE]
            self._records.setdefault(self.default_grade, fallback)

    @classmethod
    def defaults(cls, default_grade: str = DEFAULT_GRADE) -> MaterialLibrary:
        return cls(DEFAULT_PROPERTIES, default_grade=default_grade)

    def __contains__(self, grade: object) -> bool:
        return isinstance(grade, str) and _normalise(grade) in self._records

    def __len__(self) -> int:
        return len(self._records)

    def grades(self) -> list[str]:
        return sorted(self._records)

    def get(self, grade: str | None) -> MaterialProperties:
        """Return the grade's properties, or the default grade's if unknown."""
        if grade is None:
            return self._records[self.default_grade]
        key = _normalise(grade)
        try:
            return self._records[key]
        except KeyError:
            logger.warning(
                "Material grade %r not found, using default grade %s",
                grade, self.default_grade,
            )
            return self._records[self.default_grade]


def _parse_row(row: dict[str, str]) -> MaterialProperties:
    values = {field: float(row[col]) for col, field in _COLUMNS.items()}
    bad = [f for f, v in values.items() if not v > 0]
    if bad:
        raise ValueError(f"non-positive values for {', '.join(bad)}")
    return MaterialProperties(grade=row["grade"].strip().upper(), **values)


def load_material_library(
    path: str | Path, default_grade: str = DEFAULT_GRADE
) -> MaterialLibrary:
    """Load grade properties from CSV, falling back to built-in defaults.

    An unreadable file gives the built-in table; a bad row is skipped and the
    built-in record for that grade (if any) is kept.
    """
    path = Path(path)
    records = dict(DEFAULT_PROPERTIES)
    try:
        with open(path, encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            missing = [c for c in ("grade", *_COLUMNS) if c not in (reader.fieldnames or [])]
            if missing:
                logger.warning(
                    "Grades file %s is missing columns %s, using built-in properties",
                    path, ", ".join(missing),
                )
                return MaterialLibrary(records, default_grade=default_grade)
            loaded = 0
            for line_no, row in enumerate(reader, start=2):
                try:
                    props = _parse_row(row)
                except (KeyError, TypeError, ValueError, AttributeError) as exc:
                    logger.warning("Skipping grades line %d: %s", line_no, exc)
                    continue
                records[_normalise(props.grade)] = props
                loaded += 1
    except OSError as exc:
        logger.warning("Could not read grades file %s (%s), using built-in properties", path, exc)
        return MaterialLibrary(records, default_grade=default_grade)

    logger.info("Loaded %d timber grades from %s", loaded, path)
    return MaterialLibrary(records, default_grade=default_grade)
