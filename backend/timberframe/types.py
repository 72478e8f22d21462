"""Typed models shared by the catalog and the sizers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class MemberType(str, Enum):
    JOIST = "joist"
    BEAM = "beam"
    COLUMN = "column"

    @classmethod
    def parse(cls, value: "MemberType | str") -> "MemberType":
        if isinstance(value, MemberType):
            return value
        key = str(value).lower().strip()
        try:
            return cls(key)
        except ValueError:
            raise ValueError(
                f"Unknown member type {value!r}. "
                f"Use one of: {', '.join(m.value for m in cls)}"
            ) from None


@dataclass(frozen=True)
class CatalogEntry:
    width: int  # mm
    depth: int  # mm
    member_type: MemberType


@dataclass(frozen=True)
class Snapped:
    """Catalog dimension (mm)."""

    value: float

    @property
    def is_snapped(self) -> bool:
        return True


@dataclass(frozen=True)
class Unsnapped:
    """Raw computed dimension (mm); the catalog had no rows to snap to."""

    value: float
    reason: str

    @property
    def is_snapped(self) -> bool:
        return False


SnapResult = Union[Snapped, Unsnapped]
