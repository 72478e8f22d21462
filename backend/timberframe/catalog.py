"""Timber size catalog — loads manufactured joist/beam/column sizes from CSV data."""

from __future__ import annotations

import bisect
import csv
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from .errors import CatalogError
from .types import CatalogEntry, MemberType, Snapped, SnapResult, Unsnapped

logger = logging.getLogger(__name__)

_REQUIRED_COLUMNS = ("width", "depth", "type")


def nearest_at_least(sorted_values: Sequence[int], target: float) -> int:
    """Return the smallest value >= ``target``, or the largest value if none is.

    ``sorted_values`` must be ascending and non-empty.
    """
    if not sorted_values:
        raise ValueError("Cannot snap to an empty list of sizes")
    idx = bisect.bisect_left(sorted_values, target)
    if idx == len(sorted_values):
        return sorted_values[-1]
    return sorted_values[idx]


class TimberCatalog:
    """Read-only index of catalog sizes keyed by (member type, width)."""

    def __init__(self, entries: Iterable[CatalogEntry]) -> None:
        unique = sorted(
            set(entries), key=lambda e: (e.member_type.value, e.width, e.depth)
        )
        self._entries: tuple[CatalogEntry, ...] = tuple(unique)

        depths: dict[tuple[MemberType, int], list[int]] = {}
        widths: dict[MemberType, set[int]] = {}
        for e in self._entries:
            depths.setdefault((e.member_type, e.width), []).append(e.depth)
            widths.setdefault(e.member_type, set()).add(e.width)

        self._depths: dict[tuple[MemberType, int], tuple[int, ...]] = {
            k: tuple(sorted(v)) for k, v in depths.items()
        }
        self._widths: dict[MemberType, tuple[int, ...]] = {
            k: tuple(sorted(v)) for k, v in widths.items()
        }

    @classmethod
    def empty(cls) -> TimberCatalog:
        return cls(())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        counts = {m.value: len(self.entries_for(m)) for m in MemberType}
        return f"TimberCatalog({counts})"

    # ── Lookups ──────────────────────────────────────────────────

    def entries_for(self, member_type: MemberType | str | None = None) -> tuple[CatalogEntry, ...]:
        if member_type is None:
            return self._entries
        mt = MemberType.parse(member_type)
        return tuple(e for e in self._entries if e.member_type == mt)

    def available_depths(self, member_type: MemberType | str, width: float) -> tuple[int, ...]:
        """Ascending depths for ``(member_type, width)``; empty if none exist."""
        mt = MemberType.parse(member_type)
        if not float(width).is_integer():
            return ()
        return self._depths.get((mt, int(width)), ())

    def available_widths(self, member_type: MemberType | str | None = None) -> tuple[int, ...]:
        if member_type is None:
            return tuple(sorted({e.width for e in self._entries}))
        return self._widths.get(MemberType.parse(member_type), ())

    def contains(self, width: float, depth: float, member_type: MemberType | str) -> bool:
        """True if ``width × depth`` is a manufactured size for the member type."""
        return depth in self.available_depths(member_type, width)

    # ── Snapping ─────────────────────────────────────────────────

    def snap_depth(self, member_type: MemberType | str, width: float, target: float) -> SnapResult:
        mt = MemberType.parse(member_type)
        depths = self.available_depths(mt, width)
        if not depths:
            reason = f"no {mt.value} depths in catalog for width {width:g}mm"
            logger.warning("Catalog fallback: %s, using computed depth %.1fmm", reason, target)
            return Unsnapped(value=target, reason=reason)
        return Snapped(value=nearest_at_least(depths, target))

    def snap_width(self, member_type: MemberType | str, target: float) -> SnapResult:
        mt = MemberType.parse(member_type)
        widths = self.available_widths(mt)
        if not widths:
            reason = f"no {mt.value} widths in catalog"
            logger.warning("Catalog fallback: %s, using computed width %.1fmm", reason, target)
            return Unsnapped(value=target, reason=reason)
        return Snapped(value=nearest_at_least(widths, target))


def _parse_row(row: dict[str, str], line_no: int) -> CatalogEntry | None:
    try:
        width = float(row["width"])
        depth = float(row["depth"])
        member_type = MemberType.parse(row["type"] or "")
    except (TypeError, ValueError) as exc:
        logger.warning("Skipping catalog line %d: %s", line_no, exc)
        return None
    if width <= 0 or depth <= 0 or not width.is_integer() or not depth.is_integer():
        logger.warning(
            "Skipping catalog line %d: dimensions must be positive whole mm (%s x %s)",
            line_no, row["width"], row["depth"],
        )
        return None
    return CatalogEntry(width=int(width), depth=int(depth), member_type=member_type)


def load_catalog(path: str | Path) -> TimberCatalog:
    """Parse a ``width,depth,type`` CSV file into a :class:`TimberCatalog`."""
    path = Path(path)
    entries: list[CatalogEntry] = []
    with open(path, encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        fieldnames = [name.strip().lower() for name in (reader.fieldnames or [])]
        missing = [c for c in _REQUIRED_COLUMNS if c not in fieldnames]
        if missing:
            raise CatalogError(
                f"Catalog {path.name!r} is missing required columns: {', '.join(missing)}"
            )
        reader.fieldnames = fieldnames
        for line_no, row in enumerate(reader, start=2):
            if not any(isinstance(v, str) and v.strip() for v in row.values()):
                continue
            entry = _parse_row(row, line_no)
            if entry is not None:
                entries.append(entry)

    catalog = TimberCatalog(entries)
    logger.info("Loaded %d catalog sizes from %s", len(catalog), path)
    return catalog
