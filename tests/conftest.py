from pathlib import Path

import pytest

from timberframe import (
    CatalogEntry,
    MaterialLibrary,
    MemberSizer,
    MemberType,
    Settings,
    TimberCatalog,
    load_catalog,
)

DATA_DIR = Path(__file__).resolve().parents[1] / "backend" / "data"

JOIST_DEPTHS = (200, 270, 335, 410, 480, 550, 620)


@pytest.fixture
def settings():
    return Settings(data_dir=DATA_DIR)


@pytest.fixture
def catalog():
    """The shipped MASSLAM size table."""
    return load_catalog(DATA_DIR / "masslam_sizes.csv")


@pytest.fixture
def small_catalog():
    """Joists at 250 wide only, two beam sizes, a handful of columns."""
    entries = [CatalogEntry(250, d, MemberType.JOIST) for d in JOIST_DEPTHS]
    entries += [
        CatalogEntry(250, 410, MemberType.BEAM),
        CatalogEntry(250, 620, MemberType.BEAM),
        CatalogEntry(335, 335, MemberType.COLUMN),
        CatalogEntry(335, 450, MemberType.COLUMN),
        CatalogEntry(420, 420, MemberType.COLUMN),
        CatalogEntry(420, 550, MemberType.COLUMN),
    ]
    return TimberCatalog(entries)


@pytest.fixture
def materials():
    return MaterialLibrary.defaults()


@pytest.fixture
def sizer(catalog, materials, settings):
    return MemberSizer(catalog, materials, settings)


@pytest.fixture
def empty_sizer(materials, settings):
    return MemberSizer(TimberCatalog.empty(), materials, settings)


@pytest.fixture
def write_csv(tmp_path):
    """Write ``text`` to a CSV in tmp_path and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
