import logging

from timberframe import MaterialLibrary, MaterialProperties, load_material_library
from timberframe.material import DEFAULT_PROPERTIES


def test_default_grade_properties(materials):
    ml38 = materials.get("ML38")
    assert ml38.bending_strength == 38.0
    assert ml38.modulus_of_elasticity == 14500.0
    assert ml38.density == 600.0
    assert ml38.charring_rate == 0.7
    assert materials.get(None) == ml38


def test_lookup_is_case_insensitive_and_resolves_aliases(materials):
    assert materials.get("gl24").grade == "GL24"
    assert materials.get("masslam_sl33").grade == "ML38"
    assert "Gl21" in materials
    assert "GL99" not in materials


def test_unknown_grade_falls_back_to_default_with_warning(materials, caplog):
    with caplog.at_level(logging.WARNING, logger="timberframe.material"):
        props = materials.get("GL99")
    assert props.grade == "ML38"
    assert "GL99" in caplog.text


def test_default_grade_always_present():
    lib = MaterialLibrary([MaterialProperties("X1", 10, 9000, 2, 10, 500, 0.6)])
    assert "ML38" in lib
    assert lib.get("nope").grade == "ML38"


def test_load_material_library_from_shipped_file(settings):
    lib = load_material_library(settings.grades_path)
    assert set(lib.grades()) >= {"ML38", "GL17", "GL18", "GL21", "GL24"}
    assert lib.get("GL21").density == 650.0


def test_load_material_library_skips_bad_rows(write_csv):
    path = write_csv(
        "grades.csv",
        "grade,fb[MPa],E[MPa],fs[MPa],fc[MPa],density[kg/m3],charring_rate[mm/min]\n"
        "ml40,40,15000,5,40,620,0.7\n"
        "GL30,abc,1,1,1,1,1\n"
        "GL31,30,0,1,1,1,1\n",
    )
    lib = load_material_library(path)
    assert lib.get("ML40").bending_strength == 40.0
    assert "GL30" not in lib
    assert "GL31" not in lib
    assert "ML38" in lib


def test_load_material_library_missing_file_uses_defaults(tmp_path):
    lib = load_material_library(tmp_path / "missing.csv")
    assert set(lib.grades()) == set(DEFAULT_PROPERTIES)


def test_load_material_library_missing_columns_uses_defaults(write_csv):
    path = write_csv("grades.csv", "grade,fb[MPa]\nML38,1\n")
    lib = load_material_library(path)
    assert lib.get("ML38").bending_strength == 38.0
