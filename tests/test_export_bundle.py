import csv
import json
import zipfile
from pathlib import Path

import pytest

from shafttorsion.core.export_results import ResultExportError, export_results_bundle_zip, write_diag_results_csv
from shafttorsion.core.model import Section, Shaft
from shafttorsion.core.torsion import ShaftResult, solve_shaft


def _sample_shaft_and_results():
    shaft = Shaft(sections=(
        Section(shape="circle", length=1.0, shear_modulus=8e10, start_moment=1000.0, end_moment=500.0, diameter=0.05),
        Section(shape="tube", length=0.5, shear_modulus=8e10, start_moment=500.0, end_moment=0.0,
                outer_diameter=0.08, inner_diameter=0.04),
    ))
    return shaft, solve_shaft(shaft, n_samples=3)


def test_export_results_bundle_zip_contains_all_artifacts(tmp_path: Path):
    shaft, out = _sample_shaft_and_results()
    output = export_results_bundle_zip(shaft, out, tmp_path / "bundle" / "results.zip", base_name="demo")

    assert output.exists()
    with zipfile.ZipFile(output) as zf:
        names = set(zf.namelist())
        assert {
            "demo.shaft.json",
            "demo.report.txt",
            "demo.report.html",
            "demo.results.csv",
            "demo.results.png",
            "demo.results.svg",
            "build_info.json",
        } <= names
        info = json.loads(zf.read("build_info.json").decode("utf-8"))
        assert info["app"] == "shafttorsion"
        assert info["sections"] == 2
        restored = Shaft.from_dict(json.loads(zf.read("demo.shaft.json").decode("utf-8")))
        assert restored == shaft
        assert "=== Results ===" in zf.read("demo.report.txt").decode("utf-8")


def test_diag_csv_has_one_row_per_sample_with_global_x(tmp_path: Path):
    _, out = _sample_shaft_and_results()
    path = write_diag_results_csv(out, tmp_path / "diag.csv")

    with path.open(newline="", encoding="utf-8-sig") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 6
    assert [r["section"] for r in rows] == ["S1"] * 3 + ["S2"] * 3
    assert float(rows[3]["x_m"]) == pytest.approx(1.0)
    assert float(rows[3]["x_local_m"]) == pytest.approx(0.0)
    assert float(rows[-1]["x_m"]) == pytest.approx(1.5)
    assert float(rows[2]["T_Nm"]) == pytest.approx(500.0)
    assert float(rows[-1]["T_Nm"]) == pytest.approx(0.0, abs=1e-9)


def test_empty_results_are_rejected(tmp_path: Path):
    with pytest.raises(ResultExportError):
        write_diag_results_csv(ShaftResult(sections=()), tmp_path / "empty.csv")
