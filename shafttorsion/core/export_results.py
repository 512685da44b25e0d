from __future__ import annotations

import csv
import json
import platform
import tempfile
import zipfile
from datetime import datetime
from pathlib import Path

import numpy as np

from .. import __version__
from .model import Shaft
from .report_export import build_standard_report_html, build_text_report, export_result_plots
from .torsion import ShaftResult


class ResultExportError(RuntimeError):
    """Raised when there is nothing to export."""


def export_results_bundle_zip(shaft: Shaft, results: ShaftResult, output_zip_path: str | Path, *, base_name: str = "results") -> Path:
    if results.section_count == 0:
        raise ResultExportError("no section results to export")

    output_zip = Path(output_zip_path)
    output_zip.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.TemporaryDirectory(prefix="shafttorsion_bundle_") as tmp_dir:
        tmp = Path(tmp_dir)
        shaft_json = tmp / f"{base_name}.shaft.json"
        report_txt = tmp / f"{base_name}.report.txt"
        report_html = tmp / f"{base_name}.report.html"
        results_csv = tmp / f"{base_name}.results.csv"
        results_png = tmp / f"{base_name}.results.png"
        results_svg = tmp / f"{base_name}.results.svg"
        build_info_json = tmp / "build_info.json"

        shaft_json.write_text(json.dumps(shaft.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
        report_txt.write_text(build_text_report(results), encoding="utf-8")
        report_html.write_text(build_standard_report_html(shaft, results), encoding="utf-8")
        write_diag_results_csv(results, results_csv)
        exported_images = export_result_plots(results, png_path=results_png, svg_path=results_svg)

        build_info = {
            "app": "shafttorsion",
            "version": __version__,
            "generated_at": datetime.now().isoformat(timespec="seconds"),
            "python": platform.python_version(),
            "platform": platform.platform(),
            "sections": results.section_count,
            "artifacts": {
                "shaft_json": shaft_json.name,
                "report_txt": report_txt.name,
                "report_html": report_html.name,
                "results_csv": results_csv.name,
                "result_plots": [p.name for p in exported_images],
            },
        }
        build_info_json.write_text(json.dumps(build_info, ensure_ascii=False, indent=2), encoding="utf-8")

        with zipfile.ZipFile(output_zip, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
            for item in (shaft_json, report_txt, report_html, results_csv, build_info_json, *exported_images):
                zf.write(item, arcname=item.name)

    return output_zip


def write_diag_results_csv(results: ShaftResult, output_path: str | Path) -> Path:
    """One row per diagram sample, global and local x side by side."""
    if results.section_count == 0:
        raise ResultExportError("no section results to export")

    fieldnames = ["section", "shape", "x_m", "x_local_m", "T_Nm", "tau_Pa"]
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", newline="", encoding="utf-8-sig") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        x0 = 0.0
        for r in results.sections:
            x = np.asarray(r.x, dtype=float)
            T = np.asarray(r.T, dtype=float)
            tau = np.asarray(r.tau, dtype=float)
            for idx in range(x.size):
                writer.writerow({
                    "section": r.name,
                    "shape": r.shape.value,
                    "x_m": float(x0 + x[idx]),
                    "x_local_m": float(x[idx]),
                    "T_Nm": float(T[idx]),
                    "tau_Pa": float(tau[idx]),
                })
            x0 += r.length
    return out
