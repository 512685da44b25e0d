"""Three-section shaft solved without the interactive prompts.

Usage:
    python examples/torsion_demo.py [bundle.zip]

Requires numpy + matplotlib installed in runtime environment.
"""
from __future__ import annotations

import sys

from shafttorsion.core.export_results import export_results_bundle_zip
from shafttorsion.core.model import Section, Shaft
from shafttorsion.core.report_export import build_text_report
from shafttorsion.core.torsion import solve_shaft


def _demo_shaft() -> Shaft:
    steel = 8.0e10  # Pa
    return Shaft(
        title="Gearbox input shaft",
        sections=(
            Section.from_user_input("circle", diameter_cm=5.0, length=0.4, shear_modulus=steel,
                                    start_moment=1200.0, end_moment=900.0),
            Section.from_user_input("rectangle", small_side_cm=3.0, aspect_ratio=2.0, length=0.15,
                                    shear_modulus=steel, start_moment=900.0, end_moment=600.0),
            Section.from_user_input("tube", outer_diameter_cm=8.0, diameter_ratio=0.5, length=0.8,
                                    shear_modulus=steel, start_moment=600.0, end_moment=-250.0),
        ),
    )


def run_demo(bundle_path: str | None = None) -> None:
    shaft = _demo_shaft()
    out = solve_shaft(shaft, n_samples=41)
    print(build_text_report(out))
    for r in out.sections:
        print(f"[{r.name}] tau_max={r.tau_max / 1e6:.3f} MPa")
    if bundle_path:
        print(f"bundle -> {export_results_bundle_zip(shaft, out, bundle_path)}")


if __name__ == "__main__":
    run_demo(sys.argv[1] if len(sys.argv) > 1 else None)
