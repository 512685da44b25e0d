from __future__ import annotations

from base64 import b64encode
from html import escape
from io import BytesIO
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from .constants import J_REPORT_SCALE, REPORT_DECIMALS, W_REPORT_SCALE
from .model import Shaft
from .torsion import SectionResult, ShaftResult


def _num(value: float) -> str:
    return f"{value:.{REPORT_DECIMALS}f}"


def format_section_block(index: int, res: SectionResult) -> str:
    """One result block of the text report; ``index`` is 1-based."""
    lines = [
        f"Section #{index}:",
        f"  Shape                : {res.shape.value}",
        f"  Inertia moment J     = {_num(res.J * J_REPORT_SCALE)} x1e-8 m^4",
        f"  Section modulus W    = {_num(res.W * W_REPORT_SCALE)} x1e-6 m^3",
        f"  Moment at start M0   = {_num(res.M0)} N·m",
        f"  Moment at end M(L)   = {_num(res.M_end)} N·m",
        f"  Twist angle          = {_num(res.phi)} rad",
    ]
    return "\n".join(lines)


def build_text_report(results: ShaftResult) -> str:
    parts = ["=== Results ==="]
    for i, res in enumerate(results.sections, start=1):
        parts.append("")
        parts.append(format_section_block(i, res))
    parts.append("")
    parts.append(f"Sections processed: {results.section_count}")
    parts.append(f"Total twist angle    = {_num(results.total_twist)} rad")
    return "\n".join(parts) + "\n"


def build_standard_report_html(shaft: Shaft, results: ShaftResult, *, title: str = "Shaft torsion report") -> str:
    summary_rows = _summary_rows(shaft, results)
    input_rows = _input_rows(shaft)
    section_rows = _section_rows(results)
    message_rows = [[m.level, m.text] for m in results.messages]
    img_tag = _build_plot_image_tag(results)

    return f"""<!doctype html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <title>{escape(title)}</title>
  <style>
    body {{ font-family: 'Segoe UI', Arial, sans-serif; margin: 18px 24px; color: #222; }}
    h1 {{ font-size: 22px; margin: 0 0 8px; }}
    h2 {{ font-size: 16px; margin: 18px 0 8px; border-left: 4px solid #2f6fab; padding-left: 8px; }}
    .meta {{ color: #666; font-size: 12px; margin-bottom: 8px; }}
    table {{ width: 100%; border-collapse: collapse; font-size: 12px; margin: 6px 0 10px; }}
    th, td {{ border: 1px solid #d9d9d9; padding: 6px; text-align: left; vertical-align: top; }}
    th {{ background: #f6f8fa; }}
    .muted {{ color: #777; font-style: italic; }}
    .plot img {{ width: 100%; border: 1px solid #ddd; }}
  </style>
</head>
<body>
  <h1>{escape(title)}</h1>
  <div class=\"meta\">Units: m, Pa, N·m | J in 1e-8 m^4, W in 1e-6 m^3</div>

  <h2>1. Summary</h2>
  {_table_html(['Item', 'Value'], summary_rows)}

  <h2>2. Sections (input)</h2>
  {_table_html(['#', 'Name', 'Shape', 'Dimensions (m)', 'L (m)', 'G (Pa)', 'M0 (N·m)', 'M_end (N·m)'], input_rows)}

  <h2>3. Results</h2>
  {_table_html(['#', 'Name', 'J (1e-8 m^4)', 'W (1e-6 m^3)', 'M0 (N·m)', 'M(L) (N·m)', 'φ (rad)', 'τmax (MPa)'], section_rows)}

  <h2>4. Checks</h2>
  {_table_html(['Level', 'Message'], message_rows)}

  <h2>5. Diagrams</h2>
  <div class=\"plot\">{img_tag}</div>
</body>
</html>
"""


def export_standard_report_html(shaft: Shaft, results: ShaftResult, output_path: str | Path) -> Path:
    path = Path(output_path)
    html = build_standard_report_html(shaft, results)
    path.write_text(html, encoding="utf-8")
    return path


def _table_html(headers: list[str], rows: list[list[str]]) -> str:
    thead = "".join(f"<th>{escape(h)}</th>" for h in headers)
    if not rows:
        tbody = f"<tr><td class='muted' colspan='{len(headers)}'>none</td></tr>"
    else:
        body_rows = []
        for row in rows:
            body_rows.append("<tr>" + "".join(f"<td>{escape(str(v))}</td>" for v in row) + "</tr>")
        tbody = "".join(body_rows)
    return f"<table><thead><tr>{thead}</tr></thead><tbody>{tbody}</tbody></table>"


def _summary_rows(shaft: Shaft, results: ShaftResult) -> list[list[str]]:
    return [
        ["Title", shaft.title or "-"],
        ["Sections processed", str(results.section_count)],
        ["Total length (m)", f"{shaft.total_length():.3f}"],
        ["Total twist angle (rad)", _num(results.total_twist)],
    ]


def _input_rows(shaft: Shaft) -> list[list[str]]:
    rows: list[list[str]] = []
    for i, s in enumerate(shaft, start=1):
        dims = ", ".join(f"{k}={v:.6g}" for k, v in s.dimensions().items())
        rows.append([
            str(i), s.name, s.shape.value, dims,
            f"{s.length:.6g}", f"{s.shear_modulus:.6g}", f"{s.start_moment:.6g}", f"{s.end_moment:.6g}",
        ])
    return rows


def _section_rows(results: ShaftResult) -> list[list[str]]:
    rows: list[list[str]] = []
    for i, r in enumerate(results.sections, start=1):
        rows.append([
            str(i),
            r.name,
            _num(r.J * J_REPORT_SCALE),
            _num(r.W * W_REPORT_SCALE),
            _num(r.M0),
            _num(r.M_end),
            _num(r.phi),
            f"{r.tau_max / 1e6:.3f}",
        ])
    return rows


def _build_plot_figure(results: ShaftResult):
    x = np.asarray(results.x_diag, dtype=float)
    fig, axes = plt.subplots(2, 1, figsize=(10.2, 6.4), dpi=140, constrained_layout=True, sharex=True)
    panels = [
        ("T (N·m)", np.asarray(results.T, dtype=float)),
        ("τ (MPa)", np.asarray(results.tau, dtype=float) / 1e6),
    ]
    bounds = np.cumsum([0.0] + [r.length for r in results.sections])
    for ax, (label, arr) in zip(axes.flat, panels):
        if arr.size == x.size:
            ax.plot(x, arr, color="#2f6fab", linewidth=1.2)
        for xb in bounds:
            ax.axvline(xb, color="#d3d3d3", linewidth=0.8, linestyle="--")
        ax.axhline(0, color="#999999", linewidth=0.8)
        ax.set_title(label, fontsize=10)
        ax.grid(True, linestyle="--", linewidth=0.5, alpha=0.5)
    axes[-1].set_xlabel("x (m)")
    return fig


def _build_plot_image_tag(results: ShaftResult) -> str:
    x = np.asarray(results.x_diag, dtype=float)
    if x.size == 0:
        return "<div class='muted'>no diagram data</div>"

    fig = _build_plot_figure(results)
    buff = BytesIO()
    fig.savefig(buff, format="png")
    plt.close(fig)
    return f"<img alt='diagrams' src='data:image/png;base64,{b64encode(buff.getvalue()).decode('ascii')}' />"


def export_result_plots(results: ShaftResult, *, png_path: str | Path | None = None, svg_path: str | Path | None = None) -> list[Path]:
    out: list[Path] = []
    if np.asarray(results.x_diag).size == 0:
        return out
    fig = _build_plot_figure(results)
    try:
        for p, fmt in ((png_path, "png"), (svg_path, "svg")):
            if p is None:
                continue
            path = Path(p)
            fig.savefig(path, format=fmt)
            out.append(path)
    finally:
        plt.close(fig)
    return out
