from __future__ import annotations

from typing import Dict, List

from ..core.constants import CM_PER_M, Shape
from ..core.model import MalformedInputError, Section, parse_shape

# Table columns of the section editor; dim1/dim2 change meaning with the shape.
COLUMNS: List[str] = ["shape", "dim1", "dim2", "length", "shear_modulus", "start_moment", "end_moment"]
HEADERS: List[str] = ["Shape", "d / b / D (cm)", "h/b or d/D", "L (m)", "G (Pa)", "M0 (N·m)", "M_end (N·m)"]


def _cell_float(row: Dict[str, str], key: str) -> float:
    text = str(row.get(key, "")).strip()
    if not text:
        raise MalformedInputError(f"{key}: value required")
    try:
        return float(text)
    except ValueError:
        raise MalformedInputError(f"{key}: expected a number, got {text!r}") from None


def section_from_row(row: Dict[str, str], name: str = "") -> Section:
    """Convert one editor row (strings, user units) into a :class:`Section`."""
    shape = parse_shape(str(row.get("shape", "")).strip())
    common = dict(
        length=_cell_float(row, "length"),
        shear_modulus=_cell_float(row, "shear_modulus"),
        start_moment=_cell_float(row, "start_moment"),
        end_moment=_cell_float(row, "end_moment"),
        name=name,
    )
    if shape is Shape.CIRCLE:
        return Section.from_user_input(shape, diameter_cm=_cell_float(row, "dim1"), **common)
    if shape is Shape.RECTANGLE:
        return Section.from_user_input(
            shape, small_side_cm=_cell_float(row, "dim1"), aspect_ratio=_cell_float(row, "dim2"), **common
        )
    return Section.from_user_input(
        shape, outer_diameter_cm=_cell_float(row, "dim1"), diameter_ratio=_cell_float(row, "dim2"), **common
    )


def row_from_section(s: Section) -> Dict[str, str]:
    if s.shape is Shape.CIRCLE:
        dim1, dim2 = s.diameter * CM_PER_M, ""
    elif s.shape is Shape.RECTANGLE:
        dim1 = s.height * CM_PER_M
        dim2 = s.width / s.height if s.height else ""
    else:
        dim1 = s.outer_diameter * CM_PER_M
        dim2 = s.inner_diameter / s.outer_diameter if s.outer_diameter else ""
    return {
        "shape": s.shape.value,
        "dim1": f"{dim1:.6g}",
        "dim2": f"{dim2:.6g}" if dim2 != "" else "",
        "length": f"{s.length:.6g}",
        "shear_modulus": f"{s.shear_modulus:.6g}",
        "start_moment": f"{s.start_moment:.6g}",
        "end_moment": f"{s.end_moment:.6g}",
    }
