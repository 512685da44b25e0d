from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

from .constants import SHEAR_MODULUS_WARN_RANGE, Shape
from .model import Shaft


@dataclass
class ValidationMessage:
    level: str  # 'ERROR' or 'WARN'
    text: str


ValidationRule = Callable[[Shaft], List[ValidationMessage]]


def _rule_minimum_sections(shaft: Shaft) -> List[ValidationMessage]:
    if len(shaft) == 0:
        return [ValidationMessage("ERROR", "Shaft has no sections.")]
    return []


def _rule_positive_geometry(shaft: Shaft) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    for s in shaft:
        dims = s.dimensions()
        # a zero bore is allowed for tubes
        bore = dims.pop("inner_diameter", 0.0)
        bad = [f"{k} = {v:g} m" for k, v in dims.items() if not v > 0]
        if bore < 0:
            bad.append(f"inner_diameter = {bore:g} m")
        if bad:
            msgs.append(ValidationMessage("ERROR", f"{s.name}: dimensions must be > 0 ({', '.join(bad)})."))
    return msgs


def _rule_shear_modulus(shaft: Shaft) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    lo, hi = SHEAR_MODULUS_WARN_RANGE
    for s in shaft:
        G = s.shear_modulus
        if not G > 0:
            msgs.append(ValidationMessage("ERROR", f"{s.name}: shear modulus G must be > 0 Pa, got {G:g}."))
        elif not lo <= G <= hi:
            msgs.append(ValidationMessage("WARN", f"{s.name}: G = {G:g} Pa looks off; G is expected in Pa (steel ~8e10)."))
    return msgs


def _rule_tube_wall(shaft: Shaft) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    for s in shaft:
        if s.shape is Shape.TUBE and s.inner_diameter >= s.outer_diameter:
            msgs.append(ValidationMessage(
                "ERROR",
                f"{s.name}: inner diameter {s.inner_diameter:g} m must be smaller than outer diameter {s.outer_diameter:g} m.",
            ))
    return msgs


def _rule_rectangle_orientation(shaft: Shaft) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    for s in shaft:
        if s.shape is Shape.RECTANGLE and s.width < s.height:
            msgs.append(ValidationMessage(
                "WARN",
                f"{s.name}: width {s.width:g} m < height {s.height:g} m (ratio h/b < 1); sides are swapped for the torsion formula.",
            ))
    return msgs


def validate_shaft(shaft: Shaft) -> List[ValidationMessage]:
    rules: List[ValidationRule] = [
        _rule_minimum_sections,
        _rule_positive_geometry,
        _rule_shear_modulus,
        _rule_tube_wall,
        _rule_rectangle_orientation,
    ]
    msgs: List[ValidationMessage] = []
    for rule in rules:
        rule_msgs = rule(shaft)
        msgs.extend(rule_msgs)
        if rule is _rule_minimum_sections and any(m.level == "ERROR" for m in rule_msgs):
            break
    return msgs


def has_errors(msgs: List[ValidationMessage]) -> bool:
    return any(m.level == "ERROR" for m in msgs)
