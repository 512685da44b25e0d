from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .constants import CM_PER_M, SHAPE_LABELS, Shape
from .section_props import TorsionProps, circle_hollow, circle_solid, rect_solid


class InvalidShapeError(ValueError):
    """Shape label outside circle / rectangle / tube."""

    def __init__(self, label: object):
        super().__init__(f"unknown shape {label!r}, expected one of: {', '.join(SHAPE_LABELS)}")
        self.label = label


class DegenerateGeometryError(ValueError):
    pass


class MalformedInputError(ValueError):
    pass


def parse_shape(label: Any) -> Shape:
    if isinstance(label, Shape):
        return label
    for shape in Shape:
        if shape.value == label:
            return shape
    raise InvalidShapeError(label)


def _as_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise MalformedInputError(f"{name}: expected a number, got {value!r}") from None


_NUMERIC_FIELDS = (
    "length", "shear_modulus", "start_moment", "end_moment",
    "diameter", "width", "height", "outer_diameter", "inner_diameter",
)


@dataclass(frozen=True)
class Section:
    """One shaft segment: cross-section geometry plus linear torque loading.

    Units are SI throughout (m, Pa, N·m). Only the dimensions belonging to
    ``shape`` are meaningful, the others stay 0.
    """
    shape: Shape
    length: float            # L, m
    shear_modulus: float     # G, Pa
    start_moment: float      # M0 at x=0, N·m
    end_moment: float        # M_end at x=L, N·m (negative: opposite sense)
    diameter: float = 0.0    # circle
    width: float = 0.0       # rectangle a = (h/b) * b
    height: float = 0.0      # rectangle b
    outer_diameter: float = 0.0  # tube D
    inner_diameter: float = 0.0  # tube d
    name: str = ""

    moment_slope: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "shape", parse_shape(self.shape))
        for f in _NUMERIC_FIELDS:
            object.__setattr__(self, f, _as_float(f, getattr(self, f)))
        if not self.length > 0:
            raise DegenerateGeometryError(f"length must be > 0, got {self.length}")

        object.__setattr__(self, "moment_slope", (self.start_moment - self.end_moment) / self.length)

    @classmethod
    def from_user_input(
        cls,
        shape: Any,
        *,
        length: float,
        shear_modulus: float,
        start_moment: float,
        end_moment: float,
        diameter_cm: Optional[float] = None,
        small_side_cm: Optional[float] = None,
        aspect_ratio: Optional[float] = None,
        outer_diameter_cm: Optional[float] = None,
        diameter_ratio: Optional[float] = None,
        name: str = "",
    ) -> "Section":
        """Build a section from interactive units.

        Geometry comes in cm (circle ``d``, rectangle small side ``b`` with
        ratio ``h/b``, tube ``D`` with ratio ``d/D``); length, modulus and
        moments are SI already.
        """
        shape = parse_shape(shape)

        def need(label: str, value: Optional[float]) -> float:
            if value is None:
                raise MalformedInputError(f"{shape.value}: missing {label}")
            return _as_float(label, value)

        geo: Dict[str, float] = {}
        if shape is Shape.CIRCLE:
            geo["diameter"] = need("diameter_cm", diameter_cm) / CM_PER_M
        elif shape is Shape.RECTANGLE:
            b = need("small_side_cm", small_side_cm) / CM_PER_M
            geo["height"] = b
            geo["width"] = need("aspect_ratio", aspect_ratio) * b
        elif shape is Shape.TUBE:
            D = need("outer_diameter_cm", outer_diameter_cm) / CM_PER_M
            geo["outer_diameter"] = D
            geo["inner_diameter"] = need("diameter_ratio", diameter_ratio) * D

        return cls(
            shape=shape,
            length=length,
            shear_modulus=shear_modulus,
            start_moment=start_moment,
            end_moment=end_moment,
            name=name,
            **geo,
        )

    # ---------------- Section model ----------------
    def props(self) -> TorsionProps:
        if self.shape is Shape.CIRCLE:
            return circle_solid(self.diameter)
        if self.shape is Shape.RECTANGLE:
            return rect_solid(self.width, self.height)
        if self.shape is Shape.TUBE:
            return circle_hollow(self.outer_diameter, self.inner_diameter)
        return TorsionProps(0.0, 0.0)

    def inertia_moment(self) -> float:
        return self.props().J

    def outer_radius(self) -> float:
        return self.props().r_max

    def section_modulus(self) -> float:
        return self.inertia_moment() / self.outer_radius()

    def moment_at(self, x: float) -> float:
        """Internal torque at local position x (no bounds check)."""
        return self.start_moment - self.moment_slope * x

    def twist_angle(self) -> float:
        """phi = M_end * L / (G * J), rad."""
        return (self.end_moment * self.length) / (self.shear_modulus * self.inertia_moment())

    def max_shear_stress(self) -> float:
        # torque is linear along the section, so the peak sits at an end
        return max(abs(self.start_moment), abs(self.end_moment)) / self.section_modulus()

    def dimensions(self) -> Dict[str, float]:
        if self.shape is Shape.CIRCLE:
            return {"diameter": self.diameter}
        if self.shape is Shape.RECTANGLE:
            return {"width": self.width, "height": self.height}
        if self.shape is Shape.TUBE:
            return {"outer_diameter": self.outer_diameter, "inner_diameter": self.inner_diameter}
        return {}

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "name": self.name,
            "shape": self.shape.value,
            "length": self.length,
            "shear_modulus": self.shear_modulus,
            "start_moment": self.start_moment,
            "end_moment": self.end_moment,
        }
        d.update(self.dimensions())
        return d

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Section":
        init_names = {f.name for f in fields(Section) if f.init}
        unknown = set(d) - init_names - {"moment_slope"}
        if unknown:
            raise MalformedInputError(f"unknown section field(s): {', '.join(sorted(unknown))}")
        try:
            return Section(**{k: v for k, v in d.items() if k in init_names})
        except TypeError as exc:
            raise MalformedInputError(f"incomplete section record: {exc}") from None


@dataclass(frozen=True)
class Shaft:
    sections: Tuple[Section, ...] = ()
    title: str = ""

    def __post_init__(self):
        named = []
        for i, s in enumerate(self.sections, start=1):
            named.append(s if s.name else replace(s, name=f"S{i}"))
        object.__setattr__(self, "sections", tuple(named))

    def __len__(self) -> int:
        return len(self.sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def total_length(self) -> float:
        return sum(s.length for s in self.sections)

    def offsets(self) -> List[float]:
        """Global x of each section start."""
        out: List[float] = []
        x = 0.0
        for s in self.sections:
            out.append(x)
            x += s.length
        return out

    # ---------------- Serialization ----------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "units": "SI",
            "sections": [s.to_dict() for s in self.sections],
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Shaft":
        """Restore a shaft from :meth:`to_dict` output."""
        raw = d.get("sections")
        if not isinstance(raw, list):
            raise MalformedInputError("'sections' must be a list")
        sections = []
        for i, sd in enumerate(raw, start=1):
            if not isinstance(sd, dict):
                raise MalformedInputError(f"section #{i}: expected an object")
            sections.append(Section.from_dict(sd))
        return Shaft(sections=tuple(sections), title=str(d.get("title", "")))
