from __future__ import annotations
from dataclasses import dataclass
import math

@dataclass(frozen=True)
class TorsionProps:
    J: float      # torsion constant, m^4
    r_max: float  # distance to the extreme fibre, m

    @property
    def W(self) -> float:
        # torsional section modulus, m^3
        return self.J / self.r_max

def circle_solid(d: float) -> TorsionProps:
    J = math.pi*d**4/32.0
    return TorsionProps(J, d/2.0)

def rect_solid(a: float, b: float) -> TorsionProps:
    """Solid rectangle with sides ``a`` and ``b`` (either order).

    Saint-Venant torsion constant by the Roark approximation
    ``J = a b^3 [1/3 - 0.21 (b/a)(1 - (b/a)^4/12)]``, valid for ``a >= b``,
    so the sides are ordered long side first. ``J`` is therefore symmetric
    in ``(a, b)``: an inverted width/height entry gets the same constant as
    the properly ordered one (validation reports the inversion as a
    warning). The stress radius is the
    centroid-to-corner distance, conservative for this approximate theory.
    """
    a, b = max(a, b), min(a, b)
    ratio = b/a
    beta = 1/3 - 0.21*ratio*(1 - ratio**4/12)
    J = a*b**3*beta
    return TorsionProps(J, 0.5*math.sqrt(a*a + b*b))

def circle_hollow(D: float, d: float) -> TorsionProps:
    """Hollow circular tube (outer diameter D, inner diameter d)."""
    J = math.pi*(D**4 - d**4)/32.0
    return TorsionProps(J, D/2.0)
