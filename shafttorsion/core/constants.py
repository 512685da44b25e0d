from __future__ import annotations

from enum import Enum
from typing import Final, Tuple


class Shape(str, Enum):
    CIRCLE = "circle"
    RECTANGLE = "rectangle"
    TUBE = "tube"


SHAPE_LABELS: Final[Tuple[str, ...]] = tuple(s.value for s in Shape)

# user input: geometry in cm, everything else SI
CM_PER_M: Final[float] = 100.0

# presentation scales of the text report (J in 1e-8 m^4, W in 1e-6 m^3)
J_REPORT_SCALE: Final[float] = 1e8
W_REPORT_SCALE: Final[float] = 1e6
REPORT_DECIMALS: Final[int] = 6

DEFAULT_SAMPLES: Final[int] = 21

# plausible shear modulus band for engineering metals/polymers, Pa
SHEAR_MODULUS_WARN_RANGE: Final[Tuple[float, float]] = (1e9, 5e11)

ENV_LOG_LEVEL: Final[str] = "SHAFTTORSION_LOG_LEVEL"
ENV_DEV: Final[str] = "SHAFTTORSION_DEV"
