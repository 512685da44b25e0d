from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple
import logging

import numpy as np

from .constants import DEFAULT_SAMPLES, Shape
from .model import Section, Shaft
from .validation import ValidationMessage, has_errors, validate_shaft

logger = logging.getLogger(__name__)


@dataclass
class SectionResult:
    name: str
    shape: Shape
    length: float
    J: float            # m^4
    r_max: float        # m
    W: float            # m^3
    M0: float           # N·m
    M_end: float        # moment_at(length), N·m
    phi: float          # twist angle, rad
    tau_max: float      # Pa
    # diagrams (local x coordinate arrays)
    x: np.ndarray
    T: np.ndarray       # internal torque, N·m
    tau: np.ndarray     # T / W, Pa


@dataclass
class ShaftResult:
    sections: Tuple[SectionResult, ...]
    messages: List[ValidationMessage] = field(default_factory=list)

    @property
    def section_count(self) -> int:
        return len(self.sections)

    @property
    def total_twist(self) -> float:
        # plain accumulation, no compatibility between sections
        return float(sum(r.phi for r in self.sections))

    def _concat(self, attr: str) -> np.ndarray:
        parts = [np.asarray(getattr(r, attr), dtype=float) for r in self.sections]
        return np.concatenate(parts) if parts else np.zeros(0)

    @property
    def x_diag(self) -> np.ndarray:
        """Global x, each section shifted by the lengths before it."""
        parts = []
        x0 = 0.0
        for r in self.sections:
            parts.append(np.asarray(r.x, dtype=float) + x0)
            x0 += r.length
        return np.concatenate(parts) if parts else np.zeros(0)

    @property
    def T(self) -> np.ndarray:
        return self._concat("T")

    @property
    def tau(self) -> np.ndarray:
        return self._concat("tau")


class TorsionSolverError(RuntimeError):
    pass


def solve_section(section: Section, n_samples: int = DEFAULT_SAMPLES) -> SectionResult:
    if n_samples < 2:
        raise TorsionSolverError(f"n_samples must be >= 2, got {n_samples}")

    props = section.props()
    W = props.W
    x = np.linspace(0.0, section.length, int(n_samples))
    T = section.start_moment - section.moment_slope * x

    res = SectionResult(
        name=section.name,
        shape=section.shape,
        length=section.length,
        J=props.J,
        r_max=props.r_max,
        W=W,
        M0=section.start_moment,
        M_end=section.moment_at(section.length),
        phi=section.twist_angle(),
        tau_max=section.max_shear_stress(),
        x=x,
        T=T,
        tau=T / W,
    )
    logger.debug("%s (%s): J=%.6g W=%.6g phi=%.6g", res.name, res.shape.value, res.J, res.W, res.phi)
    return res


def solve_shaft(shaft: Shaft, n_samples: int = DEFAULT_SAMPLES) -> ShaftResult:
    msgs = validate_shaft(shaft)
    for m in msgs:
        if m.level == "WARN":
            logger.warning(m.text)
    if has_errors(msgs):
        raise TorsionSolverError("; ".join(m.text for m in msgs if m.level == "ERROR"))

    results = tuple(solve_section(s, n_samples=n_samples) for s in shaft)
    logger.info("Solved %d section(s), total twist %.6g rad", len(results), sum(r.phi for r in results))
    return ShaftResult(sections=results, messages=msgs)
