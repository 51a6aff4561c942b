"""Kepler's equation, solved by Newton-Raphson."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from plan13.utils.constants import KEPLER_MAX_ITERATIONS, KEPLER_TOLERANCE_RAD

logger = logging.getLogger(__name__)


class ConvergenceError(ValueError):
    """Raised when Kepler's equation cannot be solved for an orbit."""


@dataclass(frozen=True)
class KeplerSolution:
    """Result of :func:`solve_kepler`.

    Attributes:
        eccentric_anomaly: Eccentric anomaly E, radians.
        iterations: Newton steps taken.
        converged: Whether the last correction fell below the tolerance.
    """

    eccentric_anomaly: float
    iterations: int
    converged: bool


def solve_kepler(
    mean_anomaly: float,
    eccentricity: float,
    tolerance: float = KEPLER_TOLERANCE_RAD,
    max_iterations: int = KEPLER_MAX_ITERATIONS,
) -> KeplerSolution:
    """Solve ``M = E - e*sin(E)`` for E.

    Starts from ``E = M`` and applies ``(E - e*sin(E) - M) / (1 - e*cos(E))``
    until the correction is smaller than ``tolerance``. Never raises; an
    orbit that does not settle within ``max_iterations`` comes back with
    ``converged=False``.

    Args:
        mean_anomaly: Mean anomaly M, radians.
        eccentricity: Eccentricity, expected in [0, 1).
        tolerance: Convergence threshold on the correction, radians.
        max_iterations: Maximum number of Newton steps.
    """
    ea = mean_anomaly
    for iteration in range(1, max_iterations + 1):
        dnom = 1.0 - eccentricity * math.cos(ea)
        if dnom == 0.0:
            break
        d = (ea - eccentricity * math.sin(ea) - mean_anomaly) / dnom
        ea -= d
        if abs(d) <= tolerance:
            return KeplerSolution(ea, iteration, True)

    logger.warning(
        "Kepler solver did not converge: M=%.6f e=%.6f after %d iterations",
        mean_anomaly, eccentricity, max_iterations,
    )
    return KeplerSolution(ea, max_iterations, False)
