"""Tests for the Kepler solver."""
from __future__ import annotations

import math

import numpy as np
import pytest

from plan13.core.kepler import KeplerSolution, solve_kepler


@pytest.mark.parametrize("e", [0.0, 0.001, 0.1, 0.3, 0.5, 0.7, 0.8, 0.9])
def test_converges_for_elliptical_orbits(e: float) -> None:
    for m in np.linspace(0.0, 2.0 * math.pi, 360, endpoint=False):
        sol = solve_kepler(m, e)
        assert sol.converged
        assert sol.iterations <= 10
        assert abs(sol.eccentric_anomaly - e * math.sin(sol.eccentric_anomaly) - m) < 1e-5


def test_circular_orbit_is_identity() -> None:
    sol = solve_kepler(1.234, 0.0)
    assert sol.eccentric_anomaly == pytest.approx(1.234)
    assert sol.iterations == 1


def test_iteration_cap_reports_non_convergence() -> None:
    sol = solve_kepler(1.0, 0.5, max_iterations=1)
    assert isinstance(sol, KeplerSolution)
    assert not sol.converged
    assert sol.iterations == 1


def test_parabolic_orbit_does_not_hang() -> None:
    sol = solve_kepler(0.0, 1.0)
    assert not sol.converged


def test_tighter_tolerance_is_more_accurate() -> None:
    sol = solve_kepler(0.5, 0.6, tolerance=1e-12)
    assert sol.converged
    assert sol.eccentric_anomaly - 0.6 * math.sin(sol.eccentric_anomaly) == pytest.approx(0.5, abs=1e-12)
