"""Sidereal time and the celestial to Earth-fixed rotation."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from plan13.core.daynumber import Instant, day_number
from plan13.utils.constants import (
    EARTH_ROTATION_RAD_DAY as WE,
    GHAA_REFERENCE_DEG,
    SIDEREAL_REFERENCE_YEAR,
)

SIDEREAL_REFERENCE = Instant(day_number(SIDEREAL_REFERENCE_YEAR, 1, 0))
"""Jan 0.0 of the reference year, where GHA Aries is ``GHAA_REFERENCE_DEG``."""


def days_since_reference(t: Instant) -> float:
    """Elapsed days from the sidereal reference instant to ``t``."""
    return t - SIDEREAL_REFERENCE


def gha_aries(t: Instant) -> float:
    """Greenwich Hour Angle of Aries at ``t``, radians (not reduced)."""
    return math.radians(GHAA_REFERENCE_DEG) + days_since_reference(t) * WE


def celestial_to_geocentric(vec: NDArray[np.float64], ghaa: float) -> NDArray[np.float64]:
    """Rotate a celestial-frame vector by ``-ghaa`` about the polar axis."""
    cg = math.cos(-ghaa)
    sg = math.sin(-ghaa)
    return np.array([
        vec[0] * cg - vec[1] * sg,
        vec[0] * sg + vec[1] * cg,
        vec[2],
    ])
