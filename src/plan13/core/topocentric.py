"""Azimuth, elevation and range-rate of a target seen from an observer."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from plan13.core.observer import Observer

logger = logging.getLogger(__name__)


class DegenerateGeometryError(ValueError):
    """Raised when the observer-target geometry has no defined direction."""


@dataclass(frozen=True)
class Look:
    """Look angles from an observer to a target.

    Attributes:
        elevation_deg: Elevation above the horizon, [-90, 90].
        azimuth_deg: Azimuth clockwise from north, [0, 360).
        range_km: Distance to the target in km.
        range_rate_km_s: Rate of change of range in km/s, positive when
            receding. None when the target velocity is not tracked.
    """

    elevation_deg: float
    azimuth_deg: float
    range_km: float
    range_rate_km_s: float | None = None


def resolve(
    position_km: NDArray[np.float64],
    observer: Observer,
    velocity_km_s: NDArray[np.float64] | None = None,
) -> Look:
    """Resolve a geocentric target position into look angles.

    Args:
        position_km: Target position in the Earth-fixed frame, km.
        observer: Observer to look from.
        velocity_km_s: Target velocity in the Earth-fixed frame, km/s. When
            given, the range-rate is computed as well.

    Returns:
        The look angles.

    Raises:
        DegenerateGeometryError: If the target coincides with the observer.
    """
    los = np.asarray(position_km, dtype=np.float64) - observer.position_km
    r = float(np.linalg.norm(los))
    if r == 0.0 or not math.isfinite(r):
        logger.error("Line of sight from %r has length %r", observer.name, r)
        raise DegenerateGeometryError(f"Line of sight from {observer.name!r} has length {r!r}")
    los /= r

    u = float(np.dot(los, observer.up))
    e = float(np.dot(los, observer.east))
    n = float(np.dot(los, observer.north))

    az = math.degrees(math.atan2(e, n))
    if az < 0.0:
        az += 360.0
    # a tiny negative azimuth rounds to exactly 360.0 above
    if az >= 360.0:
        az -= 360.0
    el = math.degrees(math.asin(max(-1.0, min(1.0, u))))

    range_rate = None
    if velocity_km_s is not None:
        rel = np.asarray(velocity_km_s, dtype=np.float64) - observer.velocity_km_s
        range_rate = float(np.dot(rel, los))

    return Look(elevation_deg=el, azimuth_deg=az, range_km=r, range_rate_km_s=range_rate)
