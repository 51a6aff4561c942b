"""Visibility footprints: the horizon circle around a sub-point."""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from plan13.utils.constants import EARTH_RADIUS_KM as RE
from plan13.utils.projection import latlon_to_xy_array
from plan13.core.topocentric import DegenerateGeometryError

logger = logging.getLogger(__name__)


def horizon_radius(range_km: float) -> float:
    """Angular radius (radians) of the horizon circle of a body ``range_km`` from Earth's centre.

    Raises:
        DegenerateGeometryError: If the body is inside the Earth.
    """
    if not range_km >= RE:
        logger.error("No horizon circle for a body at %r km", range_km)
        raise DegenerateGeometryError(f"No horizon circle for a body at {range_km!r} km")
    return math.acos(RE / range_km)


def footprint_latlon(lat: float, lon: float, radius: float, count: int) -> NDArray[np.float64]:
    """Sample the circle of angular ``radius`` around ``(lat, lon)``.

    Points are generated on a circle centred on lat 0, lon 0 of a unit
    sphere, rotated "up" through ``lat`` and then "around" through ``lon``.

    Returns:
        Array of shape ``(count, 2)`` with latitude, longitude in degrees.
    """
    if count <= 0:
        raise ValueError(f"Footprint point count must be positive, got {count}")

    sra, cra = math.sin(radius), math.cos(radius)
    cla, sla = math.cos(math.radians(lat)), math.sin(math.radians(lat))
    clo, slo = math.cos(math.radians(lon)), math.sin(math.radians(lon))

    a = 2.0 * math.pi * np.arange(count) / count
    xfp = np.full(count, cra)
    yfp = sra * np.sin(a)
    zfp = sra * np.cos(a)

    # up by latitude
    x = xfp * cla - zfp * sla
    y = yfp
    z = xfp * sla + zfp * cla

    # around by longitude
    xfp = x * clo - y * slo
    yfp = x * slo + y * clo
    zfp = z

    points = np.empty((count, 2), dtype=np.float64)
    points[:, 0] = np.degrees(np.arcsin(np.clip(zfp, -1.0, 1.0)))
    points[:, 1] = np.degrees(np.arctan2(yfp, xfp))
    return points


def footprint(
    lat: float,
    lon: float,
    range_km: float,
    count: int,
    map_width: int,
    map_height: int,
    out: NDArray[np.integer] | None = None,
) -> NDArray[np.integer]:
    """Footprint outline of a body in map pixels.

    Args:
        lat: Sub-point latitude, degrees.
        lon: Sub-point longitude, degrees.
        range_km: Distance of the body from Earth's centre, km.
        count: Number of points on the outline.
        map_width: Map width in pixels.
        map_height: Map height in pixels.
        out: Optional integer array of shape ``(>= count, 2)`` to write into.

    Returns:
        The first ``count`` rows of ``out`` (or a new array) holding x/y.

    Raises:
        ValueError: If ``out`` is too small or not two columns wide.
        DegenerateGeometryError: If the body is inside the Earth.
    """
    if out is not None and (out.ndim != 2 or out.shape[1] != 2 or out.shape[0] < count):
        logger.error("Footprint buffer of shape %s cannot hold %d points", out.shape, count)
        raise ValueError(f"Footprint buffer of shape {out.shape} cannot hold {count} points")

    points = footprint_latlon(lat, lon, horizon_radius(range_km), count)
    xy = latlon_to_xy_array(points[:, 0], points[:, 1], map_width, map_height)
    if out is None:
        return xy
    out[:count] = xy
    return out[:count]
