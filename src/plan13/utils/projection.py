"""Equirectangular projection of latitude/longitude onto a pixel map."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray


def latlon_to_xy(lat: float, lon: float, map_width: int, map_height: int) -> tuple[int, int]:
    """Map latitude (-90..90°) and longitude (-180..180°) to pixel x/y.

    x grows eastward from -180°, y grows southward from +90°. Results are
    not clamped to the map.
    """
    x = math.floor(((180.0 + lon) / 360.0) * map_width)
    y = math.floor(((90.0 - lat) / 180.0) * map_height)
    return x, y


def latlon_to_xy_array(
    lat: ArrayLike, lon: ArrayLike, map_width: int, map_height: int
) -> NDArray[np.int64]:
    """Vectorised :func:`latlon_to_xy`; returns an ``(n, 2)`` array of x/y."""
    lat = np.asarray(lat, dtype=np.float64)
    lon = np.asarray(lon, dtype=np.float64)
    xy = np.empty(lat.shape + (2,), dtype=np.int64)
    xy[..., 0] = np.floor(((180.0 + lon) / 360.0) * map_width)
    xy[..., 1] = np.floor(((90.0 - lat) / 180.0) * map_height)
    return xy
