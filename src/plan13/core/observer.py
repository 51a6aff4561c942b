"""Ground observer and its topocentric frame."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from plan13.utils.constants import (
    EARTH_POLAR_RADIUS_KM as RP,
    EARTH_RADIUS_KM as RE,
    EARTH_ROTATION_RAD_S as W0,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Observer:
    """A fixed site on the rotating Earth.

    All vectors are in the Earth-fixed geocentric frame.

    Attributes:
        name: Site name.
        latitude: Geodetic latitude, radians.
        longitude: Longitude, radians (east positive).
        altitude_km: Height above mean sea level, km.
        up: Local vertical unit vector.
        east: Local east unit vector.
        north: Local north unit vector.
        position_km: Site position on the WGS-84 ellipsoid, km.
        velocity_km_s: Site velocity due to Earth rotation, km/s.
    """

    name: str
    latitude: float
    longitude: float
    altitude_km: float
    up: NDArray[np.float64] = field(repr=False, compare=False)
    east: NDArray[np.float64] = field(repr=False, compare=False)
    north: NDArray[np.float64] = field(repr=False, compare=False)
    position_km: NDArray[np.float64] = field(repr=False, compare=False)
    velocity_km_s: NDArray[np.float64] = field(repr=False, compare=False)

    @classmethod
    def create(cls, name: str, lat_deg: float, lon_deg: float, alt_m: float = 0.0) -> Observer:
        """Build an observer from latitude/longitude in degrees and altitude in metres."""
        la = math.radians(lat_deg)
        lo = math.radians(lon_deg)
        ht = alt_m / 1000.0

        cl, sl = math.cos(la), math.sin(la)
        co, so = math.cos(lo), math.sin(lo)

        up = np.array([cl * co, cl * so, sl])
        east = np.array([-so, co, 0.0])
        north = np.array([-sl * co, -sl * so, cl])

        # Oblate Earth: separate radii for the equatorial and polar components
        d = math.sqrt(RE * RE * cl * cl + RP * RP * sl * sl)
        rx = RE * RE / d + ht
        rz = RP * RP / d + ht
        position = np.array([rx * up[0], rx * up[1], rz * up[2]])

        # Rotation is about the polar axis, so w x O has no z component
        velocity = np.array([-position[1] * W0, position[0] * W0, 0.0])

        for vec in (up, east, north, position, velocity):
            vec.setflags(write=False)

        logger.debug("Observer %r at lat %.6f lon %.6f alt %.3f km", name, lat_deg, lon_deg, ht)
        return cls(
            name=name,
            latitude=la,
            longitude=lo,
            altitude_km=ht,
            up=up,
            east=east,
            north=north,
            position_km=position,
            velocity_km_s=velocity,
        )

    @property
    def latitude_deg(self) -> float:
        return math.degrees(self.latitude)

    @property
    def longitude_deg(self) -> float:
        return math.degrees(self.longitude)
