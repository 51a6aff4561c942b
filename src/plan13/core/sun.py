"""Low-precision solar ephemeris."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime

import numpy as np
from numpy.typing import NDArray

from plan13.core.daynumber import Instant
from plan13.core.footprint import footprint
from plan13.core.frames import celestial_to_geocentric, days_since_reference, gha_aries
from plan13.core.observer import Observer
from plan13.core.topocentric import Look, resolve
from plan13.utils.constants import (
    AU_KM,
    DEFAULT_FOOTPRINT_POINTS,
    DEFAULT_MAP_HEIGHT,
    DEFAULT_MAP_WIDTH,
    GHAA_REFERENCE_DEG,
    SUN_EQC1,
    SUN_EQC2,
    SUN_INCLINATION_RAD,
    SUN_MEAN_ANOMALY_DEG,
    SUN_MEAN_ANOMALY_RATE_DEG_DAY,
    SUN_RATE_RAD_DAY as WW,
)

logger = logging.getLogger(__name__)

_CNS = math.cos(SUN_INCLINATION_RAD)
_SNS = math.sin(SUN_INCLINATION_RAD)


@dataclass(frozen=True)
class SunState:
    """Direction of the Sun at an instant.

    Attributes:
        time: Instant the direction is valid for.
        celestial: Unit vector towards the Sun, celestial frame.
        direction: Unit vector towards the Sun, Earth-fixed frame.
    """

    time: Instant
    celestial: NDArray[np.float64] = field(repr=False, compare=False)
    direction: NDArray[np.float64] = field(repr=False, compare=False)

    @property
    def position_km(self) -> NDArray[np.float64]:
        """Earth-fixed position of the Sun taken at a fixed range of 1 AU."""
        return self.direction * AU_KM

    def latlon(self) -> tuple[float, float]:
        """Sub-solar latitude and longitude in degrees."""
        lat = math.degrees(math.asin(max(-1.0, min(1.0, self.direction[2]))))
        lon = math.degrees(math.atan2(self.direction[1], self.direction[0]))
        return lat, lon


class Sun:
    """The Sun, tracked by direction only.

    Its range is always taken as 1 AU; the yearly variation changes the
    horizon circle by a negligible amount.
    """

    def __init__(self) -> None:
        self.state: SunState | None = None
        self.look: Look | None = None

    def predict(self, t: Instant | datetime) -> SunState:
        """Compute the Sun's direction at ``t`` and remember it as ``self.state``."""
        if isinstance(t, datetime):
            t = Instant.from_datetime(t)
        elapsed = days_since_reference(t)

        mrse = math.radians(GHAA_REFERENCE_DEG) + elapsed * WW + math.pi   # mean RA
        mase = math.radians(SUN_MEAN_ANOMALY_DEG + elapsed * SUN_MEAN_ANOMALY_RATE_DEG_DAY)
        tas = mrse + SUN_EQC1 * math.sin(mase) + SUN_EQC2 * math.sin(2.0 * mase)

        c, s = math.cos(tas), math.sin(tas)
        sun = np.array([c, s * _CNS, s * _SNS])

        self.state = SunState(
            time=t,
            celestial=sun,
            direction=celestial_to_geocentric(sun, gha_aries(t)),
        )
        self.look = None
        logger.debug("Sun at %s: lat/lon %.4f/%.4f", t, *self.state.latlon())
        return self.state

    def _require_state(self) -> SunState:
        if self.state is None:
            raise RuntimeError("Sun: call predict() first")
        return self.state

    def latlon(self) -> tuple[float, float]:
        """Sub-solar latitude and longitude in degrees."""
        return self._require_state().latlon()

    def elaz(self, observer: Observer) -> tuple[float, float]:
        """Elevation and azimuth of the Sun in degrees as seen by ``observer``."""
        self.look = resolve(self._require_state().position_km, observer)
        return self.look.elevation_deg, self.look.azimuth_deg

    def footprint(
        self,
        count: int = DEFAULT_FOOTPRINT_POINTS,
        map_width: int = DEFAULT_MAP_WIDTH,
        map_height: int = DEFAULT_MAP_HEIGHT,
        out: NDArray[np.integer] | None = None,
    ) -> NDArray[np.integer]:
        """Map-pixel outline of the sunlit hemisphere."""
        lat, lon = self.latlon()
        return footprint(lat, lon, AU_KM, count, map_width, map_height, out)
