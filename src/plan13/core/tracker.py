"""One-stop tracking for a fixed ground station.

Wraps an observer, a map size and a current time, and returns everything a
tracker display needs for a satellite or the Sun in one call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

import numpy as np
from numpy.typing import NDArray

from plan13.core.daynumber import Instant
from plan13.core.doppler import Direction
from plan13.core.observer import Observer
from plan13.core.propagation import Satellite
from plan13.core.sun import Sun
from plan13.core.tle import Elements
from plan13.utils.constants import (
    DEFAULT_FOOTPRINT_POINTS,
    DEFAULT_MAP_HEIGHT,
    DEFAULT_MAP_WIDTH,
)
from plan13.utils.projection import latlon_to_xy

logger = logging.getLogger(__name__)


@dataclass
class TrackResult:
    """Where a satellite is, for one ground station and instant.

    Attributes:
        name: Satellite name.
        time: Instant of the prediction.
        lat: Sub-satellite latitude, degrees.
        lon: Sub-satellite longitude, degrees.
        azimuth_deg: Azimuth from the station, degrees.
        elevation_deg: Elevation from the station, degrees.
        x: Map x of the sub-satellite point.
        y: Map y of the sub-satellite point.
        range_rate_km_s: Range-rate from the station, km/s.
        orbit_number: Current revolution number.
    """

    name: str
    time: Instant
    lat: float
    lon: float
    azimuth_deg: float
    elevation_deg: float
    x: int
    y: int
    range_rate_km_s: float
    orbit_number: int

    @property
    def visible(self) -> bool:
        return self.elevation_deg > 0.0


@dataclass
class SunResult:
    """Position of the Sun for one ground station and instant."""

    time: Instant
    lat: float
    lon: float
    azimuth_deg: float
    elevation_deg: float
    x: int
    y: int
    footprint: NDArray[np.integer] = field(repr=False)


class Tracker:
    """Track satellites and the Sun from one observer.

    Example::

        tracker = Tracker(Observer.create("Home", 48.66, 9.78, 386.0))
        tracker.set_time(2024, 2, 14, 18, 0, 0)
        result = tracker.track(elements)
        rx, tx = tracker.doppler(145.800, 437.800)
    """

    def __init__(
        self,
        observer: Observer,
        map_width: int = DEFAULT_MAP_WIDTH,
        map_height: int = DEFAULT_MAP_HEIGHT,
    ) -> None:
        self.observer = observer
        self.map_width = map_width
        self.map_height = map_height
        self.time: Instant | None = None
        self.satellite: Satellite | None = None
        self._loaded: dict[Elements, Satellite] = {}

    def observer_xy(self) -> tuple[int, int]:
        """Map position of the station."""
        return latlon_to_xy(
            self.observer.latitude_deg, self.observer.longitude_deg,
            self.map_width, self.map_height,
        )

    def set_time(
        self,
        year: int | Instant | datetime,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
    ) -> Instant:
        """Set the current time from civil fields, an Instant or a datetime."""
        if isinstance(year, Instant):
            self.time = year
        elif isinstance(year, datetime):
            self.time = Instant.from_datetime(year)
        else:
            self.time = Instant.from_civil(year, month, day, hour, minute, second)
        return self.time

    def _require_time(self) -> Instant:
        if self.time is None:
            raise RuntimeError("Tracker: call set_time() first")
        return self.time

    def _load(self, elements: Elements) -> Satellite:
        sat = self._loaded.get(elements)
        if sat is None:
            sat = self._loaded[elements] = Satellite(elements)
        return sat

    def track(self, satellite: Satellite | Elements) -> TrackResult:
        """Predict ``satellite`` at the current time and resolve it for the station."""
        t = self._require_time()
        if isinstance(satellite, Elements):
            satellite = self._load(satellite)
        self.satellite = satellite

        state = satellite.predict(t)
        lat, lon = state.latlon()
        el, az = satellite.elaz(self.observer)
        x, y = latlon_to_xy(lat, lon, self.map_width, self.map_height)
        logger.debug("%s at %s: az %.2f el %.2f", satellite.name, t, az, el)
        return TrackResult(
            name=satellite.name,
            time=t,
            lat=lat,
            lon=lon,
            azimuth_deg=az,
            elevation_deg=el,
            x=x,
            y=y,
            range_rate_km_s=satellite.range_rate,
            orbit_number=state.orbit_number,
        )

    def _require_satellite(self) -> Satellite:
        if self.satellite is None:
            raise RuntimeError("Tracker: call track() first")
        return self.satellite

    def doppler(self, freq_rx_mhz: float = 0.0, freq_tx_mhz: float = 0.0) -> tuple[float, float]:
        """Doppler-corrected downlink and uplink frequencies of the last tracked satellite."""
        sat = self._require_satellite()
        return sat.doppler(freq_rx_mhz, Direction.DOWNLINK), sat.doppler(freq_tx_mhz, Direction.UPLINK)

    def footprint(self, count: int = DEFAULT_FOOTPRINT_POINTS) -> NDArray[np.integer]:
        """Footprint of the last tracked satellite on this tracker's map."""
        return self._require_satellite().footprint(count, self.map_width, self.map_height)

    def sun(self, count: int = DEFAULT_FOOTPRINT_POINTS) -> SunResult:
        """Sun position, look angles and sunlight footprint at the current time."""
        t = self._require_time()
        sun = Sun()
        sun.predict(t)
        lat, lon = sun.latlon()
        el, az = sun.elaz(self.observer)
        x, y = latlon_to_xy(lat, lon, self.map_width, self.map_height)
        return SunResult(
            time=t,
            lat=lat,
            lon=lon,
            azimuth_deg=az,
            elevation_deg=el,
            x=x,
            y=y,
            footprint=sun.footprint(count, self.map_width, self.map_height),
        )
