"""Orbital propagation with the Plan-13 model.

Elements are treated as a Keplerian ellipse with secular J2 drift of the
node and perigee and a linear drag term. Loading a satellite derives the
constants once; every :meth:`Satellite.predict` call then only solves for
the state at the requested time.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime

import numpy as np
from numpy.typing import NDArray

from plan13.core.daynumber import Instant
from plan13.core.doppler import Direction, doppler, doppler_offset
from plan13.core.footprint import footprint
from plan13.core.frames import celestial_to_geocentric, gha_aries
from plan13.core.kepler import ConvergenceError, solve_kepler
from plan13.core.observer import Observer
from plan13.core.tle import Elements
from plan13.core.topocentric import Look, resolve
from plan13.utils.constants import (
    DEFAULT_FOOTPRINT_POINTS,
    DEFAULT_MAP_HEIGHT,
    DEFAULT_MAP_WIDTH,
    EARTH_J2 as J2,
    EARTH_MU_KM3_S2 as GM,
    EARTH_RADIUS_KM as RE,
    KEPLER_MAX_ITERATIONS,
    KEPLER_TOLERANCE_RAD,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrbitConstants:
    """Quantities derived once from an element set.

    Attributes:
        n0: Mean motion, rad/s.
        a0: Semi-major axis, km.
        b0: Semi-minor axis, km.
        pc: J2 precession constant, rad/day.
        qd: Nodal regression rate, rad/day.
        wd: Perigee drift rate, rad/day.
        dc: Drag coefficient, 1/day.
    """

    n0: float
    a0: float
    b0: float
    pc: float
    qd: float
    wd: float
    dc: float

    @classmethod
    def from_elements(cls, el: Elements) -> OrbitConstants:
        if not 0.0 <= el.eccentricity < 1.0:
            logger.error("NORAD %d: eccentricity %r outside [0, 1)", el.norad_id, el.eccentricity)
            raise ConvergenceError(f"NORAD {el.norad_id}: eccentricity {el.eccentricity!r} outside [0, 1)")
        if not el.mean_motion > 0.0:
            logger.error("NORAD %d: mean motion %r is not positive", el.norad_id, el.mean_motion)
            raise ValueError(f"NORAD {el.norad_id}: mean motion {el.mean_motion!r} is not positive")

        n0 = el.mean_motion / 86400.0
        a0 = (GM / (n0 * n0)) ** (1.0 / 3.0)
        b0 = a0 * math.sqrt(1.0 - el.eccentricity * el.eccentricity)
        pc = RE * a0 / (b0 * b0)
        pc = 1.5 * J2 * pc * pc * el.mean_motion
        ci = math.cos(el.inclination)
        return cls(
            n0=n0,
            a0=a0,
            b0=b0,
            pc=pc,
            qd=-pc * ci,
            wd=pc * (5.0 * ci * ci - 1.0) / 2.0,
            dc=-2.0 * el.decay / (3.0 * el.mean_motion),
        )


@dataclass(frozen=True)
class SatelliteState:
    """Propagated state of a satellite.

    Attributes:
        time: Instant the state is valid for.
        celestial_position_km: Position in the celestial frame, km.
        celestial_velocity_km_s: Velocity in the celestial frame, km/s.
        position_km: Position in the Earth-fixed geocentric frame, km.
        velocity_km_s: Velocity in the Earth-fixed geocentric frame, km/s.
        radius_km: Distance from Earth's centre, km.
        orbit_number: Revolution number at ``time``.
    """

    time: Instant
    celestial_position_km: NDArray[np.float64] = field(repr=False, compare=False)
    celestial_velocity_km_s: NDArray[np.float64] = field(repr=False, compare=False)
    position_km: NDArray[np.float64] = field(repr=False, compare=False)
    velocity_km_s: NDArray[np.float64] = field(repr=False, compare=False)
    radius_km: float
    orbit_number: int

    def latlon(self) -> tuple[float, float]:
        """Sub-satellite latitude and longitude in degrees."""
        lat = math.degrees(math.asin(max(-1.0, min(1.0, self.position_km[2] / self.radius_km))))
        lon = math.degrees(math.atan2(self.position_km[1], self.position_km[0]))
        return lat, lon


class Satellite:
    """A satellite loaded from a TLE.

    The element set and its derived constants never change. ``state``,
    ``look`` and ``range_rate`` hold the results of the most recent
    :meth:`predict` and :meth:`elaz` calls; an instance is meant to be used
    from one thread at a time.
    """

    def __init__(self, elements: Elements) -> None:
        self.elements = elements
        self.constants = OrbitConstants.from_elements(elements)
        self.state: SatelliteState | None = None
        self.look: Look | None = None
        logger.debug(
            "Loaded NORAD %d: a=%.3f km, node %.6f rad/d, perigee %.6f rad/d",
            elements.norad_id, self.constants.a0, self.constants.qd, self.constants.wd,
        )

    @classmethod
    def from_lines(cls, line1: str, line2: str, name: str = "", strict: bool = False) -> Satellite:
        return cls(Elements.from_lines(line1, line2, name=name, strict=strict))

    @property
    def name(self) -> str:
        return self.elements.name

    @property
    def range_rate(self) -> float | None:
        """Range-rate in km/s from the last :meth:`elaz` call."""
        return self.look.range_rate_km_s if self.look is not None else None

    def predict(
        self,
        t: Instant | datetime,
        tolerance: float = KEPLER_TOLERANCE_RAD,
        max_iterations: int = KEPLER_MAX_ITERATIONS,
    ) -> SatelliteState:
        """Propagate to ``t`` and remember the result as ``self.state``.

        Args:
            t: Time to propagate to (datetimes are taken as UTC).
            tolerance: Kepler solver tolerance, radians.
            max_iterations: Kepler solver iteration cap.

        Returns:
            The propagated state.

        Raises:
            ConvergenceError: If Kepler's equation does not converge.
        """
        if isinstance(t, datetime):
            t = Instant.from_datetime(t)
        el = self.elements
        k = self.constants

        elapsed = t - el.epoch                      # days since epoch
        dt = k.dc * elapsed / 2.0                   # linear drag terms
        kd = 1.0 + 4.0 * dt
        kdp = 1.0 - 7.0 * dt

        m = el.mean_anomaly + el.mean_motion * elapsed * (1.0 - 3.0 * dt)
        revs = math.floor(m / (2.0 * math.pi))
        m -= revs * 2.0 * math.pi

        kepler = solve_kepler(m, el.eccentricity, tolerance, max_iterations)
        if not kepler.converged:
            logger.error("NORAD %d: Kepler solver failed at %s", el.norad_id, t)
            raise ConvergenceError(
                f"NORAD {el.norad_id}: Kepler's equation did not converge at {t} "
                f"(e={el.eccentricity}, {kepler.iterations} iterations)"
            )
        c_ea = math.cos(kepler.eccentric_anomaly)
        s_ea = math.sin(kepler.eccentric_anomaly)
        dnom = 1.0 - el.eccentricity * c_ea

        a = k.a0 * kd
        b = k.b0 * kd
        rs = a * dnom

        # Position and velocity in the plane of the ellipse
        s_plane = np.array([a * (c_ea - el.eccentricity), b * s_ea, 0.0])
        v_plane = np.array([-a * s_ea / dnom * k.n0, b * c_ea / dnom * k.n0, 0.0])

        ap = el.arg_perigee + k.wd * elapsed * kdp
        cw, sw = math.cos(ap), math.sin(ap)
        raan = el.raan + k.qd * elapsed * kdp
        cq, sq = math.cos(raan), math.sin(raan)
        ci, si = math.cos(el.inclination), math.sin(el.inclination)

        # Plane -> celestial, [C] = [RAAN] * [IN] * [AP]
        c = np.array([
            [cw * cq - sw * ci * sq, -sw * cq - cw * ci * sq, si * sq],
            [cw * sq + sw * ci * cq, -sw * sq + cw * ci * cq, -si * cq],
            [sw * si, cw * si, ci],
        ])
        sat = c @ s_plane
        vel = c @ v_plane

        ghaa = gha_aries(t)
        state = SatelliteState(
            time=t,
            celestial_position_km=sat,
            celestial_velocity_km_s=vel,
            position_km=celestial_to_geocentric(sat, ghaa),
            velocity_km_s=celestial_to_geocentric(vel, ghaa),
            radius_km=rs,
            orbit_number=el.revolution + revs,
        )
        self.state = state
        self.look = None
        logger.debug("NORAD %d at %s: r=%.3f km, orbit %d", el.norad_id, t, rs, state.orbit_number)
        return state

    def _require_state(self) -> SatelliteState:
        if self.state is None:
            raise RuntimeError(f"{self.name or self.elements.norad_id}: call predict() first")
        return self.state

    def latlon(self) -> tuple[float, float]:
        """Sub-satellite latitude and longitude in degrees."""
        return self._require_state().latlon()

    def elaz(self, observer: Observer) -> tuple[float, float]:
        """Elevation and azimuth in degrees as seen by ``observer``.

        Also stores the full :class:`Look`, including range-rate, for
        :meth:`doppler`.
        """
        state = self._require_state()
        self.look = resolve(state.position_km, observer, state.velocity_km_s)
        return self.look.elevation_deg, self.look.azimuth_deg

    def _require_range_rate(self) -> float:
        rr = self.range_rate
        if rr is None:
            raise RuntimeError(f"{self.name or self.elements.norad_id}: call elaz() first")
        return rr

    def doppler(self, freq_mhz: float, direction: Direction = Direction.DOWNLINK) -> float:
        """Doppler-corrected RX (downlink) or TX (uplink) frequency in MHz."""
        return doppler(freq_mhz, self._require_range_rate(), direction)

    def doppler_offset(self, freq_mhz: float) -> float:
        """Doppler shift in MHz at ``freq_mhz`` for the current range-rate."""
        return doppler_offset(freq_mhz, self._require_range_rate())

    def footprint(
        self,
        count: int = DEFAULT_FOOTPRINT_POINTS,
        map_width: int = DEFAULT_MAP_WIDTH,
        map_height: int = DEFAULT_MAP_HEIGHT,
        out: NDArray[np.integer] | None = None,
    ) -> NDArray[np.integer]:
        """Map-pixel outline of the area that can see the satellite."""
        state = self._require_state()
        lat, lon = state.latlon()
        return footprint(lat, lon, state.radius_km, count, map_width, map_height, out)

    def __repr__(self) -> str:
        return f"Satellite(name={self.name!r}, norad_id={self.elements.norad_id})"
