from __future__ import annotations

"""Physical constants, sidereal reference data and default settings.

Distances in km, times in days unless otherwise noted.
"""

import math

# --- Earth parameters (WGS-84) ---
EARTH_RADIUS_KM: float = 6378.137
"""Equatorial radius of Earth in km."""

EARTH_FLATTENING: float = 1.0 / 298.257224
"""Flattening of the Earth ellipsoid."""

EARTH_POLAR_RADIUS_KM: float = EARTH_RADIUS_KM * (1.0 - EARTH_FLATTENING)
"""Polar radius of Earth in km."""

EARTH_MU_KM3_S2: float = 3.986e5
"""Earth gravitational parameter (GM) in km³/s²."""

EARTH_J2: float = 1.08263e-3
"""Second zonal coefficient of Earth's gravity field."""

# --- Year lengths and Earth rotation ---
MEAN_YEAR_DAYS: float = 365.25
"""Mean (Julian) year in days."""

TROPICAL_YEAR_DAYS: float = 365.2421896698
"""Tropical year in days."""

SUN_RATE_RAD_DAY: float = 2.0 * math.pi / TROPICAL_YEAR_DAYS
"""Mean motion of the Sun in right ascension, rad/day."""

EARTH_ROTATION_RAD_DAY: float = 2.0 * math.pi + SUN_RATE_RAD_DAY
"""Earth rotation rate relative to the equinox, rad/day."""

EARTH_ROTATION_RAD_S: float = EARTH_ROTATION_RAD_DAY / 86400.0
"""Earth rotation rate relative to the equinox, rad/s."""

# --- Sidereal and solar reference (valid to ~2030) ---
SIDEREAL_REFERENCE_YEAR: int = 2014
"""Year of the GHA Aries reference; the reference instant is Jan 0.0."""

GHAA_REFERENCE_DEG: float = 99.5828
"""GHA Aries at the reference instant, degrees."""

SUN_MEAN_ANOMALY_DEG: float = 356.4105
"""Mean anomaly of the Sun at the reference instant, degrees."""

SUN_MEAN_ANOMALY_RATE_DEG_DAY: float = 0.98560028
"""Rate of the Sun's mean anomaly, degrees/day."""

SUN_INCLINATION_RAD: float = math.radians(23.4375)
"""Obliquity of the ecliptic used for the solar ephemeris, radians."""

SUN_EQC1: float = 0.03340
"""First equation-of-centre term for the Sun, radians."""

SUN_EQC2: float = 0.00035
"""Second equation-of-centre term for the Sun, radians."""

AU_KM: float = 149.597870700e6
"""One astronomical unit in km, the nominal Earth-Sun range."""

# --- Radio ---
SPEED_OF_LIGHT_KM_S: float = 299792.0
"""Speed of light in km/s as used for Doppler shifts."""

# --- Solver and parser defaults ---
KEPLER_TOLERANCE_RAD: float = 1.0e-5
"""Newton-Raphson stops once the correction falls below this, radians."""

KEPLER_MAX_ITERATIONS: int = 50
"""Iteration cap for the Kepler solver."""

TLE_YEAR_PIVOT: int = 58
"""Two-digit epoch years below this are 20xx, others 19xx."""

# --- Map defaults ---
DEFAULT_MAP_WIDTH: int = 1150
"""Default world map width in pixels."""

DEFAULT_MAP_HEIGHT: int = 609
"""Default world map height in pixels."""

DEFAULT_FOOTPRINT_POINTS: int = 32
"""Default number of points on a footprint outline."""
