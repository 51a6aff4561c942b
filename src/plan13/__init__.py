"""
plan13: Satellite and Sun tracking with the Plan-13 orbit model.

Compact orbit prediction for ground stations: parse TLEs, propagate with
the Plan-13 model, and get azimuth/elevation, Doppler-corrected radio
frequencies and footprints on a world map.
"""

from __future__ import annotations

__version__ = "0.1.0.dev0"

from plan13.core.daynumber import Instant, civil_date, day_number
from plan13.core.tle import Elements, parse_tle, load_tle_file
from plan13.core.observer import Observer
from plan13.core.kepler import solve_kepler, KeplerSolution, ConvergenceError
from plan13.core.propagation import Satellite, SatelliteState
from plan13.core.sun import Sun, SunState
from plan13.core.topocentric import Look, DegenerateGeometryError
from plan13.core.doppler import Direction, doppler, doppler_offset
from plan13.core.footprint import footprint, footprint_latlon, horizon_radius
from plan13.core.tracker import Tracker, TrackResult, SunResult
from plan13.utils.projection import latlon_to_xy

__all__ = [
    "__version__",
    "Instant",
    "civil_date",
    "day_number",
    "Elements",
    "parse_tle",
    "load_tle_file",
    "Observer",
    "solve_kepler",
    "KeplerSolution",
    "ConvergenceError",
    "Satellite",
    "SatelliteState",
    "Sun",
    "SunState",
    "Look",
    "DegenerateGeometryError",
    "Direction",
    "doppler",
    "doppler_offset",
    "footprint",
    "footprint_latlon",
    "horizon_radius",
    "Tracker",
    "TrackResult",
    "SunResult",
    "latlon_to_xy",
]
