"""TLE (Two-Line Element) parsing.

Fields are cut from fixed columns and parsed the way ``strtod``/``atol``
would: the longest numeric prefix is used and anything unparseable becomes
zero. Nothing is validated unless ``strict=True`` is requested.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from os import PathLike

from plan13.core.daynumber import Instant, day_number
from plan13.utils.constants import TLE_YEAR_PIVOT

logger = logging.getLogger(__name__)

_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")


def _column(line: str, i0: int, i1: int, strict: bool, pattern: re.Pattern[str]) -> str | None:
    text = line[i0:i1]
    match = pattern.match(text)
    if match is not None and not text[match.end():].strip():
        return match.group()
    if strict:
        logger.error("Unparseable TLE field [%d:%d]: %r", i0, i1, text)
        raise ValueError(f"Unparseable TLE field [{i0}:{i1}]: {text!r}")
    logger.warning("Malformed TLE field [%d:%d]: %r", i0, i1, text)
    return match.group() if match is not None else None


def field_float(line: str, i0: int, i1: int, strict: bool = False) -> float:
    """Parse columns ``[i0, i1)`` of ``line`` as a real number."""
    text = _column(line, i0, i1, strict, _FLOAT_PREFIX)
    return float(text) if text is not None else 0.0


def field_int(line: str, i0: int, i1: int, strict: bool = False) -> int:
    """Parse columns ``[i0, i1)`` of ``line`` as an integer."""
    text = _column(line, i0, i1, strict, _INT_PREFIX)
    return int(text) if text is not None else 0


@dataclass(frozen=True)
class Elements:
    """A parsed Two-Line Element set.

    Angles are kept in radians and rates in rad/day, which is what the
    propagator works in; the ``*_deg`` and ``*_rev_per_day`` properties give
    the familiar TLE units back.

    Attributes:
        name: Satellite name (line 0, if provided).
        line1: Raw TLE line 1.
        line2: Raw TLE line 2.
        norad_id: NORAD catalog number.
        epoch_year: Four-digit epoch year.
        epoch_day: Epoch day of year including the fraction of the day.
        inclination: Inclination, radians.
        raan: Right ascension of the ascending node, radians.
        eccentricity: Orbital eccentricity.
        arg_perigee: Argument of perigee, radians.
        mean_anomaly: Mean anomaly at epoch, radians.
        mean_motion: Mean motion, rad/day.
        decay: First derivative of mean motion, rad/day².
        revolution: Revolution number at epoch.
    """

    name: str
    line1: str
    line2: str
    norad_id: int
    epoch_year: int
    epoch_day: float
    inclination: float
    raan: float
    eccentricity: float
    arg_perigee: float
    mean_anomaly: float
    mean_motion: float
    decay: float
    revolution: int

    @classmethod
    def from_lines(cls, line1: str, line2: str, name: str = "", strict: bool = False) -> Elements:
        """Parse a TLE from its two data lines.

        Args:
            line1: TLE line 1.
            line2: TLE line 2.
            name: Optional satellite name (line 0).
            strict: Check line length and line numbers and reject fields
                that do not parse, instead of reading them as zero.

        Returns:
            The parsed element set.

        Raises:
            ValueError: Only with ``strict=True``, if a line is malformed.
        """
        line1 = line1.rstrip("\r\n")
        line2 = line2.rstrip("\r\n")

        if strict:
            if len(line1.rstrip()) != 69 or not line1.startswith("1"):
                logger.error("Invalid TLE line 1: %r", line1)
                raise ValueError(f"Invalid TLE line 1: {line1!r}")
            if len(line2.rstrip()) != 69 or not line2.startswith("2"):
                logger.error("Invalid TLE line 2: %r", line2)
                raise ValueError(f"Invalid TLE line 2: {line2!r}")

        year = field_int(line1, 18, 20, strict)
        year += 2000 if year < TLE_YEAR_PIVOT else 1900

        elements = cls(
            name=name.strip(),
            line1=line1,
            line2=line2,
            norad_id=field_int(line1, 2, 7, strict),
            epoch_year=year,
            epoch_day=field_float(line1, 20, 32, strict),
            decay=2.0 * math.pi * field_float(line1, 33, 43, strict),
            inclination=math.radians(field_float(line2, 8, 16, strict)),
            raan=math.radians(field_float(line2, 17, 25, strict)),
            eccentricity=field_float(line2, 26, 33, strict) / 1.0e7,
            arg_perigee=math.radians(field_float(line2, 34, 42, strict)),
            mean_anomaly=math.radians(field_float(line2, 43, 51, strict)),
            mean_motion=2.0 * math.pi * field_float(line2, 52, 63, strict),
            revolution=field_int(line2, 63, 68, strict),
        )
        logger.debug("Parsed TLE for NORAD %d (epoch %s)", elements.norad_id, elements.epoch)
        return elements

    @property
    def epoch(self) -> Instant:
        """Epoch as an :class:`Instant`."""
        return Instant(day_number(self.epoch_year, 1, 0), self.epoch_day)

    @property
    def epoch_datetime(self) -> datetime:
        """Epoch as a UTC datetime."""
        return self.epoch.to_datetime()

    @property
    def inclination_deg(self) -> float:
        return math.degrees(self.inclination)

    @property
    def raan_deg(self) -> float:
        return math.degrees(self.raan)

    @property
    def arg_perigee_deg(self) -> float:
        return math.degrees(self.arg_perigee)

    @property
    def mean_anomaly_deg(self) -> float:
        return math.degrees(self.mean_anomaly)

    @property
    def mean_motion_rev_per_day(self) -> float:
        return self.mean_motion / (2.0 * math.pi)

    def __str__(self) -> str:
        header = f"{self.name}\n" if self.name else ""
        return f"{header}{self.line1}\n{self.line2}"


def parse_tle(text: str, strict: bool = False) -> list[Elements]:
    """Parse one or more TLEs from text.

    Handles both 2-line and 3-line (with name) formats. Lines that belong
    to neither are skipped.
    """
    lines = [l.rstrip() for l in text.strip().splitlines() if l.strip()]
    result: list[Elements] = []
    i = 0

    while i < len(lines):
        if lines[i].startswith("1 ") and i + 1 < len(lines) and lines[i + 1].startswith("2 "):
            result.append(Elements.from_lines(lines[i], lines[i + 1], strict=strict))
            i += 2
        elif (
            not lines[i].startswith("1 ")
            and not lines[i].startswith("2 ")
            and i + 2 < len(lines)
            and lines[i + 1].startswith("1 ")
            and lines[i + 2].startswith("2 ")
        ):
            result.append(Elements.from_lines(lines[i + 1], lines[i + 2], name=lines[i], strict=strict))
            i += 3
        else:
            i += 1  # skip unrecognized lines

    logger.debug("Parsed %d TLEs from text", len(result))
    return result


def load_tle_file(path: str | PathLike[str], strict: bool = False) -> Iterator[Elements]:
    """Yield element sets from a file of name / line 1 / line 2 triples."""
    with open(path, "r", encoding="ascii", errors="replace") as fh:
        yield from parse_tle(fh.read(), strict=strict)
