"""Day-number time representation.

Time is kept as a whole day number plus a fraction of the day. Day numbers
come from a polynomial approximation of the calendar which is valid from
1900-03-01 to 2100-02-28; dates outside that window are not checked.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from plan13.utils.constants import MEAN_YEAR_DAYS

logger = logging.getLogger(__name__)


def day_number(year: int, month: int, day: int) -> int:
    """Convert a civil date to a day number.

    January and February count as months 13 and 14 of the previous year.
    Day 0 of a month is allowed and means the last day of the month before,
    so ``day_number(y, 1, 0)`` is the day number of Jan 0.0.
    """
    if month < 3:
        month += 12
        year -= 1
    return int(year * MEAN_YEAR_DAYS) + int((month + 1) * 30.6) + (day - 428)


def civil_date(dn: int) -> tuple[int, int, int]:
    """Convert a day number back to ``(year, month, day)``."""
    dn += 428
    year = int((dn - 122.1) / MEAN_YEAR_DAYS)
    dn -= int(year * MEAN_YEAR_DAYS)
    month = int(dn / 30.61)
    dn -= int(month * 30.6)
    month -= 1
    if month > 12:
        month -= 12
        year += 1
    return year, month, dn


def _normalize(day: int, fraction: float) -> tuple[int, float]:
    whole = math.floor(fraction)
    day += int(whole)
    fraction -= whole
    # fraction can round up to exactly 1.0 for tiny negative inputs
    if fraction >= 1.0:
        day += 1
        fraction -= 1.0
    return day, fraction


@dataclass(frozen=True, order=True)
class Instant:
    """A point in time as ``(day, fraction)``.

    Attributes:
        day: Day number as produced by :func:`day_number`.
        fraction: Fraction of the day, always in [0, 1).
    """

    day: int = 0
    fraction: float = 0.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.fraction < 1.0:
            day, fraction = _normalize(self.day, self.fraction)
            object.__setattr__(self, "day", day)
            object.__setattr__(self, "fraction", fraction)

    @classmethod
    def from_civil(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: float = 0,
    ) -> Instant:
        """Build an instant from a civil (UTC) date and time."""
        return cls(
            day_number(year, month, day),
            (hour + minute / 60.0 + second / 3600.0) / 24.0,
        )

    @classmethod
    def from_datetime(cls, dt: datetime) -> Instant:
        """Build an instant from a datetime.

        Naive datetimes are taken to be UTC; aware ones are converted to UTC.
        """
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        return cls.from_civil(
            dt.year, dt.month, dt.day, dt.hour, dt.minute,
            dt.second + dt.microsecond / 1e6,
        )

    def to_civil(self) -> tuple[int, int, int, int, int, int]:
        """Return ``(year, month, day, hour, minute, second)``.

        Seconds are truncated to whole seconds.
        """
        dn = self.day
        # round to microseconds first so 59.9999999 s does not truncate down
        seconds = int(round(self.fraction * 86400.0, 6))
        if seconds >= 86400:
            dn += 1
            seconds -= 86400
        year, month, day = civil_date(dn)
        hour, rest = divmod(seconds, 3600)
        minute, second = divmod(rest, 60)
        return year, month, day, hour, minute, second

    def to_datetime(self) -> datetime:
        """Return the instant as a timezone-aware UTC datetime."""
        year, month, day = civil_date(self.day)
        return datetime(year, month, day, tzinfo=timezone.utc) + timedelta(
            microseconds=round(self.fraction * 86400e6)
        )

    def advance(self, days: float) -> Instant:
        """Return a new instant ``days`` later (earlier if negative)."""
        return Instant(*_normalize(self.day, self.fraction + days))

    def round_up(self, interval: float) -> Instant:
        """Round up to the next multiple of ``interval`` days within the day.

        An instant already on a boundary moves on by a whole interval.
        """
        if interval <= 0.0:
            raise ValueError(f"Rounding interval must be positive, got {interval}")
        step = interval - math.fmod(self.fraction, interval)
        return Instant(*_normalize(self.day, self.fraction + step))

    def isoformat(self) -> str:
        """Render as ``YYYY-MM-DD HH:MM:SS``."""
        year, month, day, hour, minute, second = self.to_civil()
        return "%4d-%02d-%02d %02d:%02d:%02d" % (year, month, day, hour, minute, second)

    def __sub__(self, other: Instant) -> float:
        """Elapsed days between two instants."""
        if not isinstance(other, Instant):
            return NotImplemented
        return (self.day - other.day) + (self.fraction - other.fraction)

    def __str__(self) -> str:
        return self.isoformat()
