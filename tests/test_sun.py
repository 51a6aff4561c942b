"""Tests for the solar ephemeris, checked against known solar positions."""
from __future__ import annotations

from datetime import datetime, timezone

import numpy as np
import pytest

from plan13.core.daynumber import Instant
from plan13.core.observer import Observer
from plan13.core.sun import Sun, SunState


@pytest.fixture
def home() -> Observer:
    return Observer.create("Home", 48.661563, 9.779416, 386.0)


class TestSubSolarPoint:
    def test_march_equinox(self) -> None:
        # 2024-03-20 03:06 UT
        lat, _ = Sun().predict(Instant.from_civil(2024, 3, 20, 3, 6, 0)).latlon()
        assert lat == pytest.approx(0.0, abs=0.1)

    def test_june_solstice(self) -> None:
        # 2024-06-20 20:51 UT
        lat, _ = Sun().predict(Instant.from_civil(2024, 6, 20, 20, 51, 0)).latlon()
        assert lat == pytest.approx(23.44, abs=0.1)

    def test_december_solstice(self) -> None:
        # 2024-12-21 09:20 UT
        lat, _ = Sun().predict(Instant.from_civil(2024, 12, 21, 9, 20, 0)).latlon()
        assert lat == pytest.approx(-23.44, abs=0.1)

    def test_noon_utc_near_greenwich(self) -> None:
        # Equation of time is +7.5 min on 2024-03-20, so the Sun is ~1.9 deg east
        _, lon = Sun().predict(Instant.from_civil(2024, 3, 20, 12, 0, 0)).latlon()
        assert lon == pytest.approx(1.9, abs=0.5)

    def test_moves_west_fifteen_degrees_an_hour(self) -> None:
        sun = Sun()
        _, lon0 = sun.predict(Instant.from_civil(2024, 5, 1, 12, 0, 0)).latlon()
        _, lon1 = sun.predict(Instant.from_civil(2024, 5, 1, 13, 0, 0)).latlon()
        assert lon0 - lon1 == pytest.approx(15.0, abs=0.05)


class TestSunState:
    def test_direction_is_unit_vector(self) -> None:
        state = Sun().predict(Instant.from_civil(2024, 8, 1, 6, 0, 0))
        assert isinstance(state, SunState)
        assert np.linalg.norm(state.direction) == pytest.approx(1.0)
        assert np.linalg.norm(state.celestial) == pytest.approx(1.0)

    def test_accepts_datetime(self) -> None:
        a = Sun().predict(datetime(2024, 8, 1, 6, 0, 0, tzinfo=timezone.utc))
        b = Sun().predict(Instant.from_civil(2024, 8, 1, 6, 0, 0))
        np.testing.assert_allclose(a.direction, b.direction, atol=1e-9)

    def test_requires_predict(self, home: Observer) -> None:
        sun = Sun()
        with pytest.raises(RuntimeError, match="predict"):
            sun.latlon()
        with pytest.raises(RuntimeError, match="predict"):
            sun.elaz(home)


class TestSunLookAngles:
    def test_local_noon_at_summer_solstice(self, home: Observer) -> None:
        # Transit over 9.78 E on 2024-06-20 is at about 11:23 UT
        sun = Sun()
        sun.predict(Instant.from_civil(2024, 6, 20, 11, 23, 0))
        el, az = sun.elaz(home)
        assert el == pytest.approx(90.0 - 48.661563 + 23.44, abs=0.5)
        assert az == pytest.approx(180.0, abs=5.0)

    def test_midnight_is_dark(self, home: Observer) -> None:
        sun = Sun()
        sun.predict(Instant.from_civil(2024, 6, 20, 23, 23, 0))
        el, az = sun.elaz(home)
        assert el < 0.0
        assert 0.0 <= az < 360.0

    def test_morning_sun_in_the_east(self, home: Observer) -> None:
        sun = Sun()
        sun.predict(Instant.from_civil(2024, 3, 20, 8, 0, 0))
        el, az = sun.elaz(home)
        assert el > 0.0
        assert 90.0 < az < 180.0

    def test_no_range_rate_for_sun(self, home: Observer) -> None:
        sun = Sun()
        sun.predict(Instant.from_civil(2024, 3, 20, 8, 0, 0))
        sun.elaz(home)
        assert sun.look.range_rate_km_s is None
        assert sun.look.range_km == pytest.approx(1.496e8, rel=1e-3)


def test_sunlight_footprint_is_a_hemisphere() -> None:
    sun = Sun()
    sun.predict(Instant.from_civil(2024, 3, 20, 12, 0, 0))
    points = sun.footprint(64, 360, 180)
    assert points.shape == (64, 2)
    # near equinox the terminator runs close to the poles
    assert points[:, 1].min() <= 1
    assert points[:, 1].max() >= 178
