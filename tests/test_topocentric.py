"""Tests for look angles and Doppler."""
from __future__ import annotations

import math

import numpy as np
import pytest

from plan13.core.doppler import Direction, doppler, doppler_offset
from plan13.core.observer import Observer
from plan13.core.topocentric import DegenerateGeometryError, Look, resolve


@pytest.fixture
def equator() -> Observer:
    return Observer.create("Equator", 0.0, 0.0, 0.0)


def _target(obs: Observer, up: float, east: float, north: float) -> np.ndarray:
    return obs.position_km + up * obs.up + east * obs.east + north * obs.north


class TestResolve:
    def test_zenith(self, equator: Observer) -> None:
        look = resolve(_target(equator, 500.0, 0.0, 0.0), equator)
        assert isinstance(look, Look)
        assert look.elevation_deg == pytest.approx(90.0)
        assert look.range_km == pytest.approx(500.0)

    @pytest.mark.parametrize(
        "east, north, expected_az",
        [
            (0.0, 1000.0, 0.0),
            (1000.0, 0.0, 90.0),
            (0.0, -1000.0, 180.0),
            (-1000.0, 0.0, 270.0),
            (1000.0, 1000.0, 45.0),
            (-1000.0, 1000.0, 315.0),
        ],
    )
    def test_azimuth_on_horizon(self, equator: Observer, east: float, north: float, expected_az: float) -> None:
        look = resolve(_target(equator, 0.0, east, north), equator)
        assert look.azimuth_deg == pytest.approx(expected_az)
        assert look.elevation_deg == pytest.approx(0.0, abs=1e-9)

    def test_below_horizon(self, equator: Observer) -> None:
        look = resolve(_target(equator, -1000.0, 0.0, 1000.0), equator)
        assert look.elevation_deg == pytest.approx(-45.0)
        assert look.azimuth_deg == pytest.approx(0.0)

    def test_ranges_hold_everywhere(self) -> None:
        rng = np.random.default_rng(13)
        obs = Observer.create("Somewhere", 37.0, -122.0, 30.0)
        for _ in range(500):
            target = rng.normal(size=3) * 20000.0
            look = resolve(target, obs)
            assert 0.0 <= look.azimuth_deg < 360.0
            assert -90.0 <= look.elevation_deg <= 90.0

    def test_degenerate_line_of_sight(self, equator: Observer) -> None:
        with pytest.raises(DegenerateGeometryError):
            resolve(equator.position_km.copy(), equator)

    def test_degenerate_is_value_error(self, equator: Observer) -> None:
        with pytest.raises(ValueError):
            resolve(equator.position_km.copy(), equator)

    def test_range_rate_receding(self, equator: Observer) -> None:
        pos = _target(equator, 1000.0, 0.0, 0.0)
        vel = equator.velocity_km_s + 2.0 * equator.up
        look = resolve(pos, equator, vel)
        assert look.range_rate_km_s == pytest.approx(2.0)

    def test_range_rate_cross_track_is_zero(self, equator: Observer) -> None:
        pos = _target(equator, 1000.0, 0.0, 0.0)
        vel = equator.velocity_km_s + 7.0 * equator.north
        look = resolve(pos, equator, vel)
        assert look.range_rate_km_s == pytest.approx(0.0, abs=1e-12)

    def test_no_velocity_no_range_rate(self, equator: Observer) -> None:
        look = resolve(_target(equator, 1000.0, 0.0, 0.0), equator)
        assert look.range_rate_km_s is None


class TestDoppler:
    def test_approaching_raises_downlink(self) -> None:
        assert doppler(145.8, -5.0, Direction.DOWNLINK) > 145.8

    def test_receding_lowers_downlink(self) -> None:
        assert doppler(145.8, 5.0, Direction.DOWNLINK) < 145.8

    @pytest.mark.parametrize("range_rate", [-7.5, -1.0, 0.0, 0.3, 6.9])
    def test_uplink_and_downlink_symmetric(self, range_rate: float) -> None:
        rx = doppler(437.8, range_rate, Direction.DOWNLINK)
        tx = doppler(437.8, range_rate, Direction.UPLINK)
        assert rx - 437.8 == pytest.approx(437.8 - tx)

    def test_offset_value(self) -> None:
        assert doppler_offset(299.792, 1.0) == pytest.approx(-0.001)

    def test_zero_range_rate(self) -> None:
        assert doppler(145.8, 0.0) == 145.8

    def test_integer_direction_accepted(self) -> None:
        assert doppler(145.8, 5.0, 1) == doppler(145.8, 5.0, Direction.UPLINK)

    def test_shift_scales_with_frequency(self) -> None:
        assert doppler_offset(437.8, 3.0) == pytest.approx(3.0 * doppler_offset(437.8 / 3.0, 3.0))
        assert math.isclose(doppler_offset(145.8, -3.0), -doppler_offset(145.8, 3.0))
