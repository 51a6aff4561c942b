"""Doppler-shifted radio frequencies."""

from __future__ import annotations

from enum import Enum

from plan13.utils.constants import SPEED_OF_LIGHT_KM_S


class Direction(Enum):
    """Link direction as seen from the ground station."""

    DOWNLINK = 0  # RX
    UPLINK = 1  # TX


def doppler_offset(freq_mhz: float, range_rate_km_s: float) -> float:
    """Doppler shift in MHz of a signal from a target with this range-rate."""
    return -freq_mhz * range_rate_km_s / SPEED_OF_LIGHT_KM_S


def doppler(freq_mhz: float, range_rate_km_s: float, direction: Direction = Direction.DOWNLINK) -> float:
    """Frequency to tune to, in MHz.

    For the downlink this is the frequency heard on the ground; for the
    uplink it is the frequency to transmit so the satellite hears
    ``freq_mhz``.
    """
    shift = doppler_offset(freq_mhz, range_rate_km_s)
    if Direction(direction) is Direction.UPLINK:
        return freq_mhz - shift
    return freq_mhz + shift
