"""Tests for the observer's star altitude and daylight phase."""

import numpy as np
import pytest

from atmosphere import DayPhase, day_phase, get_phase_properties, star_horizontal
from core.types import ObserverFrame
from universe.spin import STAR_POSITION


def frame_at(position, up=(0.0, 1.0, 0.0), south=(0.0, 0.0, 1.0)):
    up = np.array(up, dtype=float)
    south = np.array(south, dtype=float)
    return ObserverFrame(np.array(position, dtype=float), up, south, np.cross(up, south))


@pytest.mark.parametrize("alt, phase", [
    (-30.0, DayPhase.NIGHT),
    (-15.0, DayPhase.ASTRONOMICAL_TWILIGHT),
    (-8.0, DayPhase.NAUTICAL_TWILIGHT),
    (-3.0, DayPhase.CIVIL_TWILIGHT),
    (-0.5, DayPhase.SUNRISE_SUNSET),
    (3.0, DayPhase.GOLDEN_HOUR),
    (45.0, DayPhase.DAY),
])
def test_phase_from_altitude(alt, phase):
    assert DayPhase.from_solar_altitude(alt) is phase


def test_every_phase_has_properties():
    for phase in DayPhase:
        props = get_phase_properties(phase)
        assert all(0.0 <= c <= 1.0 for c in props.sky_color_rgb)
        assert props.label


def test_star_overhead():
    frame = frame_at((10.0, 0.0, 0.0), up=(-1.0, 0.0, 0.0), south=(0.0, 1.0, 0.0))
    alt, _ = star_horizontal(frame)
    assert alt == pytest.approx(90.0)
    assert day_phase(frame) is DayPhase.DAY


def test_star_due_south_on_horizon():
    alt, az = star_horizontal(frame_at((0.0, 0.0, -10.0)))
    assert alt == pytest.approx(0.0, abs=1e-9)
    assert az == pytest.approx(180.0)


def test_star_due_east():
    # east = up x south = +X here, so the star at the origin is east of (-10, 0, 0)
    alt, az = star_horizontal(frame_at((-10.0, 0.0, 0.0)))
    assert alt == pytest.approx(0.0, abs=1e-9)
    assert az == pytest.approx(90.0)


def test_star_below_horizon_is_night():
    frame = frame_at((0.0, 10.0, 0.0))
    alt, _ = star_horizontal(frame)
    assert alt == pytest.approx(-90.0)
    assert day_phase(frame) is DayPhase.NIGHT


def test_default_star_is_at_origin():
    frame = frame_at((-10.0, 0.0, 0.0))
    assert star_horizontal(frame) == star_horizontal(frame, np.zeros(3))
    assert star_horizontal(frame, np.array([0.0, 0.0, -10.0])) != star_horizontal(frame)
    np.testing.assert_array_equal(STAR_POSITION, np.zeros(3))
