"""
Spin kinematics — daily rotation calibrated to solar time.

At hour 12 the reference meridian faces the star, on every day of the year.
The star direction is re-measured from the planet's current orbital position
each tick, so the rotation law couples orbit and spin:

    sun_dir     = atan2(to_star.x, to_star.z)     (in the planet's axis frame)
    time_offset = ((hour − 12) / 24) · 2π
    spin        = sun_dir − reference_azimuth + time_offset

reference_azimuth is the meridian's own azimuth about the spin axis in the
body frame. The tilt is undone before taking atan2, so the star lies in the
reference meridian plane at noon for any axial tilt; with zero tilt to_star
is the plain world vector.
"""

from __future__ import annotations

import numpy as np

from core.config import HOURS_PER_DAY, OrbitParameters
from core.coords import TWO_PI, azimuth_xz, normalize
from core.types import PlanetState
from universe.orbit import planet_position
from universe.surface import reference_azimuth, tilt_rotation

# Star fixed at the world origin
STAR_POSITION = np.zeros(3)

NOON = 12.0


def time_offset(hour_of_day: float) -> float:
    return ((hour_of_day - NOON) / HOURS_PER_DAY) * TWO_PI


def sun_direction_angle(planet_pos: np.ndarray, axial_tilt_rad: float = 0.0) -> float:
    """Azimuth of the star about the spin axis, seen from the planet centre."""
    to_star = normalize(STAR_POSITION - planet_pos)
    to_star = tilt_rotation(axial_tilt_rad).inv().apply(to_star)
    return azimuth_xz(to_star)


def spin_angle_at(planet_pos: np.ndarray, hour_of_day: float,
                  reference_longitude_deg: float,
                  axial_tilt_rad: float = 0.0) -> float:
    return (sun_direction_angle(planet_pos, axial_tilt_rad)
            - reference_azimuth(reference_longitude_deg)
            + time_offset(hour_of_day))


def spin_angle(day_of_year: float, hour_of_day: float,
               params: OrbitParameters, reference_longitude_deg: float) -> float:
    """Spin angle (radians) for a simulated date and time."""
    return spin_angle_at(planet_position(day_of_year, params), hour_of_day,
                         reference_longitude_deg, params.axial_tilt_rad)


def planet_state(day_of_year: float, hour_of_day: float,
                 params: OrbitParameters, reference_longitude_deg: float) -> PlanetState:
    pos = planet_position(day_of_year, params)
    return PlanetState(
        world_position=pos,
        spin_angle=spin_angle_at(pos, hour_of_day, reference_longitude_deg,
                                 params.axial_tilt_rad),
    )
