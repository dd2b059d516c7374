"""
Orbit kinematics — planet position on a fixed ellipse around the star.

The star sits at the world origin, which is the near focus of the ellipse.
The ellipse lies in the XZ plane with its major axis along X.

Mean anomaly is used directly as the orbital angle: the planet sweeps equal
angles in equal times instead of following Kepler's second law. This keeps
the position a closed-form, reversible function of the day of year with no
iterative equation solving; the speed variation of a real eccentric orbit is
deliberately not modelled.

Perihelion alignment:
    The centred ellipse point (a·cos t, b·sin t) is nearest to the focus at
    (-c, 0) when t = π. After shifting by +c the star is at the origin, so
    the phase offset puts t = π on perihelion_day_of_year:
        offset = π − (perihelion_day / 365)·2π
"""

from __future__ import annotations
import math

import numpy as np

from core.config import DAYS_PER_YEAR, OrbitParameters
from core.coords import TWO_PI, vec3


def mean_anomaly(day_of_year: float) -> float:
    return (day_of_year / DAYS_PER_YEAR) * TWO_PI


def phase_offset(params: OrbitParameters) -> float:
    return math.pi - (params.perihelion_day_of_year / DAYS_PER_YEAR) * TWO_PI


def orbit_angle(day_of_year: float, params: OrbitParameters) -> float:
    """Angle on the centred ellipse for a day of year (radians)."""
    return mean_anomaly(day_of_year) + phase_offset(params)


def ellipse_point(angle: float, params: OrbitParameters) -> np.ndarray:
    return vec3(params.focal_offset + math.cos(angle) * params.semi_major_axis,
                0.0,
                math.sin(angle) * params.semi_minor_axis)


def planet_position(day_of_year: float, params: OrbitParameters) -> np.ndarray:
    """World position of the planet centre on day_of_year."""
    return ellipse_point(orbit_angle(day_of_year, params), params)


def star_distance(day_of_year: float, params: OrbitParameters) -> float:
    return float(np.linalg.norm(planet_position(day_of_year, params)))


def orbit_path(params: OrbitParameters, segments: int = 128) -> np.ndarray:
    """
    Closed polyline of the orbit, shape (segments + 1, 3).
    The last point repeats the first.
    """
    segments = max(3, int(segments))
    t = np.linspace(0.0, TWO_PI, segments + 1)
    pts = np.zeros((segments + 1, 3))
    pts[:, 0] = params.focal_offset + np.cos(t) * params.semi_major_axis
    pts[:, 2] = np.sin(t) * params.semi_minor_axis
    pts[-1] = pts[0]
    return pts
