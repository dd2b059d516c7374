"""
Surface frame — geographic coordinates to world-space position and
orientation on the spinning, tilted planet.

Body frame: Y is the spin axis (north pole at +Y). A point at latitude φ,
longitude λ uses

    polar angle = 90° − φ          (from +Y)
    azimuth     = λ + 90°          (from +X toward +Z)

The +90° is the single calibration constant that lines the longitude
convention up with the planet texture mapping. SpinKinematics derives the
reference meridian from the same mapping (reference_azimuth), so the noon
calibration never depends on the constant's value.

World transform, applied identically to the point, up and south:
    1. spin  — rotation of spin_angle about body +Y
    2. tilt  — rotation of axial_tilt about world +Z
    3. translate by the planet's world position (point only)
"""

from __future__ import annotations
import math

import numpy as np
from scipy.spatial.transform import Rotation

from core.coords import (DEFAULT_AXIS, Y_AXIS, Z_AXIS, azimuth_xz, axis_rotation,
                         normalize, sph_to_cart)
from core.types import GeoCoordinate, ObserverFrame

LONGITUDE_AZIMUTH_OFFSET_DEG = 90.0


def _angles(geo: GeoCoordinate) -> tuple[float, float]:
    polar = math.radians(90.0 - geo.latitude_deg)
    azimuth = math.radians(geo.longitude_deg + LONGITUDE_AZIMUTH_OFFSET_DEG)
    return polar, azimuth


def local_point(geo: GeoCoordinate, radius: float = 1.0) -> np.ndarray:
    """Body-frame surface point."""
    polar, azimuth = _angles(geo)
    return sph_to_cart(polar, azimuth, radius)


def local_south(geo: GeoCoordinate) -> np.ndarray:
    """
    Unit tangent toward decreasing latitude, i.e. d(point)/d(polar angle).
    Well defined at the poles, where it points along the given meridian.
    """
    polar, azimuth = _angles(geo)
    c = math.cos(polar)
    return normalize(np.array([c * math.cos(azimuth),
                               -math.sin(polar),
                               c * math.sin(azimuth)]), fallback=Z_AXIS)


def reference_azimuth(longitude_deg: float) -> float:
    """Azimuth about the spin axis, atan2(x, z), of a meridian in the body frame."""
    return azimuth_xz(local_point(GeoCoordinate(0.0, longitude_deg)))


def tilt_rotation(axial_tilt_rad: float) -> Rotation:
    return axis_rotation(Z_AXIS, axial_tilt_rad)


def body_rotation(spin_angle: float, axial_tilt_rad: float) -> Rotation:
    """Spin first, then tilt."""
    return tilt_rotation(axial_tilt_rad) * axis_rotation(Y_AXIS, spin_angle)


def spin_axis(axial_tilt_rad: float) -> np.ndarray:
    """World-space spin axis (through the planet centre)."""
    return tilt_rotation(axial_tilt_rad).apply(Y_AXIS)


def observer_frame(geo: GeoCoordinate,
                   planet_position: np.ndarray,
                   spin_angle: float,
                   axial_tilt_rad: float,
                   radius: float = 1.0) -> ObserverFrame:
    point = local_point(geo, radius)
    up = normalize(point, fallback=DEFAULT_AXIS)
    south = local_south(geo)

    rot = body_rotation(spin_angle, axial_tilt_rad)
    point, up, south = rot.apply(np.vstack((point, up, south)))

    up = normalize(up, fallback=spin_axis(axial_tilt_rad))
    east = normalize(np.cross(up, south), fallback=Z_AXIS)
    return ObserverFrame(
        world_position=np.asarray(planet_position, dtype=float) + point,
        up=up,
        south=south,
        east=east,
    )
