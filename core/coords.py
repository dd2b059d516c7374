"""
Vector and angle helpers shared by the kinematics modules.

All vectors are float64 numpy arrays of shape (3,). The world frame is Y-up,
the star sits at the origin and the orbit lies in the XZ plane.
"""

from __future__ import annotations
import math

import numpy as np
from scipy.spatial.transform import Rotation

TWO_PI = 2.0 * math.pi

# Fallback for normalising a zero-length vector (planet vertical)
DEFAULT_AXIS = np.array([0.0, 1.0, 0.0])

# Lengths below this are treated as zero
EPSILON = 1e-12

X_AXIS = np.array([1.0, 0.0, 0.0])
Y_AXIS = np.array([0.0, 1.0, 0.0])
Z_AXIS = np.array([0.0, 0.0, 1.0])


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x

def wrap(x: float, period: float) -> float:
    """Wrap x into [0, period)."""
    x = x % period
    # -1e-17 % 365.0 rounds to 365.0
    return 0.0 if x >= period else x

def wrap_deg(x: float) -> float:
    return wrap(x, 360.0)

def ang_diff_rad(a: float, b: float) -> float:
    """Smallest signed difference a-b in radians in [-pi, pi)."""
    return (a - b + math.pi) % TWO_PI - math.pi


def vec3(x: float, y: float, z: float) -> np.ndarray:
    return np.array([x, y, z], dtype=float)

def normalize(v: np.ndarray, fallback: np.ndarray = DEFAULT_AXIS) -> np.ndarray:
    """Unit vector along v, or a copy of fallback when v has no length."""
    n = float(np.linalg.norm(v))
    if n < EPSILON or not math.isfinite(n):
        return np.array(fallback, dtype=float)
    return np.asarray(v, dtype=float) / n

def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    return a + (b - a) * t


def axis_rotation(axis: np.ndarray, angle_rad: float) -> Rotation:
    """Right-handed rotation of angle_rad about axis."""
    return Rotation.from_rotvec(normalize(axis) * angle_rad)


def sph_to_cart(polar_rad: float, azimuth_rad: float, r: float = 1.0) -> np.ndarray:
    """
    Y-up spherical to Cartesian.
    polar angle from +Y, azimuth from +X toward +Z.
    """
    s = math.sin(polar_rad)
    return vec3(r * s * math.cos(azimuth_rad),
                r * math.cos(polar_rad),
                r * s * math.sin(azimuth_rad))

def azimuth_xz(v: np.ndarray) -> float:
    """Angle of v about +Y measured as atan2(x, z)."""
    return math.atan2(float(v[0]), float(v[2]))
