"""
CameraView — pinhole projection of world points through a CameraPose.

Builds the look-at basis from the pose (forward toward the look target,
right = forward × up, true up = right × forward) and projects with a
vertical field of view. Used by the viewer to draw the scene from the
engine's camera; it never feeds back into the kinematics.
"""

from __future__ import annotations
import math
from typing import Optional, Tuple

import numpy as np

from core.coords import Y_AXIS, X_AXIS, normalize
from core.types import CameraPose

NEAR_CLIP = 1e-3


def look_at_basis(pose: CameraPose) -> np.ndarray:
    """Rows (right, up, forward) of the camera frame."""
    forward = normalize(pose.look_target - pose.position, fallback=-Y_AXIS)
    right = np.cross(forward, pose.up)
    if np.linalg.norm(right) < 1e-9:
        # up parallel to the view direction
        right = np.cross(forward, X_AXIS)
    right = normalize(right, fallback=X_AXIS)
    up = np.cross(right, forward)
    return np.vstack((right, up, forward))


class CameraView:
    """
    Projects world points to pixel coordinates for a W×H viewport.

    Parameters
    ----------
    width, height : viewport size in pixels
    fov_deg       : vertical field of view
    """

    def __init__(self, width: int, height: int, fov_deg: float = 60.0):
        self.width = width
        self.height = height
        self.fov_deg = max(10.0, min(170.0, fov_deg))
        self._basis = np.eye(3)
        self._origin = np.zeros(3)

    def set_pose(self, pose: CameraPose):
        self._basis = look_at_basis(pose)
        self._origin = pose.position.copy()

    def resize(self, width: int, height: int):
        self.width, self.height = width, height

    def project(self, point: np.ndarray) -> Optional[Tuple[float, float, float]]:
        """
        (x, y, depth) in pixels, or None when behind the camera.
        Screen y grows downward.
        """
        cam = self._basis @ (np.asarray(point, dtype=float) - self._origin)
        depth = float(cam[2])
        if depth <= NEAR_CLIP:
            return None
        f = 1.0 / math.tan(math.radians(self.fov_deg) / 2.0)
        half_w, half_h = self.width * 0.5, self.height * 0.5
        aspect = self.width / max(self.height, 1)
        x = (cam[0] * f / aspect / depth) * half_w + half_w
        y = (1.0 - cam[1] * f / depth) * half_h
        return x, y, depth

    def projected_radius(self, radius: float, depth: float) -> float:
        f = 1.0 / math.tan(math.radians(self.fov_deg) / 2.0)
        return radius * f / depth * self.height * 0.5
