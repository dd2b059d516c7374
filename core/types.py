from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

import numpy as np

from core.coords import clamp


class ViewMode(Enum):
    GROUND   = "ground"
    SYSTEM   = "system"
    GALACTIC = "galactic"


@dataclass(frozen=True, slots=True)
class GeoCoordinate:
    latitude_deg: float
    longitude_deg: float

    @classmethod
    def clamped(cls, latitude_deg: float, longitude_deg: float) -> "GeoCoordinate":
        return cls(clamp(float(latitude_deg), -90.0, 90.0),
                   clamp(float(longitude_deg), -180.0, 180.0))


@dataclass(frozen=True, slots=True)
class PlanetState:
    world_position: np.ndarray
    spin_angle: float       # radians about the tilted axis


@dataclass(frozen=True, slots=True)
class ObserverFrame:
    world_position: np.ndarray
    up: np.ndarray
    south: np.ndarray
    east: np.ndarray

    def grid_basis(self) -> np.ndarray:
        """3x3 matrix with columns (east, up, south) for the local ground grid."""
        return np.column_stack((self.east, self.up, self.south))


@dataclass(frozen=True, slots=True)
class CameraPose:
    position: np.ndarray
    look_target: np.ndarray
    up: np.ndarray

    def copy(self) -> "CameraPose":
        return CameraPose(self.position.copy(), self.look_target.copy(), self.up.copy())
