"""
Scene configuration — static parameters of the three-scale scene.

Everything here is immutable for the lifetime of a Simulation. Invalid
values are rejected at construction with ConfigError; this is the only
hard failure the engine surfaces to its caller.

Defaults (SceneConfig.default()):
    orbit      a=10, e=0.0167, perihelion on day 3, tilt 23.5°
    planet     radius 1
    observer   Beijing, 39.9°N 116.4°E
    camera     height 0.2 above ground, looking 10 units south
    presets    system   (0, 20, 20)   → (0, 0, 0)
               galactic (-25, 60, 80) → (-25, 0, 0)
    speed      0..86400× (60× at start), ground mode capped at 30×
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field

import numpy as np

from core.types import GeoCoordinate, ViewMode


class ConfigError(ValueError):
    """Invalid scene configuration."""


DAYS_PER_YEAR  = 365.0
HOURS_PER_DAY  = 24.0

# Speed multiplier 1 = real time: one real second is one simulated second
SIM_HOURS_PER_REAL_SECOND = 1.0 / 3600.0

# Galactic centre distance from the star along -X
GALACTIC_CENTER_DISTANCE = 25.0


@dataclass(frozen=True)
class OrbitParameters:
    semi_major_axis: float = 10.0
    eccentricity: float = 0.0167
    perihelion_day_of_year: float = 3.0
    axial_tilt_deg: float = 23.5

    def __post_init__(self):
        if not (self.semi_major_axis > 0.0 and math.isfinite(self.semi_major_axis)):
            raise ConfigError(f"semi_major_axis must be > 0, got {self.semi_major_axis}")
        if not 0.0 <= self.eccentricity < 1.0:
            raise ConfigError(f"eccentricity must be in [0, 1), got {self.eccentricity}")
        if not 0.0 <= self.perihelion_day_of_year < DAYS_PER_YEAR:
            raise ConfigError(
                f"perihelion_day_of_year must be in [0, 365), got {self.perihelion_day_of_year}")
        if not -90.0 <= self.axial_tilt_deg <= 90.0:
            raise ConfigError(f"axial_tilt_deg must be in [-90, 90], got {self.axial_tilt_deg}")

    @property
    def semi_minor_axis(self) -> float:
        return self.semi_major_axis * math.sqrt(1.0 - self.eccentricity ** 2)

    @property
    def focal_offset(self) -> float:
        return self.semi_major_axis * self.eccentricity

    @property
    def axial_tilt_rad(self) -> float:
        return math.radians(self.axial_tilt_deg)


@dataclass(frozen=True)
class PosePreset:
    position: tuple[float, float, float]
    look_target: tuple[float, float, float]
    up: tuple[float, float, float] = (0.0, 1.0, 0.0)

    def __post_init__(self):
        for name in ("position", "look_target", "up"):
            v = getattr(self, name)
            if len(v) != 3 or not all(math.isfinite(c) for c in v):
                raise ConfigError(f"preset {name} must be 3 finite numbers, got {v!r}")
        if np.allclose(self.position, self.look_target):
            raise ConfigError("preset position and look_target coincide")


@dataclass(frozen=True)
class CameraConfig:
    height: float = 0.2
    look_distance: float = 10.0
    transition_duration_s: float = 2.0
    system_preset: PosePreset = field(
        default_factory=lambda: PosePreset((0.0, 20.0, 20.0), (0.0, 0.0, 0.0)))
    galactic_preset: PosePreset = field(
        default_factory=lambda: PosePreset((-GALACTIC_CENTER_DISTANCE, 60.0, 80.0),
                                           (-GALACTIC_CENTER_DISTANCE, 0.0, 0.0)))

    def __post_init__(self):
        if self.height < 0.0:
            raise ConfigError(f"camera height must be >= 0, got {self.height}")
        if self.look_distance <= 0.0:
            raise ConfigError(f"look_distance must be > 0, got {self.look_distance}")
        if not self.transition_duration_s > 0.0:
            raise ConfigError(
                f"transition_duration_s must be > 0, got {self.transition_duration_s}")

    def preset_for(self, mode: ViewMode) -> PosePreset:
        if mode is ViewMode.SYSTEM:
            return self.system_preset
        if mode is ViewMode.GALACTIC:
            return self.galactic_preset
        raise KeyError(mode)


@dataclass(frozen=True)
class SpeedConfig:
    min_multiplier: float = 0.0
    max_multiplier: float = 86400.0
    ground_max_multiplier: float = 30.0
    default_multiplier: float = 60.0

    def __post_init__(self):
        if self.min_multiplier < 0.0:
            raise ConfigError(f"min_multiplier must be >= 0, got {self.min_multiplier}")
        if self.min_multiplier > self.max_multiplier:
            raise ConfigError("min_multiplier exceeds max_multiplier")
        if not self.min_multiplier <= self.ground_max_multiplier <= self.max_multiplier:
            raise ConfigError(
                "ground_max_multiplier must lie within [min_multiplier, max_multiplier]")


@dataclass(frozen=True)
class SceneConfig:
    orbit: OrbitParameters = field(default_factory=OrbitParameters)
    camera: CameraConfig = field(default_factory=CameraConfig)
    speed: SpeedConfig = field(default_factory=SpeedConfig)
    observer: GeoCoordinate = field(default_factory=lambda: GeoCoordinate(39.9, 116.4))
    planet_radius: float = 1.0
    initial_mode: ViewMode = ViewMode.GROUND
    start_day_of_year: float = 0.0
    start_hour_of_day: float = 12.0
    start_paused: bool = False

    def __post_init__(self):
        if not self.planet_radius > 0.0:
            raise ConfigError(f"planet_radius must be > 0, got {self.planet_radius}")
        if self.initial_mode not in (ViewMode.GROUND, ViewMode.SYSTEM):
            raise ConfigError(f"initial_mode must be ground or system, got {self.initial_mode}")
        if not -90.0 <= self.observer.latitude_deg <= 90.0:
            raise ConfigError(f"observer latitude out of range: {self.observer.latitude_deg}")
        if not -180.0 <= self.observer.longitude_deg <= 180.0:
            raise ConfigError(f"observer longitude out of range: {self.observer.longitude_deg}")

    @classmethod
    def default(cls) -> "SceneConfig":
        return cls()
