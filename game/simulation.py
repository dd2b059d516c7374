"""
Simulation — the per-frame driver.

Owns the clock, the view state machine and the camera rig, and runs one
tick in strict dependency order:

    1. clock.advance(dt)
    2. planet state     (orbit position + spin angle)
    3. observer frame   (SurfaceFrame for the current GeoCoordinate)
    4. camera rig       (transition or ground anchoring)

Everything the renderer needs is read back through properties after tick().
Setters are meant to be called between ticks; each one clamps its input.
"""

from __future__ import annotations
import logging
from typing import Optional

from core.config import SceneConfig
from core.sim_clock import SimClock
from core.types import CameraPose, GeoCoordinate, ObserverFrame, PlanetState, ViewMode
from game.camera_rig import CameraRig
from game.view_state import ViewStateMachine
from universe.spin import planet_state
from universe.surface import observer_frame

logger = logging.getLogger(__name__)


class Simulation:
    """
    Three-scale scene state.

    Usage:
        sim = Simulation(SceneConfig.default())
        # in the frame loop:
        sim.tick(dt)
        pose = sim.camera_pose
    """

    def __init__(self, config: Optional[SceneConfig] = None):
        self.config = config if config is not None else SceneConfig.default()
        cfg = self.config

        self.clock = SimClock(cfg.speed,
                              day_of_year=cfg.start_day_of_year,
                              hour_of_day=cfg.start_hour_of_day,
                              paused=cfg.start_paused)
        self.views = ViewStateMachine(initial=cfg.initial_mode)
        self.rig = CameraRig(cfg.camera, cfg.orbit.axial_tilt_rad,
                             initial_mode=cfg.initial_mode)
        self.views.subscribe(self.rig.on_view_change)
        self.views.subscribe(self._on_view_change)

        if cfg.initial_mode is ViewMode.GROUND:
            self.clock.engage_ground_ceiling()

        self._geo = cfg.observer
        self._planet: Optional[PlanetState] = None
        self._frame: Optional[ObserverFrame] = None
        self.tick_count = 0

    # ── Read accessors ───────────────────────────────────────────────────────

    @property
    def observer(self) -> GeoCoordinate:
        return self._geo

    @property
    def planet_state(self) -> Optional[PlanetState]:
        return self._planet

    @property
    def observer_frame(self) -> Optional[ObserverFrame]:
        return self._frame

    @property
    def camera_pose(self) -> Optional[CameraPose]:
        return self.rig.current_pose

    @property
    def view_mode(self) -> ViewMode:
        return self.views.current

    # ── Setters ──────────────────────────────────────────────────────────────

    def set_speed_multiplier(self, value: float):
        self.clock.speed_multiplier = value

    def set_paused(self, paused: bool):
        self.clock.paused = paused

    def set_day_of_year(self, day: float):
        self.clock.set_day_of_year(day)

    def set_hour_of_day(self, hour: float):
        self.clock.set_hour_of_day(hour)

    def set_latitude(self, latitude_deg: float):
        self._geo = GeoCoordinate.clamped(latitude_deg, self._geo.longitude_deg)

    def set_longitude(self, longitude_deg: float):
        self._geo = GeoCoordinate.clamped(self._geo.latitude_deg, longitude_deg)

    def request_view_mode(self, mode: ViewMode) -> bool:
        return self.views.request(mode)

    def _on_view_change(self, current: ViewMode, previous: Optional[ViewMode]):
        if current is ViewMode.GROUND:
            self.clock.engage_ground_ceiling()
        else:
            self.clock.release_ground_ceiling()

    # ── Frame update ─────────────────────────────────────────────────────────

    def compute_kinematics(self) -> tuple[PlanetState, ObserverFrame]:
        """Planet state and observer frame for the clock's current time."""
        orbit = self.config.orbit
        # The calibration meridian is the observer's own longitude
        state = planet_state(self.clock.day_of_year, self.clock.hour_of_day,
                             orbit, self._geo.longitude_deg)
        frame = observer_frame(self._geo, state.world_position, state.spin_angle,
                               orbit.axial_tilt_rad, self.config.planet_radius)
        return state, frame

    def tick(self, dt_wall: float) -> Optional[CameraPose]:
        """Advance one frame by dt_wall real seconds."""
        self.clock.advance(dt_wall)
        self._planet, self._frame = self.compute_kinematics()
        pose = self.rig.update(dt_wall, self._planet, self._frame, self._geo)
        self.tick_count += 1
        return pose
