"""
Camera Rig

Two behaviours, one active at a time:

Transition (entering any mode)
    Eased flight from a start pose to an end pose over a fixed duration.
        progress = min(elapsed / duration, 1)
        eased    = 1 - (1 - progress)^3           (ease-out cubic)
    Position and look target are interpolated linearly in eased space; the
    up vector turns along the great circle between its two ends.
    The start pose depends on the mode being left: the last anchored ground
    pose, or the preset of the system/galactic view. For ground the end pose
    is the live anchored pose of the current tick.

Anchoring (ground mode, after the transition lands)
    camera  = observer + up * height
    target  = observer + south * look_distance
    cam up  = observer up (not world +Y), so the horizon stays level

    The pose is carried incrementally: each tick the previous pose is taken
    relative to the previous planet centre, rotated by the spin delta about
    the spin axis through the planet centre, and re-attached to the current
    centre. Rotating about the observer point instead would leave the axis
    offset from the true one and make the camera wobble. The pose is seeded
    from the direct SurfaceFrame computation on entry and whenever the
    observer's coordinates change.
"""

from __future__ import annotations
import logging
import math
from typing import Optional

import numpy as np

from core.config import CameraConfig, PosePreset
from core.coords import X_AXIS, Z_AXIS, ang_diff_rad, axis_rotation, clamp, lerp, normalize
from core.types import CameraPose, GeoCoordinate, ObserverFrame, PlanetState, ViewMode
from universe.surface import spin_axis

logger = logging.getLogger(__name__)


def ease_out_cubic(t: float) -> float:
    t = max(0.0, min(1.0, t))
    return 1.0 - (1.0 - t) ** 3


def rotate_toward(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """
    Unit vector a turned toward b by the fraction t of the angle between
    them, along the great circle. Opposite vectors turn about an axis
    perpendicular to a.
    """
    a, b = normalize(a), normalize(b)
    angle = math.acos(clamp(float(np.dot(a, b)), -1.0, 1.0))
    if angle < 1e-12:
        return b.copy()
    axis = np.cross(a, b)
    if np.linalg.norm(axis) < 1e-9:
        axis = np.cross(a, X_AXIS)
        if np.linalg.norm(axis) < 1e-9:
            axis = np.cross(a, Z_AXIS)
    return normalize(axis_rotation(axis, angle * t).apply(a), fallback=b)


def preset_pose(preset: PosePreset) -> CameraPose:
    return CameraPose(np.array(preset.position, dtype=float),
                      np.array(preset.look_target, dtype=float),
                      normalize(np.array(preset.up, dtype=float)))


def anchored_pose(frame: ObserverFrame, height: float, look_distance: float) -> CameraPose:
    """Ground camera placement computed directly from the observer frame."""
    return CameraPose(
        position=frame.world_position + frame.up * height,
        look_target=frame.world_position + frame.south * look_distance,
        up=frame.up.copy(),
    )


class CameraTransition:
    """One-shot eased flight between two poses."""

    def __init__(self, start: CameraPose, end: Optional[CameraPose], duration: float):
        self.start = start.copy()
        self.end = end.copy() if end is not None else None
        self.duration = float(duration)
        self.elapsed = 0.0

    @property
    def progress(self) -> float:
        return min(self.elapsed / self.duration, 1.0)

    @property
    def done(self) -> bool:
        return self.elapsed >= self.duration

    def sample(self, elapsed: float, end: Optional[CameraPose] = None) -> CameraPose:
        """
        Pose at `elapsed` seconds. `end` overrides the stored end pose
        (used when the destination moves, e.g. the ground anchor).
        """
        end = end if end is not None else self.end
        if end is None:
            raise ValueError("transition has no end pose")

        progress = min(max(elapsed, 0.0) / self.duration, 1.0)
        if progress >= 1.0:
            return end.copy()
        if progress <= 0.0:
            return self.start.copy()

        e = ease_out_cubic(progress)
        return CameraPose(
            position=lerp(self.start.position, end.position, e),
            look_target=lerp(self.start.look_target, end.look_target, e),
            up=rotate_toward(self.start.up, end.up, e),
        )

    def step(self, dt: float, end: Optional[CameraPose] = None) -> CameraPose:
        self.elapsed += max(0.0, dt)
        return self.sample(self.elapsed, end)


class CameraRig:
    """
    Owner of the render camera pose.

    Parameters
    ----------
    config         : CameraConfig (height, look distance, presets, duration)
    axial_tilt_rad : planet axial tilt, fixes the world spin axis
    initial_mode   : view mode at start (no transition is played for it)
    """

    def __init__(self, config: CameraConfig, axial_tilt_rad: float,
                 initial_mode: ViewMode = ViewMode.GROUND):
        self.config = config
        self._axis = spin_axis(axial_tilt_rad)
        self._mode = initial_mode
        self._transition: Optional[CameraTransition] = None

        self._pose: Optional[CameraPose] = None
        if initial_mode is not ViewMode.GROUND:
            self._pose = preset_pose(config.preset_for(initial_mode))
        self._last_ground_pose: Optional[CameraPose] = None

        # Incremental anchor state
        self._anchor_geo: Optional[GeoCoordinate] = None
        self._prev_center: Optional[np.ndarray] = None
        self._prev_spin = 0.0

    # ── Properties ───────────────────────────────────────────────────────────

    @property
    def current_pose(self) -> Optional[CameraPose]:
        return self._pose

    @property
    def mode(self) -> ViewMode:
        return self._mode

    @property
    def transition(self) -> Optional[CameraTransition]:
        return self._transition

    @property
    def in_transition(self) -> bool:
        return self._transition is not None

    # ── Mode switching ───────────────────────────────────────────────────────

    def start_pose_for(self, previous: Optional[ViewMode]) -> CameraPose:
        """Where a transition starts when leaving `previous`."""
        if previous is ViewMode.GROUND:
            if self._last_ground_pose is not None:
                return self._last_ground_pose.copy()
        elif previous is not None:
            return preset_pose(self.config.preset_for(previous))
        if self._pose is not None:
            return self._pose.copy()
        return preset_pose(self.config.system_preset)

    def on_view_change(self, current: ViewMode, previous: Optional[ViewMode]):
        """ViewStateMachine listener. Replaces any running transition."""
        start = self.start_pose_for(previous)
        end = None
        if current is not ViewMode.GROUND:
            end = preset_pose(self.config.preset_for(current))

        if current is ViewMode.GROUND:
            self._last_ground_pose = None
        self._mode = current
        self._transition = CameraTransition(start, end, self.config.transition_duration_s)
        self._reset_anchor()
        logger.debug("Camera transition %s -> %s started",
                     previous.value if previous else None, current.value)

    # ── Frame update ─────────────────────────────────────────────────────────

    def update(self, dt: float,
               planet: Optional[PlanetState],
               frame: Optional[ObserverFrame],
               geo: Optional[GeoCoordinate]) -> Optional[CameraPose]:
        """
        Advance the camera by dt real seconds using this tick's planet state
        and observer frame. Skips (returns the unchanged pose) until both are
        available.
        """
        if planet is None or frame is None or geo is None:
            logger.debug("Camera update skipped: planet state not ready")
            return self._pose

        if self._mode is ViewMode.GROUND:
            self._pose = self._update_ground(dt, planet, frame, geo)
        elif self._transition is not None:
            self._pose = self._transition.step(dt)
            if self._transition.done:
                self._transition = None
        elif self._pose is None:
            self._pose = preset_pose(self.config.preset_for(self._mode))
        return self._pose

    def _update_ground(self, dt: float, planet: PlanetState,
                       frame: ObserverFrame, geo: GeoCoordinate) -> CameraPose:
        # The last ground pose is always an anchored one, never the in-flight pose
        if self._transition is not None:
            target = anchored_pose(frame, self.config.height, self.config.look_distance)
            self._last_ground_pose = target
            pose = self._transition.step(dt, end=target)
            if not self._transition.done:
                return pose
            self._transition = None
            self._seed_anchor(planet, geo)
            return target
        pose = self._anchor_step(planet, frame, geo)
        self._last_ground_pose = pose
        return pose

    # ── Anchoring ────────────────────────────────────────────────────────────

    def _reset_anchor(self):
        self._anchor_geo = None
        self._prev_center = None

    def _seed_anchor(self, planet: PlanetState, geo: GeoCoordinate):
        self._anchor_geo = geo
        self._prev_center = planet.world_position.copy()
        self._prev_spin = planet.spin_angle

    def _anchor_step(self, planet: PlanetState, frame: ObserverFrame,
                     geo: GeoCoordinate) -> CameraPose:
        if (self._prev_center is None or self._pose is None
                or geo != self._anchor_geo):
            pose = anchored_pose(frame, self.config.height, self.config.look_distance)
            self._seed_anchor(planet, geo)
            return pose

        delta = ang_diff_rad(planet.spin_angle, self._prev_spin)
        rot = axis_rotation(self._axis, delta)
        prev, center = self._pose, planet.world_position
        rel = rot.apply(np.vstack((prev.position - self._prev_center,
                                   prev.look_target - self._prev_center)))
        pose = CameraPose(
            position=center + rel[0],
            look_target=center + rel[1],
            up=normalize(rot.apply(prev.up), fallback=frame.up),
        )
        self._prev_center = center.copy()
        self._prev_spin = planet.spin_angle
        return pose
