"""Tests for camera transitions and ground anchoring."""

import math

import numpy as np
import pytest

from core.config import CameraConfig, OrbitParameters, SceneConfig, SpeedConfig
from core.types import CameraPose, GeoCoordinate, ViewMode
from game.camera_rig import (CameraRig, CameraTransition, anchored_pose, ease_out_cubic,
                             preset_pose, rotate_toward)
from game.simulation import Simulation

TILT = math.radians(23.5)


def pose(position, target, up=(0.0, 1.0, 0.0)):
    return CameraPose(np.array(position, dtype=float), np.array(target, dtype=float),
                      np.array(up, dtype=float))


def assert_pose_equal(a: CameraPose, b: CameraPose):
    np.testing.assert_array_equal(a.position, b.position)
    np.testing.assert_array_equal(a.look_target, b.look_target)
    np.testing.assert_array_equal(a.up, b.up)


def assert_pose_close(a: CameraPose, b: CameraPose, atol=1e-9):
    np.testing.assert_allclose(a.position, b.position, atol=atol)
    np.testing.assert_allclose(a.look_target, b.look_target, atol=atol)
    np.testing.assert_allclose(a.up, b.up, atol=atol)


def angle_between(u, v) -> float:
    c = np.dot(u, v) / (np.linalg.norm(u) * np.linalg.norm(v))
    return math.acos(float(np.clip(c, -1.0, 1.0)))


A = pose((0.0, 20.0, 20.0), (0.0, 0.0, 0.0))
B = pose((-25.0, 60.0, 80.0), (-25.0, 0.0, 0.0), (0.0, 0.0, -1.0))


# ── Easing / transition ──────────────────────────────────────────────────────

def test_ease_out_cubic():
    assert ease_out_cubic(0.0) == 0.0
    assert ease_out_cubic(1.0) == 1.0
    assert ease_out_cubic(2.0) == 1.0
    values = [ease_out_cubic(t) for t in np.linspace(0.0, 1.0, 50)]
    assert all(b > a for a, b in zip(values, values[1:]))


def test_transition_endpoints_are_exact():
    t = CameraTransition(A, B, 2.0)
    assert_pose_equal(t.sample(0.0), A)
    assert_pose_equal(t.sample(2.0), B)
    assert_pose_equal(t.sample(7.0), B)


def test_transition_approaches_end_without_overshoot():
    t = CameraTransition(A, B, 2.0)
    gaps = [np.linalg.norm(t.sample(s).position - B.position)
            for s in np.linspace(0.0, 2.0, 41)]
    assert all(b < a for a, b in zip(gaps, gaps[1:]))
    span = np.linalg.norm(B.position - A.position)
    assert all(g <= span + 1e-9 for g in gaps)


def test_transition_look_target_approaches_end_without_overshoot():
    t = CameraTransition(A, B, 2.0)
    gaps = [np.linalg.norm(t.sample(s).look_target - B.look_target)
            for s in np.linspace(0.0, 2.0, 41)]
    assert all(b < a for a, b in zip(gaps, gaps[1:]))
    span = np.linalg.norm(B.look_target - A.look_target)
    assert all(g <= span + 1e-9 for g in gaps)


@pytest.mark.parametrize("b", [(0.0, 0.0, -1.0), (0.0, -1.0, 0.0), (0.3, -0.95, 0.1)])
def test_rotate_toward_turns_evenly(b):
    a = np.array([0.0, 1.0, 0.0])
    b = np.array(b) / np.linalg.norm(b)
    total = angle_between(a, b)
    prev = a
    for t in np.linspace(0.1, 1.0, 10):
        v = rotate_toward(a, b, t)
        assert np.linalg.norm(v) == pytest.approx(1.0)
        assert angle_between(a, v) == pytest.approx(total * t, abs=1e-6)
        assert angle_between(prev, v) == pytest.approx(total * 0.1, abs=1e-6)
        prev = v
    np.testing.assert_allclose(rotate_toward(a, b, 1.0), b, atol=1e-9)


def test_transition_up_stays_unit():
    t = CameraTransition(A, B, 2.0)
    for s in np.linspace(0.0, 2.0, 11):
        assert np.linalg.norm(t.sample(s).up) == pytest.approx(1.0)


def test_transition_is_deterministic():
    steps = [0.016, 0.3, 0.5, 0.016, 2.0]
    a = CameraTransition(A, B, 1.5)
    b = CameraTransition(A, B, 1.5)
    for dt in steps:
        assert_pose_equal(a.step(dt), b.step(dt))
    assert a.done and a.progress == 1.0


def test_transition_ignores_negative_steps():
    t = CameraTransition(A, B, 2.0)
    t.step(-1.0)
    assert t.elapsed == 0.0


def test_transition_needs_an_end_pose():
    t = CameraTransition(A, None, 2.0)
    with pytest.raises(ValueError):
        t.sample(1.0)
    assert_pose_equal(t.sample(2.0, end=B), B)


def test_transition_does_not_alias_inputs():
    start = A.copy()
    t = CameraTransition(start, B, 2.0)
    start.position[0] = 999.0
    assert t.sample(0.0).position[0] == 0.0


# ── Rig ──────────────────────────────────────────────────────────────────────

def test_rig_skips_until_planet_state_is_ready():
    ground = CameraRig(CameraConfig(), TILT, initial_mode=ViewMode.GROUND)
    assert ground.update(0.1, None, None, None) is None

    system = CameraRig(CameraConfig(), TILT, initial_mode=ViewMode.SYSTEM)
    before = system.current_pose
    assert system.update(0.1, None, None, None) is before
    assert_pose_equal(before, preset_pose(CameraConfig().system_preset))


@pytest.fixture
def system_sim():
    return Simulation(SceneConfig(initial_mode=ViewMode.SYSTEM, start_paused=True))


def test_system_to_galactic_lands_on_preset(system_sim):
    sim = system_sim
    sim.tick(0.0)
    sim.request_view_mode(ViewMode.GALACTIC)
    for _ in range(4):
        sim.tick(0.5)
    assert not sim.rig.in_transition
    assert_pose_equal(sim.camera_pose, preset_pose(sim.config.camera.galactic_preset))


def test_new_request_replaces_running_transition(system_sim):
    sim = system_sim
    sim.tick(0.0)
    sim.request_view_mode(ViewMode.GALACTIC)
    sim.tick(1.0)
    sim.request_view_mode(ViewMode.SYSTEM)

    transition = sim.rig.transition
    assert transition.elapsed == 0.0
    assert_pose_equal(transition.start, preset_pose(sim.config.camera.galactic_preset))
    assert_pose_equal(transition.end, preset_pose(sim.config.camera.system_preset))

    for _ in range(3):
        sim.tick(1.0)
    assert_pose_equal(sim.camera_pose, preset_pose(sim.config.camera.system_preset))


def test_entering_ground_lands_on_anchored_pose(system_sim):
    sim = system_sim
    cam = sim.config.camera
    sim.tick(0.0)
    sim.request_view_mode(ViewMode.GROUND)

    gaps = []
    for _ in range(3):
        sim.tick(0.5)
        target = anchored_pose(sim.observer_frame, cam.height, cam.look_distance)
        gaps.append(np.linalg.norm(sim.camera_pose.position - target.position))
    assert all(b < a for a, b in zip(gaps, gaps[1:]))
    assert sim.rig.in_transition

    sim.tick(0.5)
    assert not sim.rig.in_transition
    target = anchored_pose(sim.observer_frame, cam.height, cam.look_distance)
    assert_pose_close(sim.camera_pose, target, atol=0.0)


def test_leaving_ground_starts_from_last_ground_pose():
    sim = Simulation(SceneConfig())
    for _ in range(5):
        sim.tick(0.1)
    last = sim.camera_pose.copy()
    sim.request_view_mode(ViewMode.GALACTIC)
    assert_pose_equal(sim.rig.transition.start, last)


def test_leaving_ground_mid_flight_starts_at_observer_altitude(system_sim):
    sim = system_sim
    cam = sim.config.camera
    sim.tick(0.0)
    sim.request_view_mode(ViewMode.GROUND)
    sim.tick(0.5)
    assert sim.rig.in_transition
    assert np.linalg.norm(sim.camera_pose.position - sim.observer_frame.world_position) \
        > 10 * cam.height

    sim.request_view_mode(ViewMode.GALACTIC)
    start = sim.rig.transition.start
    assert np.linalg.norm(start.position - sim.observer_frame.world_position) \
        == pytest.approx(cam.height)
    assert_pose_equal(start, anchored_pose(sim.observer_frame, cam.height, cam.look_distance))


@pytest.mark.parametrize("latitude", [-90.0, -75.0, -60.0])
@pytest.mark.parametrize("hour", [0.0, 6.0, 12.0, 18.0])
@pytest.mark.parametrize("tilt", [0.0, 23.5])
def test_ground_entry_turns_camera_up_smoothly(latitude, hour, tilt):
    sim = Simulation(SceneConfig(orbit=OrbitParameters(axial_tilt_deg=tilt),
                                 observer=GeoCoordinate(latitude, 116.4),
                                 initial_mode=ViewMode.SYSTEM,
                                 start_hour_of_day=hour))
    sim.tick(0.0)
    sim.request_view_mode(ViewMode.GROUND)

    prev = sim.camera_pose.up.copy()
    worst = 0.0
    for _ in range(150):
        sim.tick(1.0 / 60.0)
        up = sim.camera_pose.up
        assert np.linalg.norm(up) == pytest.approx(1.0)
        worst = max(worst, angle_between(prev, up))
        prev = up.copy()
    assert not sim.rig.in_transition
    # 60 fps over a 2 s ease-out: at most 3/120 of the total turn per frame
    assert math.degrees(worst) < 6.0


def view_path(sim: Simulation, mode: ViewMode, ticks: int = 9, dt: float = 0.25):
    sim.request_view_mode(mode)
    path = []
    for _ in range(ticks):
        sim.tick(dt)
        p = sim.camera_pose
        path.append(np.concatenate((p.position, p.look_target, p.up)))
    return np.array(path)


def test_reentering_a_mode_reproduces_the_same_path():
    def run():
        sim = Simulation(SceneConfig(initial_mode=ViewMode.SYSTEM, start_paused=True))
        sim.tick(0.0)
        return [view_path(sim, ViewMode.GALACTIC),
                view_path(sim, ViewMode.SYSTEM),
                view_path(sim, ViewMode.GALACTIC)]

    first, second = run(), run()
    for a, b in zip(first, second):
        np.testing.assert_array_equal(a, b)
    np.testing.assert_array_equal(first[0], first[2])
    # each leg lands on its preset
    np.testing.assert_array_equal(first[1][-1], first[1][-2])


def fast_ground_sim(**kwargs):
    speed = SpeedConfig(ground_max_multiplier=3600.0, default_multiplier=3600.0)
    return Simulation(SceneConfig(speed=speed, **kwargs))


def test_ground_camera_keeps_constant_altitude_over_a_day():
    sim = fast_ground_sim()
    cam = sim.config.camera
    radius = sim.config.planet_radius
    assert sim.clock.speed_multiplier == 3600.0

    for _ in range(245):
        sim.tick(0.1)
        frame = sim.observer_frame
        center = sim.planet_state.world_position
        p = sim.camera_pose
        assert np.linalg.norm(p.position - frame.world_position) == pytest.approx(
            cam.height, rel=1e-4)
        assert np.linalg.norm(p.position - center) == pytest.approx(
            radius + cam.height, rel=1e-4)
        assert np.linalg.norm(p.up) == pytest.approx(1.0)


def test_incremental_anchor_matches_direct_placement():
    sim = fast_ground_sim()
    cam = sim.config.camera
    for _ in range(245):
        sim.tick(0.1)
        direct = anchored_pose(sim.observer_frame, cam.height, cam.look_distance)
        assert_pose_close(sim.camera_pose, direct, atol=1e-9)


def test_anchor_survives_calendar_jumps():
    sim = fast_ground_sim()
    cam = sim.config.camera
    sim.tick(0.1)
    sim.set_day_of_year(200.0)
    sim.set_hour_of_day(3.0)
    sim.tick(0.1)
    direct = anchored_pose(sim.observer_frame, cam.height, cam.look_distance)
    assert_pose_close(sim.camera_pose, direct, atol=1e-9)


def test_latitude_change_reseeds_anchor():
    sim = fast_ground_sim()
    cam = sim.config.camera
    for _ in range(10):
        sim.tick(0.1)
    sim.set_latitude(-12.5)
    sim.tick(0.1)
    assert sim.observer == GeoCoordinate(-12.5, 116.4)
    direct = anchored_pose(sim.observer_frame, cam.height, cam.look_distance)
    assert_pose_close(sim.camera_pose, direct, atol=1e-12)
    assert np.linalg.norm(sim.camera_pose.position - sim.observer_frame.world_position) \
        == pytest.approx(cam.height)


def test_ground_camera_looks_south_with_observer_up():
    sim = Simulation(SceneConfig())
    sim.tick(0.1)
    p, frame = sim.camera_pose, sim.observer_frame
    view = p.look_target - frame.world_position
    np.testing.assert_allclose(view / np.linalg.norm(view), frame.south, atol=1e-12)
    np.testing.assert_allclose(p.up, frame.up, atol=1e-12)
