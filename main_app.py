"""
Three-Scale Sky - Viewer Application

Schematic pygame viewer for the kinematics engine:
- Scene drawn from the engine's camera pose (star, planet, orbit, observer)
- Top-down orbit inset
- HUD with date, time, speed, view mode and daylight phase

Keys:
  1 / 2 / 3        ground / system / galactic view
  SPACE            pause
  + / -            speed preset up / down
  UP / DOWN        observer latitude ±1°
  LEFT / RIGHT     hour ∓1 / ±1
  PGUP / PGDN      day ±1
  F11              fullscreen
  ESC              quit
"""

import logging
import sys

import numpy as np
import pygame

from atmosphere import day_phase, get_phase_properties, star_horizontal
from core.config import GALACTIC_CENTER_DISTANCE, SceneConfig
from core.types import ViewMode
from game.simulation import Simulation
from rendering.camera_view import CameraView
from universe.orbit import orbit_path
from universe.spin import STAR_POSITION
from universe.surface import spin_axis

# Window settings
WIDTH, HEIGHT = 1280, 800
FPS = 60
TITLE = "Three-Scale Sky - Kinematics Viewer"

BG_DARK     = (0, 12, 10)
FG_PRIMARY  = (0, 255, 120)
FG_DIM      = (0, 180, 80)
STAR_COLOR  = (255, 60, 40)
PLANET_BLUE = (40, 70, 255)
MARKER_RED  = (255, 60, 60)
ORBIT_GREY  = (90, 90, 90)
GALAXY_PURPLE = (153, 0, 255)
GRID_GREEN  = (0, 90, 40)

# Ground grid around the observer (world units)
GRID_LINES = 5
GRID_STEP  = 0.1

INSET = 220   # top-down orbit inset size (px)

_MODE_KEYS = {
    pygame.K_1: ViewMode.GROUND,
    pygame.K_2: ViewMode.SYSTEM,
    pygame.K_3: ViewMode.GALACTIC,
}


class SkyViewer:
    """
    Main viewer application

    Runs the frame loop: input → Simulation.tick → draw.
    """

    def __init__(self, config: SceneConfig = None):
        pygame.init()

        self.fullscreen = False
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Courier", 16)

        self.sim = Simulation(config or SceneConfig.default())
        self.view = CameraView(WIDTH, HEIGHT, fov_deg=60.0)
        self.orbit_points = orbit_path(self.sim.config.orbit)

        self.running = True
        print(f"\n{TITLE}")
        print("=" * 60)
        print("Initialized successfully!")
        print("=" * 60)

    # ── Input ────────────────────────────────────────────────────────────────

    def handle_key(self, key: int):
        sim = self.sim
        clk = sim.clock
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key in _MODE_KEYS:
            sim.request_view_mode(_MODE_KEYS[key])
        elif key == pygame.K_SPACE:
            clk.toggle_pause()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            clk.speed_up()
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            clk.speed_down()
        elif key == pygame.K_UP:
            sim.set_latitude(sim.observer.latitude_deg + 1.0)
        elif key == pygame.K_DOWN:
            sim.set_latitude(sim.observer.latitude_deg - 1.0)
        elif key == pygame.K_RIGHT:
            sim.set_hour_of_day(clk.hour_of_day + 1.0)
        elif key == pygame.K_LEFT:
            sim.set_hour_of_day(clk.hour_of_day - 1.0)
        elif key == pygame.K_PAGEUP:
            sim.set_day_of_year(clk.day_of_year + 1.0)
        elif key == pygame.K_PAGEDOWN:
            sim.set_day_of_year(clk.day_of_year - 1.0)
        elif key == pygame.K_F11:
            self.toggle_fullscreen()

    # ── Drawing ──────────────────────────────────────────────────────────────

    def _dot(self, point, radius: float, color):
        p = self.view.project(point)
        if p is None:
            return
        x, y, depth = p
        r = max(1, int(self.view.projected_radius(radius, depth)))
        if -r <= x <= self.view.width + r and -r <= y <= self.view.height + r:
            pygame.draw.circle(self.screen, color, (int(x), int(y)), min(r, 4000))

    def _polyline(self, points, color):
        pts = []
        for p in points:
            proj = self.view.project(p)
            if proj is None:
                if len(pts) > 1:
                    pygame.draw.lines(self.screen, color, False, pts, 1)
                pts = []
                continue
            pts.append((proj[0], proj[1]))
        if len(pts) > 1:
            pygame.draw.lines(self.screen, color, False, pts, 1)

    def draw_scene(self):
        sim = self.sim
        pose = sim.camera_pose
        planet = sim.planet_state
        frame = sim.observer_frame
        if pose is None or planet is None or frame is None:
            return

        if sim.view_mode is ViewMode.GROUND:
            props = get_phase_properties(day_phase(frame))
            self.screen.fill(tuple(int(c * 255) for c in props.sky_color_rgb))
        else:
            self.screen.fill(BG_DARK)

        self.view.set_pose(pose)
        self._dot(np.array([-GALACTIC_CENTER_DISTANCE, 0.0, 0.0]), 3.0, GALAXY_PURPLE)
        self._polyline(self.orbit_points, ORBIT_GREY)
        self._dot(STAR_POSITION, 2.0, STAR_COLOR)

        radius = sim.config.planet_radius
        self._dot(planet.world_position, radius, PLANET_BLUE)
        axis = spin_axis(sim.config.orbit.axial_tilt_rad)
        self._polyline([planet.world_position - axis * radius * 1.5,
                        planet.world_position + axis * radius * 1.5], FG_DIM)
        self._dot(frame.world_position, 0.05, MARKER_RED)
        if sim.view_mode is ViewMode.GROUND:
            self.draw_ground_grid(frame)

    def draw_ground_grid(self, frame):
        """Square grid in the observer's horizontal plane (east / south axes)."""
        basis = frame.grid_basis()
        east, south = basis[:, 0], basis[:, 2]
        half = GRID_LINES * GRID_STEP
        for i in range(-GRID_LINES, GRID_LINES + 1):
            offset = i * GRID_STEP
            along_s = frame.world_position + east * offset
            along_e = frame.world_position + south * offset
            self._polyline([along_s - south * half, along_s + south * half], GRID_GREEN)
            self._polyline([along_e - east * half, along_e + east * half], GRID_GREEN)

    def draw_inset(self):
        """Top-down (XZ) view of the orbit with the planet marker."""
        sim = self.sim
        w = self.screen.get_width()
        ox, oy = w - INSET - 10, 10
        pygame.draw.rect(self.screen, BG_DARK, (ox, oy, INSET, INSET))
        pygame.draw.rect(self.screen, FG_DIM, (ox, oy, INSET, INSET), 1)

        a = sim.config.orbit.semi_major_axis
        scale = (INSET * 0.45) / (a * 1.1)
        cx, cy = ox + INSET / 2, oy + INSET / 2

        def to_px(p):
            return (cx + p[0] * scale, cy + p[2] * scale)

        pygame.draw.lines(self.screen, ORBIT_GREY, True,
                          [to_px(p) for p in self.orbit_points], 1)
        pygame.draw.circle(self.screen, STAR_COLOR, (int(cx), int(cy)), 4)
        if sim.planet_state is not None:
            px, py = to_px(sim.planet_state.world_position)
            pygame.draw.circle(self.screen, PLANET_BLUE, (int(px), int(py)), 4)

    def draw_hud(self):
        sim = self.sim
        clk = sim.clock
        lines = [
            f"{clk.calendar_label()}  {clk.clock_label()}   day {clk.day_of_year:6.2f}",
            f"Speed: {clk.speed_label}   View: {sim.view_mode.value.upper()}",
            f"Observer: {sim.observer.latitude_deg:+.1f}°, {sim.observer.longitude_deg:+.1f}°",
        ]
        if sim.observer_frame is not None:
            alt, az = star_horizontal(sim.observer_frame)
            props = get_phase_properties(day_phase(sim.observer_frame))
            lines.append(f"Sun alt {alt:+6.1f}°  az {az:5.1f}°  [{props.label}]")
        y = 10
        for text in lines:
            self.screen.blit(self.font.render(text, True, FG_PRIMARY), (10, y))
            y += 20

    # ── Main loop ────────────────────────────────────────────────────────────

    def run(self):
        print("\nStarting main loop...")
        print("Press ESC to quit\n")

        while self.running:
            dt = self.clock.tick(FPS) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event.key)
                elif event.type == pygame.VIDEORESIZE:
                    self.handle_resize(event.w, event.h)

            self.sim.tick(dt)

            self.draw_scene()
            self.draw_inset()
            self.draw_hud()
            pygame.display.flip()

        self.quit()

    def toggle_fullscreen(self):
        """Toggle between fullscreen and windowed mode"""
        self.fullscreen = not self.fullscreen

        if self.fullscreen:
            info = pygame.display.Info()
            width, height = info.current_w, info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width, height = WIDTH, HEIGHT
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.view.resize(width, height)
        print(f"Display: {width}x{height}")

    def handle_resize(self, width: int, height: int):
        """Handle window resize event"""
        if not self.fullscreen:
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
            self.view.resize(width, height)

    def quit(self):
        print("\nShutting down...")
        pygame.quit()
        sys.exit(0)


def main():
    """Entry point"""
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    try:
        viewer = SkyViewer()
        viewer.run()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        pygame.quit()
        sys.exit(0)
    except Exception as e:
        print(f"\n\nFATAL ERROR: {e}")
        import traceback
        traceback.print_exc()
        pygame.quit()
        sys.exit(1)


if __name__ == "__main__":
    main()
