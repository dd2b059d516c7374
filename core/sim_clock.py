"""
SimClock — simulated day-of-year / hour-of-day driven by real frame time.

The clock is advanced once per frame with the real elapsed seconds. The
amount of simulated time added is

    hours = dt_wall * speed_multiplier * SIM_HOURS_PER_REAL_SECOND

so a multiplier of 1 is real time, 60 is one simulated minute per second.
Hours roll over into days, days wrap after 365.

Speed presets (same steps as the time control panel):
    SPEED_PRESETS = [1, 60, 3600, 86400]
    (real time, 1min/s, 1h/s, 1d/s)

Controls:
    clk.speed_multiplier = x   — clamped to [min, ceiling]
    clk.speed_up()             — next preset above the current speed
    clk.speed_down()           — previous preset (pause below the first)
    clk.toggle_pause()
    clk.engage_ground_ceiling() / clk.release_ground_ceiling()
    clk.advance(dt_wall_seconds) — called every frame
"""

from __future__ import annotations
import math
from typing import Optional

from core.config import (DAYS_PER_YEAR, HOURS_PER_DAY, SIM_HOURS_PER_REAL_SECOND,
                         SpeedConfig)
from core.coords import clamp, wrap


SPEED_PRESETS = [1.0, 60.0, 3600.0, 86400.0]
SPEED_LABELS  = ["1×", "1min/s", "1h/s", "1d/s"]

_MONTHS = ["January", "February", "March", "April", "May", "June",
           "July", "August", "September", "October", "November", "December"]
_DAYS_IN_MONTH = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


class SimClock:
    """
    Simulated calendar clock with pause and an adjustable speed multiplier.

    Parameters
    ----------
    speed       : SpeedConfig with the multiplier bounds
    day_of_year : starting day, wrapped into [0, 365)
    hour_of_day : starting hour, wrapped into [0, 24)
    paused      : start paused
    """

    def __init__(self,
                 speed: Optional[SpeedConfig] = None,
                 day_of_year: float = 0.0,
                 hour_of_day: float = 12.0,
                 paused: bool = False):
        self._cfg    = speed if speed is not None else SpeedConfig()
        self._day    = 0.0
        self._hour   = 0.0
        self._ground = False
        self._paused = bool(paused)
        self._speed  = self._cfg.min_multiplier
        self.set_day_of_year(day_of_year)
        self.set_hour_of_day(hour_of_day)
        self.speed_multiplier = self._cfg.default_multiplier

    # ── Properties ───────────────────────────────────────────────────────────

    @property
    def day_of_year(self) -> float:
        return self._day

    @property
    def hour_of_day(self) -> float:
        return self._hour

    @property
    def paused(self) -> bool:
        return self._paused

    @paused.setter
    def paused(self, value: bool):
        self._paused = bool(value)

    @property
    def ceiling(self) -> float:
        """Effective maximum multiplier (lower while on the ground)."""
        if self._ground:
            return self._cfg.ground_max_multiplier
        return self._cfg.max_multiplier

    @property
    def speed_multiplier(self) -> float:
        return self._speed

    @speed_multiplier.setter
    def speed_multiplier(self, value: float):
        value = float(value)
        if math.isnan(value):
            value = self._cfg.min_multiplier
        self._speed = clamp(value, self._cfg.min_multiplier, self.ceiling)

    @property
    def speed_label(self) -> str:
        if self._paused:
            return "PAUSED"
        for preset, label in zip(SPEED_PRESETS, SPEED_LABELS):
            if self._speed == preset:
                return label
        return f"{self._speed:g}×"

    # ── Controls ─────────────────────────────────────────────────────────────

    def set_day_of_year(self, day: float):
        self._day = wrap(float(day), DAYS_PER_YEAR)

    def set_hour_of_day(self, hour: float):
        self._hour = wrap(float(hour), HOURS_PER_DAY)

    def toggle_pause(self):
        self._paused = not self._paused

    def engage_ground_ceiling(self):
        self._ground = True
        self.speed_multiplier = self._speed

    def release_ground_ceiling(self):
        self._ground = False

    def apply_preset(self, idx: int):
        idx = max(0, min(idx, len(SPEED_PRESETS) - 1))
        self.speed_multiplier = SPEED_PRESETS[idx]

    def speed_up(self):
        """Next preset above the current speed (or resume if paused)."""
        if self._paused:
            self._paused = False
            return
        for preset in SPEED_PRESETS:
            if preset > self._speed:
                self.speed_multiplier = preset
                return

    def speed_down(self):
        """Previous preset below the current speed; pauses below the first."""
        for preset in reversed(SPEED_PRESETS):
            if preset < self._speed:
                self.speed_multiplier = preset
                return
        self._paused = True

    # ── Frame update ─────────────────────────────────────────────────────────

    def advance(self, dt_wall: float) -> None:
        """
        Advance by dt_wall real seconds (typically 1/60).
        Negative or non-finite deltas are treated as zero.
        """
        if self._paused:
            return
        if not dt_wall > 0.0 or not math.isfinite(dt_wall):
            return
        hours = self._hour + dt_wall * self._speed * SIM_HOURS_PER_REAL_SECOND
        days, hours = divmod(hours, HOURS_PER_DAY)
        self._hour = wrap(hours, HOURS_PER_DAY)
        self._day  = wrap(self._day + days, DAYS_PER_YEAR)

    # ── Display ──────────────────────────────────────────────────────────────

    def calendar_label(self) -> str:
        """Day of year as "Month D" on a non-leap calendar."""
        remaining = int(self._day)
        for name, length in zip(_MONTHS, _DAYS_IN_MONTH):
            if remaining < length:
                return f"{name} {remaining + 1}"
            remaining -= length
        return "December 31"

    def clock_label(self) -> str:
        h = int(self._hour)
        m = int((self._hour - h) * 60.0)
        return f"{h:02d}:{m:02d}"
