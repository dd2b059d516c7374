"""
DayPhase — daylight state seen by the ground observer.

The star's altitude is measured in the observer's local frame (up / south /
east from the SurfaceFrame), so it follows the spin, the tilt and the orbit
without any separate ephemeris.

Each phase defines:
  - a sky background base colour for the viewer
  - a label and HUD colour
"""
from __future__ import annotations
import math
from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from core.coords import normalize, wrap_deg
from core.types import ObserverFrame
from universe.spin import STAR_POSITION


class DayPhase(Enum):
    """
    Phases of the day in increasing solar altitude.
    Boundaries are the star's altitude in degrees.
    """
    NIGHT                 = "night"              # Sun < -18°
    ASTRONOMICAL_TWILIGHT = "astro_twilight"     # -18° < Sun < -12°
    NAUTICAL_TWILIGHT     = "nautical_twilight"  # -12° < Sun < -6°
    CIVIL_TWILIGHT        = "civil_twilight"     # -6°  < Sun < -0.833°
    SUNRISE_SUNSET        = "sunrise_sunset"     # -0.833° < Sun < 0°
    GOLDEN_HOUR           = "golden_hour"        # 0°  < Sun < 6°
    DAY                   = "day"                # Sun > 6°

    @classmethod
    def from_solar_altitude(cls, alt_deg: float) -> 'DayPhase':
        if   alt_deg < -18.0:    return cls.NIGHT
        elif alt_deg < -12.0:    return cls.ASTRONOMICAL_TWILIGHT
        elif alt_deg <  -6.0:    return cls.NAUTICAL_TWILIGHT
        elif alt_deg <  -0.833:  return cls.CIVIL_TWILIGHT
        elif alt_deg <   0.0:    return cls.SUNRISE_SUNSET
        elif alt_deg <   6.0:    return cls.GOLDEN_HOUR
        else:                    return cls.DAY


@dataclass(frozen=True)
class PhaseProperties:
    # Sky background RGB (0-1)
    sky_color_rgb: Tuple[float, float, float]
    label:         str
    # HUD colour (R,G,B 0-255)
    ui_color:      Tuple[int, int, int]


PHASE_PROPERTIES: dict[DayPhase, PhaseProperties] = {
    DayPhase.NIGHT:                 PhaseProperties((0.005, 0.010, 0.025), "Night",             (0, 40, 80)),
    DayPhase.ASTRONOMICAL_TWILIGHT: PhaseProperties((0.012, 0.025, 0.080), "Astro Twilight",    (0, 60, 140)),
    DayPhase.NAUTICAL_TWILIGHT:     PhaseProperties((0.050, 0.080, 0.200), "Nautical Twilight", (20, 80, 200)),
    DayPhase.CIVIL_TWILIGHT:        PhaseProperties((0.180, 0.220, 0.480), "Civil Twilight",    (60, 120, 220)),
    DayPhase.SUNRISE_SUNSET:        PhaseProperties((0.600, 0.350, 0.120), "Sunrise / Sunset",  (220, 140, 40)),
    DayPhase.GOLDEN_HOUR:           PhaseProperties((0.850, 0.520, 0.100), "Golden Hour",       (240, 180, 60)),
    DayPhase.DAY:                   PhaseProperties((0.400, 0.600, 0.980), "Day",               (100, 180, 255)),
}


def get_phase_properties(phase: DayPhase) -> PhaseProperties:
    return PHASE_PROPERTIES[phase]


def star_horizontal(frame: ObserverFrame,
                    star_position: Optional[np.ndarray] = None) -> Tuple[float, float]:
    """
    Return (alt_deg, az_deg) of the star for the observer.
    Azimuth measured from North towards East (0..360).
    """
    if star_position is None:
        star_position = STAR_POSITION
    d = normalize(np.asarray(star_position, dtype=float) - frame.world_position)
    sin_alt = float(np.dot(d, frame.up))
    alt = math.degrees(math.asin(max(-1.0, min(1.0, sin_alt))))
    north = -frame.south
    az = math.degrees(math.atan2(float(np.dot(d, frame.east)), float(np.dot(d, north))))
    return alt, wrap_deg(az)


def day_phase(frame: ObserverFrame) -> DayPhase:
    alt, _ = star_horizontal(frame)
    return DayPhase.from_solar_altitude(alt)
