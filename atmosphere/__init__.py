"""
Atmosphere package — daylight state of the ground observer.

Main exports:
    DayPhase         — enum: NIGHT / ASTRO_TWILIGHT / ... / DAY
    star_horizontal  — star altitude/azimuth in the observer's local frame
    day_phase        — DayPhase for an ObserverFrame
"""
from .day_phase import (
    DayPhase,
    PhaseProperties,
    PHASE_PROPERTIES,
    get_phase_properties,
    star_horizontal,
    day_phase,
)

__all__ = [
    "DayPhase",
    "PhaseProperties",
    "PHASE_PROPERTIES",
    "get_phase_properties",
    "star_horizontal",
    "day_phase",
]
