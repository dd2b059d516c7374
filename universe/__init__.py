"""
Universe module — planet kinematics around the fixed star.

Usage:
    from universe import planet_state, observer_frame
    state = planet_state(day, hour, params, reference_longitude_deg)
    frame = observer_frame(geo, state.world_position, state.spin_angle,
                           params.axial_tilt_rad, radius)
"""

from .orbit import (
    mean_anomaly,
    orbit_angle,
    planet_position,
    star_distance,
    orbit_path,
)
from .spin import (
    STAR_POSITION,
    sun_direction_angle,
    spin_angle,
    spin_angle_at,
    planet_state,
)
from .surface import (
    LONGITUDE_AZIMUTH_OFFSET_DEG,
    local_point,
    local_south,
    reference_azimuth,
    body_rotation,
    spin_axis,
    observer_frame,
)

__all__ = [
    "mean_anomaly",
    "orbit_angle",
    "planet_position",
    "star_distance",
    "orbit_path",
    "STAR_POSITION",
    "sun_direction_angle",
    "spin_angle",
    "spin_angle_at",
    "planet_state",
    "LONGITUDE_AZIMUTH_OFFSET_DEG",
    "local_point",
    "local_south",
    "reference_azimuth",
    "body_rotation",
    "spin_axis",
    "observer_frame",
]
