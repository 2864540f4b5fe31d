"""Small numeric and Qt helpers shared across geomdrag."""

from .geometry import (
    angle_deg,
    clamp,
    coords_bounds,
    rotate_coords,
    rotate_point,
    scale_coords,
)

__all__ = [
    "angle_deg",
    "clamp",
    "coords_bounds",
    "rotate_coords",
    "rotate_point",
    "scale_coords",
]
