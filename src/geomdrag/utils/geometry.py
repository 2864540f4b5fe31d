"""Geometry helpers used by the shape collection and the drag handler."""

import math
from typing import Tuple

import numpy as np

Coords = np.ndarray  # float64, shape (n, 2)


def rotate_point(
    x: float, y: float, cx: float, cy: float, angle_deg: float
) -> Tuple[float, float]:
    """Rotate a point around ``(cx, cy)`` by ``angle_deg`` degrees."""
    theta = math.radians(angle_deg)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    x0 = x - cx
    y0 = y - cy
    xr = x0 * cos_t - y0 * sin_t + cx
    yr = x0 * sin_t + y0 * cos_t + cy
    return xr, yr


def rotate_coords(
    coords: Coords, angle_deg: float, pivot: Tuple[float, float]
) -> Coords:
    """Rotate every row of ``coords`` around ``pivot`` by ``angle_deg`` degrees.

    Uses the same matrix as :func:`rotate_point`, applied to the whole array.
    """
    theta = math.radians(angle_deg)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    rot = np.array([[cos_t, sin_t], [-sin_t, cos_t]], dtype=np.float64)
    origin = np.asarray(pivot, dtype=np.float64)
    return (coords - origin) @ rot + origin


def scale_coords(coords: Coords, factor: float, pivot: Tuple[float, float]) -> Coords:
    """Scale the distance of every row of ``coords`` from ``pivot`` by ``factor``."""
    origin = np.asarray(pivot, dtype=np.float64)
    return (coords - origin) * float(factor) + origin


def coords_bounds(coords: Coords) -> Tuple[float, float, float, float]:
    """Return ``(left, bottom, right, top)`` of a non-empty coordinate array."""
    mins = coords.min(axis=0)
    maxs = coords.max(axis=0)
    return float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1])


def angle_deg(x: float, y: float, cx: float, cy: float) -> float:
    """Angle of ``(x, y)`` seen from ``(cx, cy)``, in degrees from the +x axis."""
    return math.degrees(math.atan2(y - cy, x - cx))


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` to the inclusive range ``[lo, hi]``."""
    return max(lo, min(hi, value))


__all__ = [
    "Coords",
    "rotate_point",
    "rotate_coords",
    "scale_coords",
    "coords_bounds",
    "angle_deg",
    "clamp",
]
