"""Property tests for the coordinate transform helpers."""

from __future__ import annotations

import math

from hypothesis import given, settings
from hypothesis import strategies as st
import numpy as np
from numpy.testing import assert_allclose

from geomdrag.utils.geometry import (
    angle_deg,
    clamp,
    coords_bounds,
    rotate_coords,
    rotate_point,
    scale_coords,
)

coord = st.floats(min_value=-1e3, max_value=1e3, allow_nan=False, allow_infinity=False)
angles = st.floats(min_value=-720.0, max_value=720.0, allow_nan=False)
factors = st.floats(min_value=0.01, max_value=100.0, allow_nan=False)
pivots = st.tuples(coord, coord)
coord_arrays = st.lists(st.tuples(coord, coord), min_size=1, max_size=12).map(
    lambda rows: np.array(rows, dtype=np.float64)
)


@settings(max_examples=200, deadline=None)
@given(coords=coord_arrays, a=angles, b=angles, pivot=pivots)
def test_rotation_composes_additively(coords, a, b, pivot) -> None:
    twice = rotate_coords(rotate_coords(coords, a, pivot), b, pivot)
    once = rotate_coords(coords, a + b, pivot)
    assert_allclose(twice, once, rtol=0.0, atol=1e-6)


@settings(max_examples=200, deadline=None)
@given(coords=coord_arrays, f1=factors, f2=factors, pivot=pivots)
def test_scale_composes_multiplicatively(coords, f1, f2, pivot) -> None:
    twice = scale_coords(scale_coords(coords, f1, pivot), f2, pivot)
    once = scale_coords(coords, f1 * f2, pivot)
    scale = max(1.0, float(np.max(np.abs(coords))), abs(pivot[0]), abs(pivot[1]))
    assert_allclose(twice, once, rtol=0.0, atol=1e-9 * scale * max(1.0, f1 * f2))


@settings(max_examples=100, deadline=None)
@given(pivot=pivots, a=angles, f=factors)
def test_pivot_is_a_fixed_point(pivot, a, f) -> None:
    p = np.array([pivot], dtype=np.float64)
    assert_allclose(rotate_coords(p, a, pivot), p, atol=1e-9)
    assert_allclose(scale_coords(p, f, pivot), p, atol=1e-9)


@settings(max_examples=100, deadline=None)
@given(x=coord, y=coord, pivot=pivots, a=angles)
def test_array_rotation_matches_point_rotation(x, y, pivot, a) -> None:
    expected = rotate_point(x, y, pivot[0], pivot[1], a)
    got = rotate_coords(np.array([[x, y]]), a, pivot)[0]
    assert_allclose(got, expected, atol=1e-6)


@settings(max_examples=100, deadline=None)
@given(coords=coord_arrays, a=angles, pivot=pivots)
def test_rotation_preserves_distance_to_pivot(coords, a, pivot) -> None:
    origin = np.asarray(pivot)
    before = np.hypot(*(coords - origin).T)
    after = np.hypot(*(rotate_coords(coords, a, pivot) - origin).T)
    assert_allclose(after, before, atol=1e-6)


def test_positive_angle_turns_x_axis_toward_y_axis() -> None:
    got = rotate_coords(np.array([[1.0, 0.0]]), 90.0, (0.0, 0.0))
    assert_allclose(got, [[0.0, 1.0]], atol=1e-12)


def test_scale_is_uniform_about_pivot() -> None:
    coords = np.array([[3.0, 1.0], [1.0, 4.0]])
    got = scale_coords(coords, 2.0, (1.0, 1.0))
    assert_allclose(got, [[5.0, 1.0], [1.0, 7.0]])


def test_coords_bounds_orders_left_bottom_right_top() -> None:
    coords = np.array([[2.0, -1.0], [-3.0, 4.0], [0.5, 0.5]])
    assert coords_bounds(coords) == (-3.0, -1.0, 2.0, 4.0)


def test_angle_deg_quadrants() -> None:
    assert angle_deg(1.0, 0.0, 0.0, 0.0) == 0.0
    assert math.isclose(angle_deg(0.0, 5.0, 0.0, 0.0), 90.0)
    assert math.isclose(angle_deg(-1.0, 0.0, 0.0, 0.0), 180.0)
    assert math.isclose(angle_deg(2.0, -1.0, 2.0, 1.0), -90.0)


def test_clamp() -> None:
    assert clamp(5.0, 0.0, 1.0) == 1.0
    assert clamp(-5.0, 0.0, 1.0) == 0.0
    assert clamp(0.25, 0.0, 1.0) == 0.25
