"""Tests for the shape collection capability set and WKT conversion."""

from __future__ import annotations

import numpy as np
from numpy.testing import assert_allclose
import pytest

from geomdrag.models import Bounds, Point
from geomdrag.shapes import ShapeCollection, SubShape, from_wkt, to_wkt


def _sample() -> ShapeCollection:
    return ShapeCollection(
        [
            SubShape.polygon([(0.0, 0.0), (4.0, 0.0), (4.0, 2.0), (0.0, 2.0)]),
            SubShape.linestring([(4.0, 1.0), (6.0, 1.0)]),
            SubShape.point(7.0, 1.0),
        ]
    )


def test_polygon_rings_are_closed() -> None:
    poly = SubShape.polygon([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)])
    ring = poly.rings[0]
    assert ring.shape == (4, 2)
    assert np.array_equal(ring[0], ring[-1])


@pytest.mark.parametrize(
    ("kind", "rings"),
    (
        ("circle", [[(0.0, 0.0)]]),
        ("point", [[(0.0, 0.0), (1.0, 1.0)]]),
        ("linestring", [[(0.0, 0.0)]]),
        ("polygon", [[(0.0, 0.0), (1.0, 0.0), (0.0, 0.0)]]),
        ("linestring", [[(0.0, 0.0, 1.0), (1.0, 1.0, 1.0)]]),
        ("linestring", [[(0.0, 0.0), (float("nan"), 1.0)]]),
        ("polygon", []),
    ),
)
def test_malformed_sub_shapes_are_rejected(kind, rings) -> None:
    with pytest.raises(ValueError):
        SubShape(kind, rings)


def test_bounds_follow_mutations() -> None:
    shape = _sample()
    assert shape.bounds() == Bounds(0.0, 0.0, 7.0, 2.0)
    assert shape.width() == 7.0

    shape.move(10.0, -5.0)
    assert shape.bounds() == Bounds(10.0, -5.0, 17.0, -3.0)

    shape.resize(2.0, Point(10.0, -5.0))
    assert shape.bounds() == Bounds(10.0, -5.0, 24.0, -1.0)


def test_rotate_quarter_turn_about_pivot() -> None:
    shape = ShapeCollection([SubShape.linestring([(1.0, 0.0), (3.0, 0.0)])])
    shape.rotate(90.0, Point(1.0, 0.0))
    assert_allclose(shape.coords(), [[1.0, 0.0], [1.0, 2.0]], atol=1e-12)


def test_clone_is_independent() -> None:
    shape = _sample()
    copy = shape.clone()
    copy.move(1.0, 1.0)
    copy.rotate(33.0, Point(0.0, 0.0))
    assert shape.bounds() == Bounds(0.0, 0.0, 7.0, 2.0)
    assert not copy.almost_equals(shape)
    assert shape.clone().almost_equals(shape)


def test_empty_collection_has_no_bounds() -> None:
    with pytest.raises(ValueError):
        ShapeCollection().bounds()


def test_from_wkt_flattens_nested_collections() -> None:
    shape = from_wkt(
        "GEOMETRYCOLLECTION("
        "MULTIPOINT((0 0), (1 1)),"
        "LINESTRING(0 0, 2 2),"
        "POLYGON((0 0, 4 0, 4 4, 0 4, 0 0), (1 1, 2 1, 2 2, 1 1)))"
    )
    assert [p.kind for p in shape] == ["point", "point", "linestring", "polygon"]
    assert len(list(shape)[-1].rings) == 2
    assert shape.bounds() == Bounds(0.0, 0.0, 4.0, 4.0)


def test_wkt_output_parses_back_to_the_same_shape() -> None:
    shape = _sample()
    shape.rotate(30.0, Point(2.0, 1.0))
    again = from_wkt(to_wkt(shape, rounding_precision=12))
    assert again.almost_equals(shape, atol=1e-9)


@pytest.mark.parametrize("text", ["POINT EMPTY", "NOT WKT AT ALL", "POLYGON((0 0, 1"])
def test_from_wkt_rejects_bad_input(text: str) -> None:
    with pytest.raises(ValueError):
        from_wkt(text)
