"""WKT conversion between shapely geometries and :class:`ShapeCollection`."""

from __future__ import annotations

from typing import Iterator

import numpy as np
import shapely
from shapely.geometry import GeometryCollection, LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry

from .collection import ShapeCollection, SubShape


def _xy(geom: BaseGeometry) -> np.ndarray:
    return np.asarray(geom.coords, dtype=np.float64)[:, :2]


def _flatten(geom: BaseGeometry) -> Iterator[SubShape]:
    if geom.is_empty:
        return
    if geom.geom_type == "Point":
        yield SubShape("point", [_xy(geom)])
    elif geom.geom_type in ("LineString", "LinearRing"):
        yield SubShape("linestring", [_xy(geom)])
    elif geom.geom_type == "Polygon":
        rings = [_xy(geom.exterior)] + [_xy(r) for r in geom.interiors]
        yield SubShape("polygon", rings)
    elif hasattr(geom, "geoms"):
        for member in geom.geoms:
            yield from _flatten(member)
    else:  # pragma: no cover - every shapely type is handled above
        raise ValueError(f"Unsupported geometry type {geom.geom_type!r}.")


def from_shapely(geom: BaseGeometry) -> ShapeCollection:
    """Flatten a shapely geometry (including nested collections) into members."""
    return ShapeCollection(_flatten(geom))


def to_shapely(shape: ShapeCollection) -> GeometryCollection:
    members = []
    for part in shape:
        if part.kind == "point":
            members.append(Point(part.rings[0][0]))
        elif part.kind == "linestring":
            members.append(LineString(part.rings[0]))
        else:
            members.append(Polygon(part.rings[0], part.rings[1:]))
    return GeometryCollection(members)


def from_wkt(text: str) -> ShapeCollection:
    """Parse WKT text into a collection; raises ``ValueError`` on bad input."""
    try:
        geom = shapely.from_wkt(text)
    except shapely.errors.GEOSException as exc:
        raise ValueError(f"Could not parse WKT: {exc}") from exc
    shape = from_shapely(geom)
    if len(shape) == 0:
        raise ValueError("WKT describes an empty geometry.")
    return shape


def to_wkt(shape: ShapeCollection, rounding_precision: int = 6) -> str:
    return shapely.to_wkt(to_shapely(shape), rounding_precision=rounding_precision)


__all__ = ["from_shapely", "to_shapely", "from_wkt", "to_wkt"]
