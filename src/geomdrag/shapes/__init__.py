"""Shape collections and their WKT conversions."""

from .collection import KINDS, ShapeCollection, SubShape
from .wkt import from_shapely, from_wkt, to_shapely, to_wkt

__all__ = [
    "KINDS",
    "ShapeCollection",
    "SubShape",
    "from_shapely",
    "from_wkt",
    "to_shapely",
    "to_wkt",
]
