"""Mutable geometry collection dragged around by the handler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from ..models import Bounds, Point
from ..utils.geometry import coords_bounds, rotate_coords, scale_coords

KINDS = ("point", "linestring", "polygon")
_MIN_ROWS = {"point": 1, "linestring": 2, "polygon": 4}


def _as_coords(values: object) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Expected an (n, 2) coordinate array, got shape {arr.shape}.")
    if not np.all(np.isfinite(arr)):
        raise ValueError("Coordinates must be finite.")
    return arr


@dataclass
class SubShape:
    """One member of a collection.

    ``rings`` holds a single array for points and line strings; polygons carry
    the exterior ring first followed by any holes, each ring closed.
    """

    kind: str
    rings: List[np.ndarray]

    def __post_init__(self) -> None:
        if self.kind not in KINDS:
            raise ValueError(f"Unknown sub-shape kind {self.kind!r}.")
        if not self.rings:
            raise ValueError(f"A {self.kind} needs at least one ring.")
        if self.kind != "polygon" and len(self.rings) != 1:
            raise ValueError(f"A {self.kind} takes exactly one coordinate run.")
        self.rings = [_as_coords(r) for r in self.rings]
        need = _MIN_ROWS[self.kind]
        for ring in self.rings:
            if ring.shape[0] < need:
                raise ValueError(
                    f"A {self.kind} needs at least {need} coordinates, "
                    f"got {ring.shape[0]}."
                )
        if self.kind == "point" and self.rings[0].shape[0] != 1:
            raise ValueError("A point holds exactly one coordinate.")

    @classmethod
    def point(cls, x: float, y: float) -> "SubShape":
        return cls("point", [[(x, y)]])

    @classmethod
    def linestring(cls, coords: Sequence[Tuple[float, float]]) -> "SubShape":
        return cls("linestring", [coords])

    @classmethod
    def polygon(
        cls,
        shell: Sequence[Tuple[float, float]],
        holes: Iterable[Sequence[Tuple[float, float]]] = (),
    ) -> "SubShape":
        rings = [_closed(shell)] + [_closed(h) for h in holes]
        return cls("polygon", rings)

    def clone(self) -> "SubShape":
        return SubShape(self.kind, [r.copy() for r in self.rings])

    def coords(self) -> np.ndarray:
        return np.vstack(self.rings)


def _closed(ring: Sequence[Tuple[float, float]]) -> np.ndarray:
    arr = _as_coords(ring)
    if arr.shape[0] and not np.array_equal(arr[0], arr[-1]):
        arr = np.vstack([arr, arr[:1]])
    return arr


class ShapeCollection:
    """Ordered collection of points, line strings and polygons.

    Exposes the capability set the drag handler relies on: :meth:`clone`,
    :meth:`bounds`, :meth:`move`, :meth:`rotate` and :meth:`resize`. All
    transforms mutate in place; bounds are recomputed on every call.
    """

    def __init__(self, parts: Iterable[SubShape] = ()) -> None:
        self._parts: List[SubShape] = list(parts)

    def __len__(self) -> int:
        return len(self._parts)

    def __iter__(self) -> Iterator[SubShape]:
        return iter(self._parts)

    def __repr__(self) -> str:
        kinds = ", ".join(p.kind for p in self._parts)
        return f"ShapeCollection([{kinds}])"

    def add(self, part: SubShape) -> None:
        self._parts.append(part)

    def clone(self) -> "ShapeCollection":
        return ShapeCollection(p.clone() for p in self._parts)

    def coords(self) -> np.ndarray:
        """All coordinates of all members stacked into one ``(n, 2)`` array."""
        if not self._parts:
            return np.empty((0, 2), dtype=np.float64)
        return np.vstack([p.coords() for p in self._parts])

    def bounds(self) -> Bounds:
        coords = self.coords()
        if coords.shape[0] == 0:
            raise ValueError("An empty collection has no bounds.")
        return Bounds(*coords_bounds(coords))

    def width(self) -> float:
        """Horizontal extent of the current bounds."""
        return self.bounds().width

    def move(self, dx: float, dy: float) -> None:
        offset = np.array([dx, dy], dtype=np.float64)
        for part in self._parts:
            part.rings = [r + offset for r in part.rings]

    def rotate(self, angle_deg: float, pivot: Point) -> None:
        """Rotate every coordinate by ``angle_deg`` about ``pivot``."""
        origin = pivot.as_tuple()
        for part in self._parts:
            part.rings = [rotate_coords(r, angle_deg, origin) for r in part.rings]

    def resize(self, factor: float, pivot: Point) -> None:
        """Scale every coordinate's offset from ``pivot`` by ``factor``."""
        origin = pivot.as_tuple()
        for part in self._parts:
            part.rings = [scale_coords(r, factor, origin) for r in part.rings]

    def almost_equals(self, other: "ShapeCollection", atol: float = 1e-9) -> bool:
        if len(self) != len(other):
            return False
        for a, b in zip(self._parts, other):
            if a.kind != b.kind or len(a.rings) != len(b.rings):
                return False
            for ra, rb in zip(a.rings, b.rings):
                if ra.shape != rb.shape or not np.allclose(ra, rb, rtol=0.0, atol=atol):
                    return False
        return True


__all__ = ["KINDS", "SubShape", "ShapeCollection"]
