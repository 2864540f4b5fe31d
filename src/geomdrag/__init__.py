"""geomdrag package exposing the drag handler and a lazy ``main`` entry point."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._version import get_version
from .handler import GeometryDragHandler, SessionState
from .models import Bounds, HandlerOptions, LayerOptions, Point, SketchStyle
from .shapes import ShapeCollection, SubShape, from_wkt, to_wkt

__version__ = get_version()

if TYPE_CHECKING:  # pragma: no cover - only for type checkers
    from .app import main as _main_type  # noqa: F401


def main() -> None:
    """Entry point for ``python -m geomdrag`` and console scripts."""
    from .app import main as _main

    _main()


__all__ = [
    "main",
    "__version__",
    "get_version",
    "GeometryDragHandler",
    "SessionState",
    "Bounds",
    "HandlerOptions",
    "LayerOptions",
    "Point",
    "SketchStyle",
    "ShapeCollection",
    "SubShape",
    "from_wkt",
    "to_wkt",
]
