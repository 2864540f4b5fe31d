"""Qt helper utilities."""

from typing import Callable, List, Tuple

from PySide6 import QtCore, QtGui

from ..models import SketchStyle
from ..shapes import ShapeCollection
from .geometry import clamp

ToView = Callable[[float, float], Tuple[float, float]]


def shape_to_paths(
    shape: ShapeCollection, to_view: ToView
) -> Tuple[QtGui.QPainterPath, QtGui.QPainterPath, List[QtCore.QPointF]]:
    """Convert ``shape`` into polygon and line painter paths plus point markers.

    ``to_view`` maps map coordinates to widget pixels.
    """
    polygons = QtGui.QPainterPath()
    polygons.setFillRule(QtCore.Qt.FillRule.OddEvenFill)
    lines = QtGui.QPainterPath()
    points: List[QtCore.QPointF] = []
    for part in shape:
        for ring in part.rings:
            pts = [QtCore.QPointF(*to_view(float(x), float(y))) for x, y in ring]
            if part.kind == "point":
                points.append(pts[0])
            elif part.kind == "linestring":
                lines.moveTo(pts[0])
                for p in pts[1:]:
                    lines.lineTo(p)
            else:
                polygons.addPolygon(QtGui.QPolygonF(pts))
                polygons.closeSubpath()
    return polygons, lines, points


def style_to_pen_brush(style: SketchStyle) -> Tuple[QtGui.QPen, QtGui.QBrush]:
    """Build the pen and brush described by a :class:`SketchStyle`."""
    stroke = QtGui.QColor(style.stroke_color)
    stroke.setAlphaF(clamp(style.stroke_opacity, 0.0, 1.0))
    pen = QtGui.QPen(stroke)
    pen.setWidthF(max(0.0, style.stroke_width))
    fill = QtGui.QColor(style.fill_color)
    fill.setAlphaF(clamp(style.fill_opacity, 0.0, 1.0))
    return pen, QtGui.QBrush(fill)


__all__ = ["shape_to_paths", "style_to_pen_brush"]
