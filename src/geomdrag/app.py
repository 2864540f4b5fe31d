"""Qt application hosting the geometry drag handler on a simple map canvas."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Tuple

import logging
import sys

from PySide6 import QtCore, QtGui, QtWidgets

from . import __version__ as APP_VERSION
from .handler import GeometryDragHandler
from .models import AppConfig, LayerOptions, Point, SketchStyle, ViewState
from .shapes import ShapeCollection, to_wkt
from .utils.qt import shape_to_paths, style_to_pen_brush

logger = logging.getLogger(__name__)

PointerCallback = Callable[[Point], None]


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


# ------------------------------- Sketch Layer ---------------------------------


class CanvasLayer:
    """Vector layer drawn by :class:`SketchCanvas`."""

    def __init__(self, canvas: "SketchCanvas", options: LayerOptions) -> None:
        self.canvas: Optional[SketchCanvas] = canvas
        self.options = options
        self._shapes: List[Tuple[ShapeCollection, Optional[SketchStyle]]] = []

    @property
    def shapes(self) -> List[ShapeCollection]:
        return [shape for shape, _ in self._shapes]

    def add_shape(self, shape: ShapeCollection) -> None:
        self._shapes.append((shape, None))
        self._repaint()

    def remove_shape(self, shape: ShapeCollection) -> None:
        self._shapes = [(s, st) for s, st in self._shapes if s is not shape]
        self._repaint()

    def draw(self, shape: ShapeCollection, style: Optional[SketchStyle]) -> None:
        for i, (s, _) in enumerate(self._shapes):
            if s is shape:
                self._shapes[i] = (s, style)
                break
        self._repaint()

    def clear(self) -> None:
        self._shapes = []
        self._repaint()

    def destroy(self) -> None:
        self._shapes = []
        if self.canvas is not None:
            self.canvas.remove_layer(self)
        self.canvas = None

    def paint(self, painter: QtGui.QPainter) -> None:
        if self.canvas is None:
            return
        for shape, style in self._shapes:
            effective = style or self.options.style or SketchStyle()
            pen, brush = style_to_pen_brush(effective)
            polygons, lines, points = shape_to_paths(shape, self.canvas.to_view)
            painter.setPen(pen)
            painter.setBrush(brush)
            painter.drawPath(polygons)
            painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
            painter.drawPath(lines)
            painter.setBrush(brush)
            r = effective.point_radius
            for p in points:
                painter.drawEllipse(p, r, r)

    def _repaint(self) -> None:
        if self.canvas is not None:
            self.canvas.update()


# ------------------------------- Map Canvas -----------------------------------


class SketchCanvas(QtWidgets.QWidget):
    """Widget with a y-up map coordinate system and a stack of vector layers.

    Mouse events are projected into map coordinates and forwarded to the
    registered pointer callbacks.
    """

    def __init__(
        self,
        view: Optional[ViewState] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.view = view or ViewState()
        self.layers: List[CanvasLayer] = []
        self._on_down: Optional[PointerCallback] = None
        self._on_move: Optional[PointerCallback] = None
        self._on_up: Optional[PointerCallback] = None
        self._on_leave: Optional[PointerCallback] = None
        self._pressed = False
        self.setMouseTracking(True)
        self.setMinimumSize(320, 240)

    # ------------------------------ Projection --------------------------------

    def to_map(self, x: float, y: float) -> Point:
        res = self.view.resolution
        mx = (x - self.width() / 2.0) * res + self.view.center_x
        my = (self.height() / 2.0 - y) * res + self.view.center_y
        return Point(mx, my)

    def to_view(self, x: float, y: float) -> Tuple[float, float]:
        res = self.view.resolution
        vx = (x - self.view.center_x) / res + self.width() / 2.0
        vy = self.height() / 2.0 - (y - self.view.center_y) / res
        return vx, vy

    # -------------------------------- Layers ----------------------------------

    def create_layer(self, options: LayerOptions) -> CanvasLayer:
        layer = CanvasLayer(self, options)
        self.layers.append(layer)
        logger.debug("Added layer %r", options.name)
        self.update()
        return layer

    def remove_layer(self, layer: CanvasLayer) -> None:
        if layer in self.layers:
            self.layers.remove(layer)
            self.update()

    # -------------------------------- Input -----------------------------------

    def register_pointer_callbacks(
        self,
        on_down: Optional[PointerCallback] = None,
        on_move: Optional[PointerCallback] = None,
        on_up: Optional[PointerCallback] = None,
        on_leave: Optional[PointerCallback] = None,
    ) -> None:
        self._on_down = on_down
        self._on_move = on_move
        self._on_up = on_up
        self._on_leave = on_leave

    def _event_point(self, e: QtGui.QMouseEvent) -> Point:
        pos = e.position()
        return self.to_map(float(pos.x()), float(pos.y()))

    def mousePressEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() != QtCore.Qt.MouseButton.LeftButton:
            return
        self._pressed = True
        if self._on_down is not None:
            self._on_down(self._event_point(e))
        e.accept()

    def mouseMoveEvent(self, e: QtGui.QMouseEvent) -> None:
        if not self._pressed:
            return
        # The implicit grab keeps move events coming after the cursor leaves,
        # while leaveEvent is held back until release.
        if not self.rect().contains(e.position().toPoint()):
            self._pressed = False
            if self._on_leave is not None:
                self._on_leave(self._event_point(e))
            return
        if self._on_move is not None:
            self._on_move(self._event_point(e))

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() != QtCore.Qt.MouseButton.LeftButton or not self._pressed:
            return
        self._pressed = False
        if self._on_up is not None:
            self._on_up(self._event_point(e))
        e.accept()

    # ------------------------------- Painting ---------------------------------

    def paintEvent(self, e: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
        painter.fillRect(self.rect(), QtGui.QColor(250, 250, 250))

        # Map axes through the view center
        painter.setPen(QtGui.QPen(QtGui.QColor(220, 220, 220)))
        ox, oy = self.to_view(0.0, 0.0)
        painter.drawLine(QtCore.QPointF(0, oy), QtCore.QPointF(self.width(), oy))
        painter.drawLine(QtCore.QPointF(ox, 0), QtCore.QPointF(ox, self.height()))

        for layer in list(self.layers):
            layer.paint(painter)
        painter.end()


# ------------------------------- Main Window ----------------------------------


class MainWindow(QtWidgets.QMainWindow):
    """Canvas with a drag handler; finished drags are stamped onto a layer."""

    def __init__(self, cfg: AppConfig, app_version: str) -> None:
        super().__init__()
        self.cfg = cfg
        self.setWindowTitle(f"geomdrag v{app_version}")
        self.resize(cfg.window_width, cfg.window_height)

        self.canvas = SketchCanvas(cfg.view, self)
        self.setCentralWidget(self.canvas)
        self.placed = self.canvas.create_layer(
            LayerOptions(name="placed", style=SketchStyle(fill_color="#3366cc"))
        )

        self.handler = GeometryDragHandler(
            self.canvas,
            callbacks={"done": self._on_done, "cancel": self._on_cancel},
            options={"style": cfg.style},
        )
        self.handler.set_geometry(cfg.template_wkt)
        self.handler.activate()
        self.canvas.register_pointer_callbacks(
            on_down=self.handler.on_pointer_down,
            on_move=self.handler.on_pointer_move,
            on_up=self.handler.on_pointer_up,
            on_leave=self.handler.on_pointer_leave,
        )
        self.statusBar().showMessage(
            "Drag to place the template; Esc cancels, Del clears placed shapes."
        )

    def _on_done(self, shape: ShapeCollection) -> None:
        self.placed.add_shape(shape)
        self.statusBar().showMessage(to_wkt(shape, rounding_precision=2))
        logger.info("Placed %r", shape)

    def _on_cancel(self, shape: ShapeCollection) -> None:
        self.statusBar().showMessage("Drag cancelled.")

    def keyPressEvent(self, e: QtGui.QKeyEvent) -> None:
        key = e.key()
        if key == QtCore.Qt.Key.Key_Escape:
            self.handler.cancel()
        elif key in (QtCore.Qt.Key.Key_Delete, QtCore.Qt.Key.Key_Backspace):
            self.placed.clear()
        else:
            super().keyPressEvent(e)

    def closeEvent(self, e: QtGui.QCloseEvent) -> None:
        self.handler.deactivate()
        self.cfg.window_width = self.width()
        self.cfg.window_height = self.height()
        super().closeEvent(e)


# ---------------------------- Config I/O --------------------------------------


def config_path() -> Path:
    return Path.home() / ".geomdrag_config.json"


def load_config(path: Optional[Path] = None) -> AppConfig:
    p = path or config_path()
    if p.exists():
        try:
            return AppConfig.from_json(p.read_text(encoding="utf-8"))
        except (OSError, ValueError, TypeError, AttributeError):
            logger.warning("Unreadable config at %s; using defaults", p)
    return AppConfig()


def save_config(cfg: AppConfig, path: Optional[Path] = None) -> None:
    p = path or config_path()
    try:
        p.write_text(cfg.to_json(), encoding="utf-8")
    except OSError:
        logger.warning("Could not save config to %s", p)


# ---------------------------------- Main --------------------------------------


def main() -> None:
    configure_logging()
    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("geomdrag")
    app.setApplicationVersion(APP_VERSION)

    cfg = load_config()
    window = MainWindow(cfg, APP_VERSION)
    window.show()
    logger.info("Started geomdrag %s", APP_VERSION)
    ret = app.exec()

    save_config(cfg)
    sys.exit(ret)


if __name__ == "__main__":
    main()
