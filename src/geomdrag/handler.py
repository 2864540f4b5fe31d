"""Drag handler that rotates and scales a geometry collection about an anchor.

A drag session starts on pointer down: the template collection is cloned, its
bottom-left corner is pinned to the pointer, and every following move rotates
the clone by the change in pointer angle and scales it by the change in
pointer distance, both about that fixed origin. Rendering and coordinate
projection belong to the host, reached through :class:`LayerHost` and
:class:`SketchLayer`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Union

import logging

from .models import HandlerOptions, LayerOptions, Point, SketchStyle
from .shapes import ShapeCollection, from_wkt
from .utils.geometry import angle_deg

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]


class SketchLayer(Protocol):
    """Temporary drawing layer owned by the handler while it is active."""

    def add_shape(self, shape: ShapeCollection) -> None: ...

    def remove_shape(self, shape: ShapeCollection) -> None: ...

    def draw(self, shape: ShapeCollection, style: Optional[SketchStyle]) -> None: ...

    def clear(self) -> None: ...

    def destroy(self) -> None: ...


class LayerHost(Protocol):
    """Map or canvas able to create sketch layers."""

    def create_layer(self, options: LayerOptions) -> SketchLayer: ...


class SessionState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass
class DragSession:
    """Running state of one drag, from pointer down to release or cancel."""

    origin: Point
    shape: ShapeCollection
    radius: float
    angle: float = 0.0
    moved: bool = False


class GeometryDragHandler:
    """Drag out a clone of a template collection, rotating and scaling it.

    Pointer callbacks (:meth:`on_pointer_down`, :meth:`on_pointer_move`,
    :meth:`on_pointer_up`, :meth:`on_pointer_leave`) are meant to be
    registered with the host's input source. They expect positions already
    projected into map coordinates.

    Named callbacks receive a clone of the working shape, never the live one.
    The exception is ``create``, which is called with the origin and the live
    working shape so the caller can keep a handle on what is being drawn.
    """

    def __init__(
        self,
        host: LayerHost,
        callbacks: Optional[Mapping[str, Callback]] = None,
        options: Union[HandlerOptions, Mapping[str, Any], None] = None,
    ) -> None:
        self.host = host
        self.callbacks: Dict[str, Callback] = dict(callbacks or {})
        self.options = HandlerOptions()
        if options is not None:
            self.options = self.options.merged(options)
        self.geometry: Optional[ShapeCollection] = None
        self.layer: Optional[SketchLayer] = None
        self.session: Optional[DragSession] = None
        self.active = False

    # ----------------------------- Configuration ------------------------------

    @property
    def style(self) -> Optional[SketchStyle]:
        return self.options.resolved_style()

    def set_options(
        self, new_options: Union[HandlerOptions, Mapping[str, Any]]
    ) -> None:
        """Merge known option fields; unknown keys are logged and ignored."""
        self.options = self.options.merged(new_options)

    def set_geometry(self, geometry: Union[ShapeCollection, str, None]) -> None:
        """Set the template collection cloned at the start of every drag."""
        if isinstance(geometry, str):
            geometry = from_wkt(geometry)
        self.geometry = geometry

    @property
    def state(self) -> SessionState:
        return SessionState.IDLE if self.session is None else SessionState.DRAGGING

    # ------------------------------- Lifecycle --------------------------------

    def activate(self) -> bool:
        """Create the sketch layer; ``False`` if the handler is already active."""
        if self.active:
            return False
        self.layer = self.host.create_layer(self.options.layer_options)
        self.active = True
        logger.debug("Activated with layer %r", self.options.layer_options.name)
        return True

    def deactivate(self) -> bool:
        """Drop any drag in progress and destroy the sketch layer."""
        if not self.active:
            return False
        if self.session is not None and self.layer is not None:
            self.layer.remove_shape(self.session.shape)
        self.finalize()
        if self.layer is not None:
            self.layer.destroy()
        self.layer = None
        self.active = False
        logger.debug("Deactivated")
        return True

    # ----------------------------- Input events -------------------------------

    def on_pointer_down(self, position: Point) -> None:
        if not self.active:
            return
        self.start(position)
        if self.session is not None:
            self.callback("down")

    def on_pointer_move(self, position: Point) -> None:
        if not self.active or self.session is None:
            return
        self.move(position)
        self.callback("move")

    def on_pointer_up(self, position: Point) -> None:
        self._release("up")

    def on_pointer_leave(self, position: Point) -> None:
        self._release("out")

    def _release(self, name: str) -> None:
        session = self.session
        if session is None:
            return
        self.callback(name)
        # A click without any movement is not a finished drag.
        if session.moved:
            self.callback("done")
        self.end()

    # ------------------------------ Drag session ------------------------------

    def start(self, position: Point) -> None:
        """Begin a session at ``position``; no-op when no template is set."""
        if self.geometry is None:
            return

        self.clear()

        # Work on a clone so the template keeps its native orientation and
        # size for every later drag.
        shape = self.geometry.clone()

        # Seed the radius with the native width: the first move then scales
        # by first_radius / width, normalizing the width to that radius.
        radius = shape.width()
        if radius == 0.0:
            logger.debug("Template has zero width; first move will not scale")

        if self.layer is not None:
            self.layer.add_shape(shape)

        # Pin the bottom-left corner of the clone to the origin.
        bounds = shape.bounds()
        shape.move(position.x - bounds.left, position.y - bounds.bottom)

        self.session = DragSession(origin=position, shape=shape, radius=radius)
        logger.debug(
            "Drag started at (%.3f, %.3f), width %.3f", position.x, position.y, radius
        )
        self.callback("create", position, shape)

    def move(self, position: Point) -> None:
        """Rotate then scale the working shape to follow ``position``."""
        session = self.session
        if session is None:
            return
        origin = session.origin
        session.moved = True

        new_angle = angle_deg(position.x, position.y, origin.x, origin.y)
        session.shape.rotate(new_angle - session.angle, origin)
        session.angle = new_angle

        new_radius = position.distance_to(origin)
        if new_radius == 0.0:
            # Scaling by zero would collapse the shape for good.
            logger.debug("Pointer on origin; skipping scale")
        elif session.radius == 0.0:
            session.radius = new_radius
        else:
            session.shape.resize(new_radius / session.radius, origin)
            session.radius = new_radius

        if self.layer is not None:
            self.layer.draw(session.shape, self.style)

    def end(self) -> None:
        self.finalize()

    def cancel(self) -> None:
        """Deliver the ``cancel`` callback, then finalize."""
        self.callback("cancel")
        self.finalize()

    def finalize(self) -> None:
        if self.session is not None:
            logger.debug("Drag finalized at angle %.3f", self.session.angle)
        self.session = None

    def clear(self) -> None:
        """Remove anything rendered on the sketch layer."""
        if self.layer is not None:
            self.layer.clear()

    @property
    def origin(self) -> Optional[Point]:
        return None if self.session is None else self.session.origin

    @property
    def angle(self) -> float:
        return 0.0 if self.session is None else self.session.angle

    @property
    def radius(self) -> Optional[float]:
        return None if self.session is None else self.session.radius

    @property
    def working_shape(self) -> Optional[ShapeCollection]:
        return None if self.session is None else self.session.shape

    # ------------------------------- Callbacks --------------------------------

    def callback(self, name: str, *args: Any) -> None:
        """Fire the named callback if registered.

        ``create`` gets ``args`` verbatim; every other name gets a clone of the
        working shape. ``done`` and ``cancel`` clear the sketch layer first.
        """
        if self.geometry is None:
            return

        if name in ("done", "cancel"):
            self.clear()

        func = self.callbacks.get(name)
        if func is None:
            return
        if name == "create":
            func(*args)
        elif self.session is not None:
            func(self.session.shape.clone())


__all__ = [
    "Callback",
    "DragSession",
    "GeometryDragHandler",
    "LayerHost",
    "SessionState",
    "SketchLayer",
]
