"""Dataclasses describing coordinates, styling and configuration for geomdrag."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional, Union

import json
import logging
import math

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_WKT = (
    "GEOMETRYCOLLECTION("
    "POLYGON((0 0, 60 0, 60 20, 0 20, 0 0)),"
    "LINESTRING(60 10, 90 10),"
    "POINT(100 10))"
)


@dataclass(frozen=True)
class Point:
    """A location in the host's map coordinate space (y axis up)."""

    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned extent of a shape."""

    left: float
    bottom: float
    right: float
    top: float

    @property
    def width(self) -> float:
        return abs(self.right - self.left)

    @property
    def height(self) -> float:
        return abs(self.top - self.bottom)


@dataclass
class SketchStyle:
    """Vector style used to draw the sketch feature."""

    fill_color: str = "#ee9900"
    fill_opacity: float = 0.4
    stroke_color: str = "#ee9900"
    stroke_opacity: float = 1.0
    stroke_width: float = 1.0
    point_radius: float = 6.0

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "SketchStyle":
        d = SketchStyle()
        return SketchStyle(
            fill_color=str(data.get("fill_color", d.fill_color)),
            fill_opacity=float(data.get("fill_opacity", d.fill_opacity)),
            stroke_color=str(data.get("stroke_color", d.stroke_color)),
            stroke_opacity=float(data.get("stroke_opacity", d.stroke_opacity)),
            stroke_width=float(data.get("stroke_width", d.stroke_width)),
            point_radius=float(data.get("point_radius", d.point_radius)),
        )


def _coerce_style(value: Any) -> Optional[SketchStyle]:
    if value is None or isinstance(value, SketchStyle):
        return value
    if isinstance(value, Mapping):
        return SketchStyle.from_dict(value)
    raise ValueError(
        f"Expected a SketchStyle or mapping, got {type(value).__name__}."
    )


@dataclass
class LayerOptions:
    """Options applied to the temporary sketch layer on activation."""

    name: str = "geomdrag.GeometryDragHandler"
    display_in_layer_switcher: bool = False
    always_in_range: bool = True
    style: Optional[SketchStyle] = None  # None: the handler supplies a default

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "LayerOptions":
        d = LayerOptions()
        style = data.get("style")
        return LayerOptions(
            name=str(data.get("name", d.name)),
            display_in_layer_switcher=bool(
                data.get("display_in_layer_switcher", False)
            ),
            always_in_range=bool(data.get("always_in_range", True)),
            style=_coerce_style(style),
        )


@dataclass
class HandlerOptions:
    """Enumerated configuration for :class:`~geomdrag.handler.GeometryDragHandler`."""

    layer_options: LayerOptions = field(default_factory=LayerOptions)
    style: Optional[SketchStyle] = None

    def resolved_style(self) -> Optional[SketchStyle]:
        """Style used to draw the sketch; ``None`` defers to the layer's own style."""
        if self.style is not None:
            return self.style
        if self.layer_options.style is None:
            return SketchStyle()
        return None

    def merged(
        self, new_options: Union["HandlerOptions", Mapping[str, Any]]
    ) -> "HandlerOptions":
        """Return a copy with the known fields of ``new_options`` replaced."""
        if isinstance(new_options, HandlerOptions):
            return replace(new_options)
        known = {f.name for f in fields(self)}
        updates: Dict[str, Any] = {}
        for key, value in new_options.items():
            if key not in known:
                logger.warning("Ignoring unknown handler option %r", key)
                continue
            if key == "layer_options":
                if isinstance(value, Mapping):
                    value = LayerOptions.from_dict(value)
                elif not isinstance(value, LayerOptions):
                    raise ValueError(
                        "layer_options must be a LayerOptions or mapping, "
                        f"got {type(value).__name__}."
                    )
            else:
                value = _coerce_style(value)
            updates[key] = value
        return replace(self, **updates)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "HandlerOptions":
        return HandlerOptions().merged(data)


@dataclass
class ViewState:
    """Viewport of the reference canvas: map units per pixel and map center."""

    resolution: float = 1.0
    center_x: float = 0.0
    center_y: float = 0.0


@dataclass
class AppConfig:
    """Persisted configuration for the demo application."""

    template_wkt: str = DEFAULT_TEMPLATE_WKT
    view: ViewState = field(default_factory=ViewState)
    style: SketchStyle = field(default_factory=SketchStyle)
    window_width: int = 960
    window_height: int = 640

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @staticmethod
    def from_json(text: str) -> "AppConfig":
        data: Dict = json.loads(text)
        v = data.get("view", {})
        return AppConfig(
            template_wkt=str(data.get("template_wkt", DEFAULT_TEMPLATE_WKT)),
            view=ViewState(
                resolution=float(v.get("resolution", 1.0)),
                center_x=float(v.get("center_x", 0.0)),
                center_y=float(v.get("center_y", 0.0)),
            ),
            style=SketchStyle.from_dict(data.get("style", {})),
            window_width=int(data.get("window_width", 960)),
            window_height=int(data.get("window_height", 640)),
        )


__all__ = [
    "Point",
    "Bounds",
    "SketchStyle",
    "LayerOptions",
    "HandlerOptions",
    "ViewState",
    "AppConfig",
    "DEFAULT_TEMPLATE_WKT",
]
