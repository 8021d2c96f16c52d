"""Vector exporters for deformed garment patterns."""

from .patterns import (
    PanelDrawing,
    PatternRenderer,
    RenderOptions,
    edge_primitives,
    render_pattern,
    write_pattern_json,
)
from .render_target import Render, Target
from .svg import LineTo, MoveTo, PathElement, QuadraticCurveTo, SvgDocument

__all__ = [
    "LineTo",
    "MoveTo",
    "PanelDrawing",
    "PathElement",
    "PatternRenderer",
    "QuadraticCurveTo",
    "Render",
    "RenderOptions",
    "SvgDocument",
    "Target",
    "edge_primitives",
    "render_pattern",
    "write_pattern_json",
]
