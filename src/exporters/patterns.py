"""Render garment patterns as SVG documents."""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterator, Mapping

from garment.application import EngineOptions, apply_parameters
from garment.geometry import relative_to_absolute
from garment.parameters import ParameterValues
from garment.pattern_model import Panel, Pattern
from garment.template_model import CurvatureCoords, Template

from .render_target import Render, Target
from .svg import LineTo, MoveTo, PathElement, Primitive, QuadraticCurveTo, SvgDocument

logger = logging.getLogger(__name__)

__all__ = [
    "PanelDrawing",
    "PatternRenderer",
    "RenderOptions",
    "edge_primitives",
    "render_pattern",
    "write_pattern_json",
]


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Styling and scheduling options for pattern rendering."""

    stroke: str = "black"
    stroke_width: Decimal = Decimal(3)
    margin: Decimal = Decimal(0)
    include_origin: bool = False
    jobs: int = 1


def edge_primitives(
    panel: Panel,
    *,
    panel_name: str,
    curvature_coords: CurvatureCoords,
) -> Iterator[tuple[int, tuple[Primitive, Primitive]]]:
    """Yield ``(edge index, (move, draw))`` for every edge in declared order.

    Every edge is its own move/draw pair; consecutive edges are not joined.
    """

    for index, edge in enumerate(panel.edges):
        start, end = panel.edge_vertices(edge, panel=panel_name)
        move = MoveTo(start)
        draw: Primitive
        if edge.curvature is None:
            draw = LineTo(start, end)
        else:
            if curvature_coords is CurvatureCoords.RELATIVE:
                control = relative_to_absolute(start, end, edge.curvature)
            else:
                control = edge.curvature
            draw = QuadraticCurveTo(start, control, end)
        yield index, (move, draw)


@dataclass(frozen=True, slots=True)
class PanelDrawing:
    """Draws one named panel onto a target."""

    name: str
    panel: Panel
    options: RenderOptions = RenderOptions()

    def render(self, target: Target, context: CurvatureCoords) -> None:
        for index, primitives in edge_primitives(self.panel, panel_name=self.name, curvature_coords=context):
            for primitive in primitives:
                target.resize_for(primitive)
            target.add(
                PathElement(
                    primitives=primitives,
                    element_id=f"{self.name}-edge-{index}",
                    stroke=self.options.stroke,
                    stroke_width=self.options.stroke_width,
                )
            )


def render_pattern(
    pattern: Pattern,
    target: Target,
    *,
    curvature_coords: CurvatureCoords,
    options: RenderOptions | None = None,
) -> None:
    """Render every panel of *pattern* onto *target*.

    With ``options.jobs > 1`` panels are drawn concurrently; the call returns
    only after all of them have finished, so the target can be built safely.
    Path order in the document then follows completion order.
    """

    options = options or RenderOptions()
    drawings: list[Render] = [
        PanelDrawing(name, panel, options) for name, panel in pattern.ordered_panels()
    ]
    if options.jobs <= 1 or len(drawings) <= 1:
        for drawing in drawings:
            drawing.render(target, curvature_coords)
        return

    with ThreadPoolExecutor(max_workers=options.jobs) as executor:
        futures = [executor.submit(drawing.render, target, curvature_coords) for drawing in drawings]
        for future in futures:
            future.result()


def _json_default(value: Any) -> Any:
    # Numbers a float cannot hold exactly are written as decimal strings.
    if isinstance(value, Decimal):
        integral = value.to_integral_value()
        if value == integral:
            return int(integral)
        approximation = float(value)
        if Decimal(repr(approximation)) == value:
            return approximation
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def write_pattern_json(pattern: Pattern, path: Path | str, *, properties: Mapping[str, Any] | None = None) -> Path:
    """Write *pattern* in the template specification's ``pattern`` layout.

    Coordinates survive a round trip through :meth:`Pattern.from_mapping`
    exactly.
    """

    payload: dict[str, Any] = {"pattern": pattern.to_mapping()}
    if properties is not None:
        payload["properties"] = dict(properties)
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(payload, indent=2, default=_json_default), encoding="utf-8")
    return target


class PatternRenderer:
    """Apply parameters to a template and export the result."""

    def __init__(
        self,
        *,
        engine_options: EngineOptions | None = None,
        render_options: RenderOptions | None = None,
    ) -> None:
        self.engine_options = engine_options or EngineOptions()
        self.render_options = render_options or RenderOptions()

    def deform(self, template: Template, values: ParameterValues | Mapping[str, Any] | None = None) -> Pattern:
        return apply_parameters(template, values, self.engine_options)

    def render(self, template: Template, pattern: Pattern) -> SvgDocument:
        target = Target(include_origin=self.render_options.include_origin)
        render_pattern(
            pattern,
            target,
            curvature_coords=template.properties.curvature_coords,
            options=self.render_options,
        )
        document = target.build()
        document.comments.append(f"units_in_meter: {template.properties.units_in_meter}")
        logger.debug("rendered %d paths, viewport %s", len(document.elements), document.viewport)
        return document

    def export(
        self,
        template: Template,
        values: ParameterValues | Mapping[str, Any] | None,
        *,
        output: Path | str,
        pattern_output: Path | str | None = None,
    ) -> dict[str, Path]:
        pattern = self.deform(template, values)
        document = self.render(template, pattern)

        created: dict[str, Path] = {}
        created["svg"] = document.write(
            output,
            margin=self.render_options.margin,
            units_in_meter=template.properties.units_in_meter,
        )
        if pattern_output is not None:
            created["json"] = write_pattern_json(
                pattern,
                pattern_output,
                properties=template.properties.to_mapping(),
            )
        return created
