"""Vector drawing primitives and a minimal SVG document."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Union

from garment.aabb import AABB, Point
from garment.geometry import quadratic_bounds

__all__ = [
    "LineTo",
    "MoveTo",
    "PathElement",
    "Primitive",
    "QuadraticCurveTo",
    "SvgDocument",
    "format_number",
]

_MM_PER_METER = Decimal(1000)


def format_number(value: Decimal) -> str:
    """Plain decimal notation without trailing zeros."""

    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        return "0"
    return text


def _fmt_point(point: Point) -> str:
    return f"{format_number(point[0])} {format_number(point[1])}"


@dataclass(frozen=True, slots=True)
class MoveTo:
    point: Point

    def command(self) -> str:
        return f"M {_fmt_point(self.point)}"

    def as_aabb(self) -> AABB:
        return AABB.around(self.point)


@dataclass(frozen=True, slots=True)
class LineTo:
    start: Point
    end: Point

    def command(self) -> str:
        return f"L {_fmt_point(self.end)}"

    def as_aabb(self) -> AABB:
        return AABB.from_points((self.start, self.end))


@dataclass(frozen=True, slots=True)
class QuadraticCurveTo:
    """Quadratic Bezier from the current point through ``control`` to ``end``."""

    start: Point
    control: Point
    end: Point

    def command(self) -> str:
        return f"Q {_fmt_point(self.control)} {_fmt_point(self.end)}"

    def as_aabb(self) -> AABB:
        return AABB(quadratic_bounds(self.start, self.control, self.end))


Primitive = Union[MoveTo, LineTo, QuadraticCurveTo]


def _escape(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _comment(text: str) -> str:
    # "--" may not appear inside an XML comment.
    text = _escape(text)
    while "--" in text:
        text = text.replace("--", "- -")
    return f"<!-- {text} -->"


@dataclass(frozen=True, slots=True)
class PathElement:
    """A ``<path>`` built from drawing primitives."""

    primitives: tuple[Primitive, ...]
    element_id: str | None = None
    css_class: str = "panel-edge"
    stroke: str = "black"
    stroke_width: Decimal = Decimal(3)

    def data(self) -> str:
        return " ".join(primitive.command() for primitive in self.primitives)

    def as_aabb(self) -> AABB:
        box = self.primitives[0].as_aabb() if self.primitives else AABB()
        for primitive in self.primitives[1:]:
            box.insert(primitive)
        return box

    def to_svg(self) -> str:
        id_attr = f" id=\"{_escape(self.element_id)}\"" if self.element_id else ""
        return (
            f"<path{id_attr} class=\"{_escape(self.css_class)}\" fill=\"none\" "
            f"stroke=\"{_escape(self.stroke)}\" stroke-width=\"{format_number(self.stroke_width)}\" "
            f"d=\"{self.data()}\" />"
        )


@dataclass(slots=True)
class SvgDocument:
    """Ordered list of paths plus a viewport given as ``(left, top, right, bottom)``."""

    elements: list[PathElement] = field(default_factory=list)
    viewport: tuple[Decimal, Decimal, Decimal, Decimal] | None = None
    comments: list[str] = field(default_factory=list)

    def add(self, element: PathElement) -> "SvgDocument":
        self.elements.append(element)
        return self

    def set_viewport(self, left: Decimal, top: Decimal, right: Decimal, bottom: Decimal) -> None:
        self.viewport = (left, top, right, bottom)

    def view_box(self, *, margin: Decimal = Decimal(0)) -> tuple[Decimal, Decimal, Decimal, Decimal]:
        """SVG ``viewBox`` values ``(min_x, min_y, width, height)``."""

        left, top, right, bottom = self.viewport or (Decimal(0),) * 4
        return (
            left - margin,
            top - margin,
            right - left + 2 * margin,
            bottom - top + 2 * margin,
        )

    def to_string(self, *, margin: Decimal = Decimal(0), units_in_meter: Decimal | None = None) -> str:
        min_x, min_y, width, height = self.view_box(margin=margin)
        size_attrs = ""
        if units_in_meter:
            width_mm = width / units_in_meter * _MM_PER_METER
            height_mm = height / units_in_meter * _MM_PER_METER
            size_attrs = f" width=\"{format_number(width_mm)}mm\" height=\"{format_number(height_mm)}mm\""
        lines = ["<?xml version=\"1.0\" encoding=\"UTF-8\"?>"]
        lines.extend(_comment(comment) for comment in self.comments)
        lines.append(
            f"<svg xmlns=\"http://www.w3.org/2000/svg\"{size_attrs} viewBox=\""
            f"{format_number(min_x)} {format_number(min_y)} {format_number(width)} {format_number(height)}\">"
        )
        lines.extend(f"  {element.to_svg()}" for element in self.elements)
        lines.append("</svg>")
        return "\n".join(lines) + "\n"

    def write(self, path: Path | str, **kwargs) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.to_string(**kwargs), encoding="utf-8")
        return target
