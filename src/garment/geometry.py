"""Exact 2D vector helpers and quadratic Bezier utilities for panel edges."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Sequence

import numpy as np

from .aabb import AABB, Point, Rect

Vector3 = tuple[Decimal, Decimal, Decimal]

ZERO = Decimal(0)
ONE = Decimal(1)
TWO = Decimal(2)

__all__ = [
    "Vector3",
    "absolute_to_relative",
    "add",
    "edge_vector",
    "length",
    "perpendicular",
    "quadratic_arc_length",
    "quadratic_bounds",
    "quadratic_point",
    "relative_to_absolute",
    "scale",
    "sub",
    "to_decimal",
    "to_point",
    "to_vector3",
]


def to_decimal(value: Any) -> Decimal:
    """Convert a decoded number to :class:`Decimal` without binary rounding noise."""

    if isinstance(value, bool):
        raise TypeError("booleans are not numeric coordinates")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, str):
        return Decimal(value)
    raise TypeError(f"expected a number, received {type(value)!r}")


def to_point(values: Sequence[Any]) -> Point:
    if len(values) != 2:
        raise ValueError(f"expected 2 coordinates, received {len(values)}")
    return to_decimal(values[0]), to_decimal(values[1])


def to_vector3(values: Sequence[Any]) -> Vector3:
    if len(values) != 3:
        raise ValueError(f"expected 3 coordinates, received {len(values)}")
    return to_decimal(values[0]), to_decimal(values[1]), to_decimal(values[2])


def add(a: Point, b: Point) -> Point:
    return a[0] + b[0], a[1] + b[1]


def sub(a: Point, b: Point) -> Point:
    return a[0] - b[0], a[1] - b[1]


def scale(v: Point, k: Decimal) -> Point:
    return v[0] * k, v[1] * k


def perpendicular(v: Point) -> Point:
    """Rotate *v* by +90 degrees."""

    return -v[1], v[0]


def length(v: Point) -> Decimal:
    return (v[0] * v[0] + v[1] * v[1]).sqrt()


def edge_vector(start: Point, end: Point) -> Point:
    return sub(end, start)


def relative_to_absolute(start: Point, end: Point, curvature: Sequence[Decimal]) -> Point:
    """Map relative curvature ``[t, s]`` to a control point in panel coordinates.

    ``t`` is the fraction along the edge vector and ``s`` the offset along the
    edge vector rotated by +90 degrees, both measured in edge lengths.
    """

    v = edge_vector(start, end)
    along = add(start, scale(v, curvature[0]))
    return add(along, scale(perpendicular(v), curvature[1]))


def absolute_to_relative(start: Point, end: Point, control: Point) -> tuple[Decimal, Decimal]:
    """Inverse of :func:`relative_to_absolute`."""

    v = edge_vector(start, end)
    norm_sq = v[0] * v[0] + v[1] * v[1]
    if norm_sq == ZERO:
        raise ValueError("cannot express a control point relative to a zero-length edge")
    offset = sub(control, start)
    t = (offset[0] * v[0] + offset[1] * v[1]) / norm_sq
    n = perpendicular(v)
    s = (offset[0] * n[0] + offset[1] * n[1]) / norm_sq
    return t, s


def quadratic_point(p0: Point, p1: Point, p2: Point, t: Decimal) -> Point:
    u = ONE - t
    a = u * u
    b = TWO * u * t
    c = t * t
    return (
        a * p0[0] + b * p1[0] + c * p2[0],
        a * p0[1] + b * p1[1] + c * p2[1],
    )


def _axis_extremum(a: Decimal, b: Decimal, c: Decimal) -> Decimal | None:
    denominator = a - TWO * b + c
    if denominator == ZERO:
        return None
    t = (a - b) / denominator
    if ZERO < t < ONE:
        return t
    return None


def quadratic_bounds(p0: Point, p1: Point, p2: Point) -> Rect:
    """Tight bounding rectangle of the quadratic Bezier curve ``p0 -> p2``."""

    box = AABB.from_points((p0, p2))
    for axis in (0, 1):
        t = _axis_extremum(p0[axis], p1[axis], p2[axis])
        if t is not None:
            box.insert_point(quadratic_point(p0, p1, p2, t))
    return box.rect


def quadratic_arc_length(p0: Point, p1: Point, p2: Point, *, samples: int = 64) -> float:
    """Approximate the arc length of a quadratic Bezier by polyline sampling."""

    if samples < 1:
        raise ValueError("samples must be positive")
    control = np.asarray([p0, p1, p2], dtype=float)
    t = np.linspace(0.0, 1.0, samples + 1)[:, None]
    u = 1.0 - t
    points = u * u * control[0] + 2.0 * u * t * control[1] + t * t * control[2]
    segments = np.diff(points, axis=0)
    return float(np.hypot(segments[:, 0], segments[:, 1]).sum())
