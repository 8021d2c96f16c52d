"""Axis-aligned rectangles and incrementally growable bounding boxes."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Protocol, Union, runtime_checkable

Point = tuple[Decimal, Decimal]

ORIGIN: Point = (Decimal(0), Decimal(0))

__all__ = [
    "AABB",
    "HasAABB",
    "ORIGIN",
    "Point",
    "Rect",
    "Shape",
    "as_aabb",
]


@dataclass(frozen=True, slots=True)
class Rect:
    """Rectangle spanned by two corners.

    x runs from left (negative) to right (positive) and y from top (negative)
    to bottom (positive), so ``top_left`` holds the smaller coordinates. The
    corners are stored as given; keeping them ordered is the caller's job.
    """

    top_left: Point = ORIGIN
    bottom_right: Point = ORIGIN

    @property
    def width(self) -> Decimal:
        return self.bottom_right[0] - self.top_left[0]

    @property
    def height(self) -> Decimal:
        return self.bottom_right[1] - self.top_left[1]

    @property
    def size(self) -> tuple[Decimal, Decimal]:
        return self.width, self.height

    def bounds(self) -> tuple[Decimal, Decimal, Decimal, Decimal]:
        """Return ``(left, top, right, bottom)``."""

        left, top = self.top_left
        right, bottom = self.bottom_right
        return left, top, right, bottom

    def as_aabb(self) -> "AABB":
        return AABB(self)


@runtime_checkable
class HasAABB(Protocol):
    """Anything that can report its own bounding box."""

    def as_aabb(self) -> "AABB":  # pragma: no cover - protocol definition only
        ...


Shape = Union[Point, HasAABB]


def as_aabb(shape: Shape) -> "AABB":
    """Return the bounding box of a point or of an object exposing ``as_aabb``."""

    if isinstance(shape, tuple):
        x, y = shape
        return AABB(Rect((x, y), (x, y)))
    return shape.as_aabb()


@dataclass(slots=True)
class AABB:
    """Bounding box that only ever grows to contain inserted geometry.

    A default box is the degenerate rectangle at the origin, so the origin is
    part of the box until :meth:`reset` moves the seed elsewhere.
    """

    rect: Rect = field(default_factory=Rect)

    @classmethod
    def around(cls, point: Point) -> "AABB":
        return cls(Rect(point, point))

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "AABB":
        iterator = iter(points)
        first = next(iterator, None)
        if first is None:
            return cls()
        box = cls.around(first)
        for point in iterator:
            box.insert_point(point)
        return box

    @property
    def top_left(self) -> Point:
        return self.rect.top_left

    @property
    def bottom_right(self) -> Point:
        return self.rect.bottom_right

    def reset(self, point: Point) -> None:
        self.rect = Rect(point, point)

    def insert_point(self, point: Point) -> None:
        x, y = point
        left, top = self.rect.top_left
        right, bottom = self.rect.bottom_right
        # Each axis updates both corners independently; a single point can
        # extend the box on opposite sides of different axes.
        self.rect = Rect(
            (min(left, x), min(top, y)),
            (max(right, x), max(bottom, y)),
        )

    def insert(self, shape: Shape) -> None:
        box = as_aabb(shape)
        self.insert_point(box.rect.top_left)
        self.insert_point(box.rect.bottom_right)

    def contains(self, point: Point) -> bool:
        x, y = point
        left, top, right, bottom = self.rect.bounds()
        return left <= x <= right and top <= y <= bottom

    def as_aabb(self) -> "AABB":
        return AABB(self.rect)
