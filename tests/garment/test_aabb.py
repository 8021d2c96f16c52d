"""Tests for rectangles and the growable bounding box."""

from __future__ import annotations

import random
from decimal import Decimal

from garment.aabb import AABB, ORIGIN, Rect, as_aabb

D = Decimal


def test_default_box_is_degenerate_at_origin() -> None:
    box = AABB()

    assert box.top_left == ORIGIN
    assert box.bottom_right == ORIGIN
    assert box.rect.size == (D(0), D(0))


def test_rect_size_is_derived_from_corners() -> None:
    rect = Rect((D("-1.5"), D(2)), (D("3.5"), D(7)))

    assert rect.width == D(5)
    assert rect.height == D(5)
    assert rect.bounds() == (D("-1.5"), D(2), D("3.5"), D(7))


def test_insert_point_includes_initial_origin() -> None:
    box = AABB()
    box.insert_point((D(3), D(4)))

    assert box.top_left == (D(0), D(0))
    assert box.bottom_right == (D(3), D(4))


def test_insert_point_updates_both_corners_independently() -> None:
    box = AABB.around((D(0), D(0)))
    box.insert_point((D(-2), D(5)))

    assert box.top_left == (D(-2), D(0))
    assert box.bottom_right == (D(0), D(5))


def test_box_is_componentwise_min_and_max_of_inserted_points() -> None:
    rng = random.Random(7)
    points = [
        (D(rng.randint(-500, 500)) / 10, D(rng.randint(-500, 500)) / 10)
        for _ in range(50)
    ]
    box = AABB.around(points[0])
    for point in points[1:]:
        box.insert_point(point)

    assert box.top_left == (min(p[0] for p in points), min(p[1] for p in points))
    assert box.bottom_right == (max(p[0] for p in points), max(p[1] for p in points))


def test_inserting_contained_point_is_a_no_op() -> None:
    box = AABB.from_points([(D(0), D(0)), (D(10), D(10))])
    before = box.rect
    box.insert_point((D(5), D("0.0001")))
    box.insert_point((D(10), D(10)))

    assert box.rect == before


def test_insert_shape_uses_both_corners() -> None:
    box = AABB.around((D(1), D(1)))
    box.insert(Rect((D(-3), D(2)), (D(0), D(9))))

    assert box.rect.bounds() == (D(-3), D(1), D(1), D(9))


def test_reset_forgets_the_origin() -> None:
    box = AABB()
    box.reset((D(5), D(5)))
    box.insert_point((D(6), D(7)))

    assert box.rect.bounds() == (D(5), D(5), D(6), D(7))
    assert not box.contains(ORIGIN)


def test_as_aabb_accepts_points() -> None:
    box = as_aabb((D(2), D(-1)))

    assert box.top_left == box.bottom_right == (D(2), D(-1))
