"""Tests for exact vector helpers and quadratic curve utilities."""

from __future__ import annotations

from decimal import Decimal

import pytest

from garment.geometry import (
    absolute_to_relative,
    quadratic_arc_length,
    quadratic_bounds,
    relative_to_absolute,
    to_decimal,
)

D = Decimal


def test_to_decimal_avoids_binary_noise() -> None:
    assert to_decimal(0.1) == D("0.1")
    assert to_decimal(3) == D(3)
    with pytest.raises(TypeError):
        to_decimal(True)


def test_relative_curvature_maps_to_control_point() -> None:
    start, end = (D(0), D(0)), (D(10), D(0))

    control = relative_to_absolute(start, end, (D("0.5"), D("0.2")))

    assert control == (D(5), D(2))
    assert absolute_to_relative(start, end, control) == (D("0.5"), D("0.2"))


def test_relative_offset_follows_edge_direction() -> None:
    start, end = (D(0), D(0)), (D(0), D(10))

    assert relative_to_absolute(start, end, (D("0.5"), D("0.5"))) == (D(-5), D(5))


def test_absolute_to_relative_rejects_degenerate_edges() -> None:
    with pytest.raises(ValueError):
        absolute_to_relative((D(1), D(1)), (D(1), D(1)), (D(2), D(2)))


def test_quadratic_bounds_include_interior_extremum() -> None:
    rect = quadratic_bounds((D(0), D(0)), (D(5), D(10)), (D(10), D(0)))

    assert rect.bounds() == (D(0), D(0), D(10), D(5))


def test_arc_length_of_straight_quadratic_is_the_chord() -> None:
    assert quadratic_arc_length((D(0), D(0)), (D(5), D(0)), (D(10), D(0))) == pytest.approx(10.0)


def test_arc_length_of_bent_curve_exceeds_chord() -> None:
    arc = quadratic_arc_length((D(0), D(0)), (D(5), D(4)), (D(10), D(0)), samples=256)

    assert 10.0 < arc < 10.0 + 2 * 4
