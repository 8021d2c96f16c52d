"""Post-deformation checks for length and curve equality constraints."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from .aabb import Point
from .errors import DegenerateEdge, NotCurved
from .geometry import (
    absolute_to_relative,
    edge_vector,
    length,
    quadratic_arc_length,
    relative_to_absolute,
    to_decimal,
)
from .pattern_model import Pattern
from .template_model import Constraint, ConstraintType, CurvatureCoords, Template

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = Decimal("1e-6")
DEFAULT_ARC_SAMPLES = 64

__all__ = [
    "ConstraintResult",
    "EdgeMeasurement",
    "check_all_constraints",
    "evaluate_constraint",
    "measure_curvature",
    "measure_length",
]


@dataclass(frozen=True, slots=True)
class EdgeMeasurement:
    """Measured quantity of a single influenced edge."""

    panel: str
    edge: int
    value: Decimal | tuple[Decimal, Decimal]

    @property
    def label(self) -> str:
        return f"{self.panel}[{self.edge}]"


@dataclass(frozen=True, slots=True)
class ConstraintResult:
    """Outcome of evaluating one constraint."""

    name: str
    kind: ConstraintType
    ok: bool
    measurements: tuple[EdgeMeasurement, ...] = ()

    def as_mapping(self) -> dict[str, object]:
        return {measurement.label: measurement.value for measurement in self.measurements}


def _control_point(
    start: Point, end: Point, curvature: tuple[Decimal, Decimal], coords: CurvatureCoords
) -> Point:
    if coords is CurvatureCoords.RELATIVE:
        return relative_to_absolute(start, end, curvature)
    return curvature


def measure_length(
    pattern: Pattern,
    panel_name: str,
    edge_index: int,
    *,
    coords: CurvatureCoords,
    samples: int = DEFAULT_ARC_SAMPLES,
) -> Decimal:
    """Edge length: exact chord for straight edges, sampled arc for curves."""

    panel = pattern.panel(panel_name)
    edge = panel.edge(edge_index, panel=panel_name)
    start, end = panel.edge_vertices(edge, panel=panel_name)
    if edge.curvature is None:
        return length(edge_vector(start, end))
    control = _control_point(start, end, edge.curvature, coords)
    return to_decimal(quadratic_arc_length(start, control, end, samples=samples))


def measure_curvature(
    pattern: Pattern,
    panel_name: str,
    edge_index: int,
    *,
    coords: CurvatureCoords,
) -> tuple[Decimal, Decimal]:
    """Control point of a curved edge expressed relative to its endpoints."""

    panel = pattern.panel(panel_name)
    edge = panel.edge(edge_index, panel=panel_name)
    start, end = panel.edge_vertices(edge, panel=panel_name)
    if edge.curvature is None:
        raise NotCurved(panel_name, edge_index)
    if coords is CurvatureCoords.RELATIVE:
        return edge.curvature
    if start == end:
        raise DegenerateEdge(panel_name, edge_index)
    return absolute_to_relative(start, end, edge.curvature)


def _edge_refs(constraint: Constraint) -> Iterable[tuple[str, int]]:
    for influence in constraint.influence:
        for ref in influence.edge_list:
            yield influence.panel, ref.id


def _within(values: Iterable[Decimal], tolerance: Decimal, *, relative: bool) -> bool:
    values = list(values)
    if len(values) < 2:
        return True
    spread = max(values) - min(values)
    if relative:
        return spread <= tolerance * max(abs(value) for value in values)
    return spread <= tolerance


def evaluate_constraint(
    name: str,
    constraint: Constraint,
    pattern: Pattern,
    *,
    coords: CurvatureCoords,
    tolerance: Decimal = DEFAULT_TOLERANCE,
    samples: int = DEFAULT_ARC_SAMPLES,
) -> ConstraintResult:
    """Measure every influenced edge and compare them.

    Lengths must agree within *tolerance* relative to the longest edge;
    relative curvature coordinates must agree within *tolerance* absolutely.
    """

    measurements: list[EdgeMeasurement] = []
    if constraint.kind is ConstraintType.LENGTH_EQUALITY:
        for panel_name, edge_index in _edge_refs(constraint):
            value = measure_length(pattern, panel_name, edge_index, coords=coords, samples=samples)
            measurements.append(EdgeMeasurement(panel_name, edge_index, value))
        ok = _within((m.value for m in measurements), tolerance, relative=True)  # type: ignore[misc]
    else:
        for panel_name, edge_index in _edge_refs(constraint):
            value = measure_curvature(pattern, panel_name, edge_index, coords=coords)
            measurements.append(EdgeMeasurement(panel_name, edge_index, value))
        ok = all(
            _within((m.value[axis] for m in measurements), tolerance, relative=False)  # type: ignore[index]
            for axis in (0, 1)
        )

    logger.debug("constraint %s (%s): ok=%s", name, constraint.kind.value, ok)
    return ConstraintResult(name=name, kind=constraint.kind, ok=ok, measurements=tuple(measurements))


def check_all_constraints(
    template: Template,
    pattern: Pattern,
    *,
    tolerance: Decimal = DEFAULT_TOLERANCE,
    samples: int = DEFAULT_ARC_SAMPLES,
) -> list[ConstraintResult]:
    """Evaluate every constraint of *template* against *pattern* in declared order."""

    coords = template.properties.curvature_coords
    return [
        evaluate_constraint(
            name,
            constraint,
            pattern,
            coords=coords,
            tolerance=tolerance,
            samples=samples,
        )
        for name, constraint in template.ordered_constraints()
    ]
