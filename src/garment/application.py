"""Apply parameter values to a template, producing a deformed pattern."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from .aabb import Point
from .constraints import DEFAULT_ARC_SAMPLES, DEFAULT_TOLERANCE, evaluate_constraint
from .errors import ConstraintViolation, DegenerateEdge, NoSuchParameter, NotCurved, OutOfRange
from .geometry import (
    ONE,
    TWO,
    ZERO,
    absolute_to_relative,
    add,
    edge_vector,
    relative_to_absolute,
    scale,
    sub,
)
from .parameters import ParameterValues
from .pattern_model import Direction, Edge, Panel, Pattern
from .template_model import CurvatureCoords, Parameter, ParameterType, Template

logger = logging.getLogger(__name__)

EdgeKey = tuple[str, int]

__all__ = [
    "EngineOptions",
    "ParameterPolicy",
    "apply_parameters",
    "effective_delta",
]


class ParameterPolicy(str, Enum):
    """How a supplied value relates to the parameter's neutral value."""

    ADDITIVE = "additive"
    MULTIPLICATIVE = "multiplicative"


@dataclass(frozen=True, slots=True)
class EngineOptions:
    """Knobs for :func:`apply_parameters`."""

    policy: ParameterPolicy = ParameterPolicy.ADDITIVE
    require_all: bool = False
    tolerance: Decimal = DEFAULT_TOLERANCE
    check_constraints: bool = True
    arc_samples: int = DEFAULT_ARC_SAMPLES


def effective_delta(
    parameter: Parameter,
    value: Decimal,
    policy: ParameterPolicy,
    *,
    name: str | None = None,
) -> Decimal:
    """Return ``k`` such that a length edit scales an edge by ``1 + k``."""

    if policy is ParameterPolicy.ADDITIVE:
        return value - parameter.value
    if parameter.value == ZERO:
        raise OutOfRange(value, parameter.range, name=name)
    return value / parameter.value - ONE


def _normalize_values(values: ParameterValues | Mapping[str, Any] | None) -> dict[str, Decimal]:
    if values is None:
        return {}
    if isinstance(values, ParameterValues):
        return values.to_mapping()
    return ParameterValues.from_mapping(values).to_mapping()


def _move_vertices(
    panel: Panel,
    panel_name: str,
    moves: Mapping[int, Point],
    coords: CurvatureCoords,
) -> list[int]:
    """Move vertices and return the indices of every edge attached to them.

    Absolute control points of the attached edges are carried along so the
    curve keeps its shape relative to its endpoints.
    """

    attached = panel.edges_touching(moves)
    anchored: dict[int, tuple[Decimal, Decimal]] = {}
    if coords is CurvatureCoords.ABSOLUTE:
        for index in attached:
            edge = panel.edges[index]
            if edge.curvature is None:
                continue
            start, end = panel.edge_vertices(edge, panel=panel_name)
            if start != end:
                anchored[index] = absolute_to_relative(start, end, edge.curvature)

    for vertex, point in moves.items():
        panel.set_vertex(vertex, point, panel=panel_name)

    for index, relative in anchored.items():
        edge = panel.edges[index]
        start, end = panel.edge_vertices(edge, panel=panel_name)
        edge.curvature = relative_to_absolute(start, end, relative)
    return attached


def _length_moves(edge: Edge, start: Point, end: Point, direction: Direction, k: Decimal) -> dict[int, Point]:
    # Only components along the edge vector change, which keeps the grain line.
    v = edge_vector(start, end)
    step = k / TWO if direction.is_start() and direction.is_end() else k
    first, second = edge.endpoints
    moves: dict[int, Point] = {}
    if direction.is_start():
        moves[first] = sub(start, scale(v, step))
    if direction.is_end():
        moves[second] = add(end, scale(v, step))
    return moves


def _edit_curve(
    edge: Edge,
    curvature: tuple[Decimal, Decimal],
    start: Point,
    end: Point,
    k: Decimal,
    *,
    policy: ParameterPolicy,
    coords: CurvatureCoords,
    location: EdgeKey,
) -> None:
    if coords is CurvatureCoords.RELATIVE:
        t, s = curvature
    elif start == end:
        raise DegenerateEdge(*location)
    else:
        t, s = absolute_to_relative(start, end, curvature)

    if policy is ParameterPolicy.ADDITIVE:
        s = s + k
    else:
        s = s * (ONE + k)

    if coords is CurvatureCoords.RELATIVE:
        edge.curvature = (t, s)
    else:
        edge.curvature = relative_to_absolute(start, end, (t, s))


def _apply_parameter(
    pattern: Pattern,
    parameter: Parameter,
    k: Decimal,
    *,
    policy: ParameterPolicy,
    coords: CurvatureCoords,
) -> set[EdgeKey]:
    touched: set[EdgeKey] = set()
    for influence in parameter.influence:
        panel = pattern.panel(influence.panel)
        for ref in influence.edge_list:
            edge = panel.edge(ref.id, panel=influence.panel)
            start, end = panel.edge_vertices(edge, panel=influence.panel)

            if parameter.kind is ParameterType.CURVE:
                if edge.curvature is None:
                    raise NotCurved(influence.panel, ref.id)
                if k == ZERO:
                    continue
                _edit_curve(
                    edge,
                    edge.curvature,
                    start,
                    end,
                    k,
                    policy=policy,
                    coords=coords,
                    location=(influence.panel, ref.id),
                )
                touched.add((influence.panel, ref.id))
                continue

            if k == ZERO:
                continue
            moves = _length_moves(edge, start, end, ref.direction or Direction.BOTH, k)
            attached = _move_vertices(panel, influence.panel, moves, coords)
            touched.update((influence.panel, index) for index in attached)
    return touched


def _check_touched_constraints(
    template: Template,
    pattern: Pattern,
    touched: set[EdgeKey],
    options: EngineOptions,
) -> None:
    for name, constraint in template.ordered_constraints():
        if constraint.edge_keys().isdisjoint(touched):
            continue
        result = evaluate_constraint(
            name,
            constraint,
            pattern,
            coords=template.properties.curvature_coords,
            tolerance=options.tolerance,
            samples=options.arc_samples,
        )
        if not result.ok:
            raise ConstraintViolation(name, constraint.kind.value, result.as_mapping())


def apply_parameters(
    template: Template,
    values: ParameterValues | Mapping[str, Any] | None = None,
    options: EngineOptions | None = None,
) -> Pattern:
    """Deform a copy of the template's base pattern with *values*.

    Parameters are applied in declared order. Only supplied values are range
    checked; omitted parameters keep their neutral value unless
    ``options.require_all`` is set. The template itself is never modified.

    Raises
    ------
    RenderError
        One of its subclasses when a value is unknown or out of range, a
        reference does not resolve, or a constraint breaks.
    """

    options = options or EngineOptions()
    supplied = _normalize_values(values)
    for name in sorted(supplied):
        if name not in template.parameters:
            raise NoSuchParameter(name)

    pattern = template.pattern.clone()
    coords = template.properties.curvature_coords

    for name, parameter in template.ordered_parameters():
        value = supplied.get(name)
        if value is None:
            if options.require_all:
                raise NoSuchParameter(name)
            logger.debug("parameter %s not supplied, keeping neutral value %s", name, parameter.value)
            continue
        if not parameter.contains(value):
            raise OutOfRange(value, parameter.range, name=name)

        k = effective_delta(parameter, value, options.policy, name=name)
        logger.debug("applying %s=%s (%s, delta %s)", name, value, parameter.kind.value, k)
        touched = _apply_parameter(pattern, parameter, k, policy=options.policy, coords=coords)
        if touched and options.check_constraints:
            _check_touched_constraints(template, pattern, touched, options)

    return pattern
