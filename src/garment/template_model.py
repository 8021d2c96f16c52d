"""Parametrization metadata layered over a base :class:`Pattern`."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from .geometry import to_decimal
from .ordering import OrderedView, check_order, complete_order
from .pattern_model import EdgeRef, Pattern

__all__ = [
    "Constraint",
    "ConstraintType",
    "CurvatureCoords",
    "Influence",
    "Parameter",
    "ParameterType",
    "Properties",
    "Template",
]


class CurvatureCoords(str, Enum):
    """How edge curvature control points are expressed."""

    RELATIVE = "relative"
    ABSOLUTE = "absolute"


class ParameterType(str, Enum):
    LENGTH = "length"
    CURVE = "curve"


class ConstraintType(str, Enum):
    LENGTH_EQUALITY = "length_equality"
    CURVE_EQUALITY = "curve_equality"


@dataclass(frozen=True, slots=True)
class Properties:
    """Template-wide conventions."""

    curvature_coords: CurvatureCoords
    normalize_panel_translation: bool
    units_in_meter: Decimal
    normalized_edge_loops: bool

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Properties":
        return cls(
            curvature_coords=CurvatureCoords(payload["curvature_coords"]),
            normalize_panel_translation=bool(payload["normalize_panel_translation"]),
            units_in_meter=to_decimal(payload["units_in_meter"]),
            normalized_edge_loops=bool(payload["normalized_edge_loops"]),
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "curvature_coords": self.curvature_coords.value,
            "normalize_panel_translation": self.normalize_panel_translation,
            "units_in_meter": self.units_in_meter,
            "normalized_edge_loops": self.normalized_edge_loops,
        }


@dataclass(frozen=True, slots=True)
class Influence:
    """Edges of one panel affected by a parameter or constraint."""

    panel: str
    edge_list: tuple[EdgeRef, ...] = ()

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Influence":
        return cls(
            panel=str(payload["panel"]),
            edge_list=tuple(EdgeRef.from_payload(ref) for ref in payload["edge_list"]),
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "edge_list": [ref.to_payload() for ref in self.edge_list],
            "panel": self.panel,
        }

    def edge_keys(self) -> set[tuple[str, int]]:
        return {(self.panel, ref.id) for ref in self.edge_list}


def _influences(payload: Mapping[str, Any]) -> tuple[Influence, ...]:
    return tuple(Influence.from_mapping(entry) for entry in payload["influence"])


@dataclass(frozen=True, slots=True)
class Parameter:
    """Named deformation with an inclusive value range.

    ``value`` is the neutral value: supplying it leaves the geometry as is.
    """

    influence: tuple[Influence, ...]
    range: tuple[Decimal, Decimal]
    kind: ParameterType
    value: Decimal

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Parameter":
        low, high = (to_decimal(bound) for bound in payload["range"])
        return cls(
            influence=_influences(payload),
            range=(low, high),
            kind=ParameterType(payload["type"]),
            value=to_decimal(payload["value"]),
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "influence": [entry.to_mapping() for entry in self.influence],
            "range": list(self.range),
            "type": self.kind.value,
            "value": self.value,
        }

    def contains(self, value: Decimal) -> bool:
        return self.range[0] <= value <= self.range[1]


@dataclass(frozen=True, slots=True)
class Constraint:
    """Edge groups that must stay equal after deformation."""

    influence: tuple[Influence, ...]
    kind: ConstraintType

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Constraint":
        return cls(influence=_influences(payload), kind=ConstraintType(payload["type"]))

    def to_mapping(self) -> dict[str, Any]:
        return {
            "influence": [entry.to_mapping() for entry in self.influence],
            "type": self.kind.value,
        }

    def edge_keys(self) -> set[tuple[str, int]]:
        keys: set[tuple[str, int]] = set()
        for entry in self.influence:
            keys |= entry.edge_keys()
        return keys


@dataclass(slots=True)
class Template:
    """Base pattern plus the parameters and constraints that deform it."""

    pattern: Pattern
    properties: Properties
    parameters: dict[str, Parameter] = field(default_factory=dict)
    parameter_order: list[str] = field(default_factory=list)
    constraints: dict[str, Constraint] = field(default_factory=dict)
    constraint_order: list[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Template":
        """Build a template from a decoded specification and check its integrity."""

        template = cls(
            pattern=Pattern.from_mapping(payload["pattern"]),
            properties=Properties.from_mapping(payload["properties"]),
            parameters={
                str(name): Parameter.from_mapping(entry)
                for name, entry in payload["parameters"].items()
            },
            parameter_order=[str(name) for name in payload["parameter_order"]],
            constraints={
                str(name): Constraint.from_mapping(entry)
                for name, entry in payload["constraints"].items()
            },
            constraint_order=[str(name) for name in payload["constraint_order"]],
        )
        template.check_integrity()
        return template

    def to_mapping(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern.to_mapping(),
            "properties": self.properties.to_mapping(),
            "parameters": {name: entry.to_mapping() for name, entry in self.parameters.items()},
            "parameter_order": list(self.parameter_order),
            "constraints": {name: entry.to_mapping() for name, entry in self.constraints.items()},
            "constraint_order": list(self.constraint_order),
        }

    def check_integrity(self) -> None:
        check_order(self.parameters, self.parameter_order, context="parameter_order")
        check_order(self.constraints, self.constraint_order, context="constraint_order")
        self.pattern.check_integrity()

    def ordered_parameters(self) -> OrderedView[Parameter]:
        return OrderedView(self.parameters, complete_order(self.parameters, self.parameter_order))

    def ordered_constraints(self) -> OrderedView[Constraint]:
        return OrderedView(self.constraints, complete_order(self.constraints, self.constraint_order))

    def neutral_values(self) -> dict[str, Decimal]:
        return {name: parameter.value for name, parameter in self.parameters.items()}
