"""Error types raised while validating and deforming garment templates."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

__all__ = [
    "ConstraintViolation",
    "CorruptTemplateError",
    "DegenerateEdge",
    "NoSuchEdge",
    "NoSuchPanel",
    "NoSuchParameter",
    "NoSuchVertex",
    "NotCurved",
    "OutOfRange",
    "RenderError",
]


class CorruptTemplateError(RuntimeError):
    """Raised when a template breaks its own cross-reference invariants.

    This is a defect in the template document rather than a bad request, so
    callers are not expected to recover from it.
    """


class RenderError(Exception):
    """Base class for per-request failures while applying parameters."""


class NoSuchParameter(RenderError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"no such parameter: {name}")


class OutOfRange(RenderError):
    def __init__(self, value: Decimal, range: tuple[Decimal, Decimal], *, name: str | None = None) -> None:
        self.value = value
        self.range = (range[0], range[1])
        self.name = name
        prefix = f"parameter {name!r}: " if name else ""
        super().__init__(f"{prefix}value {value} is out of range {range[0]} .. {range[1]}")


class NoSuchPanel(RenderError):
    def __init__(self, panel: str) -> None:
        self.panel = panel
        super().__init__(f"no such panel: {panel}")


class NoSuchEdge(RenderError):
    def __init__(self, panel: str, edge: int) -> None:
        self.panel = panel
        self.edge = edge
        super().__init__(f"no such edge: panel={panel}, {edge}")


class NoSuchVertex(RenderError):
    def __init__(self, index: int, panel: str | None = None) -> None:
        self.index = index
        self.panel = panel
        where = f" in panel {panel}" if panel else ""
        super().__init__(f"no such vertex: {index}{where}")


class NotCurved(RenderError):
    """A curve operation referenced a straight edge."""

    def __init__(self, panel: str, edge: int) -> None:
        self.panel = panel
        self.edge = edge
        super().__init__(f"edge is not curved: panel={panel}, {edge}")


class ConstraintViolation(RenderError):
    """A constraint no longer holds after deforming the pattern."""

    def __init__(self, constraint: str, kind: str, measurements: Mapping[str, Any]) -> None:
        self.constraint = constraint
        self.kind = kind
        self.measurements = dict(measurements)
        detail = ", ".join(f"{key}={value}" for key, value in self.measurements.items())
        super().__init__(f"constraint {constraint!r} ({kind}) violated: {detail}")


class DegenerateEdge(RenderError):
    """An edge collapsed to a point, so its curvature has no reference frame."""

    def __init__(self, panel: str, edge: int) -> None:
        self.panel = panel
        self.edge = edge
        super().__init__(f"edge has zero length: panel={panel}, {edge}")
