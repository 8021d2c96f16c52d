"""Garment geometry: panels of indexed vertices and edges, plus stitches."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping

from .aabb import Point
from .errors import CorruptTemplateError, NoSuchEdge, NoSuchPanel, NoSuchVertex
from .geometry import Vector3, to_point, to_vector3
from .ordering import OrderedView, check_order, complete_order

__all__ = [
    "Direction",
    "Edge",
    "EdgeRef",
    "Panel",
    "Pattern",
    "Stitch",
    "StitchEnd",
]


class Direction(str, Enum):
    """Which endpoint of an edge a length edit moves."""

    START = "start"
    END = "end"
    BOTH = "both"

    def is_start(self) -> bool:
        return self in (Direction.START, Direction.BOTH)

    def is_end(self) -> bool:
        return self in (Direction.END, Direction.BOTH)


@dataclass(frozen=True, slots=True)
class EdgeRef:
    """Reference to an edge of a panel, optionally naming the moved endpoint.

    Encoded either as a bare edge index or as ``{"direction": ..., "id": ...}``.
    """

    id: int
    direction: Direction | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "EdgeRef":
        if isinstance(payload, bool):
            raise TypeError("edge reference must be an integer or an object")
        if isinstance(payload, int):
            return cls(id=payload)
        if isinstance(payload, Mapping):
            unknown = set(payload) - {"direction", "id"}
            if unknown:
                raise ValueError(f"unknown edge reference fields: {sorted(unknown)}")
            return cls(id=int(payload["id"]), direction=Direction(payload["direction"]))
        raise TypeError(f"edge reference must be an integer or an object, received {type(payload)!r}")

    def to_payload(self) -> int | dict[str, Any]:
        if self.direction is None:
            return self.id
        return {"direction": self.direction.value, "id": self.id}


@dataclass(slots=True)
class Edge:
    """Straight or quadratic edge between two vertices of its panel."""

    endpoints: tuple[int, int]
    curvature: tuple[Decimal, Decimal] | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Edge":
        start, end = (int(index) for index in payload["endpoints"])
        raw_curvature = payload.get("curvature")
        curvature = to_point(raw_curvature) if raw_curvature is not None else None
        return cls(endpoints=(start, end), curvature=curvature)

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"endpoints": list(self.endpoints)}
        if self.curvature is not None:
            payload["curvature"] = list(self.curvature)
        return payload

    def clone(self) -> "Edge":
        return Edge(endpoints=self.endpoints, curvature=self.curvature)


@dataclass(slots=True)
class Panel:
    """Flat garment piece.

    ``translation`` and ``rotation`` place the panel around a body and are not
    used by 2D rendering.
    """

    translation: Vector3
    rotation: Vector3
    edges: list[Edge] = field(default_factory=list)
    vertices: list[Point] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Panel":
        return cls(
            translation=to_vector3(payload["translation"]),
            rotation=to_vector3(payload["rotation"]),
            edges=[Edge.from_mapping(edge) for edge in payload.get("edges", [])],
            vertices=[to_point(vertex) for vertex in payload.get("vertices", [])],
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "translation": list(self.translation),
            "rotation": list(self.rotation),
            "edges": [edge.to_mapping() for edge in self.edges],
            "vertices": [list(vertex) for vertex in self.vertices],
        }

    def clone(self) -> "Panel":
        return Panel(
            translation=self.translation,
            rotation=self.rotation,
            edges=[edge.clone() for edge in self.edges],
            vertices=list(self.vertices),
        )

    def vertex(self, index: int, *, panel: str | None = None) -> Point:
        if not 0 <= index < len(self.vertices):
            raise NoSuchVertex(index, panel)
        return self.vertices[index]

    def set_vertex(self, index: int, point: Point, *, panel: str | None = None) -> None:
        if not 0 <= index < len(self.vertices):
            raise NoSuchVertex(index, panel)
        self.vertices[index] = point

    def edge(self, index: int, *, panel: str) -> Edge:
        if not 0 <= index < len(self.edges):
            raise NoSuchEdge(panel, index)
        return self.edges[index]

    def edge_vertices(self, edge: Edge, *, panel: str | None = None) -> tuple[Point, Point]:
        start, end = edge.endpoints
        return self.vertex(start, panel=panel), self.vertex(end, panel=panel)

    def edges_touching(self, vertices: Iterable[int]) -> list[int]:
        """Indices of edges with an endpoint in *vertices*."""

        wanted = set(vertices)
        return [
            index
            for index, edge in enumerate(self.edges)
            if edge.endpoints[0] in wanted or edge.endpoints[1] in wanted
        ]


@dataclass(frozen=True, slots=True)
class StitchEnd:
    """One side of a stitch: an edge of a named panel."""

    panel: str
    edge: int

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "StitchEnd":
        return cls(panel=str(payload["panel"]), edge=int(payload["edge"]))

    def to_mapping(self) -> dict[str, Any]:
        return {"edge": self.edge, "panel": self.panel}


@dataclass(frozen=True, slots=True)
class Stitch:
    """Edges sewn together. Purely topological."""

    ends: tuple[StitchEnd, ...] = ()

    @classmethod
    def from_payload(cls, payload: Iterable[Mapping[str, Any]]) -> "Stitch":
        return cls(ends=tuple(StitchEnd.from_mapping(end) for end in payload))

    def to_payload(self) -> list[dict[str, Any]]:
        return [end.to_mapping() for end in self.ends]


@dataclass(slots=True)
class Pattern:
    """Named panels in declared order together with their stitches."""

    panels: dict[str, Panel] = field(default_factory=dict)
    panel_order: list[str] = field(default_factory=list)
    stitches: list[Stitch] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Pattern":
        panels = {str(name): Panel.from_mapping(panel) for name, panel in payload["panels"].items()}
        return cls(
            panels=panels,
            panel_order=[str(name) for name in payload["panel_order"]],
            stitches=[Stitch.from_payload(stitch) for stitch in payload.get("stitches", [])],
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "panels": {name: panel.to_mapping() for name, panel in self.panels.items()},
            "panel_order": list(self.panel_order),
            "stitches": [stitch.to_payload() for stitch in self.stitches],
        }

    def clone(self) -> "Pattern":
        return Pattern(
            panels={name: panel.clone() for name, panel in self.panels.items()},
            panel_order=list(self.panel_order),
            stitches=list(self.stitches),
        )

    def ordered_panels(self) -> OrderedView[Panel]:
        return OrderedView(self.panels, complete_order(self.panels, self.panel_order))

    def panel(self, name: str) -> Panel:
        try:
            return self.panels[name]
        except KeyError:
            raise NoSuchPanel(name) from None

    def check_integrity(self) -> None:
        check_order(self.panels, self.panel_order, context="panel_order")
        for stitch in self.stitches:
            for end in stitch.ends:
                panel = self.panels.get(end.panel)
                if panel is None:
                    raise CorruptTemplateError(f"stitch references missing panel {end.panel!r}")
                if not 0 <= end.edge < len(panel.edges):
                    raise CorruptTemplateError(
                        f"stitch references missing edge {end.edge} of panel {end.panel!r}"
                    )
