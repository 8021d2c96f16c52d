"""Tests for the pattern and template data model."""

from __future__ import annotations

from decimal import Decimal

import pytest

from garment.errors import CorruptTemplateError, NoSuchPanel, NoSuchVertex
from garment.pattern_model import Direction, Edge, EdgeRef, Pattern
from garment.template_model import CurvatureCoords, ParameterType
from tests.helpers import build_template, garment_payload, single_edge_payload

D = Decimal


def test_edge_reference_accepts_bare_index() -> None:
    ref = EdgeRef.from_payload(3)

    assert ref.id == 3
    assert ref.direction is None
    assert ref.to_payload() == 3


def test_edge_reference_accepts_directed_object() -> None:
    ref = EdgeRef.from_payload({"direction": "start", "id": 3})

    assert ref == EdgeRef(3, Direction.START)
    assert ref.to_payload() == {"direction": "start", "id": 3}


@pytest.mark.parametrize("payload", [True, "3", {"id": 1, "direction": "end", "weight": 2}])
def test_edge_reference_rejects_malformed_payloads(payload: object) -> None:
    with pytest.raises((TypeError, ValueError)):
        EdgeRef.from_payload(payload)


def test_straight_edge_omits_curvature() -> None:
    edge = Edge.from_mapping({"endpoints": [0, 1]})

    assert edge.curvature is None
    assert edge.to_mapping() == {"endpoints": [0, 1]}


def test_template_parses_properties_and_parameters() -> None:
    template = build_template(garment_payload())

    assert template.properties.curvature_coords is CurvatureCoords.RELATIVE
    assert template.properties.units_in_meter == D(100)
    assert template.parameters["neckline"].kind is ParameterType.CURVE
    assert template.parameters["hem"].range == (D("0.5"), D("1.5"))
    assert [name for name, _ in template.ordered_parameters()] == ["hem", "neckline", "front_only"]


def test_template_round_trips_through_mapping() -> None:
    template = build_template(garment_payload())

    assert build_template(template.to_mapping()) == template


def test_panels_iterate_in_declared_order() -> None:
    payload = garment_payload()
    payload["pattern"]["panel_order"] = ["back", "front"]
    template = build_template(payload)

    assert [name for name, _ in template.pattern.ordered_panels()] == ["back", "front"]


def test_unlisted_panels_follow_listed_ones() -> None:
    pattern = build_template(garment_payload()).pattern
    pattern.panel_order = ["back"]

    assert [name for name, _ in pattern.ordered_panels()] == ["back", "front"]


def test_parameter_order_must_reference_existing_parameters() -> None:
    payload = single_edge_payload()
    payload["parameter_order"] = ["width", "height"]

    with pytest.raises(CorruptTemplateError, match="height"):
        build_template(payload)


def test_stitches_must_reference_existing_edges() -> None:
    payload = garment_payload()
    payload["pattern"]["stitches"] = [[{"edge": 9, "panel": "front"}, {"edge": 3, "panel": "back"}]]

    with pytest.raises(CorruptTemplateError, match="missing edge"):
        build_template(payload)


def test_pattern_lookup_errors() -> None:
    pattern: Pattern = build_template(single_edge_payload()).pattern

    with pytest.raises(NoSuchPanel):
        pattern.panel("P2")
    with pytest.raises(NoSuchVertex):
        pattern.panel("P1").vertex(2, panel="P1")


def test_clone_is_independent() -> None:
    pattern = build_template(single_edge_payload()).pattern
    copy = pattern.clone()
    copy.panel("P1").set_vertex(1, (D(99), D(0)))

    assert pattern.panel("P1").vertices[1] == (D(10), D(0))


def test_package_exposes_engine_lazily() -> None:
    import garment
    from garment.application import apply_parameters

    assert garment.apply_parameters is apply_parameters
    with pytest.raises(AttributeError):
        garment.not_a_thing  # noqa: B018
