"""Tests for applying parameter values to templates."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import pytest

from garment.application import EngineOptions, ParameterPolicy, apply_parameters, effective_delta
from garment.errors import (
    ConstraintViolation,
    DegenerateEdge,
    NoSuchEdge,
    NoSuchPanel,
    NoSuchParameter,
    NoSuchVertex,
    NotCurved,
    OutOfRange,
)
from garment.parameters import ParameterValues
from tests.helpers import build_template, garment_payload, single_edge_payload

D = Decimal


def _absolute_payload() -> dict[str, Any]:
    payload = single_edge_payload()
    payload["properties"]["curvature_coords"] = "absolute"
    payload["pattern"]["panels"]["P1"]["edges"] = [{"endpoints": [0, 1], "curvature": [5, 5]}]
    payload["parameters"]["bend"] = {
        "influence": [{"panel": "P1", "edge_list": [0]}],
        "range": [-1, 1],
        "type": "curve",
        "value": 0,
    }
    payload["parameter_order"] = ["width", "bend"]
    return payload


def test_length_parameter_moves_end_vertex() -> None:
    template = build_template(single_edge_payload())

    pattern = apply_parameters(template, {"width": D("1.2")})

    assert pattern.panel("P1").vertices == [(D(0), D(0)), (D(12), D(0))]


def test_float_values_are_applied_exactly() -> None:
    template = build_template(single_edge_payload())

    pattern = apply_parameters(template, ParameterValues.from_mapping({"width": 1.2}))

    assert pattern.panel("P1").vertices[1] == (D(12), D(0))


def test_template_is_left_untouched() -> None:
    template = build_template(single_edge_payload())
    before = template.pattern.clone()

    apply_parameters(template, {"width": D("1.7")})

    assert template.pattern == before


def test_neutral_values_reproduce_the_base_pattern() -> None:
    template = build_template(garment_payload())

    assert apply_parameters(template, template.neutral_values()) == template.pattern
    assert apply_parameters(template) == template.pattern


@pytest.mark.parametrize("value", [D("0.5"), D("2.0")])
def test_range_bounds_are_inclusive(value: Decimal) -> None:
    template = build_template(single_edge_payload())

    apply_parameters(template, {"width": value})


def test_out_of_range_value_is_rejected() -> None:
    template = build_template(garment_payload())

    with pytest.raises(OutOfRange) as excinfo:
        apply_parameters(template, {"hem": D("2.0")})

    assert excinfo.value.value == D("2.0")
    assert excinfo.value.range == (D("0.5"), D("1.5"))
    assert excinfo.value.name == "hem"


def test_unknown_parameter_is_rejected() -> None:
    template = build_template(single_edge_payload())

    with pytest.raises(NoSuchParameter) as excinfo:
        apply_parameters(template, {"ghost": 1})

    assert excinfo.value.name == "ghost"


def test_require_all_rejects_missing_values() -> None:
    template = build_template(single_edge_payload())

    with pytest.raises(NoSuchParameter) as excinfo:
        apply_parameters(template, {}, EngineOptions(require_all=True))

    assert excinfo.value.name == "width"


def test_missing_panel_is_reported() -> None:
    payload = single_edge_payload()
    payload["parameters"]["width"]["influence"][0]["panel"] = "P2"
    template = build_template(payload)

    with pytest.raises(NoSuchPanel) as excinfo:
        apply_parameters(template, {"width": D("1.2")})

    assert excinfo.value.panel == "P2"


def test_missing_edge_is_reported() -> None:
    payload = single_edge_payload()
    payload["parameters"]["width"]["influence"][0]["edge_list"] = [4]
    template = build_template(payload)

    with pytest.raises(NoSuchEdge) as excinfo:
        apply_parameters(template, {"width": D("1.2")})

    assert (excinfo.value.panel, excinfo.value.edge) == ("P1", 4)


def test_missing_vertex_is_reported() -> None:
    payload = single_edge_payload()
    payload["pattern"]["panels"]["P1"]["edges"] = [{"endpoints": [0, 7]}]
    template = build_template(payload)

    with pytest.raises(NoSuchVertex) as excinfo:
        apply_parameters(template, {"width": D("1.2")})

    assert excinfo.value.index == 7


def test_undirected_reference_splits_the_change() -> None:
    payload = single_edge_payload()
    payload["parameters"]["width"]["influence"][0]["edge_list"] = [0]
    template = build_template(payload)

    pattern = apply_parameters(template, {"width": D("1.2")})

    assert pattern.panel("P1").vertices == [(D(-1), D(0)), (D(11), D(0))]


def test_multiplicative_policy_scales_by_ratio() -> None:
    template = build_template(single_edge_payload())
    options = EngineOptions(policy=ParameterPolicy.MULTIPLICATIVE)

    pattern = apply_parameters(template, {"width": D("1.5")}, options)

    assert pattern.panel("P1").vertices[1] == (D(15), D(0))


def test_multiplicative_policy_needs_nonzero_neutral_value() -> None:
    template = build_template(_absolute_payload())

    with pytest.raises(OutOfRange):
        effective_delta(template.parameters["bend"], D("0.5"), ParameterPolicy.MULTIPLICATIVE)


def test_parameters_apply_in_declared_order() -> None:
    payload = single_edge_payload()
    payload["parameters"]["grow_back"] = {
        "influence": [{"panel": "P1", "edge_list": [{"direction": "start", "id": 0}]}],
        "range": [0, 2],
        "type": "length",
        "value": 1,
    }
    values = {"width": D("1.2"), "grow_back": D("1.5")}

    payload["parameter_order"] = ["width", "grow_back"]
    forward = apply_parameters(build_template(payload), values)
    payload["parameter_order"] = ["grow_back", "width"]
    backward = apply_parameters(build_template(payload), values)

    assert forward.panel("P1").vertices == [(D(-6), D(0)), (D(12), D(0))]
    assert backward.panel("P1").vertices == [(D(-5), D(0)), (D(13), D(0))]


def test_curve_parameter_offsets_relative_curvature() -> None:
    template = build_template(garment_payload())

    pattern = apply_parameters(template, {"neckline": D("1.5")})

    assert pattern.panel("front").edges[2].curvature == (D("0.5"), D("0.7"))
    assert pattern.panel("back").edges[2].curvature == (D("0.5"), D("0.7"))
    assert pattern.panel("front").vertices == template.pattern.panel("front").vertices


def test_curve_parameter_on_straight_edge_fails() -> None:
    payload = single_edge_payload()
    payload["parameters"]["width"]["type"] = "curve"
    template = build_template(payload)

    with pytest.raises(NotCurved):
        apply_parameters(template, {"width": D("1.2")})


def test_absolute_control_points_follow_moved_vertices() -> None:
    template = build_template(_absolute_payload())

    pattern = apply_parameters(template, {"width": D("1.2")})

    edge = pattern.panel("P1").edges[0]
    assert pattern.panel("P1").vertices[1] == (D(12), D(0))
    assert edge.curvature == (D(6), D(6))


def test_absolute_curve_parameter_offsets_control_point() -> None:
    template = build_template(_absolute_payload())

    pattern = apply_parameters(template, {"bend": D("0.25")})

    assert pattern.panel("P1").edges[0].curvature == (D(5), D("7.5"))


def test_matching_edits_keep_constraints_satisfied() -> None:
    template = build_template(garment_payload())

    pattern = apply_parameters(template, {"hem": D("1.2"), "neckline": D("0.5")})

    assert pattern.panel("front").vertices[1] == (D(12), D(0))
    assert pattern.panel("back").vertices[1] == (D(32), D(0))


def test_one_sided_edit_breaks_length_constraint() -> None:
    template = build_template(garment_payload())

    with pytest.raises(ConstraintViolation) as excinfo:
        apply_parameters(template, {"front_only": D("1.2")})

    assert excinfo.value.constraint == "hem_match"
    assert excinfo.value.kind == "length_equality"
    assert set(excinfo.value.measurements) == {"front[0]", "back[0]"}


def test_constraint_checks_can_be_disabled() -> None:
    template = build_template(garment_payload())

    pattern = apply_parameters(
        template,
        {"front_only": D("1.2")},
        EngineOptions(check_constraints=False),
    )

    assert pattern.panel("front").vertices[0] == (D(-2), D(0))


def test_curve_edit_on_collapsed_absolute_edge_is_a_typed_error() -> None:
    payload = _absolute_payload()
    payload["parameters"]["width"]["range"] = [0, 2]
    template = build_template(payload)

    with pytest.raises(DegenerateEdge) as excinfo:
        apply_parameters(template, {"width": D(0), "bend": D("0.5")})

    assert (excinfo.value.panel, excinfo.value.edge) == ("P1", 0)
