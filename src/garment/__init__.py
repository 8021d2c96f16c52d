"""Parametric garment pattern model and deformation engine."""

from __future__ import annotations

from importlib import import_module

__all__ = [
    "AABB",
    "ConstraintResult",
    "ConstraintType",
    "ConstraintViolation",
    "Constraint",
    "CorruptTemplateError",
    "CurvatureCoords",
    "DegenerateEdge",
    "Direction",
    "Edge",
    "EdgeRef",
    "EngineOptions",
    "Influence",
    "NoSuchEdge",
    "NoSuchPanel",
    "NoSuchParameter",
    "NoSuchVertex",
    "NotCurved",
    "OrderedView",
    "OutOfRange",
    "Panel",
    "Parameter",
    "ParameterPolicy",
    "ParameterType",
    "ParameterValues",
    "Pattern",
    "Properties",
    "Rect",
    "RenderError",
    "Stitch",
    "StitchEnd",
    "Template",
    "apply_parameters",
    "check_all_constraints",
    "evaluate_constraint",
]

_ATTRIBUTE_MODULES: dict[str, str] = {
    "AABB": ".aabb",
    "Rect": ".aabb",
    "OrderedView": ".ordering",
    "ConstraintViolation": ".errors",
    "CorruptTemplateError": ".errors",
    "DegenerateEdge": ".errors",
    "NoSuchEdge": ".errors",
    "NoSuchPanel": ".errors",
    "NoSuchParameter": ".errors",
    "NoSuchVertex": ".errors",
    "NotCurved": ".errors",
    "OutOfRange": ".errors",
    "RenderError": ".errors",
    "Direction": ".pattern_model",
    "Edge": ".pattern_model",
    "EdgeRef": ".pattern_model",
    "Panel": ".pattern_model",
    "Pattern": ".pattern_model",
    "Stitch": ".pattern_model",
    "StitchEnd": ".pattern_model",
    "Constraint": ".template_model",
    "ConstraintType": ".template_model",
    "CurvatureCoords": ".template_model",
    "Influence": ".template_model",
    "Parameter": ".template_model",
    "ParameterType": ".template_model",
    "Properties": ".template_model",
    "Template": ".template_model",
    "ParameterValues": ".parameters",
    "ConstraintResult": ".constraints",
    "check_all_constraints": ".constraints",
    "evaluate_constraint": ".constraints",
    "EngineOptions": ".application",
    "ParameterPolicy": ".application",
    "apply_parameters": ".application",
}


def __getattr__(name: str):
    try:
        module_name = _ATTRIBUTE_MODULES[name]
    except KeyError as exc:
        raise AttributeError(f"module 'garment' has no attribute {name!r}") from exc

    module = import_module(module_name, __name__)
    value = getattr(module, name)
    globals()[name] = value
    return value
