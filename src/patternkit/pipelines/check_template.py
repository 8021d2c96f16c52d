"""Describe templates and report constraint status after deformation."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Mapping

from garment.application import apply_parameters
from garment.constraints import ConstraintResult, check_all_constraints
from garment.template_model import Template

from ..config import Settings
from ..reader import load_template
from .render_template import merge_values

__all__ = ["check_template", "describe_template"]


def describe_template(template: Template) -> list[str]:
    """Human-readable summary of panels, parameters and constraints in declared order."""

    lines = [
        f"units_in_meter: {template.properties.units_in_meter}",
        f"curvature_coords: {template.properties.curvature_coords.value}",
        "panels:",
    ]
    for name, panel in template.pattern.ordered_panels():
        lines.append(f"  {name}: {len(panel.vertices)} vertices, {len(panel.edges)} edges")
    lines.append("parameters:")
    for name, parameter in template.ordered_parameters():
        low, high = parameter.range
        panels = ", ".join(sorted({influence.panel for influence in parameter.influence}))
        lines.append(
            f"  {name}: {parameter.kind.value} [{low}, {high}] neutral={parameter.value} panels={panels}"
        )
    lines.append("constraints:")
    for name, constraint in template.ordered_constraints():
        edges = ", ".join(f"{panel}[{edge}]" for panel, edge in sorted(constraint.edge_keys()))
        lines.append(f"  {name}: {constraint.kind.value} {edges}")
    lines.append(f"stitches: {len(template.pattern.stitches)}")
    return lines


def check_template(
    template_path: Path,
    parameters_path: Path | None = None,
    *,
    overrides: Mapping[str, Decimal] | None = None,
    settings: Settings | None = None,
) -> list[ConstraintResult]:
    """Apply parameters without constraint enforcement and evaluate every constraint."""

    settings = (settings or Settings()).with_overrides(check_constraints=False)
    template = load_template(template_path)
    values = merge_values(parameters_path, overrides)
    pattern = apply_parameters(template, values, settings.engine_options())
    return check_all_constraints(template, pattern, tolerance=settings.tolerance)
