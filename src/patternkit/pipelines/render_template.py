"""Render a template with a parameter set to SVG."""

from __future__ import annotations

import argparse
import logging
from decimal import Decimal
from pathlib import Path
from typing import Mapping, Sequence

from exporters.patterns import PatternRenderer
from garment.parameters import ParameterValues

from ..config import Settings
from ..reader import load_parameters, load_template, parameters_from_mapping

logger = logging.getLogger(__name__)

__all__ = ["default_output_path", "main", "merge_values", "render_template"]


def default_output_path(template_path: Path) -> Path:
    name = template_path.name
    for suffix in (".zip", ".json"):
        if name.endswith(suffix):
            name = name[: -len(suffix)]
    return template_path.with_name(f"{name}.svg")


def merge_values(
    parameters_path: Path | None,
    overrides: Mapping[str, Decimal] | None = None,
) -> ParameterValues:
    """Combine a parameter file with ``--set`` overrides; overrides win."""

    values = load_parameters(parameters_path) if parameters_path is not None else ParameterValues()
    if overrides:
        merged = values.to_mapping()
        merged.update(overrides)
        values = parameters_from_mapping(merged)
    return values


def render_template(
    template_path: Path,
    parameters_path: Path | None = None,
    *,
    output: Path | None = None,
    pattern_output: Path | None = None,
    overrides: Mapping[str, Decimal] | None = None,
    settings: Settings | None = None,
) -> dict[str, Path]:
    """Load, deform, render and write a template. Returns the written files."""

    settings = settings or Settings()
    template = load_template(template_path)
    values = merge_values(parameters_path, overrides)
    if not len(values):
        logger.info("no parameters supplied, rendering %s with neutral values", template_path)

    renderer = PatternRenderer(
        engine_options=settings.engine_options(),
        render_options=settings.render_options(),
    )
    created = renderer.export(
        template,
        values,
        output=output or default_output_path(template_path),
        pattern_output=pattern_output,
    )
    for fmt, path in created.items():
        logger.info("wrote %s to %s", fmt, path)
    return created


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render a garment template to SVG.")
    parser.add_argument("template", type=Path, help="Template archive or specification JSON")
    parser.add_argument("parameters", type=Path, nargs="?", help="Parameter file (TOML, JSON or YAML)")
    parser.add_argument("--output", type=Path, help="Where to write the SVG")
    args = parser.parse_args(argv)

    created = render_template(args.template, args.parameters, output=args.output, settings=Settings.from_env())
    for fmt, path in created.items():
        print(f"Wrote {fmt.upper()} to {path}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
