"""Command line application for rendering and checking garment templates."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import tomllib
import zipfile
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Sequence

import yaml

from garment.application import ParameterPolicy
from garment.errors import CorruptTemplateError, RenderError
from schemas.validators import SchemaValidationError

from .config import Settings
from .logging_config import setup_logging
from .pipelines.check_template import check_template, describe_template
from .pipelines.render_template import render_template
from .reader import TemplatesNotFound, load_template

logger = logging.getLogger(__name__)

EXIT_INPUT_ERROR = 2
EXIT_CORRUPT_TEMPLATE = 3

_INPUT_ERRORS = (
    RenderError,
    SchemaValidationError,
    TemplatesNotFound,
    OSError,
    zipfile.BadZipFile,
    json.JSONDecodeError,
    tomllib.TOMLDecodeError,
    yaml.YAMLError,
    ValueError,
)

__all__ = ["build_cli", "build_parser", "parse_assignment", "parse_decimal"]


def parse_assignment(text: str) -> tuple[str, Decimal]:
    """Parse ``name=value`` from ``--set``."""

    name, sep, raw = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, received {text!r}")
    try:
        return name.strip(), Decimal(raw.strip())
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"invalid number for {name.strip()!r}: {raw!r}") from exc


def parse_decimal(text: str) -> Decimal:
    try:
        value = Decimal(text.strip())
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}") from exc
    if not value.is_finite():
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}")
    return value


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--log-level", help="Logging level (default: PATTERNKIT_LOG_LEVEL or WARNING)")
    parser.add_argument("--log-file", help="Also write log output to this file")


def _add_parameter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "parameters",
        type=Path,
        nargs="?",
        help="Parameter file (TOML, JSON or YAML). Omit to use neutral values.",
    )
    parser.add_argument(
        "--set",
        dest="assignments",
        type=parse_assignment,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Override a single parameter value; may be repeated",
    )
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in ParameterPolicy],
        help="How values relate to neutral values (default: additive)",
    )
    parser.add_argument(
        "--require-all",
        action="store_true",
        default=None,
        help="Fail when a declared parameter has no supplied value",
    )
    parser.add_argument("--tolerance", type=parse_decimal, help="Relative tolerance for constraint checks")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Parametric garment pattern renderer")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Apply parameters to a template and write SVG")
    render.add_argument("template", type=Path, help="Template archive or specification JSON")
    _add_parameter_arguments(render)
    render.add_argument("--output", type=Path, help="SVG output path (default: next to the template)")
    render.add_argument("--pattern-output", type=Path, help="Also write the deformed pattern as JSON")
    render.add_argument(
        "--no-constraints",
        dest="check_constraints",
        action="store_false",
        default=None,
        help="Skip constraint validation after each parameter",
    )
    render.add_argument("--jobs", type=int, help="Render panels with this many worker threads")
    render.add_argument("--margin", type=parse_decimal, help="Extra space around the viewport")
    render.add_argument("--stroke-width", type=parse_decimal, help="Stroke width of edge paths")
    _add_common_arguments(render)

    inspect = subparsers.add_parser("inspect", help="Describe the panels, parameters and constraints")
    inspect.add_argument("template", type=Path, help="Template archive or specification JSON")
    _add_common_arguments(inspect)

    check = subparsers.add_parser("check", help="Apply parameters and report every constraint")
    check.add_argument("template", type=Path, help="Template archive or specification JSON")
    _add_parameter_arguments(check)
    _add_common_arguments(check)

    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    policy = getattr(args, "policy", None)
    return Settings.from_env().with_overrides(
        log_level=args.log_level.upper() if args.log_level else None,
        log_file=args.log_file,
        policy=ParameterPolicy(policy) if policy else None,
        require_all=getattr(args, "require_all", None),
        tolerance=getattr(args, "tolerance", None),
        check_constraints=getattr(args, "check_constraints", None),
        jobs=getattr(args, "jobs", None),
        margin=getattr(args, "margin", None),
        stroke_width=getattr(args, "stroke_width", None),
    )


def _run(args: argparse.Namespace, settings: Settings) -> int:
    if args.command == "render":
        created = render_template(
            args.template,
            args.parameters,
            output=args.output,
            pattern_output=args.pattern_output,
            overrides=dict(args.assignments),
            settings=settings,
        )
        for fmt, path in created.items():
            print(f"Wrote {fmt.upper()} to {path}")
        return 0

    if args.command == "inspect":
        for line in describe_template(load_template(args.template)):
            print(line)
        return 0

    if args.command == "check":
        results = check_template(
            args.template,
            args.parameters,
            overrides=dict(args.assignments),
            settings=settings,
        )
        for result in results:
            status = "ok" if result.ok else "VIOLATED"
            detail = ", ".join(f"{label}={value}" for label, value in result.as_mapping().items())
            print(f"{result.name}: {result.kind.value} {status} {detail}".rstrip())
        return 0 if all(result.ok for result in results) else 1

    raise ValueError(f"Unknown command: {args.command}")


def build_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = _settings_from_args(args)
        setup_logging(settings.log_level, settings.log_file)
    except (ValueError, OSError) as exc:
        print(f"error: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        return _run(args, settings)
    except CorruptTemplateError as exc:
        logger.exception("corrupt template %s", args.template)
        print(f"error: corrupt template: {exc}", file=sys.stderr)
        return EXIT_CORRUPT_TEMPLATE
    except _INPUT_ERRORS as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR
