"""Strict structural validation for template and parameter payloads."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator, ValidationError

TEMPLATE_SCHEMA_NAME = "template_specification.yaml"
PARAMETERS_SCHEMA_NAME = "parameters.yaml"

__all__ = [
    "PARAMETERS_SCHEMA_NAME",
    "TEMPLATE_SCHEMA_NAME",
    "SchemaValidationError",
    "load_schema",
    "validate_parameters_payload",
    "validate_payload",
    "validate_template_payload",
]


class SchemaValidationError(RuntimeError):
    """Raised when an instance fails schema validation."""

    def __init__(self, errors: Iterable[ValidationError], *, source: str | None = None):
        self.errors = tuple(errors)
        self.source = source
        where = f" for {source}" if source else ""
        message = f"Schema validation failed{where}:\n" + "\n".join(_format_error(e) for e in self.errors)
        super().__init__(message)


def _schema_dir() -> Path:
    return Path(__file__).resolve().parent


@lru_cache(maxsize=4)
def load_schema(name: str = TEMPLATE_SCHEMA_NAME) -> Mapping[str, Any]:
    """Load and cache a schema definition by name."""

    schema_path = _schema_dir() / name
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema '{name}' not found at {schema_path}")

    with schema_path.open("r", encoding="utf-8") as handle:
        schema = yaml.safe_load(handle)

    if not isinstance(schema, Mapping):
        raise TypeError(f"Schema '{name}' must decode to a mapping, received {type(schema)!r}")

    Draft202012Validator.check_schema(schema)
    return schema


@lru_cache(maxsize=4)
def _validator(name: str) -> Draft202012Validator:
    return Draft202012Validator(load_schema(name))


def validate_payload(instance: Any, *, schema_name: str, source: str | None = None) -> None:
    """Validate *instance* against the named schema, reporting every error."""

    errors = sorted(
        _validator(schema_name).iter_errors(instance),
        key=lambda exc: [str(part) for part in exc.absolute_path],
    )
    if errors:
        raise SchemaValidationError(errors, source=source)


def validate_template_payload(instance: Any, *, source: str | None = None) -> None:
    """Validate a decoded template specification; unknown fields are rejected."""

    validate_payload(instance, schema_name=TEMPLATE_SCHEMA_NAME, source=source)


def validate_parameters_payload(instance: Any, *, source: str | None = None) -> None:
    """Validate a decoded parameter file: a flat name to number mapping."""

    validate_payload(instance, schema_name=PARAMETERS_SCHEMA_NAME, source=source)


def _format_error(error: ValidationError) -> str:
    location = " / ".join(str(component) for component in error.absolute_path)
    prefix = f"[{location}] " if location else ""
    return f"{prefix}{error.message}"
