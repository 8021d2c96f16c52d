"""Schema definitions and validation helpers."""

from .validators import (
    PARAMETERS_SCHEMA_NAME,
    TEMPLATE_SCHEMA_NAME,
    SchemaValidationError,
    load_schema,
    validate_parameters_payload,
    validate_payload,
    validate_template_payload,
)

__all__ = [
    "PARAMETERS_SCHEMA_NAME",
    "TEMPLATE_SCHEMA_NAME",
    "SchemaValidationError",
    "load_schema",
    "validate_parameters_payload",
    "validate_payload",
    "validate_template_payload",
]
