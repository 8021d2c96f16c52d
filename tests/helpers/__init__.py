"""Test helper utilities exposed for import convenience."""
from .templates import (
    build_template,
    dump_json,
    garment_payload,
    single_edge_payload,
    write_template_archive,
    write_template_json,
)

__all__ = [
    "build_template",
    "dump_json",
    "garment_payload",
    "single_edge_payload",
    "write_template_archive",
    "write_template_json",
]
