"""Command pipelines built on the garment engine and exporters."""

from .check_template import check_template, describe_template
from .render_template import render_template

__all__ = ["check_template", "describe_template", "render_template"]
