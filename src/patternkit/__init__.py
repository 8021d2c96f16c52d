"""Load, deform and render parametric garment templates."""

from __future__ import annotations

from .config import Settings
from .reader import TemplateReader, TemplatesNotFound, load_parameters, load_template

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "TemplateReader",
    "TemplatesNotFound",
    "__version__",
    "load_parameters",
    "load_template",
]
