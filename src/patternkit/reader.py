"""Load template specifications from archives and parameter files from disk."""

from __future__ import annotations

import json
import logging
import tomllib
import zipfile
from decimal import Decimal
from pathlib import Path, PurePosixPath
from typing import Any, Mapping, Sequence

import yaml

from garment.parameters import ParameterValues
from garment.template_model import Template
from schemas.validators import validate_parameters_payload, validate_template_payload

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = "template_specification.json"
_CONTEXT_LINES = 10

__all__ = [
    "TEMPLATE_SUFFIX",
    "TemplateReader",
    "TemplatesNotFound",
    "decode_json",
    "load_parameters",
    "load_template",
    "parameters_from_mapping",
    "parse_template",
]


class TemplatesNotFound(LookupError):
    """The archive does not hold exactly one template specification."""

    def __init__(self, source: Path | str, candidates: Sequence[str] = ()) -> None:
        self.source = str(source)
        self.candidates = tuple(candidates)
        if self.candidates:
            detail = f"ambiguous template specification in {self.source}: {', '.join(self.candidates)}"
        else:
            detail = f"template not found in {self.source}"
        super().__init__(detail)


def _log_decode_context(text: str, line: int) -> None:
    for number, content in enumerate(text.splitlines(), start=1):
        if number == line:
            logger.debug("%03d > %s", number, content)
        elif abs(number - line) <= _CONTEXT_LINES:
            logger.debug("%03d   %s", number, content)


def decode_json(text: str, *, source: str | None = None) -> Any:
    """Decode JSON with floats kept as :class:`Decimal`."""

    try:
        return json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as exc:
        logger.debug("%s: %s", source or "<json>", exc)
        _log_decode_context(text, exc.lineno)
        raise


def parse_template(text: str, *, source: str | None = None) -> Template:
    payload = decode_json(text, source=source)
    validate_template_payload(payload, source=source)
    template = Template.from_mapping(payload)
    logger.debug(
        "template %s: %d panels, %d parameters, %d constraints",
        source or "<text>",
        len(template.pattern.panels),
        len(template.parameters),
        len(template.constraints),
    )
    return template


class TemplateReader:
    """Read the template specification stored inside a zip archive."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._zip = zipfile.ZipFile(self.path)
        logger.debug("zip file open: %s", self.path)

    def __enter__(self) -> "TemplateReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._zip.close()

    def template_member(self) -> str:
        """Name of the unique member whose file name ends with the template suffix."""

        matches = [
            info.filename
            for info in self._zip.infolist()
            if not info.is_dir() and PurePosixPath(info.filename).name.endswith(TEMPLATE_SUFFIX)
        ]
        if len(matches) != 1:
            raise TemplatesNotFound(self.path, matches)
        return matches[0]

    def template(self) -> Template:
        member = self.template_member()
        text = self._zip.read(member).decode("utf-8")
        return parse_template(text, source=f"{self.path}:{member}")


def load_template(path: Path | str) -> Template:
    """Load a template from a zip archive or a bare JSON specification."""

    path = Path(path)
    if zipfile.is_zipfile(path):
        with TemplateReader(path) as reader:
            return reader.template()
    return parse_template(path.read_text(encoding="utf-8"), source=str(path))


def _decode_parameters(path: Path) -> Any:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        return tomllib.loads(text, parse_float=Decimal)
    if suffix == ".json":
        return decode_json(text, source=str(path))
    if suffix in {".yaml", ".yml"}:
        return yaml.safe_load(text)
    raise ValueError(f"Unsupported parameter file extension '{suffix}' for {path}")


def load_parameters(path: Path | str) -> ParameterValues:
    """Load parameter values from a TOML, JSON or YAML file."""

    path = Path(path)
    payload = _decode_parameters(path)
    if payload is None:
        payload = {}
    validate_parameters_payload(payload, source=str(path))
    values = ParameterValues.from_mapping(payload)
    logger.debug("parameters %s: %s", path, values.to_mapping())
    return values


def parameters_from_mapping(payload: Mapping[str, Any]) -> ParameterValues:
    validate_parameters_payload(payload)
    return ParameterValues.from_mapping(payload)
