"""User-supplied parameter values."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterator, Mapping

from .geometry import to_decimal

__all__ = ["ParameterValues"]


@dataclass(slots=True)
class ParameterValues:
    """Flat mapping of parameter names to values.

    Any subset of a template's parameters may be present; omitted ones keep
    their neutral value.
    """

    values: dict[str, Decimal] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "ParameterValues":
        return cls(values={str(name): to_decimal(value) for name, value in payload.items()})

    def to_mapping(self) -> dict[str, Decimal]:
        return dict(self.values)

    def get(self, name: str) -> Decimal | None:
        return self.values.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)
