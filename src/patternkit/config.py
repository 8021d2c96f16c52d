"""Runtime settings resolved from the environment and command line."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping, TypeVar

from exporters.patterns import RenderOptions
from garment.application import EngineOptions, ParameterPolicy
from garment.constraints import DEFAULT_TOLERANCE

ENV_PREFIX = "PATTERNKIT_"

T = TypeVar("T")

__all__ = ["ENV_PREFIX", "Settings"]


def _finite_decimal(raw: str) -> Decimal:
    value = Decimal(raw)
    if not value.is_finite():
        raise ValueError(f"not a finite number: {raw!r}")
    return value


def _parse(name: str, raw: str, convert: Callable[[str], T]) -> T:
    try:
        return convert(raw.strip())
    except (ValueError, InvalidOperation) as exc:
        raise ValueError(f"{name}={raw!r} is invalid") from exc


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved configuration for one invocation."""

    log_level: str = "WARNING"
    log_file: str | None = None
    policy: ParameterPolicy = ParameterPolicy.ADDITIVE
    require_all: bool = False
    tolerance: Decimal = DEFAULT_TOLERANCE
    check_constraints: bool = True
    jobs: int = 1
    margin: Decimal = Decimal(0)
    stroke_width: Decimal = Decimal(3)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Read ``PATTERNKIT_*`` variables, falling back to defaults."""

        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        if level := env.get(f"{ENV_PREFIX}LOG_LEVEL"):
            values["log_level"] = level.upper()
        if log_file := env.get(f"{ENV_PREFIX}LOG_FILE"):
            values["log_file"] = log_file
        if policy := env.get(f"{ENV_PREFIX}POLICY"):
            values["policy"] = _parse(f"{ENV_PREFIX}POLICY", policy, lambda raw: ParameterPolicy(raw.lower()))
        if jobs := env.get(f"{ENV_PREFIX}JOBS"):
            values["jobs"] = max(1, _parse(f"{ENV_PREFIX}JOBS", jobs, int))
        if tolerance := env.get(f"{ENV_PREFIX}TOLERANCE"):
            values["tolerance"] = _parse(f"{ENV_PREFIX}TOLERANCE", tolerance, _finite_decimal)
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-``None`` override applied."""

        return replace(self, **{key: value for key, value in overrides.items() if value is not None})

    def engine_options(self) -> EngineOptions:
        return EngineOptions(
            policy=self.policy,
            require_all=self.require_all,
            tolerance=self.tolerance,
            check_constraints=self.check_constraints,
        )

    def render_options(self) -> RenderOptions:
        return RenderOptions(stroke_width=self.stroke_width, margin=self.margin, jobs=self.jobs)
