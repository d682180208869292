"""
Settings: position limits per asset.

The keeper only needs `max_allowed_position_size`; StaticSettings is the
in-memory implementation, loadable from a dict or from environment variables.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from numbers import Integral
from types import MappingProxyType
from typing import Any

from fxmake_core.asset import resolve_asset
from fxmake_core.errors import InvalidArgumentError

# Environment variables read by StaticSettings.from_env(): <prefix>DEFAULT and <prefix><ASSET>.
MAX_POSITION_ENV_PREFIX = "FXMAKE_MAX_POSITION_"


class Settings(ABC):
    """Source of position limits. Values must not change during a fill computation."""

    @abstractmethod
    def max_allowed_position_size(self, asset: Hashable) -> int:
        """
        Maximum absolute position for asset; the position must stay within
        [-limit, +limit]. Never negative.
        """
        ...


def _validate_limit(name: Any, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral) or value < 0:
        raise InvalidArgumentError(f"illegal max position size for {name}: {value!r}")
    return int(value)


@dataclass(frozen=True)
class StaticSettings(Settings):
    """Fixed limits: per-asset overrides, else the default (0 = no position allowed)."""

    default_max_position_size: int = 0
    max_position_sizes: Mapping[Hashable, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _validate_limit("default", self.default_max_position_size)
        if self.max_position_sizes is None:
            raise InvalidArgumentError("max_position_sizes is None")
        limits = {asset: _validate_limit(asset, v) for asset, v in self.max_position_sizes.items()}
        object.__setattr__(self, "max_position_sizes", MappingProxyType(limits))

    def max_allowed_position_size(self, asset: Hashable) -> int:
        return self.max_position_sizes.get(asset, self.default_max_position_size)

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> StaticSettings:
        """
        Build from a plain mapping, e.g. loaded from JSON/YAML:
        {"default": 0, "limits": {"EUR": 1000000, "USD": 1000000}}.
        Asset codes that name a known currency resolve to Currency members.
        """
        limits = {resolve_asset(code): value for code, value in (config.get("limits") or {}).items()}
        return cls(default_max_position_size=config.get("default", 0), max_position_sizes=limits)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        prefix: str = MAX_POSITION_ENV_PREFIX,
    ) -> StaticSettings:
        """Build from <prefix>DEFAULT and <prefix><ASSET> integer variables."""
        env = os.environ if environ is None else environ
        default = 0
        limits: dict[Hashable, int] = {}
        for key, raw in env.items():
            if not key.startswith(prefix):
                continue
            name = key[len(prefix):]
            try:
                value = int(raw)
            except ValueError as e:
                raise InvalidArgumentError(f"{key} is not an integer: {raw!r}") from e
            if name == "DEFAULT":
                default = value
            elif name:
                limits[resolve_asset(name)] = value
        return cls(default_max_position_size=default, max_position_sizes=limits)
