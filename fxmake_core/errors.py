"""
Error types raised by the position and rate components.

All failures are immediate and synchronous; nothing here is retried.
"""

from __future__ import annotations

from collections.abc import Hashable


class FxMakeError(Exception):
    """Base class for all fxmake-core errors."""


class InvalidArgumentError(FxMakeError, ValueError):
    """A required argument is missing or outside its valid domain."""


class InvalidRateError(FxMakeError, ValueError):
    """A rate table entry has a missing asset or a non-positive, NaN or infinite rate."""


class RateNotFoundError(FxMakeError, LookupError):
    """Neither a direct nor an inverse rate is stored for the requested pair."""

    def __init__(self, from_asset: Hashable, to_asset: Hashable) -> None:
        self.from_asset = from_asset
        self.to_asset = to_asset
        super().__init__(f"no market rate present for: {from_asset}/{to_asset}")
