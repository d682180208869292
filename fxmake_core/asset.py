"""
Assets and asset pairs.

An asset is any hashable identifier with value equality. Currencies are the
usual case and have their own enum; an AssetPair is the two legs of a traded
instrument (base priced in terms).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from collections.abc import Hashable

from fxmake_core.errors import InvalidArgumentError


class Currency(str, Enum):
    EUR = "EUR"
    USD = "USD"
    GBP = "GBP"
    JPY = "JPY"
    CHF = "CHF"
    AUD = "AUD"
    NZD = "NZD"
    CAD = "CAD"
    SEK = "SEK"
    NOK = "NOK"

    def __str__(self) -> str:
        return self.value


def resolve_asset(code: str) -> Hashable:
    """Currency member for a known ISO code, else the stripped code itself."""
    code = str(code).strip()
    try:
        return Currency(code.upper())
    except ValueError:
        return code


@dataclass(frozen=True)
class AssetPair:
    """
    Two distinct assets: quantities are in base, prices in terms per unit of base.
    Immutable and hashable.
    """

    base: Hashable
    terms: Hashable

    def __post_init__(self) -> None:
        if self.base is None:
            raise InvalidArgumentError("base is None")
        if self.terms is None:
            raise InvalidArgumentError("terms is None")
        if self.base == self.terms:
            raise InvalidArgumentError(f"base and terms must differ: {self.base}")

    @classmethod
    def parse(cls, text: str) -> AssetPair:
        """Build a pair from 'BASE/TERMS' (e.g. 'EUR/USD')."""
        parts = str(text).split("/")
        if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
            raise InvalidArgumentError(f"illegal asset pair: {text!r}")
        return cls(resolve_asset(parts[0]), resolve_asset(parts[1]))

    def inverse(self) -> AssetPair:
        return AssetPair(self.terms, self.base)

    def __str__(self) -> str:
        return f"{self.base}/{self.terms}"
