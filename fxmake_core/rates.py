"""
RateTable: immutable snapshot of exchange rates between assets.

Rates are stored in the direction supplied; the reverse direction is derived
as the inverse. Lookups are a single hop only: no path search through a
third asset. Safe for concurrent reads once built.
"""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable, Mapping
from pathlib import Path

import pandas as pd

from fxmake_core.asset import AssetPair, resolve_asset
from fxmake_core.errors import InvalidArgumentError, InvalidRateError, RateNotFoundError


def _validate_entry(pair: AssetPair | None, rate: object) -> float:
    if pair is None:
        raise InvalidRateError("asset pair is None")
    if getattr(pair, "base", None) is None:
        raise InvalidRateError(f"assetPair.base is None for {pair}")
    if getattr(pair, "terms", None) is None:
        raise InvalidRateError(f"assetPair.terms is None for {pair}")
    if rate is None:
        raise InvalidRateError(f"rate value is None for {pair}")
    if isinstance(rate, (bool, str, bytes)):
        raise InvalidRateError(f"rate value is not a number for {pair}: {rate!r}")
    try:
        value = float(rate)
    except (TypeError, ValueError) as e:
        raise InvalidRateError(f"rate value is not a number for {pair}: {rate!r}") from e
    if math.isnan(value) or math.isinf(value) or value <= 0:
        raise InvalidRateError(f"illegal rate {value} for {pair}")
    return value


def _cell(value: object, column: str) -> str:
    """Non-blank text of a frame cell; a missing asset fails the whole table."""
    if value is None or pd.isna(value) or not str(value).strip():
        raise InvalidRateError(f"missing {column} in rates frame")
    return str(value)


class RateTable:
    """
    Exchange rates keyed by (from asset, to asset).

    Accepts a mapping AssetPair -> rate or an iterable of (AssetPair, rate).
    A later entry for the same ordered pair replaces an earlier one.
    """

    __slots__ = ("_rates", "_pairs")

    def __init__(
        self,
        entries: Mapping[AssetPair, float] | Iterable[tuple[AssetPair, float]] = (),
    ) -> None:
        if entries is None:
            raise InvalidRateError("rate entries are None")
        items = entries.items() if isinstance(entries, Mapping) else entries
        rates: dict[Hashable, dict[Hashable, float]] = {}
        pairs: dict[AssetPair, float] = {}
        for pair, rate in items:
            value = _validate_entry(pair, rate)
            rates.setdefault(pair.base, {})[pair.terms] = value
            pairs[pair] = value
        self._rates = rates
        self._pairs = pairs

    def rate(self, from_asset: Hashable, to_asset: Hashable) -> float:
        """
        Rate converting one unit of from_asset into to_asset.
        1 for identical assets, else the stored rate, else the inverse of the
        reverse rate. Raises RateNotFoundError when neither is stored.
        """
        if from_asset is None:
            raise InvalidArgumentError("from is None")
        if to_asset is None:
            raise InvalidArgumentError("to is None")
        if from_asset == to_asset:
            return 1.0
        direct = self._rate_or_none(from_asset, to_asset)
        if direct is not None:
            return direct
        reverse = self._rate_or_none(to_asset, from_asset)
        if reverse is not None:
            return 1.0 / reverse
        raise RateNotFoundError(from_asset, to_asset)

    def has_rate(self, from_asset: Hashable, to_asset: Hashable) -> bool:
        """True if rate(from_asset, to_asset) would resolve."""
        return (
            from_asset == to_asset
            or self._rate_or_none(from_asset, to_asset) is not None
            or self._rate_or_none(to_asset, from_asset) is not None
        )

    def _rate_or_none(self, from_asset: Hashable, to_asset: Hashable) -> float | None:
        rates = self._rates.get(from_asset)
        return rates.get(to_asset) if rates is not None else None

    def pairs(self) -> list[tuple[AssetPair, float]]:
        """Stored entries in insertion order (directional, no derived inverses)."""
        return list(self._pairs.items())

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        body = ", ".join(f"{pair}={rate:.5f}" for pair, rate in self._pairs.items())
        return f"{type(self).__name__}{{{body}}}"

    @staticmethod
    def builder() -> RateTableBuilder:
        return RateTableBuilder()

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> RateTable:
        """
        Build from a DataFrame with a 'rate' column and either a 'pair'
        column ('EUR/USD') or 'base' and 'terms' columns. Column names are
        case-insensitive.
        """
        out = df.copy()
        out.columns = [str(c).lower().strip() for c in out.columns]
        if "rate" not in out.columns:
            raise InvalidArgumentError("rates frame has no 'rate' column")
        if "pair" in out.columns:
            pairs = [AssetPair.parse(_cell(p, "pair")) for p in out["pair"]]
        elif "base" in out.columns and "terms" in out.columns:
            pairs = [
                AssetPair(resolve_asset(_cell(b, "base")), resolve_asset(_cell(t, "terms")))
                for b, t in zip(out["base"], out["terms"])
            ]
        else:
            raise InvalidArgumentError("rates frame needs a 'pair' column or 'base' and 'terms' columns")
        rates = [None if pd.isna(r) else float(r) for r in out["rate"]]
        return cls(zip(pairs, rates))


class RateTableBuilder:
    """Collects rates and builds an immutable RateTable."""

    def __init__(self) -> None:
        self._entries: dict[AssetPair, float] = {}

    def with_rate(self, *args: object) -> RateTableBuilder:
        """with_rate(pair, rate) or with_rate(base, terms, rate)."""
        if len(args) == 2:
            pair, rate = args
        elif len(args) == 3:
            pair, rate = AssetPair(args[0], args[1]), args[2]
        else:
            raise TypeError(f"with_rate() takes (pair, rate) or (base, terms, rate), got {len(args)} arguments")
        self._entries[pair] = rate
        return self

    def build(self) -> RateTable:
        return RateTable(self._entries)

    def __repr__(self) -> str:
        return f"Builder@{self.build()!r}"


def load_rates_csv(path: str | Path) -> RateTable:
    """Read rates from CSV (pair,rate or base,terms,rate) into a RateTable."""
    return RateTable.from_dataframe(pd.read_csv(path))
