"""
Order: a client order as seen by the position keeper.

Immutable. Price and quantity are validated here so the keeper can trust them.
"""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from numbers import Integral, Real

from fxmake_core.asset import AssetPair
from fxmake_core.errors import InvalidArgumentError

_ID_GENERATOR = itertools.count(1)


class Side(Enum):
    BUY = "buy"
    SELL = "sell"

    def opposite(self) -> Side:
        return Side.SELL if self is Side.BUY else Side.BUY

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Order:
    """
    Order for `quantity` units of the pair's base asset at `price` (terms per base).
    `id` is unique per process and increasing; it is not part of equality.
    """

    asset_pair: AssetPair
    party: str
    side: Side
    price: float
    quantity: int
    id: int = field(default_factory=lambda: next(_ID_GENERATOR), compare=False)

    def __post_init__(self) -> None:
        if self.asset_pair is None:
            raise InvalidArgumentError("asset_pair is None")
        if self.party is None:
            raise InvalidArgumentError("party is None")
        if not isinstance(self.side, Side):
            raise InvalidArgumentError(f"illegal side: {self.side!r}")
        if (
            isinstance(self.price, bool)
            or not isinstance(self.price, Real)
            or self.price < 0
            or math.isnan(self.price)
            or math.isinf(self.price)
        ):
            raise InvalidArgumentError(f"illegal price: {self.price}")
        if not isinstance(self.quantity, Integral) or isinstance(self.quantity, bool) or self.quantity <= 0:
            raise InvalidArgumentError(f"illegal quantity: {self.quantity}")

    def with_quantity(self, remaining: int) -> Order:
        """Copy of this order (new id) for a remaining quantity not above the original."""
        if remaining > self.quantity:
            raise InvalidArgumentError(f"remaining quantity exceeds order quantity: {remaining} > {self}")
        return replace(self, quantity=remaining, id=next(_ID_GENERATOR))

    def short_str(self) -> str:
        return f"{self.side}:{self.asset_pair}[{self.quantity:,}@{self.price:.5f}]"
