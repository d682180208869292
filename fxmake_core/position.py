"""
PositionKeeper: signed positions per asset, fill caps against position limits,
and valuation of the book.

Every fill moves two legs: the base asset by the filled quantity and the terms
asset by quantity * price. We fill the client's order, so we take the
opposite side on the base leg and the order's own side on the terms leg.

Not thread safe. All fills and resets must come from a single writer; callers
needing concurrent access serialize through their own lock.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Hashable
from numbers import Real

from fxmake_core.asset import AssetPair
from fxmake_core.errors import InvalidArgumentError
from fxmake_core.order import Order, Side
from fxmake_core.rates import RateTable
from fxmake_core.settings import Settings

logger = logging.getLogger(__name__)


def signed_quantity(quantity: float, side: Side) -> float:
    """quantity for BUY, -quantity for SELL."""
    return quantity if side is Side.BUY else -quantity


class PositionKeeper:
    """
    Ledger of signed integer positions (positive = long). An asset never
    filled reads as 0; an entry created by a fill stays until reset.
    """

    def __init__(self, settings: Settings) -> None:
        if settings is None:
            raise InvalidArgumentError("settings is None")
        self.settings = settings
        self._positions: dict[Hashable, int] = {}

    def max_fill_without_exceeding_limit(
        self,
        asset_pair: AssetPair,
        order_side: Side,
        price: float,
    ) -> int:
        """
        Largest base quantity of an order on asset_pair/order_side at price
        that keeps both legs within their limits, truncated toward zero.

        Negative when a position is already beyond its limit (e.g. the limit
        was lowered after a fill); callers treat that as no capacity.
        """
        if asset_pair is None:
            raise InvalidArgumentError("asset_pair is None")
        if not isinstance(order_side, Side):
            raise InvalidArgumentError(f"illegal side: {order_side!r}")
        if (
            isinstance(price, bool)
            or not isinstance(price, Real)
            or price < 0
            or math.isnan(price)
            or math.isinf(price)
        ):
            raise InvalidArgumentError(f"illegal price: {price!r}")
        base, terms = asset_pair.base, asset_pair.terms
        base_limit = self.settings.max_allowed_position_size(base)
        terms_limit = self.settings.max_allowed_position_size(terms)
        base_headroom = base_limit - signed_quantity(self.position(base), order_side.opposite())
        terms_headroom = terms_limit - signed_quantity(self.position(terms), order_side)
        if base_headroom * price <= terms_headroom:
            cap = int(base_headroom)
        elif price == 0:
            # terms leg already beyond its limit; nothing moves it back at price 0
            cap = 0
        else:
            cap = int(terms_headroom / price)
        if cap < 0:
            logger.warning(
                "Position beyond limit for %s %s: cap %s (base headroom %s, terms headroom %s)",
                order_side, asset_pair, cap, base_headroom, terms_headroom,
            )
        return cap

    def fill(self, order: Order, allow_partial: bool) -> int:
        """
        Fill as much of order as the limits allow and return the filled base
        quantity. Without allow_partial the order fills completely or not at
        all. Both legs are updated together, or neither is (0 returned).
        """
        if order is None:
            raise InvalidArgumentError("order is None")
        pair = order.asset_pair
        cap = self.max_fill_without_exceeding_limit(pair, order.side, order.price)
        quantity = max(0, min(order.quantity, cap))
        if not allow_partial and quantity != order.quantity:
            logger.info("Fill refused: %s exceeds capacity %s", order.short_str(), cap)
            return 0
        base_delta = int(signed_quantity(quantity, order.side.opposite()))
        terms_delta = int(signed_quantity(quantity * order.price, order.side))
        if base_delta == 0 or terms_delta == 0:
            if quantity > 0:
                logger.info("Dust fill skipped: %s (base %s, terms %s)", order.short_str(), base_delta, terms_delta)
            return 0
        self._positions[pair.base] = self._positions.get(pair.base, 0) + base_delta
        self._positions[pair.terms] = self._positions.get(pair.terms, 0) + terms_delta
        logger.debug("Filled %s: %s %+d, %s %+d", order.short_str(), pair.base, base_delta, pair.terms, terms_delta)
        return abs(base_delta)

    def position(self, asset: Hashable) -> int:
        """Signed position in asset. 0 if never filled or reset."""
        return self._positions.get(asset, 0)

    def positions(self) -> dict[Hashable, int]:
        """Copy of all ledger entries (including entries back at 0)."""
        return dict(self._positions)

    def reset_position(self, asset: Hashable) -> None:
        """Drop the ledger entry for asset; subsequent reads return 0."""
        if self._positions.pop(asset, None) is not None:
            logger.info("Position reset: %s", asset)

    def reset_all(self) -> None:
        """Clear the whole ledger."""
        self._positions.clear()
        logger.info("All positions reset")

    def valuation(self, currency: Hashable, rate_table: RateTable) -> float:
        """
        Value of the whole book in currency: sum of position * rate(asset, currency).
        Zero positions are skipped without a rate lookup; RateNotFoundError
        propagates for any non-zero position without a resolvable rate.
        """
        self._check_valuation_args(currency, rate_table)
        value = 0.0
        for asset, position in self._positions.items():
            value += self._value(asset, position, currency, rate_table)
        return value

    def asset_valuation(self, asset: Hashable, currency: Hashable, rate_table: RateTable) -> float:
        """Value of the position in a single asset, in currency."""
        if asset is None:
            raise InvalidArgumentError("asset is None")
        self._check_valuation_args(currency, rate_table)
        return self._value(asset, self.position(asset), currency, rate_table)

    @staticmethod
    def _check_valuation_args(currency: Hashable, rate_table: RateTable) -> None:
        if currency is None:
            raise InvalidArgumentError("currency is None")
        if rate_table is None:
            raise InvalidArgumentError("rate_table is None")

    @staticmethod
    def _value(asset: Hashable, position: int, currency: Hashable, rate_table: RateTable) -> float:
        if position == 0:
            return 0.0
        return position * rate_table.rate(asset, currency)

    def __repr__(self) -> str:
        body = ", ".join(f"{asset}: {position}" for asset, position in self._positions.items())
        return f"{type(self).__name__}{{{body}}}"
