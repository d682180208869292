"""
RiskManager: pre-trade check of an order against position limits.

Consumes an order and the position keeper; returns the order to accept (as is,
or reduced to the available capacity) or None to reject. Never fills.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fxmake_core.order import Order
    from fxmake_core.position import PositionKeeper

logger = logging.getLogger(__name__)


class RiskManager(ABC):
    """
    Base class for risk managers. Approve, reject, or reduce orders
    before they are handed to PositionKeeper.fill.
    """

    @abstractmethod
    def check(
        self,
        order: "Order",
        keeper: "PositionKeeper",
    ) -> "Order | None":
        """
        Check order against risk rules. Return an Order to allow,
        or None to reject. May reduce size.
        """
        ...


class PositionLimitRiskManager(RiskManager):
    """
    Accepts orders that fit within the keeper's position limits. With
    allow_partial, an order that does not fit is reduced to the capacity left.
    """

    def __init__(self, allow_partial: bool = True) -> None:
        self.allow_partial = allow_partial

    def check(self, order: "Order", keeper: "PositionKeeper") -> "Order | None":
        cap = keeper.max_fill_without_exceeding_limit(order.asset_pair, order.side, order.price)
        if cap >= order.quantity:
            return order
        if self.allow_partial and cap > 0:
            logger.info("Order reduced: %s to %s", order.short_str(), cap)
            return order.with_quantity(cap)
        logger.info("Order blocked: %s, capacity %s", order.short_str(), max(cap, 0))
        return None
