"""
fxmake-core: position and risk-limit engine for a simulated FX market-making desk.

Tracks signed positions per asset, caps fills against position limits, and
values the book through a rate table. No matching, routing, or persistence.
"""

__version__ = "0.1.0"

from fxmake_core.asset import AssetPair, Currency
from fxmake_core.errors import FxMakeError, InvalidArgumentError, InvalidRateError, RateNotFoundError
from fxmake_core.order import Order, Side
from fxmake_core.position import PositionKeeper
from fxmake_core.rates import RateTable, load_rates_csv
from fxmake_core.risk import PositionLimitRiskManager, RiskManager
from fxmake_core.settings import Settings, StaticSettings

__all__ = [
    "AssetPair",
    "Currency",
    "FxMakeError",
    "InvalidArgumentError",
    "InvalidRateError",
    "RateNotFoundError",
    "Order",
    "Side",
    "PositionKeeper",
    "RateTable",
    "load_rates_csv",
    "RiskManager",
    "PositionLimitRiskManager",
    "Settings",
    "StaticSettings",
]
