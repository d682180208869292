"""
Market-making example: check client orders against position limits, fill them,
and value the book.

Shows: StaticSettings, PositionLimitRiskManager, PositionKeeper fills (full and
partial), RateTable with inverse lookups, and the printed position report.
"""

from __future__ import annotations

import logging

from fxmake_core import (
    AssetPair,
    Currency,
    Order,
    PositionKeeper,
    PositionLimitRiskManager,
    RateTable,
    Side,
    StaticSettings,
)
from fxmake_core.report import print_report


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = StaticSettings.from_dict(
        {"default": 0, "limits": {"EUR": 1_000_000, "USD": 1_500_000, "GBP": 800_000}}
    )
    keeper = PositionKeeper(settings)
    risk = PositionLimitRiskManager(allow_partial=True)

    eurusd = AssetPair(Currency.EUR, Currency.USD)
    gbpusd = AssetPair(Currency.GBP, Currency.USD)
    orders = [
        Order(asset_pair=eurusd, party="bank-a", side=Side.BUY, price=1.0850, quantity=500_000),
        Order(asset_pair=gbpusd, party="fund-b", side=Side.SELL, price=1.2700, quantity=300_000),
        Order(asset_pair=eurusd, party="bank-a", side=Side.BUY, price=1.0860, quantity=2_000_000),
    ]

    for order in orders:
        approved = risk.check(order, keeper)
        if approved is None:
            print(f"  rejected {order.short_str()}")
            continue
        filled = keeper.fill(approved, allow_partial=False)
        print(f"  filled {filled:,} of {order.short_str()}")

    rates = (
        RateTable.builder()
        .with_rate(eurusd, 1.0855)
        .with_rate(gbpusd, 1.2705)
        .with_rate(Currency.EUR, Currency.GBP, 0.8544)
        .build()
    )
    print_report(keeper, Currency.USD, rates)
    print_report(keeper, Currency.EUR, rates)


if __name__ == "__main__":
    main()
