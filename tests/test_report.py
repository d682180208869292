"""
Tests for report: positions_frame and print_report.
"""

import math

import pytest

from fxmake_core import AssetPair, Currency, InvalidArgumentError, Order, PositionKeeper, RateTable, Side, StaticSettings
from fxmake_core.report import positions_frame, print_report

EUR, USD = Currency.EUR, Currency.USD
EURUSD = AssetPair(EUR, USD)


def filled_keeper() -> PositionKeeper:
    keeper = PositionKeeper(StaticSettings(max_position_sizes={EUR: 1_000_000, USD: 1_000_000}))
    keeper.fill(Order(asset_pair=EURUSD, party="p", side=Side.BUY, price=1.25, quantity=100_000), allow_partial=True)
    return keeper


def test_positions_frame_without_valuation():
    df = positions_frame(filled_keeper())
    assert list(df.columns) == ["asset", "position"]
    assert df["asset"].tolist() == ["EUR", "USD"]
    assert df["position"].tolist() == [-100_000, 125_000]


def test_positions_frame_with_valuation():
    df = positions_frame(filled_keeper(), USD, RateTable({EURUSD: 1.25}))
    assert list(df.columns) == ["asset", "position", "rate", "value"]
    assert df["rate"].tolist() == [1.25, 1.0]
    assert df["value"].tolist() == [-125_000.0, 125_000.0]


def test_positions_frame_zero_position_not_looked_up():
    keeper = filled_keeper()
    keeper.fill(Order(asset_pair=EURUSD, party="p", side=Side.SELL, price=1.25, quantity=100_000), allow_partial=True)
    df = positions_frame(keeper, Currency.GBP, RateTable())
    assert df["value"].tolist() == [0.0, 0.0]
    assert all(math.isnan(r) for r in df["rate"])


def test_positions_frame_empty():
    keeper = PositionKeeper(StaticSettings())
    df = positions_frame(keeper, USD, RateTable())
    assert df.empty
    assert list(df.columns) == ["asset", "position", "rate", "value"]


def test_positions_frame_requires_currency_with_rates():
    with pytest.raises(InvalidArgumentError):
        positions_frame(filled_keeper(), USD)


def test_print_report(capsys):
    total = print_report(filled_keeper(), USD, RateTable({EURUSD: 1.25}))
    assert total == 0.0
    out = capsys.readouterr().out
    assert "Positions (USD)" in out
    assert "Total value:" in out
