"""
Tests for PositionLimitRiskManager: accept, reduce, or block orders against position limits.
"""

from fxmake_core import AssetPair, Currency, Order, PositionKeeper, PositionLimitRiskManager, Side, StaticSettings

EUR, USD = Currency.EUR, Currency.USD
EURUSD = AssetPair(EUR, USD)


def make_keeper() -> PositionKeeper:
    return PositionKeeper(StaticSettings(max_position_sizes={EUR: 1_000_000, USD: 1_000_000}))


def test_order_within_limits_passes_unchanged():
    order = Order(asset_pair=EURUSD, party="p", side=Side.BUY, price=1.1, quantity=100_000)
    assert PositionLimitRiskManager().check(order, make_keeper()) is order


def test_oversized_order_reduced_to_capacity():
    keeper = make_keeper()
    order = Order(asset_pair=EURUSD, party="p", side=Side.BUY, price=1.1, quantity=2_000_000)
    approved = PositionLimitRiskManager(allow_partial=True).check(order, keeper)
    assert approved is not None
    assert approved.quantity == 909_090
    assert approved.side == Side.BUY
    assert approved.id != order.id
    # reduced order then fills completely
    assert keeper.fill(approved, allow_partial=False) == 909_090


def test_oversized_order_blocked_without_partial():
    order = Order(asset_pair=EURUSD, party="p", side=Side.BUY, price=1.1, quantity=2_000_000)
    assert PositionLimitRiskManager(allow_partial=False).check(order, make_keeper()) is None


def test_no_capacity_blocks_order():
    keeper = make_keeper()
    keeper.fill(Order(asset_pair=EURUSD, party="p", side=Side.BUY, price=1.0, quantity=1_000_000), allow_partial=False)
    order = Order(asset_pair=EURUSD, party="p", side=Side.BUY, price=1.0, quantity=10)
    assert PositionLimitRiskManager().check(order, keeper) is None


def test_check_does_not_change_positions():
    keeper = make_keeper()
    order = Order(asset_pair=EURUSD, party="p", side=Side.SELL, price=1.25, quantity=5_000_000)
    PositionLimitRiskManager().check(order, keeper)
    assert keeper.positions() == {}
