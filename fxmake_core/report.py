"""
Position report: ledger as a DataFrame and a printed book summary.
"""

from __future__ import annotations

from collections.abc import Hashable

import pandas as pd

from fxmake_core.errors import InvalidArgumentError
from fxmake_core.position import PositionKeeper
from fxmake_core.rates import RateTable


def positions_frame(
    keeper: PositionKeeper,
    currency: Hashable | None = None,
    rate_table: RateTable | None = None,
) -> pd.DataFrame:
    """
    One row per ledger entry, sorted by asset.

    Parameters
    ----------
    keeper : PositionKeeper
        Source of positions.
    currency : asset, optional
        Valuation currency. Requires rate_table.
    rate_table : RateTable, optional
        Rates used to value each position in currency.

    Returns
    -------
    pd.DataFrame
        Columns asset, position; plus rate and value when valued. Zero
        positions get value 0 and no rate (NaN), without a rate lookup.
    """
    if keeper is None:
        raise InvalidArgumentError("keeper is None")
    if (currency is None) != (rate_table is None):
        raise InvalidArgumentError("currency and rate_table must be given together")
    rows = []
    for asset, position in sorted(keeper.positions().items(), key=lambda e: str(e[0])):
        row: dict[str, object] = {"asset": str(asset), "position": position}
        if currency is not None:
            rate = rate_table.rate(asset, currency) if position != 0 else float("nan")
            row["rate"] = rate
            row["value"] = position * rate if position != 0 else 0.0
        rows.append(row)
    columns = ["asset", "position"] + (["rate", "value"] if currency is not None else [])
    return pd.DataFrame(rows, columns=columns)


def print_report(keeper: PositionKeeper, currency: Hashable, rate_table: RateTable) -> float:
    """Print positions valued in currency and return the total valuation."""
    frame = positions_frame(keeper, currency, rate_table)
    total = keeper.valuation(currency, rate_table)
    print(f"--- Positions ({currency}) ---")
    if frame.empty:
        print("(no positions)")
    else:
        print(frame.to_string(index=False))
    print(f"Total value:     {total:,.2f} {currency}")
    print("----------------------------")
    return total
