"""Turn a full ledger into spreadsheet rows and back."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

from ..models.ledger import Ledger
from ..models.trade import TradeRecord
from . import balance_config, summary_rows
from .row_codec import TYPE_COLUMN, clock_seed_now, to_row, to_trade

RESERVED_TYPES = frozenset(
    {
        summary_rows.LEGACY_SUMMARY,
        summary_rows.CRYPTO_SUMMARY,
        summary_rows.FOREX_SUMMARY,
        summary_rows.PORTFOLIO_SUMMARY,
        balance_config.BALANCE_CONFIG,
    }
)


def is_synthetic(row: Mapping[str, Any]) -> bool:
    """True for summary and config rows, which are never trades."""

    value = row.get(TYPE_COLUMN)
    return isinstance(value, str) and value.strip().upper() in RESERVED_TYPES


def encode(
    trades: Iterable[TradeRecord],
    starting_balance_crypto: float,
    starting_balance_forex: float,
) -> list[dict[str, Any]]:
    """Rows written by a save: trades followed by the three summary rows."""

    trades = list(trades)
    rows = [to_row(trade) for trade in trades]
    rows.extend(summary_rows.generate(trades, starting_balance_crypto, starting_balance_forex))
    return rows


def encode_new(
    trades: Iterable[TradeRecord],
    starting_balance_crypto: float,
    starting_balance_forex: float,
) -> list[dict[str, Any]]:
    """Rows written when a file is created: trades followed by the balance config row."""

    rows = [to_row(trade) for trade in trades]
    rows.append(balance_config.encode(starting_balance_crypto, starting_balance_forex))
    return rows


def decode(raw_rows: Sequence[Mapping[str, Any]], clock_seed: Optional[int] = None) -> Ledger:
    """Recover balances and trades from raw rows of either written shape."""

    # The config row has to be seen before synthetic rows are filtered out
    balances = balance_config.decode(raw_rows)
    seed = clock_seed if clock_seed is not None else clock_seed_now()
    trade_rows = [row for row in raw_rows if not is_synthetic(row)]
    return Ledger(
        trades=[to_trade(row, index, seed) for index, row in enumerate(trade_rows)],
        starting_balance_crypto=balances.crypto,
        starting_balance_forex=balances.forex,
    )
