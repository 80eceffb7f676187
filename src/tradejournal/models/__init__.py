"""Domain models for the trade journal."""

from __future__ import annotations

from .ledger import DEFAULT_STARTING_BALANCE, Ledger, StartingBalances
from .trade import Position, TradeRecord, TradeType

__all__ = [
    "DEFAULT_STARTING_BALANCE",
    "Ledger",
    "Position",
    "StartingBalances",
    "TradeRecord",
    "TradeType",
]
