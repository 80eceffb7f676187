"""Ledger aggregate: trades plus the two portfolio starting balances."""

from __future__ import annotations

from dataclasses import dataclass, field

from .trade import TradeRecord

DEFAULT_STARTING_BALANCE = 10000.0


@dataclass(frozen=True, slots=True)
class StartingBalances:
    """Starting balances for the crypto and forex portfolios."""

    crypto: float = DEFAULT_STARTING_BALANCE
    forex: float = DEFAULT_STARTING_BALANCE


@dataclass(slots=True)
class Ledger:
    """Full persisted journal state, trades in spreadsheet row order."""

    trades: list[TradeRecord] = field(default_factory=list)
    starting_balance_crypto: float = DEFAULT_STARTING_BALANCE
    starting_balance_forex: float = DEFAULT_STARTING_BALANCE

    @property
    def balances(self) -> StartingBalances:
        return StartingBalances(self.starting_balance_crypto, self.starting_balance_forex)
