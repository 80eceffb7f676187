"""Per-category and portfolio summary rows appended on save."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from ..models.trade import TradeRecord, TradeType
from .row_codec import NOTES_COLUMN, PROFIT_LOSS_COLUMN, TYPE_COLUMN, blank_row, format_fixed

CRYPTO_SUMMARY = "CRYPTO SUMMARY"
FOREX_SUMMARY = "FOREX SUMMARY"
PORTFOLIO_SUMMARY = "PORTFOLIO SUMMARY"
LEGACY_SUMMARY = "SUMMARY"

_CATEGORY_LABELS = {
    TradeType.CRYPTO: CRYPTO_SUMMARY,
    TradeType.FOREX: FOREX_SUMMARY,
}


def format_number(value: float) -> str:
    """Render a balance the way the journal has always written it (10000, 7500.5)."""

    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True, slots=True)
class CategorySummary:
    """Aggregates for one trade category."""

    trade_type: TradeType
    starting_balance: float
    pnl: float
    trade_count: int
    win_count: int

    @property
    def current_balance(self) -> float:
        return self.starting_balance + self.pnl

    @property
    def win_rate(self) -> float:
        if not self.trade_count:
            return 0.0
        return float(format_fixed(100 * self.win_count / self.trade_count, 1))

    def notes(self) -> str:
        rate = format_fixed(self.win_rate, 1) if self.trade_count else "0"
        return (
            f"Starting: {format_number(self.starting_balance)} | "
            f"Current: {format_fixed(self.current_balance)} | "
            f"Win Rate: {rate}% | Trades: {self.trade_count}"
        )


@dataclass(frozen=True, slots=True)
class PortfolioSummary:
    """Combined aggregates across both categories."""

    crypto: CategorySummary
    forex: CategorySummary

    @property
    def total_value(self) -> float:
        return self.crypto.current_balance + self.forex.current_balance

    @property
    def pnl(self) -> float:
        return self.crypto.pnl + self.forex.pnl

    @property
    def trade_count(self) -> int:
        return self.crypto.trade_count + self.forex.trade_count

    def notes(self) -> str:
        return (
            f"Total Portfolio: {format_fixed(self.total_value)} | "
            f"Total P&L: {format_fixed(self.pnl)} | Total Trades: {self.trade_count}"
        )


def summarize_category(
    trades: Iterable[TradeRecord], trade_type: TradeType, starting_balance: float
) -> CategorySummary:
    subset = [trade for trade in trades if trade.type is trade_type]
    return CategorySummary(
        trade_type=trade_type,
        starting_balance=starting_balance,
        pnl=sum(trade.profit_loss for trade in subset),
        trade_count=len(subset),
        win_count=sum(1 for trade in subset if trade.profit_loss > 0),
    )


def summarize(
    trades: Iterable[TradeRecord],
    starting_balance_crypto: float,
    starting_balance_forex: float,
) -> PortfolioSummary:
    """Compute category and portfolio aggregates from the current trade list."""

    trades = list(trades)
    return PortfolioSummary(
        crypto=summarize_category(trades, TradeType.CRYPTO, starting_balance_crypto),
        forex=summarize_category(trades, TradeType.FOREX, starting_balance_forex),
    )


def _summary_row(label: str, pnl: float, notes: str) -> dict[str, Any]:
    row = blank_row()
    row[TYPE_COLUMN] = label
    row[PROFIT_LOSS_COLUMN] = format_fixed(pnl)
    row[NOTES_COLUMN] = notes
    return row


def generate(
    trades: Iterable[TradeRecord],
    starting_balance_crypto: float,
    starting_balance_forex: float,
) -> list[dict[str, Any]]:
    """Return the crypto, forex and portfolio summary rows, in that order."""

    summary = summarize(trades, starting_balance_crypto, starting_balance_forex)
    rows = [
        _summary_row(_CATEGORY_LABELS[category.trade_type], category.pnl, category.notes())
        for category in (summary.crypto, summary.forex)
    ]
    rows.append(_summary_row(PORTFOLIO_SUMMARY, summary.pnl, summary.notes()))
    return rows
