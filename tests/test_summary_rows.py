"""Tests for summary row generation."""

from __future__ import annotations

import pytest

from tradejournal.models import TradeType
from tradejournal.services import row_codec, summary_rows


@pytest.fixture()
def mixed_trades(trade_factory):
    return [
        trade_factory(type=TradeType.CRYPTO, profit_loss=100),
        trade_factory(type=TradeType.CRYPTO, profit_loss=-50),
        trade_factory(type=TradeType.FOREX, profit_loss=25),
    ]


def test_summary_aggregates(mixed_trades):
    summary = summary_rows.summarize(mixed_trades, 10000, 5000)

    assert summary.crypto.pnl == pytest.approx(50.0)
    assert summary.crypto.current_balance == pytest.approx(10050.0)
    assert summary.crypto.win_rate == 50.0
    assert summary.forex.pnl == pytest.approx(25.0)
    assert summary.forex.current_balance == pytest.approx(5025.0)
    assert summary.pnl == pytest.approx(75.0)
    assert summary.total_value == pytest.approx(15075.0)
    assert summary.trade_count == 3


def test_generate_rows_text(mixed_trades):
    crypto, forex, portfolio = summary_rows.generate(mixed_trades, 10000, 5000)

    assert crypto["Type"] == "CRYPTO SUMMARY"
    assert crypto["Profit/Loss"] == "50.00"
    assert crypto["Notes"] == "Starting: 10000 | Current: 10050.00 | Win Rate: 50.0% | Trades: 2"

    assert forex["Type"] == "FOREX SUMMARY"
    assert forex["Profit/Loss"] == "25.00"
    assert forex["Notes"] == "Starting: 5000 | Current: 5025.00 | Win Rate: 100.0% | Trades: 1"

    assert portfolio["Type"] == "PORTFOLIO SUMMARY"
    assert portfolio["Profit/Loss"] == "75.00"
    assert portfolio["Notes"] == "Total Portfolio: 15075.00 | Total P&L: 75.00 | Total Trades: 3"


def test_summary_rows_leave_other_columns_empty(mixed_trades):
    for row in summary_rows.generate(mixed_trades, 10000, 10000):
        assert set(row) == set(row_codec.COLUMNS)
        others = {k: v for k, v in row.items() if k not in {"Type", "Profit/Loss", "Notes"}}
        assert all(value == "" for value in others.values())


def test_empty_category_reports_zero_win_rate(trade_factory):
    crypto, forex, portfolio = summary_rows.generate(
        [trade_factory(type=TradeType.CRYPTO, profit_loss=10)], 7500.5, 10000
    )

    assert forex["Notes"] == "Starting: 10000 | Current: 10000.00 | Win Rate: 0% | Trades: 0"
    assert crypto["Notes"].startswith("Starting: 7500.5 | Current: 7510.50")
    assert portfolio["Notes"] == "Total Portfolio: 17510.50 | Total P&L: 10.00 | Total Trades: 1"


def test_win_rate_rounds_to_one_decimal(trade_factory):
    trades = [trade_factory(profit_loss=pnl) for pnl in (10, -5, 0)]

    summary = summary_rows.summarize(trades, 10000, 10000)

    assert summary.crypto.win_rate == 33.3


def test_format_number():
    assert summary_rows.format_number(10000.0) == "10000"
    assert summary_rows.format_number(7500.5) == "7500.5"
    assert summary_rows.format_number(-250) == "-250"


def test_rounding_ties_go_away_from_zero(trade_factory):
    trades = [trade_factory(profit_loss=10.125)] + [
        trade_factory(profit_loss=0.0) for _ in range(15)
    ]

    crypto, _forex, portfolio = summary_rows.generate(trades, 10000, 10000)

    assert summary_rows.summarize(trades, 10000, 10000).crypto.win_rate == 6.3
    assert crypto["Profit/Loss"] == "10.13"
    assert crypto["Notes"] == "Starting: 10000 | Current: 10010.13 | Win Rate: 6.3% | Trades: 16"
    assert portfolio["Notes"] == "Total Portfolio: 20010.13 | Total P&L: 10.13 | Total Trades: 16"
