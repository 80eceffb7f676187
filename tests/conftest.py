"""Pytest configuration and shared fixtures for trade journal tests.

Every fixture points the app at a temporary data directory so tests never
touch a real uploads folder.
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from tradejournal import create_app
from tradejournal.config import BaseConfig
from tradejournal.models import Position, TradeRecord, TradeType
from tradejournal.services.workspace import JournalWorkspace


@pytest.fixture()
def data_dir(tmp_path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TRADEJOURNAL_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("TRADEJOURNAL_DEFAULT_BALANCE", raising=False)
    monkeypatch.setenv("TRADEJOURNAL_DEV_MODE", "true")
    return tmp_path


@pytest.fixture()
def journal_config(data_dir) -> BaseConfig:
    return BaseConfig()


@pytest.fixture()
def workspace(journal_config) -> JournalWorkspace:
    return JournalWorkspace(journal_config)


@pytest.fixture()
def app(data_dir):
    app = create_app("development")
    app.config.update(TESTING=True)
    return app


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def trade_factory():
    """Build fully populated trades; keyword overrides replace any field."""

    counter = {"n": 0}

    def factory(**overrides) -> TradeRecord:
        counter["n"] += 1
        base = TradeRecord(
            trade_id=f"T-{counter['n']:03d}",
            trading_date="2024-03-01",
            open_time="09:30",
            type=TradeType.CRYPTO,
            pair="BTC/USDT",
            position=Position.LONG,
            timeframe="1h",
            risk_percentage=1.5,
            entry_price=62000.5,
            stop_loss=61000.0,
            take_profit=65000.0,
            closing_date="2024-03-02",
            close_time="14:15",
            profit_loss=120.25,
            chart_image="/api/chart/chart_1709280000000_abc123xyz.png",
            emotion_before="calm",
            emotion_after="satisfied",
            notes="Breakout retest",
        )
        return replace(base, **overrides)

    return factory
