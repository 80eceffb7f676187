"""Tests for starting balance encoding inside the BALANCE CONFIG row."""

from __future__ import annotations

from tradejournal.models import StartingBalances
from tradejournal.services import balance_config


def test_encode_writes_config_row():
    row = balance_config.encode(10000, 7500)

    assert row["Type"] == "BALANCE CONFIG"
    assert row["Notes"] == "Crypto Starting: 10000 | Forex Starting: 7500"
    assert row["Profit/Loss"] == ""


def test_encode_then_decode_recovers_balances():
    rows = [{"Trade Id": "T1", "Type": "crypto"}, balance_config.encode(10000, 7500)]

    assert balance_config.decode(rows) == StartingBalances(10000, 7500)


def test_missing_config_row_uses_defaults():
    assert balance_config.decode([{"Type": "crypto"}]) == StartingBalances(10000, 10000)


def test_unreadable_notes_use_defaults():
    rows = [{"Type": "BALANCE CONFIG", "Notes": "balances were here"}]

    assert balance_config.decode(rows) == StartingBalances(10000, 10000)


def test_first_config_row_wins():
    rows = [balance_config.encode(1, 2), balance_config.encode(3, 4)]

    assert balance_config.decode(rows) == StartingBalances(1, 2)


def test_legacy_pattern_still_recognised():
    notes = "Crypto Starting: 2500.75 (edited) Forex Starting: 1200"

    assert balance_config.parse_notes(notes) == StartingBalances(2500.75, 1200)


def test_structured_parse_accepts_negative_and_spacing():
    notes = "forex starting:  -50 |  Crypto Starting: 12000.5"

    assert balance_config.parse_notes(notes) == StartingBalances(12000.5, -50)
