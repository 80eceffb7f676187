"""Tests for journal workspace operations on a temporary uploads directory."""

from __future__ import annotations

import io

import pytest
from werkzeug.datastructures import FileStorage

from tradejournal.errors import (
    FormatError,
    JournalFileNotFoundError,
    NoActiveFileError,
    ValidationError,
)
from tradejournal.models import TradeType
from tradejournal.services import ledger_serializer
from tradejournal.services.workspace import sanitize_new_file_name


def test_save_before_load_is_rejected(workspace, trade_factory):
    with pytest.raises(NoActiveFileError):
        workspace.save([trade_factory()], 10000, 10000)

    assert list(workspace.uploads_dir.glob("*.xlsx")) == []


def test_create_then_save_updates_file_in_place(workspace, trade_factory):
    name = workspace.create_new("My Journal", [trade_factory()], 10000, 7500)
    assert name == "My_Journal.xlsx"
    path = workspace.store.get_target()

    saved = workspace.save([trade_factory(), trade_factory(type=TradeType.FOREX)], 10000, 7500)

    assert saved == name
    assert workspace.store.get_target() == path
    assert workspace.store.snapshot().name == name
    assert [p.name for p in workspace.list_files()] == [name]

    rows = workspace.engine.read(path)
    assert [row["Type"] for row in rows[-3:]] == [
        "CRYPTO SUMMARY",
        "FOREX SUMMARY",
        "PORTFOLIO SUMMARY",
    ]
    assert len(workspace.store.snapshot().rows) == 5


def test_load_file_recovers_ledger_and_sets_active(workspace, trade_factory):
    trades = [trade_factory(), trade_factory()]
    workspace.engine.write(
        workspace.uploads_dir / "stored.xlsx",
        ledger_serializer.encode_new(trades, 12000, 7500),
    )

    loaded = workspace.load_file("stored.xlsx")

    assert loaded.file_name == "stored.xlsx"
    assert loaded.ledger.trades == trades
    assert loaded.ledger.balances.crypto == 12000
    assert workspace.active_file_info() == {"hasActiveFile": True, "fileName": "stored.xlsx"}
    assert len(workspace.store.snapshot().rows) == 3


def test_failed_load_leaves_active_file_untouched(workspace, trade_factory):
    workspace.create_new("good", [trade_factory()])
    (workspace.uploads_dir / "bad.xlsx").write_bytes(b"garbage")

    with pytest.raises(FormatError):
        workspace.load_file("bad.xlsx")

    assert workspace.store.snapshot().name == "good.xlsx"


def test_load_missing_or_escaping_file(workspace):
    with pytest.raises(JournalFileNotFoundError):
        workspace.load_file("nope.xlsx")
    with pytest.raises(JournalFileNotFoundError):
        workspace.load_file("../outside.xlsx")
    with pytest.raises(ValidationError):
        workspace.load_file("")


def test_delete_clears_matching_active_file(workspace, trade_factory):
    workspace.create_new("first", [trade_factory()])
    workspace.create_new("second", [trade_factory()])

    workspace.delete_file("first.xlsx")
    assert workspace.store.snapshot().name == "second.xlsx"

    workspace.delete_file("second.xlsx")
    assert not workspace.store.has_active
    assert workspace.list_files() == []


def test_upload_stores_timestamped_copy(workspace, trade_factory, tmp_path):
    source = tmp_path / "source.csv"
    workspace.engine.write(source, ledger_serializer.encode([trade_factory()], 10000, 10000))
    storage = FileStorage(stream=io.BytesIO(source.read_bytes()), filename="my trades.csv")

    loaded = workspace.upload(storage)

    assert loaded.file_name.endswith("_my_trades.csv")
    assert len(loaded.ledger.trades) == 1
    assert (workspace.uploads_dir / loaded.file_name).is_file()
    assert workspace.store.snapshot().name == loaded.file_name


def test_upload_rejects_other_extensions(workspace):
    storage = FileStorage(stream=io.BytesIO(b"hello"), filename="notes.txt")

    with pytest.raises(ValidationError):
        workspace.upload(storage)


def test_upload_of_corrupt_file_is_removed(workspace):
    storage = FileStorage(stream=io.BytesIO(b"garbage"), filename="broken.xlsx")

    with pytest.raises(FormatError):
        workspace.upload(storage)

    assert workspace.list_files() == []
    assert not workspace.store.has_active


def test_default_balances_come_from_config(workspace, trade_factory):
    workspace.create_new("defaults", [trade_factory()])

    loaded = workspace.load_file("defaults.xlsx")

    assert loaded.ledger.balances.crypto == 10000
    assert loaded.ledger.balances.forex == 10000


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("journal", "journal.xlsx"),
        ("journal.xlsx", "journal.xlsx"),
        ("Q1 trades/2024", "Q1_trades_2024.xlsx"),
        ("already-safe_name", "already-safe_name.xlsx"),
    ],
)
def test_sanitize_new_file_name(raw, expected):
    assert sanitize_new_file_name(raw) == expected


def test_download_target_requires_active_file(workspace):
    with pytest.raises(JournalFileNotFoundError):
        workspace.download_target()
