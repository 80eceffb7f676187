"""Tests for the active-file state machine."""

from __future__ import annotations

from pathlib import Path

import pytest

from tradejournal.errors import NoActiveFileError
from tradejournal.services.active_file import ActiveFileStore


def test_store_starts_empty():
    store = ActiveFileStore()

    assert not store.has_active
    assert store.snapshot().rows == ()
    with pytest.raises(NoActiveFileError):
        store.get_target()


def test_set_active_overwrites_previous_state():
    store = ActiveFileStore()
    store.set_active(Path("/tmp/a.xlsx"), "a.xlsx", [{"Trade Id": "T1"}])
    store.set_active(Path("/tmp/b.xlsx"), "b.xlsx", [])

    state = store.snapshot()
    assert state.path == Path("/tmp/b.xlsx")
    assert state.name == "b.xlsx"
    assert state.rows == ()
    assert store.get_target() == Path("/tmp/b.xlsx")


def test_update_rows_keeps_path_and_name():
    store = ActiveFileStore()
    store.set_active(Path("/tmp/a.xlsx"), "a.xlsx", [])

    store.update_rows([{"Trade Id": "T9"}])

    state = store.snapshot()
    assert (state.path, state.name) == (Path("/tmp/a.xlsx"), "a.xlsx")
    assert state.rows == ({"Trade Id": "T9"},)


def test_update_rows_without_active_file_fails():
    with pytest.raises(NoActiveFileError):
        ActiveFileStore().update_rows([])


def test_clear_if_matches_only_clears_matching_name():
    store = ActiveFileStore()
    store.set_active(Path("/tmp/a.xlsx"), "a.xlsx", [])

    assert store.clear_if_matches("other.xlsx") is False
    assert store.has_active

    assert store.clear_if_matches("a.xlsx") is True
    assert not store.has_active
    assert store.snapshot().name is None
