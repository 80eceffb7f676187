"""Carry the two starting balances inside a ``BALANCE CONFIG`` row."""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Optional

from ..logging_config import get_logger
from ..models.ledger import StartingBalances
from .row_codec import NOTES_COLUMN, TYPE_COLUMN, blank_row, parse_float
from .summary_rows import format_number

logger = get_logger(__name__)

BALANCE_CONFIG = "BALANCE CONFIG"
CRYPTO_LABEL = "Crypto Starting"
FOREX_LABEL = "Forex Starting"

# Pattern used by files written before the key/value parse existed
_LEGACY_PATTERN = re.compile(r"Crypto Starting: ([\d.]+).*Forex Starting: ([\d.]+)")


def encode(starting_balance_crypto: float, starting_balance_forex: float) -> dict[str, Any]:
    """Return the synthetic row holding both starting balances."""

    row = blank_row()
    row[TYPE_COLUMN] = BALANCE_CONFIG
    row[NOTES_COLUMN] = (
        f"{CRYPTO_LABEL}: {format_number(starting_balance_crypto)} | "
        f"{FOREX_LABEL}: {format_number(starting_balance_forex)}"
    )
    return row


def _parse_pairs(notes: str) -> dict[str, float]:
    pairs: dict[str, float] = {}
    for segment in notes.split("|"):
        label, sep, raw = segment.partition(":")
        if not sep:
            continue
        value = parse_float(raw, None)
        if value is not None:
            pairs[label.strip().lower()] = value
    return pairs


def parse_notes(notes: str) -> Optional[StartingBalances]:
    """Extract both balances from a config note, or ``None`` if they are not there."""

    pairs = _parse_pairs(notes)
    crypto = pairs.get(CRYPTO_LABEL.lower())
    forex = pairs.get(FOREX_LABEL.lower())
    if crypto is not None and forex is not None:
        return StartingBalances(crypto, forex)

    match = _LEGACY_PATTERN.search(notes)
    if match:
        crypto = parse_float(match.group(1), None)
        forex = parse_float(match.group(2), None)
        if crypto is not None and forex is not None:
            return StartingBalances(crypto, forex)
    return None


def is_config_row(row: Mapping[str, Any]) -> bool:
    value = row.get(TYPE_COLUMN)
    return isinstance(value, str) and value.strip().upper() == BALANCE_CONFIG


def decode(rows: Iterable[Mapping[str, Any]]) -> StartingBalances:
    """Recover balances from the first config row, defaulting to 10000 each."""

    config_row = next((row for row in rows if is_config_row(row)), None)
    if config_row is None:
        return StartingBalances()

    notes = config_row.get(NOTES_COLUMN)
    balances = parse_notes(notes) if isinstance(notes, str) else None
    if balances is None:
        logger.warning("Balance config row present but unreadable: %r", notes)
        return StartingBalances()
    return balances
