"""Convert between spreadsheet rows and typed trade records.

Decoding is lenient by design of the file format: a hand-edited or partially
filled sheet must stay loadable, so every field resolves through an explicit
fallback rule in :data:`FIELD_RULES` instead of raising.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from datetime import date, datetime
from datetime import time as dt_time
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from ..logging_config import get_logger
from ..models.trade import Position, TradeRecord, TradeType

logger = get_logger(__name__)


def clock_seed_now() -> int:
    """Return the current epoch time in milliseconds."""

    return int(time.time() * 1000)


def format_fixed(value: float, places: int = 2) -> str:
    """Format ``value`` with ``places`` decimals, rounding ties away from zero."""

    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def parse_float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """Parse a cell as a float, returning ``default`` when blank or unparsable."""

    if _is_blank(value) or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            logger.debug("Unparsable number %r replaced with %r", value, default)
            return default
    if not math.isfinite(number):
        return default
    return number


def parse_text(value: Any, default: str = "") -> str:
    """Render a cell as text; spreadsheet date/time cells become ISO strings."""

    if _is_blank(value):
        return default
    if isinstance(value, datetime):
        if value.time() == dt_time(0, 0):
            return value.strftime("%Y-%m-%d")
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dt_time):
        return value.strftime("%H:%M")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_optional_text(value: Any, default: Optional[str] = None) -> Optional[str]:
    text = parse_text(value)
    return text if text else default


def _enum_parser(enum_cls: type[Enum]) -> Callable[[Any, Any], Any]:
    lookup = {member.value.lower(): member for member in enum_cls}

    def parse(value: Any, default: Any) -> Any:
        if isinstance(value, enum_cls):
            return value
        if _is_blank(value):
            return default
        member = lookup.get(str(value).strip().lower())
        if member is None:
            logger.warning(
                "Unknown %s %r, using %s", enum_cls.__name__, value, default.value
            )
            return default
        return member

    return parse


@dataclass(frozen=True, slots=True)
class FieldRule:
    """How one trade field maps to a column and what it falls back to."""

    field: str
    column: str
    payload_key: str
    parse: Callable[[Any, Any], Any]
    default: Any


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("trade_id", "Trade Id", "tradeId", parse_text, ""),
    FieldRule("trading_date", "Trading Date", "tradingDate", parse_text, ""),
    FieldRule("open_time", "Open Time", "openTime", parse_text, ""),
    FieldRule("type", "Type", "type", _enum_parser(TradeType), TradeType.CRYPTO),
    FieldRule("pair", "Pair", "pair", parse_text, ""),
    FieldRule("position", "Position", "position", _enum_parser(Position), Position.LONG),
    FieldRule("timeframe", "Timeframe", "timeframe", parse_text, ""),
    FieldRule("risk_percentage", "Risk%", "riskPercentage", parse_float, 0.0),
    FieldRule("entry_price", "Entry Price", "entryPrice", parse_float, 0.0),
    FieldRule("stop_loss", "Stop loss", "stopLoss", parse_float, None),
    FieldRule("take_profit", "Take Profit", "takeProfit", parse_float, None),
    FieldRule("closing_date", "Closing Date", "closingDate", parse_text, ""),
    FieldRule("close_time", "Close Time", "closeTime", parse_text, ""),
    FieldRule("profit_loss", "Profit/Loss", "profitLoss", parse_float, 0.0),
    FieldRule("chart_image", "Chart Image", "chartImage", parse_optional_text, None),
    FieldRule("emotion_before", "Emotion Before", "emotionBefore", parse_text, ""),
    FieldRule("emotion_after", "Emotion After", "emotionAfter", parse_text, ""),
    FieldRule("notes", "Notes", "notes", parse_text, ""),
)

# Header order of every written sheet
COLUMNS: tuple[str, ...] = tuple(rule.column for rule in FIELD_RULES)
TYPE_COLUMN = "Type"
NOTES_COLUMN = "Notes"
PROFIT_LOSS_COLUMN = "Profit/Loss"


def blank_row() -> dict[str, Any]:
    """Return a row with every column present and empty."""

    return {column: "" for column in COLUMNS}


def _optional_number(value: Optional[float]) -> Any:
    # None and 0.0 must stay distinguishable on the next decode
    return "" if value is None else value


def to_row(trade: TradeRecord) -> dict[str, Any]:
    """Map a trade to its fixed named columns."""

    return {
        "Trade Id": trade.trade_id,
        "Trading Date": trade.trading_date,
        "Open Time": trade.open_time,
        "Type": trade.type.value,
        "Pair": trade.pair,
        "Position": trade.position.value,
        "Timeframe": trade.timeframe,
        "Risk%": trade.risk_percentage,
        "Entry Price": trade.entry_price,
        "Stop loss": _optional_number(trade.stop_loss),
        "Take Profit": _optional_number(trade.take_profit),
        "Closing Date": trade.closing_date,
        "Close Time": trade.close_time,
        "Profit/Loss": format_fixed(trade.profit_loss),
        "Chart Image": trade.chart_image or "",
        "Emotion Before": trade.emotion_before,
        "Emotion After": trade.emotion_after,
        "Notes": trade.notes,
    }


def _decode(
    source: Mapping[str, Any],
    key_of: Callable[[FieldRule], str],
    index: int,
    clock_seed: Optional[int],
) -> TradeRecord:
    values = {rule.field: rule.parse(source.get(key_of(rule)), rule.default) for rule in FIELD_RULES}
    if not values["trade_id"]:
        seed = clock_seed if clock_seed is not None else clock_seed_now()
        values["trade_id"] = f"T{seed}{index}"
    return TradeRecord(**values)


def to_trade(row: Mapping[str, Any], index: int, clock_seed: Optional[int] = None) -> TradeRecord:
    """Build a trade from a spreadsheet row, substituting defaults per field.

    ``clock_seed`` only matters when the row has no ``Trade Id``; rows that
    carry one decode deterministically.
    """

    return _decode(row, lambda rule: rule.column, index, clock_seed)


def trade_from_payload(
    payload: Mapping[str, Any], index: int, clock_seed: Optional[int] = None
) -> TradeRecord:
    """Build a trade from the camelCase JSON shape sent by API clients."""

    return _decode(payload, lambda rule: rule.payload_key, index, clock_seed)
