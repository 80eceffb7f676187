"""Typed trade records held by the journal."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class TradeType(str, Enum):
    """Market a trade belongs to; drives the per-category summaries."""

    CRYPTO = "crypto"
    FOREX = "forex"


class Position(str, Enum):
    """Direction of a journaled position."""

    LONG = "Long"
    SHORT = "Short"


@dataclass(slots=True)
class TradeRecord:
    """A single journaled position."""

    trade_id: str
    trading_date: str = ""
    open_time: str = ""
    type: TradeType = TradeType.CRYPTO
    pair: str = ""
    position: Position = Position.LONG
    timeframe: str = ""
    risk_percentage: float = 0.0
    entry_price: float = 0.0
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None
    closing_date: str = ""
    close_time: str = ""
    profit_loss: float = 0.0
    # Opaque reference owned by the chart store
    chart_image: Optional[str] = None
    emotion_before: str = ""
    emotion_after: str = ""
    notes: str = ""

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase JSON shape used by the HTTP API."""

        return {
            "tradeId": self.trade_id,
            "tradingDate": self.trading_date,
            "openTime": self.open_time,
            "type": self.type.value,
            "pair": self.pair,
            "position": self.position.value,
            "timeframe": self.timeframe,
            "riskPercentage": self.risk_percentage,
            "entryPrice": self.entry_price,
            "stopLoss": self.stop_loss,
            "takeProfit": self.take_profit,
            "closingDate": self.closing_date,
            "closeTime": self.close_time,
            "profitLoss": self.profit_loss,
            "chartImage": self.chart_image,
            "emotionBefore": self.emotion_before,
            "emotionAfter": self.emotion_after,
            "notes": self.notes,
        }
