"""Request payload validation for journal routes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from ...models.trade import TradeRecord
from ...services.row_codec import clock_seed_now, parse_float, trade_from_payload


@dataclass(slots=True)
class JournalPayloadForm:
    """Trades and starting balances posted by save and create-new."""

    file_name: str = ""
    trades: list[TradeRecord] = field(default_factory=list)
    starting_balance_crypto: Optional[float] = None
    starting_balance_forex: Optional[float] = None
    require_file_name: bool = False
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)
    raw_data: dict[str, Any] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, *, require_file_name: bool = False) -> JournalPayloadForm:
        """Create a form populated from a JSON body."""

        form = cls(require_file_name=require_file_name)
        form.raw_data = dict(data or {})
        return form

    def validate(self) -> bool:
        """Validate the bound data and populate typed attributes."""

        self.errors.clear()

        file_name = self.raw_data.get("fileName")
        self.file_name = file_name.strip() if isinstance(file_name, str) else ""
        if self.require_file_name and not self.file_name:
            self._add_error("fileName", "File name is required")

        raw_trades = self.raw_data.get("trades")
        self.trades = []
        if raw_trades is None:
            raw_trades = []
        if not isinstance(raw_trades, list):
            self._add_error("trades", "Trades must be a list.")
        else:
            seed = clock_seed_now()
            for index, item in enumerate(raw_trades):
                if not isinstance(item, Mapping):
                    self._add_error("trades", f"Trade #{index + 1} must be an object.")
                    continue
                self.trades.append(trade_from_payload(item, index, seed))

        self.starting_balance_crypto = parse_float(self.raw_data.get("startingBalanceCrypto"), None)
        self.starting_balance_forex = parse_float(self.raw_data.get("startingBalanceForex"), None)

        return not self.errors

    def first_error(self) -> str:
        for messages in self.errors.values():
            if messages:
                return messages[0]
        return "Invalid request."

    def _add_error(self, field: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(field, []).append(message)
