"""Service module exports."""

from . import (
    active_file,
    balance_config,
    charts,
    ledger_serializer,
    row_codec,
    spreadsheet,
    summary_rows,
    workspace,
)

__all__ = [
    "active_file",
    "balance_config",
    "charts",
    "ledger_serializer",
    "row_codec",
    "spreadsheet",
    "summary_rows",
    "workspace",
]
