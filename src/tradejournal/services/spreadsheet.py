"""Spreadsheet engine: read and write flat row lists with pandas."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from ..errors import FormatError
from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_SHEET_NAME = "Trading Journal"
# Excel caps sheet titles at 31 characters
_MAX_SHEET_NAME = 31


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def _native(value: Any) -> Any:
    """Convert pandas/numpy scalars into plain Python values."""

    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    item = getattr(value, "item", None)
    if callable(item):
        return item()
    return value


def _header(rows: Iterable[Mapping[str, Any]]) -> list[str]:
    columns: dict[str, None] = {}
    for row in rows:
        for key in row:
            columns.setdefault(key, None)
    return list(columns)


class SpreadsheetEngine:
    """Read/write the first sheet of ``.xlsx``/``.xls``/``.csv`` files as dict rows.

    Blank cells are omitted from the returned rows, and rows with no
    populated cells are skipped. Writes replace the whole file through a
    temporary sibling so an interrupted write leaves the old file intact.
    """

    def read(self, path: Path) -> list[dict[str, Any]]:
        path = Path(path)
        try:
            if path.suffix.lower() == ".csv":
                frame = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
            else:
                frame = pd.read_excel(
                    path, sheet_name=0, dtype=object, keep_default_na=False, na_filter=False
                )
        except FileNotFoundError:
            raise
        except pd.errors.EmptyDataError:
            return []
        except Exception as exc:
            raise FormatError(f"Unable to read spreadsheet {path.name}: {exc}") from exc

        frame.columns = [str(column).strip() for column in frame.columns]
        rows: list[dict[str, Any]] = []
        for record in frame.to_dict(orient="records"):
            row = {key: _native(value) for key, value in record.items() if not _is_missing(value)}
            if row:
                rows.append(row)
        logger.debug("Read %d rows from %s", len(rows), path)
        return rows

    def write(
        self,
        path: Path,
        rows: Iterable[Mapping[str, Any]],
        sheet_label: str = DEFAULT_SHEET_NAME,
    ) -> None:
        path = Path(path)
        rows = list(rows)
        frame = pd.DataFrame(rows, columns=_header(rows))

        is_csv = path.suffix.lower() == ".csv"
        # pandas picks the writer from the suffix, so keep a recognised one
        tmp_path = path.with_name(f".{path.stem}.tmp{'.csv' if is_csv else '.xlsx'}")
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            if is_csv:
                frame.to_csv(tmp_path, index=False, encoding="utf-8")
            else:
                frame.to_excel(
                    tmp_path,
                    sheet_name=sheet_label[:_MAX_SHEET_NAME],
                    index=False,
                    engine="openpyxl",
                )
            os.replace(tmp_path, path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        except Exception as exc:
            tmp_path.unlink(missing_ok=True)
            raise FormatError(f"Unable to write spreadsheet {path.name}: {exc}") from exc
        logger.debug("Wrote %d rows to %s", len(rows), path)
