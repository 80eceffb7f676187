"""Journal file operations: load, upload, save, create, delete and listing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional

from werkzeug.datastructures import FileStorage
from werkzeug.security import safe_join
from werkzeug.utils import secure_filename

from ..config import BaseConfig
from ..errors import JournalFileNotFoundError, ValidationError
from ..logging_config import get_logger
from ..models.ledger import Ledger
from ..models.trade import TradeRecord
from . import ledger_serializer
from .active_file import ActiveFileStore
from .row_codec import clock_seed_now
from .spreadsheet import SpreadsheetEngine

logger = get_logger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


@dataclass(frozen=True)
class LoadedJournal:
    """Result of a load or upload."""

    file_name: str
    ledger: Ledger


@dataclass(frozen=True)
class JournalFileInfo:
    """Directory listing entry for a stored journal file."""

    name: str
    path: Path
    size: int
    modified: datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": str(self.path),
            "size": self.size,
            "modified": self.modified.isoformat(),
        }


def sanitize_new_file_name(file_name: str) -> str:
    """Return a safe ``.xlsx`` file name for a newly created journal."""

    stem = file_name.strip()
    if stem.lower().endswith(".xlsx"):
        stem = stem[: -len(".xlsx")]
    stem = _UNSAFE_NAME_CHARS.sub("_", stem)
    if not stem:
        raise ValidationError("File name is required")
    return f"{stem}.xlsx"


class JournalWorkspace:
    """Owns the uploads directory, the spreadsheet engine and the active file."""

    def __init__(
        self,
        config: BaseConfig,
        *,
        engine: Optional[SpreadsheetEngine] = None,
        store: Optional[ActiveFileStore] = None,
    ) -> None:
        self.config = config
        self.uploads_dir = Path(config.UPLOADS_DIR)
        self.engine = engine or SpreadsheetEngine()
        self.store = store or ActiveFileStore()
        config.ensure_dirs()

    def _default_balance(self, value: Optional[float]) -> float:
        return self.config.DEFAULT_STARTING_BALANCE if value is None else value

    def _resolve(self, file_name: str) -> Path:
        if not file_name or not file_name.strip():
            raise ValidationError("File name is required")
        joined = safe_join(str(self.uploads_dir), file_name)
        if joined is None:
            raise JournalFileNotFoundError("File not found")
        path = Path(joined)
        if not path.is_file():
            raise JournalFileNotFoundError("File not found")
        return path

    def _is_journal_file(self, name: str) -> bool:
        return Path(name).suffix.lower() in self.config.JOURNAL_EXTENSIONS

    def _load(self, path: Path, name: str) -> LoadedJournal:
        rows = self.engine.read(path)
        ledger = ledger_serializer.decode(rows, clock_seed=clock_seed_now())
        # Only reached when the read and decode succeeded
        self.store.set_active(path, name, rows)
        logger.info(
            "Journal loaded",
            extra={
                "file_name": name,
                "trades": len(ledger.trades),
                "starting_balance_crypto": ledger.starting_balance_crypto,
                "starting_balance_forex": ledger.starting_balance_forex,
            },
        )
        return LoadedJournal(file_name=name, ledger=ledger)

    def upload(self, file_storage: FileStorage) -> LoadedJournal:
        """Store an uploaded spreadsheet and make it the active file."""

        original = file_storage.filename or ""
        if not original:
            raise ValidationError("No file uploaded")
        if not self._is_journal_file(original):
            raise ValidationError("Only Excel and CSV files are allowed")

        safe_name = secure_filename(original) or f"journal{Path(original).suffix.lower()}"
        stored_name = f"{clock_seed_now()}_{safe_name}"
        path = self.uploads_dir / stored_name
        file_storage.save(path)
        try:
            return self._load(path, stored_name)
        except Exception:
            path.unlink(missing_ok=True)
            raise

    def load_file(self, file_name: str) -> LoadedJournal:
        """Load a previously stored journal by name and make it active."""

        path = self._resolve(file_name)
        return self._load(path, path.name)

    def save(
        self,
        trades: Iterable[TradeRecord],
        starting_balance_crypto: Optional[float] = None,
        starting_balance_forex: Optional[float] = None,
    ) -> str:
        """Overwrite the active file with the trades and fresh summary rows."""

        target = self.store.get_target()
        trades = list(trades)
        rows = ledger_serializer.encode(
            trades,
            self._default_balance(starting_balance_crypto),
            self._default_balance(starting_balance_forex),
        )
        self.engine.write(target, rows, self.config.SHEET_NAME)
        self.store.update_rows(rows)
        name = self.store.snapshot().name or target.name
        logger.info("Journal saved", extra={"file_name": name, "trades": len(trades)})
        return name

    def create_new(
        self,
        file_name: str,
        trades: Iterable[TradeRecord],
        starting_balance_crypto: Optional[float] = None,
        starting_balance_forex: Optional[float] = None,
    ) -> str:
        """Write a new ``.xlsx`` journal and make it the active file."""

        if not file_name or not file_name.strip():
            raise ValidationError("File name is required")
        full_name = sanitize_new_file_name(file_name)
        path = self.uploads_dir / full_name
        trades = list(trades)
        rows = ledger_serializer.encode_new(
            trades,
            self._default_balance(starting_balance_crypto),
            self._default_balance(starting_balance_forex),
        )
        self.engine.write(path, rows, self.config.SHEET_NAME)
        self.store.set_active(path, full_name, rows)
        logger.info("Journal created", extra={"file_name": full_name, "trades": len(trades)})
        return full_name

    def delete_file(self, file_name: str) -> None:
        """Delete a stored journal, forgetting it if it was active."""

        path = self._resolve(file_name)
        path.unlink()
        self.store.clear_if_matches(path.name)
        logger.info("Journal deleted", extra={"file_name": path.name})

    def list_files(self) -> list[JournalFileInfo]:
        """Return stored journal files, newest first."""

        if not self.uploads_dir.exists():
            return []
        entries: list[JournalFileInfo] = []
        for path in self.uploads_dir.iterdir():
            if not path.is_file() or path.name.startswith(".") or not self._is_journal_file(path.name):
                continue
            stat = path.stat()
            entries.append(
                JournalFileInfo(
                    name=path.name,
                    path=path,
                    size=stat.st_size,
                    modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                )
            )
        entries.sort(key=lambda entry: entry.modified, reverse=True)
        return entries

    def active_file_info(self) -> dict[str, Any]:
        state = self.store.snapshot()
        return {"hasActiveFile": self.store.has_active, "fileName": state.name}

    def download_target(self) -> tuple[Path, str]:
        """Return the active file's path and download name."""

        state = self.store.snapshot()
        if state.path is None or not state.path.is_file():
            raise JournalFileNotFoundError("No active file to download")
        return state.path, state.name or state.path.name
