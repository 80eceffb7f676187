"""Tracks the single journal file that saves write back to."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from ..errors import NoActiveFileError
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ActiveFile:
    """Snapshot of the active file state."""

    path: Optional[Path] = None
    name: Optional[str] = None
    rows: tuple[Mapping[str, Any], ...] = field(default_factory=tuple)


class ActiveFileStore:
    """Single-writer state for the active file.

    Every load or create replaces the state wholesale; nothing is merged
    with what was there before.
    """

    def __init__(self) -> None:
        self._state = ActiveFile()

    @property
    def has_active(self) -> bool:
        return self._state.path is not None

    def snapshot(self) -> ActiveFile:
        return self._state

    def set_active(self, path: Path, name: str, rows: Sequence[Mapping[str, Any]]) -> None:
        self._state = ActiveFile(path=Path(path), name=name, rows=tuple(rows))
        logger.info("Active file set", extra={"file_name": name, "rows": len(self._state.rows)})

    def get_target(self) -> Path:
        """Return the path a save should overwrite."""

        if self._state.path is None:
            raise NoActiveFileError()
        return self._state.path

    def update_rows(self, rows: Sequence[Mapping[str, Any]]) -> None:
        """Record the rows just written without touching path or name."""

        if self._state.path is None:
            raise NoActiveFileError()
        self._state = ActiveFile(path=self._state.path, name=self._state.name, rows=tuple(rows))

    def clear_if_matches(self, name: str) -> bool:
        """Forget the active file if ``name`` is the one that was deleted."""

        if self._state.name is None or self._state.name != name:
            return False
        self._state = ActiveFile()
        logger.info("Active file cleared", extra={"file_name": name})
        return True
