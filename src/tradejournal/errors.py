"""Error taxonomy surfaced by journal services."""

from __future__ import annotations


class TradeJournalError(Exception):
    """Base class for failures reported to callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FormatError(TradeJournalError):
    """The spreadsheet source could not be parsed at all."""

    status_code = 422


class NoActiveFileError(TradeJournalError):
    """A save or download was attempted before any file was loaded or created."""

    status_code = 400

    def __init__(self, message: str = "No active file to save to. Please load a file first.") -> None:
        super().__init__(message)


class ValidationError(TradeJournalError):
    """A required top-level parameter is missing or invalid."""

    status_code = 400


class JournalFileNotFoundError(TradeJournalError):
    """A named journal or chart file does not exist."""

    status_code = 404
