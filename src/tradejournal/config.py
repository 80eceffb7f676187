"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "TradeJournal"
    SHEET_NAME = "Trading Journal"
    JOURNAL_EXTENSIONS = frozenset({".xlsx", ".xls", ".csv"})
    CHART_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})
    CHART_MAX_BYTES = 5 * 1024 * 1024
    MAX_CONTENT_LENGTH = 50 * 1024 * 1024

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("TRADEJOURNAL_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("TRADEJOURNAL_DEV_MODE", default=True)
        self.DEFAULT_STARTING_BALANCE = _env_float("TRADEJOURNAL_DEFAULT_BALANCE", 10000.0)
        self.DATA_DIR = self._resolve_data_dir()
        self.UPLOADS_DIR = self.DATA_DIR / "uploads"
        self.CHARTS_DIR = self.UPLOADS_DIR / "charts"
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("TRADEJOURNAL_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding uploads, charts and logs."""

        data_root = os.getenv("TRADEJOURNAL_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def ensure_dirs(self) -> None:
        """Create the uploads and charts directories if missing."""

        self.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
        self.CHARTS_DIR.mkdir(parents=True, exist_ok=True)


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True
    TESTING = False
