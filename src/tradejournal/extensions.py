"""Service wiring for the Flask app."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .services.charts import ChartStore
from .services.workspace import JournalWorkspace

WORKSPACE_KEY = "tradejournal.workspace"
CHARTS_KEY = "tradejournal.charts"


def init_services(app: Flask, config: BaseConfig) -> None:
    """Attach the journal workspace and chart store to the app.

    The workspace owns the active-file state, so each app instance tracks
    its own active file.
    """

    app.extensions[WORKSPACE_KEY] = JournalWorkspace(config)
    app.extensions[CHARTS_KEY] = ChartStore(
        config.CHARTS_DIR,
        allowed_extensions=config.CHART_EXTENSIONS,
        max_bytes=config.CHART_MAX_BYTES,
    )


def get_workspace() -> JournalWorkspace:
    """Return the workspace of the current app."""

    try:
        return current_app.extensions[WORKSPACE_KEY]
    except KeyError:  # pragma: no cover - exercised only on misconfigured apps
        raise RuntimeError("Journal workspace not initialized") from None


def get_chart_store() -> ChartStore:
    """Return the chart store of the current app."""

    try:
        return current_app.extensions[CHARTS_KEY]
    except KeyError:  # pragma: no cover
        raise RuntimeError("Chart store not initialized") from None
