"""Trade journal application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

from . import cli as _cli
from .config import BaseConfig, DevConfig

_CONFIG_MAP = {
    "development": DevConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths registered on every app."""

    yield "tradejournal.blueprints.journal"
    yield "tradejournal.blueprints.charts"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["TRADEJOURNAL_CONFIG"] = config_obj

    # Imported lazily so model and codec imports stay free of Flask wiring
    from .extensions import init_services
    from .logging_config import setup_logging

    setup_logging(config_obj)
    init_services(app, config_obj)
    _register_blueprints(app)
    _register_error_handlers(app)
    _cli.init_app(app)

    app.logger.info(
        "Trade journal ready",
        extra={"uploads_dir": str(config_obj.UPLOADS_DIR)},
    )
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(RequestEntityTooLarge)
    def _too_large(_error: RequestEntityTooLarge):
        return jsonify({"error": "File too large"}), 400


__all__ = ["BaseConfig", "DevConfig", "create_app"]
