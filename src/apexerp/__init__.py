"""ApexERP application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from . import cli as _cli
from . import navigation
from .config import BaseConfig, DevConfig, TestConfig
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths in sidebar order."""

    yield "apexerp.blueprints.home"
    yield "apexerp.blueprints.dashboard"
    yield "apexerp.blueprints.sales"
    yield "apexerp.blueprints.purchase"
    yield "apexerp.blueprints.production"
    yield "apexerp.blueprints.logistics"
    yield "apexerp.blueprints.inventory"
    yield "apexerp.blueprints.finance"
    yield "apexerp.blueprints.hr"
    yield "apexerp.blueprints.contractors"
    yield "apexerp.blueprints.quality"
    yield "apexerp.blueprints.maintenance"
    yield "apexerp.blueprints.assets"
    yield "apexerp.blueprints.reports"
    yield "apexerp.blueprints.statutory"
    yield "apexerp.blueprints.settings"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_cls = _resolve_config(config_name)
    config_obj = config_cls()
    app.config.from_object(config_obj)
    app.config["APEXERP_CONFIG"] = config_obj

    setup_logging(config_obj)
    _register_blueprints(app)
    navigation.init_app(app)
    _cli.init_app(app)

    logger.debug("Application created", extra={"config": config_cls.__name__})
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


__all__ = ["create_app"]
