"""Application factory wiring Flask extensions, services and blueprints."""

from __future__ import annotations

from flask import Flask

from insights.core.config import BaseConfig, get_config
from insights.core.logger import configure_logging
from insights.core.logger import init_app as init_logging
from insights.services._shared.ports.clock import Clock


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    clock: Clock | None = None,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config object or import path; defaults to ``APP_ENV``.
    :param clock: Time source handed to every service; system clock by default.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from insights.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from insights.core import cors

    cors.init_app(app)

    from insights.services import registry

    registry.init_app(app, clock=clock)

    from insights.api import init_app as init_api

    init_api(app)

    from insights.core import errors

    errors.init_app(app)

    from insights import cli as app_cli

    app_cli.init_app(app)

    return app
