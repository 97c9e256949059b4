"""Application factory for the pet session API."""

from __future__ import annotations

from flask import Flask

from app.core.config import BaseConfig, get_config
from app.core.logger import configure_logging, init_app as init_logging


def create_app(config: str | type[BaseConfig] | object | None = None) -> Flask:
    """Build the Flask app.

    Order matters: ``ProxyFix`` must wrap the WSGI app before anything reads
    ``remote_addr`` (rate limiting), and extensions (database, Redis, social
    provider registry) must exist before the API blueprints are registered.
    ``instance/config.py`` overrides the selected config class when present.
    """
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(get_config() if config is None else config)
    app.config.from_pyfile("config.py", silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from app.core import cors, errors, extensions, proxy

    proxy.init_app(app)
    extensions.init_app(app)
    init_logging(app)
    cors.init_app(app)

    from app.api import init_app as init_api

    init_api(app)
    errors.init_app(app)

    return app
