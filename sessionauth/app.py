# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import click
from flask import Flask

from sessionauth.infrastructure.container import Container, container
from sessionauth.infrastructure.db import init_db
from sessionauth.interfaces.http.controllers.misc_controller import MiscController
from sessionauth.interfaces.http.session_middleware import configure_sessions
from sessionauth.shared.logging import logger, setup_logging
from sessionauth.shared.middleware.error_handler import configure_error_handling
from sessionauth.shared.middleware.request_logger import configure_request_logging


def _register_commands(app: Flask, deps: Container) -> None:
    @app.cli.command("init-db")
    def _init_db_command() -> None:
        init_db()
        click.echo("database ready")

    @app.cli.command("purge-sessions")
    def _purge_sessions_command() -> None:
        removed = deps.session_store.purge_expired()
        click.echo(f"removed {removed} expired sessions")


def create_app(deps: Container | None = None) -> Flask:
    deps = deps or container
    config = deps.config

    init_db()
    setup_logging(
        debug_mode=config.debug_logging,
        service_name=config.observability.service_name,
    )

    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)
    configure_sessions(app, deps.session_store, config.security)

    app.config.update(SECRET_KEY=config.secret_key)

    app.register_blueprint(
        MiscController(metrics_enabled=config.observability.metrics_enabled).as_blueprint()
    )
    app.register_blueprint(deps.auth_controller.as_blueprint())
    _register_commands(app, deps)

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
