# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from filegate.infrastructure.container import Container
from filegate.shared.config import AppConfig, load_config
from filegate.shared.logging import logger, setup_logging
from filegate.shared.middleware.error_handler import configure_error_handling
from filegate.shared.middleware.request_logger import configure_request_logging

CONTAINER_KEY = "filegate.container"


def get_container(app: Flask) -> Container:
    return app.extensions[CONTAINER_KEY]


def create_app(config: AppConfig | None = None, *, container: Container | None = None) -> Flask:
    config = config or load_config()
    setup_logging(config.log_level, log_file=config.log_file)

    container = container or Container(config)
    container.init_db()

    app = Flask(__name__)
    app.extensions[CONTAINER_KEY] = container

    configure_error_handling(
        app, storage_root=config.storage_root, debug_mode=config.debug_logging
    )
    configure_request_logging(
        app, debug_mode=config.debug_logging, auth_header=config.auth_header
    )

    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.storage_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        return resp

    logger.info(
        f"Flask app initialized env={config.app_env} "
        f"token_lifetime={config.token_lifetime_seconds}s"
    )
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=False)
