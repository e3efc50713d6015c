"""Flask application factory for the AIBOM generator service."""

from __future__ import annotations

import atexit
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict

from flask import Flask

from aibom.logging_config import configure_logging
from aibom.services.graph_resolver import generate
from aibom.utils import env


def create_app(config: Dict[str, Any] | None = None) -> Flask:
    """Create and configure the Flask application."""

    configure_logging()

    app = Flask(__name__)
    app.config.setdefault("JSON_SORT_KEYS", False)
    app.config.setdefault("AIBOM_GENERATE", generate)

    if config:
        app.config.update(config)

    if "EXECUTOR" not in app.config:
        executor = ThreadPoolExecutor(
            max_workers=env.max_workers(),
            thread_name_prefix="aibom-worker",
        )
        # Injected executors stay owned by the caller.
        atexit.register(executor.shutdown, wait=False)
        app.config["EXECUTOR"] = executor

    from .api import api_bp

    app.register_blueprint(api_bp)
    return app


def serve() -> None:
    """Run the development server on ``AIBOM_HOST``:``AIBOM_PORT``."""

    env.load_dotenv()
    host = os.environ.get("AIBOM_HOST", "127.0.0.1")
    port = env.env_int("AIBOM_PORT", 8080)
    app = create_app()
    app.run(host=host, port=port, threaded=True)
