"""
project: Delve
module: __init__.py
License: MIT

Flask application factory for the dungeon generation service.

Configuration is sourced from environment variables (optionally via a local
``.env`` file) with defaults suited to development. The Flask ``instance/``
directory holds runtime files such as the rotating log written by
``delve.server``.
"""

import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

from delve.dungeon import DungeonConfig, DungeonConfigError, DungeonGenerationError
from delve.logging_utils import log

__version__ = "0.4.0"

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in _TRUTHY


def create_app(config_overrides: dict | None = None) -> Flask:
    """Build the Flask app, register the dungeon blueprint and error handlers.

    ``config_overrides`` is applied last so tests can pin settings without
    touching the environment.
    """
    # Load .env if present so DELVE_* variables can be supplied without exporting them
    load_dotenv()

    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only checkouts still serve requests; only file logging needs the folder
        log.warn(event="instance_dir_unavailable", path=app.instance_path)

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        DELVE_DISABLE_CACHE=_env_flag("DELVE_DISABLE_CACHE", "0"),
        DELVE_ENABLE_GENERATION_METRICS=_env_flag("DELVE_ENABLE_GENERATION_METRICS", "1"),
        DELVE_DUNGEON_DEFAULTS=DungeonConfig.from_env(),
        DELVE_MAX_GRID_AREA=int(os.getenv("DELVE_MAX_GRID_AREA", "250000")),
    )
    if config_overrides:
        app.config.update(config_overrides)

    from delve.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)

    @app.errorhandler(DungeonConfigError)
    def _config_error(e):
        return jsonify({"error": str(e), "fields": list(e.fields)}), 400

    @app.errorhandler(DungeonGenerationError)
    def _generation_error(e):
        error_id = uuid.uuid4().hex[:8]
        log.error(event="dungeon_generation_failed", error_id=error_id, error=str(e))
        return jsonify({"error": "dungeon generation failed", "error_id": error_id}), 500

    return app


__all__ = ["create_app", "__version__"]
