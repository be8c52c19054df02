"""
Todo Master application factory.
"""

import os
import logging

from dotenv import load_dotenv
from flask import Flask

from models import db
from routes.health_production import mark_startup_complete
from utils.startup_validation import BlueprintRegistry, run_startup_validation

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///todos.db"


def _configure_logging():
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(test_config=None):
    """Build the Flask app. `test_config` overrides values read from the environment."""
    _configure_logging()

    app = Flask(__name__)

    secret = os.getenv("SESSION_SECRET")
    if not secret:
        logger.warning("SESSION_SECRET not set - using insecure development key")
        secret = "dev-secret-key-change-me"

    app.config.update(
        SECRET_KEY=secret,
        SQLALCHEMY_DATABASE_URI=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        SQLALCHEMY_ENGINE_OPTIONS={"pool_pre_ping": True},
    )
    app.json.sort_keys = False
    if test_config:
        app.config.update(test_config)

    db.init_app(app)

    registry = BlueprintRegistry(app)
    registry.register("routes.api_todos", "api_todos_bp", critical=True)
    registry.register("routes.health_production", "health_production_bp")
    registry.register("routes.pages", "pages_bp")

    with app.app_context():
        db.create_all()

    if not app.config.get("TESTING"):
        run_startup_validation(app, registry)

    mark_startup_complete()
    return app
