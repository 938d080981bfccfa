"""Flask application factory."""

from __future__ import annotations

from flask import Flask

from .config import BaseConfig, get_config
from .logging_config import setup_logging


def create_app(config: str | BaseConfig | None = None) -> Flask:
    """Build the HabitGrid Flask app.

    ``config`` may be a config name (``"development"``, ``"testing"``,
    ``"production"``) or an already built config object.
    """

    cfg = get_config(config)
    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=cfg.SECRET_KEY,
        DEBUG=cfg.DEBUG,
        TESTING=cfg.TESTING,
        HABITGRID_CONFIG=cfg,
    )

    logger = setup_logging(cfg)

    from . import cli
    from .blueprints import habits
    from .extensions import init_db

    init_db(app)
    app.register_blueprint(habits.bp)
    cli.init_app(app)

    logger.info("HabitGrid app created", extra={"database_url": cfg.DATABASE_URL})
    return app
