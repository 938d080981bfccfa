"""Database and service wiring for the Flask app."""

from __future__ import annotations

from flask import Flask, current_app, g

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import SQLModelHabitRepository
from .services.tracking import HabitTracker

EXTENSION_KEY = "habitgrid"


def init_db(app: Flask) -> None:
    """Create the engine and schema, and keep the session factory on the app."""

    config: BaseConfig = app.config["HABITGRID_CONFIG"]
    engine, session_factory = bootstrap_database(config)
    app.extensions[EXTENSION_KEY] = {"engine": engine, "session_factory": session_factory}


def get_session_factory() -> SessionFactory:
    state = current_app.extensions.get(EXTENSION_KEY)
    if state is None:  # pragma: no cover - misconfigured app
        raise RuntimeError("Database engine not initialized")
    return state["session_factory"]


def get_tracker() -> HabitTracker:
    """Return a request-scoped tracker for the configured user."""

    if "habit_tracker" not in g:
        config: BaseConfig = current_app.config["HABITGRID_CONFIG"]
        repository = SQLModelHabitRepository(get_session_factory())
        g.habit_tracker = HabitTracker(repository, user_id=config.DEFAULT_USER_ID)
    return g.habit_tracker
