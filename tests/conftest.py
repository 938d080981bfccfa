"""Pytest configuration and shared fixtures for HabitGrid tests.

Database fixtures, test data factories and a Flask client, all backed by a
throwaway SQLite file so the real app database is never touched.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from habitgrid import TestingConfig, create_app
from habitgrid.infra.repositories import SQLModelHabitRepository
from habitgrid.models import Habit, HabitLog
from habitgrid.services.streaks import Status
from habitgrid.services.tracking import HabitTracker

USER_ID = 1

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """A database session for direct inserts in a single test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what the repositories expect."""

    def factory():
        return Session(db_engine, expire_on_commit=False)

    return factory


@pytest.fixture
def repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def tracker(repo) -> HabitTracker:
    return HabitTracker(repo, user_id=USER_ID)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(db_session):
    """Factory for creating and persisting habits."""

    def _create_habit(
        title: str = "Test Habit",
        color_hex: str = "#00ff9d",
        user_id: int = USER_ID,
    ) -> Habit:
        habit = Habit(title=title, color_hex=color_hex, user_id=user_id)
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit


@pytest.fixture
def log_factory(db_session):
    """Factory for persisting habit logs."""

    def _create_log(
        habit: Habit,
        log_date: date,
        status: Status = Status.SUCCESS,
    ) -> HabitLog:
        log = HabitLog(
            habit_id=habit.id,
            log_date=log_date,
            status=int(status),
            user_id=habit.user_id,
        )
        db_session.add(log)
        db_session.commit()
        db_session.refresh(log)
        return log

    return _create_log


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app():
    app = create_app(TestingConfig())
    app.config.update(TESTING=True)
    yield app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
