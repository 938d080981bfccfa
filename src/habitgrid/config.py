"""Application configuration objects and helpers."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}.") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitGrid"
    DB_FILENAME = "habitgrid.db"
    SQLITE_PRAGMAS = {"foreign_keys": "on"}
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("HABITGRID_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITGRID_DEV_MODE", default=True)
        self.DEFAULT_USER_ID = _env_int("HABITGRID_USER_ID", default=1)
        self.DATABASE_URL = os.getenv("HABITGRID_DATABASE_URL", self._build_sqlite_url())
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("HABITGRID_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding the SQLite database and logs."""

        data_root = os.getenv("HABITGRID_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration for the test-suite: throwaway data dir and database."""

    DEBUG = False
    TESTING = True

    def _resolve_data_dir(self) -> Path:
        return Path(tempfile.mkdtemp(prefix="habitgrid-test-"))

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = self._build_sqlite_url()
        self.DEV_MODE = True


_CONFIGS: dict[str, type[BaseConfig]] = {
    "development": DevConfig,
    "testing": TestingConfig,
    "production": BaseConfig,
}


def get_config(config: str | BaseConfig | None = None) -> BaseConfig:
    """Resolve a config name (or pass a config instance straight through)."""

    if isinstance(config, BaseConfig):
        return config
    name = config or os.getenv("HABITGRID_ENV", "development")
    try:
        return _CONFIGS[name]()
    except KeyError as exc:
        raise ValueError(f"Unknown configuration {name!r}.") from exc


__all__ = ["BaseConfig", "DevConfig", "TestingConfig", "get_config"]
