"""HabitGrid habit tracking package."""

from __future__ import annotations

from .app import create_app
from .config import BaseConfig, DevConfig, TestingConfig

__all__ = ["BaseConfig", "DevConfig", "TestingConfig", "create_app"]
