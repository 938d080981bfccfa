"""Service module exports."""

from . import celebrations, months, reports, streaks, tracking

__all__ = [
    "celebrations",
    "months",
    "reports",
    "streaks",
    "tracking",
]
