"""Decide how loudly to celebrate a streak change."""

from __future__ import annotations

from enum import Enum

from .streaks import Status, detect_milestone


class Celebration(str, Enum):
    """Effect level a client should play after a day is marked."""

    NONE = "none"
    SMALL = "small"
    MILESTONE = "milestone"


class StreakTier(str, Enum):
    """Badge tier for a running streak."""

    SPARK = "spark"
    FLAME = "flame"
    BLAZE = "blaze"
    INFERNO = "inferno"


_TIER_THRESHOLDS: tuple[tuple[int, StreakTier], ...] = (
    (30, StreakTier.INFERNO),
    (14, StreakTier.BLAZE),
    (7, StreakTier.FLAME),
    (1, StreakTier.SPARK),
)


def celebration_for(new_status: Status, previous_streak: int, new_streak: int) -> Celebration:
    """Pick the celebration for a status change.

    Only a change to SUCCESS celebrates. Crossing a milestone wins over an
    ordinary continuation; a streak that just (re)started at one day is quiet.
    """

    if new_status != Status.SUCCESS:
        return Celebration.NONE
    if detect_milestone(previous_streak, new_streak) is not None:
        return Celebration.MILESTONE
    if new_streak > 1:
        return Celebration.SMALL
    return Celebration.NONE


def streak_tier(streak: int) -> StreakTier | None:
    """Return the badge tier for ``streak``, or None when there is no streak."""

    for threshold, tier in _TIER_THRESHOLDS:
        if streak >= threshold:
            return tier
    return None


__all__ = ["Celebration", "StreakTier", "celebration_for", "streak_tier"]
