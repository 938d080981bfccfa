"""Streak and completion statistics for habit logs.

Everything here is a pure function of the logs handed in and the reference
day: no database access, no clock reads beyond the ``date.today()`` default.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import IntEnum
from typing import Any, Iterable, Mapping

MILESTONES: tuple[int, ...] = (3, 7, 14, 21, 30, 60, 90, 100, 180, 365)

_ONE_DAY = timedelta(days=1)


class Status(IntEnum):
    """Per-day state of a habit. Values match what is stored in ``habit_log``."""

    NEUTRAL = 0
    SUCCESS = 1
    FAIL = 2


def cycle_status(status: Status | int) -> Status:
    """Rotate NEUTRAL -> SUCCESS -> FAIL -> NEUTRAL."""

    return Status((int(status) + 1) % len(Status))


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One habit's status on one calendar day."""

    habit_id: int
    log_date: date
    status: Status

    @classmethod
    def from_row(cls, row: Any) -> "LogEntry":
        """Build an entry from a ``HabitLog`` row or a plain mapping.

        ``log_date`` may be a ``date`` or an ISO ``YYYY-MM-DD`` string.
        """

        if isinstance(row, Mapping):
            habit_id, log_date, status = row["habit_id"], row["log_date"], row["status"]
        else:
            habit_id, log_date, status = row.habit_id, row.log_date, row.status
        if isinstance(log_date, str):
            log_date = date.fromisoformat(log_date[:10])
        return cls(habit_id=habit_id, log_date=log_date, status=Status(status))


@dataclass(frozen=True, slots=True)
class HabitStats:
    """Derived statistics for a single habit."""

    current_streak: int = 0
    longest_streak: int = 0
    completion_rate: float = 0.0
    total_successes: int = 0
    total_logs: int = 0

    def as_dict(self) -> dict[str, float | int]:
        return {
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "completion_rate": self.completion_rate,
            "total_successes": self.total_successes,
            "total_logs": self.total_logs,
        }


def _current_streak(success_days: set[date], as_of: date) -> int:
    # A streak still counts if today is not marked yet but yesterday was.
    if as_of in success_days:
        cursor = as_of
    elif as_of - _ONE_DAY in success_days:
        cursor = as_of - _ONE_DAY
    else:
        return 0

    streak = 0
    while cursor in success_days:
        streak += 1
        cursor -= _ONE_DAY
    return streak


def _longest_streak(success_days: set[date]) -> int:
    longest = 0
    run = 0
    last_day: date | None = None
    for day in sorted(success_days):
        if last_day is not None and day - last_day == _ONE_DAY:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = day
    return longest


def compute_stats(
    habit_id: int,
    logs: Iterable[LogEntry],
    as_of: date | None = None,
) -> HabitStats:
    """Return streaks and completion figures for ``habit_id`` as of a day.

    ``logs`` may contain entries for other habits; they are ignored. Every
    status counts towards ``total_logs``, Fail and explicit Neutral included.
    """

    as_of = as_of or date.today()
    habit_logs = [log for log in logs if log.habit_id == habit_id]

    success_days = {log.log_date for log in habit_logs if log.status == Status.SUCCESS}
    total_logs = len(habit_logs)
    total_successes = sum(1 for log in habit_logs if log.status == Status.SUCCESS)
    completion_rate = (total_successes / total_logs) * 100 if total_logs else 0.0

    if not success_days:
        return HabitStats(
            completion_rate=completion_rate,
            total_successes=total_successes,
            total_logs=total_logs,
        )

    return HabitStats(
        current_streak=_current_streak(success_days, as_of),
        longest_streak=_longest_streak(success_days),
        completion_rate=completion_rate,
        total_successes=total_successes,
        total_logs=total_logs,
    )


def detect_milestone(previous_streak: int, new_streak: int) -> int | None:
    """Return the smallest milestone crossed going from one streak to another."""

    for milestone in MILESTONES:
        if previous_streak < milestone <= new_streak:
            return milestone
    return None


__all__ = [
    "MILESTONES",
    "HabitStats",
    "LogEntry",
    "Status",
    "compute_stats",
    "cycle_status",
    "detect_milestone",
]
