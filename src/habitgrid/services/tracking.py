"""Habit tracking workflow on top of the habit repository.

``HabitTracker`` is what the HTTP layer and the CLI talk to: it loads logs,
hands them to the streak engine and persists status changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError

from ..constants.colors import DEFAULT_COLOR
from ..domain.repositories import HabitRepository
from ..forms import HabitForm
from ..logging_config import get_logger
from ..models.habit import Habit, HabitLog
from .celebrations import Celebration, StreakTier, celebration_for, streak_tier
from .months import month_bounds, month_label
from .reports import (
    DashboardSummary,
    MonthlyChart,
    build_monthly_chart,
    monthly_completion,
    summarize_dashboard,
)
from .streaks import (
    HabitStats,
    LogEntry,
    Status,
    compute_stats,
    cycle_status,
    detect_milestone,
)

logger = get_logger(__name__)


class TrackerError(Exception):
    """Base class for tracking failures surfaced to callers."""


class HabitNotFoundError(TrackerError, LookupError):
    def __init__(self, habit_id: int):
        super().__init__(f"Habit {habit_id} not found.")
        self.habit_id = habit_id


class HabitValidationError(TrackerError, ValueError):
    def __init__(self, errors: dict[str, list[str]]):
        super().__init__("Habit payload is invalid.")
        self.errors = errors


class FutureDayError(TrackerError, ValueError):
    def __init__(self, log_date: date, today: date):
        super().__init__(f"Cannot mark {log_date.isoformat()}: it is after {today.isoformat()}.")
        self.log_date = log_date
        self.today = today


def habit_as_dict(habit: Habit) -> dict:
    return {
        "id": habit.id,
        "title": habit.title,
        "color_hex": habit.color_hex,
        "created_at": habit.created_at.isoformat() if habit.created_at else None,
    }


@dataclass(slots=True)
class CycleResult:
    """Outcome of cycling one day's status."""

    habit_id: int
    log_date: date
    previous_status: Status
    status: Status
    previous_streak: int
    stats: HabitStats
    milestone: int | None
    celebration: Celebration

    def as_dict(self) -> dict:
        return {
            "habit_id": self.habit_id,
            "log_date": self.log_date.isoformat(),
            "previous_status": int(self.previous_status),
            "status": int(self.status),
            "status_name": self.status.name.lower(),
            "previous_streak": self.previous_streak,
            "stats": self.stats.as_dict(),
            "milestone": self.milestone,
            "celebration": self.celebration.value,
        }


@dataclass(slots=True)
class HabitRow:
    """One habit line of the month grid."""

    habit: Habit
    stats: HabitStats
    monthly_completion: float
    tier: StreakTier | None
    statuses: dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> dict:
        payload = habit_as_dict(self.habit)
        payload.update(
            {
                "stats": self.stats.as_dict(),
                "monthly_completion": self.monthly_completion,
                "tier": self.tier.value if self.tier else None,
                "statuses": self.statuses,
            }
        )
        return payload


@dataclass(slots=True)
class Dashboard:
    year: int
    month: int
    summary: DashboardSummary
    chart: MonthlyChart
    rows: list[HabitRow]

    def as_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "label": month_label(self.year, self.month),
            "summary": self.summary.as_dict(),
            "chart": self.chart.as_dict(),
            "habits": [row.as_dict() for row in self.rows],
        }


def to_entries(rows: Iterable[HabitLog]) -> list[LogEntry]:
    return [LogEntry.from_row(row) for row in rows]


class HabitTracker:
    """Habit CRUD, day cycling and statistics for a single user."""

    def __init__(self, repository: HabitRepository, *, user_id: int):
        self.repository = repository
        self.user_id = user_id

    def habits(self) -> list[Habit]:
        return self.repository.list_habits(user_id=self.user_id)

    def get_habit(self, habit_id: int) -> Habit:
        habit = self.repository.get_by_id(habit_id, user_id=self.user_id)
        if habit is None:
            raise HabitNotFoundError(habit_id)
        return habit

    def add_habit(self, title: str, color_hex: str = DEFAULT_COLOR) -> Habit:
        """Validate and store a new habit."""

        form = HabitForm.model_construct(title=title, color_hex=color_hex)
        errors = form.validation_errors()
        if errors:
            raise HabitValidationError(errors)
        cleaned = HabitForm.model_validate(form.model_dump())

        habit = self.repository.create(
            Habit(title=cleaned.title, color_hex=cleaned.color_hex, user_id=self.user_id),
            user_id=self.user_id,
        )
        logger.info(f"Habit created: {habit.title}", extra={"habit_id": habit.id})
        return habit

    def delete_habit(self, habit_id: int) -> None:
        if not self.repository.delete(habit_id, user_id=self.user_id):
            raise HabitNotFoundError(habit_id)
        logger.info(f"Habit deleted: {habit_id}", extra={"habit_id": habit_id})

    def habit_logs(self, habit_id: int) -> list[LogEntry]:
        return to_entries(self.repository.logs_for_habit(habit_id, user_id=self.user_id))

    def logs_for_month(self, year: int, month: int) -> list[LogEntry]:
        start, end = month_bounds(year, month)
        return to_entries(self.repository.logs_between(start, end, user_id=self.user_id))

    def stats_for(self, habit_id: int, as_of: date | None = None) -> HabitStats:
        self.get_habit(habit_id)
        return compute_stats(habit_id, self.habit_logs(habit_id), as_of)

    def cycle_day(self, habit_id: int, log_date: date, *, today: date | None = None) -> CycleResult:
        """Advance a day's status and report the streak consequences."""

        today = today or date.today()
        if log_date > today:
            raise FutureDayError(log_date, today)
        self.get_habit(habit_id)

        logs = self.habit_logs(habit_id)
        before = compute_stats(habit_id, logs, today)
        previous_status = next(
            (entry.status for entry in logs if entry.log_date == log_date), Status.NEUTRAL
        )
        status = cycle_status(previous_status)

        try:
            self.repository.upsert_log(habit_id, log_date, int(status), user_id=self.user_id)
        except SQLAlchemyError as exc:
            logger.error(f"Failed to update log for habit {habit_id}: {exc}", exc_info=True)
            raise

        updated = [entry for entry in logs if entry.log_date != log_date]
        updated.append(LogEntry(habit_id=habit_id, log_date=log_date, status=status))
        after = compute_stats(habit_id, updated, today)

        milestone = None
        if status == Status.SUCCESS:
            milestone = detect_milestone(before.current_streak, after.current_streak)
        celebration = celebration_for(status, before.current_streak, after.current_streak)

        logger.info(
            f"Habit {habit_id} on {log_date.isoformat()}: {previous_status.name} -> {status.name}",
            extra={"habit_id": habit_id, "streak": after.current_streak},
        )
        if milestone is not None:
            logger.info(f"Habit {habit_id} reached a {milestone}-day streak")

        return CycleResult(
            habit_id=habit_id,
            log_date=log_date,
            previous_status=previous_status,
            status=status,
            previous_streak=before.current_streak,
            stats=after,
            milestone=milestone,
            celebration=celebration,
        )

    def dashboard(self, year: int, month: int, today: date | None = None) -> Dashboard:
        """Everything the month view needs in one pass.

        Streaks and rates use each habit's full history; the chart and the
        per-habit progress only look at the requested month.
        """

        today = today or date.today()
        habits = [habit for habit in self.habits() if habit.id is not None]
        habit_ids = [habit.id for habit in habits]
        month_logs = self.logs_for_month(year, month)

        rows: list[HabitRow] = []
        history: list[LogEntry] = []
        for habit in habits:
            logs = self.habit_logs(habit.id)
            history.extend(logs)
            stats = compute_stats(habit.id, logs, today)
            rows.append(
                HabitRow(
                    habit=habit,
                    stats=stats,
                    monthly_completion=monthly_completion(habit.id, month_logs, year, month, today),
                    tier=streak_tier(stats.current_streak),
                    statuses={
                        entry.log_date.isoformat(): int(entry.status)
                        for entry in month_logs
                        if entry.habit_id == habit.id
                    },
                )
            )

        return Dashboard(
            year=year,
            month=month,
            summary=summarize_dashboard(habit_ids, history, today),
            chart=build_monthly_chart(habit_ids, month_logs, year, month, today),
            rows=rows,
        )


__all__ = [
    "CycleResult",
    "Dashboard",
    "FutureDayError",
    "HabitNotFoundError",
    "HabitRow",
    "HabitTracker",
    "HabitValidationError",
    "TrackerError",
    "habit_as_dict",
]
