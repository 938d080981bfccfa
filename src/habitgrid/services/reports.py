"""Monthly reporting for the habits dashboard.

Builds the data behind the monthly success-rate chart, the per-habit monthly
progress bars and the dashboard summary cards. Rendering is left to clients;
this module only produces numbers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_FLOOR, Decimal
from typing import Iterable, Sequence

from .months import tracked_days
from .streaks import HabitStats, LogEntry, Status, compute_stats

TREND_WINDOW = 7


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity.

    2.5 -> 3 and -2.5 -> -2.
    """

    return int((Decimal(str(value)) + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


@dataclass(slots=True)
class DailyPoint:
    """Success percentage across all habits for one day of the month."""

    day: int
    percentage: int | None

    @property
    def display_percentage(self) -> int:
        return self.percentage if self.percentage is not None else 0


@dataclass(slots=True)
class MonthlyChart:
    year: int
    month: int
    series: list[DailyPoint] = field(default_factory=list)
    average: int = 0
    trend: int = 0
    trend_visible: bool = False

    def as_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "series": [
                {
                    "day": point.day,
                    "percentage": point.percentage,
                    "display_percentage": point.display_percentage,
                }
                for point in self.series
            ],
            "average": self.average,
            "trend": self.trend,
            "trend_visible": self.trend_visible,
        }


@dataclass(slots=True)
class DashboardSummary:
    """Totals shown on the dashboard cards."""

    active_streaks: int = 0
    best_streak: int = 0
    success_rate: int = 0
    total_wins: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "active_streaks": self.active_streaks,
            "best_streak": self.best_streak,
            "success_rate": self.success_rate,
            "total_wins": self.total_wins,
        }


def _status_index(logs: Iterable[LogEntry]) -> dict[tuple[int, date], Status]:
    return {(log.habit_id, log.log_date): log.status for log in logs}


def daily_success_series(
    habit_ids: Sequence[int],
    logs: Iterable[LogEntry],
    year: int,
    month: int,
    today: date | None = None,
) -> list[DailyPoint]:
    """Per-day success percentage over the habits that were tracked that day.

    A habit counts as tracked on a day when it has a non-Neutral log. Days
    where nothing was tracked yield ``None`` rather than 0.
    """

    today = today or date.today()
    statuses = _status_index(logs)
    series: list[DailyPoint] = []
    for day in range(1, tracked_days(year, month, today) + 1):
        current = date(year, month, day)
        tracked = 0
        successes = 0
        for habit_id in habit_ids:
            status = statuses.get((habit_id, current), Status.NEUTRAL)
            if status == Status.NEUTRAL:
                continue
            tracked += 1
            if status == Status.SUCCESS:
                successes += 1
        percentage = round_half_up(successes / tracked * 100) if tracked else None
        series.append(DailyPoint(day=day, percentage=percentage))
    return series


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def average_success(series: Sequence[DailyPoint]) -> int:
    values = [point.percentage for point in series if point.percentage is not None]
    if not values:
        return 0
    return round_half_up(_mean(values))


def success_trend(series: Sequence[DailyPoint], window: int = TREND_WINDOW) -> int:
    """Average of the last ``window`` tracked days minus the window before it."""

    recent = [p.percentage for p in series[-window:] if p.percentage is not None]
    previous = [
        p.percentage for p in series[-2 * window : -window] if p.percentage is not None
    ]
    if not recent:
        return 0
    recent_avg = _mean(recent)
    previous_avg = _mean(previous) if previous else recent_avg
    return round_half_up(recent_avg - previous_avg)


def trend_visible(series: Sequence[DailyPoint], window: int = TREND_WINDOW) -> bool:
    return len(series) > window


def build_monthly_chart(
    habit_ids: Sequence[int],
    logs: Iterable[LogEntry],
    year: int,
    month: int,
    today: date | None = None,
) -> MonthlyChart:
    series = daily_success_series(habit_ids, list(logs), year, month, today)
    return MonthlyChart(
        year=year,
        month=month,
        series=series,
        average=average_success(series),
        trend=success_trend(series),
        trend_visible=trend_visible(series),
    )


def monthly_completion(
    habit_id: int,
    logs: Iterable[LogEntry],
    year: int,
    month: int,
    today: date | None = None,
) -> float:
    """Share of the month's counted days marked SUCCESS for one habit."""

    today = today or date.today()
    max_days = tracked_days(year, month, today)
    if max_days <= 0:
        return 0.0
    success_days = {
        log.log_date
        for log in logs
        if log.habit_id == habit_id
        and log.status == Status.SUCCESS
        and log.log_date.year == year
        and log.log_date.month == month
        and log.log_date.day <= max_days
    }
    return len(success_days) / max_days * 100


def summarize_dashboard(
    habit_ids: Sequence[int],
    logs: Iterable[LogEntry],
    as_of: date | None = None,
) -> DashboardSummary:
    logs = list(logs)
    stats: list[HabitStats] = [compute_stats(habit_id, logs, as_of) for habit_id in habit_ids]
    if not stats:
        return DashboardSummary()
    return DashboardSummary(
        active_streaks=sum(s.current_streak for s in stats),
        best_streak=max(s.longest_streak for s in stats),
        success_rate=round_half_up(_mean([s.completion_rate for s in stats])),
        total_wins=sum(s.total_successes for s in stats),
    )


__all__ = [
    "DailyPoint",
    "DashboardSummary",
    "MonthlyChart",
    "average_success",
    "build_monthly_chart",
    "daily_success_series",
    "monthly_completion",
    "round_half_up",
    "success_trend",
    "summarize_dashboard",
    "trend_visible",
]
