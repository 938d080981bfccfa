"""Calendar month helpers for the habit grid."""

from __future__ import annotations

from calendar import month_name, monthrange
from datetime import date


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")


def days_in_month(year: int, month: int) -> int:
    _check_month(month)
    return monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of the month."""

    return date(year, month, 1), date(year, month, days_in_month(year, month))


def previous_month(year: int, month: int) -> tuple[int, int]:
    _check_month(month)
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    _check_month(month)
    if month == 12:
        return year + 1, 1
    return year, month + 1


def month_label(year: int, month: int) -> str:
    _check_month(month)
    return f"{month_name[month]} {year}"


def is_current_month(year: int, month: int, today: date) -> bool:
    return (today.year, today.month) == (year, month)


def tracked_days(year: int, month: int, today: date) -> int:
    """Number of days of the month that count towards monthly figures.

    The current month only counts up to and including ``today``.
    """

    if is_current_month(year, month, today):
        return today.day
    return days_in_month(year, month)


def iso_day(year: int, month: int, day: int) -> str:
    return date(year, month, day).isoformat()


__all__ = [
    "days_in_month",
    "is_current_month",
    "iso_day",
    "month_bounds",
    "month_label",
    "next_month",
    "previous_month",
    "tracked_days",
]
