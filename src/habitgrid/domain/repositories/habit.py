"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol

from ...models.habit import Habit, HabitLog


class HabitRepository(Protocol):
    """Persistence contract for habits and their daily logs."""

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_habits(self, *, user_id: int) -> list[Habit]:
        """List habits in creation order."""
        ...

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Persist a new habit."""
        ...

    def delete(self, habit_id: int, *, user_id: int) -> bool:
        """Delete a habit and its logs. Returns False when nothing matched."""
        ...

    def get_log(self, habit_id: int, log_date: date, *, user_id: int) -> Optional[HabitLog]:
        """Get the log for one habit on one day."""
        ...

    def upsert_log(self, habit_id: int, log_date: date, status: int, *, user_id: int) -> HabitLog:
        """Insert or update the log for one habit on one day."""
        ...

    def logs_for_habit(self, habit_id: int, *, user_id: int) -> list[HabitLog]:
        """All logs of a habit, oldest first."""
        ...

    def logs_between(
        self,
        start_date: date,
        end_date: date,
        *,
        user_id: int,
        habit_ids: Iterable[int] | None = None,
    ) -> list[HabitLog]:
        """Logs dated within [start_date, end_date]."""
        ...
