"""SQLModel implementation of the habit repository."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from sqlmodel import Session, select

from ...models.habit import Habit, HabitLog
from ..database import SessionFactory


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    @staticmethod
    def _find_habit(session: Session, habit_id: int, user_id: int) -> Optional[Habit]:
        return session.exec(
            select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
        ).first()

    @staticmethod
    def _find_log(
        session: Session, habit_id: int, log_date: date, user_id: int
    ) -> Optional[HabitLog]:
        return session.exec(
            select(HabitLog)
            .where(HabitLog.user_id == user_id)
            .where(HabitLog.habit_id == habit_id)
            .where(HabitLog.log_date == log_date)
        ).first()

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = self._find_habit(session, habit_id, user_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_habits(self, *, user_id: int) -> list[Habit]:
        """List habits in creation order."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .order_by(Habit.created_at, Habit.id)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete(self, habit_id: int, *, user_id: int) -> bool:
        """Delete a habit together with its logs."""
        with self.session_factory() as session:
            habit = self._find_habit(session, habit_id, user_id)
            if habit is None:
                return False
            logs = session.exec(select(HabitLog).where(HabitLog.habit_id == habit_id)).all()
            for log in logs:
                session.delete(log)
            session.delete(habit)
            session.commit()
            return True

    # Habit log operations
    def get_log(self, habit_id: int, log_date: date, *, user_id: int) -> Optional[HabitLog]:
        """Get the log for one habit on one day."""
        with self.session_factory() as session:
            obj = self._find_log(session, habit_id, log_date, user_id)
            if obj:
                session.expunge(obj)
            return obj

    def upsert_log(self, habit_id: int, log_date: date, status: int, *, user_id: int) -> HabitLog:
        """Insert or update the log for one habit on one day."""
        with self.session_factory() as session:
            existing = self._find_log(session, habit_id, log_date, user_id)
            if existing:
                existing.status = int(status)
                entry = existing
            else:
                entry = HabitLog(
                    habit_id=habit_id,
                    log_date=log_date,
                    status=int(status),
                    user_id=user_id,
                )
            session.add(entry)
            session.commit()
            session.refresh(entry)
            session.expunge(entry)
            return entry

    def logs_for_habit(self, habit_id: int, *, user_id: int) -> list[HabitLog]:
        """All logs of a habit, oldest first."""
        with self.session_factory() as session:
            statement = (
                select(HabitLog)
                .where(HabitLog.user_id == user_id)
                .where(HabitLog.habit_id == habit_id)
                .order_by(HabitLog.log_date)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def logs_between(
        self,
        start_date: date,
        end_date: date,
        *,
        user_id: int,
        habit_ids: Iterable[int] | None = None,
    ) -> list[HabitLog]:
        """Logs dated within [start_date, end_date], optionally for some habits."""
        with self.session_factory() as session:
            statement = (
                select(HabitLog)
                .where(HabitLog.user_id == user_id)
                .where(HabitLog.log_date >= start_date)
                .where(HabitLog.log_date <= end_date)
            )
            if habit_ids is not None:
                ids = list(habit_ids)
                if not ids:
                    return []
                statement = statement.where(HabitLog.habit_id.in_(ids))  # type: ignore[union-attr]
            statement = statement.order_by(HabitLog.log_date, HabitLog.habit_id)  # type: ignore[arg-type]
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows
