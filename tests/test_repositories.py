"""Unit tests for the SQLModel habit repository."""

from __future__ import annotations

from datetime import date

from sqlmodel import select

from habitgrid.models import Habit, HabitLog
from habitgrid.services.streaks import Status

USER_ID = 1
OTHER_USER = 2


class TestHabits:
    def test_create_assigns_id_and_owner(self, repo):
        habit = repo.create(Habit(title="Read", user_id=0), user_id=USER_ID)

        assert habit.id is not None
        assert habit.user_id == USER_ID
        assert habit.color_hex == "#00ff9d"

    def test_list_in_creation_order(self, repo):
        first = repo.create(Habit(title="Zebra", user_id=USER_ID), user_id=USER_ID)
        second = repo.create(Habit(title="Apple", user_id=USER_ID), user_id=USER_ID)

        habits = repo.list_habits(user_id=USER_ID)

        assert [h.id for h in habits] == [first.id, second.id]

    def test_scoped_by_user(self, repo, habit_factory):
        mine = habit_factory(title="Mine")
        theirs = habit_factory(title="Theirs", user_id=OTHER_USER)

        assert [h.title for h in repo.list_habits(user_id=USER_ID)] == ["Mine"]
        assert repo.get_by_id(theirs.id, user_id=USER_ID) is None
        assert repo.get_by_id(mine.id, user_id=USER_ID).title == "Mine"

    def test_delete_removes_logs(self, repo, habit_factory, log_factory, db_engine):
        habit = habit_factory()
        keep = habit_factory(title="Keep")
        log_factory(habit, date(2024, 3, 1))
        log_factory(habit, date(2024, 3, 2))
        log_factory(keep, date(2024, 3, 1))

        assert repo.delete(habit.id, user_id=USER_ID) is True

        assert repo.get_by_id(habit.id, user_id=USER_ID) is None
        assert repo.logs_for_habit(habit.id, user_id=USER_ID) == []
        assert len(repo.logs_for_habit(keep.id, user_id=USER_ID)) == 1

    def test_delete_missing_returns_false(self, repo):
        assert repo.delete(999, user_id=USER_ID) is False

    def test_delete_other_users_habit_is_refused(self, repo, habit_factory):
        theirs = habit_factory(user_id=OTHER_USER)

        assert repo.delete(theirs.id, user_id=USER_ID) is False
        assert repo.get_by_id(theirs.id, user_id=OTHER_USER) is not None


class TestLogs:
    def test_upsert_creates_entry(self, repo, habit_factory):
        habit = habit_factory()

        entry = repo.upsert_log(habit.id, date(2024, 3, 1), Status.SUCCESS, user_id=USER_ID)

        assert entry.status == 1
        assert repo.get_log(habit.id, date(2024, 3, 1), user_id=USER_ID).status == 1

    def test_upsert_updates_existing_entry(self, repo, habit_factory, db_session):
        habit = habit_factory()
        day = date(2024, 3, 1)

        repo.upsert_log(habit.id, day, Status.SUCCESS, user_id=USER_ID)
        repo.upsert_log(habit.id, day, Status.FAIL, user_id=USER_ID)

        rows = db_session.exec(select(HabitLog).where(HabitLog.habit_id == habit.id)).all()
        assert len(rows) == 1
        assert rows[0].status == Status.FAIL

    def test_get_log_missing(self, repo, habit_factory):
        habit = habit_factory()

        assert repo.get_log(habit.id, date(2024, 3, 1), user_id=USER_ID) is None

    def test_logs_for_habit_ordered_by_date(self, repo, habit_factory, log_factory):
        habit = habit_factory()
        for day in (5, 1, 3):
            log_factory(habit, date(2024, 3, day))

        logs = repo.logs_for_habit(habit.id, user_id=USER_ID)

        assert [log.log_date.day for log in logs] == [1, 3, 5]

    def test_logs_between_is_inclusive(self, repo, habit_factory, log_factory):
        habit = habit_factory()
        for day in (date(2024, 2, 29), date(2024, 3, 1), date(2024, 3, 31), date(2024, 4, 1)):
            log_factory(habit, day)

        logs = repo.logs_between(date(2024, 3, 1), date(2024, 3, 31), user_id=USER_ID)

        assert [log.log_date for log in logs] == [date(2024, 3, 1), date(2024, 3, 31)]

    def test_logs_between_filters_habits(self, repo, habit_factory, log_factory):
        first = habit_factory(title="First")
        second = habit_factory(title="Second")
        log_factory(first, date(2024, 3, 1))
        log_factory(second, date(2024, 3, 1))

        logs = repo.logs_between(
            date(2024, 3, 1), date(2024, 3, 31), user_id=USER_ID, habit_ids=[second.id]
        )

        assert [log.habit_id for log in logs] == [second.id]
        assert repo.logs_between(
            date(2024, 3, 1), date(2024, 3, 31), user_id=USER_ID, habit_ids=[]
        ) == []
