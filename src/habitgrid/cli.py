"""Flask CLI commands for HabitGrid."""

from __future__ import annotations

import random
from datetime import date, timedelta

import click

from .constants.colors import PRESET_COLORS
from .services.streaks import Status

DEMO_HABITS = ("Exercise", "Read", "Meditate", "Drink water")
DEMO_DAYS = 30


def seed_demo(tracker, *, today: date, days: int = DEMO_DAYS, seed: int = 7) -> int:
    """Create demo habits with ``days`` of history. Returns the number of logs written."""

    rng = random.Random(seed)
    written = 0
    for index, title in enumerate(DEMO_HABITS):
        habit = tracker.add_habit(title, PRESET_COLORS[index % len(PRESET_COLORS)])
        for offset in range(days):
            day = today - timedelta(days=offset)
            status = rng.choices(
                (Status.SUCCESS, Status.FAIL, Status.NEUTRAL), weights=(6, 2, 2)
            )[0]
            if status == Status.NEUTRAL:
                continue
            tracker.repository.upsert_log(habit.id, day, int(status), user_id=tracker.user_id)
            written += 1
    return written


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("habitgrid-stats")
    @click.option(
        "--as-of",
        "as_of",
        type=click.DateTime(formats=["%Y-%m-%d"]),
        default=None,
        help="Reference day (YYYY-MM-DD); defaults to today.",
    )
    def habitgrid_stats(as_of) -> None:
        """Print streaks and completion rates for every habit."""

        from .extensions import get_tracker

        day = as_of.date() if as_of else date.today()
        tracker = get_tracker()
        habits = tracker.habits()
        if not habits:
            click.echo("No habits yet.")
            return
        for habit in habits:
            stats = tracker.stats_for(habit.id, day)
            click.echo(
                f"{habit.title}: current {stats.current_streak}d, "
                f"longest {stats.longest_streak}d, "
                f"{stats.completion_rate:.0f}% of {stats.total_logs} logs"
            )

    @app.cli.command("habitgrid-seed")
    @click.option("--demo", is_flag=True, default=False, help="Seed demo habits and logs")
    def habitgrid_seed(demo: bool) -> None:
        """Seed application data (demo)."""

        if not demo:
            click.echo("No action specified. Use --demo to seed demo data.")
            return

        from .extensions import get_tracker

        written = seed_demo(get_tracker(), today=date.today())
        click.echo(f"Demo seed completed: {len(DEMO_HABITS)} habits, {written} logs.")
