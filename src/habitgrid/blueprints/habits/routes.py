"""Habit JSON routes."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import MAXYEAR, MINYEAR, date

from flask import jsonify, request

from ...constants.colors import DEFAULT_COLOR, PRESET_COLORS
from ...extensions import get_tracker
from ...services.months import next_month, previous_month
from ...services.tracking import (
    FutureDayError,
    HabitNotFoundError,
    HabitValidationError,
    habit_as_dict,
)
from . import bp


class BadRequest(ValueError):
    """Malformed query or path parameter."""


def _error(message: str, status: int, details: object = None):
    payload: dict[str, object] = {"error": message}
    if details is not None:
        payload["details"] = details
    return jsonify(payload), status


def _parse_day(value: str, name: str = "date") -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise BadRequest(f"{name} must be an ISO date (YYYY-MM-DD), got {value!r}.") from exc


def _year_month() -> tuple[int, int]:
    today = date.today()
    try:
        year = int(request.args.get("year", today.year))
        month = int(request.args.get("month", today.month))
    except ValueError as exc:
        raise BadRequest("year and month must be integers.") from exc
    if not MINYEAR <= year <= MAXYEAR:
        raise BadRequest(f"year must be between {MINYEAR} and {MAXYEAR}.")
    if not 1 <= month <= 12:
        raise BadRequest("month must be between 1 and 12.")
    return year, month


@bp.errorhandler(HabitNotFoundError)
def _not_found(exc: HabitNotFoundError):
    return _error(str(exc), 404)


@bp.errorhandler(HabitValidationError)
def _invalid(exc: HabitValidationError):
    return _error(str(exc), 400, exc.errors)


@bp.errorhandler(FutureDayError)
def _future_day(exc: FutureDayError):
    return _error(str(exc), 400)


@bp.errorhandler(BadRequest)
def _bad_request(exc: BadRequest):
    return _error(str(exc), 400)


@bp.get("/")
def list_habits():
    """List habits with their current stats."""

    tracker = get_tracker()
    as_of = _parse_day(request.args["as_of"], "as_of") if "as_of" in request.args else None
    payload = []
    for habit in tracker.habits():
        item = habit_as_dict(habit)
        item["stats"] = tracker.stats_for(habit.id, as_of).as_dict()
        payload.append(item)
    return jsonify({"habits": payload})


@bp.post("/")
def create_habit():
    data = request.get_json(silent=True)
    if data is None:
        data = request.form
    if not isinstance(data, Mapping):
        raise BadRequest("Request body must be a JSON object.")
    habit = get_tracker().add_habit(
        title=data.get("title", ""),
        color_hex=data.get("color_hex") or DEFAULT_COLOR,
    )
    return jsonify(habit_as_dict(habit)), 201


@bp.delete("/<int:habit_id>")
def delete_habit(habit_id: int):
    get_tracker().delete_habit(habit_id)
    return "", 204


@bp.get("/<int:habit_id>/stats")
def habit_stats(habit_id: int):
    as_of = _parse_day(request.args["as_of"], "as_of") if "as_of" in request.args else None
    stats = get_tracker().stats_for(habit_id, as_of)
    return jsonify({"habit_id": habit_id, "stats": stats.as_dict()})


@bp.post("/<int:habit_id>/days/<day>/cycle")
def cycle_day(habit_id: int, day: str):
    """Rotate a day's status: neutral -> success -> fail -> neutral."""

    result = get_tracker().cycle_day(habit_id, _parse_day(day))
    return jsonify(result.as_dict())


@bp.get("/logs")
def month_logs():
    year, month = _year_month()
    logs = get_tracker().logs_for_month(year, month)
    return jsonify(
        {
            "year": year,
            "month": month,
            "logs": [
                {
                    "habit_id": entry.habit_id,
                    "log_date": entry.log_date.isoformat(),
                    "status": int(entry.status),
                }
                for entry in logs
            ],
        }
    )


@bp.get("/dashboard")
def dashboard():
    year, month = _year_month()
    payload = get_tracker().dashboard(year, month).as_dict()
    prev_year, prev_month = previous_month(year, month)
    next_year, next_month_ = next_month(year, month)
    payload["navigation"] = {
        "previous": {"year": prev_year, "month": prev_month},
        "next": {"year": next_year, "month": next_month_},
    }
    return jsonify(payload)


@bp.get("/colors")
def colors():
    return jsonify({"colors": PRESET_COLORS, "default": DEFAULT_COLOR})
