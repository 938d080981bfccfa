"""Tests for the habits JSON API."""

from __future__ import annotations

from datetime import date, timedelta


def create(client, title="Read", **extra):
    response = client.post("/habits/", json={"title": title, **extra})
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def test_list_starts_empty(client):
    response = client.get("/habits/")

    assert response.status_code == 200
    assert response.get_json() == {"habits": []}


def test_create_and_list(client):
    habit = create(client, "Meditate", color_hex="#C084FC")

    assert habit["title"] == "Meditate"
    assert habit["color_hex"] == "#c084fc"

    listed = client.get("/habits/").get_json()["habits"]
    assert [item["id"] for item in listed] == [habit["id"]]
    assert listed[0]["stats"]["current_streak"] == 0


def test_create_accepts_form_data(client):
    response = client.post("/habits/", data={"title": "Stretch"})

    assert response.status_code == 201
    assert response.get_json()["color_hex"] == "#00ff9d"


def test_create_validation_error(client):
    response = client.post("/habits/", json={"title": ""})

    assert response.status_code == 400
    body = response.get_json()
    assert "title" in body["details"]


def test_delete(client):
    habit = create(client)

    assert client.delete(f"/habits/{habit['id']}").status_code == 204
    assert client.delete(f"/habits/{habit['id']}").status_code == 404


def test_cycle_day_and_stats(client):
    habit = create(client)
    today = date.today()
    yesterday = today - timedelta(days=1)

    first = client.post(f"/habits/{habit['id']}/days/{yesterday.isoformat()}/cycle")
    second = client.post(f"/habits/{habit['id']}/days/{today.isoformat()}/cycle")

    assert first.status_code == 200
    assert first.get_json()["status"] == 1
    body = second.get_json()
    assert body["stats"]["current_streak"] == 2
    assert body["celebration"] == "small"

    stats = client.get(f"/habits/{habit['id']}/stats").get_json()["stats"]
    assert stats["total_successes"] == 2
    assert stats["completion_rate"] == 100


def test_stats_as_of(client):
    habit = create(client)
    day = date.today() - timedelta(days=10)
    client.post(f"/habits/{habit['id']}/days/{day.isoformat()}/cycle")

    response = client.get(f"/habits/{habit['id']}/stats?as_of={day.isoformat()}")

    assert response.get_json()["stats"]["current_streak"] == 1


def test_cycle_future_day_rejected(client):
    habit = create(client)
    tomorrow = date.today() + timedelta(days=1)

    response = client.post(f"/habits/{habit['id']}/days/{tomorrow.isoformat()}/cycle")

    assert response.status_code == 400


def test_cycle_bad_date_rejected(client):
    habit = create(client)

    response = client.post(f"/habits/{habit['id']}/days/not-a-date/cycle")

    assert response.status_code == 400
    assert "ISO date" in response.get_json()["error"]


def test_cycle_unknown_habit(client):
    response = client.post(f"/habits/99/days/{date.today().isoformat()}/cycle")

    assert response.status_code == 404


def test_month_logs(client):
    habit = create(client)
    today = date.today()
    client.post(f"/habits/{habit['id']}/days/{today.isoformat()}/cycle")

    body = client.get(f"/habits/logs?year={today.year}&month={today.month}").get_json()

    assert body["logs"] == [
        {"habit_id": habit["id"], "log_date": today.isoformat(), "status": 1}
    ]


def test_month_logs_rejects_bad_month(client):
    assert client.get("/habits/logs?year=2024&month=13").status_code == 400
    assert client.get("/habits/logs?year=abc&month=1").status_code == 400


def test_dashboard(client):
    habit = create(client)
    today = date.today()
    client.post(f"/habits/{habit['id']}/days/{today.isoformat()}/cycle")

    body = client.get(f"/habits/dashboard?year={today.year}&month={today.month}").get_json()

    assert body["summary"]["total_wins"] == 1
    assert body["habits"][0]["tier"] == "spark"
    assert len(body["chart"]["series"]) == today.day
    assert body["chart"]["series"][-1]["percentage"] == 100
    assert set(body["navigation"]) == {"previous", "next"}


def test_colors(client):
    body = client.get("/habits/colors").get_json()

    assert body["default"] == "#00ff9d"
    assert len(body["colors"]) == 8


def test_month_views_reject_out_of_range_year(client):
    for url in ("/habits/dashboard?year=10000&month=1", "/habits/logs?year=0&month=1"):
        response = client.get(url)

        assert response.status_code == 400
        assert "year must be between" in response.get_json()["error"]


def test_create_rejects_non_object_json(client):
    for body in (["x"], "Read"):
        response = client.post("/habits/", json=body)

        assert response.status_code == 400
        assert response.get_json()["error"] == "Request body must be a JSON object."

    assert client.get("/habits/").get_json() == {"habits": []}


def test_stats_rejects_bad_as_of(client):
    habit = create(client)

    response = client.get(f"/habits/{habit['id']}/stats?as_of=yesterday")

    assert response.status_code == 400
    assert "as_of must be an ISO date" in response.get_json()["error"]


def test_list_rejects_bad_as_of(client):
    create(client)

    assert client.get("/habits/?as_of=2024-13-01").status_code == 400


def test_tracker_uses_app_session_factory(app):
    from habitgrid.extensions import get_session_factory, get_tracker

    with app.test_request_context():
        assert get_tracker().repository.session_factory is get_session_factory()
        assert get_tracker() is get_tracker()
