# tests/api/test_scoreboard.py
"""Tests for scoreboard API endpoints."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def mock_config(tmp_path):
    """Create a mock config for testing."""
    from seasonboard.config import (
        DisplayConfig,
        LeagueConfig,
        PathsConfig,
        SeasonboardConfig,
    )

    return SeasonboardConfig(
        league=LeagueConfig(league_key="quantum-league", season_key="2025-fall"),
        paths=PathsConfig(data_dir=tmp_path / "data"),
        display=DisplayConfig(locale="en", timezone="Asia/Tehran"),
    )


@pytest.fixture
def empty_db(mock_config):
    """Initialize the database without a scoreboard record."""
    from seasonboard.db.session import init_db, reset_engine

    init_db(mock_config.db_path)
    yield mock_config
    reset_engine()


@pytest.fixture
def db_with_scoreboard(empty_db):
    """Initialize the database with two players and three days."""
    from seasonboard.db.session import create_session
    from seasonboard.db.store import create_scoreboard, save_scoreboard
    from seasonboard.updates import add_player, apply_day_results

    session = create_session()
    scoreboard = create_scoreboard(session, "quantum-league", "2025-fall")
    add_player(scoreboard, "Ali")
    add_player(scoreboard, "Sara")
    apply_day_results(
        scoreboard,
        "2024-10-13",
        [{"playerName": "Ali", "wins": 1}, {"playerName": "Sara", "wins": 3}],
    )
    apply_day_results(scoreboard, "2024-10-14", [{"playerName": "Ali", "wins": 5}])
    apply_day_results(scoreboard, "2024-11-01", [{"playerName": "Sara", "wins": 2}])
    save_scoreboard(session, scoreboard)
    session.close()
    return empty_db


def _client(config):
    with patch("seasonboard.api.app.get_config", return_value=config):
        from seasonboard.api.app import create_app
        yield TestClient(create_app())


@pytest.fixture
def client(db_with_scoreboard):
    yield from _client(db_with_scoreboard)


@pytest.fixture
def client_without_scoreboard(empty_db):
    yield from _client(empty_db)


class TestGetScoreboard:
    def test_returns_document(self, client):
        response = client.get("/scoreboard")
        assert response.status_code == 200
        data = response.json()
        assert data["leagueKey"] == "quantum-league"
        assert data["dates"] == ["2024-10-13", "2024-10-14", "2024-11-01"]
        assert [p["name"] for p in data["players"]] == ["Ali", "Sara"]

    def test_missing_scoreboard(self, client_without_scoreboard):
        response = client_without_scoreboard.get("/scoreboard")
        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "Scoreboard not found"


class TestAddWins:
    def test_adds_wins(self, client):
        response = client.post(
            "/scoreboard/add-wins",
            json={"date": "2024-10-13", "playerWins": [{"playerName": "Ali", "wins": 2}]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["dayKey"] == "2024-10-13"
        assert data["totalWins"] == 2
        assert data["message"] == "Added wins for players on 2024-10-13 (total: 2)"

        players = client.get("/scoreboard").json()["players"]
        assert players[0]["winsByDate"]["2024-10-13"] == 3

    def test_timestamp_date_and_unknown_player(self, client):
        response = client.post(
            "/scoreboard/add-wins",
            json={
                "date": "2024-10-20T18:30:00.000Z",
                "playerWins": [{"playerName": "Reza", "wins": 1}],
            },
        )

        assert response.status_code == 200
        assert response.json()["ignoredPlayers"] == ["Reza"]
        doc = client.get("/scoreboard").json()
        assert "2024-10-20" in doc["dates"]
        assert [p["name"] for p in doc["players"]] == ["Ali", "Sara"]

    def test_missing_date(self, client):
        response = client.post("/scoreboard/add-wins", json={"playerWins": []})
        assert response.status_code == 400
        assert response.json()["detail"]["details"]["constraint"] == "missing_date"

    def test_player_wins_not_a_list(self, client):
        response = client.post(
            "/scoreboard/add-wins", json={"date": "2024-10-13", "playerWins": {"Ali": 2}}
        )
        assert response.status_code == 400
        assert response.json()["detail"]["details"]["constraint"] == "invalid_player_wins"

    def test_negative_wins_change_nothing(self, client):
        before = client.get("/scoreboard").json()
        response = client.post(
            "/scoreboard/add-wins",
            json={
                "date": "2024-10-15",
                "playerWins": [
                    {"playerName": "Ali", "wins": 1},
                    {"playerName": "Sara", "wins": -1},
                ],
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"]["details"]["constraint"] == "negative_wins"
        assert client.get("/scoreboard").json() == before

    def test_bad_date_format(self, client):
        response = client.post(
            "/scoreboard/add-wins", json={"date": "13/10/2024", "playerWins": []}
        )
        assert response.status_code == 400
        assert response.json()["detail"]["details"]["constraint"] == "invalid_date"

    def test_impossible_day_is_rejected_and_not_stored(self, client):
        response = client.post(
            "/scoreboard/add-wins", json={"date": "2024-02-30", "playerWins": []}
        )
        assert response.status_code == 400
        assert response.json()["detail"]["details"]["constraint"] == "invalid_date"

        assert "2024-02-30" not in client.get("/scoreboard").json()["dates"]
        table = client.get("/scoreboard/table", params={"today": "2024-10-13"})
        assert table.status_code == 200

    def test_wrong_date_type(self, client):
        response = client.post(
            "/scoreboard/add-wins", json={"date": 20241013, "playerWins": []}
        )
        assert response.status_code == 422


class TestUpdateCell:
    def test_sets_value(self, client):
        response = client.put(
            "/scoreboard/update-cell",
            json={"playerName": "Sara", "date": "2024-10-13", "wins": 0},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["previous"] == 3
        assert data["wins"] == 0
        players = client.get("/scoreboard").json()["players"]
        assert players[1]["winsByDate"]["2024-10-13"] == 0

    def test_unknown_player(self, client):
        response = client.put(
            "/scoreboard/update-cell",
            json={"playerName": "Reza", "date": "2024-10-13", "wins": 1},
        )
        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "Player not found"

    def test_missing_scoreboard(self, client_without_scoreboard):
        response = client_without_scoreboard.put(
            "/scoreboard/update-cell",
            json={"playerName": "Ali", "date": "2024-10-13", "wins": 1},
        )
        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "Scoreboard not found"

    def test_impossible_day(self, client):
        response = client.put(
            "/scoreboard/update-cell",
            json={"playerName": "Ali", "date": "2024-02-30", "wins": 1},
        )
        assert response.status_code == 400
        assert response.json()["detail"]["details"]["constraint"] == "invalid_date"

    def test_missing_fields(self, client):
        response = client.put("/scoreboard/update-cell", json={"wins": 1})
        assert response.status_code == 400
        assert response.json()["detail"]["details"]["constraint"] == "missing_field"

    def test_non_numeric_wins(self, client):
        response = client.put(
            "/scoreboard/update-cell",
            json={"playerName": "Ali", "date": "2024-10-13", "wins": "many"},
        )
        assert response.status_code == 400
        assert response.json()["detail"]["details"]["constraint"] == "non_numeric_wins"


class TestAddPlayer:
    def test_creates_player_with_zero_days(self, client):
        response = client.post("/scoreboard/add-player", json={"playerName": "Reza"})

        assert response.status_code == 200
        player = response.json()["player"]
        assert player["name"] == "Reza"
        assert player["winsByDate"] == {
            "2024-10-13": 0,
            "2024-10-14": 0,
            "2024-11-01": 0,
        }

    def test_duplicate_name(self, client):
        response = client.post("/scoreboard/add-player", json={"playerName": "sara"})
        assert response.status_code == 400
        assert response.json()["detail"]["details"]["constraint"] == "duplicate_player"

    def test_empty_name(self, client):
        response = client.post("/scoreboard/add-player", json={"playerName": ""})
        assert response.status_code == 400
        assert response.json()["detail"]["details"]["constraint"] == "missing_player_name"


class TestTable:
    def test_columns_and_rows(self, client):
        response = client.get("/scoreboard/table", params={"today": "2024-12-01"})

        assert response.status_code == 200
        data = response.json()
        assert data["today"] == "2024-12-01"
        assert [c["label"] for c in data["columns"]] == [
            "22 Meh",
            "23 Meh",
            "Meh total",
            "11 Aba",
            "Aba total",
        ]
        assert data["columns"][2] == {"kind": "month-total", "monthId": "07", "label": "Meh total"}
        ali = data["rows"][0]
        assert ali["name"] == "Ali"
        assert ali["wins"] == {"2024-10-13": 1, "2024-10-14": 5, "2024-11-01": 0}
        assert ali["monthTotals"] == {"07": 6, "08": 0}

    def test_current_month_is_cut_at_today(self, client):
        data = client.get("/scoreboard/table", params={"today": "2024-10-13"}).json()
        assert data["rows"][0]["monthTotals"]["07"] == 1
        assert data["rows"][1]["monthTotals"]["07"] == 3

    def test_sort_by_month(self, client):
        params = {"today": "2024-12-01", "sort": "08"}
        data = client.get("/scoreboard/table", params=params).json()
        assert [r["name"] for r in data["rows"]] == ["Sara", "Ali"]
        assert data["sort"] == {"month": "08", "direction": "desc"}

        params["direction"] = "asc"
        data = client.get("/scoreboard/table", params=params).json()
        assert [r["name"] for r in data["rows"]] == ["Ali", "Sara"]

    def test_unsorted_keeps_roster_order(self, client):
        data = client.get("/scoreboard/table", params={"today": "2024-12-01"}).json()
        assert [r["name"] for r in data["rows"]] == ["Ali", "Sara"]
        assert data["sort"] == {"month": None, "direction": None}

    def test_bad_direction(self, client):
        response = client.get("/scoreboard/table", params={"sort": "07", "direction": "up"})
        assert response.status_code == 422

    def test_bad_today(self, client):
        response = client.get("/scoreboard/table", params={"today": "yesterday"})
        assert response.status_code == 400

    @pytest.mark.parametrize("path", ["/scoreboard/table", "/scoreboard/summary"])
    def test_impossible_today(self, client, path):
        response = client.get(path, params={"today": "2024-13-01"})
        assert response.status_code == 400
        assert response.json()["detail"]["details"]["constraint"] == "invalid_date"


def test_summary(client):
    response = client.get("/scoreboard/summary", params={"today": "2024-11-05"})

    assert response.status_code == 200
    items = response.json()["items"]
    assert items[0] == {
        "name": "Ali",
        "rank": 1,
        "total": 6,
        "bestMonthTotal": 6,
        "currentMonthTotal": 0,
    }
    assert items[1] == {
        "name": "Sara",
        "rank": 2,
        "total": 5,
        "bestMonthTotal": 3,
        "currentMonthTotal": 2,
    }
