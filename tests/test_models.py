"""Tests for scoreboard document conversion."""

from seasonboard.models import Player, Scoreboard


def test_player_missing_day_is_zero():
    player = Player("Ali", {"2024-10-13": 2})
    assert player.wins_on("2024-10-13") == 2
    assert player.wins_on("2024-10-14") == 0


def test_scoreboard_document_round_trip():
    doc = {
        "leagueKey": "quantum-league",
        "seasonKey": "2025-fall",
        "title": "Fall season",
        "dates": ["2024-11-01", "2024-10-13"],
        "players": [{"name": "Ali", "winsByDate": {"2024-10-13": 3}}],
    }

    scoreboard = Scoreboard.from_document(doc)

    assert scoreboard.day_keys == ["2024-10-13", "2024-11-01"]
    assert scoreboard.players[0].wins_by_day == {"2024-10-13": 3}
    assert scoreboard.to_document() == {**doc, "dates": ["2024-10-13", "2024-11-01"]}


def test_title_is_omitted_when_unset():
    doc = Scoreboard("quantum-league", "2025-fall").to_document()
    assert "title" not in doc
    assert doc["dates"] == []
    assert doc["players"] == []


def test_add_day_key():
    scoreboard = Scoreboard("quantum-league", "2025-fall", day_keys=["2024-11-01"])

    assert scoreboard.add_day_key("2024-10-13") is True
    assert scoreboard.add_day_key("2024-10-13") is False
    assert scoreboard.day_keys == ["2024-10-13", "2024-11-01"]
