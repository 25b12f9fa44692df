"""In-memory scoreboard types.

These mirror the stored document one-to-one. The document keeps the
camelCase field names the scoreboard has always been stored with
(``dates``, ``winsByDate``); the Python side uses snake_case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Player:
    name: str
    wins_by_day: dict[str, int] = field(default_factory=dict)

    def wins_on(self, day_key: str) -> int:
        """Wins recorded on a day; days without an entry count as 0."""
        return self.wins_by_day.get(day_key, 0)

    def to_document(self) -> dict[str, Any]:
        return {"name": self.name, "winsByDate": dict(self.wins_by_day)}

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> Player:
        return cls(
            name=doc["name"],
            wins_by_day={k: int(v) for k, v in (doc.get("winsByDate") or {}).items()},
        )


@dataclass(frozen=True)
class PlayerWins:
    """One entry of a bulk day insert."""

    player_name: str
    wins: int


@dataclass
class Scoreboard:
    """One league/season record.

    ``day_keys`` is kept sorted and unique. Every key used in any player's
    ``wins_by_day`` must appear in it; a day-key may exist with no wins.
    """

    league_key: str
    season_key: str
    title: str | None = None
    day_keys: list[str] = field(default_factory=list)
    players: list[Player] = field(default_factory=list)

    def add_day_key(self, day_key: str) -> bool:
        """Insert a day-key if missing and keep the list sorted.

        Returns:
            True if the key was new
        """
        if day_key in self.day_keys:
            return False
        self.day_keys = sorted({*self.day_keys, day_key})
        return True

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "leagueKey": self.league_key,
            "seasonKey": self.season_key,
            "dates": list(self.day_keys),
            "players": [p.to_document() for p in self.players],
        }
        if self.title is not None:
            doc["title"] = self.title
        return doc

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> Scoreboard:
        return cls(
            league_key=doc["leagueKey"],
            season_key=doc["seasonKey"],
            title=doc.get("title"),
            day_keys=sorted(set(doc.get("dates") or [])),
            players=[Player.from_document(p) for p in doc.get("players") or []],
        )
