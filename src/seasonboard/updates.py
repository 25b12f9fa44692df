"""Scoreboard mutations.

Two ways to change wins:

* ``apply_day_results`` adds a day's results on top of what is stored.
  Calling it twice for the same day counts the wins twice.
* ``set_cell_value`` replaces one player's wins for one day.

Both, like ``add_player``, leave every day-key used by a player present in
``scoreboard.day_keys``. They mutate the scoreboard in place; loading and
saving the record is the store's job.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .dates import normalize_day_key
from .errors import DuplicatePlayerError, PlayerNotFoundError, ValidationError
from .models import Player, PlayerWins, Scoreboard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayResultsOutcome:
    day_key: str
    total_wins: int
    ignored_names: list[str] = field(default_factory=list)
    new_day: bool = False


@dataclass(frozen=True)
class CellUpdate:
    player_name: str
    day_key: str
    previous: int
    wins: int


def _validate_wins(wins: Any, player_name: str | None = None) -> int:
    # bool is an int subclass; True is not a win count. wins != wins is NaN.
    if (
        isinstance(wins, bool)
        or not isinstance(wins, (int, float))
        or wins != wins
    ):
        raise ValidationError(
            "Wins must be a non-negative number",
            "non_numeric_wins",
            player_name=player_name,
            wins=repr(wins),
        )
    if wins < 0:
        raise ValidationError(
            "Wins must be a non-negative number",
            "negative_wins",
            player_name=player_name,
            wins=wins,
        )
    if isinstance(wins, float) and not wins.is_integer():
        raise ValidationError(
            "Wins must be a whole number",
            "non_integer_wins",
            player_name=player_name,
            wins=wins,
        )
    return int(wins)


def _coerce_entry(entry: PlayerWins | Mapping[str, Any]) -> PlayerWins:
    if isinstance(entry, PlayerWins):
        name, wins = entry.player_name, entry.wins
    elif isinstance(entry, Mapping):
        name = entry.get("playerName", entry.get("player_name"))
        wins = entry.get("wins")
    else:
        raise ValidationError(
            "Each playerWins item must be an object", "invalid_entry"
        )

    if not isinstance(name, str) or not name:
        raise ValidationError(
            "Each playerWins item needs a playerName", "missing_player_name"
        )
    return PlayerWins(player_name=name, wins=_validate_wins(wins, name))


def find_player(scoreboard: Scoreboard, name: str) -> Player | None:
    """Find a player by exact name."""
    for player in scoreboard.players:
        if player.name == name:
            return player
    return None


def apply_day_results(
    scoreboard: Scoreboard,
    day_key: str,
    entries: Iterable[PlayerWins | Mapping[str, Any]],
) -> DayResultsOutcome:
    """Add one day's wins to every listed player.

    Every entry is validated before anything is changed. Names that are not
    on the scoreboard are skipped, never created. If a name is listed more
    than once, its last entry is used.

    Args:
        scoreboard: Record to update in place
        day_key: Day-key or timestamp string of the day
        entries: ``PlayerWins`` or ``{"playerName", "wins"}`` mappings

    Returns:
        Outcome with the total of all submitted wins and the skipped names

    Raises:
        ValidationError: Bad date, missing name, negative or non-numeric wins
    """
    day_key = normalize_day_key(day_key)
    if entries is None or isinstance(entries, (str, bytes, Mapping)):
        raise ValidationError("playerWins must be an array", "invalid_player_wins")

    parsed = [_coerce_entry(e) for e in entries]
    wins_map = {e.player_name: e.wins for e in parsed}

    known = set()
    for player in scoreboard.players:
        known.add(player.name)
        player.wins_by_day[day_key] = player.wins_on(day_key) + wins_map.get(
            player.name, 0
        )

    ignored = sorted(name for name in wins_map if name not in known)
    if ignored:
        logger.warning(
            f"Ignoring wins for unknown players on {day_key}: {', '.join(ignored)}"
        )

    new_day = scoreboard.add_day_key(day_key)
    total = sum(e.wins for e in parsed)
    logger.info(
        f"Added {total} wins on {day_key} for "
        f"{scoreboard.league_key}/{scoreboard.season_key}"
    )

    return DayResultsOutcome(
        day_key=day_key, total_wins=total, ignored_names=ignored, new_day=new_day
    )


def set_cell_value(
    scoreboard: Scoreboard,
    player_name: str,
    day_key: str,
    wins: int,
) -> CellUpdate:
    """Replace one player's wins for one day.

    Raises:
        ValidationError: Missing name, bad date, negative or non-numeric wins
        PlayerNotFoundError: No player with exactly this name
    """
    if not isinstance(player_name, str) or not player_name:
        raise ValidationError("playerName is required", "missing_player_name")
    day_key = normalize_day_key(day_key)
    wins = _validate_wins(wins, player_name)

    player = find_player(scoreboard, player_name)
    if player is None:
        raise PlayerNotFoundError(player_name)

    previous = player.wins_on(day_key)
    player.wins_by_day[day_key] = wins
    scoreboard.add_day_key(day_key)

    logger.info(f"Set {player_name} on {day_key}: {previous} -> {wins}")
    return CellUpdate(
        player_name=player_name, day_key=day_key, previous=previous, wins=wins
    )


def add_player(scoreboard: Scoreboard, player_name: str) -> Player:
    """Create a player with a 0 entry for every existing day.

    Raises:
        ValidationError: Empty name
        DuplicatePlayerError: Name already used, ignoring case
    """
    if not isinstance(player_name, str) or not player_name.strip():
        raise ValidationError(
            "Invalid request. Player name is required.", "missing_player_name"
        )

    name = player_name.strip()
    folded = name.casefold()
    for existing in scoreboard.players:
        if existing.name.strip().casefold() == folded:
            raise DuplicatePlayerError(name, existing.name)

    player = Player(name=name, wins_by_day={day_key: 0 for day_key in scoreboard.day_keys})
    scoreboard.players.append(player)

    logger.info(f"Added player {name} with {len(scoreboard.day_keys)} seeded days")
    return player
