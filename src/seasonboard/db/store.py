"""Load and save scoreboard records.

Every mutation is one read, an in-memory change and one write of the whole
document. There is no version check: if two writers read the same record,
the later write wins and the earlier writer's change is lost.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.orm import Session

from ..errors import ScoreboardExistsError, ScoreboardNotFoundError
from ..models import Scoreboard
from ..schema import validate_scoreboard_document
from .models import ScoreboardRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _get_record(
    session: Session, league_key: str, season_key: str
) -> ScoreboardRecord | None:
    return (
        session.query(ScoreboardRecord)
        .filter_by(league_key=league_key, season_key=season_key)
        .first()
    )


def _record_to_document(record: ScoreboardRecord) -> dict:
    doc = {
        "leagueKey": record.league_key,
        "seasonKey": record.season_key,
        "dates": list(record.day_keys or []),
        "players": list(record.players or []),
    }
    if record.title is not None:
        doc["title"] = record.title
    return doc


def create_scoreboard(
    session: Session,
    league_key: str,
    season_key: str,
    title: str | None = None,
) -> Scoreboard:
    """Create an empty scoreboard record.

    Raises:
        ScoreboardExistsError: If the league/season already has a record
    """
    if _get_record(session, league_key, season_key) is not None:
        raise ScoreboardExistsError(league_key, season_key)

    scoreboard = Scoreboard(league_key=league_key, season_key=season_key, title=title)
    session.add(
        ScoreboardRecord(
            league_key=league_key,
            season_key=season_key,
            title=title,
            day_keys=[],
            players=[],
        )
    )
    session.commit()

    logger.info(f"Created scoreboard {league_key}/{season_key}")
    return scoreboard


def load_scoreboard(session: Session, league_key: str, season_key: str) -> Scoreboard:
    """Read one scoreboard record.

    Raises:
        ScoreboardNotFoundError: If there is no record
        jsonschema.ValidationError: If the stored document is malformed
    """
    record = _get_record(session, league_key, season_key)
    if record is None:
        raise ScoreboardNotFoundError(league_key, season_key)

    doc = _record_to_document(record)
    validate_scoreboard_document(doc)
    return Scoreboard.from_document(doc)


def save_scoreboard(session: Session, scoreboard: Scoreboard) -> None:
    """Overwrite the stored record with the in-memory scoreboard.

    Raises:
        ScoreboardNotFoundError: If the record was never created
        jsonschema.ValidationError: If the scoreboard would store a bad document
    """
    doc = scoreboard.to_document()
    validate_scoreboard_document(doc)

    record = _get_record(session, scoreboard.league_key, scoreboard.season_key)
    if record is None:
        raise ScoreboardNotFoundError(scoreboard.league_key, scoreboard.season_key)

    # JSON columns are replaced whole so the change is always flushed
    record.day_keys = doc["dates"]
    record.players = doc["players"]
    record.title = scoreboard.title
    session.commit()


def mutate_scoreboard(
    session: Session,
    league_key: str,
    season_key: str,
    mutate: Callable[[Scoreboard], T],
) -> T:
    """Load, change and save a scoreboard in one step.

    Args:
        session: Open database session
        league_key: League of the record
        season_key: Season of the record
        mutate: Called with the loaded scoreboard; changes it in place

    Returns:
        Whatever ``mutate`` returns
    """
    try:
        scoreboard = load_scoreboard(session, league_key, season_key)
        result = mutate(scoreboard)
        save_scoreboard(session, scoreboard)
        return result
    except Exception:
        session.rollback()
        raise
