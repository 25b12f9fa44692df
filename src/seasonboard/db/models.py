"""SQLAlchemy models for the seasonboard database.

A scoreboard is stored as one document-shaped row per league/season: the
day-key list and the player list live in JSON columns and are always
written back whole.

IMPORTANT: All datetime fields store UTC. Use datetime.now(timezone.utc).
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase


def _utc_now() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class ScoreboardRecord(Base):
    __tablename__ = "scoreboards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    league_key = Column(String, nullable=False)
    season_key = Column(String, nullable=False)
    title = Column(String)
    day_keys = Column(JSON, nullable=False, default=list)  # sorted ["YYYY-MM-DD"]
    players = Column(JSON, nullable=False, default=list)  # [{name, winsByDate}]
    created_at = Column(DateTime(timezone=True), default=_utc_now)
    updated_at = Column(DateTime(timezone=True), default=_utc_now, onupdate=_utc_now)

    __table_args__ = (
        UniqueConstraint("league_key", "season_key", name="uq_league_season"),
    )
