"""Database module for seasonboard."""

from .models import Base, ScoreboardRecord
from .session import create_session, get_session, init_db, reset_engine
from .store import create_scoreboard, load_scoreboard, mutate_scoreboard, save_scoreboard

__all__ = [
    "Base",
    "ScoreboardRecord",
    "init_db",
    "get_session",
    "create_session",
    "reset_engine",
    "create_scoreboard",
    "load_scoreboard",
    "save_scoreboard",
    "mutate_scoreboard",
]
