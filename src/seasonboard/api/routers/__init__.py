# src/seasonboard/api/routers/__init__.py
"""API routers for seasonboard."""

from .scoreboard import router as scoreboard_router

__all__ = ["scoreboard_router"]
