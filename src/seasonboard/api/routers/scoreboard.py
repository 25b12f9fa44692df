# src/seasonboard/api/routers/scoreboard.py
"""Scoreboard API endpoints."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session as DBSession

from ...config import SeasonboardConfig
from ...dates import normalize_day_key
from ...db import get_session
from ...db.store import load_scoreboard, mutate_scoreboard
from ...errors import NotFoundError, SeasonboardError, ValidationError
from ...layout import DateColumn, build_catalog, build_columns, month_ids
from ...totals import SortDirection, month_total, sort_players, summarize_players
from ...updates import add_player, apply_day_results, set_cell_value
from .. import app as api_app

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scoreboard", tags=["scoreboard"])


class AddWinsRequest(BaseModel):
    """Request body for adding a day's results."""
    date: str | None = None
    playerWins: Any = None


class UpdateCellRequest(BaseModel):
    """Request body for setting one cell."""
    playerName: str | None = None
    date: str | None = None
    wins: Any = None


class AddPlayerRequest(BaseModel):
    """Request body for creating a player."""
    playerName: str | None = None


def _config() -> SeasonboardConfig:
    return api_app.get_config()


def _http_error(e: SeasonboardError) -> HTTPException:
    status = 404 if isinstance(e, NotFoundError) else 400
    logger.info(f"Rejected scoreboard request ({status}): {e}")
    return HTTPException(
        status_code=status,
        detail={"error": str(e), "details": e.details},
    )


def _resolve_today(config: SeasonboardConfig, today: str | None) -> str:
    if today is None:
        return normalize_day_key(config.today().isoformat())
    return normalize_day_key(today)


@router.get("")
async def get_scoreboard(
    db: Annotated[DBSession, Depends(get_session)],
    config: Annotated[SeasonboardConfig, Depends(_config)],
) -> dict[str, Any]:
    """Get the stored scoreboard document."""
    try:
        scoreboard = load_scoreboard(
            db, config.league.league_key, config.league.season_key
        )
    except SeasonboardError as e:
        raise _http_error(e) from e

    return scoreboard.to_document()


@router.post("/add-wins")
async def add_wins(
    request: AddWinsRequest,
    db: Annotated[DBSession, Depends(get_session)],
    config: Annotated[SeasonboardConfig, Depends(_config)],
) -> dict[str, Any]:
    """Add one day's wins on top of the stored values.

    Posting the same day twice counts the wins twice.
    """
    if not request.date or not isinstance(request.playerWins, list):
        raise HTTPException(
            status_code=400,
            detail={
                "error": "Invalid request. Date and playerWins array are required.",
                "details": {
                    "constraint": "missing_date" if not request.date else "invalid_player_wins"
                },
            },
        )

    try:
        outcome = mutate_scoreboard(
            db,
            config.league.league_key,
            config.league.season_key,
            lambda sb: apply_day_results(sb, request.date, request.playerWins),
        )
    except SeasonboardError as e:
        raise _http_error(e) from e

    return {
        "success": True,
        "message": f"Added wins for players on {outcome.day_key} (total: {outcome.total_wins})",
        "dayKey": outcome.day_key,
        "totalWins": outcome.total_wins,
        "ignoredPlayers": outcome.ignored_names,
    }


@router.put("/update-cell")
async def update_cell(
    request: UpdateCellRequest,
    db: Annotated[DBSession, Depends(get_session)],
    config: Annotated[SeasonboardConfig, Depends(_config)],
) -> dict[str, Any]:
    """Replace one player's wins for one day."""
    if not request.playerName or not request.date:
        raise _http_error(
            ValidationError(
                "Invalid request. playerName, date, and wins (non-negative number) are required.",
                "missing_field",
            )
        )

    try:
        update = mutate_scoreboard(
            db,
            config.league.league_key,
            config.league.season_key,
            lambda sb: set_cell_value(sb, request.playerName, request.date, request.wins),
        )
    except SeasonboardError as e:
        raise _http_error(e) from e

    return {
        "success": True,
        "message": f"Updated {update.player_name}'s wins for {update.day_key} to {update.wins}",
        "dayKey": update.day_key,
        "previous": update.previous,
        "wins": update.wins,
    }


@router.post("/add-player")
async def create_player(
    request: AddPlayerRequest,
    db: Annotated[DBSession, Depends(get_session)],
    config: Annotated[SeasonboardConfig, Depends(_config)],
) -> dict[str, Any]:
    """Add a player with a 0 for every known day."""
    try:
        player = mutate_scoreboard(
            db,
            config.league.league_key,
            config.league.season_key,
            lambda sb: add_player(sb, request.playerName),
        )
    except SeasonboardError as e:
        raise _http_error(e) from e

    return {
        "success": True,
        "message": "Player added successfully",
        "player": player.to_document(),
    }


@router.get("/table")
async def get_table(
    db: Annotated[DBSession, Depends(get_session)],
    config: Annotated[SeasonboardConfig, Depends(_config)],
    sort: str | None = Query(default=None, description="Display month id to sort by"),
    direction: SortDirection = Query(default=SortDirection.DESC),
    today: str | None = Query(default=None, description="Override today (YYYY-MM-DD)"),
) -> dict[str, Any]:
    """Get the derived table: columns with month totals and sorted rows."""
    try:
        today_key = _resolve_today(config, today)
        scoreboard = load_scoreboard(
            db, config.league.league_key, config.league.season_key
        )
    except SeasonboardError as e:
        raise _http_error(e) from e

    mapper = config.get_mapper()
    catalog = build_catalog(scoreboard.day_keys, mapper)
    columns = build_columns(catalog, mapper)
    totals_for = month_ids(columns)
    players = sort_players(
        scoreboard.players, sort, direction, catalog, today_key, mapper
    )

    rows = []
    for p in players:
        rows.append({
            "name": p.name,
            "wins": {meta.day_key: p.wins_on(meta.day_key) for meta in catalog},
            "monthTotals": {
                mid: month_total(p, mid, catalog, today_key, mapper)
                for mid in dict.fromkeys(totals_for)
            },
        })

    return {
        "leagueKey": scoreboard.league_key,
        "seasonKey": scoreboard.season_key,
        "today": today_key,
        "sort": {"month": sort, "direction": direction.value if sort else None},
        "columns": [
            {"kind": c.kind, "dayKey": c.day_key, "label": c.label}
            if isinstance(c, DateColumn)
            else {"kind": c.kind, "monthId": c.display_month_id, "label": c.label}
            for c in columns
        ],
        "rows": rows,
    }


@router.get("/summary")
async def get_summary(
    db: Annotated[DBSession, Depends(get_session)],
    config: Annotated[SeasonboardConfig, Depends(_config)],
    today: str | None = Query(default=None, description="Override today (YYYY-MM-DD)"),
) -> dict[str, Any]:
    """Get per-player season total, best month and current month."""
    try:
        today_key = _resolve_today(config, today)
        scoreboard = load_scoreboard(
            db, config.league.league_key, config.league.season_key
        )
    except SeasonboardError as e:
        raise _http_error(e) from e

    mapper = config.get_mapper()
    catalog = build_catalog(scoreboard.day_keys, mapper)
    columns = build_columns(catalog, mapper)
    summaries = summarize_players(scoreboard.players, catalog, columns, today_key, mapper)

    return {
        "today": today_key,
        "items": [
            {
                "name": s.name,
                "rank": s.rank,
                "total": s.total,
                "bestMonthTotal": s.best_month_total,
                "currentMonthTotal": s.current_month_total,
            }
            for s in summaries
        ],
    }
