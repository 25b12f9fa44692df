"""Month totals, row ordering and per-player summaries.

``today`` is always passed in. The display month containing ``today`` is
the in-progress month: its total only counts days up to and including
today, so rankings are not skewed by days that have not happened yet.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from .dates import DEFAULT_MAPPER, CalendarMapper, coerce_day_key
from .layout import Column, DateMeta, month_ids
from .models import Player


class SortDirection(str, Enum):
    DESC = "desc"
    ASC = "asc"


def month_total(
    player: Player,
    display_month_id: str,
    catalog: list[DateMeta],
    today: date | str,
    mapper: CalendarMapper | None = None,
) -> int:
    """Sum a player's wins over one display month.

    Args:
        player: Player whose ``wins_by_day`` is summed (missing days are 0)
        display_month_id: Month to total
        catalog: Date catalog from ``build_catalog``
        today: Current local date or its day-key
        mapper: Display calendar used to find today's month

    Returns:
        Total wins; days after ``today`` are skipped when the month is the
        one containing ``today``
    """
    mapper = mapper or DEFAULT_MAPPER
    today_key = coerce_day_key(today)
    is_current_month = display_month_id == mapper.display_month_id(today_key)

    total = 0
    for meta in catalog:
        if meta.display_month_id != display_month_id:
            continue
        if is_current_month and meta.day_key > today_key:
            continue
        total += player.wins_on(meta.day_key)
    return total


def season_total(player: Player, catalog: list[DateMeta]) -> int:
    """Sum a player's wins over every catalog day."""
    return sum(player.wins_on(meta.day_key) for meta in catalog)


def current_month_total(
    player: Player,
    catalog: list[DateMeta],
    today: date | str,
    mapper: CalendarMapper | None = None,
) -> int:
    mapper = mapper or DEFAULT_MAPPER
    today_key = coerce_day_key(today)
    return month_total(
        player, mapper.display_month_id(today_key), catalog, today_key, mapper
    )


def best_month_total(
    player: Player,
    columns: Iterable[Column],
    catalog: list[DateMeta],
    today: date | str,
    mapper: CalendarMapper | None = None,
) -> int:
    """Highest month total over the layout's month-total columns (0 if none)."""
    return max(
        (month_total(player, mid, catalog, today, mapper) for mid in month_ids(columns)),
        default=0,
    )


def sort_players(
    players: list[Player],
    display_month_id: str | None,
    direction: SortDirection | str,
    catalog: list[DateMeta],
    today: date | str,
    mapper: CalendarMapper | None = None,
) -> list[Player]:
    """Order players by one month's total.

    With no month selected the existing order is returned as a new list.
    Players with equal totals keep their original relative order in both
    directions.
    """
    if display_month_id is None:
        return list(players)

    direction = SortDirection(direction)
    sign = -1 if direction is SortDirection.DESC else 1
    return sorted(
        players,
        key=lambda p: sign * month_total(p, display_month_id, catalog, today, mapper),
    )


@dataclass(frozen=True)
class SortState:
    """Which month the rows are ordered by, and in which direction."""

    month_id: str | None = None
    direction: SortDirection = SortDirection.DESC

    def toggle(self, month_id: str) -> SortState:
        """Select a month: same month flips direction, a new one starts DESC."""
        if month_id == self.month_id:
            flipped = (
                SortDirection.ASC
                if self.direction is SortDirection.DESC
                else SortDirection.DESC
            )
            return SortState(month_id=month_id, direction=flipped)
        return SortState(month_id=month_id, direction=SortDirection.DESC)


@dataclass(frozen=True)
class PlayerSummary:
    name: str
    rank: int
    total: int
    best_month_total: int
    current_month_total: int


def summarize_players(
    players: list[Player],
    catalog: list[DateMeta],
    columns: list[Column],
    today: date | str,
    mapper: CalendarMapper | None = None,
) -> list[PlayerSummary]:
    """Season total, best month and current month per player.

    Ordered by season total, highest first; ties keep roster order.
    """
    rows = [
        (
            p,
            season_total(p, catalog),
            best_month_total(p, columns, catalog, today, mapper),
            current_month_total(p, catalog, today, mapper),
        )
        for p in players
    ]
    rows.sort(key=lambda row: -row[1])

    return [
        PlayerSummary(
            name=p.name,
            rank=idx + 1,
            total=total,
            best_month_total=best,
            current_month_total=current,
        )
        for idx, (p, total, best, current) in enumerate(rows)
    ]
