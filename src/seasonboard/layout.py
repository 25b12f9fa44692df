"""Date catalog and column layout.

The catalog is the sorted list of known days with their display month
attached. Columns are the catalog's days with a synthetic month-total
column after the last day of every run of same-month days.

Example (solar Hijri months, ``en`` labels)::

    22 Meh, 23 Meh, Meh total, 11 Aba, Aba total
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Literal, Union

from .dates import DEFAULT_MAPPER, CalendarMapper, parse_day_key


@dataclass(frozen=True)
class DateMeta:
    day_key: str
    gregorian_date: date
    display_month_id: str


@dataclass(frozen=True)
class DateColumn:
    day_key: str
    gregorian_date: date
    label: str
    kind: Literal["date"] = "date"


@dataclass(frozen=True)
class MonthTotalColumn:
    display_month_id: str
    label: str
    kind: Literal["month-total"] = "month-total"


Column = Union[DateColumn, MonthTotalColumn]


def build_catalog(
    day_keys: Iterable[str],
    mapper: CalendarMapper | None = None,
) -> list[DateMeta]:
    """Deduplicate, sort and annotate day-keys with their display month.

    Args:
        day_keys: Known day-keys, any order, duplicates allowed
        mapper: Display calendar (Persian by default)

    Returns:
        Catalog entries in ascending day order; empty for no input
    """
    mapper = mapper or DEFAULT_MAPPER
    return [
        DateMeta(
            day_key=day_key,
            gregorian_date=parse_day_key(day_key),
            display_month_id=mapper.display_month_id(day_key),
        )
        for day_key in sorted(set(day_keys))
    ]


def build_columns(
    catalog: list[DateMeta],
    mapper: CalendarMapper | None = None,
) -> list[Column]:
    """Lay out one column per day plus a month-total column per month run.

    A month-total column is emitted right after an entry when the next entry
    belongs to a different display month, or when there is no next entry.
    Detection only looks at the neighbour, so a month id that shows up again
    later (same month number, another year) gets its own total column.
    """
    mapper = mapper or DEFAULT_MAPPER
    columns: list[Column] = []

    for index, meta in enumerate(catalog):
        columns.append(
            DateColumn(
                day_key=meta.day_key,
                gregorian_date=meta.gregorian_date,
                label=mapper.day_label(meta.day_key),
            )
        )

        next_meta = catalog[index + 1] if index + 1 < len(catalog) else None
        if next_meta is None or next_meta.display_month_id != meta.display_month_id:
            columns.append(
                MonthTotalColumn(
                    display_month_id=meta.display_month_id,
                    label=mapper.month_total_label(meta.day_key),
                )
            )

    return columns


def month_ids(columns: Iterable[Column]) -> list[str]:
    """Display month ids of the month-total columns, in column order."""
    return [c.display_month_id for c in columns if isinstance(c, MonthTotalColumn)]
