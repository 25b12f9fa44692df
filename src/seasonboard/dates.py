"""Day-key grammar and Gregorian to display-calendar month mapping.

Day-keys are ``YYYY-MM-DD`` strings for one Gregorian day. They are fixed
width, so string comparison is chronological comparison. Everything outside
this module only sees the ``display_month_id`` / label contract of
:class:`CalendarMapper`, never a calendar library.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from datetime import date

import jdatetime

from .errors import ValidationError

DAY_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

VALID_LOCALES = {"fa", "en"}


def is_day_key(value: object) -> bool:
    """Return True if value is a ``YYYY-MM-DD`` string naming a real day."""
    if not isinstance(value, str) or not DAY_KEY_PATTERN.match(value):
        return False
    try:
        # Days before the solar Hijri epoch have no display month
        jdatetime.date.fromgregorian(date=parse_day_key(value))
    except (ValueError, OverflowError):
        return False
    return True


def normalize_day_key(value: object) -> str:
    """Normalize an incoming date string to a day-key.

    Timestamps (anything containing ``T``) are cut to their first 10
    characters; other strings are used as-is.

    Raises:
        ValidationError: If the value is missing or the result is not a
            ``YYYY-MM-DD`` string for a real calendar day.
    """
    if value is None or value == "":
        raise ValidationError("Date is required", "missing_date")
    if not isinstance(value, str):
        raise ValidationError(
            "Invalid date format. Expected YYYY-MM-DD",
            "invalid_date",
            value=repr(value),
        )

    day_key = value[:10] if "T" in value else value
    if not DAY_KEY_PATTERN.match(day_key):
        raise ValidationError(
            "Invalid date format. Expected YYYY-MM-DD",
            "invalid_date",
            value=value,
        )
    if not is_day_key(day_key):
        raise ValidationError(
            f"Invalid date: {day_key} is not a calendar day",
            "invalid_date",
            value=value,
        )
    return day_key


def parse_day_key(day_key: str) -> date:
    """Build the local calendar date named by a day-key.

    Components are read straight from the string. No timestamp parsing and
    no timezone shift is involved, so the date can never drift across a
    month boundary.
    """
    year_str, month_str, day_str = day_key.split("-")
    return date(int(year_str), int(month_str), int(day_str))


def day_key_for(value: date) -> str:
    """Format a local date as a day-key."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def coerce_day_key(value: date | str) -> str:
    """Accept either a ``date`` or a day-key string."""
    if isinstance(value, date):
        return day_key_for(value)
    return value


class CalendarMapper(ABC):
    """Maps day-keys onto a display calendar's months."""

    @abstractmethod
    def display_month_id(self, day_key: str) -> str:
        """Return the opaque month identifier for a day-key."""

    @abstractmethod
    def month_short_label(self, day_key: str) -> str:
        """Return the short month name of the month containing day-key."""

    @abstractmethod
    def day_label(self, day_key: str) -> str:
        """Return a short ``<day> <month>`` label for one day."""

    def month_total_label(self, day_key: str) -> str:
        return f"{self.month_short_label(day_key)} total"


class PersianCalendarMapper(CalendarMapper):
    """Solar Hijri (Persian) display calendar backed by ``jdatetime``.

    Month ids are the two-digit solar month number (``"01"``..``"12"``).
    They carry no year, so the same month of two different years shares an
    id.
    """

    def __init__(self, locale: str = "fa"):
        if locale not in VALID_LOCALES:
            raise ValueError(
                f"Unsupported locale '{locale}'. "
                f"Must be one of: {', '.join(sorted(VALID_LOCALES))}"
            )
        self.locale = locale

    def _jalali(self, day_key: str) -> jdatetime.date:
        return jdatetime.date.fromgregorian(date=parse_day_key(day_key))

    def _month_name(self, month: int) -> str:
        if self.locale == "fa":
            return jdatetime.date.j_months_fa[month - 1]
        return jdatetime.date.j_months_short_en[month - 1]

    def display_month_id(self, day_key: str) -> str:
        return f"{self._jalali(day_key).month:02d}"

    def month_short_label(self, day_key: str) -> str:
        return self._month_name(self._jalali(day_key).month)

    def day_label(self, day_key: str) -> str:
        jalali = self._jalali(day_key)
        return f"{jalali.day:02d} {self._month_name(jalali.month)}"


DEFAULT_MAPPER: CalendarMapper = PersianCalendarMapper()


def map_to_display_month(day_key: str, mapper: CalendarMapper | None = None) -> str:
    """Return the display month id for a day-key."""
    return (mapper or DEFAULT_MAPPER).display_month_id(day_key)


def month_short_label(day_key: str, mapper: CalendarMapper | None = None) -> str:
    """Return the display month short label for a day-key."""
    return (mapper or DEFAULT_MAPPER).month_short_label(day_key)
