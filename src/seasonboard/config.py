# src/seasonboard/config.py
"""Configuration management for seasonboard."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import tomllib

from .dates import VALID_LOCALES, PersianCalendarMapper


class ConfigError(Exception):
    """Configuration error."""

    pass


@dataclass
class LeagueConfig:
    league_key: str = "quantum-league"
    season_key: str = "2025-fall"
    title: str | None = None


@dataclass
class PathsConfig:
    data_dir: Path


@dataclass
class DisplayConfig:
    locale: str = "fa"
    timezone: str | None = None


@dataclass
class SeasonboardConfig:
    league: LeagueConfig
    paths: PathsConfig
    display: DisplayConfig

    @property
    def db_path(self) -> Path:
        return self.paths.data_dir / "seasonboard.db"

    def validate(self) -> None:
        """Validate configuration, raising ConfigError if invalid."""
        if not self.league.league_key.strip() or not self.league.season_key.strip():
            raise ConfigError(
                "Configuration requires a non-empty league_key and season_key "
                "in [league]"
            )

        if self.display.locale not in VALID_LOCALES:
            raise ConfigError(
                f"Invalid locale '{self.display.locale}'. "
                f"Must be one of: {', '.join(sorted(VALID_LOCALES))}"
            )

        # Validate timezone (IANA format)
        if self.display.timezone is not None:
            try:
                ZoneInfo(self.display.timezone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ConfigError(
                    f"Invalid timezone '{self.display.timezone}'. "
                    "Must be a valid IANA timezone (e.g., 'Asia/Tehran')"
                ) from e

    def get_mapper(self) -> PersianCalendarMapper:
        return PersianCalendarMapper(locale=self.display.locale)

    def today(self, now: datetime | None = None) -> date:
        return compute_today(self.display.timezone, now)


def compute_today(timezone_name: str | None, now: datetime | None = None) -> date:
    """Compute the local calendar date in the configured timezone.

    Args:
        timezone_name: IANA timezone name, or None for system timezone
        now: Aware timestamp to convert (defaults to the current time)

    Returns:
        Local date in the configured timezone
    """
    if timezone_name:
        tz = ZoneInfo(timezone_name)
    else:
        # Use system timezone
        tz = datetime.now().astimezone().tzinfo

    if now is None:
        return datetime.now(tz).date()
    return now.astimezone(tz).date()


def load_config(config_path: Path) -> SeasonboardConfig:
    """Load configuration from TOML file."""
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    league_data = data.get("league", {})
    league = LeagueConfig(
        league_key=league_data.get("league_key", "quantum-league"),
        season_key=league_data.get("season_key", "2025-fall"),
        title=league_data.get("title"),
    )

    paths_data = data.get("paths", {})
    paths = PathsConfig(
        data_dir=Path(paths_data.get("data_dir", "~/.seasonboard/data")).expanduser(),
    )

    display_data = data.get("display", {})
    display = DisplayConfig(
        locale=display_data.get("locale", "fa"),
        timezone=display_data.get("timezone"),
    )

    return SeasonboardConfig(league=league, paths=paths, display=display)


def get_default_config_path() -> Path:
    """Get the default config file path."""
    return Path.home() / ".seasonboard" / "config.toml"
