"""Custom exceptions for seasonboard with structured error information."""


class SeasonboardError(Exception):
    """Base exception for all seasonboard errors.

    Provides structured error information with actionable messages.
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}


class ValidationError(SeasonboardError):
    """Raised when a request fails an input constraint.

    The ``constraint`` detail names which rule was broken so callers can
    report it back without parsing the message.
    """

    def __init__(self, message: str, constraint: str, **extra):
        details = {"constraint": constraint, **extra}
        super().__init__(message, details)

    @property
    def constraint(self) -> str:
        return self.details["constraint"]


class DuplicatePlayerError(ValidationError):
    """Raised when a player name already exists (case-insensitive)."""

    def __init__(self, player_name: str, existing_name: str):
        message = f"Player with this name already exists: {player_name}"
        super().__init__(
            message,
            "duplicate_player",
            player_name=player_name,
            existing_name=existing_name,
            suggested_action="Choose a different player name",
        )


class NotFoundError(SeasonboardError):
    """Raised when a referenced scoreboard or player does not exist."""


class ScoreboardNotFoundError(NotFoundError):
    """Raised when no scoreboard record exists for a league/season."""

    def __init__(self, league_key: str, season_key: str):
        message = "Scoreboard not found"
        details = {
            "league_key": league_key,
            "season_key": season_key,
            "suggested_action": "Create the scoreboard first (seasonboard init)",
        }
        super().__init__(message, details)


class PlayerNotFoundError(NotFoundError):
    """Raised when a player name is not on the scoreboard."""

    def __init__(self, player_name: str):
        message = "Player not found"
        details = {
            "player_name": player_name,
            "suggested_action": "Add the player before editing their cells",
        }
        super().__init__(message, details)


class ScoreboardExistsError(SeasonboardError):
    """Raised when creating a scoreboard that is already stored."""

    def __init__(self, league_key: str, season_key: str):
        message = f"Scoreboard already exists: {league_key}/{season_key}"
        details = {"league_key": league_key, "season_key": season_key}
        super().__init__(message, details)
