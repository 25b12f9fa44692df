"""JSON Schema validation for stored scoreboard documents."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import Draft7Validator

from .dates import is_day_key

SCHEMA_PATH = Path(__file__).parent / "schemas" / "scoreboard.schema.json"


def _load_schema() -> dict[str, Any]:
    """Load the scoreboard JSON schema from file.

    Raises:
        FileNotFoundError: If schema file is missing.
        json.JSONDecodeError: If schema file is invalid JSON.
    """
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    with open(SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


@lru_cache(maxsize=1)
def _create_validator() -> Draft7Validator:
    return Draft7Validator(_load_schema())


def _format_validation_error(error: jsonschema.ValidationError) -> str:
    """Format a validation error into a message with the failing path."""
    path_str = ""
    if error.absolute_path:
        path_parts = []
        for part in error.absolute_path:
            if isinstance(part, int):
                path_parts.append(f"[{part}]")
            elif path_parts:
                path_parts.append(f".{part}")
            else:
                path_parts.append(str(part))
        path_str = f" at path '{''.join(path_parts)}'"

    if error.validator == "required":
        missing_props = error.message.split("'")[1::2]
        return f"Missing required field(s): {', '.join(missing_props)}{path_str}"

    elif error.validator == "type":
        expected_type = error.validator_value
        actual_type = type(error.instance).__name__
        return (f"Invalid type{path_str}. Expected {expected_type}, "
                f"got {actual_type}: {error.instance}")

    elif error.validator == "pattern":
        return (f"Value does not match required pattern{path_str}. "
                f"Pattern: {error.validator_value}, Got: {error.instance}")

    elif error.validator == "minimum":
        return f"Value{path_str} must be >= {error.validator_value}. Got: {error.instance}"

    else:
        return f"{error.message}{path_str}"


def validate_scoreboard_document(obj: dict[str, Any]) -> None:
    """Validate a scoreboard document before it is stored or after it is read.

    Besides the JSON schema, every entry of ``dates`` must name a real
    calendar day and every day-key a player has wins for must be listed in
    ``dates``.

    Raises:
        jsonschema.ValidationError: With a message naming the failing path.
        TypeError: If obj is not a dictionary.
    """
    if not isinstance(obj, dict):
        raise TypeError(f"Scoreboard must be a dictionary, got {type(obj).__name__}")

    try:
        _create_validator().validate(obj)
    except jsonschema.ValidationError as e:
        raise jsonschema.ValidationError(_format_validation_error(e)) from e

    for idx, day_key in enumerate(obj["dates"]):
        if not is_day_key(day_key):
            raise jsonschema.ValidationError(
                f"Value at path 'dates[{idx}]' is not a calendar day: {day_key}"
            )

    dates = set(obj["dates"])
    for idx, player in enumerate(obj["players"]):
        missing = sorted(set(player["winsByDate"]) - dates)
        if missing:
            raise jsonschema.ValidationError(
                f"Player '{player['name']}' has wins on unlisted dates "
                f"at path 'players[{idx}].winsByDate': {', '.join(missing)}"
            )
