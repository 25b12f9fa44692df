"""Command-line interface for seasonboard."""

import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .config import ConfigError, compute_today, get_default_config_path, load_config
from .config_templates import CONFIG_TEMPLATE
from .dates import normalize_day_key
from .db.session import create_session, init_db
from .db.store import create_scoreboard, load_scoreboard, mutate_scoreboard
from .errors import SeasonboardError, ValidationError
from .layout import DateColumn, build_catalog, build_columns
from .totals import SortDirection, month_total, sort_players, summarize_players
from .updates import add_player, apply_day_results, set_cell_value


def _config_path(args) -> Path:
    path = getattr(args, "config", None)
    return Path(path) if path else get_default_config_path()


def _load_config(args):
    config = load_config(_config_path(args))
    config.validate()
    init_db(config.db_path)
    return config


def _print_error(e: Exception, as_json: bool) -> None:
    if as_json:
        error_result = {
            "error": {
                "type": type(e).__name__,
                "message": str(e),
                "details": getattr(e, "details", {}),
            },
            "status": "error",
        }
        print(json.dumps(error_result, indent=2, ensure_ascii=False))
    else:
        print(f"Error: {e}", file=sys.stderr)
        details = getattr(e, "details", {})
        if "suggested_action" in details:
            print(f"Suggestion: {details['suggested_action']}", file=sys.stderr)


def _parse_wins_pairs(pairs: list[str]) -> list[dict]:
    """Turn ``NAME=WINS`` arguments into playerWins entries."""
    entries = []
    for pair in pairs:
        name, sep, wins = pair.rpartition("=")
        if not sep or not name:
            raise ValidationError(
                f"Expected NAME=WINS, got '{pair}'", "invalid_entry", value=pair
            )
        try:
            value = int(wins)
        except ValueError:
            raise ValidationError(
                f"Wins must be a non-negative number: '{pair}'",
                "non_numeric_wins",
                value=pair,
            ) from None
        entries.append({"playerName": name, "wins": value})
    return entries


def handle_config_command(args) -> int:
    """Handle the config subcommand (create template or validate)."""
    config_path = _config_path(args)

    if args.init:
        if config_path.exists():
            print(f"Config already exists: {config_path}", file=sys.stderr)
            return 1
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
        print(f"Created config template at {config_path}")
        return 0

    try:
        config = load_config(config_path)
        config.validate()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Config is valid: {config_path}")
    return 0


def handle_mutation_command(args) -> int:
    """Handle init, add-player, add-wins and set-cell."""
    try:
        config = _load_config(args)
        league_key = config.league.league_key
        season_key = config.league.season_key

        session = create_session()
        try:
            if args.command == "init":
                create_scoreboard(session, league_key, season_key, config.league.title)
                message = f"Created scoreboard {league_key}/{season_key}"
            elif args.command == "add-player":
                player = mutate_scoreboard(
                    session, league_key, season_key,
                    lambda sb: add_player(sb, args.name),
                )
                message = f"Added player {player.name}"
            elif args.command == "add-wins":
                entries = _parse_wins_pairs(args.wins)
                outcome = mutate_scoreboard(
                    session, league_key, season_key,
                    lambda sb: apply_day_results(sb, args.date, entries),
                )
                message = (
                    f"Added wins for players on {outcome.day_key} "
                    f"(total: {outcome.total_wins})"
                )
                if outcome.ignored_names:
                    message += f"; ignored unknown: {', '.join(outcome.ignored_names)}"
            else:
                update = mutate_scoreboard(
                    session, league_key, season_key,
                    lambda sb: set_cell_value(sb, args.name, args.date, args.wins),
                )
                message = (
                    f"Updated {update.player_name}'s wins for "
                    f"{update.day_key} to {update.wins}"
                )
        finally:
            session.close()

    except (SeasonboardError, ConfigError) as e:
        _print_error(e, args.json)
        return 1

    if args.json:
        print(json.dumps({"status": "ok", "message": message}, ensure_ascii=False))
    else:
        print(message)
    return 0


def _load_view(args):
    config = _load_config(args)
    session = create_session()
    try:
        scoreboard = load_scoreboard(
            session, config.league.league_key, config.league.season_key
        )
    finally:
        session.close()

    if args.today:
        today_key = normalize_day_key(args.today)
    else:
        today_key = compute_today(config.display.timezone).isoformat()

    mapper = config.get_mapper()
    catalog = build_catalog(scoreboard.day_keys, mapper)
    columns = build_columns(catalog, mapper)
    return scoreboard, catalog, columns, today_key, mapper


def handle_table_command(args) -> int:
    """Print the scoreboard with month-total columns."""
    try:
        scoreboard, catalog, columns, today_key, mapper = _load_view(args)
    except (SeasonboardError, ConfigError) as e:
        _print_error(e, args.json)
        return 1

    direction = SortDirection.ASC if args.asc else SortDirection.DESC
    players = sort_players(
        scoreboard.players, args.sort, direction, catalog, today_key, mapper
    )

    def cell(player, column):
        if isinstance(column, DateColumn):
            return player.wins_on(column.day_key)
        return month_total(player, column.display_month_id, catalog, today_key, mapper)

    if args.json:
        result = {
            "today": today_key,
            "columns": [c.label for c in columns],
            "rows": [
                {"name": p.name, "cells": [cell(p, c) for c in columns]}
                for p in players
            ],
        }
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return 0

    if not columns:
        print("No days recorded yet.")
    name_width = max([len("Player")] + [len(p.name) for p in players])
    header = ["Player".ljust(name_width)] + [c.label for c in columns]
    print(" | ".join(header))
    for p in players:
        values = [
            str(cell(p, c)).rjust(len(c.label)) for c in columns
        ]
        print(" | ".join([p.name.ljust(name_width)] + values))
    return 0


def handle_summary_command(args) -> int:
    """Print season total, best month and current month per player."""
    try:
        scoreboard, catalog, columns, today_key, mapper = _load_view(args)
    except (SeasonboardError, ConfigError) as e:
        _print_error(e, args.json)
        return 1

    summaries = summarize_players(scoreboard.players, catalog, columns, today_key, mapper)

    if args.json:
        print(json.dumps(
            {
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
            },
            indent=2,
            ensure_ascii=False,
        ))
        return 0

    for s in summaries:
        print(
            f"#{s.rank} {s.name}: total {s.total}, "
            f"best month {s.best_month_total}, current month {s.current_month_total}"
        )
    return 0


def handle_serve_command(args) -> int:
    """Run the HTTP API with uvicorn."""
    try:
        config = load_config(_config_path(args))
        config.validate()
    except ConfigError as e:
        print(f"Error: {e}")
        print("Run 'seasonboard config --init' to create a config file.")
        return 1

    import uvicorn

    from .api.app import configure, create_app

    configure(config)
    uvicorn.run(create_app(), host=args.host, port=args.port, log_level="info")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seasonboard",
        description="Season win tallies with solar Hijri month subtotals",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"seasonboard {__version__}",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config.toml (default: ~/.seasonboard/config.toml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    config_parser = subparsers.add_parser("config", help="Create or validate config")
    group = config_parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--init", action="store_true", help="Write a config template")
    group.add_argument("--validate", action="store_true", help="Validate the config")

    def with_json(p):
        p.add_argument(
            "--json",
            action="store_true",
            help="Output results in machine-readable JSON format",
        )
        return p

    with_json(subparsers.add_parser("init", help="Create the scoreboard record"))

    p_player = with_json(subparsers.add_parser("add-player", help="Add a player"))
    p_player.add_argument("name", type=str, help="Player name")

    p_wins = with_json(
        subparsers.add_parser("add-wins", help="Add one day's wins (additive)")
    )
    p_wins.add_argument("date", type=str, help="Day (YYYY-MM-DD or ISO timestamp)")
    p_wins.add_argument("wins", nargs="+", help="NAME=WINS pairs")

    p_cell = with_json(
        subparsers.add_parser("set-cell", help="Set one player's wins for one day")
    )
    p_cell.add_argument("name", type=str, help="Player name")
    p_cell.add_argument("date", type=str, help="Day (YYYY-MM-DD or ISO timestamp)")
    p_cell.add_argument("wins", type=int, help="New wins value")

    p_table = with_json(subparsers.add_parser("table", help="Show the scoreboard"))
    p_table.add_argument("--sort", type=str, default=None, help="Month id to sort by")
    p_table.add_argument("--asc", action="store_true", help="Sort ascending")
    p_table.add_argument("--today", type=str, default=None, help="Override today")

    p_summary = with_json(subparsers.add_parser("summary", help="Per-player summary"))
    p_summary.add_argument("--today", type=str, default=None, help="Override today")

    p_serve = subparsers.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", type=str, default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "config":
        return handle_config_command(args)
    elif args.command in ("init", "add-player", "add-wins", "set-cell"):
        return handle_mutation_command(args)
    elif args.command == "table":
        return handle_table_command(args)
    elif args.command == "summary":
        return handle_summary_command(args)
    elif args.command == "serve":
        return handle_serve_command(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
