"""seasonboard: season win tallies with solar Hijri month subtotals."""

from .layout import build_catalog, build_columns
from .totals import month_total, sort_players
from .updates import add_player, apply_day_results, set_cell_value
from .version import get_package_version

__version__ = get_package_version()
__author__ = "seasonboard contributors"
__description__ = "Season win tallies with solar Hijri month subtotals"

__all__ = [
    "build_catalog",
    "build_columns",
    "month_total",
    "sort_players",
    "apply_day_results",
    "set_cell_value",
    "add_player",
]
