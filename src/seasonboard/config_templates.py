# src/seasonboard/config_templates.py
"""Configuration file templates."""

CONFIG_TEMPLATE = """# seasonboard configuration

[league]
# The scoreboard record this install reads and writes
league_key = "quantum-league"
season_key = "2025-fall"
# title = "Quantum League"

[paths]
# Where to store the SQLite database
data_dir = "~/.seasonboard/data"

[display]
# Month names: "fa" (Persian) or "en" (transliterated short names)
locale = "fa"
# IANA timezone that decides what "today" is (system timezone if unset)
timezone = "Asia/Tehran"
"""
