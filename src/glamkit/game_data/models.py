"""
Data models for exported game sheets.

Sheets are kept as plain lists of dicts, the way they come out of the
JSON export; only the aliases and the keys the customization factory
reads are defined here.
"""

from typing import Any, Dict, List, TypeAlias

SheetRow: TypeAlias = Dict[str, Any]
"""A single row of an exported game sheet."""

Sheet: TypeAlias = List[SheetRow]
"""All rows of one sheet, in file order."""


# Sheet names
CHARA_MAKE_TYPE_SHEET = "CharaMakeType"
CHARA_MAKE_CUSTOMIZE_SHEET = "CharaMakeCustomize"

# Directory layout of a game data export
SHEETS_DIR = "sheets"
ICONS_DIR = "ui/icon"
NPC_TABLE_FILE = "npc_customize.json"


class GameDataError(Exception):
    """Raised when a game data export cannot be used at all."""
    pass
