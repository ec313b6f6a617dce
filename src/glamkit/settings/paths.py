"""
Path-related settings for glamkit.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

from ..game_data.models import ICONS_DIR, NPC_TABLE_FILE, SHEETS_DIR

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings


class PathSettings:
    """Manages path-related settings."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    @property
    def game_data_path(self) -> Optional[Path]:
        """Get game data export directory path."""
        path_str = self._get_str("paths/game_data", "")
        return Path(path_str) if path_str else None

    @game_data_path.setter
    def game_data_path(self, value: Optional[Path]) -> None:
        """Set game data export directory path."""
        self.settings.setValue("paths/game_data", str(value) if value else "")
        self.settings.sync()

    @property
    def sheets_path(self) -> Optional[Path]:
        """Get sheets directory path (derived from game_data_path)."""
        if self.game_data_path:
            return self.game_data_path / SHEETS_DIR
        return None

    @property
    def icons_path(self) -> Optional[Path]:
        """Get icon directory path (derived from game_data_path)."""
        if self.game_data_path:
            return self.game_data_path / ICONS_DIR
        return None

    @property
    def npc_table_path(self) -> Optional[Path]:
        """Get NPC customization table path (derived from game_data_path)."""
        if self.game_data_path:
            return self.game_data_path / NPC_TABLE_FILE
        return None
