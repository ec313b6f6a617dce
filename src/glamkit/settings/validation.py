"""
Settings validation system for glamkit.
"""

import logging
from typing import List, TYPE_CHECKING

from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        # Validate game data export
        game_data_path = self.settings.game_data_path
        if game_data_path:
            if not game_data_path.exists():
                errors.append(f"Game data path does not exist: {game_data_path}")
            else:
                sheets_path = self.settings.sheets_path
                if sheets_path is None or not sheets_path.is_dir():
                    errors.append(
                        f"Game data path has no 'sheets' directory: {game_data_path}"
                    )
                npc_table_path = self.settings.npc_table_path
                if npc_table_path is None or not npc_table_path.is_file():
                    warnings.append(f"NPC customization table not found: {npc_table_path}")
                icons_path = self.settings.icons_path
                if icons_path is None or not icons_path.is_dir():
                    warnings.append(f"Icon directory not found: {icons_path}")
        else:
            warnings.append("Game data path not set")

        if self.settings.max_workers <= 0:
            errors.append(f"Invalid builder worker count: {self.settings.max_workers}")

        logger.debug(f"Settings validated: {len(errors)} errors, {len(warnings)} warnings")
        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
