"""
Core settings management for glamkit.

`AppSettings` owns one `QSettings` store and hands out typed views of it.
Logging options are read through `settings.logging`; the path and builder
options used by the command line are also exposed directly.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QSettings

from .types import ConfigVersion, ValidationResult
from .validation import SettingsValidator
from .paths import PathSettings
from .logging import LoggingSettings
from .builder import BuilderSettings

logger = logging.getLogger(__name__)


class AppSettings:
    """
    Configuration management using QSettings.

    Settings live in the platform store (registry, plist or INI under the
    user's config directory) unless an explicit INI file is given, which
    is what tests and portable installs use. Each profile is a top-level
    group of that store.
    """

    def __init__(
        self,
        profile: str = "default",
        settings_file: Optional[Union[str, Path]] = None,
    ):
        """Open the store for a profile.

        Args:
            profile: Settings profile name (default: "default")
            settings_file: Explicit INI file to use instead of the platform store
        """
        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings("glamkit", "glamkit")
        self.profile = profile
        self.settings.beginGroup(profile)

        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._logging = LoggingSettings(self.settings)
        self._builder = BuilderSettings(self.settings)

        if not self.settings.contains("app/version"):
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.sync()

        logger.debug(f"Profile '{profile}' opened from {self.settings.fileName()}")

    # === SUBSYSTEMS ===

    @property
    def paths(self) -> PathSettings:
        return self._paths

    @property
    def logging(self) -> LoggingSettings:
        return self._logging

    @property
    def builder(self) -> BuilderSettings:
        return self._builder

    @property
    def version(self) -> str:
        """Configuration version stamped when the profile was created."""
        value = self.settings.value("app/version", ConfigVersion.CURRENT.value)
        return str(value) if value is not None else ConfigVersion.CURRENT.value

    # === SHORTCUTS ===

    @property
    def game_data_path(self) -> Optional[Path]:
        """Game data export directory."""
        return self._paths.game_data_path

    @game_data_path.setter
    def game_data_path(self, value: Optional[Path]) -> None:
        self._paths.game_data_path = value

    @property
    def sheets_path(self) -> Optional[Path]:
        return self._paths.sheets_path

    @property
    def icons_path(self) -> Optional[Path]:
        return self._paths.icons_path

    @property
    def npc_table_path(self) -> Optional[Path]:
        return self._paths.npc_table_path

    @property
    def max_workers(self) -> int:
        """Worker threads used to build customization sets."""
        return self._builder.max_workers

    @max_workers.setter
    def max_workers(self, value: int) -> None:
        self._builder.max_workers = value

    @property
    def build_timeout(self) -> int:
        """Seconds to wait for customization sets, 0 waits forever."""
        return self._builder.build_timeout

    @build_timeout.setter
    def build_timeout(self, value: int) -> None:
        self._builder.build_timeout = value

    # === UTILITY ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
