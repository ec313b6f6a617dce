"""
Logging-related settings for glamkit.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE_PATH = "logs/glamkit.csv"

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings:
    """Console and file logging options.

    Levels are stored upper case; anything outside `VALID_LEVELS` is
    rejected and the stored value is kept.
    """

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        # INI files hand booleans back as strings.
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    def _set(self, key: str, value: object) -> None:
        self.settings.setValue(key, value)
        self.settings.sync()

    def _set_level(self, key: str, value: str, label: str) -> None:
        level = value.upper()
        if level in VALID_LEVELS:
            self._set(key, level)
        else:
            logger.warning(
                f"Invalid {label} log level: {value}, keeping current: "
                f"{self._get_str(key, 'INFO')}"
            )

    # === CONSOLE ===

    @property
    def console_logging(self) -> bool:
        return self._get_bool("logging/console_enabled", True)

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._set("logging/console_enabled", value)

    @property
    def console_log_level(self) -> str:
        return self._get_str("logging/console_level", "INFO")

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        self._set_level("logging/console_level", value, "console")

    @property
    def console_use_colors(self) -> bool:
        """ANSI colors on the level name."""
        return self._get_bool("logging/console_use_colors", True)

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self._set("logging/console_use_colors", value)

    # === FILE ===

    @property
    def file_logging(self) -> bool:
        return self._get_bool("logging/file_enabled", False)

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._set("logging/file_enabled", value)

    @property
    def file_log_level(self) -> str:
        """Level of the CSV log; DEBUG by default so build traces are kept."""
        return self._get_str("logging/file_level", "DEBUG")

    @file_log_level.setter
    def file_log_level(self, value: str) -> None:
        self._set_level("logging/file_level", value, "file")

    @property
    def log_file_path(self) -> str:
        """CSV log location, relative paths are taken from the working directory."""
        return self._get_str("logging/file_path", DEFAULT_LOG_FILE_PATH) or DEFAULT_LOG_FILE_PATH

    @log_file_path.setter
    def log_file_path(self, value: str) -> None:
        self._set("logging/file_path", str(value))
