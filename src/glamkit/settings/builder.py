"""
Customization builder settings for glamkit.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


class BuilderSettings:
    """Manages settings of the customization set builder."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_int(self, key: str, default: int) -> int:
        """Type-safe integer retrieval from settings."""
        value = self.settings.value(key, default)
        try:
            return int(str(value)) if value is not None else default
        except (ValueError, TypeError):
            return default

    @property
    def max_workers(self) -> int:
        """Get number of worker threads used to build customization sets."""
        return self._get_int("builder/max_workers", DEFAULT_MAX_WORKERS)

    @max_workers.setter
    def max_workers(self, value: int) -> None:
        """Set number of worker threads."""
        if value > 0:
            self.settings.setValue("builder/max_workers", value)
            self.settings.sync()
        else:
            logger.warning(
                f"Invalid max workers: {value}, keeping current: {self.max_workers}"
            )

    @property
    def build_timeout(self) -> int:
        """Get seconds to wait for sets before giving up (0 = wait forever)."""
        return self._get_int("builder/build_timeout", 0)

    @build_timeout.setter
    def build_timeout(self, value: int) -> None:
        """Set build wait timeout in seconds."""
        if value >= 0:
            self.settings.setValue("builder/build_timeout", value)
            self.settings.sync()
        else:
            logger.warning(
                f"Invalid build timeout: {value}, keeping current: {self.build_timeout}"
            )
