"""
Customization sets per clan and gender.

`CustomizeManager` builds every set concurrently at startup and serves
them read-only afterwards.
"""

from .models import CustomizeData, CustomizeSet, InvalidCustomizationError
from .factory import CustomizeSetFactory
from .manager import (
    CustomizeManager,
    RACES,
    CLANS,
    GENDERS,
    LIST_SIZE,
    all_sets,
    to_index,
    when_all,
)

__all__ = [
    "CustomizeManager",
    "CustomizeSetFactory",
    "CustomizeSet",
    "CustomizeData",
    "InvalidCustomizationError",
    "RACES",
    "CLANS",
    "GENDERS",
    "LIST_SIZE",
    "all_sets",
    "to_index",
    "when_all",
]
