"""
Module for working with exported game data.

Provides the fixed game enumerations, sheet access, icon loading and the
NPC customization table consumed by the customization factory.
"""

from .enums import (
    Race,
    SubRace,
    Gender,
    EquipSlot,
    CustomizeIndex,
    BODY_SLOTS,
    equip_slot_from_index,
)
from .models import (
    Sheet,
    SheetRow,
    GameDataError,
    CHARA_MAKE_TYPE_SHEET,
    CHARA_MAKE_CUSTOMIZE_SHEET,
)
from .sources import GameDataSource
from .icons import IconStorage
from .npcs import NpcData, NpcCustomizeSet

# Public exports
__all__ = [
    # Enumerations
    "Race",
    "SubRace",
    "Gender",
    "EquipSlot",
    "CustomizeIndex",
    "BODY_SLOTS",
    "equip_slot_from_index",
    # Type aliases and constants
    "Sheet",
    "SheetRow",
    "GameDataError",
    "CHARA_MAKE_TYPE_SHEET",
    "CHARA_MAKE_CUSTOMIZE_SHEET",
    # Providers
    "GameDataSource",
    "IconStorage",
    "NpcData",
    "NpcCustomizeSet",
]
