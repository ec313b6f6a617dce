"""
Fixed game enumerations used by glamkit.

Races, clans (sub-races), genders, equipment slots and customization
indices. Values mirror the game's own numbering so they can be read
directly from sheet data and packed keys.
"""

from enum import IntEnum


class Race(IntEnum):
    """Playable races."""

    UNKNOWN = 0
    HYUR = 1
    ELEZEN = 2
    LALAFELL = 3
    MIQOTE = 4
    ROEGADYN = 5
    AURA = 6
    HROTHGAR = 7
    VIERA = 8


class SubRace(IntEnum):
    """Clans. Every race has exactly two, numbered consecutively."""

    UNKNOWN = 0
    MIDLANDER = 1
    HIGHLANDER = 2
    WILDWOOD = 3
    DUSKWIGHT = 4
    PLAINSFOLK = 5
    DUNESFOLK = 6
    SEEKER_OF_THE_SUN = 7
    KEEPER_OF_THE_MOON = 8
    SEAWOLF = 9
    HELLSGUARD = 10
    RAEN = 11
    XAELA = 12
    HELION = 13
    THE_LOST = 14
    RAVA = 15
    VEENA = 16

    @property
    def race(self) -> Race:
        """Race this clan belongs to."""
        if self is SubRace.UNKNOWN:
            return Race.UNKNOWN
        return Race((self.value + 1) // 2)

    def to_name(self) -> str:
        """Human readable clan name."""
        return _SUBRACE_NAMES[self]


_SUBRACE_NAMES = {
    SubRace.UNKNOWN: "Unknown",
    SubRace.MIDLANDER: "Midlander",
    SubRace.HIGHLANDER: "Highlander",
    SubRace.WILDWOOD: "Wildwood",
    SubRace.DUSKWIGHT: "Duskwight",
    SubRace.PLAINSFOLK: "Plainsfolk",
    SubRace.DUNESFOLK: "Dunesfolk",
    SubRace.SEEKER_OF_THE_SUN: "Seeker of the Sun",
    SubRace.KEEPER_OF_THE_MOON: "Keeper of the Moon",
    SubRace.SEAWOLF: "Sea Wolf",
    SubRace.HELLSGUARD: "Hellsguard",
    SubRace.RAEN: "Raen",
    SubRace.XAELA: "Xaela",
    SubRace.HELION: "Helion",
    SubRace.THE_LOST: "The Lost",
    SubRace.RAVA: "Rava",
    SubRace.VEENA: "Veena",
}


class Gender(IntEnum):
    """Genders as stored in customization data."""

    UNKNOWN = 0
    MALE = 1
    FEMALE = 2
    MALE_NPC = 3
    FEMALE_NPC = 4

    def to_name(self) -> str:
        return self.name.replace("_", " ").title().replace("Npc", "NPC")


class EquipSlot(IntEnum):
    """Equipment slots in game numbering.

    Only the first ten body slots (see `BODY_SLOTS`) carry materials on
    the human draw object; weapons live on their own draw objects.
    """

    UNKNOWN = 0
    MAIN_HAND = 1
    OFF_HAND = 2
    HEAD = 3
    BODY = 4
    HANDS = 5
    BELT = 6
    LEGS = 7
    FEET = 8
    EARS = 9
    NECK = 10
    WRISTS = 11
    RFINGER = 12
    BOTH_HAND = 13
    LFINGER = 14
    HEAD_BODY = 15
    BODY_HANDS_LEGS_FEET = 16
    SOUL_CRYSTAL = 17
    LEGS_FEET = 18
    FULL_BODY = 19
    BODY_HANDS = 20
    BODY_LEGS_FEET = 21
    CHEST_HANDS = 22

    def to_index(self) -> int:
        """Model slot ordinal, or `INVALID_SLOT_INDEX` for slots without one."""
        return _SLOT_TO_INDEX.get(self, INVALID_SLOT_INDEX)

    def to_name(self) -> str:
        """Display name of the slot."""
        return _SLOT_NAMES.get(self) or self.name.replace("_", " ").title()


INVALID_SLOT_INDEX = 0xFFFFFFFF

# Order of the human draw object's model slots.
BODY_SLOTS: tuple[EquipSlot, ...] = (
    EquipSlot.HEAD,
    EquipSlot.BODY,
    EquipSlot.HANDS,
    EquipSlot.LEGS,
    EquipSlot.FEET,
    EquipSlot.EARS,
    EquipSlot.NECK,
    EquipSlot.WRISTS,
    EquipSlot.RFINGER,
    EquipSlot.LFINGER,
)

_INDEX_ORDER: tuple[EquipSlot, ...] = BODY_SLOTS + (
    EquipSlot.MAIN_HAND,
    EquipSlot.OFF_HAND,
)

_SLOT_TO_INDEX = {slot: idx for idx, slot in enumerate(_INDEX_ORDER)}

_SLOT_NAMES = {
    EquipSlot.HEAD: "Head",
    EquipSlot.BODY: "Body",
    EquipSlot.HANDS: "Hands",
    EquipSlot.LEGS: "Legs",
    EquipSlot.FEET: "Feet",
    EquipSlot.EARS: "Earrings",
    EquipSlot.NECK: "Necklace",
    EquipSlot.WRISTS: "Bracelets",
    EquipSlot.RFINGER: "Right Ring",
    EquipSlot.LFINGER: "Left Ring",
    EquipSlot.MAIN_HAND: "Main Hand",
    EquipSlot.OFF_HAND: "Off Hand",
}


def equip_slot_from_index(index: int) -> EquipSlot:
    """Inverse of `EquipSlot.to_index`; `EquipSlot.UNKNOWN` when out of range."""
    if 0 <= index < len(_INDEX_ORDER):
        return _INDEX_ORDER[index]
    return EquipSlot.UNKNOWN


class CustomizeIndex(IntEnum):
    """Byte positions of the customization array."""

    RACE = 0
    GENDER = 1
    BODY_TYPE = 2
    HEIGHT = 3
    CLAN = 4
    FACE = 5
    HAIRSTYLE = 6
    HIGHLIGHTS = 7
    SKIN_COLOR = 8
    EYE_COLOR_RIGHT = 9
    HAIR_COLOR = 10
    HIGHLIGHTS_COLOR = 11
    FACIAL_FEATURES = 12
    TATTOO_COLOR = 13
    EYEBROWS = 14
    EYE_COLOR_LEFT = 15
    EYE_SHAPE = 16
    NOSE = 17
    JAW = 18
    MOUTH = 19
    LIP_COLOR = 20
    MUSCLE_MASS = 21
    TAIL_SHAPE = 22
    BUST_SIZE = 23
    FACE_PAINT = 24
    FACE_PAINT_COLOR = 25

    @classmethod
    def from_name(cls, name: str) -> "CustomizeIndex":
        """Parse a sheet menu key such as ``"HairColor"`` or ``"hair_color"``."""
        normalized = "".join(ch for ch in name if ch.isalnum()).upper()
        for member in cls:
            if member.name.replace("_", "") == normalized:
                return member
        raise ValueError(f"Unknown customize index: {name}")
