"""
Packed addressing of a single color-table row.

A `MaterialValueIndex` names one row of the color table of one material
of one model slot of one draw object. It packs into a single 32-bit key:

    byte 3: draw object kind
    byte 2: slot index
    byte 1: material index
    byte 0: row index

Packing and unpacking never fail; only `valid` tells whether the fields
address something that can exist. Keys order by kind, then slot, then
material, then row, so `min_index`/`max_index` bound range scans.

The `try_get_*` methods resolve an index against a live actor one stage
at a time. Every stage returns None on a miss; empty slots and materials
without color tables are normal, so nothing here raises.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional, Sequence

import orjson

from ..game_data.enums import BODY_SLOTS, EquipSlot, equip_slot_from_index
from .color_table import ColorRow, ColorTable, ColorTableCodec, HalfFloatColorTableCodec
from .structs import Actor, DrawObject, Texture

MATERIALS_PER_MODEL = 4
"""Color-table textures per model slot."""

HUMAN_SLOT_COUNT = len(BODY_SLOTS)
"""Model slots of the human draw object that can be addressed."""

BYTE_MAX = 0xFF
KEY_MAX = 0xFFFFFFFF


class DrawObjectType(IntEnum):
    """Which draw object of an actor an index refers to."""

    INVALID = 0
    HUMAN = 1
    """The actor's body model."""

    MAINHAND = 2
    """First weapon draw object."""

    OFFHAND = 3
    """Second weapon draw object."""


class InvalidMaterialKeyError(ValueError):
    """Raised when a serialized key does not describe a valid index."""

    def __init__(self, key: Any):
        super().__init__(f"Invalid material key {key}.")
        self.key = key


def _kind_from_byte(value: int) -> "DrawObjectType | int":
    try:
        return DrawObjectType(value)
    except ValueError:
        return value


def encode_key(
    draw_object: "DrawObjectType | int", slot_index: int, material_index: int, row_index: int
) -> int:
    """Pack the four fields into a 32-bit key. Each field is truncated to a byte."""
    result = row_index & BYTE_MAX
    result |= (material_index & BYTE_MAX) << 8
    result |= (slot_index & BYTE_MAX) << 16
    result |= (int(draw_object) & BYTE_MAX) << 24
    return result


def decode_key(key: int) -> tuple["DrawObjectType | int", int, int, int]:
    """Unpack a 32-bit key into (kind, slot, material, row)."""
    return (
        _kind_from_byte((key >> 24) & BYTE_MAX),
        (key >> 16) & BYTE_MAX,
        (key >> 8) & BYTE_MAX,
        key & BYTE_MAX,
    )


_DEFAULT_CODEC = HalfFloatColorTableCodec()


@dataclass(frozen=True, order=True)
class MaterialValueIndex:
    """Address of one color-table row; see the module docstring for layout."""

    draw_object: "DrawObjectType | int" = DrawObjectType.INVALID
    slot_index: int = 0
    material_index: int = 0
    row_index: int = 0

    # Filled in after the class body.
    INVALID = None  # type: ignore[assignment]

    def __post_init__(self):
        object.__setattr__(self, "draw_object", _kind_from_byte(int(self.draw_object) & BYTE_MAX))
        object.__setattr__(self, "slot_index", self.slot_index & BYTE_MAX)
        object.__setattr__(self, "material_index", self.material_index & BYTE_MAX)
        object.__setattr__(self, "row_index", self.row_index & BYTE_MAX)

    @property
    def key(self) -> int:
        return encode_key(self.draw_object, self.slot_index, self.material_index, self.row_index)

    @property
    def valid(self) -> bool:
        return (
            self.validate(self.draw_object)
            and self.validate_slot(self.slot_index)
            and self.validate_material(self.material_index)
            and self.validate_row(self.row_index)
        )

    # === CONSTRUCTION ===

    @classmethod
    def from_raw_key(cls, key: int) -> "MaterialValueIndex":
        """Decode a key without validating it."""
        return cls(*decode_key(key))

    @classmethod
    def from_key(cls, key: int) -> Optional["MaterialValueIndex"]:
        """Decode a key, returning None if the result is not valid."""
        index = cls.from_raw_key(key)
        return index if index.valid else None

    @classmethod
    def from_slot(cls, slot: EquipSlot) -> "MaterialValueIndex":
        """First row of the first material of an equipment slot."""
        if slot is EquipSlot.MAIN_HAND:
            return cls(DrawObjectType.MAINHAND, 0, 0, 0)
        if slot is EquipSlot.OFF_HAND:
            return cls(DrawObjectType.OFFHAND, 0, 0, 0)

        idx = slot.to_index()
        if idx < HUMAN_SLOT_COUNT:
            return cls(DrawObjectType.HUMAN, idx, 0, 0)

        return cls.INVALID

    @classmethod
    def min_index(
        cls,
        draw_object: "DrawObjectType | int" = 0,
        slot_index: int = 0,
        material_index: int = 0,
        row_index: int = 0,
    ) -> "MaterialValueIndex":
        """Lower bound for a key range scan."""
        return cls(draw_object, slot_index, material_index, row_index)

    @classmethod
    def max_index(
        cls,
        draw_object: "DrawObjectType | int" = BYTE_MAX,
        slot_index: int = BYTE_MAX,
        material_index: int = BYTE_MAX,
        row_index: int = BYTE_MAX,
    ) -> "MaterialValueIndex":
        """Upper bound (inclusive) for a key range scan."""
        return cls(draw_object, slot_index, material_index, row_index)

    def to_slot(self) -> EquipSlot:
        if self.draw_object == DrawObjectType.HUMAN and self.slot_index < HUMAN_SLOT_COUNT:
            return equip_slot_from_index(self.slot_index)
        if self.draw_object == DrawObjectType.MAINHAND and self.slot_index == 0:
            return EquipSlot.MAIN_HAND
        if self.draw_object == DrawObjectType.OFFHAND and self.slot_index == 0:
            return EquipSlot.OFF_HAND
        return EquipSlot.UNKNOWN

    # === VALIDATION ===

    @staticmethod
    def validate(draw_object: "DrawObjectType | int") -> bool:
        return (
            isinstance(draw_object, DrawObjectType)
            and draw_object is not DrawObjectType.INVALID
        )

    @staticmethod
    def validate_slot(slot_index: int) -> bool:
        return slot_index < HUMAN_SLOT_COUNT

    @staticmethod
    def validate_material(material_index: int) -> bool:
        return material_index < MATERIALS_PER_MODEL

    @staticmethod
    def validate_row(row_index: int) -> bool:
        return row_index < ColorTable.NUM_ROWS

    # === RESOLUTION ===

    def try_get_model(self, actor: Actor) -> Optional[DrawObject]:
        """Draw object this index refers to, if the actor has one."""
        if not actor.valid:
            return None

        if self.draw_object == DrawObjectType.HUMAN:
            model = actor.model
        elif self.draw_object == DrawObjectType.MAINHAND:
            model = actor.weapon_draw_object(0) if actor.is_character else None
        elif self.draw_object == DrawObjectType.OFFHAND:
            model = actor.weapon_draw_object(1) if actor.is_character else None
        else:
            model = None

        if model is None or not model.is_character_base:
            return None
        return model

    def try_get_textures(self, actor: Actor) -> Optional[Sequence[Optional[Texture]]]:
        """The `MATERIALS_PER_MODEL` color-table textures of this slot."""
        model = self.try_get_model(actor)
        if model is None:
            return None

        textures = model.textures
        if (
            self.slot_index >= model.slot_count
            or len(textures) < (self.slot_index + 1) * MATERIALS_PER_MODEL
        ):
            return None

        start = self.slot_index * MATERIALS_PER_MODEL
        return textures[start : start + MATERIALS_PER_MODEL]

    def try_get_texture(self, actor: Actor) -> Optional[Texture]:
        textures = self.try_get_textures(actor)
        if textures is None:
            return None
        return self.texture_from_bank(textures)

    def texture_from_bank(self, textures: Sequence[Optional[Texture]]) -> Optional[Texture]:
        """Pick this index's material out of a slot's texture bank."""
        if self.material_index >= len(textures):
            return None
        return textures[self.material_index]

    def try_get_color_table(
        self, actor: Actor, codec: Optional[ColorTableCodec] = None
    ) -> Optional[ColorTable]:
        texture = self.try_get_texture(actor)
        if texture is None:
            return None
        return self.color_table_from_texture(texture, codec)

    @staticmethod
    def color_table_from_texture(
        texture: Texture, codec: Optional[ColorTableCodec] = None
    ) -> Optional[ColorTable]:
        return (codec or _DEFAULT_CODEC).decode_color_table(texture)

    def try_get_color_row(
        self, actor: Actor, codec: Optional[ColorTableCodec] = None
    ) -> Optional[ColorRow]:
        """Resolve all the way down to the addressed row."""
        table = self.try_get_color_table(actor, codec)
        if table is None:
            return None
        return table[self.row_index]

    # === TEXT ===

    def __str__(self) -> str:
        slot = self.to_slot()
        if slot is EquipSlot.UNKNOWN:
            kind = (
                self.draw_object.name.title()
                if isinstance(self.draw_object, DrawObjectType)
                else str(self.draw_object)
            )
            return (
                f"{kind} Slot {self.slot_index} "
                f"Material #{self.material_index + 1} Row #{self.row_index + 1}"
            )
        return f"{slot.to_name()} Material #{self.material_index + 1} Row #{self.row_index + 1}"


MaterialValueIndex.INVALID = MaterialValueIndex(DrawObjectType.INVALID, 0, 0, 0)  # type: ignore[misc]


# === JSON ===


def orjson_default(obj: Any) -> Any:
    """`default` hook for `orjson.dumps`: indices serialize as their key."""
    if isinstance(obj, MaterialValueIndex):
        return obj.key
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def dumps_index(index: MaterialValueIndex) -> bytes:
    return orjson.dumps(index.key)


def index_from_json_value(value: Any) -> MaterialValueIndex:
    """Validate a value already parsed from JSON.

    Raises:
        InvalidMaterialKeyError: if the value is not an integer key of a
            valid index.
    """
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= KEY_MAX:
        raise InvalidMaterialKeyError(value)
    index = MaterialValueIndex.from_key(value)
    if index is None:
        raise InvalidMaterialKeyError(value)
    return index


def loads_index(data: bytes | str) -> MaterialValueIndex:
    return index_from_json_value(orjson.loads(data))
