"""
Material value addressing.

Packed 32-bit keys naming a single color-table row of an actor's draw
object, the pipeline that resolves them against live state, and a
sorted store of per-row overrides.
"""

from .index import (
    MATERIALS_PER_MODEL,
    HUMAN_SLOT_COUNT,
    DrawObjectType,
    MaterialValueIndex,
    InvalidMaterialKeyError,
    encode_key,
    decode_key,
    dumps_index,
    loads_index,
    orjson_default,
)
from .color_table import ColorRow, ColorTable, ColorTableCodec, HalfFloatColorTableCodec
from .structs import (
    Actor,
    DrawObject,
    Texture,
    ActorSnapshot,
    DrawObjectSnapshot,
    TextureSnapshot,
    load_actor_snapshot,
)
from .store import MaterialValueStore

__all__ = [
    # Keys
    "MATERIALS_PER_MODEL",
    "HUMAN_SLOT_COUNT",
    "DrawObjectType",
    "MaterialValueIndex",
    "InvalidMaterialKeyError",
    "encode_key",
    "decode_key",
    "dumps_index",
    "loads_index",
    "orjson_default",
    # Color tables
    "ColorRow",
    "ColorTable",
    "ColorTableCodec",
    "HalfFloatColorTableCodec",
    # Collaborator views
    "Actor",
    "DrawObject",
    "Texture",
    "ActorSnapshot",
    "DrawObjectSnapshot",
    "TextureSnapshot",
    "load_actor_snapshot",
    # Overrides
    "MaterialValueStore",
]
