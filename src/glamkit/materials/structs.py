"""
Read-only views of actors, draw objects and textures.

The resolution pipeline in `glamkit.materials.index` only ever talks to
these protocols. Live game memory sits behind an adapter implementing
them; the snapshot dataclasses below are plain in-memory implementations
that can be loaded from a JSON dump.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence, cast

import orjson

logger = logging.getLogger(__name__)


class Texture(Protocol):
    """Texture resource bound to a material."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    @property
    def data(self) -> bytes: ...


class DrawObject(Protocol):
    """Renderable object attached to an actor (body model or weapon)."""

    @property
    def is_character_base(self) -> bool: ...

    @property
    def slot_count(self) -> int: ...

    @property
    def textures(self) -> Sequence[Optional[Texture]]:
        """Color-table textures of all slots, `MATERIALS_PER_MODEL` per slot."""
        ...


class Actor(Protocol):
    """Game object that may own draw objects."""

    @property
    def valid(self) -> bool: ...

    @property
    def is_character(self) -> bool: ...

    @property
    def model(self) -> Optional[DrawObject]: ...

    def weapon_draw_object(self, index: int) -> Optional[DrawObject]: ...


@dataclass(frozen=True)
class TextureSnapshot:
    width: int
    height: int
    data: bytes = b""


@dataclass
class DrawObjectSnapshot:
    is_character_base: bool = True
    slot_count: int = 0
    textures: list[Optional[TextureSnapshot]] = field(default_factory=list)


@dataclass
class ActorSnapshot:
    """Captured actor state; weapons are main hand then off hand."""

    valid: bool = True
    is_character: bool = True
    model: Optional[DrawObjectSnapshot] = None
    weapons: list[Optional[DrawObjectSnapshot]] = field(default_factory=list)

    def weapon_draw_object(self, index: int) -> Optional[DrawObjectSnapshot]:
        if 0 <= index < len(self.weapons):
            return self.weapons[index]
        return None


def _texture_from_dict(data: Any) -> Optional[TextureSnapshot]:
    if not isinstance(data, dict):
        return None
    texture = cast(dict[str, Any], data)
    return TextureSnapshot(
        width=int(texture.get("width", 0)),
        height=int(texture.get("height", 0)),
        data=bytes.fromhex(str(texture.get("data", ""))),
    )


def _draw_object_from_dict(data: Any) -> Optional[DrawObjectSnapshot]:
    if not isinstance(data, dict):
        return None
    draw_object = cast(dict[str, Any], data)
    raw_textures = cast(list[Any], draw_object.get("textures") or [])
    return DrawObjectSnapshot(
        is_character_base=bool(draw_object.get("is_character_base", True)),
        slot_count=int(draw_object.get("slot_count", 0)),
        textures=[_texture_from_dict(t) for t in raw_textures],
    )


def actor_snapshot_from_dict(data: dict[str, Any]) -> ActorSnapshot:
    """Build an `ActorSnapshot` from its JSON form.

    Texture data is stored as a hex string; missing textures are null.
    """
    raw_weapons = cast(list[Any], data.get("weapons") or [])
    return ActorSnapshot(
        valid=bool(data.get("valid", True)),
        is_character=bool(data.get("is_character", True)),
        model=_draw_object_from_dict(data.get("model")),
        weapons=[_draw_object_from_dict(w) for w in raw_weapons],
    )


def load_actor_snapshot(path: str | Path) -> ActorSnapshot:
    """Read an actor snapshot JSON file."""
    path = Path(path)
    with path.open("rb") as f:
        data = orjson.loads(f.read())
    if not isinstance(data, dict):
        raise ValueError(f"Actor snapshot must be a JSON object: {path}")
    snapshot = actor_snapshot_from_dict(cast(dict[str, Any], data))
    logger.debug(
        f"Loaded actor snapshot from {path} "
        f"({len(snapshot.weapons)} weapons, model={'yes' if snapshot.model else 'no'})"
    )
    return snapshot
