"""
Color tables decoded from material color-table textures.

A color table is a fixed number of rows; each row holds sixteen half
floats describing diffuse, specular and emissive colors plus tiling
parameters. The texture stores the table as raw little-endian halves,
one row after another.
"""

import struct
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol, Sequence

from .structs import Texture

ROW_WIDTH = 16
"""Number of half floats per color row."""

_ROW_FORMAT = f"<{ROW_WIDTH}e"
_ROW_SIZE = struct.calcsize(_ROW_FORMAT)


@dataclass(frozen=True)
class ColorRow:
    """One row of a color table, stored as its sixteen raw values."""

    values: tuple[float, ...] = (0.0,) * ROW_WIDTH

    def __post_init__(self):
        if len(self.values) != ROW_WIDTH:
            raise ValueError(
                f"Color row needs {ROW_WIDTH} values, got {len(self.values)}"
            )

    @property
    def diffuse(self) -> tuple[float, float, float]:
        return self.values[0], self.values[1], self.values[2]

    @property
    def specular_strength(self) -> float:
        return self.values[3]

    @property
    def specular(self) -> tuple[float, float, float]:
        return self.values[4], self.values[5], self.values[6]

    @property
    def gloss_strength(self) -> float:
        return self.values[7]

    @property
    def emissive(self) -> tuple[float, float, float]:
        return self.values[8], self.values[9], self.values[10]

    @property
    def tile_set(self) -> int:
        """Tile set index; stored scaled by 64 in the table."""
        return int(self.values[11] * 64)

    @property
    def material_repeat(self) -> tuple[float, float]:
        return self.values[12], self.values[13]

    @property
    def material_skew(self) -> tuple[float, float]:
        return self.values[14], self.values[15]

    def to_list(self) -> list[float]:
        return list(self.values)


class ColorTable:
    """Decoded color table with exactly `NUM_ROWS` rows."""

    NUM_ROWS = 32
    BYTE_SIZE = NUM_ROWS * _ROW_SIZE

    def __init__(self, rows: Sequence[ColorRow]):
        if len(rows) != self.NUM_ROWS:
            raise ValueError(
                f"Color table needs {self.NUM_ROWS} rows, got {len(rows)}"
            )
        self._rows: tuple[ColorRow, ...] = tuple(rows)

    def __getitem__(self, row_index: int) -> ColorRow:
        return self._rows[row_index]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[ColorRow]:
        return iter(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorTable):
            return NotImplemented
        return self._rows == other._rows

    @classmethod
    def from_bytes(cls, data: bytes) -> Optional["ColorTable"]:
        """Decode a table from raw half-float data, or None on size mismatch."""
        if len(data) != cls.BYTE_SIZE:
            return None
        try:
            rows = [
                ColorRow(struct.unpack_from(_ROW_FORMAT, data, i * _ROW_SIZE))
                for i in range(cls.NUM_ROWS)
            ]
        except struct.error:
            return None
        return cls(rows)

    def to_bytes(self) -> bytes:
        return b"".join(struct.pack(_ROW_FORMAT, *row.values) for row in self._rows)


class ColorTableCodec(Protocol):
    """Decodes the color table held by a texture resource."""

    def decode_color_table(self, texture: Texture) -> Optional[ColorTable]: ...


class HalfFloatColorTableCodec:
    """Codec for textures holding a plain half-float color table.

    Color-table textures are 4 texels wide (RGBA16F, so one row per texel
    line) and `ColorTable.NUM_ROWS` texels high. Anything else is not a
    color table.
    """

    TEXTURE_WIDTH = ROW_WIDTH // 4

    def decode_color_table(self, texture: Texture) -> Optional[ColorTable]:
        if texture.width != self.TEXTURE_WIDTH or texture.height != ColorTable.NUM_ROWS:
            return None
        return ColorTable.from_bytes(texture.data)
