"""Shared fixtures for glamkit tests."""

import logging
from pathlib import Path
from typing import Any, Iterator

import orjson
import pytest
from PIL import Image

from glamkit.game_data.enums import SubRace
from glamkit.materials import (
    MATERIALS_PER_MODEL,
    ActorSnapshot,
    ColorRow,
    ColorTable,
    DrawObjectSnapshot,
    TextureSnapshot,
)

HAIR_ICON = 1001
FACE_PAINT_ICON = 2001


def make_color_table(base: float = 0.0) -> ColorTable:
    """Color table whose row r starts with diffuse (base, r/32, 0.5)."""
    rows = [
        ColorRow((base, r / 32, 0.5) + (0.25,) * 12 + (float(r),))
        for r in range(ColorTable.NUM_ROWS)
    ]
    return ColorTable(rows)


def make_texture(table: ColorTable) -> TextureSnapshot:
    return TextureSnapshot(width=4, height=ColorTable.NUM_ROWS, data=table.to_bytes())


def make_draw_object(slot_count: int, filled: dict[int, TextureSnapshot]) -> DrawObjectSnapshot:
    """Draw object with `slot_count` slots; `filled` maps flat texture position to texture."""
    textures: list[TextureSnapshot | None] = [None] * (slot_count * MATERIALS_PER_MODEL)
    for position, texture in filled.items():
        textures[position] = texture
    return DrawObjectSnapshot(is_character_base=True, slot_count=slot_count, textures=textures)


@pytest.fixture
def color_table() -> ColorTable:
    return make_color_table(0.5)


@pytest.fixture
def actor(color_table: ColorTable) -> ActorSnapshot:
    """Character with body slot 1 material 2 and a main hand color table."""
    texture = make_texture(color_table)
    body = make_draw_object(10, {1 * MATERIALS_PER_MODEL + 2: texture})
    mainhand = make_draw_object(1, {0: texture})
    return ActorSnapshot(valid=True, is_character=True, model=body, weapons=[mainhand, None])


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(data))


def chara_make_rows(clans: list[SubRace]) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for clan in clans:
        for gender in (0, 1):
            rows.append(
                {
                    "id": int(clan) * 2 + gender,
                    "tribe": int(clan),
                    "gender": gender,
                    "menus": [
                        {"index": "Face", "name": "Face", "values": [1, 2, 3, 4]},
                        {"index": "Hairstyle", "name": "Hairstyle", "features": [10, 11, 99]},
                        {
                            "index": "FacePaint",
                            "name": "Face Paint",
                            "values": [0, 1],
                            "icons": [0, FACE_PAINT_ICON],
                        },
                        {"index": "SkinColor", "name": "Skin Color", "values": list(range(8))},
                    ],
                }
            )
    return rows


@pytest.fixture
def game_data_dir(tmp_path: Path) -> Path:
    """Minimal game data export covering every clan."""
    root = tmp_path / "export"
    clans = [c for c in SubRace if c is not SubRace.UNKNOWN]
    _write_json(root / "sheets" / "CharaMakeType.json", chara_make_rows(clans))
    _write_json(
        root / "sheets" / "CharaMakeCustomize.json",
        [
            {"id": 10, "data": 1, "icon": HAIR_ICON},
            {"id": 11, "data": 2, "icon": HAIR_ICON + 1},
        ],
    )
    _write_json(
        root / "npc_customize.json",
        [
            {
                "name": "Guard",
                "kind": "battle",
                "customize": {"Clan": 1, "Gender": 0, "Hairstyle": 150, "Face": 2},
            },
            {
                "name": "Merchant",
                "customize": {"Clan": 1, "Gender": 1, "FacePaint": 1, "Unknown": 3},
            },
        ],
    )

    icon_path = root / "ui" / "icon" / "001000" / f"{HAIR_ICON:06d}.png"
    icon_path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", (8, 8), (255, 0, 0, 255)).save(icon_path)
    return root


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    """Undo handler changes made by `setup_logging`."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
