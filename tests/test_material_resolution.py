"""Tests for resolving material value indices against actors."""

from typing import Optional

import pytest

from glamkit.materials import (
    MATERIALS_PER_MODEL,
    ActorSnapshot,
    ColorTable,
    DrawObjectSnapshot,
    DrawObjectType,
    HalfFloatColorTableCodec,
    MaterialValueIndex,
    TextureSnapshot,
)

from conftest import make_draw_object, make_texture

BODY_INDEX = MaterialValueIndex(DrawObjectType.HUMAN, 1, 2, 7)


class ExplodingActor:
    """Actor that fails the test if anything beyond `valid` is touched."""

    valid = False

    @property
    def is_character(self) -> bool:
        raise AssertionError("is_character read on invalid actor")

    @property
    def model(self) -> Optional[DrawObjectSnapshot]:
        raise AssertionError("model read on invalid actor")

    def weapon_draw_object(self, index: int) -> Optional[DrawObjectSnapshot]:
        raise AssertionError("weapon read on invalid actor")


class CountingCodec:
    """Codec that records how often it was asked."""

    def __init__(self, result: Optional[ColorTable]):
        self.result = result
        self.calls = 0

    def decode_color_table(self, texture: TextureSnapshot) -> Optional[ColorTable]:
        self.calls += 1
        return self.result


class TestModelStage:
    """Test actor to draw object resolution."""

    def test_invalid_actor_short_circuits(self) -> None:
        codec = CountingCodec(None)
        assert BODY_INDEX.try_get_model(ExplodingActor()) is None
        assert BODY_INDEX.try_get_color_row(ExplodingActor(), codec) is None
        assert codec.calls == 0

    def test_human_uses_primary_model(self, actor: ActorSnapshot) -> None:
        assert BODY_INDEX.try_get_model(actor) is actor.model

    def test_weapons(self, actor: ActorSnapshot) -> None:
        mainhand = MaterialValueIndex(DrawObjectType.MAINHAND, 0, 0, 0)
        offhand = MaterialValueIndex(DrawObjectType.OFFHAND, 0, 0, 0)
        assert mainhand.try_get_model(actor) is actor.weapons[0]
        assert offhand.try_get_model(actor) is None

    def test_weapons_need_character(self, actor: ActorSnapshot) -> None:
        actor.is_character = False
        mainhand = MaterialValueIndex(DrawObjectType.MAINHAND, 0, 0, 0)
        assert mainhand.try_get_model(actor) is None
        # The body model does not depend on the character check.
        assert BODY_INDEX.try_get_model(actor) is actor.model

    def test_invalid_kind(self, actor: ActorSnapshot) -> None:
        assert MaterialValueIndex(DrawObjectType.INVALID, 1, 2, 7).try_get_model(actor) is None

    def test_human_model_must_be_character_base(self, actor: ActorSnapshot) -> None:
        assert actor.model is not None
        actor.model.is_character_base = False
        assert BODY_INDEX.try_get_model(actor) is None


class TestTextureStages:
    """Test draw object to texture resolution."""

    def test_texture_bank(self, actor: ActorSnapshot) -> None:
        bank = BODY_INDEX.try_get_textures(actor)
        assert bank is not None
        assert len(bank) == MATERIALS_PER_MODEL
        assert bank[2] is not None
        assert bank[0] is None

    def test_slot_beyond_slot_count(self) -> None:
        actor = ActorSnapshot(model=make_draw_object(1, {}))
        assert BODY_INDEX.try_get_textures(actor) is None

    def test_short_texture_list(self) -> None:
        model = DrawObjectSnapshot(slot_count=10, textures=[None] * (2 * MATERIALS_PER_MODEL - 1))
        assert BODY_INDEX.try_get_textures(ActorSnapshot(model=model)) is None

    def test_empty_material(self, actor: ActorSnapshot) -> None:
        empty = MaterialValueIndex(DrawObjectType.HUMAN, 1, 0, 0)
        assert empty.try_get_textures(actor) is not None
        assert empty.try_get_texture(actor) is None

    def test_texture_from_short_bank(self) -> None:
        texture = TextureSnapshot(4, 32)
        assert BODY_INDEX.texture_from_bank([texture, texture]) is None
        assert BODY_INDEX.texture_from_bank([None, None, texture]) is texture


class TestColorStages:
    """Test texture to color row resolution."""

    def test_full_pipeline(self, actor: ActorSnapshot, color_table: ColorTable) -> None:
        row = BODY_INDEX.try_get_color_row(actor)
        assert row == color_table[7]
        assert row is not None
        assert row.diffuse == (0.5, 7 / 32, 0.5)

    def test_weapon_pipeline(self, actor: ActorSnapshot, color_table: ColorTable) -> None:
        index = MaterialValueIndex(DrawObjectType.MAINHAND, 0, 0, 31)
        assert index.try_get_color_row(actor) == color_table[31]

    def test_codec_failure(self, actor: ActorSnapshot) -> None:
        codec = CountingCodec(None)
        assert BODY_INDEX.try_get_color_table(actor, codec) is None
        assert BODY_INDEX.try_get_color_row(actor, codec) is None
        assert codec.calls == 2

    def test_custom_codec(self, actor: ActorSnapshot, color_table: ColorTable) -> None:
        codec = CountingCodec(color_table)
        assert BODY_INDEX.try_get_color_table(actor, codec) is color_table

    def test_non_table_texture(self) -> None:
        texture = TextureSnapshot(width=64, height=64, data=b"\x00" * 16)
        model = make_draw_object(10, {1 * MATERIALS_PER_MODEL + 2: texture})
        assert BODY_INDEX.try_get_color_row(ActorSnapshot(model=model)) is None

    def test_stages_do_not_mutate(self, actor: ActorSnapshot) -> None:
        assert actor.model is not None
        before = list(actor.model.textures)
        BODY_INDEX.try_get_color_row(actor)
        assert actor.model.textures == before


class TestHalfFloatCodec:
    """Test decoding of half-float color tables."""

    def test_round_trip(self, color_table: ColorTable) -> None:
        decoded = HalfFloatColorTableCodec().decode_color_table(make_texture(color_table))
        assert decoded == color_table

    def test_wrong_size(self, color_table: ColorTable) -> None:
        data = color_table.to_bytes()[:-2]
        texture = TextureSnapshot(width=4, height=ColorTable.NUM_ROWS, data=data)
        assert HalfFloatColorTableCodec().decode_color_table(texture) is None

    def test_row_accessors(self, color_table: ColorTable) -> None:
        row = color_table[3]
        assert row.specular_strength == 0.25
        assert row.tile_set == 16
        assert row.material_skew == (0.25, 3.0)

    def test_row_width_enforced(self) -> None:
        from glamkit.materials import ColorRow

        with pytest.raises(ValueError):
            ColorRow((1.0, 2.0))
