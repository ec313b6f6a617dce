"""Tests for packed material value keys."""

import itertools

import orjson
import pytest

from glamkit.game_data.enums import BODY_SLOTS, EquipSlot
from glamkit.materials import (
    MATERIALS_PER_MODEL,
    ColorTable,
    DrawObjectType,
    InvalidMaterialKeyError,
    MaterialValueIndex,
    decode_key,
    dumps_index,
    encode_key,
    loads_index,
    orjson_default,
)


class TestKeyPacking:
    """Test encoding and decoding of the 32-bit key."""

    def test_field_layout(self) -> None:
        """Kind is the high byte, row the low byte."""
        assert encode_key(DrawObjectType.HUMAN, 9, 3, 31) == 0x0109031F
        assert decode_key(0x0109031F) == (DrawObjectType.HUMAN, 9, 3, 31)

    def test_round_trip_valid_tuples(self) -> None:
        """decode(encode(x)) == x for every valid tuple."""
        kinds = [DrawObjectType.HUMAN, DrawObjectType.MAINHAND, DrawObjectType.OFFHAND]
        for kind, slot, material in itertools.product(kinds, range(10), range(MATERIALS_PER_MODEL)):
            for row in (0, 15, ColorTable.NUM_ROWS - 1):
                assert decode_key(encode_key(kind, slot, material, row)) == (kind, slot, material, row)

    def test_round_trip_out_of_range_bytes(self) -> None:
        """Packing is exact even for bytes that do not form a valid index."""
        key = encode_key(0xEE, 0xFF, 0x80, 0x7F)
        assert key == 0xEEFF807F
        assert decode_key(key) == (0xEE, 0xFF, 0x80, 0x7F)
        assert MaterialValueIndex.from_raw_key(key).key == key

    def test_monotonic_in_material_then_row(self) -> None:
        """For fixed kind and slot, keys grow with material and then row."""
        keys = [
            encode_key(DrawObjectType.HUMAN, 4, material, row)
            for material in range(MATERIALS_PER_MODEL)
            for row in range(ColorTable.NUM_ROWS)
        ]
        assert keys == sorted(keys)
        assert len(set(keys)) == len(keys)

    def test_ordering_matches_key(self) -> None:
        """Index ordering follows the packed key."""
        a = MaterialValueIndex(DrawObjectType.HUMAN, 1, 3, 31)
        b = MaterialValueIndex(DrawObjectType.HUMAN, 2, 0, 0)
        c = MaterialValueIndex(DrawObjectType.MAINHAND, 0, 0, 0)
        assert sorted([c, b, a]) == [a, b, c]


class TestValidity:
    """Test the structural validity predicate."""

    def test_upper_boundary_is_valid(self) -> None:
        index = MaterialValueIndex(DrawObjectType.HUMAN, 9, MATERIALS_PER_MODEL - 1, ColorTable.NUM_ROWS - 1)
        assert index.valid

    @pytest.mark.parametrize(
        "fields",
        [
            (DrawObjectType.HUMAN, 10, 0, 0),
            (DrawObjectType.HUMAN, 0, MATERIALS_PER_MODEL, 0),
            (DrawObjectType.HUMAN, 0, 0, ColorTable.NUM_ROWS),
            (DrawObjectType.INVALID, 0, 0, 0),
            (4, 0, 0, 0),
        ],
    )
    def test_invalid_fields(self, fields: tuple) -> None:
        assert not MaterialValueIndex(*fields).valid

    def test_from_key(self) -> None:
        """from_key returns None instead of raising for invalid keys."""
        assert MaterialValueIndex.from_key(0x0109031F) == MaterialValueIndex(DrawObjectType.HUMAN, 9, 3, 31)
        assert MaterialValueIndex.from_key(0x010A0000) is None
        assert MaterialValueIndex.from_key(0) is None

    def test_invalid_singleton_equals_zero_key(self) -> None:
        assert MaterialValueIndex.INVALID == MaterialValueIndex.from_raw_key(0)
        assert not MaterialValueIndex.INVALID.valid

    def test_fields_truncate_to_bytes(self) -> None:
        index = MaterialValueIndex(DrawObjectType.HUMAN, 0x101, 0, 0)
        assert index.slot_index == 1


class TestSlotMapping:
    """Test conversion between indices and equipment slots."""

    def test_main_hand(self) -> None:
        index = MaterialValueIndex.from_slot(EquipSlot.MAIN_HAND)
        assert index == MaterialValueIndex(DrawObjectType.MAINHAND, 0, 0, 0)
        assert index.to_slot() is EquipSlot.MAIN_HAND

    def test_off_hand(self) -> None:
        index = MaterialValueIndex.from_slot(EquipSlot.OFF_HAND)
        assert index == MaterialValueIndex(DrawObjectType.OFFHAND, 0, 0, 0)
        assert index.to_slot() is EquipSlot.OFF_HAND

    def test_body_slots(self) -> None:
        for ordinal, slot in enumerate(BODY_SLOTS):
            index = MaterialValueIndex.from_slot(slot)
            assert index == MaterialValueIndex(DrawObjectType.HUMAN, ordinal, 0, 0)
            assert index.valid
            assert index.to_slot() is slot

    @pytest.mark.parametrize("slot", [EquipSlot.BELT, EquipSlot.SOUL_CRYSTAL, EquipSlot.UNKNOWN])
    def test_unmapped_slots_are_invalid(self, slot: EquipSlot) -> None:
        index = MaterialValueIndex.from_slot(slot)
        assert index is MaterialValueIndex.INVALID
        assert not index.valid

    def test_to_slot_unknown(self) -> None:
        assert MaterialValueIndex(DrawObjectType.HUMAN, 10, 0, 0).to_slot() is EquipSlot.UNKNOWN
        assert MaterialValueIndex(DrawObjectType.MAINHAND, 1, 0, 0).to_slot() is EquipSlot.UNKNOWN
        assert MaterialValueIndex.INVALID.to_slot() is EquipSlot.UNKNOWN


class TestRangeBounds:
    """Test min/max construction for range scans."""

    def test_defaults(self) -> None:
        assert MaterialValueIndex.min_index().key == 0
        assert MaterialValueIndex.max_index().key == 0xFFFFFFFF

    def test_slot_range_contains_all_rows(self) -> None:
        low = MaterialValueIndex.min_index(DrawObjectType.HUMAN, 3)
        high = MaterialValueIndex.max_index(DrawObjectType.HUMAN, 3)
        inside = MaterialValueIndex(DrawObjectType.HUMAN, 3, 2, 17)
        outside = MaterialValueIndex(DrawObjectType.HUMAN, 4, 0, 0)
        assert low.key <= inside.key <= high.key
        assert not low.key <= outside.key <= high.key


class TestText:
    """Test the human readable representation."""

    def test_resolved_slot(self) -> None:
        index = MaterialValueIndex(DrawObjectType.HUMAN, 1, 0, 4)
        assert str(index) == "Body Material #1 Row #5"

    def test_weapon(self) -> None:
        assert str(MaterialValueIndex(DrawObjectType.OFFHAND, 0, 2, 0)) == "Off Hand Material #3 Row #1"

    def test_unresolved_slot(self) -> None:
        index = MaterialValueIndex(DrawObjectType.HUMAN, 12, 1, 1)
        assert str(index) == "Human Slot 12 Material #2 Row #2"

    def test_unknown_kind(self) -> None:
        assert str(MaterialValueIndex(7, 0, 0, 0)) == "7 Slot 0 Material #1 Row #1"


class TestJson:
    """Test serialization as a bare integer."""

    def test_dumps_is_integer(self) -> None:
        index = MaterialValueIndex(DrawObjectType.HUMAN, 9, 3, 31)
        assert dumps_index(index) == b"17367839"

    def test_loads_valid(self) -> None:
        index = MaterialValueIndex(DrawObjectType.MAINHAND, 0, 1, 2)
        assert loads_index(dumps_index(index)) == index

    def test_loads_invalid_key_carries_value(self) -> None:
        with pytest.raises(InvalidMaterialKeyError) as exc_info:
            loads_index(b"17432576")  # Human slot 10
        assert exc_info.value.key == 17432576
        assert "17432576" in str(exc_info.value)

    @pytest.mark.parametrize("payload", [b'"123"', b"true", b"-1", b"4294967296", b"1.5"])
    def test_loads_rejects_non_keys(self, payload: bytes) -> None:
        with pytest.raises(InvalidMaterialKeyError):
            loads_index(payload)

    def test_default_hook(self) -> None:
        document = {"index": MaterialValueIndex(DrawObjectType.HUMAN, 0, 0, 1)}
        assert orjson.loads(orjson.dumps(document, default=orjson_default)) == {"index": 0x01000001}

    def test_default_hook_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            orjson.dumps({"x": object()}, default=orjson_default)
