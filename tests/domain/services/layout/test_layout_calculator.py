#!/usr/bin/env python3

"""Unit tests for the C++ layout calculator."""

import pytest

from qbi_header_compiler.domain.models.qbi import (
    BOOL,
    I8,
    I16,
    I32,
    I64,
    M256I,
    U8,
    U16,
    U32,
    U64,
    Array,
    Bytes,
    NoData,
    Struct,
    StructField,
)
from qbi_header_compiler.domain.services.layout import (
    Layout,
    align_up,
    calculate_field_offsets,
    calculate_layout,
    calculate_padding,
)
from qbi_header_compiler.exceptions import LayoutError


def make_struct(*fields):
    return Struct(tuple(StructField(name, type_ref) for name, type_ref in fields))


@pytest.mark.unit
class TestLayoutCalculator:
    """Test suite for calculate_layout."""

    @pytest.mark.parametrize(
        "type_ref, size",
        [
            (U8, 1),
            (I8, 1),
            (BOOL, 1),
            (U16, 2),
            (I16, 2),
            (U32, 4),
            (I32, 4),
            (U64, 8),
            (I64, 8),
        ],
    )
    def test_primitive_size_equals_alignment(self, type_ref, size):
        """Primitives are naturally aligned."""
        assert calculate_layout(type_ref) == Layout(size, size)

    def test_opaque_id(self):
        assert calculate_layout(M256I) == Layout(32, 8)

    def test_bytes_are_byte_aligned(self):
        assert calculate_layout(Bytes(7)) == Layout(7, 1)
        assert calculate_layout(Bytes(0)) == Layout(0, 1)

    @pytest.mark.parametrize("length", [0, 1, 3, 64])
    def test_array_multiplies_item_size(self, length):
        """Array size is length times item size, alignment is the item's."""
        assert calculate_layout(Array(length, U32)) == Layout(4 * length, 4)
        assert calculate_layout(Array(length, M256I)) == Layout(32 * length, 8)

    @pytest.mark.parametrize(
        "expected_size, size",
        [(None, 1), (0, 1), (1, 1), (16, 16)],
    )
    def test_nodata_has_at_least_one_byte(self, expected_size, size):
        assert calculate_layout(NoData(expected_size)) == Layout(size, 1)

    def test_struct_padding_between_fields(self):
        """u8 followed by u32 puts the u32 at offset 4."""
        struct = make_struct(("a", U8), ("b", U32))

        placements = calculate_field_offsets(struct)

        assert [p.offset for p in placements] == [0, 4]
        assert calculate_layout(struct) == Layout(8, 4)

    def test_struct_tail_padding(self):
        """Struct size rounds up to its largest alignment."""
        struct = make_struct(("value", U64), ("flag", BOOL))
        assert calculate_layout(struct) == Layout(16, 8)
        assert calculate_padding(struct) == 7

    def test_empty_struct_occupies_one_byte(self):
        assert calculate_layout(Struct()) == Layout(1, 1)
        assert calculate_padding(Struct()) == 0

    def test_struct_of_zero_sized_fields_occupies_one_byte(self):
        struct = make_struct(("unknown", Bytes(0)))
        assert calculate_layout(struct) == Layout(1, 1)

    def test_nested_struct_alignment(self):
        """An embedded struct aligns to its own largest member."""
        inner = make_struct(("x", U16), ("y", M256I))
        outer = make_struct(("tag", U8), ("inner", inner))

        assert calculate_layout(inner) == Layout(40, 8)
        placements = calculate_field_offsets(outer)
        assert placements[1].offset == 8
        assert calculate_layout(outer) == Layout(48, 8)

    def test_layout_is_idempotent(self):
        """Repeated calls on the same TypeRef give the same result."""
        struct = make_struct(("a", U8), ("ids", Array(3, M256I)), ("b", U16))
        first = calculate_layout(struct)
        second = calculate_layout(struct)
        assert first == second == Layout(112, 8)

    @pytest.mark.parametrize("bad_length", [-1, 1.5, True, "4"])
    def test_invalid_lengths_raise(self, bad_length):
        with pytest.raises(LayoutError):
            calculate_layout(Bytes(bad_length))
        with pytest.raises(LayoutError):
            calculate_layout(Array(bad_length, U8))

    def test_layout_error_is_value_error(self):
        with pytest.raises(ValueError):
            calculate_layout(Array(-3, U8))

    def test_non_type_ref_raises(self):
        with pytest.raises(LayoutError):
            calculate_layout("u8")


@pytest.mark.unit
def test_align_up():
    assert align_up(0, 8) == 0
    assert align_up(1, 8) == 8
    assert align_up(8, 8) == 8
    assert align_up(9, 4) == 12
    assert align_up(5, 1) == 5
