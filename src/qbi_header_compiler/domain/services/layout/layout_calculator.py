#!/usr/bin/env python3

"""C++ size and alignment calculation for resolved TypeRefs.

Implements natural-alignment struct layout: each field is placed at the next
multiple of its alignment, the struct is padded to a multiple of its largest
field alignment, and an empty aggregate still occupies one byte. No packing
pragmas or bit-fields are modeled.
"""

from dataclasses import dataclass

from ....exceptions import LayoutError
from ....infrastructure.logging import get_logger
from ...models.qbi import Array, Bytes, NoData, OpaqueId, Primitive, Struct, TypeRef

logger = get_logger(__name__)

M256I_SIZE = 32
M256I_ALIGN = 8


@dataclass(frozen=True)
class Layout:
    """Byte size and alignment of a type."""

    size: int
    align: int


@dataclass(frozen=True)
class FieldPlacement:
    """Where a struct field lands."""

    name: str
    offset: int
    size: int
    align: int


def align_up(value: int, alignment: int) -> int:
    """Round ``value`` up to a multiple of ``alignment``."""
    if alignment <= 1:
        return value
    return -(-value // alignment) * alignment


def _require_length(value: object, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise LayoutError(f"{label} must be a non-negative integer, got {value!r}")
    return value


def calculate_layout(type_ref: TypeRef) -> Layout:
    """Compute the C++ layout of a TypeRef.

    Args:
        type_ref: Resolved type

    Returns:
        Layout with size and alignment in bytes

    Raises:
        LayoutError: If a Bytes/Array length is negative or not an integer
    """
    if isinstance(type_ref, NoData):
        # sizeof an empty struct is 1 even when nothing is encoded
        return Layout(max(1, type_ref.expected_size or 1), 1)
    if isinstance(type_ref, Primitive):
        size = type_ref.kind.byte_size
        return Layout(size, size)
    if isinstance(type_ref, Bytes):
        return Layout(_require_length(type_ref.length, "bytes.length"), 1)
    if isinstance(type_ref, OpaqueId):
        # m256i is a union of u64/u32/u16/u8 arrays
        return Layout(M256I_SIZE, M256I_ALIGN)
    if isinstance(type_ref, Array):
        length = _require_length(type_ref.length, "array.length")
        item = calculate_layout(type_ref.item)
        return Layout(item.size * length, item.align)
    if isinstance(type_ref, Struct):
        placements = calculate_field_offsets(type_ref)
        struct_align = max((p.align for p in placements), default=1)
        end = placements[-1].offset + placements[-1].size if placements else 0
        size = align_up(end, struct_align)
        return Layout(size if size else 1, struct_align)

    raise LayoutError(f"Not a TypeRef: {type_ref!r}")


def calculate_field_offsets(struct: Struct) -> list[FieldPlacement]:
    """Place each field of a struct in declaration order.

    Args:
        struct: Struct TypeRef

    Returns:
        One placement per field
    """
    placements: list[FieldPlacement] = []
    offset = 0
    for field in struct.fields:
        layout = calculate_layout(field.type_ref)
        offset = align_up(offset, layout.align)
        placements.append(FieldPlacement(field.name, offset, layout.size, layout.align))
        offset += layout.size
    return placements


def calculate_padding(struct: Struct) -> int:
    """Total implicit padding bytes (between fields and at the tail).

    Args:
        struct: Struct TypeRef

    Returns:
        Padding in bytes; the one-byte minimum of an empty struct is not padding
    """
    if not struct.fields:
        return 0

    placements = calculate_field_offsets(struct)
    data_bytes = sum(p.size for p in placements)
    padding = calculate_layout(struct).size - data_bytes

    logger.debug(
        f"Layout analysis: {len(placements)} fields, data={data_bytes}, padding={padding}"
    )
    return padding
