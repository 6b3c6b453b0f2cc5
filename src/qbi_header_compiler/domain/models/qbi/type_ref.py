#!/usr/bin/env python3

"""TypeRef: the language-neutral description of a C++ type's shape."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class PrimitiveKind(Enum):
    """Fixed-width scalar kinds, valued by their wire name."""

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    BOOL = "bool"

    @property
    def byte_size(self) -> int:
        """Natural width in bytes (alignment equals size)."""
        return _PRIMITIVE_SIZES[self]


_PRIMITIVE_SIZES = {
    PrimitiveKind.U8: 1,
    PrimitiveKind.I8: 1,
    PrimitiveKind.BOOL: 1,
    PrimitiveKind.U16: 2,
    PrimitiveKind.I16: 2,
    PrimitiveKind.U32: 4,
    PrimitiveKind.I32: 4,
    PrimitiveKind.U64: 8,
    PrimitiveKind.I64: 8,
}


@dataclass(frozen=True)
class NoData:
    """An entry side without a struct; still occupies at least one byte."""

    expected_size: int | None = None


@dataclass(frozen=True)
class Primitive:
    """Integer or boolean scalar."""

    kind: PrimitiveKind


@dataclass(frozen=True)
class Bytes:
    """Opaque blob of fixed length."""

    length: int


@dataclass(frozen=True)
class OpaqueId:
    """256-bit identifier (``m256i``): 32 bytes, 8-byte aligned."""


@dataclass(frozen=True)
class Array:
    """Fixed-length homogeneous repetition."""

    length: int
    item: TypeRef


@dataclass(frozen=True)
class StructField:
    """Named member of a Struct."""

    name: str
    type_ref: TypeRef


@dataclass(frozen=True)
class Struct:
    """Aggregate; field order is layout order."""

    fields: tuple[StructField, ...] = ()


TypeRef = Union[NoData, Primitive, Bytes, OpaqueId, Array, Struct]

U8 = Primitive(PrimitiveKind.U8)
U16 = Primitive(PrimitiveKind.U16)
U32 = Primitive(PrimitiveKind.U32)
U64 = Primitive(PrimitiveKind.U64)
I8 = Primitive(PrimitiveKind.I8)
I16 = Primitive(PrimitiveKind.I16)
I32 = Primitive(PrimitiveKind.I32)
I64 = Primitive(PrimitiveKind.I64)
BOOL = Primitive(PrimitiveKind.BOOL)
M256I = OpaqueId()
