#!/usr/bin/env python3

"""QBI domain models."""

from .document import QBI_VERSION, ContractInfo, DocumentMeta, QbiDocument
from .entry import CompiledEntry, EntryKind, RegisteredEntry
from .serialization import (
    document_to_dict,
    document_to_json,
    type_ref_from_dict,
    type_ref_to_dict,
)
from .type_ref import (
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
    OpaqueId,
    Primitive,
    PrimitiveKind,
    Struct,
    StructField,
    TypeRef,
)

__all__ = [
    "Array",
    "BOOL",
    "Bytes",
    "CompiledEntry",
    "ContractInfo",
    "DocumentMeta",
    "EntryKind",
    "I8",
    "I16",
    "I32",
    "I64",
    "M256I",
    "NoData",
    "OpaqueId",
    "Primitive",
    "PrimitiveKind",
    "QBI_VERSION",
    "QbiDocument",
    "RegisteredEntry",
    "Struct",
    "StructField",
    "TypeRef",
    "U8",
    "U16",
    "U32",
    "U64",
    "document_to_dict",
    "document_to_json",
    "type_ref_from_dict",
    "type_ref_to_dict",
]
