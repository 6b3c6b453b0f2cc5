#!/usr/bin/env python3

"""Catalog of type-name conventions recognized before alias/struct lookup.

Each :class:`TypePattern` pairs a full-match regex with a builder. Patterns
are tried in the order of :data:`TYPE_PATTERNS`; the first match wins. The
catalog encodes the QPI type system: fixed-size array templates, bit
packing, integer/id array typedefs and a few library aggregates whose
layout is fixed.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...models.qbi import (
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
    Primitive,
    PrimitiveKind,
    Struct,
    StructField,
    TypeRef,
)

if TYPE_CHECKING:
    from .type_resolver import TypeResolver

# qpi.h: static_assert(sizeof(ProposalDataV1<true>) == 256 + 8 + 64, ...)
PROPOSAL_DATA_V1_SIZE = 328
PROPOSAL_DATA_YES_NO_SIZE = 304

PRIMITIVE_SPELLINGS: dict[str, TypeRef] = {
    "uint8": U8,
    "unsigned char": U8,
    "sint8": I8,
    "signed char": I8,
    "uint16": U16,
    "unsigned short": U16,
    "sint16": I16,
    "signed short": I16,
    "uint32": U32,
    "unsigned int": U32,
    "sint32": I32,
    "signed int": I32,
    "uint64": U64,
    "unsigned long long": U64,
    "sint64": I64,
    "signed long long": I64,
    "long long": I64,
    "bool": BOOL,
    "bit": BOOL,
    "id": M256I,
    "m256i": M256I,
}


def _struct(*fields: tuple[str, TypeRef]) -> Struct:
    return Struct(tuple(StructField(name, type_ref) for name, type_ref in fields))


KNOWN_AGGREGATES: dict[str, TypeRef] = {
    "Asset": _struct(("issuer", M256I), ("assetName", U64)),
    "ProposalSingleVoteDataV1": _struct(
        ("proposalIndex", U16),
        ("proposalType", U16),
        ("proposalTick", U32),
        ("voteValue", I64),
    ),
    "ProposalMultiVoteDataV1": _struct(
        ("proposalIndex", U16),
        ("proposalType", U16),
        ("proposalTick", U32),
        ("voteValues", Array(8, I64)),
        ("voteCounts", Array(8, U32)),
    ),
    # The result is a union of u32[8] and i64; only its size is kept.
    "ProposalSummarizedVotingDataV1": _struct(
        ("proposalIndex", U16),
        ("optionCount", U16),
        ("proposalTick", U32),
        ("totalVotesAuthorized", U32),
        ("totalVotesCasted", U32),
        ("resultBytes", Bytes(32)),
    ),
    "ProposalDataYesNo": Bytes(PROPOSAL_DATA_YES_NO_SIZE),
}

_INTEGER_KINDS = {
    ("uint", "8"): PrimitiveKind.U8,
    ("uint", "16"): PrimitiveKind.U16,
    ("uint", "32"): PrimitiveKind.U32,
    ("uint", "64"): PrimitiveKind.U64,
    ("sint", "8"): PrimitiveKind.I8,
    ("sint", "16"): PrimitiveKind.I16,
    ("sint", "32"): PrimitiveKind.I32,
    ("sint", "64"): PrimitiveKind.I64,
}


def packed_bit_words(bits: int) -> Array:
    """Bits stored as 64-bit words, at least one word."""
    return Array(max(1, (bits + 63) // 64), U64)


@dataclass(frozen=True)
class TypePattern:
    """A recognizer for one type-name convention."""

    name: str
    regex: re.Pattern[str]
    build: Callable[[re.Match[str], "TypeResolver"], TypeRef]

    def match(self, type_name: str) -> re.Match[str] | None:
        return self.regex.fullmatch(type_name)


def _alternation(names: dict[str, TypeRef]) -> re.Pattern[str]:
    return re.compile("|".join(re.escape(name) for name in names))


def _build_fixed_array(match: re.Match[str], resolver: "TypeResolver") -> TypeRef:
    token = match.group("length")
    length = resolver.resolve_length(token)
    if length is None:
        resolver.warn(f"Could not resolve Array length token: {token}")
        return Bytes(0)
    return Array(length, resolver.resolve(match.group("item")))


def _build_bit_array(match: re.Match[str], resolver: "TypeResolver") -> TypeRef:
    token = match.group("bits")
    bits = resolver.resolve_length(token)
    if bits is None:
        resolver.warn(f"Could not resolve BitArray length token: {token}")
        return Bytes(0)
    return packed_bit_words(bits)


def _build_integer_array(match: re.Match[str], resolver: "TypeResolver") -> TypeRef:
    kind = _INTEGER_KINDS[(match.group("sign"), match.group("width"))]
    return Array(int(match.group("length")), Primitive(kind))


TYPE_PATTERNS: tuple[TypePattern, ...] = (
    TypePattern(
        "fixed-array",
        # The item may itself be a template; the length is the text after
        # the last comma.
        re.compile(r"Array\s*<\s*(?P<item>.+?)\s*,\s*(?P<length>[^,<>]+?)\s*>"),
        _build_fixed_array,
    ),
    TypePattern(
        "bit-array",
        re.compile(r"BitArray\s*<\s*(?P<bits>[^<>]+?)\s*>"),
        _build_bit_array,
    ),
    TypePattern(
        "integer-array",
        re.compile(r"(?P<sign>sint|uint)(?P<width>8|16|32|64)_(?P<length>\d+)"),
        _build_integer_array,
    ),
    TypePattern(
        "id-array",
        re.compile(r"id_(?P<length>\d+)"),
        lambda match, resolver: Array(int(match.group("length")), M256I),
    ),
    TypePattern(
        "bit-count",
        re.compile(r"bit_(?P<length>\d+)"),
        lambda match, resolver: packed_bit_words(int(match.group("length"))),
    ),
    TypePattern(
        "primitive",
        _alternation(PRIMITIVE_SPELLINGS),
        lambda match, resolver: PRIMITIVE_SPELLINGS[match.group(0)],
    ),
    TypePattern(
        "known-aggregate",
        _alternation(KNOWN_AGGREGATES),
        lambda match, resolver: KNOWN_AGGREGATES[match.group(0)],
    ),
    TypePattern(
        "proposal-data-v1",
        # The template argument changes behavior, not layout.
        re.compile(r"ProposalDataV1\s*<\s*(?:true|false)\s*>"),
        lambda match, resolver: Bytes(PROPOSAL_DATA_V1_SIZE),
    ),
)


def match_type_pattern(type_name: str) -> tuple[TypePattern, re.Match[str]] | None:
    """Find the first catalog pattern that fully matches ``type_name``."""
    for pattern in TYPE_PATTERNS:
        match = pattern.match(type_name)
        if match is not None:
            return pattern, match
    return None
