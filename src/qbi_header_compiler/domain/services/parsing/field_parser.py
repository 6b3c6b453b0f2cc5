#!/usr/bin/env python3

"""Struct body parsing into ordered field lists.

Only data members contribute to layout. Methods, nested type definitions,
static members and preprocessor lines are skipped; statements that look like
none of the supported declaration forms produce a warning and are dropped.
"""

import re
from typing import TYPE_CHECKING

from ...models.qbi import Array, Struct, StructField, TypeRef
from .text_utils import collapse_whitespace, strip_comments, strip_preprocessor_lines

if TYPE_CHECKING:
    from .type_resolver import TypeResolver

_BRACE_NOISE = re.compile(r"^[{}\s]+$")
_NESTED_TYPE = re.compile(r"^(?:struct|class|enum|union)\b")
_NON_LAYOUT_MEMBER = re.compile(r"^(?:static|typedef|using|friend|template|constexpr)\b")
_ACCESS_LABELS = re.compile(r"^(?:(?:public|private|protected)\s*:\s*)+")
_BRACE_INITIALIZER = re.compile(r"\s*\{[^{}]*\}$")
# A lone "=" (not part of ==, !=, <=, >=)
_INITIALIZER_EQUALS = re.compile(r"(?<![=!<>])=(?!=)")
_OPERATOR = re.compile(r"\boperator\b")

_ARRAY_FIELD = re.compile(
    r"^(?P<type>.+?)\s+(?P<name>[A-Za-z_]\w*)\s*(?P<dims>(?:\[[^\]]*\]\s*)+)$"
)
_DIMENSION = re.compile(r"\[\s*([^\]]*?)\s*\]")
_SCALAR_FIELDS = re.compile(
    r"^(?P<type>.+?)\s+(?P<names>[A-Za-z_]\w*(?:\s*,\s*[A-Za-z_]\w*)*)$"
)


def split_statements(body: str) -> list[str]:
    """Split a struct body into member statements.

    Statements end at ``;`` outside braces. A brace block that closes an
    inline function body (its header contains ``(``) also ends a statement,
    since no ``;`` follows it.

    Args:
        body: Struct body text

    Returns:
        Non-empty statements with whitespace collapsed
    """
    text = strip_preprocessor_lines(strip_comments(body))

    statements: list[str] = []
    current: list[str] = []
    depth = 0

    for ch in text:
        if ch == ";" and depth == 0:
            statements.append("".join(current))
            current = []
            continue

        current.append(ch)
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth = max(0, depth - 1)
            if depth == 0:
                statement = "".join(current)
                if "(" in statement.split("{", 1)[0]:
                    statements.append(statement)
                    current = []

    statements.append("".join(current))
    return [s for s in (collapse_whitespace(s) for s in statements) if s]


def _declarator(statement: str) -> str:
    """Statement text before a default-member initializer."""
    statement = _ACCESS_LABELS.sub("", statement)
    return _INITIALIZER_EQUALS.split(statement, 1)[0].strip()


def _is_skipped(statement: str) -> bool:
    return bool(
        _BRACE_NOISE.match(statement)
        or _OPERATOR.search(statement)
        or "(" in statement
        or statement.startswith("#")
        or _NESTED_TYPE.match(statement)
        or _NON_LAYOUT_MEMBER.match(statement)
    )


def parse_struct_fields(body: str, resolver: "TypeResolver") -> Struct:
    """Parse a struct body into a Struct TypeRef.

    Supported member forms:

    - ``Type name[Len]`` (also multi-dimensional ``[A][B]``)
    - ``Type a, b, c`` (each name shares the single resolved type)

    Array fields whose length cannot be resolved are dropped with a warning.

    Args:
        body: Struct body text (between the braces)
        resolver: Type resolver of the current compilation

    Returns:
        Struct with fields in declaration order
    """
    fields: list[StructField] = []

    for raw_statement in split_statements(body):
        statement = _declarator(raw_statement)
        if not statement or _is_skipped(statement):
            continue
        statement = _BRACE_INITIALIZER.sub("", statement).strip()

        array = _ARRAY_FIELD.match(statement)
        if array:
            tokens = _DIMENSION.findall(array.group("dims"))
            lengths: list[int] = []
            for token in tokens:
                length = resolver.resolve_length(token)
                if length is None:
                    resolver.warn(f"Could not resolve array length token: {token}")
                    break
                lengths.append(length)
            else:
                type_ref: TypeRef = resolver.resolve(array.group("type"))
                for length in reversed(lengths):
                    type_ref = Array(length, type_ref)
                fields.append(StructField(array.group("name"), type_ref))
            continue

        scalars = _SCALAR_FIELDS.match(statement)
        if scalars:
            type_ref = resolver.resolve(scalars.group("type"))
            for name in scalars.group("names").split(","):
                fields.append(StructField(name.strip(), type_ref))
            continue

        resolver.warn(f"Unrecognized field statement: {raw_statement}")

    return Struct(tuple(fields))
