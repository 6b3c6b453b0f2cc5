#!/usr/bin/env python3

"""Locate struct bodies in header text by name."""

import re


def find_matching_brace(source: str, open_index: int) -> int | None:
    """Return the index of the ``}`` closing the ``{`` at ``open_index``."""
    depth = 0
    for i in range(open_index, len(source)):
        ch = source[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def locate_struct_body(source: str, struct_name: str) -> str | None:
    """Find the body of ``struct <struct_name> { ... }``.

    The first occurrence of the exact name that is followed by a ``{`` before
    any ``;`` is used, so forward declarations are passed over and base class
    lists (``struct A : B {``) are allowed. Comments are not understood; strip
    them beforehand if braces may appear inside them.

    Args:
        source: Header text
        struct_name: Exact struct name

    Returns:
        Text between the outermost braces, or None if not found or unbalanced
    """
    pattern = re.compile(rf"\bstruct\s+{re.escape(struct_name)}\b[^;{{}}()]*\{{")
    match = pattern.search(source)
    if match is None:
        return None

    open_index = match.end() - 1
    close_index = find_matching_brace(source, open_index)
    if close_index is None:
        return None
    return source[open_index + 1 : close_index]
