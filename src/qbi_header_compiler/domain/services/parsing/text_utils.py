#!/usr/bin/env python3

"""Best-effort text cleanup shared by the header scanners."""

import re

_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT = re.compile(r"//[^\n]*")
_PREPROCESSOR_LINE = re.compile(r"^[ \t]*#[^\n]*", re.MULTILINE)
_WHITESPACE = re.compile(r"\s+")


def strip_comments(source: str) -> str:
    """Remove ``/* */`` and ``//`` comments.

    Block comments are replaced by a space so tokens on either side stay apart.
    String literals are not recognized.
    """
    without_blocks = _BLOCK_COMMENT.sub(" ", source)
    return _LINE_COMMENT.sub("", without_blocks)


def strip_preprocessor_lines(source: str) -> str:
    """Blank out lines starting with ``#``."""
    return _PREPROCESSOR_LINE.sub("", source)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()
