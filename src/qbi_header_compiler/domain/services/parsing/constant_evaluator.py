#!/usr/bin/env python3

"""Compile-time integer constant evaluation.

Evaluates the small expression language found in ``constexpr`` and
``#define`` values: integer literals, previously defined names, ``+ - *``
and parentheses. Division, modulo and anything that looks like a call are
deliberately unsupported; such expressions are reported as unresolved
(``None``) rather than guessed.
"""

import re
from collections.abc import Mapping

from ....infrastructure.logging import get_logger
from .text_utils import strip_comments

logger = get_logger(__name__)

_TOKEN = re.compile(
    r"""
    \s*(?:
        (?P<number>0[xX][0-9a-fA-F]+|\d+)
        (?:[uU](?:ll|LL|l|L)?|(?:ll|LL|l|L)[uU]?)?(?!\w)
      | (?P<ident>[A-Za-z_]\w*)
      | (?P<op>[-+*])
      | (?P<paren>[()])
    )
    """,
    re.VERBOSE,
)
_UNSUPPORTED_OPERATOR = re.compile(r"[/%]")
_CALL_LIKE = re.compile(r"[A-Za-z_]\w*\s*\(")

_DEFINITION = re.compile(
    r"constexpr\s+(?:[\w:<>]+\s+)+?(?P<cname>[A-Za-z_]\w*)\s*=\s*(?P<cexpr>[^;]+);"
    r"|^[ \t]*\#[ \t]*define[ \t]+(?P<dname>[A-Za-z_]\w*)[ \t]+(?P<dexpr>[^\n]*?)[ \t]*$",
    re.MULTILINE,
)

_PRECEDENCE = {"+": 1, "-": 1, "*": 2}

Token = tuple[str, str | int]


def tokenize(expr: str) -> list[Token] | None:
    """Split an expression into ``(kind, value)`` tokens.

    Literal suffixes (``u``, ``ll``, ``ULL`` ...) are dropped.

    Returns:
        Token list, or None if the expression uses anything unsupported
    """
    text = strip_comments(expr)
    if _UNSUPPORTED_OPERATOR.search(text) or _CALL_LIKE.search(text):
        return None

    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        if text[pos:].strip() == "":
            break
        match = _TOKEN.match(text, pos)
        if match is None:
            return None
        pos = match.end()
        if match.group("number") is not None:
            literal = match.group("number")
            base = 16 if literal[:2] in ("0x", "0X") else 10
            tokens.append(("number", int(literal, base)))
        elif match.group("ident") is not None:
            tokens.append(("ident", match.group("ident")))
        elif match.group("op") is not None:
            tokens.append(("op", match.group("op")))
        else:
            tokens.append(("paren", match.group("paren")))
    return tokens


def to_postfix(tokens: list[Token], known: Mapping[str, int]) -> list[int | str] | None:
    """Shunting-yard conversion with identifiers substituted by their values."""
    output: list[int | str] = []
    ops: list[str] = []

    for kind, value in tokens:
        if kind == "number":
            output.append(value)
        elif kind == "ident":
            if value not in known:
                return None
            output.append(known[value])
        elif kind == "op":
            while ops and ops[-1] != "(" and _PRECEDENCE[ops[-1]] >= _PRECEDENCE[value]:
                output.append(ops.pop())
            ops.append(value)
        elif value == "(":
            ops.append("(")
        else:
            while ops and ops[-1] != "(":
                output.append(ops.pop())
            if not ops:
                return None
            ops.pop()

    while ops:
        op = ops.pop()
        if op == "(":
            return None
        output.append(op)
    return output


def evaluate(expr: str, known: Mapping[str, int]) -> int | None:
    """Evaluate an integer constant expression.

    Args:
        expr: Expression text, e.g. ``"1024 * X_MULTIPLIER"``
        known: Named constants visible at this point

    Returns:
        The value, or None if any part could not be resolved
    """
    tokens = tokenize(expr)
    if not tokens:
        return None
    postfix = to_postfix(tokens, known)
    if postfix is None:
        return None

    stack: list[int] = []
    for item in postfix:
        if isinstance(item, int):
            stack.append(item)
            continue
        if len(stack) < 2:
            return None
        b = stack.pop()
        a = stack.pop()
        if item == "+":
            stack.append(a + b)
        elif item == "-":
            stack.append(a - b)
        else:
            stack.append(a * b)

    if len(stack) != 1:
        return None
    return stack[0]


def build_constant_table(source: str, seed: Mapping[str, int] | None = None) -> dict[str, int]:
    """Collect named integer constants from header text.

    ``constexpr`` and ``#define`` definitions are visited in textual order
    and each one may only use names defined before it. Definitions that do
    not evaluate are skipped.

    Args:
        source: Header text
        seed: Constants known before the first definition

    Returns:
        Mapping of constant name to value
    """
    known: dict[str, int] = dict(seed or {})
    skipped = 0

    for match in _DEFINITION.finditer(strip_comments(source)):
        if match.group("cname") is not None:
            name, expr = match.group("cname"), match.group("cexpr")
        else:
            name, expr = match.group("dname"), match.group("dexpr")

        value = evaluate(expr.strip(), known)
        if value is None:
            skipped += 1
            continue
        known[name] = value

    logger.debug(f"Resolved {len(known)} named constants ({skipped} definitions skipped)")
    return known


def resolve_length(token: str, known: Mapping[str, int]) -> int | None:
    """Resolve an array-length token to a non-negative integer.

    Args:
        token: Literal digits, a constant name or a constant expression
        known: Named constants

    Returns:
        The length, or None if unresolved or negative
    """
    token = token.strip()
    value = int(token) if token.isascii() and token.isdigit() else evaluate(token, known)
    if value is None or value < 0:
        return None
    return value
