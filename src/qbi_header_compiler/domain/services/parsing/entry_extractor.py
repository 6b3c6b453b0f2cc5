#!/usr/bin/env python3

"""Find entry points registered with REGISTER_USER_FUNCTION / REGISTER_USER_PROCEDURE."""

import re

from ...models.qbi import EntryKind, RegisteredEntry

_REGISTRATION_PATTERNS = (
    (
        EntryKind.FUNCTION,
        re.compile(r"REGISTER_USER_FUNCTION\s*\(\s*([A-Za-z_]\w*)\s*,\s*(\d+)\s*\)\s*;"),
    ),
    (
        EntryKind.PROCEDURE,
        re.compile(r"REGISTER_USER_PROCEDURE\s*\(\s*([A-Za-z_]\w*)\s*,\s*(\d+)\s*\)\s*;"),
    ),
)


def extract_registered_entries(source: str) -> list[RegisteredEntry]:
    """Scan header text for entry registrations.

    All functions come first, then all procedures, each in textual order.
    Duplicate registrations are kept.

    Args:
        source: Header text

    Returns:
        Registered entries
    """
    entries: list[RegisteredEntry] = []
    for kind, pattern in _REGISTRATION_PATTERNS:
        for match in pattern.finditer(source):
            entries.append(RegisteredEntry(kind, match.group(1), int(match.group(2))))
    return entries
