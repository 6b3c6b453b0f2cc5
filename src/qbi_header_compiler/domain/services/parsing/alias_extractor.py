#!/usr/bin/env python3

"""Collect ``typedef`` and ``using`` type aliases from header text."""

import re

from ....infrastructure.logging import get_logger

logger = get_logger(__name__)

_TYPEDEF = re.compile(r"^\s*typedef\s+([^;]+?)\s+([A-Za-z_]\w*)\s*;\s*$", re.MULTILINE)
_USING = re.compile(r"^\s*using\s+([A-Za-z_]\w*)\s*=\s*([^;]+?)\s*;\s*$", re.MULTILINE)


def extract_type_aliases(source: str) -> dict[str, str]:
    """Map alias names to their raw target type expressions.

    Targets are kept unresolved; the type resolver expands them on demand.
    When a name is aliased more than once, ``using`` declarations win over
    ``typedef`` and later declarations over earlier ones.

    Args:
        source: Header text

    Returns:
        Mapping of alias name to target type text
    """
    aliases: dict[str, str] = {}

    for match in _TYPEDEF.finditer(source):
        aliases[match.group(2)] = match.group(1).strip()

    for match in _USING.finditer(source):
        aliases[match.group(1)] = match.group(2).strip()

    logger.debug(f"Collected {len(aliases)} type aliases")
    return aliases
