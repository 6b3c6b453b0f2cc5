#!/usr/bin/env python3

"""Parse ``contract_def.h`` into contract index stanzas.

A stanza looks like::

    #define QUTIL_CONTRACT_INDEX 4
    #define CONTRACT_INDEX QUTIL_CONTRACT_INDEX
    #define CONTRACT_STATE_TYPE QUTIL
    #include "contracts/QUtil.h"
"""

import re
from dataclasses import dataclass

_INDEX_DEFINE = re.compile(r"^\s*#define\s+([A-Z0-9_]+)_CONTRACT_INDEX\s+(\d+)\s*$")
_STATE_TYPE_DEFINE = re.compile(r"^\s*#define\s+CONTRACT_STATE_TYPE\s+([A-Za-z_]\w*)\s*$")
_CONTRACT_INCLUDE = re.compile(r'^\s*#include\s+"contracts/([^"]+)"\s*$')


@dataclass(frozen=True)
class ContractDefEntry:
    """One contract registered in contract_def.h."""

    name: str
    contract_index: int
    header: str


def parse_contract_def(source: str) -> list[ContractDefEntry]:
    """Extract ``(state type, index, header)`` stanzas.

    A new ``*_CONTRACT_INDEX`` define starts a stanza; incomplete stanzas
    are discarded.

    Args:
        source: contract_def.h text

    Returns:
        Complete stanzas in file order
    """
    entries: list[ContractDefEntry] = []
    index: int | None = None
    state_type: str | None = None
    header: str | None = None

    def flush() -> None:
        if index is not None and state_type is not None and header is not None:
            entries.append(ContractDefEntry(state_type, index, header))

    for line in source.splitlines():
        match = _INDEX_DEFINE.match(line)
        if match:
            flush()
            index, state_type, header = int(match.group(2)), None, None
            continue

        match = _STATE_TYPE_DEFINE.match(line)
        if match:
            state_type = match.group(1)
            continue

        match = _CONTRACT_INCLUDE.match(line)
        if match:
            header = match.group(1)

    flush()
    return entries


def contract_indices_by_header(entries: list[ContractDefEntry]) -> dict[str, int]:
    """Map header base names (``QUtil.h``) to contract indices."""
    return {entry.header.rsplit("/", 1)[-1]: entry.contract_index for entry in entries}
