#!/usr/bin/env python3

"""Structural validation of decoded QBI documents.

Two passes:

1. JSON-schema shape check against ``schemas/qbi.schema.json``
2. size self-consistency: every integer ``inputSize``/``outputSize`` must
   equal the layout recomputed from the entry's TypeRef

Malformed documents never raise; every problem becomes an error string
prefixed with its JSON path.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from ....exceptions import LayoutError, QbiFormatError
from ....infrastructure.logging import get_logger
from ...models.qbi import type_ref_from_dict
from ..layout import calculate_layout

logger = get_logger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "schemas" / "qbi.schema.json"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one document."""

    ok: bool
    errors: list[str] = field(default_factory=list)


@lru_cache(maxsize=1)
def _get_validator() -> Draft202012Validator:
    with open(SCHEMA_PATH, encoding="utf-8") as f:
        schema = json.load(f)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def format_json_path(path: Iterable[Any]) -> str:
    """Render a jsonschema path deque as ``entries[0].input.fields[1]``."""
    text = ""
    for part in path:
        if isinstance(part, int):
            text += f"[{part}]"
        else:
            text += f".{part}" if text else str(part)
    return text or "document"


def _is_uint(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _check_sizes(entry: dict[str, Any], path: str) -> list[str]:
    errors: list[str] = []
    for side, size_key in (("input", "inputSize"), ("output", "outputSize")):
        declared = entry.get(size_key)
        if not _is_uint(declared):
            continue
        try:
            expected = calculate_layout(type_ref_from_dict(entry.get(side), f"{path}.{side}")).size
        except (QbiFormatError, LayoutError) as e:
            # Shape problems are already reported by the schema pass
            logger.debug(f"Skipping size check for {path}.{side}: {e}")
            continue
        if expected != declared:
            errors.append(f"{path}.{size_key} expected {expected}, got {declared}")
    return errors


def validate_qbi_document(value: Any) -> ValidationResult:
    """Validate a decoded QBI document.

    Args:
        value: Result of ``json.loads`` on a ``.qbi`` file

    Returns:
        ValidationResult; ``ok`` is True only when no errors were found
    """
    validator = _get_validator()

    schema_errors = sorted(
        validator.iter_errors(value), key=lambda e: format_json_path(e.absolute_path)
    )
    errors = [f"{format_json_path(e.absolute_path)}: {e.message}" for e in schema_errors]

    if isinstance(value, dict) and isinstance(value.get("entries"), list):
        for i, entry in enumerate(value["entries"]):
            if isinstance(entry, dict):
                errors.extend(_check_sizes(entry, f"entries[{i}]"))

    if errors:
        return ValidationResult(ok=False, errors=errors)
    return ValidationResult(ok=True)
