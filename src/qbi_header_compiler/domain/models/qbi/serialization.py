#!/usr/bin/env python3

"""Conversion between QBI models and their JSON wire form.

Wire keys are camelCase. Optional values that are ``None`` are omitted, as
is an empty warnings list.
"""

import json
from typing import Any

from ....exceptions import QbiFormatError
from .document import DocumentMeta, QbiDocument
from .entry import CompiledEntry
from .type_ref import (
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

_PRIMITIVE_BY_NAME = {kind.value: kind for kind in PrimitiveKind}


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def type_ref_to_dict(type_ref: TypeRef) -> dict[str, Any]:
    """Encode a TypeRef as a JSON-compatible dict."""
    if isinstance(type_ref, NoData):
        return _drop_none({"type": "nodata", "expectedSize": type_ref.expected_size})
    if isinstance(type_ref, Primitive):
        return {"type": type_ref.kind.value}
    if isinstance(type_ref, Bytes):
        return {"type": "bytes", "length": type_ref.length}
    if isinstance(type_ref, OpaqueId):
        return {"type": "m256i"}
    if isinstance(type_ref, Array):
        return {
            "type": "array",
            "length": type_ref.length,
            "item": type_ref_to_dict(type_ref.item),
        }
    if isinstance(type_ref, Struct):
        return {
            "type": "struct",
            "fields": [
                {"name": f.name, "typeRef": type_ref_to_dict(f.type_ref)} for f in type_ref.fields
            ],
        }
    raise TypeError(f"Not a TypeRef: {type_ref!r}")


def _require_uint(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise QbiFormatError(f"{path} must be an integer >= 0")
    return value


def type_ref_from_dict(value: Any, path: str = "typeRef") -> TypeRef:
    """Decode a TypeRef from its wire form.

    Raises:
        QbiFormatError: If the value is not a well-formed TypeRef
    """
    if not isinstance(value, dict):
        raise QbiFormatError(f"{path} must be an object")
    kind = value.get("type")
    if not isinstance(kind, str):
        raise QbiFormatError(f"{path}.type must be a string")

    if kind == "nodata":
        expected = value.get("expectedSize")
        if expected is not None:
            expected = _require_uint(expected, f"{path}.expectedSize")
        return NoData(expected)
    if kind in _PRIMITIVE_BY_NAME:
        return Primitive(_PRIMITIVE_BY_NAME[kind])
    if kind == "m256i":
        return OpaqueId()
    if kind == "bytes":
        return Bytes(_require_uint(value.get("length"), f"{path}.length"))
    if kind == "array":
        length = _require_uint(value.get("length"), f"{path}.length")
        return Array(length, type_ref_from_dict(value.get("item"), f"{path}.item"))
    if kind == "struct":
        raw_fields = value.get("fields")
        if not isinstance(raw_fields, list):
            raise QbiFormatError(f"{path}.fields must be an array")
        fields = []
        for i, raw in enumerate(raw_fields):
            field_path = f"{path}.fields[{i}]"
            if not isinstance(raw, dict):
                raise QbiFormatError(f"{field_path} must be an object")
            name = raw.get("name")
            if not isinstance(name, str) or not name:
                raise QbiFormatError(f"{field_path}.name must be a non-empty string")
            type_ref = type_ref_from_dict(raw.get("typeRef"), f"{field_path}.typeRef")
            fields.append(StructField(name, type_ref))
        return Struct(tuple(fields))

    raise QbiFormatError(f"{path}.type is unknown: {kind}")


def entry_to_dict(entry: CompiledEntry) -> dict[str, Any]:
    return {
        "kind": entry.kind.value,
        "name": entry.name,
        "inputType": entry.input_type,
        "input": type_ref_to_dict(entry.input),
        "output": type_ref_to_dict(entry.output),
        "inputSize": entry.input_size,
        "outputSize": entry.output_size,
    }


def document_to_dict(document: QbiDocument) -> dict[str, Any]:
    """Encode a document in wire key order."""
    contract = document.contract
    result: dict[str, Any] = {
        "qbiVersion": document.qbi_version,
        "contract": _drop_none(
            {
                "name": contract.name,
                "contractIndex": contract.contract_index,
                "contractPublicKeyHex": contract.contract_public_key_hex,
                "contractId": contract.contract_id,
            }
        ),
        "entries": [entry_to_dict(entry) for entry in document.entries],
    }

    meta: DocumentMeta | None = document.meta
    if meta is not None:
        result["meta"] = _drop_none(
            {
                "source": meta.source,
                "sourceRepo": meta.source_repo,
                "sourceRevision": meta.source_revision,
                "generatedAt": meta.generated_at,
                "generator": meta.generator,
                "generatorVersion": meta.generator_version,
                "warnings": list(meta.warnings) if meta.warnings else None,
            }
        )
    return result


def document_to_json(document: QbiDocument) -> str:
    """Render a document as indented JSON with a trailing newline."""
    return json.dumps(document_to_dict(document), indent=2) + "\n"
