#!/usr/bin/env python3

"""Unit tests for QBI wire encoding."""

import json

import pytest

from qbi_header_compiler.domain.models.qbi import (
    BOOL,
    M256I,
    U8,
    U16,
    Array,
    Bytes,
    CompiledEntry,
    ContractInfo,
    DocumentMeta,
    EntryKind,
    NoData,
    QbiDocument,
    Struct,
    StructField,
    document_to_dict,
    document_to_json,
    type_ref_from_dict,
    type_ref_to_dict,
)
from qbi_header_compiler.exceptions import QbiFormatError


@pytest.fixture
def document():
    entry = CompiledEntry(
        kind=EntryKind.PROCEDURE,
        name="Transfer",
        input_type=2,
        input=Struct((StructField("to", M256I), StructField("amounts", Array(2, U16)))),
        output=NoData(expected_size=1),
        input_size=40,
        output_size=1,
    )
    return QbiDocument(
        contract=ContractInfo(name="QX", contract_index=1),
        entries=(entry,),
        meta=DocumentMeta(source="contracts/Qx.h", generator="qbi-header-compiler"),
    )


@pytest.mark.unit
class TestTypeRefEncoding:
    """Test suite for TypeRef wire encoding."""

    def test_encodings(self):
        assert type_ref_to_dict(U8) == {"type": "u8"}
        assert type_ref_to_dict(BOOL) == {"type": "bool"}
        assert type_ref_to_dict(M256I) == {"type": "m256i"}
        assert type_ref_to_dict(Bytes(3)) == {"type": "bytes", "length": 3}
        assert type_ref_to_dict(NoData()) == {"type": "nodata"}
        assert type_ref_to_dict(NoData(4)) == {"type": "nodata", "expectedSize": 4}
        assert type_ref_to_dict(Array(2, U8)) == {
            "type": "array",
            "length": 2,
            "item": {"type": "u8"},
        }
        assert type_ref_to_dict(Struct((StructField("a", U8),))) == {
            "type": "struct",
            "fields": [{"name": "a", "typeRef": {"type": "u8"}}],
        }

    def test_decode_nested(self):
        value = {
            "type": "struct",
            "fields": [
                {"name": "ids", "typeRef": {"type": "array", "length": 3, "item": {"type": "m256i"}}},
                {"name": "none", "typeRef": {"type": "nodata"}},
            ],
        }
        assert type_ref_from_dict(value) == Struct(
            (StructField("ids", Array(3, M256I)), StructField("none", NoData()))
        )

    @pytest.mark.parametrize(
        "value, message",
        [
            ([], "typeRef must be an object"),
            ({}, "typeRef.type must be a string"),
            ({"type": "f32"}, "typeRef.type is unknown: f32"),
            ({"type": "bytes", "length": -1}, "typeRef.length must be an integer >= 0"),
            ({"type": "bytes", "length": True}, "typeRef.length must be an integer >= 0"),
            ({"type": "array", "length": 1, "item": 5}, "typeRef.item must be an object"),
            ({"type": "struct"}, "typeRef.fields must be an array"),
            (
                {"type": "struct", "fields": [{"name": "", "typeRef": {"type": "u8"}}]},
                "typeRef.fields[0].name must be a non-empty string",
            ),
        ],
    )
    def test_decode_errors(self, value, message):
        with pytest.raises(QbiFormatError, match=message.replace("[", r"\[").replace("]", r"\]")):
            type_ref_from_dict(value)


@pytest.mark.unit
class TestDocumentEncoding:
    """Test suite for document encoding."""

    def test_key_order_and_omitted_values(self, document):
        encoded = document_to_dict(document)
        assert list(encoded) == ["qbiVersion", "contract", "entries", "meta"]
        assert encoded["contract"] == {"name": "QX", "contractIndex": 1}
        assert encoded["meta"] == {
            "source": "contracts/Qx.h",
            "generator": "qbi-header-compiler",
        }
        assert list(encoded["entries"][0]) == [
            "kind",
            "name",
            "inputType",
            "input",
            "output",
            "inputSize",
            "outputSize",
        ]

    def test_warnings_are_listed_when_present(self, document):
        with_warnings = QbiDocument(
            contract=document.contract,
            entries=document.entries,
            meta=DocumentMeta(warnings=("Unknown type: X (treated as bytes[0])",)),
        )
        assert document_to_dict(with_warnings)["meta"] == {
            "warnings": ["Unknown type: X (treated as bytes[0])"]
        }

    def test_document_without_meta(self, document):
        bare = QbiDocument(contract=document.contract, entries=())
        assert "meta" not in document_to_dict(bare)

    def test_json_text(self, document):
        text = document_to_json(document)
        assert text.endswith("}\n")
        assert text.startswith('{\n  "qbiVersion": "0.1",')
        assert json.loads(text) == document_to_dict(document)
