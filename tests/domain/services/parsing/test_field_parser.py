#!/usr/bin/env python3

"""Unit tests for struct body field parsing."""

import pytest

from qbi_header_compiler.domain.models.qbi import (
    BOOL,
    I64,
    M256I,
    U8,
    U16,
    U32,
    Array,
    Struct,
    StructField,
)
from qbi_header_compiler.domain.services.parsing import (
    TypeResolver,
    parse_struct_fields,
    split_statements,
)


@pytest.mark.unit
class TestSplitStatements:
    """Test suite for split_statements."""

    def test_semicolon_separated(self):
        assert split_statements(" uint8 a;\n  uint16   b ; ") == ["uint8 a", "uint16 b"]

    def test_inline_method_body_ends_statement(self):
        body = "uint32 a; bool check() const { return a > 0; } uint8 b;"
        assert split_statements(body) == [
            "uint32 a",
            "bool check() const { return a > 0; }",
            "uint8 b",
        ]

    def test_nested_definition_is_one_statement(self):
        body = "struct Inner { uint8 x; uint8 y; }; uint16 z;"
        assert split_statements(body) == ["struct Inner { uint8 x; uint8 y; }", "uint16 z"]

    def test_comments_and_preprocessor_lines_removed(self):
        body = "#if 1\nuint8 a; // trailing\n/* block; */ uint8 b;\n#endif\n"
        assert split_statements(body) == ["uint8 a", "uint8 b"]


@pytest.mark.unit
class TestParseStructFields:
    """Test suite for parse_struct_fields."""

    @pytest.fixture
    def warnings(self):
        return []

    @pytest.fixture
    def make_resolver(self, warnings):
        def factory(constants=None, source=""):
            return TypeResolver(source, constants or {}, {}, warnings)

        return factory

    def test_scalar_fields_in_order(self, make_resolver):
        struct = parse_struct_fields("uint8 a; sint64 b; bit c;", make_resolver())
        assert struct == Struct(
            (StructField("a", U8), StructField("b", I64), StructField("c", BOOL))
        )

    def test_comma_separated_names_share_type(self, make_resolver):
        struct = parse_struct_fields("id dst0, dst1 , dst2;", make_resolver())
        assert [f.name for f in struct.fields] == ["dst0", "dst1", "dst2"]
        assert all(f.type_ref == M256I for f in struct.fields)

    def test_array_with_constant_length(self, make_resolver):
        struct = parse_struct_fields("uint8 name[NAME_LEN];", make_resolver({"NAME_LEN": 32}))
        assert struct.fields == (StructField("name", Array(32, U8)),)

    def test_multi_dimensional_array(self, make_resolver):
        struct = parse_struct_fields("uint16 grid[2][3];", make_resolver())
        assert struct.fields == (StructField("grid", Array(2, Array(3, U16))),)

    def test_unresolved_array_length_drops_field(self, make_resolver, warnings):
        struct = parse_struct_fields("uint32 values[COUNT]; uint8 tail;", make_resolver())
        assert [f.name for f in struct.fields] == ["tail"]
        assert warnings == ["Could not resolve array length token: COUNT"]

    def test_non_layout_members_are_skipped(self, make_resolver, warnings):
        body = """
            static constexpr uint32 MAX = 4;
            typedef uint8 Small;
            using Big = uint64;
            enum Mode { ON, OFF };
            struct Nested { uint8 x; };
            void reset() { value = 0; }
            uint32 value;
        """
        struct = parse_struct_fields(body, make_resolver())
        assert struct.fields == (StructField("value", U32),)
        assert warnings == []

    def test_operator_overloads_are_skipped(self, make_resolver, warnings):
        body = """
            uint32 x;
            bool operator==(const Point& other) const { return x == other.x; }
            bool operator!=(const Point& other) const { return !(*this == other); }
            Point& operator=(const Point& other) { x = other.x; return *this; }
            uint8 operatorId = 1;
        """
        struct = parse_struct_fields(body, make_resolver())
        assert struct.fields == (StructField("x", U32), StructField("operatorId", U8))
        assert warnings == []

    def test_initializers_and_access_labels(self, make_resolver):
        body = "public: uint32 counter = 0; private: uint8 buf[4]{}; uint16 flags{1};"
        struct = parse_struct_fields(body, make_resolver())
        assert struct.fields == (
            StructField("counter", U32),
            StructField("buf", Array(4, U8)),
            StructField("flags", U16),
        )

    def test_qualified_types(self, make_resolver):
        struct = parse_struct_fields("const QPI::id owner; QPI::bit active;", make_resolver())
        assert struct.fields == (StructField("owner", M256I), StructField("active", BOOL))

    def test_unrecognized_statement_warns(self, make_resolver, warnings):
        struct = parse_struct_fields("uint32; uint8 ok;", make_resolver())
        assert [f.name for f in struct.fields] == ["ok"]
        assert warnings == ["Unrecognized field statement: uint32"]

    def test_empty_body(self, make_resolver):
        assert parse_struct_fields("\n   \n", make_resolver()) == Struct()
