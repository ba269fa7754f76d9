"""Tests for syntax tree helpers."""

import pytest

from boxgen.syntax import (
    ArrayType,
    BasicLit,
    Field,
    FieldList,
    File,
    GenDecl,
    Ident,
    MapType,
    ParenExpr,
    SelectorExpr,
    StarExpr,
    StructType,
    TypeSpec,
    expr_string,
    walk,
)


def _tree() -> File:
    struct = StructType(FieldList([Field([Ident("Id")], Ident("uint64"))]))
    return File(
        name=Ident("model"),
        decls=[GenDecl("type", [TypeSpec(Ident("User"), struct)])],
    )


class TestExprString:
    """Tests for rendering type expressions."""

    @pytest.mark.parametrize(
        "expr, expected",
        [
            (Ident("uint64"), "uint64"),
            (ArrayType(Ident("byte")), "[]byte"),
            (ArrayType(Ident("byte"), BasicLit("INT", "16")), "[16]byte"),
            (StarExpr(Ident("User")), "*User"),
            (SelectorExpr(Ident("time"), Ident("Time")), "time.Time"),
            (MapType(Ident("string"), ArrayType(Ident("int"))), "map[string][]int"),
            (ParenExpr(Ident("int")), "(int)"),
            (StructType(), "struct{}"),
        ],
    )
    def test_render(self, expr, expected):
        assert expr_string(expr) == expected

    def test_not_a_type(self):
        with pytest.raises(TypeError):
            expr_string(Field([], Ident("int")))


class TestWalk:
    """Tests for depth-first traversal."""

    def test_visits_in_source_order(self):
        seen = []

        def visit(node):
            seen.append(type(node).__name__)
            return True

        walk(_tree(), visit)
        assert seen == [
            "File", "Ident", "GenDecl", "TypeSpec", "Ident", "StructType",
            "FieldList", "Field", "Ident", "Ident",
        ]

    def test_false_prunes_children(self):
        seen = []

        def visit(node):
            seen.append(type(node).__name__)
            return not isinstance(node, TypeSpec)

        walk(_tree(), visit)
        assert "StructType" not in seen
        assert seen[-1] == "TypeSpec"

    def test_children_skip_none(self):
        field = Field([Ident("A")], Ident("int"), tag=None)
        assert list(field.children()) == [Ident("A"), Ident("int")]
