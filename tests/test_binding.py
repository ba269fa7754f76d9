"""Tests for entity discovery over whole source files."""

import pytest

from boxgen.binding import Binding
from boxgen.errors import BindingError, SemanticError, StructureError, UnknownTypeError
from boxgen.flags import ObFlag
from boxgen.parsing import GoParser
from boxgen.syntax import (
    Field,
    FieldList,
    File,
    GenDecl,
    Ident,
    StructType,
    TypeSpec,
)
from boxgen.types import FbType, ObType

MODEL = """
package model

import "time"

// User is a stored entity.
type User struct {
    Id   uint64
    Name string `unique`
}

type Order struct {
    Id       uint64
    Customer int64 `link:"User"`
    Amount   float64
    Created  int64 `date`
}

type Status int

type (
    Tag struct {
        Id    uint64
        Label string `index:"hash"`
    }
)
"""


def _struct(*fields: tuple[str, str]) -> StructType:
    return StructType(
        FieldList([Field([Ident(name)], Ident(go_type)) for name, go_type in fields])
    )


class TestDiscovery:
    """Tests for walking a parsed file."""

    def test_entities_in_declaration_order(self):
        binding = Binding.from_source(MODEL)
        assert binding.package == "model"
        assert [e.name for e in binding.entities] == ["User", "Order", "Tag"]
        assert binding.error is None

    def test_user_scenario(self):
        user = Binding.from_source(MODEL).get_entity("User")
        assert user.id_property is user.get_property("Id")
        assert user.id_property.ob_flags == [ObFlag.ID]

        name = user.get_property("Name")
        assert name.ob_flags == [ObFlag.UNIQUE]
        assert name.index is not None

    def test_order_scenario(self):
        order = Binding.from_source(MODEL).get_entity("Order")
        customer = order.get_property("Customer")
        assert customer.ob_type is ObType.RELATION
        assert customer.fb_type is FbType.INT64
        assert customer.relation.target == "User"
        assert customer.index is not None
        assert customer.ob_flags == []
        assert order.get_property("Created").ob_type is ObType.DATE

    def test_grouped_declaration(self):
        tag = Binding.from_source(MODEL).get_entity("Tag")
        assert tag.get_property("Label").ob_flags == [ObFlag.INDEXED, ObFlag.INDEX_HASH]

    def test_methods_and_constants_are_skipped(self):
        binding = Binding.from_source("""
package model

const limit = 10

var registry = map[string]int{}

type User struct {
    Id   uint64
    Name string
}

func (u *User) Label() string {
    return u.Name
}

type Order struct {
    Id uint64
}
""")
        assert [e.name for e in binding.entities] == ["User", "Order"]
        assert binding.error is None

    def test_non_struct_types_are_ignored(self):
        binding = Binding.from_source("package a\n\ntype Status int\ntype Names []string\n")
        assert binding.entities == []

    def test_alias_to_struct(self):
        binding = Binding.from_source("package a\n\ntype A = struct {\n Id uint64\n}\n")
        assert [e.name for e in binding.entities] == ["A"]

    def test_nested_struct_field_is_not_an_entity(self):
        with pytest.raises(UnknownTypeError, match="unknown type struct"):
            Binding.from_source("""
package a

type Outer struct {
    Id    uint64
    Inner struct {
        Id uint64
    }
}
""")

    def test_syntax_error(self):
        with pytest.raises(SyntaxError):
            Binding.from_source("package a\ntype A struct {\n")

    def test_load_hand_built_tree(self):
        tree = File(
            name=Ident("pkg"),
            decls=[GenDecl("type", [TypeSpec(Ident("Item"), _struct(("Id", "uint64")))])],
        )
        binding = Binding()
        binding.load(tree)
        assert binding.package == "pkg"
        assert binding.entities[0].name == "Item"


class TestFirstErrorWins:
    """Tests for the sticky discovery error."""

    def test_stops_at_first_error(self):
        binding = Binding()
        source = """
package a

type Good struct {
    Id uint64
}

type Bad struct {
    Id   uint64
    When string `date`
}

type AlsoBad struct {
    Name string
}
"""
        with pytest.raises(SemanticError, match="entity Bad") as exc_info:
            binding.load(GoParser().parse(source))

        assert binding.error is exc_info.value
        # entities found before the error are kept
        assert [e.name for e in binding.entities] == ["Good"]

    def test_unnamed_struct(self):
        tree = File(name=Ident("a"), decls=[GenDecl("type", [_struct(("Id", "uint64"))])])
        binding = Binding()
        with pytest.raises(StructureError, match="encountered a struct without a name"):
            binding.load(tree)
        assert binding.entities == []

    def test_name_is_consumed_by_struct(self):
        struct = _struct(("Id", "uint64"))
        tree = File(
            name=Ident("a"),
            decls=[GenDecl("type", [TypeSpec(Ident("A"), struct), struct])],
        )
        binding = Binding()
        with pytest.raises(StructureError):
            binding.load(tree)
        assert [e.name for e in binding.entities] == ["A"]

    def test_nothing_visited_after_error(self):
        visited = []
        binding = Binding()
        original = binding._entity_loader

        def spy(node):
            result = original(node)
            visited.append((type(node).__name__, result))
            return result

        binding._entity_loader = spy
        tree = File(
            name=Ident("a"),
            decls=[
                GenDecl("type", [TypeSpec(Ident("A"), _struct(("Name", "string")))]),
                GenDecl("type", [TypeSpec(Ident("B"), _struct(("Id", "uint64")))]),
            ],
        )
        with pytest.raises(BindingError):
            binding.load(tree)
        assert visited[-1] == ("GenDecl", False)
        assert binding.entities == []


class TestQueries:
    """Tests for queries used by the code templates."""

    def test_uses_fb_utils(self):
        assert Binding.from_source(MODEL).uses_fb_utils() is True

    def test_uses_fb_utils_byte_vector(self):
        binding = Binding.from_source("package a\ntype A struct {\n Id uint64\n Data []byte\n}\n")
        assert binding.uses_fb_utils() is True

    def test_no_fb_utils(self):
        binding = Binding.from_source("package a\ntype A struct {\n Id uint64\n N int32\n}\n")
        assert binding.uses_fb_utils() is False

    def test_no_fb_utils_for_empty_binding(self):
        assert Binding().uses_fb_utils() is False

    def test_has_non_id_property(self):
        binding = Binding.from_source(MODEL)
        assert binding.get_entity("User").has_non_id_property() is True

    def test_only_id_property(self):
        binding = Binding.from_source("package a\ntype A struct {\n Id uint64\n}\n")
        assert binding.entities[0].has_non_id_property() is False

    def test_get_entity_missing(self):
        assert Binding.from_source(MODEL).get_entity("Nope") is None
