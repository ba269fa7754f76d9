"""Tests for rendering bindings and the command line front end."""

import json

import pytest

from boxgen.binding import Binding
from boxgen.cli import main
from boxgen.dump import binding_to_dict, format_binding
from boxgen.model import IdUid

SOURCE = """
package model

type User struct {
    Id    uint64
    Name  string `unique nameInDb:"user_name"`
    Boss  uint64 `link:"User"`
    Cache string `transient`
}
"""


@pytest.fixture
def binding():
    return Binding.from_source(SOURCE)


class TestBindingToDict:
    """Tests for the template model."""

    def test_structure(self, binding):
        data = binding_to_dict(binding)
        assert data["package"] == "model"
        assert data["uses_fb_utils"] is True
        assert len(data["entities"]) == 1

        entity = data["entities"][0]
        assert entity["name"] == "User"
        assert entity["id_property"] == "Id"
        assert entity["has_non_id_property"] is True
        assert entity["last_property_id"] is None
        assert [p["name"] for p in entity["properties"]] == ["Id", "Name", "Boss"]

    def test_property(self, binding):
        name = binding_to_dict(binding)["entities"][0]["properties"][1]
        assert name == {
            "name": "Name",
            "ob_name": "user_name",
            "go_type": "string",
            "ob_type": "String",
            "fb_type": "UOffsetT",
            "ob_flags": ["UNIQUE"],
            "annotations": {"unique": "", "nameindb": "user_name"},
            "relation": None,
            "indexed": True,
            "id": None,
            "uid": None,
            "fb_slot": None,
            "fbv_table_offset": None,
        }

    def test_relation(self, binding):
        boss = binding_to_dict(binding)["entities"][0]["properties"][2]
        assert boss["ob_type"] == "Relation"
        assert boss["relation"] == "User"
        assert boss["ob_flags"] == []
        assert boss["indexed"] is True

    def test_assigned_ids(self, binding):
        entity = binding.entities[0]
        for i, prop in enumerate(entity.properties, start=1):
            prop.id = i
        entity.last_property_id = IdUid(3, 1234)

        data = binding_to_dict(binding)["entities"][0]
        assert [p["fb_slot"] for p in data["properties"]] == [0, 1, 2]
        assert [p["fbv_table_offset"] for p in data["properties"]] == [4, 6, 8]
        assert data["last_property_id"] == "3:1234"

    def test_json_serializable(self, binding):
        json.dumps(binding_to_dict(binding))


class TestFormatBinding:
    """Tests for the text summary."""

    def test_format(self, binding):
        text = format_binding(binding)
        assert text.splitlines() == [
            "package model",
            "",
            "User (3 properties)",
            "  Id: uint64 -> Long/Uint64 [ID]",
            "  user_name: string -> String/UOffsetT [UNIQUE]",
            "  Boss: uint64 -> Relation/Uint64 -> User",
        ]


class TestCli:
    """Tests for the command line entry point."""

    def test_summary(self, tmp_path, capsys):
        source = tmp_path / "model.go"
        source.write_text(SOURCE)
        assert main([str(source)]) == 0
        assert "User (3 properties)" in capsys.readouterr().out

    def test_json(self, tmp_path, capsys):
        source = tmp_path / "model.go"
        source.write_text(SOURCE)
        assert main([str(source), "--json", "--indent", "0"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["entities"][0]["name"] == "User"

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.go")]) == 1
        assert "Source file not found" in capsys.readouterr().err

    def test_discovery_error(self, tmp_path, capsys):
        source = tmp_path / "model.go"
        source.write_text("package a\n\ntype A struct {\n    Name string\n}\n")
        assert main([str(source)]) == 1
        assert "id field is missing on entity A" in capsys.readouterr().err

    def test_syntax_error(self, tmp_path, capsys):
        source = tmp_path / "model.go"
        source.write_text("package a\ntype {\n")
        assert main([str(source)]) == 1
        assert "Syntax error" in capsys.readouterr().err
