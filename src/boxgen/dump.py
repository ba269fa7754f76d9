"""Rendering of a discovered binding for templates and for the console."""

from __future__ import annotations

from typing import Any

from boxgen.binding import Binding
from boxgen.model import Entity, Property


def property_to_dict(prop: Property) -> dict[str, Any]:
    """Convert a property to a JSON-compatible dict."""
    has_id = bool(prop.id)
    return {
        "name": prop.name,
        "ob_name": prop.ob_name,
        "go_type": prop.go_type,
        "ob_type": prop.ob_type.value if prop.ob_type else None,
        "fb_type": prop.fb_type.value if prop.fb_type else None,
        "ob_flags": [flag.value for flag in prop.ob_flags],
        "annotations": {name: a.value for name, a in prop.annotations.items()},
        "relation": prop.relation.target if prop.relation else None,
        "indexed": prop.index is not None,
        "id": prop.id,
        "uid": prop.uid,
        "fb_slot": prop.fb_slot() if has_id else None,
        "fbv_table_offset": prop.fbv_table_offset() if has_id else None,
    }


def entity_to_dict(entity: Entity) -> dict[str, Any]:
    """Convert an entity and its properties to a JSON-compatible dict."""
    return {
        "name": entity.name,
        "id": entity.id,
        "uid": entity.uid,
        "id_property": entity.id_property.name if entity.id_property else None,
        "last_property_id": (
            str(entity.last_property_id) if entity.last_property_id else None
        ),
        "has_non_id_property": entity.has_non_id_property(),
        "properties": [property_to_dict(p) for p in entity.properties],
    }


def binding_to_dict(binding: Binding) -> dict[str, Any]:
    """Convert a binding to the dict handed to the code templates."""
    return {
        "package": binding.package,
        "uses_fb_utils": binding.uses_fb_utils(),
        "entities": [entity_to_dict(e) for e in binding.entities],
    }


def format_binding(binding: Binding) -> str:
    """Format a binding as a readable summary, one line per property."""
    lines = [f"package {binding.package}"]
    for entity in binding.entities:
        lines.append("")
        lines.append(f"{entity.name} ({len(entity.properties)} properties)")
        for prop in entity.properties:
            ob_type = prop.ob_type.value if prop.ob_type else "?"
            fb_type = prop.fb_type.value if prop.fb_type else "?"
            line = f"  {prop.ob_name}: {prop.go_type} -> {ob_type}/{fb_type}"
            if prop.ob_flags:
                line += " [" + ", ".join(f.value for f in prop.ob_flags) + "]"
            if prop.relation is not None:
                line += f" -> {prop.relation.target}"
            lines.append(line)
    return "\n".join(lines)
