"""Builds a validated entity from a struct declaration."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from boxgen.annotations import parse_tag
from boxgen.errors import BindingError, SemanticError, StructureError
from boxgen.flags import ObFlag, derive_flags
from boxgen.model import Entity, Property, Relation
from boxgen.syntax import Field, StructType, expr_string
from boxgen.types import resolve_type

logger = logging.getLogger(__name__)

# Go type a field must have to be picked as the ID by its name alone
IMPLICIT_ID_TYPE = "uint64"


@contextmanager
def _property_context(entity: Entity, prop: Property) -> Iterator[None]:
    """Attach entity and property names to errors raised for a property."""
    try:
        yield
    except BindingError as exc:
        if not exc.has_context:
            exc.attach(entity.name, prop.name)
        raise


def build_entity(name: str, struct: StructType) -> Entity:
    """Create an entity from the struct declared as ``name``.

    Fields are processed in declaration order. Transient fields are dropped
    before any other check. When no field is annotated with ``id``, a
    ``uint64`` field named ``id`` (in any case) becomes the ID property.

    Raises:
        BindingError: On the first invalid field or entity-level problem.
    """
    entity = Entity(name=name)
    ob_names: set[str] = set()

    for field in struct.fields.fields:
        if len(field.names) != 1:
            raise StructureError(
                f"struct {name} has a field with an invalid number of names, "
                f"one expected, got {len(field.names)}",
                entity=name,
            )

        prop = Property(name=field.names[0].name)
        with _property_context(entity, prop):
            if field.tag is not None:
                prop.annotations = parse_tag(field.tag.value)

            # transient fields are not stored, the binding ignores them
            if "transient" in prop.annotations:
                logger.debug("Skipping transient field %s.%s", name, prop.name)
                continue

            _set_type(prop, field)
            derive_flags(prop)

            if "id" in prop.annotations:
                if entity.id_property is not None:
                    raise SemanticError(
                        f"struct {name} has multiple ID properties - "
                        f"{entity.id_property.name} and {prop.name}",
                        entity=name,
                    )
                entity.id_property = prop

            prop.ob_name = _ob_name(prop)

            # the database lowercases names internally
            folded = prop.ob_name.lower()
            if folded in ob_names:
                raise SemanticError(
                    "duplicate name (note that property names are case insensitive)"
                )
            ob_names.add(folded)

        entity.properties.append(prop)

    if not entity.properties:
        raise StructureError(
            f"there are no properties in the entity {name}", entity=name
        )

    if entity.id_property is None:
        _infer_id_property(entity)

    logger.debug(
        "Discovered entity %s with %d properties", name, len(entity.properties)
    )
    return entity


def _set_type(prop: Property, field: Field) -> None:
    prop.go_type = expr_string(field.type)
    prop.ob_type, prop.fb_type, target = resolve_type(prop.go_type, prop.annotations)
    if target is not None:
        prop.relation = Relation(target=target)


def _ob_name(prop: Property) -> str:
    annotation = prop.annotations.get("nameindb")
    if annotation is None:
        return prop.name
    if not annotation.value:
        raise SemanticError("nameInDb annotation value must not be empty")
    return annotation.value


def _infer_id_property(entity: Entity) -> None:
    candidates = [
        prop
        for prop in entity.properties
        if prop.name.lower() == "id" and prop.go_type.lower() == IMPLICIT_ID_TYPE
    ]

    if not candidates:
        raise SemanticError(
            f"id field is missing on entity {entity.name} - either annotate a field "
            f"with `id` tag or use a uint64 field named 'Id/id/ID'",
            entity=entity.name,
        )
    if len(candidates) > 1:
        names = ", ".join(prop.name for prop in candidates)
        raise SemanticError(
            f"id field is ambiguous on entity {entity.name} - multiple candidates "
            f"({names}), annotate one of them with `id` tag",
            entity=entity.name,
        )

    prop = candidates[0]
    prop.add_ob_flag(ObFlag.ID)
    entity.id_property = prop
    logger.debug("Using %s.%s as the ID property", entity.name, prop.name)
