"""Errors raised while discovering entities in a source unit."""

from __future__ import annotations


class BindingError(ValueError):
    """Base class for every entity discovery error.

    ``entity`` and ``prop`` name the declaration the error belongs to. They
    are attached by the entity builder while the error propagates, so the
    leaf components (annotation parser, type resolver, flag deriver) can
    raise without knowing where they were called from.
    """

    def __init__(
        self, message: str, *, entity: str | None = None, prop: str | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.entity = entity
        self.prop = prop

    @property
    def has_context(self) -> bool:
        return self.entity is not None

    def attach(self, entity: str, prop: str | None = None) -> None:
        """Record the entity (and property) the error was raised for."""
        self.entity = entity
        self.prop = prop

    def __str__(self) -> str:
        if self.prop is not None:
            return f"{self.message} on property {self.prop}, entity {self.entity}"
        return self.message


class StructureError(BindingError):
    """Unnamed struct, multi-name field group or an entity without properties."""


class AnnotationSyntaxError(BindingError):
    """Malformed or duplicate annotation in a field tag."""


class SemanticError(BindingError):
    """Well-formed input that violates an entity or property rule."""


class UnknownTypeError(SemanticError):
    """Field type has no storage mapping."""


class TableOffsetError(BindingError):
    """A property id does not fit the 16-bit vtable offset."""
