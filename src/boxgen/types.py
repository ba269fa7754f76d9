"""Storage type system and the resolver from Go field types.

Every supported field type maps to two representations: the logical type
the database engine stores (``ObType``) and the physical encoding used in
the FlatBuffers record (``FbType``).
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping

from boxgen.annotations import Annotation
from boxgen.errors import SemanticError, UnknownTypeError


class ObType(Enum):
    """Logical property types of the storage engine."""

    BOOL = "Bool"
    BYTE = "Byte"
    SHORT = "Short"
    INT = "Int"
    LONG = "Long"
    FLOAT = "Float"
    DOUBLE = "Double"
    STRING = "String"
    DATE = "Date"
    RELATION = "Relation"
    BYTE_VECTOR = "ByteVector"

    @property
    def uses_offset(self) -> bool:
        """Return whether values are stored out of line, behind a UOffsetT."""
        return self in (ObType.STRING, ObType.BYTE_VECTOR)


class FbType(Enum):
    """Physical FlatBuffers field encodings."""

    BOOL = "Bool"
    BYTE = "Byte"
    INT8 = "Int8"
    UINT8 = "Uint8"
    INT16 = "Int16"
    UINT16 = "Uint16"
    INT32 = "Int32"
    UINT32 = "Uint32"
    INT64 = "Int64"
    UINT64 = "Uint64"
    FLOAT32 = "Float32"
    FLOAT64 = "Float64"
    UOFFSETT = "UOffsetT"


# Exact Go type text -> (logical, physical) type
GO_TYPES: dict[str, tuple[ObType, FbType]] = {
    "string": (ObType.STRING, FbType.UOFFSETT),
    "int": (ObType.LONG, FbType.INT64),
    "int64": (ObType.LONG, FbType.INT64),
    "uint": (ObType.LONG, FbType.UINT64),
    "uint64": (ObType.LONG, FbType.UINT64),
    "int32": (ObType.INT, FbType.INT32),
    "rune": (ObType.INT, FbType.INT32),
    "uint32": (ObType.INT, FbType.UINT32),
    "int16": (ObType.SHORT, FbType.INT16),
    "uint16": (ObType.SHORT, FbType.UINT16),
    "int8": (ObType.BYTE, FbType.INT8),
    "uint8": (ObType.BYTE, FbType.UINT8),
    "byte": (ObType.BYTE, FbType.BYTE),
    "[]byte": (ObType.BYTE_VECTOR, FbType.UOFFSETT),
    "float64": (ObType.DOUBLE, FbType.FLOAT64),
    "float32": (ObType.FLOAT, FbType.FLOAT32),
    "bool": (ObType.BOOL, FbType.BOOL),
}


def base_types(go_type: str) -> tuple[ObType, FbType]:
    """Look up the storage types for a Go type.

    Raises:
        UnknownTypeError: If the type has no mapping.
    """
    try:
        return GO_TYPES[go_type]
    except KeyError:
        raise UnknownTypeError(f"unknown type {go_type}") from None


def resolve_type(
    go_type: str, annotations: Mapping[str, Annotation]
) -> tuple[ObType, FbType, str | None]:
    """Resolve a field's storage types, applying ``date`` and ``link``.

    Each refinement requires the logical type to still be ``Long``, so a
    field cannot be a date and a relation at the same time.

    Returns:
        The logical type, the physical type and the relation target (None
        unless the field is annotated with ``link``).
    """
    ob_type, fb_type = base_types(go_type)

    if "date" in annotations:
        if ob_type is not ObType.LONG:
            raise SemanticError(
                f"invalid underlying type ({ob_type.value}) for date field"
            )
        ob_type = ObType.DATE

    target = None
    if "link" in annotations:
        if ob_type is not ObType.LONG:
            raise SemanticError(
                f"invalid underlying type ({ob_type.value}) for relation field"
            )
        ob_type = ObType.RELATION
        target = annotations["link"].value

    return ob_type, fb_type, target
