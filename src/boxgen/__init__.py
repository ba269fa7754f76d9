"""boxgen - entity discovery for ObjectBox bindings generated from Go structs."""

from boxgen.annotations import Annotation, parse_tag
from boxgen.binding import Binding
from boxgen.entity_builder import build_entity
from boxgen.errors import (
    AnnotationSyntaxError,
    BindingError,
    SemanticError,
    StructureError,
    TableOffsetError,
    UnknownTypeError,
)
from boxgen.flags import ObFlag
from boxgen.model import Entity, IdUid, Index, Property, Relation
from boxgen.parsing import GoParser
from boxgen.types import FbType, ObType

__all__ = [
    # Main API
    "Binding",
    "GoParser",
    "build_entity",
    "parse_tag",
    # Model
    "Entity",
    "Property",
    "Annotation",
    "Relation",
    "Index",
    "IdUid",
    "ObType",
    "FbType",
    "ObFlag",
    # Errors
    "BindingError",
    "StructureError",
    "AnnotationSyntaxError",
    "SemanticError",
    "UnknownTypeError",
    "TableOffsetError",
]

__version__ = "0.1.0"
