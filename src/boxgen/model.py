"""Entity model produced by discovery and read by the code templates."""

from __future__ import annotations

from dataclasses import dataclass, field

from boxgen.annotations import Annotation
from boxgen.errors import SemanticError, TableOffsetError
from boxgen.flags import ObFlag
from boxgen.types import FbType, ObType

# FlatBuffers vtable: two uint16 header entries, then one uint16 per field
VTABLE_HEADER_SIZE = 4
VTABLE_ENTRY_SIZE = 2
MAX_VTABLE_OFFSET = 0xFFFF


@dataclass(frozen=True)
class IdUid:
    """Persisted id/uid pair, written as ``"<id>:<uid>"``."""

    id: int
    uid: int

    def __str__(self) -> str:
        return f"{self.id}:{self.uid}"

    @classmethod
    def parse(cls, text: str) -> IdUid:
        id_text, sep, uid_text = text.partition(":")
        if not sep or not id_text.isdecimal() or not uid_text.isdecimal():
            raise ValueError(f"Invalid id/uid value: {text!r}, expecting 'id:uid'")
        return cls(int(id_text), int(uid_text))


@dataclass
class Relation:
    """Link to another entity. The target is only a name at this stage."""

    target: str


@dataclass
class Index:
    id: int | None = None
    uid: int | None = None


@dataclass(eq=False)
class Property:
    """A stored field of an entity.

    ``id`` and ``uid`` are assigned by the model registry after discovery.
    """

    name: str
    ob_name: str = ""
    annotations: dict[str, Annotation] = field(default_factory=dict)
    go_type: str = ""
    ob_type: ObType | None = None
    fb_type: FbType | None = None
    ob_flags: list[ObFlag] = field(default_factory=list)
    relation: Relation | None = None
    index: Index | None = None
    id: int | None = None
    uid: int | None = None

    def add_ob_flag(self, flag: ObFlag) -> None:
        self.ob_flags.append(flag)

    def set_index(self) -> None:
        """Allocate the property's index.

        Raises:
            SemanticError: If the property already has one.
        """
        if self.index is not None:
            raise SemanticError("index is already defined")
        self.index = Index()

    def fb_slot(self) -> int:
        """Return the FlatBuffers field slot, derived from the property id."""
        if not self.id:
            raise TableOffsetError(
                f"can't calculate FlatBuffers slot: property {self.name} has no ID assigned"
            )
        return self.id - 1

    def fbv_table_offset(self) -> int:
        """Return the offset of this property's entry in the FlatBuffers vtable.

        Raises:
            TableOffsetError: If the offset does not fit in a uint16.
        """
        offset = VTABLE_HEADER_SIZE + VTABLE_ENTRY_SIZE * self.fb_slot()
        if offset > MAX_VTABLE_OFFSET:
            raise TableOffsetError(
                f"can't calculate FlatBuffers VTableOffset: property {self.name} "
                f"ID {self.id} is too large"
            )
        return offset


@dataclass(eq=False)
class Entity:
    """A struct discovered in the source, with its stored properties."""

    name: str
    properties: list[Property] = field(default_factory=list)
    id_property: Property | None = None
    id: int | None = None
    uid: int | None = None
    last_property_id: IdUid | None = None

    def get_property(self, name: str) -> Property | None:
        """Get a property by its declared name."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def has_non_id_property(self) -> bool:
        """Return whether any property other than the ID property exists."""
        return any(prop is not self.id_property for prop in self.properties)
