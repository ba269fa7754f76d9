"""Storage flags and the rules deriving them from annotations."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from boxgen.errors import SemanticError

if TYPE_CHECKING:
    from boxgen.model import Property


class ObFlag(Enum):
    """Property flags understood by the storage engine."""

    ID = "ID"
    INDEXED = "INDEXED"
    UNIQUE = "UNIQUE"
    # TODO confirm the C API accepts INDEX_VALUE; it is emitted as requested
    INDEX_VALUE = "INDEX_VALUE"
    INDEX_HASH = "INDEX_HASH"
    INDEX_HASH64 = "INDEX_HASH64"


# index:"<value>" -> additional flag (None for the default index)
INDEX_TYPES: dict[str, ObFlag | None] = {
    "": None,
    "value": ObFlag.INDEX_VALUE,
    "hash": ObFlag.INDEX_HASH,
    "hash64": ObFlag.INDEX_HASH64,
}


def index_type_flag(value: str) -> ObFlag | None:
    """Return the flag for an ``index`` annotation value."""
    try:
        return INDEX_TYPES[value.lower()]
    except KeyError:
        raise SemanticError(f"unknown index type {value}") from None


def derive_flags(prop: Property) -> None:
    """Add flags and the index to a property whose type is resolved.

    Rules are applied in a fixed order: ``id``, ``index``, ``unique``,
    relation. Each of the last three allocates the property's index, and a
    property can only have one.
    """
    annotations = prop.annotations

    if "id" in annotations:
        prop.add_ob_flag(ObFlag.ID)

    if "index" in annotations:
        prop.add_ob_flag(ObFlag.INDEXED)
        sub_flag = index_type_flag(annotations["index"].value)
        if sub_flag is not None:
            prop.add_ob_flag(sub_flag)
        prop.set_index()

    if "unique" in annotations:
        prop.add_ob_flag(ObFlag.UNIQUE)
        prop.set_index()

    if prop.relation is not None:
        prop.set_index()
