"""Parser for the annotation mini-language found in struct field tags.

A tag is a list of space-separated annotations, each either a bare
name (``id``) or a name with a double-quoted value (``index:"hash"``)::

    `id nameInDb:"user_id" index:"hash64"`

Names are case-insensitive and stored lowercase.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from boxgen.errors import AnnotationSyntaxError

logger = logging.getLogger(__name__)

# Annotations with a meaning for the binding; others are kept but ignored
KNOWN_ANNOTATIONS = frozenset(
    {"id", "index", "unique", "nameindb", "transient", "date", "link"}
)

_TAG_DELIMITERS = ("`", '"')


@dataclass
class Annotation:
    """A single parsed annotation. ``value`` is empty for bare flags."""

    name: str
    value: str = ""


def strip_delimiters(tag: str) -> str:
    """Remove a matching pair of backticks or double quotes around ``tag``."""
    if len(tag) > 1 and tag[0] == tag[-1] and tag[0] in _TAG_DELIMITERS:
        return tag[1:-1]
    return tag


def parse_tag(tag: str) -> dict[str, Annotation]:
    """Parse a raw tag literal into annotations keyed by lowercase name.

    Raises:
        AnnotationSyntaxError: For a ``name:value`` token whose value is not
            double-quoted, or for a name that appears twice.
    """
    annotations: dict[str, Annotation] = {}

    for token in strip_delimiters(tag).split(" "):
        if not token.strip():
            continue
        name, colon, value = token.partition(":")
        if colon:
            if len(value) > 1 and value[0] == value[-1] == '"':
                value = value[1:-1].strip()
            else:
                raise AnnotationSyntaxError(
                    f'invalid annotation value {value} for {name}, '
                    f'expecting `name:"value"` format'
                )

        name = name.lower()
        if name in annotations:
            raise AnnotationSyntaxError(f"duplicate annotation {name}")
        if name not in KNOWN_ANNOTATIONS:
            logger.debug("Keeping unknown annotation %r", name)
        annotations[name] = Annotation(name=name, value=value)

    return annotations
