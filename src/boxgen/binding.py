"""Entity discovery over the syntax tree of one Go source file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from boxgen.entity_builder import build_entity
from boxgen.errors import BindingError, StructureError
from boxgen.model import Entity
from boxgen.parsing import GoParser
from boxgen.syntax import File, GenDecl, Node, StructType, TypeSpec, walk

logger = logging.getLogger(__name__)


@dataclass
class Binding:
    """Entities discovered in a source file, in declaration order.

    The first error stops discovery; entities found before it stay in
    ``entities`` but the binding as a whole must be treated as failed.
    """

    package: str = ""
    entities: list[Entity] = field(default_factory=list)
    error: BindingError | None = None
    _current_entity_name: str = field(default="", init=False, repr=False)

    @classmethod
    def from_source(cls, source: str) -> Binding:
        """Parse Go source text and discover its entities.

        Raises:
            SyntaxError: If the source can't be parsed.
            BindingError: On the first invalid declaration.
        """
        binding = cls()
        binding.load(GoParser().parse(source))
        return binding

    def load(self, file: File) -> None:
        """Discover all entities of ``file``.

        Raises:
            BindingError: The first error found; nothing after it is processed.
        """
        self.package = file.name.name
        walk(file, self._entity_loader)

        if self.error is not None:
            logger.debug("Entity discovery failed: %s", self.error)
            raise self.error

    def _entity_loader(self, node: Node) -> bool:
        """Visit a node; descend only where entity declarations can occur."""
        if self.error is not None:
            return False

        if isinstance(node, TypeSpec):
            # this might be the name of the next struct
            self._current_entity_name = node.name.name
            return True

        if isinstance(node, StructType):
            if not self._current_entity_name:
                self.error = StructureError("encountered a struct without a name")
                return False
            try:
                self.entities.append(build_entity(self._current_entity_name, node))
            except BindingError as exc:
                self.error = exc
            finally:
                self._current_entity_name = ""
            return True

        return isinstance(node, (GenDecl, File))

    def get_entity(self, name: str) -> Entity | None:
        """Get an entity by name."""
        for entity in self.entities:
            if entity.name == name:
                return entity
        return None

    def uses_fb_utils(self) -> bool:
        """Return whether any property is stored behind a FlatBuffers offset."""
        return any(
            prop.ob_type is not None and prop.ob_type.uses_offset
            for entity in self.entities
            for prop in entity.properties
        )
