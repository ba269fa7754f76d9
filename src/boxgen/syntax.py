"""Syntax tree for the declaration subset of Go source files.

The node classes mirror the shapes the Go toolchain uses for declarations,
trimmed to what entity discovery needs. ``walk`` and ``expr_string`` are the
only operations the rest of the package performs on a tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Callable, Iterator


@dataclass
class Node:
    """Base class for all syntax tree nodes."""

    def children(self) -> Iterator[Node]:
        """Yield direct child nodes in source order."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Node):
                yield value
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, Node):
                        yield item


@dataclass
class Ident(Node):
    name: str


@dataclass
class BasicLit(Node):
    """Literal token. ``value`` keeps the source text, quotes included."""

    kind: str  # "INT", "STRING" or "RAW_STRING"
    value: str


@dataclass
class ArrayType(Node):
    """``[]elt`` (slice, ``length`` is None) or ``[N]elt``."""

    elt: Node
    length: BasicLit | None = None


@dataclass
class StarExpr(Node):
    x: Node


@dataclass
class SelectorExpr(Node):
    """Qualified identifier such as ``time.Time``."""

    x: Ident
    sel: Ident


@dataclass
class MapType(Node):
    key: Node
    value: Node


@dataclass
class ParenExpr(Node):
    x: Node


@dataclass
class Field(Node):
    """One field declaration line.

    ``names`` is empty for an embedded field and holds several identifiers
    for a grouped declaration (``A, B int``).
    """

    names: list[Ident]
    type: Node
    tag: BasicLit | None = None


@dataclass
class FieldList(Node):
    fields: list[Field] = field(default_factory=list)


@dataclass
class StructType(Node):
    fields: FieldList = field(default_factory=FieldList)


@dataclass
class TypeSpec(Node):
    name: Ident
    type: Node
    assign: bool = False  # alias declaration: type A = B


@dataclass
class ImportSpec(Node):
    path: BasicLit
    name: Ident | None = None


@dataclass
class GenDecl(Node):
    """Generic declaration: ``import`` or ``type``, possibly grouped."""

    tok: str
    specs: list[Node] = field(default_factory=list)


@dataclass
class OtherDecl(Node):
    """A func, method, const or var declaration; only its keyword is kept."""

    tok: str


@dataclass
class File(Node):
    name: Ident
    decls: list[Node] = field(default_factory=list)

    @property
    def imports(self) -> list[ImportSpec]:
        return [
            spec
            for decl in self.decls
            if isinstance(decl, GenDecl) and decl.tok == "import"
            for spec in decl.specs
            if isinstance(spec, ImportSpec)
        ]


def walk(node: Node, visit: Callable[[Node], bool]) -> None:
    """Visit ``node`` depth-first.

    Children of a node are only visited when ``visit`` returns True for it.
    """
    if not visit(node):
        return
    for child in node.children():
        walk(child, visit)


def expr_string(expr: Node) -> str:
    """Render a type expression to its canonical source text."""
    if isinstance(expr, Ident):
        return expr.name
    if isinstance(expr, ArrayType):
        length = expr.length.value if expr.length is not None else ""
        return f"[{length}]{expr_string(expr.elt)}"
    if isinstance(expr, StarExpr):
        return "*" + expr_string(expr.x)
    if isinstance(expr, SelectorExpr):
        return f"{expr.x.name}.{expr.sel.name}"
    if isinstance(expr, MapType):
        return f"map[{expr_string(expr.key)}]{expr_string(expr.value)}"
    if isinstance(expr, ParenExpr):
        return f"({expr_string(expr.x)})"
    if isinstance(expr, StructType):
        return "struct{...}" if expr.fields.fields else "struct{}"
    if isinstance(expr, BasicLit):
        return expr.value
    raise TypeError(f"Not a type expression: {type(expr).__name__}")
