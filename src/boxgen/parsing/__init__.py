"""Parsing of Go source files into syntax trees."""

from boxgen.parsing.go_lexer import GoLexer
from boxgen.parsing.go_parser import GoParser

__all__ = [
    "GoLexer",
    "GoParser",
]
