"""Parser for the declaration subset of Go source files."""

from __future__ import annotations

from typing import Any

import ply.yacc as yacc

from boxgen.parsing.go_lexer import GoLexer
from boxgen.syntax import (
    ArrayType,
    BasicLit,
    Field,
    FieldList,
    File,
    GenDecl,
    Ident,
    ImportSpec,
    MapType,
    OtherDecl,
    ParenExpr,
    SelectorExpr,
    StarExpr,
    StructType,
    TypeSpec,
)


class GoParser:
    """Parser turning Go declarations into a ``boxgen.syntax`` tree.

    Only the package clause, imports and type declarations are understood;
    that is all entity discovery looks at. Functions, methods, constants and
    variables are skipped as balanced token runs.
    """

    tokens = GoLexer.tokens

    def __init__(self) -> None:
        self.lexer = GoLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_source_file(self, p: yacc.YaccProduction) -> None:
        """source_file : package_clause SEMI decl_list"""
        p[0] = File(name=p[1], decls=p[3])

    def p_package_clause(self, p: yacc.YaccProduction) -> None:
        """package_clause : PACKAGE IDENT"""
        p[0] = Ident(p[2])

    def p_decl_list_empty(self, p: yacc.YaccProduction) -> None:
        """decl_list : empty"""
        p[0] = []

    def p_decl_list_multiple(self, p: yacc.YaccProduction) -> None:
        """decl_list : decl_list decl SEMI"""
        p[0] = p[1]
        p[0].append(p[2])

    def p_decl(self, p: yacc.YaccProduction) -> None:
        """decl : import_decl
                | type_decl
                | other_decl"""
        p[0] = p[1]

    # Imports

    def p_import_decl_single(self, p: yacc.YaccProduction) -> None:
        """import_decl : IMPORT import_spec"""
        p[0] = GenDecl(tok="import", specs=[p[2]])

    def p_import_decl_group(self, p: yacc.YaccProduction) -> None:
        """import_decl : IMPORT LPAREN import_specs RPAREN"""
        p[0] = GenDecl(tok="import", specs=p[3])

    def p_import_specs(self, p: yacc.YaccProduction) -> None:
        """import_specs : empty
                        | import_spec_seq
                        | import_spec_seq SEMI"""
        p[0] = p[1] if p[1] is not None else []

    def p_import_spec_seq_single(self, p: yacc.YaccProduction) -> None:
        """import_spec_seq : import_spec"""
        p[0] = [p[1]]

    def p_import_spec_seq_multiple(self, p: yacc.YaccProduction) -> None:
        """import_spec_seq : import_spec_seq SEMI import_spec"""
        p[0] = p[1] + [p[3]]

    def p_import_spec(self, p: yacc.YaccProduction) -> None:
        """import_spec : STRING"""
        p[0] = ImportSpec(path=BasicLit("STRING", p[1]))

    def p_import_spec_named(self, p: yacc.YaccProduction) -> None:
        """import_spec : IDENT STRING
                       | DOT STRING"""
        p[0] = ImportSpec(path=BasicLit("STRING", p[2]), name=Ident(p[1]))

    # Skipped declarations

    def p_other_decl(self, p: yacc.YaccProduction) -> None:
        """other_decl : FUNC skip_tokens
                      | CONST skip_tokens
                      | VAR skip_tokens"""
        p[0] = OtherDecl(tok=p[1])

    def p_skip_tokens(self, p: yacc.YaccProduction) -> None:
        """skip_tokens : empty
                       | skip_tokens skip_item"""

    def p_skip_item(self, p: yacc.YaccProduction) -> None:
        """skip_item : IDENT
                     | INT
                     | STRING
                     | RAW_STRING
                     | CHAR
                     | OPERATOR
                     | STAR
                     | DOT
                     | COMMA
                     | ASSIGN
                     | PACKAGE
                     | IMPORT
                     | TYPE
                     | STRUCT
                     | MAP
                     | FUNC
                     | CONST
                     | VAR
                     | LBRACE skip_body RBRACE
                     | LPAREN skip_body RPAREN
                     | LBRACKET skip_body RBRACKET"""

    def p_skip_body(self, p: yacc.YaccProduction) -> None:
        """skip_body : empty
                     | skip_body skip_item
                     | skip_body SEMI"""

    # Types

    def p_type_decl_single(self, p: yacc.YaccProduction) -> None:
        """type_decl : TYPE type_spec"""
        p[0] = GenDecl(tok="type", specs=[p[2]])

    def p_type_decl_group(self, p: yacc.YaccProduction) -> None:
        """type_decl : TYPE LPAREN type_specs RPAREN"""
        p[0] = GenDecl(tok="type", specs=p[3])

    def p_type_specs(self, p: yacc.YaccProduction) -> None:
        """type_specs : empty
                      | type_spec_seq
                      | type_spec_seq SEMI"""
        p[0] = p[1] if p[1] is not None else []

    def p_type_spec_seq_single(self, p: yacc.YaccProduction) -> None:
        """type_spec_seq : type_spec"""
        p[0] = [p[1]]

    def p_type_spec_seq_multiple(self, p: yacc.YaccProduction) -> None:
        """type_spec_seq : type_spec_seq SEMI type_spec"""
        p[0] = p[1] + [p[3]]

    def p_type_spec(self, p: yacc.YaccProduction) -> None:
        """type_spec : IDENT type_expr"""
        p[0] = TypeSpec(name=Ident(p[1]), type=p[2])

    def p_type_spec_alias(self, p: yacc.YaccProduction) -> None:
        """type_spec : IDENT ASSIGN type_expr"""
        p[0] = TypeSpec(name=Ident(p[1]), type=p[3], assign=True)

    def p_type_expr_name(self, p: yacc.YaccProduction) -> None:
        """type_expr : type_name
                     | struct_type"""
        p[0] = p[1]

    def p_type_expr_slice(self, p: yacc.YaccProduction) -> None:
        """type_expr : LBRACKET RBRACKET type_expr"""
        p[0] = ArrayType(elt=p[3])

    def p_type_expr_array(self, p: yacc.YaccProduction) -> None:
        """type_expr : LBRACKET INT RBRACKET type_expr"""
        p[0] = ArrayType(elt=p[4], length=BasicLit("INT", p[2]))

    def p_type_expr_pointer(self, p: yacc.YaccProduction) -> None:
        """type_expr : STAR type_expr"""
        p[0] = StarExpr(x=p[2])

    def p_type_expr_map(self, p: yacc.YaccProduction) -> None:
        """type_expr : MAP LBRACKET type_expr RBRACKET type_expr"""
        p[0] = MapType(key=p[3], value=p[5])

    def p_type_expr_paren(self, p: yacc.YaccProduction) -> None:
        """type_expr : LPAREN type_expr RPAREN"""
        p[0] = ParenExpr(x=p[2])

    def p_type_name(self, p: yacc.YaccProduction) -> None:
        """type_name : IDENT"""
        p[0] = Ident(p[1])

    def p_type_name_qualified(self, p: yacc.YaccProduction) -> None:
        """type_name : IDENT DOT IDENT"""
        p[0] = SelectorExpr(x=Ident(p[1]), sel=Ident(p[3]))

    # Structs

    def p_struct_type(self, p: yacc.YaccProduction) -> None:
        """struct_type : STRUCT LBRACE field_decls RBRACE"""
        p[0] = StructType(fields=FieldList(fields=p[3]))

    def p_field_decls(self, p: yacc.YaccProduction) -> None:
        """field_decls : empty
                       | field_decl_seq
                       | field_decl_seq SEMI"""
        p[0] = p[1] if p[1] is not None else []

    def p_field_decl_seq_single(self, p: yacc.YaccProduction) -> None:
        """field_decl_seq : field_decl"""
        p[0] = [p[1]]

    def p_field_decl_seq_multiple(self, p: yacc.YaccProduction) -> None:
        """field_decl_seq : field_decl_seq SEMI field_decl"""
        p[0] = p[1] + [p[3]]

    def p_field_decl(self, p: yacc.YaccProduction) -> None:
        """field_decl : ident_list type_expr field_tag"""
        p[0] = Field(names=p[1], type=p[2], tag=p[3])

    def p_field_decl_embedded(self, p: yacc.YaccProduction) -> None:
        """field_decl : embedded_field field_tag"""
        p[0] = Field(names=[], type=p[1], tag=p[2])

    def p_embedded_field(self, p: yacc.YaccProduction) -> None:
        """embedded_field : type_name"""
        p[0] = p[1]

    def p_embedded_field_pointer(self, p: yacc.YaccProduction) -> None:
        """embedded_field : STAR type_name"""
        p[0] = StarExpr(x=p[2])

    def p_field_tag(self, p: yacc.YaccProduction) -> None:
        """field_tag : empty
                     | STRING
                     | RAW_STRING"""
        if p[1] is None:
            p[0] = None
        else:
            kind = "RAW_STRING" if p[1].startswith("`") else "STRING"
            p[0] = BasicLit(kind, p[1])

    def p_ident_list_single(self, p: yacc.YaccProduction) -> None:
        """ident_list : IDENT"""
        p[0] = [Ident(p[1])]

    def p_ident_list_multiple(self, p: yacc.YaccProduction) -> None:
        """ident_list : ident_list COMMA IDENT"""
        p[0] = p[1] + [Ident(p[3])]

    def p_empty(self, p: yacc.YaccProduction) -> None:
        """empty :"""
        p[0] = None

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            value = "newline" if p.value == "\n" else p.value
            raise SyntaxError(f"Syntax error at '{value}' (line {p.lineno})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        kwargs.setdefault("errorlog", yacc.NullLogger())
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str) -> File:
        """Parse Go source text and return its syntax tree."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        tree = self.parser.parse(data, lexer=self.lexer)
        if tree is None:
            raise SyntaxError("Syntax error at end of input")
        return tree
