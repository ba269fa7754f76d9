"""Lexer for the declaration subset of Go source files."""

import ply.lex as lex


class GoLexer:
    """Lexer for tokenizing Go package, import and type declarations.

    Function, method, const and var declarations are tokenized too, so the
    parser can skip over them; operators and rune literals come out as
    OPERATOR and CHAR tokens without further meaning.

    Newlines are significant: following Go's rule, a newline (or the end of
    input) after an identifier, literal or closing bracket is emitted as a
    SEMI token. Everything else that is whitespace is dropped.
    """

    # Reserved keywords
    reserved = {
        "package": "PACKAGE",
        "import": "IMPORT",
        "type": "TYPE",
        "struct": "STRUCT",
        "map": "MAP",
        "func": "FUNC",
        "const": "CONST",
        "var": "VAR",
    }

    # Token list
    tokens = [
        "IDENT",
        "INT",
        "STRING",
        "RAW_STRING",
        "CHAR",
        "OPERATOR",
        "LBRACE",
        "RBRACE",
        "LBRACKET",
        "RBRACKET",
        "LPAREN",
        "RPAREN",
        "STAR",
        "DOT",
        "COMMA",
        "SEMI",
        "ASSIGN",
    ] + list(reserved.values())

    # Tokens after which a line break terminates the statement
    semicolon_triggers = frozenset(
        {"IDENT", "INT", "STRING", "RAW_STRING", "CHAR", "RPAREN", "RBRACKET", "RBRACE"}
    )

    # Simple tokens
    t_LBRACE = r"\{"
    t_RBRACE = r"\}"
    t_LBRACKET = r"\["
    t_RBRACKET = r"\]"
    t_LPAREN = r"\("
    t_RPAREN = r"\)"
    t_STAR = r"\*"
    t_DOT = r"\."
    t_COMMA = r","
    t_SEMI = r";"
    t_ASSIGN = r"="

    t_ignore = " \t\r"

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore
        self._last_type: str | None = None

    def t_BLOCK_COMMENT(self, t: lex.LexToken) -> lex.LexToken | None:
        r"/\*(?:.|\n)*?\*/"
        newlines = t.value.count("\n")
        if newlines == 0:
            return None
        t.lexer.lineno += newlines
        return self._line_break(t)

    def t_LINE_COMMENT(self, t: lex.LexToken) -> None:
        r"//[^\n]*"
        # The newline itself is left for t_NEWLINE

    def t_OPERATOR(self, t: lex.LexToken) -> lex.LexToken:
        r"[-+!<>&|^%:~/][-+!<>&|^%:~/=]*|=="
        return t

    def t_CHAR(self, t: lex.LexToken) -> lex.LexToken:
        r"'(?:[^'\\\n]|\\.)*'"
        return t

    def t_RAW_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r"`[^`]*`"
        t.lexer.lineno += t.value.count("\n")
        return t

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"(?:[^"\\\n]|\\.)*"'
        return t

    def t_INT(self, t: lex.LexToken) -> lex.LexToken:
        r"\d+"
        return t

    def t_IDENT(self, t: lex.LexToken) -> lex.LexToken:
        r"[^\W\d]\w*"
        t.type = self.reserved.get(t.value, "IDENT")
        return t

    def t_NEWLINE(self, t: lex.LexToken) -> lex.LexToken | None:
        r"\n+"
        t.lexer.lineno += len(t.value)
        return self._line_break(t)

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character '{t.value[0]}' at line {t.lineno}")

    def _line_break(self, t: lex.LexToken) -> lex.LexToken | None:
        if self._last_type not in self.semicolon_triggers:
            return None
        t.type = "SEMI"
        t.value = "\n"
        return t

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self._last_type = None
        self.lexer.lineno = 1
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token, inserting a final SEMI at end of input."""
        tok = self.lexer.token()
        if tok is None:
            if self._last_type not in self.semicolon_triggers:
                self._last_type = None
                return None
            tok = lex.LexToken()
            tok.type = "SEMI"
            tok.value = ""
            tok.lineno = self.lexer.lineno
            tok.lexpos = self.lexer.lexpos
        self._last_type = tok.type
        return tok

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
