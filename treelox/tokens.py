TOKEN_TYPES = frozenset({
    # Single-character tokens.
    "LEFT_PAREN", "RIGHT_PAREN", "LEFT_BRACE", "RIGHT_BRACE",
    "COMMA", "DOT", "MINUS", "PLUS", "SEMICOLON", "SLASH", "STAR",
    # One or two character tokens.
    "BANG", "BANG_EQUAL", "EQUAL", "EQUAL_EQUAL",
    "GREATER", "GREATER_EQUAL", "LESS", "LESS_EQUAL",
    # Literals.
    "IDENTIFIER", "STRING", "NUMBER",
    # Keywords.
    "AND", "CLASS", "ELSE", "FALSE", "FUN", "FOR", "IF", "NIL", "OR",
    "PRINT", "RETURN", "SUPER", "THIS", "TRUE", "VAR", "WHILE",
    "EOF",
})


class Token:
    __slots__ = ("type", "lexeme", "literal", "line")

    def __init__(self, type, lexeme, literal, line):
        if type not in TOKEN_TYPES:
            raise ValueError(f"Unknown token type {type!r}")
        object.__setattr__(self, "type", type)
        object.__setattr__(self, "lexeme", lexeme)
        object.__setattr__(self, "literal", literal)
        object.__setattr__(self, "line", line)

    def __setattr__(self, name, value):
        raise AttributeError(f"Token is immutable, cannot set '{name}'")

    def __repr__(self):
        return f"Token({self.type!r}, {self.lexeme!r}, {self.literal!r}, {self.line})"

    def __str__(self):
        return f"{self.type} {self.lexeme} {self.literal}"
