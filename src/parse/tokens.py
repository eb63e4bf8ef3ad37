from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    ILLEGAL = auto()  # unrecognized character or unterminated string
    EOF = auto()

    IDENTIFIER = auto()  # alphanumeric identifier
    INT_LIT = auto()  # integer literal
    STR_LIT = auto()  # quoted string literal

    ASSIGN = auto()  # =
    PLUS = auto()  # +
    MINUS = auto()  # -
    ASTERISK = auto()  # *
    SLASH = auto()  # /
    BANG = auto()  # !
    LT = auto()  # <
    GT = auto()  # >
    EQ = auto()  # ==
    NOT_EQ = auto()  # !=

    COMMA = auto()  # ,
    SEMICOLON = auto()  # ;
    COLON = auto()  # :
    LEFT_PAREN = auto()  # (
    RIGHT_PAREN = auto()  # )
    LEFT_BRACE = auto()  # {
    RIGHT_BRACE = auto()  # }
    LEFT_SQUARE_BRACKET = auto()  # [
    RIGHT_SQUARE_BRACKET = auto()  # ]

    FN = auto()  # fn
    LET = auto()  # let
    TRUE = auto()  # true
    FALSE = auto()  # false
    IF = auto()  # if
    ELSE = auto()  # else
    RETURN = auto()  # return

    def __str__(self):
        return self.name

    __repr__ = __str__


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    val: str
    line: int
    col: int

    def __str__(self):
        return f"<{self.kind}: {repr(self.val)} at {self.line}:{self.col}>"

    __repr__ = __str__


KEYWORDS = {
    "else": TokenKind.ELSE,
    "false": TokenKind.FALSE,
    "fn": TokenKind.FN,
    "if": TokenKind.IF,
    "let": TokenKind.LET,
    "return": TokenKind.RETURN,
    "true": TokenKind.TRUE,
}

SYNTAX = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    ":": TokenKind.COLON,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    "[": TokenKind.LEFT_SQUARE_BRACKET,
    "]": TokenKind.RIGHT_SQUARE_BRACKET,
}

# one-character operators that may be extended by a trailing "="
TWO_CHAR_SYNTAX = {
    "=": (TokenKind.ASSIGN, TokenKind.EQ),
    "!": (TokenKind.BANG, TokenKind.NOT_EQ),
}

# source text of each operator token, used when rendering the AST
OPERATORS = {
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.ASTERISK: "*",
    TokenKind.SLASH: "/",
    TokenKind.BANG: "!",
    TokenKind.LT: "<",
    TokenKind.GT: ">",
    TokenKind.EQ: "==",
    TokenKind.NOT_EQ: "!=",
}
