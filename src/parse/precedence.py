from enum import IntEnum

from parse.tokens import TokenKind


class Precedence(IntEnum):
    """Binding power of operators, lowest first."""

    LOWEST = 1
    EQUALS = 2  # == !=
    LESS_GREATER = 3  # < >
    SUM = 4  # + -
    PRODUCT = 5  # * /
    PREFIX = 6  # -x !x
    CALL = 7  # f(x)
    INDEX = 8  # a[i]


PRECEDENCES = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESS_GREATER,
    TokenKind.GT: Precedence.LESS_GREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LEFT_PAREN: Precedence.CALL,
    TokenKind.LEFT_SQUARE_BRACKET: Precedence.INDEX,
}


def token_precedence(kind: TokenKind) -> Precedence:
    return PRECEDENCES.get(kind, Precedence.LOWEST)
