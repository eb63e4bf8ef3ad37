import logging
from dataclasses import dataclass
from typing import Callable, Iterator

from common.errors import InternalError

from parse.tokens import KEYWORDS, SYNTAX, TWO_CHAR_SYNTAX, Token, TokenKind

logger = logging.getLogger(__name__)

WHITESPACE = " \t\n\r"


@dataclass
class LexerState:
    line: int
    col: int
    pos: int


class Lexer:
    """Turns Monkey source text into tokens, one per call to `next_token`.

    Once the input is exhausted every further call yields an EOF token.
    """

    def __init__(self, src: str):
        self._src = src
        self._line = 1
        self._col = 1
        self._pos = 0

    def tokens(self) -> Iterator[Token]:
        """Yields every token up to and including the first EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == TokenKind.EOF:
                return

    def next_token(self) -> Token:
        tok = self._lex_any()
        logger.debug("token %s", tok)
        return tok

    def _lex_any(self) -> Token:
        self._accept_run(lambda c: c in WHITESPACE)
        line, col = self._line, self._col
        if self._is_done():
            return Token(TokenKind.EOF, "", line, col)

        c = self._peek()
        if is_letter(c):
            return self._lex_identifier()
        elif is_digit(c):
            return self._lex_int_lit()
        elif c == '"':
            return self._lex_str_lit()

        self._ignore()
        if c in TWO_CHAR_SYNTAX:
            short, long = TWO_CHAR_SYNTAX[c]
            if not self._is_done() and self._peek() == "=":
                self._ignore()
                return Token(long, c + "=", line, col)
            return Token(short, c, line, col)
        elif c in SYNTAX:
            return Token(SYNTAX[c], c, line, col)
        else:
            return Token(TokenKind.ILLEGAL, c, line, col)

    def _lex_identifier(self):
        line, col = self._line, self._col
        word = self._accept_run(is_word_char)
        return Token(KEYWORDS.get(word, TokenKind.IDENTIFIER), word, line, col)

    def _lex_int_lit(self):
        line, col = self._line, self._col
        digits = self._accept_run(is_digit)
        return Token(TokenKind.INT_LIT, digits, line, col)

    def _lex_str_lit(self):
        line, col = self._line, self._col
        self._ignore()  # ignore opening quote
        contents = self._accept_run(lambda c: c != '"')
        if self._is_done():
            # unterminated; hand the parser what was read so it can report it
            return Token(TokenKind.ILLEGAL, f'"{contents}', line, col)
        self._ignore()  # ignore closing quote
        return Token(TokenKind.STR_LIT, contents, line, col)

    def _accept_run(self, pred: Callable[[str], bool]):
        chars: list[str] = []
        while not self._is_done():
            c = self._peek()
            if pred(c):
                self._next()
                chars.append(c)
            else:
                break
        return "".join(chars)

    def _peek(self):
        init_state = self._save()
        c = self._next()
        self._restore(init_state)
        return c

    def _next(self):
        if self._is_done():
            raise InternalError("lexer: next called on finished lexer")
        # indexing a str steps one code point at a time, never through bytes
        c = self._src[self._pos]
        self._pos += 1
        if c == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return c

    _ignore = _next  # alias for clarity

    def _save(self):
        return LexerState(self._line, self._col, self._pos)

    def _restore(self, state: LexerState):
        self._line = state.line
        self._col = state.col
        self._pos = state.pos

    def _is_done(self):
        return self._pos >= len(self._src)


def is_letter(c: str):
    return c.isascii() and c.isalpha()


def is_digit(c: str):
    return c in "0123456789"


def is_word_char(c: str):
    return is_letter(c) or is_digit(c) or c == "_"
