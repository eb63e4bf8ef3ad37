import logging

from common.errors import InternalError
from common.limits import INT_MAX, in_int_range

from parse import nodes
from parse.errors import ParserError
from parse.lexer import Lexer
from parse.precedence import Precedence, token_precedence
from parse.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

INFIX_OPERATORS = {
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.ASTERISK,
    TokenKind.SLASH,
    TokenKind.LT,
    TokenKind.GT,
    TokenKind.EQ,
    TokenKind.NOT_EQ,
}


def parse(src: str) -> nodes.Program:
    """Parses a whole program, raising one ParserError that lists every syntax error found."""
    program = Parser(Lexer(src)).parse_program()
    logger.debug("AST: %s", program)
    return program


class Parser:
    """Pratt parser over a lexer's token stream.

    The parser holds the current token and one token of lookahead. Every parse
    method starts with the current token on the first token of its construct and
    returns with the current token on the last one.
    """

    def __init__(self, lexer: Lexer):
        self._lexer = lexer
        # number of braces opened and not yet closed up to the current token
        self._depth = 0
        self._cur = lexer.next_token()
        self._peek = lexer.next_token()
        self._track_depth()

    # Program = { Stmt }
    def parse_program(self) -> nodes.Program:
        stmts: list[nodes.StmtNode] = []
        errors: list[ParserError] = []
        while not self._cur_is(TokenKind.EOF):
            try:
                stmts.append(self._parse_stmt())
            except ParserError as e:
                errors.append(e)
                self._skip_stmt()
            self._advance()

        if errors:
            raise ParserError.aggregate(errors)
        return nodes.Program(1, 1, tuple(stmts))

    def _skip_stmt(self):
        # resume after the semicolon ending the top-level statement so one
        # mistake is reported once
        while not self._cur_is(TokenKind.EOF):
            if self._cur_is(TokenKind.SEMICOLON) and self._depth == 0:
                break
            self._advance()

    # Stmt = LetStmt | ReturnStmt | ExprStmt
    def _parse_stmt(self) -> nodes.StmtNode:
        if self._cur_is(TokenKind.LET):
            return self._parse_let_stmt()
        elif self._cur_is(TokenKind.RETURN):
            return self._parse_return_stmt()
        else:
            return self._parse_expr_stmt()

    # LetStmt = "let" identifier "=" Expr [ ";" ]
    def _parse_let_stmt(self):
        tok = self._cur
        if not self._peek_is(TokenKind.IDENTIFIER):
            raise ParserError(
                f"expected identifier after 'let', got {self._peek.kind}",
                self._peek.line,
                self._peek.col,
            )
        self._advance()
        name = self._cur.val
        self._expect_peek(TokenKind.ASSIGN)
        self._advance()
        val = self._parse_expr(Precedence.LOWEST)
        self._accept_peek(TokenKind.SEMICOLON)
        return nodes.LetStmt(tok.line, tok.col, name, val)

    # ReturnStmt = "return" Expr [ ";" ]
    def _parse_return_stmt(self):
        tok = self._cur
        self._advance()
        return_val = self._parse_expr(Precedence.LOWEST)
        self._accept_peek(TokenKind.SEMICOLON)
        return nodes.ReturnStmt(tok.line, tok.col, return_val)

    # ExprStmt = Expr [ ";" ]
    def _parse_expr_stmt(self):
        tok = self._cur
        expr = self._parse_expr(Precedence.LOWEST)
        self._accept_peek(TokenKind.SEMICOLON)
        return nodes.ExprStmt(tok.line, tok.col, expr)

    # Block = "{" { Stmt } "}"
    def _parse_block(self):
        tok = self._cur
        self._advance()
        stmts: list[nodes.StmtNode] = []
        while not self._cur_is(TokenKind.RIGHT_BRACE):
            if self._cur_is(TokenKind.EOF):
                raise ParserError(
                    f"expected next token to be {TokenKind.RIGHT_BRACE}, got {TokenKind.EOF}",
                    self._cur.line,
                    self._cur.col,
                )
            stmts.append(self._parse_stmt())
            self._advance()
        return nodes.BlockStmt(tok.line, tok.col, tuple(stmts))

    def _parse_expr(self, precedence: Precedence) -> nodes.ExprNode:
        left = self._parse_prefix()
        while (
            not self._peek_is(TokenKind.SEMICOLON)
            and precedence < token_precedence(self._peek.kind)
        ):
            self._advance()
            left = self._parse_infix(left)
        return left

    def _parse_prefix(self) -> nodes.ExprNode:
        tok = self._cur
        if tok.kind == TokenKind.IDENTIFIER:
            return nodes.IdentifierExpr(tok.line, tok.col, tok.val)
        elif tok.kind == TokenKind.INT_LIT:
            return self._parse_int_lit_expr()
        elif tok.kind == TokenKind.STR_LIT:
            return nodes.StrLitExpr(tok.line, tok.col, tok.val)
        elif tok.kind in (TokenKind.TRUE, TokenKind.FALSE):
            return nodes.BoolLitExpr(tok.line, tok.col, tok.kind == TokenKind.TRUE)
        elif tok.kind in (TokenKind.BANG, TokenKind.MINUS):
            return self._parse_prefix_expr()
        elif tok.kind == TokenKind.LEFT_PAREN:
            return self._parse_grouped_expr()
        elif tok.kind == TokenKind.LEFT_SQUARE_BRACKET:
            elements = self._parse_expr_list(TokenKind.RIGHT_SQUARE_BRACKET)
            return nodes.ArrayLitExpr(tok.line, tok.col, elements)
        elif tok.kind == TokenKind.LEFT_BRACE:
            return self._parse_hash_lit_expr()
        elif tok.kind == TokenKind.IF:
            return self._parse_if_expr()
        elif tok.kind == TokenKind.FN:
            return self._parse_fn_lit_expr()
        elif tok.kind == TokenKind.ILLEGAL:
            if tok.val.startswith('"'):
                raise ParserError("unterminated string literal", tok.line, tok.col)
            raise ParserError(f"illegal token '{tok.val}'", tok.line, tok.col)
        else:
            raise ParserError(
                f"no prefix parse function for {tok.kind}", tok.line, tok.col
            )

    def _parse_infix(self, left: nodes.ExprNode) -> nodes.ExprNode:
        kind = self._cur.kind
        if kind in INFIX_OPERATORS:
            return self._parse_infix_expr(left)
        elif kind == TokenKind.LEFT_PAREN:
            return self._parse_call_expr(left)
        elif kind == TokenKind.LEFT_SQUARE_BRACKET:
            return self._parse_index_expr(left)
        else:
            raise InternalError(f"parser: no infix parse function for {kind}")

    # IntLitExpr = digit { digit }
    def _parse_int_lit_expr(self):
        tok = self._cur
        # longer digit runs are out of range and too long to convert
        if len(tok.val.lstrip("0")) > len(str(INT_MAX)) or not in_int_range(int(tok.val)):
            raise ParserError(
                f"integer literal out of range: {tok.val}", tok.line, tok.col
            )
        return nodes.IntLitExpr(tok.line, tok.col, int(tok.val))

    # PrefixExpr = ( "!" | "-" ) Expr
    def _parse_prefix_expr(self):
        tok = self._cur
        self._advance()
        operand = self._parse_expr(Precedence.PREFIX)
        return nodes.PrefixExpr(tok.line, tok.col, tok.kind, operand)

    # InfixExpr = Expr operator Expr
    def _parse_infix_expr(self, left: nodes.ExprNode):
        tok = self._cur
        precedence = token_precedence(tok.kind)
        self._advance()
        right = self._parse_expr(precedence)
        return nodes.InfixExpr(tok.line, tok.col, tok.kind, left, right)

    # GroupedExpr = "(" Expr ")"
    def _parse_grouped_expr(self):
        self._advance()
        expr = self._parse_expr(Precedence.LOWEST)
        self._expect_peek(TokenKind.RIGHT_PAREN)
        return expr

    # IfExpr = "if" "(" Expr ")" Block [ "else" Block ]
    def _parse_if_expr(self):
        tok = self._cur
        self._expect_peek(TokenKind.LEFT_PAREN)
        self._advance()
        cond = self._parse_expr(Precedence.LOWEST)
        self._expect_peek(TokenKind.RIGHT_PAREN)
        self._expect_peek(TokenKind.LEFT_BRACE)
        consequence = self._parse_block()

        alternative = None
        if self._accept_peek(TokenKind.ELSE):
            self._expect_peek(TokenKind.LEFT_BRACE)
            alternative = self._parse_block()
        return nodes.IfExpr(tok.line, tok.col, cond, consequence, alternative)

    # FnLitExpr = "fn" "(" [ ParamList ] ")" Block
    def _parse_fn_lit_expr(self):
        tok = self._cur
        self._expect_peek(TokenKind.LEFT_PAREN)
        param_names = self._parse_fn_params()
        self._expect_peek(TokenKind.LEFT_BRACE)
        body_block = self._parse_block()
        return nodes.FnLitExpr(tok.line, tok.col, param_names, body_block)

    # ParamList = identifier { "," identifier }
    def _parse_fn_params(self):
        param_names: list[str] = []
        if self._accept_peek(TokenKind.RIGHT_PAREN):
            return tuple(param_names)

        self._advance()
        param_names.append(self._expect_param())
        while self._accept_peek(TokenKind.COMMA):
            self._advance()
            param_names.append(self._expect_param())
        self._expect_peek(TokenKind.RIGHT_PAREN)
        return tuple(param_names)

    def _expect_param(self):
        tok = self._cur
        if tok.kind != TokenKind.IDENTIFIER:
            raise ParserError(
                f"expected a parameter identifier, got {tok.kind}", tok.line, tok.col
            )
        return tok.val

    # CallExpr = Expr "(" [ ExprList ] ")"
    def _parse_call_expr(self, callee: nodes.ExprNode):
        args = self._parse_expr_list(TokenKind.RIGHT_PAREN)
        return nodes.CallExpr(callee.line, callee.col, callee, args)

    # IndexExpr = Expr "[" Expr "]"
    def _parse_index_expr(self, obj: nodes.ExprNode):
        tok = self._cur
        self._advance()
        index = self._parse_expr(Precedence.LOWEST)
        self._expect_peek(TokenKind.RIGHT_SQUARE_BRACKET)
        return nodes.IndexExpr(tok.line, tok.col, obj, index)

    # ExprList = Expr { "," Expr }, closed by `end`
    def _parse_expr_list(self, end: TokenKind):
        exprs: list[nodes.ExprNode] = []
        if self._accept_peek(end):
            return tuple(exprs)

        self._advance()
        exprs.append(self._parse_expr(Precedence.LOWEST))
        while self._accept_peek(TokenKind.COMMA):
            self._advance()
            exprs.append(self._parse_expr(Precedence.LOWEST))
        self._expect_peek(end)
        return tuple(exprs)

    # HashLitExpr  = "{" [ KeyValuePair { "," KeyValuePair } ] "}"
    # KeyValuePair = Expr ":" Expr
    def _parse_hash_lit_expr(self):
        tok = self._cur
        entries: list[tuple[nodes.ExprNode, nodes.ExprNode]] = []
        while not self._peek_is(TokenKind.RIGHT_BRACE):
            self._advance()
            key = self._parse_expr(Precedence.LOWEST)
            self._expect_peek(TokenKind.COLON)
            self._advance()
            val = self._parse_expr(Precedence.LOWEST)
            entries.append((key, val))
            if not self._peek_is(TokenKind.RIGHT_BRACE):
                self._expect_peek(TokenKind.COMMA)
        self._expect_peek(TokenKind.RIGHT_BRACE)
        return nodes.HashLitExpr(tok.line, tok.col, tuple(entries))

    def _advance(self):
        self._cur = self._peek
        self._peek = self._lexer.next_token()
        self._track_depth()

    def _track_depth(self):
        if self._cur_is(TokenKind.LEFT_BRACE):
            self._depth += 1
        elif self._cur_is(TokenKind.RIGHT_BRACE):
            self._depth = max(self._depth - 1, 0)

    def _cur_is(self, *args: TokenKind):
        return self._cur.kind in args

    def _peek_is(self, *args: TokenKind):
        return self._peek.kind in args

    def _accept_peek(self, kind: TokenKind):
        if self._peek_is(kind):
            self._advance()
            return True
        return False

    def _expect_peek(self, kind: TokenKind) -> Token:
        if not self._peek_is(kind):
            raise ParserError(
                f"expected next token to be {kind}, got {self._peek.kind}",
                self._peek.line,
                self._peek.col,
            )
        self._advance()
        return self._cur
