import unittest

from parse import nodes
from parse.errors import ParserError
from parse.parser import parse
from parse.precedence import Precedence, token_precedence
from parse.tokens import TokenKind


def first_expr(src):
    program = parse(src)
    stmt = program.stmts[0]
    assert isinstance(stmt, nodes.ExprStmt), stmt
    return stmt.expr


class PrecedenceTestCase(unittest.TestCase):

    def test_ordering(self):
        ordered = [
            Precedence.LOWEST,
            Precedence.EQUALS,
            Precedence.LESS_GREATER,
            Precedence.SUM,
            Precedence.PRODUCT,
            Precedence.PREFIX,
            Precedence.CALL,
            Precedence.INDEX,
        ]
        self.assertEqual(ordered, sorted(ordered))

    def test_token_precedence(self):
        self.assertEqual(Precedence.EQUALS, token_precedence(TokenKind.NOT_EQ))
        self.assertEqual(Precedence.PRODUCT, token_precedence(TokenKind.SLASH))
        self.assertEqual(Precedence.CALL, token_precedence(TokenKind.LEFT_PAREN))
        self.assertEqual(Precedence.INDEX, token_precedence(TokenKind.LEFT_SQUARE_BRACKET))
        self.assertEqual(Precedence.LOWEST, token_precedence(TokenKind.LEFT_BRACE))
        self.assertEqual(Precedence.LOWEST, token_precedence(TokenKind.SEMICOLON))


class StatementTestCase(unittest.TestCase):

    def test_let_statements(self):
        program = parse("let x = 5; let y = true; let foobar = y")
        self.assertEqual(3, len(program.stmts))
        expected = [("x", "5"), ("y", "true"), ("foobar", "y")]
        for stmt, (name, val) in zip(program.stmts, expected):
            self.assertIsInstance(stmt, nodes.LetStmt)
            self.assertEqual(name, stmt.name)
            self.assertEqual(val, str(stmt.val))

    def test_return_statements(self):
        program = parse("return 5; return 10; return add(1, 2)")
        self.assertEqual(3, len(program.stmts))
        for stmt in program.stmts:
            self.assertIsInstance(stmt, nodes.ReturnStmt)
        self.assertEqual("return add(1, 2);", str(program.stmts[2]))

    def test_optional_semicolon(self):
        self.assertEqual(parse("5 + 5;"), parse("5 + 5"))
        self.assertEqual(2, len(parse("1; 2").stmts))

    def test_identifier_and_literals(self):
        self.assertEqual(nodes.IdentifierExpr(1, 1, "foobar"), first_expr("foobar;"))
        self.assertEqual(nodes.IntLitExpr(1, 1, 5), first_expr("5;"))
        self.assertEqual(nodes.BoolLitExpr(1, 1, False), first_expr("false"))
        self.assertEqual(nodes.StrLitExpr(1, 1, "hello world"), first_expr('"hello world";'))

    def test_largest_integer_literal(self):
        self.assertEqual(2**63 - 1, first_expr("9223372036854775807").val)


class ExpressionRenderingTestCase(unittest.TestCase):

    def check(self, cases):
        for src, expected in cases:
            self.assertEqual(expected, str(first_expr(src)), src)

    def test_prefix_expressions(self):
        self.check([
            ("!5;", "(!5)"),
            ("-15;", "(-15)"),
            ("!true", "(!true)"),
            ("!false", "(!false)"),
        ])

    def test_infix_expressions(self):
        self.check([
            ("5 + 5;", "(5 + 5)"),
            ("5 - 5;", "(5 - 5)"),
            ("5 * 5;", "(5 * 5)"),
            ("5 / 5;", "(5 / 5)"),
            ("5 > 5;", "(5 > 5)"),
            ("5 < 5;", "(5 < 5)"),
            ("5 == 5;", "(5 == 5)"),
            ("5 != 5;", "(5 != 5)"),
            ("true == true", "(true == true)"),
            ("true != false", "(true != false)"),
        ])

    def test_operator_precedence(self):
        self.check([
            ("-a * b", "((-a) * b)"),
            ("!-a", "(!(-a))"),
            ("a + b + c", "((a + b) + c)"),
            ("a + b - c", "((a + b) - c)"),
            ("a * b * c", "((a * b) * c)"),
            ("a * b / c", "((a * b) / c)"),
            ("a + b / c", "(a + (b / c))"),
            ("a + b * c + d / e - f", "(((a + (b * c)) + (d / e)) - f)"),
            ("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))"),
            ("5 < 4 != 3 > 4", "((5 < 4) != (3 > 4))"),
            ("3 + 4 * 5 == 3 * 1 + 4 * 5", "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))"),
            ("3 > 5 == false", "((3 > 5) == false)"),
            ("1 + (2 + 3) + 4", "((1 + (2 + 3)) + 4)"),
            ("(5 + 5) * 2", "((5 + 5) * 2)"),
            ("2 / (5 + 5)", "(2 / (5 + 5))"),
            ("-(5 + 5)", "(-(5 + 5))"),
            ("!(true == true)", "(!(true == true))"),
            ("a + add(b * c) + d", "((a + add((b * c))) + d)"),
            ("add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))", "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))"),
            ("add(a + b + c * d / f + g)", "add((((a + b) + ((c * d) / f)) + g))"),
            ("a * [1, 2, 3, 4][b * c] * d", "((a * ([1, 2, 3, 4][(b * c)])) * d)"),
            ("add(a * b[2], b[1], 2 * [1, 2][1])", "add((a * (b[2])), (b[1]), (2 * ([1, 2][1])))"),
            ("-a[0]", "(-(a[0]))"),
            ("f(1)(2)", "f(1)(2)"),
        ])

    def test_program_rendering(self):
        self.assertEqual("(3 + 4);\n((-5) * 5);", str(parse("3 + 4; -5 * 5")))
        self.assertEqual("let x = (1 + 2);\nreturn x;", str(parse("let x = 1 + 2; return x")))

    def test_if_expressions(self):
        expr = first_expr("if (x < y) { x }")
        self.assertIsInstance(expr, nodes.IfExpr)
        self.assertEqual("(x < y)", str(expr.cond))
        self.assertEqual(1, len(expr.consequence.stmts))
        self.assertIsNone(expr.alternative)
        self.assertEqual("if ((x < y)) {\n\tx;\n}", str(expr))

        expr = first_expr("if (x < y) { x } else { y }")
        self.assertEqual("y", str(expr.alternative.stmts[0]))
        self.assertEqual("if ((x < y)) {\n\tx;\n} else {\n\ty;\n}", str(expr))

    def test_function_literals(self):
        expr = first_expr("fn(x, y) { x + y; }")
        self.assertIsInstance(expr, nodes.FnLitExpr)
        self.assertEqual(("x", "y"), expr.param_names)
        self.assertEqual("fn(x, y) {\n\t(x + y);\n}", str(expr))

        for src, params in [("fn() {};", ()), ("fn(x) {};", ("x",)), ("fn(x, y, z) {};", ("x", "y", "z"))]:
            expr = first_expr(src)
            self.assertEqual(params, expr.param_names, src)
            self.assertEqual((), expr.body_block.stmts, src)

    def test_call_expressions(self):
        expr = first_expr("add(1, 2 * 3, 4 + 5)")
        self.assertIsInstance(expr, nodes.CallExpr)
        self.assertEqual("add", str(expr.callee))
        self.assertEqual(["1", "(2 * 3)", "(4 + 5)"], [str(arg) for arg in expr.args])
        self.assertEqual((), first_expr("f()").args)

    def test_array_literals(self):
        self.check([
            ("[1, 2 * 2, 3 + 3]", "[1, (2 * 2), (3 + 3)]"),
            ("[]", "[]"),
            ("myArray[1 + 1]", "(myArray[(1 + 1)])"),
        ])

    def test_hash_literals(self):
        self.check([
            ('{"one": 1, "two": 2, "three": 3}', '{"one": 1, "two": 2, "three": 3}'),
            ("{}", "{}"),
            ("{true: 1, false: 2}", "{true: 1, false: 2}"),
            ("{1: 1, 2: 2, 3: 3}", "{1: 1, 2: 2, 3: 3}"),
            ('{"one": 0 + 1, "two": 10 - 8, "three": 15 / 5}', '{"one": (0 + 1), "two": (10 - 8), "three": (15 / 5)}'),
        ])
        expr = first_expr('{"a": 1, "b": 2}')
        self.assertEqual(['"a"', '"b"'], [str(k) for k, _ in expr.entries])


class RoundTripTestCase(unittest.TestCase):

    def test_render_then_reparse(self):
        sources = [
            "a + b * c + d / e - f",
            "!-a; -(5 + 5) * 2",
            "let x = [1, 2 * 3, {\"a\": true}][0]; x",
            "let add = fn(a, b) { return a + b; }; add(1, 2)(3)",
            "if (a < b) { let c = a; c } else { if (!b) { 1 } else { 2 } }",
            "fn() {}",
            "let newAdder = fn(x) { fn(y) { x + y } };",
            '{"k": fn(x) { x }, 1: [], true: {}}["k"](len("héllo"))',
            'fn() { "a\nb" }',
            'let f = fn(x) { if (x) { "one\n\ttwo\n" } else { let s = "\n"; s } };',
        ]
        for src in sources:
            program = parse(src)
            self.assertEqual(program, parse(str(program)), src)
            self.assertEqual(str(program), str(parse(str(program))), src)


class ParserErrorTestCase(unittest.TestCase):

    def assertParseError(self, src, *fragments):
        with self.assertRaises(ParserError) as ctx:
            parse(src)
        for fragment in fragments:
            self.assertIn(fragment, str(ctx.exception))
        return ctx.exception

    def test_let_errors(self):
        self.assertParseError("let = 5;", "expected identifier after 'let', got ASSIGN")
        self.assertParseError("let x 5;", "expected next token to be ASSIGN, got INT_LIT")

    def test_missing_delimiters(self):
        self.assertParseError("(1 + 2", "expected next token to be RIGHT_PAREN, got EOF")
        self.assertParseError("[1, 2", "expected next token to be RIGHT_SQUARE_BRACKET, got EOF")
        self.assertParseError("if (x) { 1", "expected next token to be RIGHT_BRACE, got EOF")
        self.assertParseError("if x { 1 }", "expected next token to be LEFT_PAREN, got IDENTIFIER")
        self.assertParseError('{"a" 1}', "expected next token to be COLON, got INT_LIT")

    def test_bad_parameters(self):
        self.assertParseError("fn(1) { 1 }", "expected a parameter identifier, got INT_LIT")
        self.assertParseError("fn(x,) { 1 }", "expected a parameter identifier, got RIGHT_PAREN")

    def test_no_prefix_rule(self):
        self.assertParseError("+ 5", "no prefix parse function for PLUS")
        self.assertParseError("}", "no prefix parse function for RIGHT_BRACE")

    def test_illegal_tokens(self):
        self.assertParseError("1 @ 2", "illegal token '@'")
        self.assertParseError('"never closed', "unterminated string literal")

    def test_integer_out_of_range(self):
        self.assertParseError("9223372036854775808", "integer literal out of range")
        self.assertParseError("1" * 5000, "integer literal out of range")
        self.assertEqual(1, len(self.assertParseError("let x = " + "9" * 5000 + ";").errors))

    def test_errors_are_aggregated(self):
        err = self.assertParseError(
            "let = 1; let y = 2; let x 5; + 1;",
            "encountered 3 error(s) while parsing",
            "1:5: expected identifier after 'let'",
            "expected next token to be ASSIGN",
            "no prefix parse function for PLUS",
        )
        self.assertEqual(3, len(err.errors))

    def test_error_inside_block_is_reported_once(self):
        err = self.assertParseError(
            "let f = fn() { let = 1; 2 }; 3",
            "encountered 1 error(s) while parsing",
            "1:20: expected identifier after 'let'",
        )
        self.assertEqual(1, len(err.errors))

        err = self.assertParseError("if (x) { {\"a\": 1}; let = 2; }; let y 3; 4")
        self.assertEqual(2, len(err.errors))
        self.assertNotIn("RIGHT_BRACE", str(err))

    def test_error_positions(self):
        err = self.assertParseError("let x = 1;\nlet y 2;")
        self.assertEqual(1, len(err.errors))
        self.assertEqual((2, 7), (err.errors[0].line, err.errors[0].col))


if __name__ == "__main__":
    unittest.main()
