import logging

from common.errors import InternalError
from common.limits import in_int_range
from parse import nodes
from parse.tokens import OPERATORS, TokenKind

from runtime.builtins import BUILT_IN_FNS, BuiltInFnCollection
from runtime.environment import Environment
from runtime.errors import EvaluationError
from runtime.objects import (
    NULL,
    Array,
    Boolean,
    Builtin,
    Function,
    Hash,
    Integer,
    Object,
    ReturnValue,
    String,
    is_hashable,
    is_truthy,
    native_bool,
)

logger = logging.getLogger(__name__)


def evaluate(
    node: nodes.AnyNode,
    env: Environment,
    built_in_fns: BuiltInFnCollection = BUILT_IN_FNS,
) -> Object:
    return Interpreter(built_in_fns).evaluate(node, env)


class Interpreter:
    def __init__(self, built_in_fns: BuiltInFnCollection = BUILT_IN_FNS):
        self._built_in_fns = built_in_fns

    def evaluate(self, node: nodes.AnyNode, env: Environment) -> Object:
        if isinstance(node, nodes.Program):
            return self._visit_program(node, env)
        elif isinstance(node, nodes.StmtNode):
            return self._visit_stmt(node, env)
        elif isinstance(node, nodes.ExprNode):
            return self._evaluate_expr(node, env)
        else:
            raise InternalError(f"unhandled node type: {type(node).__name__}")

    def _visit_program(self, program: nodes.Program, env: Environment) -> Object:
        result: Object = NULL
        for stmt in program.stmts:
            result = self._visit_stmt(stmt, env)
            if isinstance(result, ReturnValue):
                return result.val
        return result

    def _visit_block_stmt(self, block: nodes.BlockStmt, env: Environment) -> Object:
        result: Object = NULL
        for stmt in block.stmts:
            result = self._visit_stmt(stmt, env)
            if isinstance(result, ReturnValue):
                # left wrapped so enclosing blocks stop too
                return result
        return result

    def _visit_stmt(self, stmt: nodes.StmtNode, env: Environment) -> Object:
        if isinstance(stmt, nodes.ExprStmt):
            return self._evaluate_expr(stmt.expr, env)
        elif isinstance(stmt, nodes.LetStmt):
            return self._visit_let_stmt(stmt, env)
        elif isinstance(stmt, nodes.ReturnStmt):
            return ReturnValue(self._evaluate_expr(stmt.return_val, env))
        elif isinstance(stmt, nodes.BlockStmt):
            return self._visit_block_stmt(stmt, env)
        else:
            raise InternalError(f"unhandled statement node type: {type(stmt).__name__}")

    def _visit_let_stmt(self, decl: nodes.LetStmt, env: Environment) -> Object:
        val = self._evaluate_expr(decl.val, env)
        return env.declare(decl.name, val)

    def _evaluate_expr(self, expr: nodes.ExprNode, env: Environment) -> Object:
        if isinstance(expr, nodes.IdentifierExpr):
            return self._evaluate_identifier_expr(expr, env)
        elif isinstance(expr, nodes.IntLitExpr):
            return Integer(expr.val)
        elif isinstance(expr, nodes.BoolLitExpr):
            return native_bool(expr.val)
        elif isinstance(expr, nodes.StrLitExpr):
            return String(expr.val)
        elif isinstance(expr, nodes.ArrayLitExpr):
            return Array(self._evaluate_exprs(expr.elements, env))
        elif isinstance(expr, nodes.HashLitExpr):
            return self._evaluate_hash_lit_expr(expr, env)
        elif isinstance(expr, nodes.PrefixExpr):
            operand = self._evaluate_expr(expr.operand, env)
            return self._evaluate_prefix(expr.op, operand)
        elif isinstance(expr, nodes.InfixExpr):
            left = self._evaluate_expr(expr.left, env)
            right = self._evaluate_expr(expr.right, env)
            return self._evaluate_infix(expr.op, left, right)
        elif isinstance(expr, nodes.IfExpr):
            return self._evaluate_if_expr(expr, env)
        elif isinstance(expr, nodes.FnLitExpr):
            return Function(expr.param_names, expr.body_block, env)
        elif isinstance(expr, nodes.CallExpr):
            return self._evaluate_call_expr(expr, env)
        elif isinstance(expr, nodes.IndexExpr):
            obj = self._evaluate_expr(expr.obj, env)
            index = self._evaluate_expr(expr.index, env)
            return self._evaluate_index(obj, index)
        else:
            raise InternalError(f"unhandled expr node type: {type(expr).__name__}")

    def _evaluate_exprs(self, exprs, env: Environment) -> tuple:
        return tuple(self._evaluate_expr(expr, env) for expr in exprs)

    def _evaluate_identifier_expr(self, ident: nodes.IdentifierExpr, env: Environment):
        val = env.lookup(ident.name)
        if val is not None:
            return val
        if ident.name in self._built_in_fns:
            return self._built_in_fns[ident.name]
        raise EvaluationError(f"identifier not found: {ident.name}")

    def _evaluate_hash_lit_expr(self, lit: nodes.HashLitExpr, env: Environment):
        pairs = {}
        for key_expr, val_expr in lit.entries:
            key = self._evaluate_expr(key_expr, env)
            if not is_hashable(key):
                raise EvaluationError(f"unusable as hash key: {key.type_name}")
            pairs[key] = self._evaluate_expr(val_expr, env)
        return Hash(pairs)

    def _evaluate_prefix(self, op: TokenKind, operand: Object) -> Object:
        if op == TokenKind.BANG:
            return native_bool(not is_truthy(operand))
        elif op == TokenKind.MINUS:
            if not isinstance(operand, Integer):
                raise EvaluationError(f"unknown operator: -{operand}")
            return self._checked_int(-operand.val)
        else:
            raise EvaluationError(f"unknown operator: {OPERATORS[op]}{operand}")

    def _evaluate_infix(self, op: TokenKind, left: Object, right: Object) -> Object:
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self._evaluate_int_infix(op, left.val, right.val)
        elif type(left) is not type(right):
            raise EvaluationError(
                f"type mismatch: {left.type_name} {OPERATORS[op]} {right.type_name}"
            )
        elif isinstance(left, String) and op == TokenKind.PLUS:
            return String(left.val + right.val)
        elif isinstance(left, (Boolean, String)) and op == TokenKind.EQ:
            return native_bool(left == right)
        elif isinstance(left, (Boolean, String)) and op == TokenKind.NOT_EQ:
            return native_bool(left != right)
        else:
            raise EvaluationError(f"unknown operator: {left} {OPERATORS[op]} {right}")

    def _evaluate_int_infix(self, op: TokenKind, left: int, right: int) -> Object:
        if op == TokenKind.PLUS:
            return self._checked_int(left + right)
        elif op == TokenKind.MINUS:
            return self._checked_int(left - right)
        elif op == TokenKind.ASTERISK:
            return self._checked_int(left * right)
        elif op == TokenKind.SLASH:
            if right == 0:
                raise EvaluationError("division by zero")
            # truncate toward zero rather than floor
            quotient = abs(left) // abs(right)
            return self._checked_int(quotient if (left < 0) == (right < 0) else -quotient)
        elif op == TokenKind.LT:
            return native_bool(left < right)
        elif op == TokenKind.GT:
            return native_bool(left > right)
        elif op == TokenKind.EQ:
            return native_bool(left == right)
        elif op == TokenKind.NOT_EQ:
            return native_bool(left != right)
        else:
            raise EvaluationError(f"unknown operator: {left} {OPERATORS[op]} {right}")

    def _checked_int(self, val: int) -> Integer:
        if not in_int_range(val):
            raise EvaluationError("integer overflow")
        return Integer(val)

    def _evaluate_if_expr(self, if_expr: nodes.IfExpr, env: Environment) -> Object:
        cond = self._evaluate_expr(if_expr.cond, env)
        if is_truthy(cond):
            return self._visit_block_stmt(if_expr.consequence, env)
        elif if_expr.alternative is not None:
            return self._visit_block_stmt(if_expr.alternative, env)
        return NULL

    def _evaluate_call_expr(self, call: nodes.CallExpr, env: Environment) -> Object:
        fn = self._evaluate_expr(call.callee, env)
        args = self._evaluate_exprs(call.args, env)
        return self.apply(fn, args)

    def apply(self, fn: Object, args: tuple) -> Object:
        if isinstance(fn, Function):
            if (want := len(fn.param_names)) != (got := len(args)):
                raise EvaluationError(
                    f"invalid number of arguments: expected={want}, got={got}"
                )
            logger.debug("call fn(%s) with %s", ", ".join(fn.param_names), args)
            call_env = fn.env.enclose()
            for param, arg in zip(fn.param_names, args):
                call_env.declare(param, arg)
            result = self._visit_block_stmt(fn.body_block, call_env)
            return result.val if isinstance(result, ReturnValue) else result
        elif isinstance(fn, Builtin):
            logger.debug("call builtin %s with %s", fn.name, args)
            return fn.fn(*args)
        else:
            raise EvaluationError(f"not a function: {fn.type_name}")

    def _evaluate_index(self, obj: Object, index: Object) -> Object:
        if isinstance(obj, Array) and isinstance(index, Integer):
            if 0 <= index.val < len(obj.elements):
                return obj.elements[index.val]
            return NULL
        elif isinstance(obj, Hash):
            if not is_hashable(index):
                raise EvaluationError(f"unusable as hash key: {index.type_name}")
            return obj.pairs.get(index, NULL)
        else:
            raise EvaluationError(f"index operator not supported: {obj.type_name}")
