from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from parse.tokens import OPERATORS, TokenKind

# Nodes are frozen once built. Positions are kept for messages only and do not
# take part in equality, so a tree parsed from its own rendering compares equal
# to the original.


@dataclass(frozen=True)
class Node:
    line: int = field(compare=False, repr=False)
    col: int = field(compare=False, repr=False)


@dataclass(frozen=True)
class StmtNode(Node):
    pass


@dataclass(frozen=True)
class ExprNode(Node):
    pass


def indent_source(source: str) -> str:
    """Indents rendered source by one tab.

    Lines that continue a multi-line string literal are left alone so the
    literal's value survives rendering. Literals have no escapes, so every `"`
    opens or closes one.
    """
    lines = []
    in_str = False
    for line in source.split("\n"):
        lines.append(line if in_str else "\t" + line)
        if line.count('"') % 2:
            in_str = not in_str
    return "\n".join(lines)


def stmt_source(stmt: StmtNode) -> str:
    """Renders a statement as it appears inside a program or block."""
    if isinstance(stmt, ExprStmt):
        return f"{stmt};"
    return str(stmt)


@dataclass(frozen=True)
class Program(Node):
    stmts: Tuple[StmtNode, ...] = ()

    def __str__(self):
        return "\n".join(map(stmt_source, self.stmts))

    __repr__ = __str__


@dataclass(frozen=True)
class BlockStmt(StmtNode):
    stmts: Tuple[StmtNode, ...] = ()

    def __str__(self):
        if not self.stmts:
            return "{}"
        lines = ["{"]
        for stmt in self.stmts:
            lines.append(indent_source(stmt_source(stmt)))
        lines.append("}")
        return "\n".join(lines)

    __repr__ = __str__


@dataclass(frozen=True)
class LetStmt(StmtNode):
    name: str
    val: ExprNode

    def __str__(self):
        return f"let {self.name} = {self.val};"

    __repr__ = __str__


@dataclass(frozen=True)
class ReturnStmt(StmtNode):
    return_val: ExprNode

    def __str__(self):
        return f"return {self.return_val};"

    __repr__ = __str__


@dataclass(frozen=True)
class ExprStmt(StmtNode):
    expr: ExprNode

    def __str__(self):
        return str(self.expr)

    __repr__ = __str__


@dataclass(frozen=True)
class IdentifierExpr(ExprNode):
    name: str

    def __str__(self):
        return self.name

    __repr__ = __str__


@dataclass(frozen=True)
class IntLitExpr(ExprNode):
    val: int

    def __str__(self):
        return str(self.val)

    __repr__ = __str__


@dataclass(frozen=True)
class BoolLitExpr(ExprNode):
    val: bool

    def __str__(self):
        return "true" if self.val else "false"

    __repr__ = __str__


@dataclass(frozen=True)
class StrLitExpr(ExprNode):
    val: str

    def __str__(self):
        # no escapes exist in the language, so the raw text round-trips
        return f'"{self.val}"'

    __repr__ = __str__


@dataclass(frozen=True)
class ArrayLitExpr(ExprNode):
    elements: Tuple[ExprNode, ...]

    def __str__(self):
        element_list = ", ".join(map(str, self.elements))
        return f"[{element_list}]"

    __repr__ = __str__


@dataclass(frozen=True)
class HashLitExpr(ExprNode):
    entries: Tuple[Tuple[ExprNode, ExprNode], ...]

    def __str__(self):
        entry_list = ", ".join(f"{k}: {v}" for k, v in self.entries)
        return f"{{{entry_list}}}"

    __repr__ = __str__


@dataclass(frozen=True)
class PrefixExpr(ExprNode):
    op: TokenKind
    operand: ExprNode

    def __str__(self):
        return f"({OPERATORS[self.op]}{self.operand})"

    __repr__ = __str__


@dataclass(frozen=True)
class InfixExpr(ExprNode):
    op: TokenKind
    left: ExprNode
    right: ExprNode

    def __str__(self):
        return f"({self.left} {OPERATORS[self.op]} {self.right})"

    __repr__ = __str__


@dataclass(frozen=True)
class IfExpr(ExprNode):
    cond: ExprNode
    consequence: BlockStmt
    alternative: Optional[BlockStmt] = None

    def __str__(self):
        parts = [f"if ({self.cond}) {self.consequence}"]
        if self.alternative is not None:
            parts.append(f" else {self.alternative}")
        return "".join(parts)

    __repr__ = __str__


@dataclass(frozen=True)
class FnLitExpr(ExprNode):
    param_names: Tuple[str, ...]
    body_block: BlockStmt

    def __str__(self):
        params = ", ".join(self.param_names)
        return f"fn({params}) {self.body_block}"

    __repr__ = __str__


@dataclass(frozen=True)
class CallExpr(ExprNode):
    callee: ExprNode
    args: Tuple[ExprNode, ...]

    def __str__(self):
        args = ", ".join(map(str, self.args))
        return f"{self.callee}({args})"

    __repr__ = __str__


@dataclass(frozen=True)
class IndexExpr(ExprNode):
    obj: ExprNode
    index: ExprNode

    def __str__(self):
        return f"({self.obj}[{self.index}])"

    __repr__ = __str__


AnyNode = Union[Program, StmtNode, ExprNode]
