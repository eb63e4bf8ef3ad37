"""Runtime values produced by the interpreter.

Values are immutable once built. Arrays and hashes are never updated in place:
operations that "change" one build a new value, so every binding that refers to
the old value keeps seeing it unchanged.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, ClassVar, Dict, Tuple, Union

from parse import nodes

if TYPE_CHECKING:
    from runtime.environment import Environment


@dataclass(frozen=True)
class Object:
    type_name: ClassVar[str] = "OBJECT"


@dataclass(frozen=True)
class Integer(Object):
    type_name: ClassVar[str] = "INTEGER"
    val: int

    def __str__(self):
        return str(self.val)


@dataclass(frozen=True)
class Boolean(Object):
    type_name: ClassVar[str] = "BOOLEAN"
    val: bool

    def __str__(self):
        return "true" if self.val else "false"


@dataclass(frozen=True)
class String(Object):
    type_name: ClassVar[str] = "STRING"
    val: str

    def __str__(self):
        return self.val


@dataclass(frozen=True)
class Null(Object):
    type_name: ClassVar[str] = "NULL"

    def __str__(self):
        return "null"


@dataclass(frozen=True)
class ReturnValue(Object):
    """Marks the value of a `return` statement while it travels out of nested blocks."""

    type_name: ClassVar[str] = "RETURN_VALUE"
    val: Object

    def __str__(self):
        return str(self.val)


@dataclass(frozen=True, eq=False)
class Function(Object):
    """A user-defined function closed over the environment it was defined in.

    Displays as its source, `fn(params) {` then one tab-indented line per body
    statement then `}`. Body statements render as they do in a block, so
    expression statements carry their `;`.
    """

    type_name: ClassVar[str] = "FUNCTION"
    param_names: Tuple[str, ...]
    body_block: nodes.BlockStmt
    env: "Environment" = field(repr=False)

    def __str__(self):
        params = ", ".join(self.param_names)
        body = "\n".join(nodes.indent_source(nodes.stmt_source(stmt)) for stmt in self.body_block.stmts)
        return f"fn({params}) {{\n{body}\n}}"


@dataclass(frozen=True, eq=False)
class Builtin(Object):
    type_name: ClassVar[str] = "BUILTIN"
    name: str
    fn: Callable[..., Object] = field(repr=False)

    def __str__(self):
        return f"builtin function {self.name}"


@dataclass(frozen=True)
class Array(Object):
    type_name: ClassVar[str] = "ARRAY"
    elements: Tuple[Object, ...] = ()

    def __str__(self):
        element_list = ", ".join(map(str, self.elements))
        return f"[{element_list}]"


HashableObject = Union[Integer, Boolean, String]


@dataclass(frozen=True, eq=True)
class Hash(Object):
    type_name: ClassVar[str] = "HASH"
    # keys compare and hash by value; the dict is never written after construction
    pairs: Dict[HashableObject, Object] = field(default_factory=dict, hash=False)

    def __str__(self):
        entry_list = ", ".join(f"{k}: {v}" for k, v in self.pairs.items())
        return f"{{{entry_list}}}"


def is_hashable(obj: Object) -> bool:
    return isinstance(obj, (Integer, Boolean, String))


NULL = Null()
TRUE = Boolean(True)
FALSE = Boolean(False)


def native_bool(val: bool) -> Boolean:
    return TRUE if val else FALSE


def is_truthy(obj: Object) -> bool:
    return not (isinstance(obj, Null) or obj == FALSE)
