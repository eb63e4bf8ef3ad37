from typing import Dict

from runtime.errors import EvaluationError
from runtime.objects import NULL, Array, Builtin, Integer, Object, String

BuiltInFnCollection = Dict[str, Builtin]


def _check_arg_count(expected: int, args: tuple):
    if len(args) != expected:
        raise EvaluationError(
            f"wrong number of arguments: expected={expected}, got={len(args)}"
        )


def _expect_array(name: str, obj: Object) -> Array:
    if not isinstance(obj, Array):
        raise EvaluationError(f"argument to `{name}` must be ARRAY, got {obj}")
    return obj


def _len(*args: Object):
    _check_arg_count(1, args)
    (arg,) = args
    if isinstance(arg, String):
        return Integer(len(arg.val))
    elif isinstance(arg, Array):
        return Integer(len(arg.elements))
    raise EvaluationError(f"argument to `len` not supported, got {arg}")


def _first(*args: Object):
    _check_arg_count(1, args)
    arr = _expect_array("first", args[0])
    return arr.elements[0] if arr.elements else NULL


def _last(*args: Object):
    _check_arg_count(1, args)
    arr = _expect_array("last", args[0])
    return arr.elements[-1] if arr.elements else NULL


def _rest(*args: Object):
    _check_arg_count(1, args)
    arr = _expect_array("rest", args[0])
    return Array(arr.elements[1:]) if arr.elements else NULL


def _push(*args: Object):
    _check_arg_count(2, args)
    arr = _expect_array("push", args[0])
    return Array(arr.elements + (args[1],))


def _puts(*args: Object):
    for arg in args:
        print(arg)
    return NULL


BUILT_IN_FNS: BuiltInFnCollection = {
    builtin.name: builtin
    for builtin in (
        Builtin("len", _len),
        Builtin("first", _first),
        Builtin("last", _last),
        Builtin("rest", _rest),
        Builtin("push", _push),
        Builtin("puts", _puts),
    )
}
