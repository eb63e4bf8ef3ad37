import logging
from typing import Optional

from parse.nodes import Program
from parse.parser import parse
from runtime.builtins import BUILT_IN_FNS, BuiltInFnCollection
from runtime.environment import Environment
from runtime.interpreter import Interpreter
from runtime.objects import Object

logger = logging.getLogger(__name__)

__all__ = ["Environment", "Program", "evaluate", "parse", "run"]


def evaluate(
    program: Program,
    env: Optional[Environment] = None,
    built_in_fns: BuiltInFnCollection = BUILT_IN_FNS,
) -> Object:
    return Interpreter(built_in_fns).evaluate(program, env if env is not None else Environment())


def run(
    src: str,
    env: Optional[Environment] = None,
    built_in_fns: BuiltInFnCollection = BUILT_IN_FNS,
) -> Object:
    """Parses and evaluates `src`.

    Pass the same environment to successive calls to keep `let` bindings
    between them, as the REPL does.
    """
    program = parse(src)
    result = evaluate(program, env, built_in_fns)
    logger.debug("result: %s", result)
    return result
