import logging
from argparse import ArgumentParser
from os.path import isfile, splitext
from sys import exit
from typing import Optional, Sequence

import monkey
import repl
from parse.errors import ParserError
from runtime.environment import Environment
from runtime.errors import EvaluationError
from runtime.objects import Null

SOURCE_EXT = ".monkey"

arg_parser = ArgumentParser(description="Evaluate Monkey source code")
arg_parser.add_argument(
    "path", nargs="?", help="path to the code to evaluate (starts a REPL if omitted)"
)
arg_parser.add_argument(
    "-a", "--ast", action="store_true", help="whether or not to show the ast"
)
arg_parser.add_argument(
    "-d", "--debug", action="store_true", help="log tokens, ast and calls to stderr"
)


def main(argv: Optional[Sequence[str]] = None):
    args = arg_parser.parse_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    if args.path is None:
        repl.start()
        return

    input_path: str = args.path
    if not isfile(input_path):
        print("the path specified does not exist")
        exit(1)
    if splitext(input_path)[1].lower() != SOURCE_EXT:
        print(f"the file must have a {SOURCE_EXT} extension")
        exit(1)

    with open(input_path) as f:
        src = f.read()

    try:
        program = monkey.parse(src)
        if args.ast:
            print(program)
            print()
        result = monkey.evaluate(program, Environment())
    except (ParserError, EvaluationError) as e:
        repl.report(e)
        exit(1)

    # a script made of puts calls only shows what it printed
    if not isinstance(result, Null):
        print(result)


if __name__ == "__main__":
    main()
