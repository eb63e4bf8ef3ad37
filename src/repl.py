"""Interactive shell for the Monkey interpreter. Uses cmd as backend."""

import cmd
import os
from typing import Optional

from termcolor import colored

import monkey
from parse.errors import ParserError
from runtime.environment import Environment
from runtime.errors import EvaluationError

try:
    import readline
except ImportError:  # readline is missing on some platforms; the shell works without history
    readline = None

BANNER = r"""
       __  ___          __
      /  |/  /__  ___  / /_____ __ __
     / /|_/ / _ \/ _ \/  '_/ -_) // /
    /_/  /_/\___/_//_/_/\_\\__/\_, /
                              /___/
"""

DEFAULT_HISTORY_PATH = os.path.join(os.path.expanduser("~"), ".monkey_history")


def report(err: Exception):
    """Prints an interpreter error in red."""
    kind = "syntax error" if isinstance(err, ParserError) else "runtime error"
    print(colored(f"{kind}: ", "red", attrs=["bold"]) + str(err))


class Shell(cmd.Cmd):
    """Monkey read-eval-print loop."""
    intro = BANNER + "\nWelcome to the Monkey programming language!\nFeel free to type in commands\n"
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, env: Optional[Environment] = None, history_path: Optional[str] = DEFAULT_HISTORY_PATH,
                 *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.env = env if env is not None else Environment()
        self.history_path = history_path
        self._tmp_line = ""

    def preloop(self):
        if readline is not None and self.history_path and os.path.exists(self.history_path):
            readline.read_history_file(self.history_path)

    def postloop(self):
        if readline is not None and self.history_path:
            readline.write_history_file(self.history_path)

    def onecmd(self, line):
        """Sends every line to `default`, bypassing cmd's do_* lookup except for exit."""
        if line.strip() == "EOF":
            return self.do_EOF("")
        if line.strip() == "exit" and not self._tmp_line:
            return self.do_exit("")
        return self.default(line)

    def default(self, line):
        """Evaluates a line of Monkey, or buffers it when it ends with a backslash."""
        line = line.rstrip(" ")
        if line.endswith("\\"):
            self._tmp_line += line[:-1]
            self.prompt = self.secondary_prompt
            return False

        src = self._tmp_line + line
        self._tmp_line = ""
        self.prompt = self._tmp_prompt
        if not src.strip():
            return False

        try:
            result = monkey.run(src, self.env)
        except (ParserError, EvaluationError) as e:
            report(e)
        else:
            print(result)
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        print("Exiting...")
        return True


def start(history_path: Optional[str] = DEFAULT_HISTORY_PATH):
    Shell(history_path=history_path).cmdloop()
