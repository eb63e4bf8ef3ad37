from typing import Optional, Sequence


class ParserError(Exception):
    def __init__(self, msg: str, line: Optional[int] = -1, col: Optional[int] = -1):
        super().__init__(msg if line == -1 or col == -1 else f"{line}:{col}: {msg}")
        self.line = line
        self.col = col
        self.errors: list["ParserError"] = [self]

    @classmethod
    def aggregate(cls, errors: Sequence["ParserError"]) -> "ParserError":
        """Joins the errors of every failing statement into one."""
        messages = "\n".join(map(str, errors))
        err = cls(f"encountered {len(errors)} error(s) while parsing:\n{messages}")
        err.errors = list(errors)
        return err
