class InternalError(Exception):
    """Raised when the interpreter reaches a state that valid input never produces."""

    def __init__(self, msg: str):
        super().__init__(f"internal error: {msg}")
        self.msg = msg
