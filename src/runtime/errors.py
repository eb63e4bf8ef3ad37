class EvaluationError(Exception):
    """Raised for the first semantic error met while evaluating a program."""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg
