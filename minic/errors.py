from typing import List


class MinicError(Exception):
    """Base class for host-level minic errors."""


class ParseFailure(MinicError):
    """Raised by the convenience runners when the parser reported errors."""
    def __init__(self, errors: List[str]):
        super().__init__("parse failed: " + "; ".join(errors))
        self.errors = list(errors)


class BuiltinError(MinicError):
    """Raised inside a builtin to report a contract violation.

    The registry converts it into an Error value before it reaches the
    evaluator, so user code only ever sees Error values.
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
