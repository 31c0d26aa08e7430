"""
quill.runtime.errors - Exceptions raised by the reader and by runtime values

- ReadError: the source text could not be read into a form
- WrongTypeError: a value of the wrong kind was given (e.g. expected a record)
- ArityError: a function was called with the wrong number of arguments

All three derive from Python's builtin SyntaxError/TypeError so callers can
catch them the same way they catch errors raised by Python itself.
"""

from typing import Optional


class ReadError(SyntaxError):
    """
    Raised (or yielded by the top-level reader) when source text cannot be
    parsed into a form.

    Attributes:
        msg: Human-readable diagnostic, including the position
        lineno: 1-based line of the failure
        offset: 1-based column of the failure
        text: The source line containing the failure
        context: Names of the enclosing grammar alternatives, outermost first
    """

    def __init__(
        self,
        msg: str,
        lineno: Optional[int] = None,
        offset: Optional[int] = None,
        text: Optional[str] = None,
        context: tuple[str, ...] = (),
    ):
        super().__init__(msg, (None, lineno, offset, text))
        self.context = tuple(context)

    def __str__(self):
        return self.msg


class WrongTypeError(TypeError):
    """Raised when a value is not of the kind an operation requires."""

    def __init__(self, expected: str, given: str):
        super().__init__(f"Wrong type: expected {expected}, given {given}")
        self.expected = expected
        self.given = given


class ArityError(TypeError):
    """Raised when a function receives the wrong number of arguments."""

    def __init__(self, name: str, expected: int, variadic: bool, given: int):
        bound = f"at least {expected}" if variadic else f"exactly {expected}"
        super().__init__(f"{name} takes {bound} argument(s), got {given}")
        self.name = name
        self.expected = expected
        self.variadic = variadic
        self.given = given


__all__ = [
    "ReadError",
    "WrongTypeError",
    "ArityError",
]
