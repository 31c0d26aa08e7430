"""
quill.reader - Source text to Quill forms

The reader recognizes atoms (symbols, strings, numbers, booleans) and
parenthesized forms, applies read-time desugaring (.method symbols and
^(...) tuple literals) and yields one top-level form at a time.

Usage:
    from quill.reader import read, read_str

    for result in read(source):
        if isinstance(result, ReadError):
            ...  # at most one, and always the last result
        else:
            evaluate(result)

    forms = read_str("(+ 1 2) '(a b)")
"""

from quill.reader.reader import (
    ALTERNATIVES,
    ExprIterator,
    Failure,
    Success,
    parse_expr,
    read,
    read_str,
    skip_ignored,
)
from quill.reader.reader_macros import method_call, tuple_form
from quill.runtime.errors import ReadError

__all__ = [
    "ALTERNATIVES",
    "ExprIterator",
    "Failure",
    "Success",
    "parse_expr",
    "read",
    "read_str",
    "skip_ignored",
    "method_call",
    "tuple_form",
    "ReadError",
]
