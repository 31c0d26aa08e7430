"""
quill - Reader for the Quill Lisp

Phases covered by this package:
1. Read (quill.reader): Text -> Quill forms
2. Print (quill.runtime.printer): Quill forms -> Text

Evaluation, the symbol table and the record system live outside this package;
quill.runtime.types defines the values they share with the reader.
"""

from quill.reader import ExprIterator, read, read_str
from quill.runtime import (
    ArityError,
    Bool,
    Expr,
    Function,
    List,
    Num,
    Quote,
    ReadError,
    Record,
    String,
    Symbol,
    WrongTypeError,
    pr_str,
)

__version__ = "0.1.0"

__all__ = [
    "ExprIterator",
    "read",
    "read_str",
    "ArityError",
    "Bool",
    "Expr",
    "Function",
    "List",
    "Num",
    "Quote",
    "ReadError",
    "Record",
    "String",
    "Symbol",
    "WrongTypeError",
    "pr_str",
]
