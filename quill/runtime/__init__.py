"""
quill.runtime - Values shared by the reader and the evaluator

Submodules:
- types: Expression nodes (Symbol, Num, String, Bool, List, Quote,
  Function), the Record interface and MethodCall
- errors: ReadError, WrongTypeError, ArityError
- printer: pr_str(), rendering forms back to source text

The runtime has no dependency on the reader.
"""

from quill.runtime.errors import ArityError, ReadError, WrongTypeError
from quill.runtime.printer import pr_str
from quill.runtime.types import (
    Bool,
    Expr,
    Function,
    List,
    MethodCall,
    Num,
    Quote,
    Record,
    String,
    Symbol,
    get_record,
    type_name,
)

__all__ = [
    "Bool",
    "Expr",
    "Function",
    "List",
    "MethodCall",
    "Num",
    "Quote",
    "Record",
    "String",
    "Symbol",
    "get_record",
    "type_name",
    "ArityError",
    "ReadError",
    "WrongTypeError",
    "pr_str",
]
