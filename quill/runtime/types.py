"""
quill.runtime.types - Core expression types for Quill

This module contains the value types shared by the reader and the evaluator:
- Symbol: Identifiers, resolved later against a symbol table
- Num: Exact decimal numbers (decimal.Decimal, never binary floats)
- String: String literals
- Bool: true / false
- List: Parenthesized forms, both list literals and applications
- Quote: Unevaluated '(...) forms
- Function: Callable values (the reader builds these for .method symbols)
- Record: Abstract base for values that expose named-method dispatch
- MethodCall: The callable behind a desugared .method symbol

All expression nodes are immutable. The reader builds them in one pass and
nothing mutates them afterwards.
"""

import abc
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Union

from quill.runtime.errors import ArityError, WrongTypeError


class _Form:
    """Mixin giving expression nodes their reader-syntax __str__."""

    __slots__ = ()

    def __str__(self):
        from quill.runtime.printer import pr_str

        return pr_str(self)


@dataclass(frozen=True)
class Symbol(_Form):
    """
    An identifier to be resolved by the evaluator.

    Attributes:
        name: The symbol text, exactly as written in the source
    """

    name: str

    def __repr__(self):
        return self.name


@dataclass(frozen=True)
class Num(_Form):
    """
    An arbitrary-precision decimal number.

    Decimal compares by value, so Num("1.0") == Num("1").
    """

    value: Decimal

    def __post_init__(self):
        if not isinstance(self.value, Decimal):
            object.__setattr__(self, "value", Decimal(self.value))

    def __repr__(self):
        return f"Num({self.value})"


@dataclass(frozen=True)
class String(_Form):
    """A string literal, with \\" already unescaped."""

    value: str

    def __repr__(self):
        return f"String({self.value!r})"


@dataclass(frozen=True)
class Bool(_Form):
    value: bool

    def __repr__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class List(_Form):
    """
    A parenthesized form: zero or more sub-expressions in source order.

    The same node is a list literal and, to the evaluator, a function
    application. The reader does not tell the two apart.

    Attributes:
        items: Tuple of sub-expressions
    """

    items: tuple[Any, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    def __repr__(self):
        return f"List({list(self.items)!r})"

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, index):
        return self.items[index]


@dataclass(frozen=True)
class Quote(_Form):
    """
    The unevaluated contents of a '(...) form.

    Distinct from List even when the items are equal.
    """

    items: tuple[Any, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    def __repr__(self):
        return f"Quote({list(self.items)!r})"

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, index):
        return self.items[index]


@dataclass(frozen=True)
class Function(_Form):
    """
    A callable value.

    Attributes:
        name: Display name (e.g. "method_call<push>")
        minimum_args: Minimum number of arguments accepted
        variadic: If False, exactly minimum_args arguments are accepted
        func: Implementation, called as func(args, symbol_table)
    """

    name: str
    minimum_args: int
    variadic: bool
    func: Callable[[tuple, Any], Any]

    def __repr__(self):
        return f"<function {self.name}>"

    def check_arity(self, given: int) -> None:
        if given < self.minimum_args or (
            not self.variadic and given != self.minimum_args
        ):
            raise ArityError(self.name, self.minimum_args, self.variadic, given)

    def call(self, args, symbol_table=None):
        """Check the argument count, then run the implementation."""
        args = tuple(args)
        self.check_arity(len(args))
        return self.func(args, symbol_table)


# =============================================================================
# Records
# =============================================================================


class Record(abc.ABC):
    """
    Abstract base for values exposing named-method dispatch.

    Records are implemented by the record layer, never by the reader. The
    reader only refers to this interface from MethodCall.
    """

    @abc.abstractmethod
    def call_method(self, name: str, args: tuple, symbol_table: Any) -> Any:
        """Call the method `name` with `args`; errors propagate to the caller."""

    def type_name(self) -> str:
        return type(self).__name__


def type_name(value) -> str:
    """Name of a value's type as shown in error messages."""
    if isinstance(value, Record):
        return value.type_name()
    return type(value).__name__


def get_record(value) -> Record:
    """Return `value` if it is a record, else raise WrongTypeError."""
    if isinstance(value, Record):
        return value
    raise WrongTypeError("Record", type_name(value))


@dataclass(frozen=True)
class MethodCall:
    """
    Implementation of a desugared .method symbol.

    Called with (args, symbol_table): args[0] must be a record, and the
    record's method `method` receives the remaining arguments. Whatever the
    record returns or raises is passed through unchanged.
    """

    method: str

    def __call__(self, args, symbol_table=None):
        if not args:
            raise ArityError(f"method_call<{self.method}>", 1, True, 0)
        record = get_record(args[0])
        return record.call_method(self.method, tuple(args[1:]), symbol_table)


Expr = Union[Symbol, Num, String, Bool, List, Quote, Function, Record]

# Type exports
__all__ = [
    "Symbol",
    "Num",
    "String",
    "Bool",
    "List",
    "Quote",
    "Function",
    "Record",
    "MethodCall",
    "Expr",
    "get_record",
    "type_name",
]
