"""
quill.reader.reader_macros - Desugaring applied while reading

Two pieces of surface syntax never reach the evaluator as written:

- .name symbols: become a Function that calls the method `name` on the
  record passed as its first argument
      (.push stack 1)  =>  (<method_call<push>> stack 1)
- ^(...) tuple literals: become an application of the builtin tuple
      ^(a b)  =>  (tuple a b)

Both rewrites happen once, at read time. Afterwards the results are ordinary
List/Function nodes.
"""

from typing import Any, Iterable

from quill.runtime.types import Function, List, MethodCall, Symbol

METHOD_CALL_PREFIX = "."
TUPLE_PREFIX = "^"
TUPLE_SYMBOL = "tuple"


def method_call(method: str) -> Function:
    """Build the callable for the symbol `.method`."""
    return Function(
        name=f"method_call<{method}>",
        minimum_args=1,
        variadic=True,
        func=MethodCall(method),
    )


def tuple_form(items: Iterable[Any]) -> List:
    """Desugar the contents of ^(...) into (tuple ...)."""
    return List((Symbol(TUPLE_SYMBOL), *items))


def desugar_symbol(text: str):
    """Return the form for symbol text, applying method-call desugaring."""
    if text.startswith(METHOD_CALL_PREFIX):
        return method_call(text[len(METHOD_CALL_PREFIX) :])
    return Symbol(text)


__all__ = [
    "METHOD_CALL_PREFIX",
    "TUPLE_PREFIX",
    "TUPLE_SYMBOL",
    "method_call",
    "tuple_form",
    "desugar_symbol",
]
