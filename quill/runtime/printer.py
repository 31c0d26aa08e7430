"""
quill.runtime.printer - Render expression trees back to reader syntax

pr_str() is the inverse of the reader for every tree the reader produces:
read_str(pr_str(form)) == [form].
"""

from decimal import Decimal

from quill.runtime.types import (
    Bool,
    Function,
    List,
    MethodCall,
    Num,
    Quote,
    String,
    Symbol,
)


def format_num(value: Decimal) -> str:
    """
    Minimal plain decimal form of a number.

    Trailing zeros are dropped and exponents are expanded, so 1.0 -> "1",
    -0.10 -> "-0.1" and 1e3 -> "1000".
    """
    if value.is_zero():
        return "0"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def escape_string(value: str) -> str:
    return value.replace('"', '\\"')


def pr_str(form) -> str:
    """Render a form as source text."""
    if isinstance(form, Symbol):
        return form.name
    if isinstance(form, Num):
        return format_num(form.value)
    if isinstance(form, String):
        return f'"{escape_string(form.value)}"'
    if isinstance(form, Bool):
        return "true" if form.value else "false"
    if isinstance(form, List):
        return "(" + " ".join(pr_str(item) for item in form.items) + ")"
    if isinstance(form, Quote):
        return "'(" + " ".join(pr_str(item) for item in form.items) + ")"
    if isinstance(form, Function):
        # Method calls print as the symbol they were read from
        if isinstance(form.func, MethodCall):
            return "." + form.func.method
        return f"<function {form.name}>"
    return repr(form)


__all__ = ["pr_str", "format_num", "escape_string"]
