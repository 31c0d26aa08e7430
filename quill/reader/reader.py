"""
quill.reader.reader - Reader for Quill source code

This module turns source text into Quill forms (see quill.runtime.types).

Components:
- Success / Failure: Results of every recognizer; a committed Failure aborts
  the whole parse instead of letting the caller try another alternative
- skip_ignored(): Skips whitespace and ; line comments
- parse_symbol(), parse_string(), parse_num(), parse_bool(): Atoms
- s_exp(): The shared "( inner )" combinator
- parse_list(), parse_quote(), parse_tuple(): Compound forms
- parse_expr(): Tries every alternative in priority order
- ExprIterator / read(): Lazily reads one top-level form at a time
- read_str(): Reads a whole buffer, raising on the first error

Every recognizer is a plain function (src, pos) -> Success | Failure. Positions
are indexes into the original string; nothing is sliced off until an atom's
text is materialized.
"""

import os
import re
import sys
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Union

from quill.reader.reader_macros import TUPLE_PREFIX, desugar_symbol, tuple_form
from quill.runtime.errors import ReadError
from quill.runtime.types import Bool, List, Num, Quote, String

# Characters that always end a symbol (whitespace also does)
RESERVED_CHARS = frozenset("()\"'; ")

# str.isspace() also accepts these, but they are not Unicode White_Space
NON_WHITESPACE_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")

NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

TRACE_ENV_VAR = "QUILL_TRACE_READER"


# =============================================================================
# Parse Results
# =============================================================================


@dataclass(frozen=True)
class Success:
    """
    A recognizer matched; `pos` is the index just past the match.

    A repetition that stopped on a backtrackable failure keeps it in
    `stopped_by`, so a later missing ')' can report the real cause.
    """

    pos: int
    value: Any
    stopped_by: Optional["Failure"] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Failure:
    """
    A recognizer did not match.

    Attributes:
        pos: Index where the failure was detected
        expected: What the grammar wanted at `pos`
        committed: True once a prefix (an opening paren, ' or ^) has been
            consumed; callers must propagate instead of backtracking
        context: Enclosing grammar alternatives, outermost first
    """

    pos: int
    expected: str
    committed: bool = False
    context: tuple[str, ...] = ()

    def commit(self) -> "Failure":
        return replace(self, committed=True)

    def within(self, label: str) -> "Failure":
        return replace(self, context=(label,) + self.context)


ParseResult = Union[Success, Failure]
Parser = Callable[[str, int], ParseResult]


# =============================================================================
# Lexical Skip
# =============================================================================


def is_whitespace(c: str) -> bool:
    return c.isspace() and c not in NON_WHITESPACE_SEPARATORS


def skip_ignored(src: str, pos: int) -> int:
    """
    Skip any mix of whitespace and ; comments starting at `pos`.

    A comment runs to the end of the line (or of the input). Never fails;
    returns `pos` unchanged if there is nothing to skip.
    """
    n = len(src)
    while pos < n:
        c = src[pos]
        if is_whitespace(c):
            pos += 1
        elif c == ";":
            newline = src.find("\n", pos)
            pos = n if newline == -1 else newline + 1
        else:
            break
    return pos


# =============================================================================
# Atoms
# =============================================================================


def is_symbol_char(c: str) -> bool:
    return c not in RESERVED_CHARS and not is_whitespace(c)


def parse_symbol(src: str, pos: int) -> ParseResult:
    end = pos
    n = len(src)
    while end < n and is_symbol_char(src[end]):
        end += 1
    if end == pos:
        return Failure(pos, "symbol")
    # .name symbols become method calls
    return Success(end, desugar_symbol(src[pos:end]))


def parse_string(src: str, pos: int) -> ParseResult:
    """
    Read a "..." literal. The only escape is \\", which becomes a plain quote;
    a backslash followed by anything else does not match.
    """
    if not src.startswith('"', pos):
        return Failure(pos, "string")
    i = pos + 1
    n = len(src)
    buf = []
    while i < n:
        c = src[i]
        if c == '"':
            return Success(i + 1, String("".join(buf)))
        if c == "\\":
            if not src.startswith('"', i + 1):
                return Failure(i, "'\\\"' escape")
            buf.append('"')
            i += 2
            continue
        buf.append(c)
        i += 1
    return Failure(n, "closing '\"'")


def parse_num(src: str, pos: int) -> ParseResult:
    match = NUMBER_RE.match(src, pos)
    if match is None:
        return Failure(pos, "number")
    try:
        value = Decimal(match.group())
    except InvalidOperation:
        return Failure(pos, "number")
    return Success(match.end(), Num(value))


def parse_bool(src: str, pos: int) -> ParseResult:
    if src.startswith("true", pos):
        return Success(pos + 4, Bool(True))
    if src.startswith("false", pos):
        return Success(pos + 5, Bool(False))
    return Failure(pos, "boolean")


# =============================================================================
# Compound Forms
# =============================================================================


def s_exp(inner: Parser) -> Parser:
    """
    Wrap `inner` in parentheses: '(' skip inner skip ')'.

    Once '(' and `inner` have matched, a missing ')' is a committed failure.
    If `inner` stopped on a failure further along than the missing ')', that
    failure is reported instead (e.g. a bad escape in a string).
    """

    def parser(src: str, pos: int) -> ParseResult:
        if not src.startswith("(", pos):
            return Failure(pos, "'('")
        result = inner(src, skip_ignored(src, pos + 1))
        if isinstance(result, Failure):
            return result
        close = skip_ignored(src, result.pos)
        if not src.startswith(")", close):
            stopped_by = result.stopped_by
            if stopped_by is not None and stopped_by.pos > close:
                return stopped_by.commit()
            return Failure(close, "')'", committed=True, context=("closing paren",))
        return Success(close + 1, result.value)

    return parser


def parse_forms(src: str, pos: int) -> ParseResult:
    """Zero or more expressions. Stops at the first backtrackable failure."""
    items = []
    while True:
        result = parse_expr(src, pos)
        if isinstance(result, Failure):
            if result.committed:
                return result
            return Success(pos, items, stopped_by=result)
        items.append(result.value)
        pos = result.pos


_body = s_exp(parse_forms)


def parse_list(src: str, pos: int) -> ParseResult:
    result = _body(src, pos)
    if isinstance(result, Failure):
        return result.within("list") if result.committed else result
    return Success(result.pos, List(result.value))


def _prefixed(prefix: str, label: str, build: Callable[[list], Any]) -> Parser:
    # The prefix commits: '(...) and ^(...) must be complete once started
    def parser(src: str, pos: int) -> ParseResult:
        if not src.startswith(prefix, pos):
            return Failure(pos, label)
        result = _body(src, pos + len(prefix))
        if isinstance(result, Failure):
            return result.commit().within(label)
        return Success(result.pos, build(result.value))

    return parser


parse_quote = _prefixed("'", "quote", Quote)
parse_tuple = _prefixed(TUPLE_PREFIX, "tuple", tuple_form)


# =============================================================================
# Dispatcher
# =============================================================================

# Priority order; boolean must come before symbol so true/false are literals
ALTERNATIVES: tuple[tuple[str, Parser], ...] = (
    ("list", parse_list),
    ("quote", parse_quote),
    ("tuple", parse_tuple),
    ("string", parse_string),
    ("number", parse_num),
    ("boolean", parse_bool),
    ("symbol", parse_symbol),
)


def parse_expr(src: str, pos: int) -> ParseResult:
    """
    Read one expression at `pos`, skipping whitespace and comments on both
    sides.

    Alternatives are tried in ALTERNATIVES order and the first match wins. A
    committed failure is returned as soon as it happens. If everything
    backtracks, the failure that got furthest into the input is reported.
    """
    start = skip_ignored(src, pos)
    furthest: Optional[Failure] = None
    for _name, parser in ALTERNATIVES:
        result = parser(src, start)
        if isinstance(result, Success):
            return Success(skip_ignored(src, result.pos), result.value)
        if result.committed:
            return result
        if furthest is None or result.pos > furthest.pos:
            furthest = result
    assert furthest is not None
    if furthest.pos == start:
        names = ", ".join(name for name, _ in ALTERNATIVES)
        return Failure(start, f"expression ({names})")
    return furthest


# =============================================================================
# Diagnostics
# =============================================================================


def location(src: str, pos: int) -> tuple[int, int, str]:
    """1-based (line, column) of `pos`, plus the text of that line."""
    line = src.count("\n", 0, pos) + 1
    line_start = src.rfind("\n", 0, pos) + 1
    line_end = src.find("\n", pos)
    if line_end == -1:
        line_end = len(src)
    return line, pos - line_start + 1, src[line_start:line_end]


def make_read_error(src: str, failure: Failure) -> ReadError:
    line, col, text = location(src, failure.pos)
    found = repr(src[failure.pos]) if failure.pos < len(src) else "end of input"
    msg = f"expected {failure.expected} at line {line}, column {col}, found {found}"
    if failure.context:
        msg += f" (in {' > '.join(failure.context)})"
    return ReadError(msg, line, col, text, failure.context)


def trace_enabled() -> bool:
    value = os.environ.get(TRACE_ENV_VAR, "")
    return value.strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# Top-level Reader
# =============================================================================


class ExprIterator:
    """
    Lazily reads top-level forms from a source string.

    Each step yields either a form or, once, a ReadError. After an error (or
    once only whitespace and comments remain) the iterator is exhausted; to
    read again, create a new iterator.
    Input nested deeper than the recursion limit allows also ends in a
    ReadError.
    """

    def __init__(self, src: str, trace: Optional[bool] = None):
        self.src = src
        self.pos = 0
        self.done = False
        self.trace = trace_enabled() if trace is None else trace

    @property
    def remaining(self) -> str:
        """The input not consumed yet."""
        return self.src[self.pos :]

    def __iter__(self):
        return self

    def __next__(self):
        if self.done:
            raise StopIteration
        start = skip_ignored(self.src, self.pos)
        if start >= len(self.src):
            self.pos = start
            self.done = True
            raise StopIteration
        try:
            result = parse_expr(self.src, start)
        except RecursionError:
            result = Failure(
                start, "a less deeply nested form", context=("nesting limit",)
            )
        if isinstance(result, Failure):
            self.done = True
            error = make_read_error(self.src, result)
            self._trace(f"error: {error}")
            return error
        self.pos = result.pos
        self._trace(f"read: {result.value}")
        return result.value

    def _trace(self, message: str) -> None:
        if self.trace:
            print(f"[reader] {message}", file=sys.stderr)
            sys.stderr.flush()


def read(src: str, trace: Optional[bool] = None) -> ExprIterator:
    """Lazily read `src`; see ExprIterator."""
    return ExprIterator(src, trace=trace)


def read_str(src: str) -> list:
    """Read every form in `src`. Raises the ReadError if reading fails."""
    forms = []
    for result in read(src):
        if isinstance(result, ReadError):
            raise result
        forms.append(result)
    return forms


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Results
    "Success",
    "Failure",
    # Lexical skip and atoms
    "is_whitespace",
    "skip_ignored",
    "parse_symbol",
    "parse_string",
    "parse_num",
    "parse_bool",
    # Compound forms
    "s_exp",
    "parse_forms",
    "parse_list",
    "parse_quote",
    "parse_tuple",
    # Dispatcher and top-level reader
    "ALTERNATIVES",
    "parse_expr",
    "make_read_error",
    "ExprIterator",
    "read",
    "read_str",
]
