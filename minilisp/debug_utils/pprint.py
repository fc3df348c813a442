"""Debug printer: renders values back into source-like text.

Atoms print in a form the reader accepts again, so `parse(to_source(v))`
gives back a value of the same variant for numbers, strings and symbols
(booleans print as the symbols `true`/`false`, which the global scope binds).
Callables, type descriptors and foreign values print as `<...>` markers.
"""

from __future__ import annotations

from minilisp import LispValue
from minilisp.types.symbol import Symbol
from minilisp.types.nil import NilType
from minilisp.types.quote import Quote

REVERSE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def format_number(n: float) -> str:
    if n.is_integer() and abs(n) < 1e16:
        return str(int(n))
    return repr(n)


def escape_string(s: str) -> str:
    return '"' + "".join(REVERSE_ESCAPES.get(ch, ch) for ch in s) + '"'


def to_source(value: LispValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return escape_string(value)
    if isinstance(value, Symbol):
        return value.id
    if isinstance(value, NilType):
        return "nil"
    if isinstance(value, list):
        return "(" + " ".join(to_source(v) for v in value) + ")"
    if isinstance(value, Quote):
        return "'" + to_source(value.value)
    from minilisp.types.value_type import ValueType

    if isinstance(value, ValueType):
        return f"<type {value}>"
    # HardFunc, Lambda and Foreign render themselves
    return str(value)


def display(value: LispValue) -> str:
    """Like to_source, but strings are emitted raw (used by `str`)."""
    if isinstance(value, str):
        return value
    return to_source(value)
