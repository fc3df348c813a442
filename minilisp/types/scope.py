"""A single binding table in the evaluator's scope stack.

Scopes do not link to an outer scope: the evaluator keeps them in an ordered
stack and walks it from innermost to outermost on lookup.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Mapping

from minilisp import LispValue
from minilisp.types.symbol import Symbol

MISSING = object()
_RAISE = object()


def _key(name: Symbol | str) -> str:
    return name.id if isinstance(name, Symbol) else name


class Scope:
    """Mapping from symbol names to values; re-setting a name overwrites it."""

    __slots__ = ("vars",)

    def __init__(self, bindings: Mapping[Symbol | str, LispValue] | None = None):
        self.vars: dict[str, LispValue] = {}
        if bindings:
            self.update(bindings)

    def set(self, name: Symbol | str, value: LispValue) -> None:
        self.vars[_key(name)] = value

    def get(self, name: Symbol | str, default: LispValue = _RAISE) -> LispValue:
        """Return the bound value, or `default`; raise KeyError when neither exists."""
        key = _key(name)
        if key in self.vars:
            return self.vars[key]
        if default is _RAISE:
            raise KeyError(key)
        return default

    def update(self, mapping: Mapping[Symbol | str, LispValue]) -> None:
        """Bulk-set a mapping of names to values."""
        for k, v in mapping.items():
            self.vars[_key(k)] = v

    def names(self) -> Iterator[str]:
        return iter(self.vars)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, (str, Symbol)):
            return False
        return _key(name) in self.vars

    def __len__(self) -> int:
        return len(self.vars)

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Scope {")
            buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
            buffer.write("}>")
            return buffer.getvalue()
