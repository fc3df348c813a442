"""Identifiers of the language.

Symbols are both code (names looked up in the scope stack) and data (the
result of quoting a name). Names are interned, so two symbols with the same
spelling share one string and compare cheaply.
"""

from __future__ import annotations

import sys


class Symbol:
    __slots__ = ("id",)

    def __init__(self, name: str):
        if not isinstance(name, str):
            raise TypeError(f"Symbol name must be a str, not {type(name).__name__}")
        self.id = sys.intern(name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.id is other.id

    def __hash__(self) -> int:
        return hash(self.id)

    # Immutable: copies share the instance, like Nil
    def __copy__(self) -> Symbol:
        return self

    def __deepcopy__(self, memo) -> Symbol:
        return self

    def __repr__(self) -> str:
        return f"Symbol({self.id!r})"

    def __str__(self) -> str:
        return self.id
