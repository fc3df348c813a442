"""Arity specifications for built-in callables.

An arity states how many evaluated arguments a callable accepts. The
evaluator checks it before the callable runs and reports the arity itself in
InvalidArguments on a mismatch.
"""

from __future__ import annotations

from typing import Sized

from minilisp.types.errors import InvalidArguments


class Arity:
    __slots__ = ()

    def accepts(self, count: int) -> bool:
        raise NotImplementedError

    def check(self, args: Sized) -> None:
        """Raise InvalidArguments unless `args` has an acceptable length."""
        if not self.accepts(len(args)):
            raise InvalidArguments(self, len(args))

    def __repr__(self) -> str:
        return str(self)


class Fixed(Arity):
    """Exactly `count` arguments."""

    __slots__ = ("count",)

    def __init__(self, count: int):
        self.count = count

    def accepts(self, count: int) -> bool:
        return count == self.count

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Fixed) and other.count == self.count

    def __hash__(self) -> int:
        return hash((Fixed, self.count))

    def __str__(self) -> str:
        return f"Fixed({self.count})"


class OneOf(Arity):
    """Any count from a fixed finite set."""

    __slots__ = ("counts",)

    def __init__(self, *counts: int):
        self.counts = frozenset(counts)

    def accepts(self, count: int) -> bool:
        return count in self.counts

    def __eq__(self, other: object) -> bool:
        return isinstance(other, OneOf) and other.counts == self.counts

    def __hash__(self) -> int:
        return hash((OneOf, self.counts))

    def __str__(self) -> str:
        return f"OneOf({', '.join(str(c) for c in sorted(self.counts))})"


class AtLeast(Arity):
    """`count` or more arguments."""

    __slots__ = ("count",)

    def __init__(self, count: int):
        self.count = count

    def accepts(self, count: int) -> bool:
        return count >= self.count

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AtLeast) and other.count == self.count

    def __hash__(self) -> int:
        return hash((AtLeast, self.count))

    def __str__(self) -> str:
        return f"AtLeast({self.count})"


class Unconstrained(Arity):
    """Any number of arguments, including none."""

    __slots__ = ()

    def accepts(self, count: int) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Unconstrained)

    def __hash__(self) -> int:
        return hash(Unconstrained)

    def __str__(self) -> str:
        return "Any"
