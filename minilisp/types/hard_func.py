"""Built-in function wrapper."""

from __future__ import annotations

from minilisp import BuiltinFn
from minilisp.types.arity import Arity, Unconstrained


class HardFunc:
    """A host-implemented callable with an arity specification.

    `fn` is called as ``fn(evaluator, args)``. When `special` is set, the
    evaluator passes the unevaluated argument forms instead of their values,
    which lets forms such as `if` and `let` control evaluation themselves.
    Two HardFuncs are equal when they wrap the same function object with the
    same arity.
    """

    __slots__ = ("name", "fn", "arity", "special")

    def __init__(
        self,
        name: str,
        fn: BuiltinFn,
        arity: Arity | None = None,
        special: bool = False,
    ):
        self.name = name
        self.fn = fn
        self.arity: Arity = arity if arity is not None else Unconstrained()
        self.special = special

    def __call__(self, evaluator, args: list):
        return self.fn(evaluator, args)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, HardFunc)
            and self.fn is other.fn
            and self.arity == other.arity
        )

    def __hash__(self) -> int:
        return hash((id(self.fn), self.arity))

    def __repr__(self) -> str:
        return f"HardFunc({self.name!r}, {self.arity})"

    def __str__(self) -> str:
        return f"<builtin {self.name}>"
