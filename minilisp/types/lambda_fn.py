"""User-defined lambda representation for minilisp."""

from __future__ import annotations

from io import StringIO

from minilisp import SExpression
from minilisp.types.symbol import Symbol


class Lambda:
    """A first-class lambda: formal parameter names plus body forms.

    No environment is captured. The body runs against the scope stack of the
    caller, with the parameters bound in the call's own frame.
    """

    __slots__ = ("params", "body")

    def __init__(self, params: list[Symbol], body: list[SExpression]):
        self.params: list[Symbol] = list(params)
        self.body: list[SExpression] = list(body)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Lambda):
            return False
        from minilisp.types.value_type import values_equal

        return self.params == other.params and values_equal(self.body, other.body)

    def __hash__(self) -> int:
        return hash(tuple(self.params))

    def __str__(self) -> str:
        from minilisp.debug_utils.pprint import to_source

        with StringIO() as buffer:
            buffer.write("(lambda (")
            buffer.write(" ".join(str(p) for p in self.params))
            buffer.write(")")
            for form in self.body:
                buffer.write(" ")
                buffer.write(to_source(form))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the lambda."""
        return str(self)
