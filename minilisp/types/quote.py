from __future__ import annotations

from minilisp import LispValue


class Quote:
    """Wraps one value and suppresses its evaluation.

    Evaluating a Quote hands back the payload exactly as it was parsed or
    constructed; `''x` needs two evaluations to reach the symbol.
    """

    __slots__ = ("value",)

    def __init__(self, value: LispValue):
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quote):
            return False
        from minilisp.types.value_type import values_equal

        return values_equal(self.value, other.value)

    def __hash__(self) -> int:
        return hash(("quote", repr(self.value)))

    def __repr__(self) -> str:
        return f"Quote({self.value!r})"

    def __str__(self) -> str:
        from minilisp.debug_utils.pprint import to_source

        return to_source(self)
