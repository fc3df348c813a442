"""Runtime type descriptors.

`type_of` classifies any value of the closed union into a ValueType. The
descriptor mirrors the variant tags, with two parameterised cases: a Quote
records the type of its payload, and a Foreign records the registered id of
the host class it wraps.
"""

from __future__ import annotations

from enum import Enum

from minilisp import LispValue
from minilisp.types.symbol import Symbol
from minilisp.types.nil import NilType
from minilisp.types.quote import Quote
from minilisp.types.hard_func import HardFunc
from minilisp.types.lambda_fn import Lambda


class TypeKind(Enum):
    NUMBER = "Number"
    BOOL = "Bool"
    SYMBOL = "Symbol"
    STRING = "Str"
    LIST = "List"
    NIL = "Nil"
    QUOTE = "Quote"
    HARD_FUNC = "HardFunc"
    LAMBDA = "Lambda"
    TYPE = "Type"
    FOREIGN = "Foreign"


class ValueType:
    __slots__ = ("kind", "inner", "foreign_id")

    def __init__(
        self,
        kind: TypeKind,
        inner: ValueType | None = None,
        foreign_id: int | None = None,
    ):
        self.kind = kind
        self.inner = inner
        self.foreign_id = foreign_id

    @classmethod
    def quote_of(cls, inner: ValueType) -> ValueType:
        return cls(TypeKind.QUOTE, inner=inner)

    @classmethod
    def foreign(cls, foreign_id: int) -> ValueType:
        return cls(TypeKind.FOREIGN, foreign_id=foreign_id)

    def matches(self, other: ValueType) -> bool:
        """Like ==, but a bare Quote or Foreign descriptor matches any payload."""
        if self.kind is not other.kind:
            return False
        if self.kind is TypeKind.QUOTE and self.inner is not None and other.inner is not None:
            return self.inner.matches(other.inner)
        if self.kind is TypeKind.FOREIGN and self.foreign_id is not None:
            return self.foreign_id == other.foreign_id
        return True

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, ValueType)
            and self.kind is other.kind
            and self.inner == other.inner
            and self.foreign_id == other.foreign_id
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.inner, self.foreign_id))

    def __str__(self) -> str:
        if self.kind is TypeKind.QUOTE and self.inner is not None:
            return f"Quote({self.inner})"
        if self.kind is TypeKind.FOREIGN and self.foreign_id is not None:
            return f"Foreign({self.foreign_id})"
        return self.kind.value

    def __repr__(self) -> str:
        return f"ValueType({self})"


NUMBER = ValueType(TypeKind.NUMBER)
BOOL = ValueType(TypeKind.BOOL)
SYMBOL = ValueType(TypeKind.SYMBOL)
STRING = ValueType(TypeKind.STRING)
LIST = ValueType(TypeKind.LIST)
NIL = ValueType(TypeKind.NIL)
QUOTE = ValueType(TypeKind.QUOTE)
HARD_FUNC = ValueType(TypeKind.HARD_FUNC)
LAMBDA = ValueType(TypeKind.LAMBDA)
TYPE = ValueType(TypeKind.TYPE)
FOREIGN = ValueType(TypeKind.FOREIGN)


def _classify(value: LispValue) -> ValueType | None:
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return BOOL
    if isinstance(value, float):
        return NUMBER
    if isinstance(value, str):
        return STRING
    if isinstance(value, Symbol):
        return SYMBOL
    if isinstance(value, list):
        return LIST
    if isinstance(value, NilType):
        return NIL
    if isinstance(value, Quote):
        inner = _classify(value.value)
        return ValueType.quote_of(inner) if inner is not None else None
    if isinstance(value, HardFunc):
        return HARD_FUNC
    if isinstance(value, Lambda):
        return LAMBDA
    if isinstance(value, ValueType):
        return TYPE
    from minilisp.types.foreign import Foreign

    if isinstance(value, Foreign):
        return ValueType.foreign(value.type_id)
    return None


def type_of(value: LispValue) -> ValueType:
    """Return the descriptor of `value`; raise InvalidType outside the union."""
    vt = _classify(value)
    if vt is None:
        from minilisp.types.errors import InvalidType

        raise InvalidType([], value)
    return vt


def describe(value: LispValue) -> str:
    """Type name for messages; never raises."""
    vt = _classify(value)
    return str(vt) if vt is not None else f"host {type(value).__name__}"


def values_equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality that never conflates variants (true is not 1)."""
    if a is b:
        return True
    ta, tb = _classify(a), _classify(b)
    if ta is None or tb is None or ta != tb:
        return False
    if isinstance(a, list):
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    return a == b
