"""Conversions between host Python values and minilisp values.

`to_lisp` is total over the host types it knows about; `from_lisp` and the
`as_*` projections are partial and raise InvalidType naming the expected
variants and the value actually received.
"""

from __future__ import annotations

from typing import Any

from minilisp import LispValue
from minilisp.types.errors import InvalidType
from minilisp.types.foreign import Foreign, ForeignType
from minilisp.types.hard_func import HardFunc
from minilisp.types.lambda_fn import Lambda
from minilisp.types.nil import Nil, NilType
from minilisp.types.quote import Quote
from minilisp.types.symbol import Symbol
from minilisp.types import value_type as vt


def to_lisp(obj: Any) -> LispValue:
    """Convert a host value into a language value."""
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, (int, float)):
        return float(obj)
    if obj is None:
        return Nil
    if isinstance(obj, (list, tuple)):
        return [to_lisp(item) for item in obj]
    if isinstance(obj, (str, Symbol, NilType, Quote, HardFunc, Lambda, vt.ValueType, Foreign)):
        return obj
    if isinstance(obj, ForeignType):
        return Foreign.wrap(obj)
    raise InvalidType([vt.FOREIGN], obj)


def as_number(value: LispValue) -> float:
    if isinstance(value, float) and not isinstance(value, bool):
        return value
    raise InvalidType([vt.NUMBER], value)


def as_bool(value: LispValue) -> bool:
    if isinstance(value, bool):
        return value
    raise InvalidType([vt.BOOL], value)


def as_str(value: LispValue) -> str:
    if isinstance(value, str):
        return value
    raise InvalidType([vt.STRING], value)


def as_sym(value: LispValue) -> Symbol:
    if isinstance(value, Symbol):
        return value
    raise InvalidType([vt.SYMBOL], value)


def as_list(value: LispValue) -> list:
    if isinstance(value, list):
        return value
    raise InvalidType([vt.LIST], value)


def unquote(value: LispValue) -> LispValue:
    """Strip exactly one level of quoting."""
    if isinstance(value, Quote):
        return value.value
    raise InvalidType([vt.QUOTE], value)


def _as_int(value: LispValue) -> int:
    number = as_number(value)
    if not number.is_integer():
        raise InvalidType([vt.NUMBER], value)
    return int(number)


def _as_nil(value: LispValue) -> None:
    if value is Nil:
        return None
    raise InvalidType([vt.NIL], value)


def _expect(cls: type, kind: vt.ValueType):
    def project(value: LispValue):
        if isinstance(value, cls):
            return value
        raise InvalidType([kind], value)

    return project


_PROJECTIONS = {
    bool: as_bool,
    float: as_number,
    int: _as_int,
    str: as_str,
    list: as_list,
    type(None): _as_nil,
    NilType: _as_nil,
    Symbol: as_sym,
    Quote: _expect(Quote, vt.QUOTE),
    HardFunc: _expect(HardFunc, vt.HARD_FUNC),
    Lambda: _expect(Lambda, vt.LAMBDA),
    vt.ValueType: _expect(vt.ValueType, vt.TYPE),
}


def from_lisp(value: LispValue, host_type: type) -> Any:
    """Convert a language value into `host_type`.

    ForeignType subclasses are recovered through the identity-checked
    downcast; everything else goes through the projection table.
    """
    if isinstance(host_type, type) and issubclass(host_type, ForeignType):
        if not isinstance(value, Foreign):
            raise InvalidType([vt.FOREIGN], value)
        return value.downcast(host_type)
    project = _PROJECTIONS.get(host_type)
    if project is None:
        raise TypeError(f"No conversion from a lisp value to {host_type!r}")
    return project(value)
