"""Built-in functions for the minilisp global scope.

This module defines arithmetic, comparison, boolean, list, string,
introspection and I/O built-ins, plus `register`, which seeds a scope with
them, the core forms and the literal constants. Every built-in is called as
``fn(evaluator, args)`` after the evaluator has checked its arity.
"""
from __future__ import annotations

import math

from minilisp import LispValue
from minilisp.debug_utils.pprint import display, to_source
from minilisp.evaluation.special_forms import SPECIAL_FORMS
from minilisp.types.arity import AtLeast, Fixed, OneOf, Unconstrained
from minilisp.types.convert import as_bool, as_list, as_number, as_str
from minilisp.types.errors import (
    GivenEmptyList,
    InvalidType,
    LispArithmeticError,
    LispIOError,
)
from minilisp.types.hard_func import HardFunc
from minilisp.types.nil import Nil, NilType
from minilisp.types.scope import Scope
from minilisp.types.symbol import Symbol
from minilisp.types import value_type as vt


# -------------------------------
# Arithmetic
# -------------------------------
def _numbers(args: list[LispValue]) -> list[float]:
    return [as_number(a) for a in args]


def add(evaluator, args: list[LispValue]) -> float:
    """Return the sum of all arguments."""
    return math.fsum(_numbers(args))


def sub(evaluator, args: list[LispValue]) -> float:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    first, *rest = _numbers(args)
    if not rest:
        return -first
    for x in rest:
        first -= x
    return first


def mul(evaluator, args: list[LispValue]) -> float:
    """Return the product of all arguments."""
    result = 1.0
    for x in _numbers(args):
        result *= x
    return result


def div(evaluator, args: list[LispValue]) -> float:
    """Divide left-to-right; with one arg returns the reciprocal."""
    numbers = _numbers(args)
    if len(numbers) == 1:
        numbers.insert(0, 1.0)
    result, *rest = numbers
    for x in rest:
        if x == 0:
            raise LispArithmeticError("Division by zero")
        result /= x
    return result


def pow_(evaluator, args: list[LispValue]) -> float:
    base, exponent = _numbers(args)
    try:
        result = base ** exponent
    except ZeroDivisionError:
        raise LispArithmeticError("Zero cannot be raised to a negative power") from None
    except OverflowError as e:
        raise LispArithmeticError(str(e)) from None
    if isinstance(result, complex):
        raise LispArithmeticError(f"pow of {to_source(base)} and {to_source(exponent)} is not real")
    return float(result)


def mod(evaluator, args: list[LispValue]) -> float:
    """(mod n d) => n % d."""
    n, d = _numbers(args)
    if d == 0:
        raise LispArithmeticError("Modulo by zero")
    return n % d


# -------------------------------
# Comparison
# -------------------------------
def equals(evaluator, args: list[LispValue]) -> bool:
    """True if all arguments are structurally equal (variant-strict)."""
    first = args[0]
    return all(vt.values_equal(first, other) for other in args[1:])


def not_equals(evaluator, args: list[LispValue]) -> bool:
    return not vt.values_equal(args[0], args[1])


def lt(evaluator, args: list[LispValue]) -> bool:
    """Chainable less-than: a0 < a1 < a2 ..."""
    xs = _numbers(args)
    return all(a < b for a, b in zip(xs, xs[1:]))


def lte(evaluator, args: list[LispValue]) -> bool:
    xs = _numbers(args)
    return all(a <= b for a, b in zip(xs, xs[1:]))


def gt(evaluator, args: list[LispValue]) -> bool:
    xs = _numbers(args)
    return all(a > b for a, b in zip(xs, xs[1:]))


def gte(evaluator, args: list[LispValue]) -> bool:
    xs = _numbers(args)
    return all(a >= b for a, b in zip(xs, xs[1:]))


# -------------------------------
# Boolean logic
# -------------------------------
def logical_and(evaluator, args: list[LispValue]) -> bool:
    return all([as_bool(a) for a in args])


def logical_or(evaluator, args: list[LispValue]) -> bool:
    return any([as_bool(a) for a in args])


def logical_not(evaluator, args: list[LispValue]) -> bool:
    return not as_bool(args[0])


# -------------------------------
# List operations
# -------------------------------
def _as_list_or_nil(value: LispValue) -> list:
    if isinstance(value, NilType):
        return []
    if isinstance(value, list):
        return value
    raise InvalidType([vt.LIST, vt.NIL], value)


def list_builtin(evaluator, args: list[LispValue]) -> list[LispValue]:
    return list(args)


def cons(evaluator, args: list[LispValue]) -> list[LispValue]:
    """Return a new list with head prepended; nil counts as the empty list."""
    head, tail = args
    return [head] + _as_list_or_nil(tail)


def head(evaluator, args: list[LispValue]) -> LispValue:
    xs = as_list(args[0])
    if not xs:
        raise GivenEmptyList()
    return xs[0]


def tail(evaluator, args: list[LispValue]) -> list[LispValue]:
    xs = as_list(args[0])
    if not xs:
        raise GivenEmptyList()
    return xs[1:]


def length(evaluator, args: list[LispValue]) -> float:
    value = args[0]
    if isinstance(value, (list, str)):
        return float(len(value))
    raise InvalidType([vt.LIST, vt.STRING], value)


def nth(evaluator, args: list[LispValue]) -> LispValue:
    xs = as_list(args[1])
    index = as_number(args[0])
    if not index.is_integer():
        raise InvalidType([vt.NUMBER], args[0])
    if not 0 <= index < len(xs):
        raise GivenEmptyList()
    return xs[int(index)]


def append(evaluator, args: list[LispValue]) -> list[LispValue]:
    result: list[LispValue] = []
    for xs in args:
        result.extend(_as_list_or_nil(xs))
    return result


def reverse(evaluator, args: list[LispValue]) -> list[LispValue]:
    return list(reversed(as_list(args[0])))


def map_builtin(evaluator, args: list[LispValue]) -> list[LispValue]:
    """(map f xs): apply f to every element."""
    fn, xs = args
    return [evaluator.call(fn, [x]) for x in as_list(xs)]


def filter_builtin(evaluator, args: list[LispValue]) -> list[LispValue]:
    """(filter f xs): keep elements for which f returns true."""
    fn, xs = args
    return [x for x in as_list(xs) if as_bool(evaluator.call(fn, [x]))]


def apply_builtin(evaluator, args: list[LispValue]) -> LispValue:
    """(apply f xs): call f with the elements of xs as its arguments."""
    fn, xs = args
    return evaluator.call(fn, list(_as_list_or_nil(xs)))


# -------------------------------
# Strings and symbols
# -------------------------------
def str_builtin(evaluator, args: list[LispValue]) -> str:
    """Concatenate; strings are taken verbatim, other values in debug form."""
    return "".join(display(a) for a in args)


def str_len(evaluator, args: list[LispValue]) -> float:
    return float(len(as_str(args[0])))


def substr(evaluator, args: list[LispValue]) -> str:
    """(substr s start [end])"""
    s = as_str(args[0])
    bounds = []
    for bound in args[1:]:
        n = as_number(bound)
        if not n.is_integer():
            raise InvalidType([vt.NUMBER], bound)
        bounds.append(int(n))
    start = bounds[0]
    end = bounds[1] if len(bounds) > 1 else None
    return s[start:end]


def sym(evaluator, args: list[LispValue]) -> Symbol:
    return Symbol(as_str(args[0]))


def type_of(evaluator, args: list[LispValue]) -> vt.ValueType:
    return vt.type_of(args[0])


# -------------------------------
# I/O
# -------------------------------
def print_builtin(evaluator, args: list[LispValue]) -> NilType:
    """Write the debug forms of all arguments, space separated, then a newline."""
    try:
        evaluator.stdout.write(" ".join(to_source(a) for a in args) + "\n")
    except OSError as e:
        raise LispIOError(e) from e
    return Nil


def input_builtin(evaluator, args: list[LispValue]) -> str:
    """(input [prompt]) reads one line, without its trailing newline."""
    try:
        if args:
            evaluator.stdout.write(as_str(args[0]))
            evaluator.stdout.flush()
        line = evaluator.stdin.readline()
    except OSError as e:
        raise LispIOError(e) from e
    if not line:
        raise LispIOError("end of input")
    return line[:-1] if line.endswith("\n") else line


def exit_builtin(evaluator, args: list[LispValue]) -> NilType:
    code = int(as_number(args[0])) if args else 0
    raise SystemExit(code)


BUILTINS = {
    # Arithmetic
    "+": (add, AtLeast(1)),
    "-": (sub, AtLeast(1)),
    "*": (mul, AtLeast(1)),
    "/": (div, AtLeast(1)),
    "pow": (pow_, Fixed(2)),
    "mod": (mod, Fixed(2)),
    # Comparison
    "=": (equals, AtLeast(1)),
    "!=": (not_equals, Fixed(2)),
    "<": (lt, AtLeast(2)),
    "<=": (lte, AtLeast(2)),
    ">": (gt, AtLeast(2)),
    ">=": (gte, AtLeast(2)),
    # Booleans
    "and": (logical_and, Unconstrained()),
    "or": (logical_or, Unconstrained()),
    "not": (logical_not, Fixed(1)),
    # Lists
    "list": (list_builtin, Unconstrained()),
    "cons": (cons, Fixed(2)),
    "head": (head, Fixed(1)),
    "tail": (tail, Fixed(1)),
    "len": (length, Fixed(1)),
    "nth": (nth, Fixed(2)),
    "append": (append, AtLeast(1)),
    "reverse": (reverse, Fixed(1)),
    "map": (map_builtin, Fixed(2)),
    "filter": (filter_builtin, Fixed(2)),
    "apply": (apply_builtin, Fixed(2)),
    # Strings
    "str": (str_builtin, Unconstrained()),
    "str-len": (str_len, Fixed(1)),
    "substr": (substr, OneOf(2, 3)),
    "sym": (sym, Fixed(1)),
    "type-of": (type_of, Fixed(1)),
    # I/O
    "print": (print_builtin, Unconstrained()),
    "input": (input_builtin, OneOf(0, 1)),
    "exit": (exit_builtin, OneOf(0, 1)),
}


# -------------------------------
# Registration
# -------------------------------
def register(scope: Scope) -> None:
    """Register literals, core forms and all builtin functions into `scope`."""
    scope.update(
        {
            "true": True,
            "false": False,
            "nil": Nil,
        }
    )
    scope.update(SPECIAL_FORMS)
    scope.update({name: HardFunc(name, fn, arity) for name, (fn, arity) in BUILTINS.items()})
