# Core type aliases for minilisp's data model.
# Plain Python types (float, bool, str, list) represent both code (forms) and
# runtime values; wrapper classes cover the variants Python has no type for
# (Symbol, Nil, Quote, HardFunc, Lambda, ValueType, Foreign).
#
# Naming guidance:
# - SExpression: Use in reader code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable.

import logging
from typing import Any, Callable

# Runtime value alias
LispValue = Any
SExpression = LispValue

# Built-in function type: called with the evaluator and the argument list
BuiltinFn = Callable[..., LispValue]

logging.getLogger(__name__).addHandler(logging.NullHandler())

from minilisp.types.errors import LispError  # noqa: E402
from minilisp.types.foreign import Foreign, ForeignType  # noqa: E402
from minilisp.interpreter import Interpreter  # noqa: E402

__all__ = [
    "LispValue",
    "SExpression",
    "BuiltinFn",
    "LispError",
    "Foreign",
    "ForeignType",
    "Interpreter",
]
