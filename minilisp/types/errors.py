"""Error taxonomy for minilisp.

Every failure raised by the reader or the evaluator derives from LispError, so
a host can catch the whole family in one place and inspect the payload
attributes of the concrete subclass.
"""

from __future__ import annotations

from typing import Any


class LispError(Exception):
    """ Base class for all minilisp errors"""
    pass


# -------------------------------
# Parse-time errors
# -------------------------------
class ParseError(LispError):
    """ Raised when source text cannot be assembled into forms"""
    pass


class UnclosedList(ParseError):
    """ Raised when input ends inside an open list (or after a quote prefix)"""

    def __init__(self, message: str = "Unclosed list: input ended before the matching delimiter"):
        super().__init__(message)


class InvalidListDelimiter(ParseError):
    """ Raised on a stray or mismatched closing delimiter"""

    def __init__(self, token: str):
        super().__init__(f"Invalid list delimiter {token!r}")
        self.token = token


class UnreadableSourceCode(ParseError):
    """ Raised when there is nothing to read"""

    def __init__(self, message: str = "Source code contains no forms"):
        super().__init__(message)


class InvalidHexLiteral(ParseError):
    """ Raised when a '#' literal does not hold valid hexadecimal digits"""

    def __init__(self, literal: str):
        super().__init__(f"Invalid hexadecimal literal {literal!r}")
        self.literal = literal


# -------------------------------
# Evaluation-time errors
# -------------------------------
class EvalError(LispError):
    """ Raised while evaluating a form"""
    pass


class UndeclaredSymbol(EvalError):
    """ Raised when a symbol is not bound in any active scope"""

    def __init__(self, name: str):
        super().__init__(
            f"{name} does not refer to a valid value stored in any currently accessible scope"
        )
        self.name = name


class AttemptToCallNonFunction(EvalError):
    """ Raised when the head of a call form is not callable"""

    def __init__(self, value: Any):
        from minilisp.debug_utils.pprint import to_source

        super().__init__(f"{to_source(value)} is not a callable function")
        self.value = value


class AttemptToEvalEmptyList(EvalError):
    """ Raised when () is evaluated as a call form"""

    def __init__(self):
        super().__init__("Attempt to eval empty list")


class InvalidArguments(EvalError):
    """ Raised when the argument count does not satisfy a callable's arity"""

    def __init__(self, expected, got: int):
        super().__init__(f"expected {expected} arguments, but got {got}")
        self.expected = expected
        self.got = got


class InvalidType(EvalError):
    """ Raised when a value does not have one of the expected variants"""

    def __init__(self, expected: list, got: Any):
        from minilisp.debug_utils.pprint import to_source
        from minilisp.types.value_type import describe

        names = " or ".join(str(t) for t in expected) or "nothing"
        super().__init__(
            f"expected {names}, but got a {describe(got)} with a value of {to_source(got)}"
        )
        self.expected = list(expected)
        self.got = got


class GivenEmptyList(EvalError):
    """ Raised when an element is requested from an empty list"""

    def __init__(self):
        super().__init__("Cannot take any elements out of an empty list")


class LispIOError(EvalError):
    """ Raised when a host-facing built-in fails to read or write"""

    def __init__(self, cause: BaseException | str):
        super().__init__(f"An IO error occurred: {cause}")
        self.cause = cause


class ForeignTypeMismatch(EvalError):
    """ Raised when a foreign value is downcast to the wrong host type"""

    def __init__(self, requested: int, requested_name: str, got: Any):
        from minilisp.debug_utils.pprint import to_source

        super().__init__(
            f"expected foreign type {requested_name} (id {requested}), but got {to_source(got)}"
        )
        self.requested = requested
        self.requested_name = requested_name
        self.got = got


class LispArithmeticError(EvalError):
    """ Raised on division or modulo by zero"""
    pass
