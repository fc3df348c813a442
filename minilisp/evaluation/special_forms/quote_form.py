from minilisp import SExpression, LispValue
from minilisp.types.arity import Fixed

ARITY = Fixed(1)


def quote_form(evaluator, tail: list[SExpression]) -> LispValue:
    """(quote form) returns form without evaluating it."""
    return tail[0]
