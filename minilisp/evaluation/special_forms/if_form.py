from minilisp import SExpression, LispValue
from minilisp.types.arity import OneOf
from minilisp.types.convert import as_bool
from minilisp.types.nil import Nil

ARITY = OneOf(2, 3)


def if_form(evaluator, tail: list[SExpression]) -> LispValue:
    """(if cond then [else]); only the taken branch is evaluated."""
    cond = as_bool(evaluator.eval(tail[0]))

    if cond:
        return evaluator.eval(tail[1])
    elif len(tail) > 2:
        return evaluator.eval(tail[2])
    else:
        return Nil
