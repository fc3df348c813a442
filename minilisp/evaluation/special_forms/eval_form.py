from minilisp import LispValue
from minilisp.types.arity import Fixed

ARITY = Fixed(1)


def eval_form(evaluator, args: list[LispValue]) -> LispValue:
    """(eval value): the argument has already been evaluated once; evaluate it again."""
    return evaluator.eval(args[0])
