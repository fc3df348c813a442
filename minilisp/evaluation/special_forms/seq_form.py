from minilisp import LispValue
from minilisp.types.arity import Unconstrained
from minilisp.types.nil import Nil

ARITY = Unconstrained()


def seq_form(evaluator, args: list[LispValue]) -> LispValue:
    """(seq a b c): arguments were evaluated left to right; return the last."""
    return args[-1] if args else Nil
