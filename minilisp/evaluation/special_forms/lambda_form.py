from minilisp import SExpression, LispValue
from minilisp.types.arity import AtLeast
from minilisp.types.convert import as_list, as_sym
from minilisp.types.lambda_fn import Lambda

ARITY = AtLeast(1)


def lambda_form(evaluator, tail: list[SExpression]) -> LispValue:
    # (lambda (params) body...) allows zero or more body forms; with none,
    # calling the function yields nil.
    params, *body = tail
    return Lambda([as_sym(p) for p in as_list(params)], body)
