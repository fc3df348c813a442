from minilisp import SExpression, LispValue
from minilisp.types.arity import AtLeast, Fixed
from minilisp.types.convert import as_list, as_sym
from minilisp.types.errors import InvalidArguments

ARITY = AtLeast(2)


def let_form(evaluator, tail: list[SExpression]) -> LispValue:
    """
    (let ((name expr) ...) body...)

    Bindings are evaluated in order and stored in the let's own call frame,
    which the evaluator pops when the form finishes. Later bindings see
    earlier ones.
    """
    bindings, *body = tail
    for binding in as_list(bindings):
        pair = as_list(binding)
        if len(pair) != 2:
            raise InvalidArguments(Fixed(2), len(pair))
        name = as_sym(pair[0])
        evaluator.set_local(name, evaluator.eval(pair[1]))
    return evaluator.eval_body(body)
