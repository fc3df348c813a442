from minilisp import SExpression, LispValue
from minilisp.types.arity import AtLeast, Fixed
from minilisp.types.convert import as_sym
from minilisp.types.errors import InvalidArguments, InvalidType
from minilisp.types.lambda_fn import Lambda
from minilisp.types.nil import Nil
from minilisp.types.symbol import Symbol
from minilisp.types import value_type as vt

ARITY = AtLeast(2)


def define_form(evaluator, tail: list[SExpression]) -> LispValue:
    """
    (define name value)
    (define (name params...) body...)

    The binding goes into the scope one level above define's own call frame,
    so a top-level define is visible globally afterwards.
    """
    target = tail[0]

    if isinstance(target, Symbol):
        if len(tail) != 2:
            raise InvalidArguments(Fixed(2), len(tail))
        value = evaluator.eval(tail[1])
        evaluator.define(target, value)
        return Nil

    if isinstance(target, list):
        signature = target
        if not signature:
            raise InvalidType([vt.SYMBOL], target)
        name = as_sym(signature[0])
        params = [as_sym(p) for p in signature[1:]]
        evaluator.define(name, Lambda(params, tail[1:]))
        return Nil

    raise InvalidType([vt.SYMBOL, vt.LIST], target)
