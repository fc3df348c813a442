"""Registry of core forms for the minilisp evaluator.

There is no separate special-form dispatch: every core form is a HardFunc
bound in the global scope. Forms that must control evaluation themselves
(define, if, let, lambda, quote) are flagged `special` and receive their
argument forms unevaluated; eval and seq are ordinary built-ins.
"""

from minilisp.types.hard_func import HardFunc
from minilisp.evaluation.special_forms import (
    define_form,
    eval_form,
    if_form,
    lambda_form,
    let_form,
    quote_form,
    seq_form,
)

SPECIAL_FORMS = {
    "define": HardFunc("define", define_form.define_form, define_form.ARITY, special=True),
    "if": HardFunc("if", if_form.if_form, if_form.ARITY, special=True),
    "let": HardFunc("let", let_form.let_form, let_form.ARITY, special=True),
    "lambda": HardFunc("lambda", lambda_form.lambda_form, lambda_form.ARITY, special=True),
    "quote": HardFunc("quote", quote_form.quote_form, quote_form.ARITY, special=True),
    "eval": HardFunc("eval", eval_form.eval_form, eval_form.ARITY),
    "seq": HardFunc("seq", seq_form.seq_form, seq_form.ARITY),
}
