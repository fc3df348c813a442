import pytest

from minilisp.types import errors
from minilisp.types import value_type as vt
from minilisp.types.arity import AtLeast, Fixed
from minilisp.types.hard_func import HardFunc
from minilisp.types.lambda_fn import Lambda
from minilisp.types.nil import Nil
from minilisp.types.quote import Quote
from minilisp.types.symbol import Symbol


def _pair(evaluator, args):
    return list(args)


# -----------------------------------------------------
# Self-evaluating values and symbols
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("1", 1.0),
        ("2.5", 2.5),
        ('"hello"', "hello"),
        ("true", True),
        ("false", False),
    ]
)
def test_self_evaluating_literals(lisp, source, expected):
    result = lisp.eval(source)
    assert result == expected
    assert type(result) is type(expected)


def test_nil_literal(lisp):
    assert lisp.eval("nil") is Nil


def test_values_evaluate_to_themselves(lisp):
    ev = lisp.evaluator
    f = HardFunc("pair", _pair, Fixed(2))
    lam = Lambda([Symbol("x")], [Symbol("x")])
    assert ev.eval(f) is f
    assert ev.eval(lam) is lam
    assert ev.eval(vt.NUMBER) is vt.NUMBER
    assert ev.eval(Nil) is Nil


def test_symbol_lookup(lisp):
    lisp.set_global("x", 42)
    assert lisp.eval("x") == 42.0


def test_undeclared_symbol(lisp):
    with pytest.raises(errors.UndeclaredSymbol) as exc:
        lisp.eval("not-defined")
    assert exc.value.name == "not-defined"


# -----------------------------------------------------
# Quoting
# -----------------------------------------------------

def test_quote_form_returns_list_of_symbols(lisp):
    expected = [Symbol("a"), Symbol("b"), Symbol("c")]
    assert lisp.eval("(quote (a b c))") == expected
    assert lisp.eval("'(a b c)") == expected
    assert lisp.eval("{a b c}") == expected


def test_quote_is_unwrapped_exactly_once(lisp):
    assert lisp.eval("''a") == Quote(Symbol("a"))
    assert lisp.eval("'a") == Symbol("a")


def test_quoted_payload_is_not_reentered(lisp):
    # (undefined) would fail if it were evaluated
    assert lisp.eval("'(undefined)") == [Symbol("undefined")]


# -----------------------------------------------------
# Call forms
# -----------------------------------------------------

def test_empty_call_form(lisp):
    with pytest.raises(errors.AttemptToEvalEmptyList):
        lisp.eval("()")


def test_call_non_function(lisp):
    with pytest.raises(errors.AttemptToCallNonFunction) as exc:
        lisp.eval('("not a function" 1)')
    assert exc.value.value == "not a function"


def test_builtin_arity_fixed_two(lisp):
    lisp.set_global("pair", HardFunc("pair", _pair, Fixed(2)))
    assert lisp.eval("(pair 1 2)") == [1.0, 2.0]

    for source, got in (("(pair 1)", 1), ("(pair 1 2 3)", 3)):
        with pytest.raises(errors.InvalidArguments) as exc:
            lisp.eval(source)
        assert exc.value.expected == Fixed(2)
        assert exc.value.got == got


def test_builtin_receives_evaluator_and_evaluated_args(lisp):
    seen = {}

    def spy(evaluator, args):
        seen["evaluator"] = evaluator
        seen["args"] = args
        return Nil

    lisp.set_global("spy", HardFunc("spy", spy))
    lisp.eval("(spy (+ 1 2) 'x)")
    assert seen["evaluator"] is lisp.evaluator
    assert seen["args"] == [3.0, Symbol("x")]


def test_special_builtin_receives_raw_forms(lisp):
    lisp.set_global("raw", HardFunc("raw", _pair, Fixed(2), special=True))
    assert lisp.eval("(raw (+ 1 2) y)") == [[Symbol("+"), 1.0, 2.0], Symbol("y")]


def test_head_can_be_any_form(lisp):
    assert lisp.eval("((lambda (x y) (+ x y)) 2 3)") == 5.0


def test_multiple_forms_return_last(lisp):
    assert lisp.eval("(define a 2) (* a a)") == 4.0


def test_arguments_are_evaluated_left_to_right(lisp, stdout):
    lisp.eval('(list (print "a") (print "b") (print "c"))')
    assert stdout.getvalue() == '"a"\n"b"\n"c"\n'


# -----------------------------------------------------
# Lambdas
# -----------------------------------------------------

def test_define_function_and_call(lisp):
    lisp.eval("(define (sq x) (* x x))")
    assert lisp.eval("(sq 5)") == 25.0


def test_lambda_arity_mismatch(lisp):
    lisp.eval("(define (sq x) (* x x))")
    with pytest.raises(errors.InvalidArguments) as exc:
        lisp.eval("(sq 1 2)")
    assert exc.value.expected == Fixed(1)
    assert exc.value.got == 2


def test_lambda_body_returns_last_form(lisp, stdout):
    lisp.eval('(define (f) (print "side effect") 7)')
    assert lisp.eval("(f)") == 7.0
    assert stdout.getvalue() == '"side effect"\n'


def test_lambda_with_empty_body_returns_nil(lisp):
    assert lisp.eval("((lambda ()))") is Nil


def test_lambda_value(lisp):
    lam = lisp.eval("(lambda (a b) (+ a b))")
    assert isinstance(lam, Lambda)
    assert lam.params == [Symbol("a"), Symbol("b")]
    assert lam.body == [[Symbol("+"), Symbol("a"), Symbol("b")]]


def test_recursion(lisp):
    lisp.eval("(define (fact n) (if (<= n 1) 1 (* n (fact (- n 1)))))")
    assert lisp.eval("(fact 10)") == 3628800.0


def test_arguments_are_evaluated_before_parameters_are_bound(lisp):
    lisp.eval("(define (pair a b) (list a b))")
    lisp.eval("(define (swap a b) (pair b a))")
    assert lisp.eval("(swap 1 2)") == [2.0, 1.0]


def test_argument_forms_see_the_callers_bindings(lisp):
    lisp.eval("(define (f x y) y)")
    assert lisp.eval("(let ((x 10)) (f 1 x))") == 10.0


def test_lambda_params_are_not_visible_after_call(lisp):
    lisp.eval("(define (id x) x)")
    lisp.eval("(id 1)")
    with pytest.raises(errors.UndeclaredSymbol):
        lisp.eval("x")


# -----------------------------------------------------
# Scope stack
# -----------------------------------------------------

def test_let_shadowing(lisp):
    assert lisp.eval("(let ((x 1)) (let ((x 2)) x))") == 2.0
    with pytest.raises(errors.UndeclaredSymbol):
        lisp.eval("x")


def test_let_inner_binding_does_not_leak_into_outer(lisp):
    assert lisp.eval("(let ((x 1)) (let ((x 2)) x) x)") == 1.0


def test_lambda_free_names_resolve_in_callers_scope(lisp):
    lisp.eval("(define (get-y) y)")
    assert lisp.eval("(let ((y 7)) (get-y))") == 7.0
    assert lisp.eval("(let ((y 8)) (get-y))") == 8.0
    with pytest.raises(errors.UndeclaredSymbol):
        lisp.eval("(get-y)")


def test_lambda_does_not_capture_definition_scope(lisp):
    lisp.eval("(define make (lambda (n) (lambda () n)))")
    with pytest.raises(errors.UndeclaredSymbol):
        lisp.eval("((make 1))")


def test_define_inside_lambda_is_local_to_the_call(lisp):
    lisp.eval("(define (f) (define z 10) (+ z 1))")
    assert lisp.eval("(f)") == 11.0
    with pytest.raises(errors.UndeclaredSymbol):
        lisp.eval("z")


def test_top_level_define_is_global(lisp):
    assert lisp.eval("(define x 1)") is Nil
    assert lisp.get_global("x") == 1.0
    assert lisp.evaluator.depth == 1


@pytest.mark.parametrize(
    "source,error",
    [
        ("(+ 1 (head (list)))", errors.GivenEmptyList),
        ("(let ((a 1)) (let ((b 2)) (undefined a b)))", errors.UndeclaredSymbol),
        ("((lambda (x) (x)) 1)", errors.AttemptToCallNonFunction),
        ("(list (list ()))", errors.AttemptToEvalEmptyList),
        ("(if 1 2 3)", errors.InvalidType),
    ]
)
def test_scopes_are_popped_on_failure(lisp, source, error):
    with pytest.raises(error):
        lisp.eval(source)
    assert lisp.evaluator.depth == 1


def test_builtin_errors_propagate_unchanged(lisp):
    def boom(evaluator, args):
        raise errors.GivenEmptyList()

    lisp.set_global("boom", HardFunc("boom", boom, AtLeast(0)))
    with pytest.raises(errors.GivenEmptyList):
        lisp.eval("(seq 1 (boom) 2)")
    assert lisp.evaluator.depth == 1
