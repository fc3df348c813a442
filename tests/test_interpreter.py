import io

import pytest

from minilisp import Interpreter, LispError
from minilisp.types import errors
from minilisp.types import value_type as vt
from minilisp.types.hard_func import HardFunc
from minilisp.types.nil import Nil
from minilisp.types.symbol import Symbol


def test_fresh_interpreter_has_literals_and_library(lisp):
    assert lisp.get_global("true") is True
    assert lisp.get_global("false") is False
    assert lisp.get_global("nil") is Nil
    for name in ("define", "if", "let", "lambda", "eval", "seq", "quote", "+", "print", "type-of"):
        assert isinstance(lisp.get_global(name), HardFunc)


def test_interpreters_do_not_share_globals():
    a, b = Interpreter(), Interpreter()
    a.eval("(define x 1)")
    with pytest.raises(errors.UndeclaredSymbol):
        b.eval("x")


def test_state_persists_between_calls(lisp):
    lisp.eval("(define (inc n) (+ n 1))")
    lisp.eval("(define x (inc 1))")
    assert lisp.eval("(inc x)") == 3.0


@pytest.mark.parametrize(
    "host,expected",
    [
        (2, 2.0),
        (1.5, 1.5),
        (True, True),
        ("s", "s"),
        (None, Nil),
        ([1, [2]], [1.0, [2.0]]),
    ]
)
def test_set_global_converts_host_values(lisp, host, expected):
    lisp.set_global("v", host)
    assert lisp.eval("v") == expected


def test_set_global_builtin(lisp):
    lisp.set_global("twice", HardFunc("twice", lambda ev, args: args[0] * 2))
    assert lisp.eval("(twice 21)") == 42.0


def test_set_global_rejects_unconvertible(lisp):
    with pytest.raises(errors.InvalidType):
        lisp.set_global("o", object())


def test_get_global_missing(lisp):
    with pytest.raises(errors.UndeclaredSymbol):
        lisp.get_global("missing")


@pytest.mark.parametrize(
    "source,host_type,expected",
    [
        ("(+ 1 2)", float, 3.0),
        ("(+ 1 2)", int, 3),
        ("(< 1 2)", bool, True),
        ('(str "a" "b")', str, "ab"),
        ("(list 1 2)", list, [1.0, 2.0]),
        ("'x", Symbol, Symbol("x")),
        ("(type-of 1)", vt.ValueType, vt.NUMBER),
    ]
)
def test_eval_as(lisp, source, host_type, expected):
    assert lisp.eval_as(source, host_type) == expected


def test_eval_as_mismatch(lisp):
    with pytest.raises(errors.InvalidType) as exc:
        lisp.eval_as('"text"', float)
    assert exc.value.expected == [vt.NUMBER]
    assert exc.value.got == "text"


def test_eval_bytes(lisp):
    assert lisp.eval(b"(+ 1 2)") == 3.0


def test_eval_bytes_with_configured_encoding(lisp, monkeypatch):
    monkeypatch.setenv("MINILISP_SOURCE_ENCODING", "latin-1")
    assert lisp.eval('"\xe9"'.encode("latin-1")) == "\xe9"


def test_eval_undecodable_bytes(lisp):
    with pytest.raises(errors.LispIOError):
        lisp.eval(b'"\xff\xfe"')


def test_eval_reader_text_and_binary(lisp):
    assert lisp.eval_reader(io.StringIO("(define x 2)\n(* x 3)\n")) == 6.0
    assert lisp.eval_reader(io.BytesIO(b"(+ x 1)")) == 3.0


def test_eval_reader_io_failure(lisp):
    class Broken:
        def read(self):
            raise OSError("disk on fire")

    with pytest.raises(errors.LispIOError):
        lisp.eval_reader(Broken())


def test_empty_source_is_an_error(lisp):
    with pytest.raises(errors.UnreadableSourceCode):
        lisp.eval("   ")


def test_unclosed_list_allows_retry_with_more_input(lisp):
    # A front end may gather more lines after UnclosedList and retry
    source = "(+ 1"
    with pytest.raises(errors.UnclosedList):
        lisp.eval(source)
    assert lisp.eval(source + " 2)") == 3.0


def test_all_errors_share_a_base(lisp):
    for source in ("(", "nope", "()", "(1)"):
        with pytest.raises(LispError):
            lisp.eval(source)


def test_explicit_prelude():
    lisp = Interpreter(prelude="(define (square x) (* x x))")
    assert lisp.eval("(square 4)") == 16.0


def test_prelude_from_environment(monkeypatch):
    monkeypatch.setenv("MINILISP_PRELUDE", "(define answer 42)")
    assert Interpreter().eval("answer") == 42.0
    assert Interpreter(prelude=None).eval("(seq)") is Nil
    with pytest.raises(errors.UndeclaredSymbol):
        Interpreter(prelude=None).eval("answer")
