"""Core evaluator for the minilisp interpreter.

The evaluator owns an ordered stack of scopes: index 0 is the global scope,
the last entry is the innermost active call. Every call form pushes a fresh
scope before its head is evaluated and pops it again on every exit path, so a
failing form leaves the stack exactly as it found it.

Lambdas do not capture an environment. A lambda body is evaluated against the
caller's scope stack with its parameters bound in the call's own frame, so
names the body does not bind resolve against whatever scopes are active at
call time.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterable, Iterator, TextIO

from minilisp import LispValue, SExpression
from minilisp.types.arity import Fixed
from minilisp.types.errors import (
    AttemptToCallNonFunction,
    AttemptToEvalEmptyList,
    InvalidArguments,
    UndeclaredSymbol,
)
from minilisp.types.hard_func import HardFunc
from minilisp.types.lambda_fn import Lambda
from minilisp.types.nil import Nil
from minilisp.types.quote import Quote
from minilisp.types.scope import Scope, MISSING
from minilisp.types.symbol import Symbol

logger = logging.getLogger(__name__)


class Evaluator:
    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.scopes: list[Scope] = [Scope()]
        # Host streams used by the I/O built-ins; resolved lazily so that
        # pytest's capsys and similar redirections are honoured.
        self._stdin = stdin
        self._stdout = stdout

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    # --- Scope stack ---
    @property
    def global_scope(self) -> Scope:
        return self.scopes[0]

    @property
    def depth(self) -> int:
        return len(self.scopes)

    def enter_scope(self) -> Scope:
        scope = Scope()
        self.scopes.append(scope)
        return scope

    def exit_scope(self) -> None:
        if len(self.scopes) == 1:
            raise RuntimeError("Cannot pop the global scope")
        self.scopes.pop()

    @contextmanager
    def scope(self) -> Iterator[Scope]:
        """Push a fresh scope and pop it however the block exits."""
        frame = self.enter_scope()
        try:
            yield frame
        finally:
            self.exit_scope()

    def lookup(self, name: Symbol | str) -> LispValue:
        """Resolve `name` from the innermost scope outwards; first match wins."""
        for frame in reversed(self.scopes):
            value = frame.get(name, MISSING)
            if value is not MISSING:
                return value
        raise UndeclaredSymbol(str(name))

    def define(self, name: Symbol | str, value: LispValue) -> None:
        """Bind `name` one scope above the innermost call frame.

        `define` runs inside its own call frame, so the binding lands in the
        scope that was innermost when the define form was reached (the global
        scope for a top-level define).
        """
        target = self.scopes[-2] if len(self.scopes) > 1 else self.scopes[0]
        logger.debug("define %s at depth %d", name, max(len(self.scopes) - 2, 0))
        target.set(name, value)

    def set_local(self, name: Symbol | str, value: LispValue) -> None:
        self.scopes[-1].set(name, value)

    def set_global(self, name: Symbol | str, value: LispValue) -> None:
        self.scopes[0].set(name, value)

    # --- Evaluation ---
    def eval(self, expr: SExpression) -> LispValue:
        if isinstance(expr, Symbol):
            return self.lookup(expr)
        if isinstance(expr, Quote):
            return expr.value
        if isinstance(expr, list):
            return self.eval_call(expr)
        # Atoms, callables, types and foreign values evaluate to themselves
        return expr

    def eval_body(self, forms: Iterable[SExpression]) -> LispValue:
        """Evaluate forms in order for effect; the last one supplies the result."""
        result: LispValue = Nil
        for form in forms:
            result = self.eval(form)
        return result

    def eval_call(self, form: list[SExpression]) -> LispValue:
        if not form:
            raise AttemptToEvalEmptyList()

        head, *arg_forms = form
        with self.scope():
            fn = self.eval(head)

            if isinstance(fn, HardFunc):
                if fn.special:
                    args = list(arg_forms)
                else:
                    args = [self.eval(a) for a in arg_forms]
                fn.arity.check(args)
                return fn(self, args)

            if isinstance(fn, Lambda):
                if len(arg_forms) != len(fn.params):
                    raise InvalidArguments(Fixed(len(fn.params)), len(arg_forms))
                # All arguments are evaluated before any parameter is bound
                values = [self.eval(a) for a in arg_forms]
                for param, value in zip(fn.params, values):
                    self.set_local(param, value)
                return self.eval_body(fn.body)

            raise AttemptToCallNonFunction(fn)

    def call(self, fn: LispValue, args: list[LispValue]) -> LispValue:
        """Apply a callable to already-evaluated arguments.

        Special forms take unevaluated source and raise AttemptToCallNonFunction
        when reached this way.
        """
        with self.scope():
            if isinstance(fn, HardFunc) and not fn.special:
                fn.arity.check(args)
                return fn(self, list(args))

            if isinstance(fn, Lambda):
                if len(args) != len(fn.params):
                    raise InvalidArguments(Fixed(len(fn.params)), len(args))
                for param, value in zip(fn.params, args):
                    self.set_local(param, value)
                return self.eval_body(fn.body)

            raise AttemptToCallNonFunction(fn)
