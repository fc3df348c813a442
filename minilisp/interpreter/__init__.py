from __future__ import annotations

import logging
from typing import Any, BinaryIO, Literal, TextIO

from minilisp import LispValue
from minilisp.config import get_prelude, get_source_encoding
from minilisp.reader.parser import parse
from minilisp.types.convert import from_lisp, to_lisp
from minilisp.types.errors import LispError, LispIOError, UndeclaredSymbol
from minilisp.types.nil import Nil
from minilisp.evaluation.evaluator import Evaluator
from minilisp.builtin.env_builtin import register

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Embedding surface for minilisp: reads and evaluates source, and moves
    values between the host and the language.
    Maintains one Evaluator (and so one global scope) across calls.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ):
        self.evaluator = Evaluator(stdin=stdin, stdout=stdout)
        register(self.evaluator.global_scope)

        if prelude == 'auto':
            prelude = get_prelude()
        if prelude:
            self.eval(prelude)

    def eval(self, code: str | bytes) -> LispValue:
        """Evaluate every form in `code` in order and return the last result."""
        if isinstance(code, (bytes, bytearray)):
            try:
                code = bytes(code).decode(get_source_encoding())
            except UnicodeDecodeError as e:
                raise LispIOError(e) from e
        forms = parse(code)
        result: LispValue = Nil
        for form in forms:
            try:
                result = self.evaluator.eval(form)
            except LispError as e:
                logger.debug("form failed: %s", e)
                raise
        return result

    def eval_reader(self, stream: TextIO | BinaryIO) -> LispValue:
        """Read a text or binary stream to the end and evaluate it."""
        try:
            source = stream.read()
        except OSError as e:
            raise LispIOError(e) from e
        return self.eval(source)

    def eval_as(self, code: str | bytes, host_type: type) -> Any:
        """Evaluate `code` and convert the result into `host_type`."""
        return from_lisp(self.eval(code), host_type)

    def set_global(self, name: str, value: Any) -> None:
        """Bind a host value in the global scope (ForeignType objects are wrapped)."""
        logger.debug("set_global %s", name)
        self.evaluator.set_global(name, to_lisp(value))

    def get_global(self, name: str) -> LispValue:
        scope = self.evaluator.global_scope
        if name not in scope:
            raise UndeclaredSymbol(name)
        return scope.get(name)
