"""
  Lisp Reader, Lexer and Parser

- A single regular expression classifies runs of input into tokens
- A deque of pending tokens gives the assembler O(1) one-token pushback
- Emits Python values directly:

    - numbers, #hex literals -> float
    - strings -> str
    - symbols -> Symbol (true/false/nil stay symbols; the global scope binds them)
    - ( ... ) -> list
    - { ... } -> Quote(list)
    - 'x -> Quote(x)
"""

from __future__ import annotations

import re
from collections import deque
from typing import Iterable, Iterator, Optional

from minilisp import SExpression
from minilisp.types.errors import (
    InvalidHexLiteral,
    InvalidListDelimiter,
    UnclosedList,
    UnreadableSourceCode,
)
from minilisp.types.quote import Quote
from minilisp.types.symbol import Symbol


TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r"|(?P<hex>#[^\s(){}'\";]*)"  # hexadecimal literal, validated on read
    r"|(?P<number>-?\d+(?:\.\d*)?(?:[eE][+-]?\d+)?)"  # int, float, exponent
    r"|(?P<symbol>(?:[^\W\d]|[?!])[\w\-?!*+/<>=.%:]*)"  # alphanumeric symbols
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r"|(?P<operator>[+\-*/^&|=<>%!][\w\-?!*+/<>=.%^&|]*)"  # +, <=, ->, ...
    r"|(?P<quote>')",  # quote prefix
    re.DOTALL,
)

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_HEX_DIGITS_RE = re.compile(r"[0-9A-Fa-f]+")

CLOSERS = {"lparen": "rparen", "lbrace": "rbrace"}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples.

    Whitespace, comments and characters no rule matches are dropped.
    """
    for m in TOKEN_RE.finditer(source):
        kind = m.lastgroup
        if kind == "comment":
            continue
        yield kind, m.group(kind)


def unescape(body: str) -> str:
    return _ESCAPE_RE.sub(lambda m: ESCAPES.get(m.group(1), m.group(0)), body)


def read_atom(kind: str, text: str) -> SExpression:
    """Classify a single non-delimiter token."""
    if kind == "hex":
        digits = text[1:]
        if not _HEX_DIGITS_RE.fullmatch(digits):
            raise InvalidHexLiteral(text)
        return float(int(digits, 16))
    if kind == "number":
        return float(text)
    if kind == "string":
        return unescape(text[1:-1])
    return Symbol(text)


class TokenStream:
    def __init__(self, token_iter: Iterable[tuple[str, str]]):
        self.pending: deque[tuple[str, str]] = deque(token_iter)

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.pending:
            return None, None
        return self.pending[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if not self.pending:
            return None, None
        return self.pending.popleft()

    def push_back(self, token: tuple[str, str]) -> None:
        self.pending.appendleft(token)

    def at_end(self) -> bool:
        return not self.pending

    def parse_expr(self) -> SExpression:
        tok_type, tok_val = self.advance()
        if tok_type is None:
            raise UnclosedList()

        if tok_type in CLOSERS:
            items = self._parse_list(CLOSERS[tok_type])
            return Quote(items) if tok_type == "lbrace" else items

        if tok_type in ("rparen", "rbrace"):
            raise InvalidListDelimiter(tok_val)

        if tok_type == "quote":
            if self.at_end():
                raise UnclosedList("Unclosed quote: input ended after '")
            return Quote(self.parse_expr())

        return read_atom(tok_type, tok_val)

    def _parse_list(self, closer: str) -> list[SExpression]:
        items: list[SExpression] = []
        while True:
            token = self.advance()
            tok_type, tok_val = token
            if tok_type is None:
                raise UnclosedList()
            if tok_type == closer:
                return items
            if tok_type in ("rparen", "rbrace"):
                raise InvalidListDelimiter(tok_val)
            # Not the end of the list: hand the token back to the assembler
            self.push_back(token)
            items.append(self.parse_expr())

    def parse_all(self) -> Iterator[SExpression]:
        while not self.at_end():
            yield self.parse_expr()


def parse(source: str) -> list[SExpression]:
    """Read every top-level form in `source`.

    Raises UnreadableSourceCode when the source holds no tokens at all.
    """
    stream = TokenStream(lex(source))
    if stream.at_end():
        raise UnreadableSourceCode()
    return list(stream.parse_all())
