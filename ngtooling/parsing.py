"""Minimal TypeScript scanner that surfaces top-level tokens only.

The scanner understands just enough of the language to tell top-level code
apart from code nested in braces, brackets or parentheses: whitespace,
line and block comments, quoted strings and template literals (including
``${...}`` substitutions) are skipped, and bracket pairs are balanced.
Regular-expression literals are not recognised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .errors import ParseError

_TOKEN_RE = re.compile(
    r"""
      (?P<space>\s+)
    | (?P<comment>//[^\n]*|/\*.*?\*/)
    | (?P<string>'(?:\\.|[^'\\\n])*'|"(?:\\.|[^"\\\n])*")
    | (?P<template>`)
    | (?P<ident>[A-Za-z_$][\w$]*)
    | (?P<open>[{(\[])
    | (?P<close>[})\]])
    | (?P<punct>.)
    """,
    re.VERBOSE | re.DOTALL,
)

_CLOSERS = {"{": "}", "(": ")", "[": "]"}


@dataclass(frozen=True)
class Token:
    """A top-level token; ``kind`` is ``ident``, ``string``, ``open``, ``close`` or ``punct``."""

    kind: str
    text: str
    start: int


class _Lexer:
    def __init__(self, text: str) -> None:
        self.text = text
        self.length = len(text)
        self.position = 0

    def tokens(self, pos: int = 0, closer: Optional[str] = None) -> Iterator[tuple[int, Token]]:
        """Yield ``(depth, token)`` pairs until end of input or the matching ``closer``.

        When ``closer`` is given, scanning stops right after the bracket that
        balances it and the final position is available as ``self.position``.
        """
        stack: List[str] = [closer] if closer else []
        base = len(stack)
        while pos < self.length:
            match = _TOKEN_RE.match(self.text, pos)
            if match is None:
                break
            kind = match.lastgroup or "punct"
            value = match.group()
            start = pos
            pos = match.end()

            if kind in ("space", "comment"):
                continue
            if kind == "template":
                pos = self._skip_template(pos)
                yield len(stack) - base, Token("string", self.text[start:pos], start)
                continue
            if kind == "punct":
                self._reject_unterminated(value, start)
            if kind == "open":
                yield len(stack) - base, Token(kind, value, start)
                stack.append(_CLOSERS[value])
                continue
            if kind == "close":
                if not stack or stack[-1] != value:
                    raise ParseError(f"unexpected '{value}'", offset=start)
                stack.pop()
                if closer and not stack:
                    self.position = pos
                    return
                yield len(stack) - base, Token(kind, value, start)
                continue
            yield len(stack) - base, Token(kind, value, start)

        if stack:
            raise ParseError(f"missing '{stack[-1]}' before end of input", offset=self.length)
        self.position = pos

    def _skip_template(self, pos: int) -> int:
        start = pos - 1
        while pos < self.length:
            char = self.text[pos]
            if char == "\\":
                pos += 2
                continue
            if char == "`":
                return pos + 1
            if self.text.startswith("${", pos):
                nested = _Lexer(self.text)
                for _ in nested.tokens(pos + 2, closer="}"):
                    pass
                pos = nested.position
                continue
            pos += 1
        raise ParseError("unterminated template literal", offset=start)

    def _reject_unterminated(self, value: str, start: int) -> None:
        if value in ("'", '"'):
            raise ParseError("unterminated string literal", offset=start)
        if value == "/" and self.text.startswith("/*", start):
            raise ParseError("unterminated block comment", offset=start)


def iter_top_level_tokens(text: str) -> Iterator[Token]:
    """Yield the tokens of ``text`` that sit outside every bracket pair.

    Opening brackets at the top level are yielded as well so callers can see
    where a nested group starts. Raises :class:`ParseError` on unbalanced
    brackets or unterminated literals.
    """
    for depth, token in _Lexer(text).tokens():
        if depth == 0:
            yield token


__all__ = ["Token", "iter_top_level_tokens"]
