"""Identifier case conversions used by scaffolding and metadata collators."""

from __future__ import annotations

import re
from typing import List

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z]|\d|\b|_|$)|[A-Z]?[a-z]+|[A-Z]+|\d+")

# Stay lowercase in titles unless they open the title.
_SMALL_WORDS = frozenset(
    "a an and as at but by en for if in nor of on or per the to v via vs".split()
)


def split_words(value: str) -> List[str]:
    """Split ``value`` on separators and camelCase humps."""
    return _WORD_RE.findall(value)


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def pascal_case(value: str) -> str:
    return "".join(_capitalize(word) for word in split_words(value))


def constant_case(value: str) -> str:
    return "_".join(word.upper() for word in split_words(value))


def title_case(value: str) -> str:
    """Human-readable title: ``lord-of-the-rings`` becomes ``Lord of the Rings``."""
    words = [word.lower() for word in split_words(value)]
    return " ".join(
        word if index and word in _SMALL_WORDS else _capitalize(word)
        for index, word in enumerate(words)
    )


__all__ = ["constant_case", "pascal_case", "split_words", "title_case"]
