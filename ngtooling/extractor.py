"""Recover exported ``*DECLARATIONS`` / ``*STATES`` identifiers from index files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, List

from .errors import ParseError
from .logging import get_logger
from .models import IndexFile, SymbolKind
from .parsing import Token, iter_top_level_tokens

_VARIABLE_KEYWORDS = {"const", "let", "var"}

logger = get_logger("extractor")


def iter_exported_variables(text: str) -> Iterator[str]:
    """Yield the first declared identifier of each top-level ``export const|let|var``."""
    tokens: List[Token] = list(iter_top_level_tokens(text))
    for index, token in enumerate(tokens):
        if token.kind != "ident" or token.text != "export":
            continue
        cursor = index + 1
        if cursor < len(tokens) and tokens[cursor].text == "declare":
            cursor += 1
        if cursor + 1 >= len(tokens):
            continue
        keyword, name = tokens[cursor], tokens[cursor + 1]
        if keyword.text in _VARIABLE_KEYWORDS and name.kind == "ident":
            yield name.text


def extract_symbols(text: str) -> Dict[SymbolKind, str]:
    """Classify exported identifiers by suffix, keeping at most one per kind.

    When a file exports two identifiers of the same kind the later one
    replaces the earlier one without a warning.
    """
    symbols: Dict[SymbolKind, str] = {}
    for identifier in iter_exported_variables(text):
        kind = SymbolKind.classify(identifier)
        if kind is not None:
            symbols[kind] = identifier
    return symbols


def relative_index_path(path: Path, boundary_dir: Path) -> str:
    """Import path of an index file as seen from its boundary's directory."""
    relative = path.parent.relative_to(boundary_dir).as_posix()
    return "index" if relative in ("", ".") else relative


def load_index_file(path: Path, boundary_dir: Path) -> IndexFile:
    """Read and scan one index file.

    I/O failures propagate to the caller. Text that cannot be scanned is
    logged and yields an :class:`IndexFile` without symbols.
    """
    text = path.read_text(encoding="utf-8")
    index_file = IndexFile(path=path, relative_path=relative_index_path(path, boundary_dir))
    try:
        index_file.symbols = extract_symbols(text)
    except ParseError as exc:
        exc.path = path
        logger.warning("Skipping exports of unparsable index file %s", exc)
        return index_file

    if not index_file.symbols:
        logger.debug("No DECLARATIONS/STATES exports found in %s", path)
    return index_file


__all__ = [
    "extract_symbols",
    "iter_exported_variables",
    "load_index_file",
    "relative_index_path",
]
