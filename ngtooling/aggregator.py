"""Merge the symbols of a boundary's index files into one deterministic set."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .models import KIND_ORDER, AggregatedSymbols, IndexFile, Symbol


class Uniquer:
    """Counts name occurrences within one aggregation pass."""

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}

    def alias_for(self, name: str) -> Optional[str]:
        """Return ``None`` for the first occurrence, then ``name2``, ``name3``, ..."""
        count = self._counts.get(name, 0) + 1
        self._counts[name] = count
        return None if count == 1 else f"{name}{count}"


def _group(
    symbols: Iterable[Symbol],
    key: Callable[[Symbol], Any],
    order: Callable[[Any], str],
) -> List[Tuple[Any, List[Symbol]]]:
    grouped: Dict[Any, List[Symbol]] = defaultdict(list)
    for symbol in symbols:
        grouped[key(symbol)].append(symbol)
    # sorted() is stable, so equal names keep emission order (FOO before FOO2).
    return [
        (group_key, sorted(members, key=lambda symbol: symbol.name))
        for group_key, members in sorted(grouped.items(), key=lambda item: order(item[0]))
    ]


def aggregate(index_files: Iterable[IndexFile]) -> AggregatedSymbols:
    """Emit, alias and group the symbols of ``index_files``.

    Files are processed by absolute path; within a file declarations come
    before states. The collision counter lives only for this call.
    """
    uniquer = Uniquer()
    symbols: List[Symbol] = []
    for index_file in sorted(index_files, key=lambda item: item.path.as_posix()):
        for kind in KIND_ORDER:
            name = index_file.symbols.get(kind)
            if not name:
                continue
            symbols.append(
                Symbol(
                    path=index_file.relative_path,
                    kind=kind,
                    name=name,
                    alias=uniquer.alias_for(name),
                )
            )

    return AggregatedSymbols(
        symbols=symbols,
        by_path=_group(symbols, lambda symbol: symbol.path, str),
        by_kind=_group(symbols, lambda symbol: symbol.kind, lambda kind: kind.value),
    )


__all__ = ["Uniquer", "aggregate"]
