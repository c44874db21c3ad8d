"""Core data models shared across ng-tooling components."""

from __future__ import annotations

import glob
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple


class SymbolKind(str, Enum):
    """Kinds of exported arrays that index files contribute to their module."""

    DECLARATIONS = "declarations"
    STATES = "states"

    @property
    def suffix(self) -> str:
        """Identifier suffix that classifies an export as this kind."""
        return self.value.upper()

    @property
    def element_prefix(self) -> str:
        """Prefix written before each element of the kind's export block."""
        # State lists are nested arrays and get flattened into the parent.
        return "..." if self is SymbolKind.STATES else ""

    @classmethod
    def classify(cls, identifier: str) -> Optional["SymbolKind"]:
        for kind in KIND_ORDER:
            if identifier.endswith(kind.suffix):
                return kind
        return None


KIND_ORDER: Tuple[SymbolKind, ...] = (SymbolKind.DECLARATIONS, SymbolKind.STATES)


@dataclass(eq=False)
class ModuleBoundary:
    """A ``*.module.ts`` file and the directory subtree it aggregates."""

    file: Path
    directory: Path
    relative_dir: str
    name: str
    excludes: List["ModuleBoundary"] = field(default_factory=list)

    @classmethod
    def from_file(cls, file: Path, root: Path) -> "ModuleBoundary":
        directory = file.parent
        relative_dir = directory.relative_to(root).as_posix() if directory != root else ""
        basename = file.name
        return cls(
            file=file,
            directory=directory,
            relative_dir=relative_dir,
            name=basename.split(".", 1)[0],
        )

    def contains(self, other: "ModuleBoundary") -> bool:
        """Return True when ``other`` lives in or below this boundary's directory.

        A boundary sharing this directory counts as contained, so two modules
        declared side by side claim each other's subtree.
        """
        mine = self.directory.parts
        theirs = other.directory.parts
        return len(theirs) >= len(mine) and theirs[: len(mine)] == mine

    def exclude_globs(self) -> List[str]:
        """Workspace-relative globs that cover the subtrees of nested boundaries."""
        return sorted(
            {
                f"{glob.escape(nested.relative_dir)}/**" if nested.relative_dir else "**"
                for nested in self.excludes
            }
        )

    def output_path(self, index_file_name: str) -> Path:
        extension = index_file_name.rsplit(".", 1)[-1]
        return self.directory / f"{self.name}.index.{extension}"

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"ModuleBoundary({self.relative_dir or '.'!r}, name={self.name!r})"


@dataclass
class IndexFile:
    """An ``index.ts`` file and the symbols it exports."""

    path: Path
    relative_path: str
    symbols: Dict[SymbolKind, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Symbol:
    """One exported array as it appears in a generated module index."""

    path: str
    kind: SymbolKind
    name: str
    alias: Optional[str] = None

    @property
    def local_name(self) -> str:
        """Name the symbol is bound to inside the generated file."""
        return self.alias or self.name

    def import_clause(self) -> str:
        return f"{self.name} as {self.alias}" if self.alias else self.name


@dataclass
class AggregatedSymbols:
    """Symbols of one boundary grouped for import and export rendering."""

    symbols: List[Symbol]
    by_path: List[Tuple[str, List[Symbol]]]
    by_kind: List[Tuple[SymbolKind, List[Symbol]]]
