"""Locate module boundaries and the index files that belong to each of them."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .config import NgToolingConfig
from .errors import DiscoveryError
from .logging import get_logger
from .models import ModuleBoundary

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".angular",
    ".idea",
    ".vscode",
    "node_modules",
    "dist",
    "coverage",
}

logger = get_logger("discovery")


@dataclass
class IgnoreRule:
    """A gitignore-style pattern taken from ``exclude_paths`` in the config."""

    pattern: str
    directory_only: bool
    anchored: bool

    @classmethod
    def parse(cls, raw: str) -> "IgnoreRule | None":
        pattern = raw.strip()
        if not pattern:
            return None
        directory_only = pattern.endswith("/")
        pattern = pattern.rstrip("/")
        anchored = pattern.startswith("/") or "/" in pattern
        return cls(pattern=pattern.lstrip("/"), directory_only=directory_only, anchored=anchored)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if self.anchored:
            return fnmatchcase(rel_path, self.pattern)
        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _raise_discovery_error(exc: OSError) -> None:
    raise DiscoveryError(f"Cannot traverse {exc.filename}: {exc.strerror}") from exc


def _is_pruned(rel_dir: str, prune_globs: Sequence[str]) -> bool:
    key = f"{rel_dir}/" if rel_dir else ""
    return any(fnmatchcase(key, pattern) for pattern in prune_globs)


def _walk(
    start: Path,
    root: Path,
    rules: Sequence[IgnoreRule],
    prune_globs: Sequence[str] = (),
) -> Iterator[Path]:
    """Yield files under ``start`` in sorted order, skipping ignored and pruned directories.

    ``prune_globs`` are matched against workspace-relative directory paths
    with a trailing slash, so ``src/foo/**`` prunes ``src/foo`` itself. A
    pruned ``start`` yields nothing.
    """
    start_rel = start.relative_to(root).as_posix() if start != root else ""
    if _is_pruned(start_rel, prune_globs):
        logger.debug("Pruning %s, claimed by a boundary in the same directory", start_rel or ".")
        return

    for dirpath, dirnames, filenames in os.walk(start, onerror=_raise_discovery_error):
        current = Path(dirpath)
        rel_dir = current.relative_to(root).as_posix() if current != root else ""

        kept = []
        for name in sorted(dirnames):
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if any(rule.matches(rel_path, True) for rule in rules):
                continue
            if _is_pruned(rel_path, prune_globs):
                logger.debug("Pruning nested boundary subtree %s", rel_path)
                continue
            kept.append(name)
        dirnames[:] = kept

        for filename in sorted(filenames):
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if any(rule.matches(rel_path, False) for rule in rules):
                continue
            yield current / filename


def _ignore_rules(config: NgToolingConfig) -> List[IgnoreRule]:
    rules = (IgnoreRule.parse(pattern) for pattern in config.exclude_paths)
    return [rule for rule in rules if rule is not None]


def find_module_boundaries(config: NgToolingConfig) -> List[ModuleBoundary]:
    """Return every boundary file under the workspace root, ordered by path.

    The application's own top-level boundary (``root_boundary``) is skipped.
    """
    root = config.root
    if not root.is_dir():
        raise DiscoveryError(f"Workspace root is not a directory: {root}")

    boundaries: List[ModuleBoundary] = []
    for path in _walk(root, root, _ignore_rules(config)):
        if path.name == config.root_boundary:
            continue
        if path.name.endswith(config.boundary_suffix):
            boundaries.append(ModuleBoundary.from_file(path, root))

    boundaries.sort(key=lambda boundary: boundary.file.as_posix())
    logger.debug("Discovered %d module boundaries", len(boundaries))
    return boundaries


def build_hierarchy(boundaries: Sequence[ModuleBoundary]) -> None:
    """Fill each boundary's ``excludes`` with the boundaries nested below it.

    Containment compares path segments, so ``src/foo`` does not contain
    ``src/foobar``. Two boundaries sharing a directory exclude each other.
    """
    for boundary in boundaries:
        boundary.excludes = []
    for inner in boundaries:
        for outer in boundaries:
            if inner is outer:
                continue
            if outer.contains(inner):
                outer.excludes.append(inner)


def find_index_files(boundary: ModuleBoundary, config: NgToolingConfig) -> List[Path]:
    """Return the index files below ``boundary`` that no nested boundary claims."""
    paths = [
        path
        for path in _walk(
            boundary.directory,
            config.root,
            _ignore_rules(config),
            prune_globs=boundary.exclude_globs(),
        )
        if path.name == config.index_file
    ]
    return sorted(paths, key=lambda path: path.as_posix())


__all__ = [
    "IgnoreRule",
    "build_hierarchy",
    "find_index_files",
    "find_module_boundaries",
]
