"""Exception hierarchy shared across ng-tooling components."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class NgToolingError(RuntimeError):
    """Base class for errors raised by ng-tooling."""


class ConfigError(NgToolingError):
    """Raised when the configuration file cannot be parsed."""


class DiscoveryError(NgToolingError):
    """Raised when module boundaries or index files cannot be located."""


class ParseError(NgToolingError):
    """Raised when an index file cannot be scanned for exported declarations."""

    def __init__(self, message: str, *, path: Optional[Path] = None, offset: Optional[int] = None) -> None:
        super().__init__(message)
        self.path = path
        self.offset = offset

    def __str__(self) -> str:
        base = super().__str__()
        location = str(self.path) if self.path is not None else "<source>"
        if self.offset is not None:
            location = f"{location}@{self.offset}"
        return f"{location}: {base}"


class ScaffoldError(NgToolingError):
    """Raised when a component cannot be scaffolded."""


class GenerationCancelled(NgToolingError):
    """Signals that a run stopped at a cancellation checkpoint."""


__all__ = [
    "ConfigError",
    "DiscoveryError",
    "GenerationCancelled",
    "NgToolingError",
    "ParseError",
    "ScaffoldError",
]
