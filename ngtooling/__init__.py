"""Module index generation and component scaffolding for Angular workspaces."""

from .config import NgToolingConfig, load_config
from .generator import GenerationReport, Generator
from .progress import CancellationToken, ProgressReporter

__version__ = "1.0.0"

__all__ = [
    "CancellationToken",
    "GenerationReport",
    "Generator",
    "NgToolingConfig",
    "ProgressReporter",
    "load_config",
]
