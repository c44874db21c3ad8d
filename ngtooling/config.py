"""Configuration loading for ng-tooling (.ngtooling.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".ngtooling.yml"


@dataclass
class NgToolingConfig:
    """Settings for one workspace, passed explicitly to every component."""

    root: Path
    indent: str = "  "
    svgs_path: Optional[str] = None
    samples_path: Optional[str] = None
    boundary_suffix: str = ".module.ts"
    root_boundary: str = "app.module.ts"
    index_file: str = "index.ts"
    exclude_paths: List[str] = field(default_factory=list)

    @property
    def svgs_dir(self) -> Optional[Path]:
        return self.root / self.svgs_path if self.svgs_path else None

    @property
    def samples_dir(self) -> Optional[Path]:
        return self.root / self.samples_path if self.samples_path else None


def load_config(config_path: Path) -> NgToolingConfig:
    """Load configuration from disk, falling back to defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return NgToolingConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = NgToolingConfig(root=root)

    indent = data.get("indent")
    if indent is not None:
        if isinstance(indent, int) and not isinstance(indent, bool):
            if indent < 0:
                raise ConfigError("indent must not be negative")
            config.indent = " " * indent
        elif isinstance(indent, str):
            config.indent = indent
        else:
            raise ConfigError("indent must be a string or a number of spaces")

    config.svgs_path = _as_str(data.get("svgs_path"))
    config.samples_path = _as_str(data.get("samples_path"))
    config.boundary_suffix = _as_str(data.get("boundary_suffix")) or config.boundary_suffix
    config.root_boundary = _as_str(data.get("root_boundary")) or config.root_boundary
    config.index_file = _as_str(data.get("index_file")) or config.index_file
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    if not config.boundary_suffix.startswith("."):
        raise ConfigError("boundary_suffix must start with '.'")
    if "/" in config.index_file or "." not in config.index_file:
        raise ConfigError("index_file must be a bare file name with an extension")

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "NgToolingConfig", "load_config"]
