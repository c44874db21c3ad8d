"""Helper utilities for constructing temporary Angular workspaces in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from ngtooling.config import NgToolingConfig, load_config


class WorkspaceBuilder:
    """Writes files into a throwaway workspace and reads generated output back."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = (tmp_path / "workspace").resolve()
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the workspace."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def read(self, relative: str) -> str:
        return (self.root / relative).read_text(encoding="utf-8")

    def exists(self, relative: str) -> bool:
        return (self.root / relative).exists()

    def config(self) -> NgToolingConfig:
        return load_config(self.root)


__all__ = ["WorkspaceBuilder"]
