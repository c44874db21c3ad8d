"""Collate sample folders into a ``SAMPLES`` metadata list."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..config import NgToolingConfig
from ..logging import get_logger
from ..progress import CancellationToken
from ..renderer import EOL, GENERATED_HEADER
from ..text import title_case

METADATA_FILENAME = "metadata.ts"
_SHARED_FOLDER = "shared"


class SamplesCollator:
    """Writes ``metadata.ts`` listing every sample folder except ``shared``."""

    def __init__(self) -> None:
        self.logger = get_logger("collators.samples")

    def list_samples(self, samples_dir: Path) -> List[str]:
        return sorted(
            entry.name
            for entry in samples_dir.iterdir()
            if entry.is_dir() and entry.name != _SHARED_FOLDER
        )

    def render(self, samples: List[str], indent: str) -> str:
        text = GENERATED_HEADER + f"export const SAMPLES = [{EOL}"
        for sample in samples:
            text += f"{indent}{{ state: '{sample}', name: '{title_case(sample)}' }},{EOL}"
        return text + f"];{EOL}"

    def collect(self, config: NgToolingConfig, token: CancellationToken) -> List[Path]:
        samples_dir = config.samples_dir
        if samples_dir is None:
            return []
        samples = self.list_samples(samples_dir)
        self.logger.debug("Found %d samples in %s", len(samples), samples_dir)

        token.raise_if_cancelled("writing samples metadata")

        target = samples_dir / METADATA_FILENAME
        target.write_text(self.render(samples, config.indent), encoding="utf-8")
        return [target]


__all__ = ["METADATA_FILENAME", "SamplesCollator"]
