"""Run controller that regenerates every generated file of a workspace."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .aggregator import aggregate
from .collators import SamplesCollator, SvgCollator
from .config import NgToolingConfig, load_config
from .discovery import build_hierarchy, find_index_files, find_module_boundaries
from .errors import GenerationCancelled
from .extractor import load_index_file
from .logging import get_logger
from .models import ModuleBoundary
from .progress import CancellationToken, ProgressReporter
from .renderer import render_module_index

# Progress shares, in percent, of the three top-level stages.
_SAMPLES_SHARE = 25.0
_MODULES_SHARE = 25.0
_BOUNDARIES_SHARE = 50.0


@dataclass
class GenerationReport:
    """Outcome of one generation run."""

    root: Path
    written: List[Path] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def status(self) -> str:
        if self.cancelled:
            return "cancelled"
        return "partial" if self.failed else "ok"


class Generator:
    """Sequences the collators and the module index aggregation for one workspace.

    Work happens strictly one boundary at a time. The cancellation token is
    sampled before each stage, before each boundary and right before each
    boundary's write; a write in progress is never interrupted.
    """

    def __init__(
        self,
        svg_collator: SvgCollator | None = None,
        samples_collator: SamplesCollator | None = None,
    ) -> None:
        self.svg_collator = svg_collator or SvgCollator()
        self.samples_collator = samples_collator or SamplesCollator()
        self.logger = get_logger("generator")

    def run_path(
        self,
        path: str | Path,
        *,
        progress: Optional[ProgressReporter] = None,
        token: Optional[CancellationToken] = None,
    ) -> GenerationReport:
        """Load ``.ngtooling.yml`` from ``path`` and run against that workspace."""
        root = Path(path).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Workspace path not found: {path}")
        return self.run(load_config(root), progress=progress, token=token)

    def run(
        self,
        config: NgToolingConfig,
        *,
        progress: Optional[ProgressReporter] = None,
        token: Optional[CancellationToken] = None,
    ) -> GenerationReport:
        progress = progress or ProgressReporter()
        token = token or CancellationToken()
        report = GenerationReport(root=config.root)

        self.logger.info("Generating index files under %s", config.root)
        progress.report(increment=0)

        stages = (self._generate_svgs, self._generate_samples, self._generate_module_indexes)
        try:
            for stage in stages:
                token.raise_if_cancelled(stage.__name__.lstrip("_"))
                stage(config, progress, token, report)
        except GenerationCancelled as exc:
            self.logger.info("%s", exc)
            report.cancelled = True
            progress.report("Cancelled")
            return report

        progress.report("Done!")
        return report

    def _generate_svgs(
        self,
        config: NgToolingConfig,
        progress: ProgressReporter,
        token: CancellationToken,
        report: GenerationReport,
    ) -> None:
        if config.svgs_dir is None:
            return
        progress.report("Svgs")
        try:
            report.written.extend(self.svg_collator.collect(config, token))
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.error("Failed to generate SVG metadata: %s", exc)
            report.failed.append("svgs")

    def _generate_samples(
        self,
        config: NgToolingConfig,
        progress: ProgressReporter,
        token: CancellationToken,
        report: GenerationReport,
    ) -> None:
        if config.samples_dir is None:
            return
        progress.report("Samples", _SAMPLES_SHARE)
        try:
            report.written.extend(self.samples_collator.collect(config, token))
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.error("Failed to generate samples metadata: %s", exc)
            report.failed.append("samples")

    def _generate_module_indexes(
        self,
        config: NgToolingConfig,
        progress: ProgressReporter,
        token: CancellationToken,
        report: GenerationReport,
    ) -> None:
        progress.report("Modules", _MODULES_SHARE)

        boundaries = find_module_boundaries(config)
        build_hierarchy(boundaries)
        if not boundaries:
            self.logger.info("No module boundaries found")
            return
        weight = _BOUNDARIES_SHARE / len(boundaries)

        for boundary in boundaries:
            token.raise_if_cancelled(f"module {boundary.name}")
            progress.report(f"Modules ({boundary.name})", weight)
            try:
                output = self._generate_boundary(boundary, config, token)
            except (OSError, UnicodeDecodeError) as exc:
                self.logger.error("Failed to generate index for %s: %s", boundary.name, exc)
                report.failed.append(boundary.name)
                continue
            if output is None:
                report.skipped.append(boundary.name)
            else:
                report.written.append(output)

    def _generate_boundary(
        self,
        boundary: ModuleBoundary,
        config: NgToolingConfig,
        token: CancellationToken,
    ) -> Optional[Path]:
        """Write one boundary's aggregator file; returns ``None`` when it owns no index files."""
        paths = find_index_files(boundary, config)
        if not paths:
            self.logger.debug("Module %s has no index files, skipping", boundary.name)
            return None

        index_files = [load_index_file(path, boundary.directory) for path in paths]
        text = render_module_index(aggregate(index_files), config.indent)

        token.raise_if_cancelled(f"writing {boundary.name}")

        target = boundary.output_path(config.index_file)
        target.write_text(text, encoding="utf-8")
        self.logger.debug("Wrote %s (%d index files)", target, len(index_files))
        return target


__all__ = ["GenerationReport", "Generator"]
