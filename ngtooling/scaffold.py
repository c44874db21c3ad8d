"""Scaffold a new component folder from a kebab-case name."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .config import NgToolingConfig
from .errors import ScaffoldError
from .logging import get_logger
from .text import constant_case, pascal_case

_NAME_RE = re.compile(r"^[a-z][a-z0-9]*(?:-[a-z0-9]+)*$")
_TEMPLATES_DIR = Path(__file__).with_name("templates")


@dataclass
class ScaffoldResult:
    """Files created for one component; ``component`` is the file to open first."""

    folder: Path
    component: Path
    files: List[Path]


class Scaffolder:
    """Creates ``<name>.component.ts``, ``<name>.html``, ``<name>.scss`` and ``index.ts``."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or _TEMPLATES_DIR)),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.logger = get_logger("scaffold")

    def context(self, name: str, indent: str) -> Dict[str, str]:
        return {
            "name": name,
            "indent": indent,
            "class_name": f"{pascal_case(name)}Component",
            "constant_name": constant_case(name),
        }

    def render(self, template: str, context: Dict[str, str]) -> str:
        return self.env.get_template(template).render(**context)

    def scaffold(self, parent: Path, name: str, config: NgToolingConfig) -> ScaffoldResult:
        """Create the component folder under ``parent``; never overwrites existing files."""
        if not _NAME_RE.match(name):
            raise ScaffoldError(f"Component name must be kebab-case: {name!r}")
        if not parent.is_dir():
            raise ScaffoldError(f"Parent folder does not exist: {parent}")

        folder = parent / name
        try:
            folder.mkdir()
        except FileExistsError as exc:
            raise ScaffoldError(f"Folder already exists: {folder}") from exc

        context = self.context(name, config.indent)
        component = folder / f"{name}.component.ts"
        contents = {
            component: self.render("component.ts.j2", context),
            folder / f"{name}.html": "",
            folder / f"{name}.scss": "",
            folder / config.index_file: self.render("index.ts.j2", context),
        }
        for path, text in contents.items():
            path.write_text(text, encoding="utf-8")
            self.logger.debug("Created %s", path)

        self.logger.info("Scaffolded component %s in %s", context["class_name"], folder)
        return ScaffoldResult(folder=folder, component=component, files=list(contents))


__all__ = ["ScaffoldResult", "Scaffolder"]
