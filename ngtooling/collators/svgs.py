"""Collate SVG icon components into a declarations list and a name lookup map."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

from ..config import NgToolingConfig
from ..errors import ParseError
from ..logging import get_logger
from ..parsing import iter_top_level_tokens
from ..progress import CancellationToken
from ..renderer import EOL, GENERATED_HEADER

_SELECTOR_RE = re.compile(r"""selector\s*:\s*(['"`])(?P<selector>.+?)\1""")
_CLASS_PREFIX = "Svg"
_SELECTOR_PREFIX = "svg-"
_MAP_EXCLUDED_FILE = "icon"

INDEX_FILENAME = "index.ts"
COMPONENT_MAP_FILENAME = "component-map.ts"


@dataclass
class SvgComponent:
    name: str
    selector: str

    @property
    def short_name(self) -> str:
        if self.selector.startswith(_SELECTOR_PREFIX):
            return self.selector[len(_SELECTOR_PREFIX) :]
        return self.selector


@dataclass
class SvgFile:
    file_name: str
    svgs: List[SvgComponent] = field(default_factory=list)

    def import_line(self) -> str:
        names = ", ".join(svg.name for svg in self.svgs)
        return f"import {{ {names} }} from './{self.file_name}';{EOL}"


def iter_svg_components(text: str) -> Iterator[SvgComponent]:
    """Yield top-level ``Svg*`` classes together with the selector of their decorator."""
    tokens = list(iter_top_level_tokens(text))
    decorator_start: Optional[int] = None
    for index, token in enumerate(tokens):
        if token.kind == "punct" and token.text == "@":
            if decorator_start is None:
                decorator_start = token.start
            continue
        if token.text in (";", "}") and token.kind in ("punct", "close"):
            decorator_start = None
            continue
        if token.kind != "ident" or token.text != "class" or index + 1 >= len(tokens):
            continue
        name = tokens[index + 1].text
        span = text[decorator_start : token.start] if decorator_start is not None else ""
        decorator_start = None
        if not name.startswith(_CLASS_PREFIX):
            continue
        match = _SELECTOR_RE.search(span)
        if match is None:
            raise ParseError(f"class {name} has no decorator selector", offset=token.start)
        yield SvgComponent(name=name, selector=match.group("selector"))


class SvgCollator:
    """Writes ``index.ts`` and ``component-map.ts`` for the configured SVG folder."""

    def __init__(self) -> None:
        self.logger = get_logger("collators.svgs")

    def load(self, svgs_dir: Path) -> List[SvgFile]:
        files: List[SvgFile] = []
        for path in sorted(svgs_dir.glob("*.ts")):
            if path.name == INDEX_FILENAME or path.name == COMPONENT_MAP_FILENAME:
                continue
            svg_file = SvgFile(file_name=path.name[: -len(".ts")])
            try:
                svg_file.svgs = sorted(
                    iter_svg_components(path.read_text(encoding="utf-8")),
                    key=lambda svg: svg.name,
                )
            except ParseError as exc:
                exc.path = path
                self.logger.warning("Skipping SVG file %s", exc)
                continue
            except UnicodeDecodeError as exc:
                self.logger.warning("Skipping undecodable SVG file %s: %s", path, exc)
                continue
            if svg_file.svgs:
                files.append(svg_file)
        return sorted(files, key=lambda item: item.file_name)

    def render_index(self, files: List[SvgFile], indent: str) -> str:
        text = GENERATED_HEADER + "".join(svg_file.import_line() for svg_file in files)
        text += f"{EOL}export const SVG_DECLARATIONS: any[] = [{EOL}"
        for svg_file in files:
            for svg in svg_file.svgs:
                text += f"{indent}{svg.name},{EOL}"
        return text + f"];{EOL}"

    def render_component_map(self, files: List[SvgFile], indent: str) -> str:
        mapped = [svg_file for svg_file in files if svg_file.file_name != _MAP_EXCLUDED_FILE]
        text = GENERATED_HEADER + "".join(svg_file.import_line() for svg_file in mapped)
        text += f"{EOL}export const SVG_NAME_TO_COMPONENT_MAP: {{ [prop: string]: any }} = {{{EOL}"
        for svg_file in mapped:
            for svg in svg_file.svgs:
                text += f"{indent}'{svg.short_name}': {svg.name},{EOL}"
        text += f"}};{EOL}"
        return text + f"{EOL}export const SVG_NAMES = Object.keys(SVG_NAME_TO_COMPONENT_MAP);{EOL}"

    def collect(self, config: NgToolingConfig, token: CancellationToken) -> List[Path]:
        """Regenerate both SVG files; returns the paths written."""
        svgs_dir = config.svgs_dir
        if svgs_dir is None:
            return []
        files = self.load(svgs_dir)
        self.logger.debug("Found %d SVG component files in %s", len(files), svgs_dir)

        written: List[Path] = []
        index_path = svgs_dir / INDEX_FILENAME
        index_path.write_text(self.render_index(files, config.indent), encoding="utf-8")
        written.append(index_path)

        token.raise_if_cancelled("writing the SVG component map")

        map_path = svgs_dir / COMPONENT_MAP_FILENAME
        map_path.write_text(self.render_component_map(files, config.indent), encoding="utf-8")
        written.append(map_path)
        return written


__all__ = ["SvgCollator", "SvgComponent", "SvgFile", "iter_svg_components"]
