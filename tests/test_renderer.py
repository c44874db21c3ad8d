"""Tests for module index rendering."""

from __future__ import annotations

from pathlib import Path

from ngtooling.aggregator import aggregate
from ngtooling.models import IndexFile, SymbolKind
from ngtooling.renderer import GENERATED_HEADER, render_module_index


def _files(root: Path) -> list[IndexFile]:
    return [
        IndexFile(
            path=root / "b" / "index.ts",
            relative_path="b",
            symbols={
                SymbolKind.DECLARATIONS: "FOO_DECLARATIONS",
                SymbolKind.STATES: "BAR_STATES",
            },
        ),
        IndexFile(
            path=root / "a" / "index.ts",
            relative_path="a",
            symbols={SymbolKind.DECLARATIONS: "FOO_DECLARATIONS"},
        ),
    ]


def test_render_module_index_matches_expected_layout(tmp_path: Path) -> None:
    text = render_module_index(aggregate(_files(tmp_path)))

    assert text == (
        "/*\n"
        " * This file is generated by ng-tooling. Don't edit by hand.\n"
        " */\n"
        "\n"
        "import { FOO_DECLARATIONS } from './a';\n"
        "import { BAR_STATES, FOO_DECLARATIONS as FOO_DECLARATIONS2 } from './b';\n"
        "\n"
        "export const declarations: any[] = [\n"
        "  FOO_DECLARATIONS,\n"
        "  FOO_DECLARATIONS2,\n"
        "];\n"
        "\n"
        "export const states: any[] = [\n"
        "  ...BAR_STATES,\n"
        "];\n"
    )


def test_render_module_index_uses_configured_indent(tmp_path: Path) -> None:
    text = render_module_index(aggregate(_files(tmp_path)), indent="\t")

    assert "\tFOO_DECLARATIONS,\n" in text
    assert "\t...BAR_STATES,\n" in text


def test_render_module_index_is_stable_across_input_order(tmp_path: Path) -> None:
    files = _files(tmp_path)

    assert render_module_index(aggregate(files)) == render_module_index(aggregate(files[::-1]))


def test_render_module_index_without_symbols_is_header_only() -> None:
    assert render_module_index(aggregate([])) == GENERATED_HEADER
