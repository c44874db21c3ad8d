"""Tests for ngtooling.extractor."""

from __future__ import annotations

import logging
from pathlib import Path

from ngtooling.extractor import extract_symbols, load_index_file, relative_index_path
from ngtooling.models import SymbolKind


def test_extract_symbols_classifies_by_suffix() -> None:
    text = """
import { FooComponent } from './foo.component';
import { Routes } from '@angular/router';

export const FOO_DECLARATIONS: any[] = [
  FooComponent,
];

export const FOO_STATES: Routes = [{ path: 'foo', component: FooComponent }];

export const FOO_PROVIDERS = [];
"""

    assert extract_symbols(text) == {
        SymbolKind.DECLARATIONS: "FOO_DECLARATIONS",
        SymbolKind.STATES: "FOO_STATES",
    }


def test_extract_symbols_ignores_non_exported_and_nested_declarations() -> None:
    text = """
const LOCAL_DECLARATIONS = [];
export function build() {
  const INNER_STATES = [];
  return INNER_STATES;
}
export class Holder {
  static readonly X_DECLARATIONS = [];
}
"""

    assert extract_symbols(text) == {}


def test_extract_symbols_last_declaration_of_a_kind_wins() -> None:
    text = """
export const FIRST_DECLARATIONS = [];
export let SECOND_DECLARATIONS = [];
"""

    assert extract_symbols(text) == {SymbolKind.DECLARATIONS: "SECOND_DECLARATIONS"}


def test_extract_symbols_reads_first_declarator_and_declare_keyword() -> None:
    text = """
export declare const AMBIENT_STATES: any[];
export const A_DECLARATIONS = [], B_DECLARATIONS = [];
"""

    assert extract_symbols(text) == {
        SymbolKind.DECLARATIONS: "A_DECLARATIONS",
        SymbolKind.STATES: "AMBIENT_STATES",
    }


def test_relative_index_path_uses_index_for_boundary_directory(tmp_path: Path) -> None:
    assert relative_index_path(tmp_path / "index.ts", tmp_path) == "index"
    assert relative_index_path(tmp_path / "a" / "b" / "index.ts", tmp_path) == "a/b"


def test_load_index_file_degrades_on_parse_error(tmp_path: Path, caplog) -> None:
    path = tmp_path / "broken" / "index.ts"
    path.parent.mkdir()
    path.write_text("export const BROKEN_DECLARATIONS = [\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="ngtooling"):
        index_file = load_index_file(path, tmp_path)

    assert index_file.relative_path == "broken"
    assert index_file.symbols == {}
    assert "unparsable" in caplog.text


def test_load_index_file_without_exports_still_counts(tmp_path: Path) -> None:
    path = tmp_path / "index.ts"
    path.write_text("export * from './other';\n", encoding="utf-8")

    index_file = load_index_file(path, tmp_path)

    assert index_file.path == path
    assert index_file.relative_path == "index"
    assert index_file.symbols == {}
