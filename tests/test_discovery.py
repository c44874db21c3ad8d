"""Tests for boundary discovery and the containment hierarchy."""

from __future__ import annotations

from pathlib import Path

import pytest

from ngtooling.config import NgToolingConfig
from ngtooling.discovery import (
    IgnoreRule,
    build_hierarchy,
    find_index_files,
    find_module_boundaries,
)
from ngtooling.errors import DiscoveryError
from ngtooling.models import ModuleBoundary


def _boundary(root: Path, relative: str) -> ModuleBoundary:
    return ModuleBoundary.from_file(root / relative, root)


def test_module_boundary_name_stops_at_first_dot(tmp_path: Path) -> None:
    boundary = _boundary(tmp_path, "src/app/user-list/user-list.module.ts")

    assert boundary.name == "user-list"
    assert boundary.relative_dir == "src/app/user-list"
    assert boundary.output_path("index.ts") == tmp_path / "src/app/user-list/user-list.index.ts"


def test_build_hierarchy_excludes_only_strict_descendants(tmp_path: Path) -> None:
    outer = _boundary(tmp_path, "src/foo/foo.module.ts")
    inner = _boundary(tmp_path, "src/foo/bar/bar.module.ts")
    deepest = _boundary(tmp_path, "src/foo/bar/baz/baz.module.ts")
    sibling = _boundary(tmp_path, "src/other/other.module.ts")

    build_hierarchy([outer, inner, deepest, sibling])

    assert outer.excludes == [inner, deepest]
    assert inner.excludes == [deepest]
    assert deepest.excludes == []
    assert sibling.excludes == []
    assert outer.exclude_globs() == ["src/foo/bar/**", "src/foo/bar/baz/**"]


def test_build_hierarchy_compares_path_segments(tmp_path: Path) -> None:
    foo = _boundary(tmp_path, "src/foo/foo.module.ts")
    foobar = _boundary(tmp_path, "src/foobar/foobar.module.ts")

    build_hierarchy([foo, foobar])

    assert foo.excludes == []
    assert foobar.excludes == []


def test_build_hierarchy_makes_boundaries_sharing_a_directory_exclude_each_other(
    tmp_path: Path,
) -> None:
    first = _boundary(tmp_path, "src/shared/a.module.ts")
    second = _boundary(tmp_path, "src/shared/b.module.ts")

    build_hierarchy([first, second])

    assert first.excludes == [second]
    assert second.excludes == [first]
    assert first.exclude_globs() == ["src/shared/**"]


def test_find_index_files_is_empty_for_a_directory_claimed_by_a_sibling(workspace) -> None:
    workspace.write(
        {
            "src/foo/foo.module.ts": "",
            "src/foo/foo-routing.module.ts": "",
            "src/foo/index.ts": "export const FOO_DECLARATIONS = [];\n",
            "src/foo/list/index.ts": "export const LIST_DECLARATIONS = [];\n",
        }
    )
    config = workspace.config()
    boundaries = find_module_boundaries(config)
    build_hierarchy(boundaries)

    assert [find_index_files(boundary, config) for boundary in boundaries] == [[], []]


def test_exclude_globs_escape_wildcard_characters(workspace) -> None:
    workspace.write(
        {
            "src/lib/lib.module.ts": "",
            "src/lib/index.ts": "export const LIB_DECLARATIONS = [];\n",
            "src/lib/[id]/id.module.ts": "",
            "src/lib/[id]/index.ts": "export const ID_DECLARATIONS = [];\n",
        }
    )
    config = workspace.config()
    nested, outer = find_module_boundaries(config)
    build_hierarchy([outer, nested])

    assert outer.exclude_globs() == ["src/lib/[[]id]/**"]
    assert find_index_files(outer, config) == [workspace.root / "src/lib/index.ts"]


def test_build_hierarchy_is_idempotent(tmp_path: Path) -> None:
    outer = _boundary(tmp_path, "src/foo/foo.module.ts")
    inner = _boundary(tmp_path, "src/foo/bar/bar.module.ts")

    build_hierarchy([outer, inner])
    build_hierarchy([outer, inner])

    assert outer.excludes == [inner]


def test_find_module_boundaries_skips_root_module_and_node_modules(workspace) -> None:
    workspace.write(
        {
            "src/app/app.module.ts": "",
            "src/app/foo/foo.module.ts": "",
            "src/app/foo/bar/bar.module.ts": "",
            "src/app/foo/foo.component.ts": "",
            "node_modules/lib/lib.module.ts": "",
        }
    )

    boundaries = find_module_boundaries(workspace.config())

    assert [boundary.relative_dir for boundary in boundaries] == [
        "src/app/foo/bar",
        "src/app/foo",
    ]


def test_find_module_boundaries_honours_exclude_paths(workspace) -> None:
    workspace.write(
        {
            ".ngtooling.yml": "exclude_paths:\n  - legacy/\n",
            "src/legacy/old.module.ts": "",
            "src/fresh/fresh.module.ts": "",
        }
    )

    boundaries = find_module_boundaries(workspace.config())

    assert [boundary.name for boundary in boundaries] == ["fresh"]


def test_find_module_boundaries_rejects_missing_root(tmp_path: Path) -> None:
    with pytest.raises(DiscoveryError):
        find_module_boundaries(NgToolingConfig(root=tmp_path / "missing"))


def test_find_index_files_prunes_nested_boundaries(workspace) -> None:
    workspace.write(
        {
            "src/foo/foo.module.ts": "",
            "src/foo/index.ts": "",
            "src/foo/list/index.ts": "",
            "src/foo/bar/bar.module.ts": "",
            "src/foo/bar/index.ts": "",
            "src/foo/bar/detail/index.ts": "",
            "src/foobar/index.ts": "",
        }
    )
    config = workspace.config()
    boundaries = find_module_boundaries(config)
    build_hierarchy(boundaries)
    by_name = {boundary.name: boundary for boundary in boundaries}

    foo_files = find_index_files(by_name["foo"], config)
    bar_files = find_index_files(by_name["bar"], config)

    root = workspace.root
    assert foo_files == [root / "src/foo/index.ts", root / "src/foo/list/index.ts"]
    assert bar_files == [root / "src/foo/bar/detail/index.ts", root / "src/foo/bar/index.ts"]


def test_ignore_rule_matches_unanchored_segments() -> None:
    rule = IgnoreRule.parse("generated/")

    assert rule is not None
    assert rule.matches("src/generated", True)
    assert not rule.matches("src/generated", False)
    assert IgnoreRule.parse("   ") is None
