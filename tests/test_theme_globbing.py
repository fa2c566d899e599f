"""Unit tests for glob-based theme file selection."""

from __future__ import annotations

from pathlib import Path

import pytest

from docsmith.theme import FileGlobFilter, add_extension_if_missing


def _touch(root: Path, *relatives: str) -> None:
    for relative in relatives:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(relative, encoding="utf-8")


@pytest.mark.parametrize(
    ("pattern", "extension", "expected"),
    [
        ("scripts/", ".js", "scripts/*.js"),
        ("scripts/**", "js", "scripts/**/*.js"),
        ("scripts/main", ".js", "scripts/main.js"),
        ("scripts/main.ts", ".js", "scripts/main.ts"),
        ("scripts/*", None, "scripts/*"),
    ],
)
def test_add_extension_if_missing(
    pattern: str, extension: str | None, expected: str
) -> None:
    assert add_extension_if_missing(pattern, extension) == expected


def test_matches_are_sorted_per_pattern_in_declaration_order(tmp_path: Path) -> None:
    _touch(tmp_path, "scripts/b.js", "scripts/a.js", "vendor/z.js")
    found = FileGlobFilter(["vendor/", "scripts/"]).find_matching_files(tmp_path, ".js")
    names = [path.relative_to(tmp_path.resolve()).as_posix() for path in found]
    assert names == ["vendor/z.js", "scripts/a.js", "scripts/b.js"]


def test_exclusions_and_duplicates(tmp_path: Path) -> None:
    _touch(tmp_path, "styles/site.css", "styles/print.css", "styles/site.scss")
    glob = FileGlobFilter(["styles/site", "styles/", "!styles/print"])
    found = glob.find_matching_files(tmp_path, ".css")
    assert [path.name for path in found] == ["site.css"]
    assert all(path.is_absolute() for path in found)


def test_recursive_patterns_match_nested_assets(tmp_path: Path) -> None:
    _touch(tmp_path, "assets/logo.svg", "assets/fonts/body.woff2", "templates/a.jinja")
    found = FileGlobFilter(["assets/**"]).find_matching_files(tmp_path)
    names = sorted(path.relative_to(tmp_path.resolve()).as_posix() for path in found)
    assert names == ["assets/fonts/body.woff2", "assets/logo.svg"]


def test_empty_filter_matches_nothing(tmp_path: Path) -> None:
    _touch(tmp_path, "scripts/a.js")
    assert FileGlobFilter().find_matching_files(tmp_path, ".js") == []


def test_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        FileGlobFilter(["*"]).find_matching_files(tmp_path / "absent")
