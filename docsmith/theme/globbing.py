"""Glob-based file selection for theme templates, bundles, and assets.

Theme declarations list the files they contribute as glob patterns relative to
the theme directory. A pattern prefixed with ``!`` excludes matches instead of
including them, and patterns without an extension can be completed with a
default one (``templates/`` selects ``templates/*.jinja`` when the default
extension is ``.jinja``).

Examples
--------
>>> add_extension_if_missing("scripts/", ".js")
'scripts/*.js'
>>> add_extension_if_missing("scripts/**", "js")
'scripts/**/*.js'
>>> add_extension_if_missing("scripts/main", ".js")
'scripts/main.js'
"""

from __future__ import annotations

import collections.abc as cabc
from pathlib import Path, PurePosixPath


def _with_leading_dot(extension: str) -> str:
    return extension if extension.startswith(".") else f".{extension}"


def add_extension_if_missing(pattern: str, extension: str | None) -> str:
    """Complete ``pattern`` with ``extension`` when it names no file type."""
    if not extension:
        return pattern
    suffix = _with_leading_dot(extension)
    if pattern.endswith("/"):
        return f"{pattern}*{suffix}"
    if pattern.endswith("**"):
        return f"{pattern}/*{suffix}"
    last_segment = pattern.rsplit("/", 1)[-1]
    if "." not in last_segment:
        return f"{pattern}{suffix}"
    return pattern


def _normalize(pattern: str) -> str:
    normalized = pattern.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized.lstrip("/")


class FileGlobFilter(list[str]):
    """Ordered include/exclude glob patterns evaluated against a directory."""

    def __init__(self, patterns: cabc.Iterable[str] = ()) -> None:
        super().__init__(patterns)

    def _split(self, default_extension: str | None) -> tuple[list[str], list[str]]:
        includes: list[str] = []
        excludes: list[str] = []
        for raw in self:
            if not raw:
                continue
            if raw.startswith("!"):
                excludes.append(
                    add_extension_if_missing(_normalize(raw[1:]), default_extension)
                )
            else:
                includes.append(
                    add_extension_if_missing(_normalize(raw), default_extension)
                )
        return includes, excludes

    def find_matching_files(
        self, directory: Path, default_extension: str | None = None
    ) -> list[Path]:
        """Return absolute paths of files under ``directory`` matching the filter.

        Parameters
        ----------
        directory : Path
            Root directory the patterns are relative to.
        default_extension : str, optional
            Extension appended to patterns that do not name one.

        Returns
        -------
        list[Path]
            Resolved file paths, grouped by include pattern in declaration
            order and sorted within each pattern. A file matched by several
            patterns appears once, at its first position.

        Raises
        ------
        FileNotFoundError
            If ``directory`` does not exist.
        """
        if not directory.is_dir():
            msg = f"Directory '{directory}' does not exist."
            raise FileNotFoundError(msg)
        root = directory.resolve()
        includes, excludes = self._split(default_extension)
        seen: set[Path] = set()
        matches: list[Path] = []
        for pattern in includes:
            for candidate in sorted(root.glob(pattern)):
                if not candidate.is_file() or candidate in seen:
                    continue
                relative = PurePosixPath(candidate.relative_to(root).as_posix())
                if any(relative.full_match(exclude) for exclude in excludes):
                    continue
                seen.add(candidate)
                matches.append(candidate)
        return matches


__all__ = ["FileGlobFilter", "add_extension_if_missing"]
