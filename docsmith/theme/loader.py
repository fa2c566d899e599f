"""Resolve a theme and its ancestors into one immutable :class:`Theme`.

Themes live under ``themes/<format>/<theme-id>/theme.json``. A declaration may
name a ``base`` theme; :class:`ThemeLoader` walks that chain from the
requested theme towards its root ancestor and merges each link into a
:class:`ThemeBuilder`. Because the most-derived theme is merged first, the
"first write wins" rules (parameters, templates, assets) favour the most
specific definition, while script and style bundles accumulate so the
most-derived files come first in each bundle.

Example
-------
>>> from docsmith.theme import DocConvention, load_theme
>>> theme = load_theme("classic", DocConvention.DOTNET)  # doctest: +SKIP
>>> sorted(theme.templates)[:2]  # doctest: +SKIP
['layout', 'topic']
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path

from docsmith._constants import (
    DEFAULT_THEME,
    SCRIPT_EXTENSION,
    STYLE_EXTENSION,
    TEMPLATE_EXTENSION,
    THEME_FILE_NAME,
)
from docsmith.errors import ThemeNotFoundError

from .declaration import load_theme_declaration
from .models import (
    BundleSpec,
    CaseInsensitiveMapping,
    Theme,
    ThemeDeclaration,
    ThemeMetadata,
)
from .parameters import TextTransform, ThemeParameter

logger = logging.getLogger(__name__)

DEFAULT_THEMES_ROOT = Path(__file__).resolve().parents[1] / "themes"


class DocConvention(enum.StrEnum):
    """Output conventions; each selects a theme format directory."""

    DOTNET = "dotnet"
    DOCFX = "docfx"
    DEVOPS = "devops"

    @property
    def theme_format(self) -> str:
        """Return the theme format directory used by this convention."""
        return "md" if self is DocConvention.DEVOPS else "html"


def themes_directory(convention: DocConvention, root: Path | None = None) -> Path:
    """Return the directory holding themes for ``convention``."""
    return (root or DEFAULT_THEMES_ROOT) / convention.theme_format


class ThemeBuilder:
    """Accumulate theme declarations with per-artifact precedence rules."""

    def __init__(self, theme_id: str) -> None:
        self.theme_id = theme_id
        self.metadata: ThemeMetadata | None = None
        self._parameters: dict[str, tuple[str, ThemeParameter]] = {}
        self._templates: dict[str, tuple[str, Path]] = {}
        self._assets: dict[str, tuple[str, Path]] = {}
        self._scripts: dict[str, tuple[str, list[Path]]] = {}
        self._styles: dict[str, tuple[str, list[Path]]] = {}

    @staticmethod
    def _add_first(
        target: dict[str, tuple[str, object]], key: str, value: object
    ) -> None:
        target.setdefault(key.casefold(), (key, value))

    @staticmethod
    def _merge_bundle(
        target: dict[str, tuple[str, list[Path]]],
        bundle: BundleSpec,
        directory: Path,
        default_extension: str,
    ) -> None:
        folded = bundle.target_path.casefold()
        key, existing = target.get(folded, (bundle.target_path, []))
        files = list(existing)
        seen = set(files)
        for path in bundle.source.find_matching_files(directory, default_extension):
            if path not in seen:
                seen.add(path)
                files.append(path)
        if files:
            target[folded] = (key, files)

    def merge(self, declaration: ThemeDeclaration, directory: Path) -> None:
        """Merge one declaration, treating earlier merges as more derived.

        Parameters
        ----------
        declaration : ThemeDeclaration
            Parsed ``theme.json`` of one link in the chain.
        directory : Path
            Root directory the declaration's glob patterns are relative to.
        """
        self._merge_bundle(self._scripts, declaration.scripts, directory, SCRIPT_EXTENSION)
        self._merge_bundle(self._styles, declaration.styles, directory, STYLE_EXTENSION)

        for path in declaration.templates.find_matching_files(
            directory, TEMPLATE_EXTENSION
        ):
            self._add_first(self._templates, path.stem, path)

        root = directory.resolve()
        for path in declaration.assets.find_matching_files(directory):
            self._add_first(self._assets, path.relative_to(root).as_posix(), path)

        for name, parameter in declaration.parameters.items():
            self._add_first(self._parameters, name, parameter)

    def build(self) -> Theme:
        """Freeze the accumulated state into an immutable :class:`Theme`."""

        def _sorted_bundles(
            bundles: dict[str, tuple[str, list[Path]]],
        ) -> CaseInsensitiveMapping[tuple[Path, ...]]:
            return CaseInsensitiveMapping(
                (key, tuple(files)) for _, (key, files) in sorted(bundles.items())
            )

        return Theme(
            id=self.theme_id,
            metadata=self.metadata,
            parameters=CaseInsensitiveMapping(self._parameters.values()),
            templates=CaseInsensitiveMapping(self._templates.values()),
            scripts=_sorted_bundles(self._scripts),
            styles=_sorted_bundles(self._styles),
            assets=CaseInsensitiveMapping(self._assets.values()),
        )


class ThemeLoader:
    """Load themes from a format directory, following ``base`` references."""

    def __init__(
        self, themes_root: Path, *, transform: TextTransform | None = None
    ) -> None:
        self.themes_root = themes_root
        self.transform = transform

    def theme_directory(self, name: str) -> Path:
        """Return the directory of theme ``name``, which must exist."""
        directory = self.themes_root / name
        if not directory.is_dir():
            msg = f"Theme '{name}' could not be found in '{self.themes_root}'."
            raise ThemeNotFoundError(msg)
        return directory

    def load(self, name: str = DEFAULT_THEME) -> Theme:
        """Resolve ``name`` and its ancestors into a single theme.

        Parameters
        ----------
        name : str, optional
            Identifier of the requested theme. Defaults to ``"classic"``.

        Returns
        -------
        Theme
            The merged theme. Metadata comes from ``name`` only.

        Raises
        ------
        ValueError
            If ``name`` is empty.
        ThemeNotFoundError
            If a theme in the chain has no directory or no ``theme.json``.
        ValidationError
            If a declaration in the chain is malformed.
        """
        if not name:
            msg = "A theme name is required."
            raise ValueError(msg)

        builder = ThemeBuilder(name)
        visited: list[str] = []
        current: str | None = name
        while current:
            if current in visited:
                logger.warning(
                    "Theme '%s' appears more than once in the inheritance chain of "
                    "'%s' (%s); ignoring the repeated link.",
                    current,
                    name,
                    " -> ".join([*visited, current]),
                )
                break
            visited.append(current)
            directory = self.theme_directory(current)
            declaration = load_theme_declaration(
                directory / THEME_FILE_NAME, transform=self.transform
            )
            if current == name:
                builder.metadata = declaration.metadata
            builder.merge(declaration, directory)
            current = declaration.base
        logger.debug("Resolved theme '%s' from %s", name, " -> ".join(visited))
        return builder.build()


def load_theme(
    name: str,
    convention: DocConvention,
    *,
    themes_root: Path | None = None,
    transform: TextTransform | None = None,
) -> Theme:
    """Load theme ``name`` for ``convention`` from the themes directory."""
    loader = ThemeLoader(themes_directory(convention, themes_root), transform=transform)
    return loader.load(name)


__all__ = [
    "DEFAULT_THEMES_ROOT",
    "DocConvention",
    "ThemeBuilder",
    "ThemeLoader",
    "load_theme",
    "themes_directory",
]
