"""Typed structures describing theme declarations and resolved themes."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from pathlib import Path

from docsmith._constants import DEFAULT_SCRIPT_TARGET, DEFAULT_STYLE_TARGET

from .globbing import FileGlobFilter

if typ.TYPE_CHECKING:
    from .parameters import ThemeParameter


class CaseInsensitiveMapping[V](cabc.Mapping[str, V]):
    """Read-only mapping whose string keys compare case-insensitively.

    The first spelling of each key is preserved for iteration, and iteration
    follows insertion order.

    Examples
    --------
    >>> mapping = CaseInsensitiveMapping({"Layout": "a.jinja"})
    >>> mapping["layout"]
    'a.jinja'
    >>> list(mapping)
    ['Layout']
    """

    __slots__ = ("_entries",)

    def __init__(
        self, items: cabc.Mapping[str, V] | cabc.Iterable[tuple[str, V]] = ()
    ) -> None:
        entries: dict[str, tuple[str, V]] = {}
        pairs = items.items() if isinstance(items, cabc.Mapping) else items
        for key, value in pairs:
            folded = key.casefold()
            original = entries[folded][0] if folded in entries else key
            entries[folded] = (original, value)
        self._entries = entries

    def __getitem__(self, key: str) -> V:
        return self._entries[key.casefold()][1]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._entries

    def __iter__(self) -> cabc.Iterator[str]:
        return (original for original, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"


@dc.dataclass(frozen=True, slots=True)
class ThemeMetadata:
    """Informational metadata published by a theme."""

    format: str | None = None
    name: str | None = None
    version: str | None = None
    description: str | None = None
    author: str | None = None
    license: str | None = None
    homepage: str | None = None

    def as_dict(self) -> dict[str, str]:
        """Return the populated fields as a plain dictionary."""
        return {
            field.name: value
            for field in dc.fields(self)
            if (value := getattr(self, field.name)) is not None
        }


@dc.dataclass(slots=True)
class BundleSpec:
    """Source globs that concatenate into a single output file."""

    target_path: str
    source: FileGlobFilter = dc.field(default_factory=FileGlobFilter)


@dc.dataclass(slots=True)
class ThemeDeclaration:
    """Contents of a single ``theme.json`` file.

    Attributes
    ----------
    base : str | None
        Identifier of the parent theme, if any.
    metadata : ThemeMetadata
        Informational metadata for this theme.
    parameters : CaseInsensitiveMapping[ThemeParameter]
        Declared parameters keyed by name.
    templates : FileGlobFilter
        Template file patterns.
    scripts : BundleSpec
        Script files and the bundle they concatenate into.
    styles : BundleSpec
        Style files and the bundle they concatenate into.
    assets : FileGlobFilter
        Static asset patterns copied verbatim.
    """

    base: str | None = None
    metadata: ThemeMetadata = dc.field(default_factory=ThemeMetadata)
    parameters: CaseInsensitiveMapping[ThemeParameter] = dc.field(
        default_factory=CaseInsensitiveMapping
    )
    templates: FileGlobFilter = dc.field(default_factory=FileGlobFilter)
    scripts: BundleSpec = dc.field(
        default_factory=lambda: BundleSpec(DEFAULT_SCRIPT_TARGET)
    )
    styles: BundleSpec = dc.field(
        default_factory=lambda: BundleSpec(DEFAULT_STYLE_TARGET)
    )
    assets: FileGlobFilter = dc.field(default_factory=FileGlobFilter)


@dc.dataclass(frozen=True, slots=True)
class Theme:
    """A theme resolved through its whole inheritance chain.

    Attributes
    ----------
    id : str
        Identifier of the requested theme.
    metadata : ThemeMetadata | None
        Metadata of the requested theme only.
    parameters : CaseInsensitiveMapping[ThemeParameter]
        Parameters, most-derived definition per name.
    templates : CaseInsensitiveMapping[Path]
        Template files keyed by file name without extension.
    scripts : CaseInsensitiveMapping[tuple[Path, ...]]
        Script bundles keyed by output path.
    styles : CaseInsensitiveMapping[tuple[Path, ...]]
        Style bundles keyed by output path.
    assets : CaseInsensitiveMapping[Path]
        Asset files keyed by their path relative to the declaring theme.
    """

    id: str
    metadata: ThemeMetadata | None
    parameters: CaseInsensitiveMapping[ThemeParameter]
    templates: CaseInsensitiveMapping[Path]
    scripts: CaseInsensitiveMapping[tuple[Path, ...]]
    styles: CaseInsensitiveMapping[tuple[Path, ...]]
    assets: CaseInsensitiveMapping[Path]


__all__ = [
    "BundleSpec",
    "CaseInsensitiveMapping",
    "Theme",
    "ThemeDeclaration",
    "ThemeMetadata",
]
