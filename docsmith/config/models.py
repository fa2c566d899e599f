"""Typed dataclasses describing a docsmith build configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path, PurePosixPath

from docsmith._constants import DEFAULT_THEME
from docsmith.sitemap import PageGranularity
from docsmith.theme import DocConvention, FileGlobFilter


@dc.dataclass(frozen=True, slots=True)
class AssetTransfer:
    """Project files copied into one folder of the output directory."""

    source: FileGlobFilter
    target_path: str = ""

    def find_targets(self, base_dir: Path) -> dict[str, Path]:
        """Map output-relative file paths to the sources matched under ``base_dir``.

        Matched files are copied flat into ``target_path`` under their own
        file names.
        """
        folder = PurePosixPath(self.target_path)
        return {
            (folder / path.name).as_posix(): path
            for path in self.source.find_matching_files(base_dir)
        }


@dc.dataclass(slots=True)
class BuildConfig:
    """A fully resolved build configuration sourced from YAML.

    Attributes
    ----------
    base_dir : Path
        Directory relative paths are resolved against.
    output_dir : Path
        Directory receiving generated files.
    convention : DocConvention
        Output convention; selects the theme format directory.
    theme : str
        Identifier of the theme to load.
    base_url : str
        Absolute site URL, or ``""`` for root-relative output.
    granularity : PageGranularity
        Which API elements receive their own pages.
    theme_settings : dict[str, object]
        Per-build overrides for theme parameters.
    metadata : Path | None
        Extractor dump describing assemblies and topics.
    themes_dir : Path | None
        Root holding ``<format>/<theme>`` directories; the bundled themes
        are used when ``None``.
    language : str
        Code language used for rendered signatures.
    pygments_style : str
        Pygments style for highlighted markdown code.
    assets : list[AssetTransfer]
        Project files copied next to the theme assets.
    """

    base_dir: Path
    output_dir: Path
    convention: DocConvention = DocConvention.DOTNET
    theme: str = DEFAULT_THEME
    base_url: str = ""
    granularity: PageGranularity = PageGranularity.NAMESPACE_TYPE_MEMBER
    theme_settings: dict[str, object] = dc.field(default_factory=dict)
    metadata: Path | None = None
    themes_dir: Path | None = None
    language: str = "csharp"
    pygments_style: str = "default"
    assets: list[AssetTransfer] = dc.field(default_factory=list)

    def asset_files(self) -> dict[str, Path]:
        """Return configured asset copies keyed by output-relative path.

        A later transfer replaces an earlier one writing the same path.
        """
        files: dict[str, Path] = {}
        for transfer in self.assets:
            files.update(transfer.find_targets(self.base_dir))
        return files


__all__ = ["AssetTransfer", "BuildConfig"]
