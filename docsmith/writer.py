"""Write navigation data, script and style bundles, and asset files.

:class:`DocumentationWriter` runs the output half of the pipeline once the
theme is resolved and the render context is built. The first script bundle
is prefixed with a prelude that publishes the sitemap and the template data
to client-side scripts as ``window.docsmith``. The first style bundle can
likewise start with the code highlighting rules.

Example
-------
>>> from pathlib import Path
>>> writer = DocumentationWriter(Path("public"))  # doctest: +SKIP
>>> written = writer.write(render_context)  # doctest: +SKIP
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import shutil
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json

from docsmith._constants import NAVIGATION_GLOBAL, SITEMAP_FILE_NAME

if typ.TYPE_CHECKING:
    from docsmith.context import RenderContext
    from docsmith.sitemap import Sitemap
    from docsmith.theme import Theme

logger = logging.getLogger(__name__)

INDEX_TEMPLATE = "index"


def navigation_prelude(sitemap: Sitemap, template_data: cabc.Mapping[str, object]) -> str:
    """Return the script statement publishing navigation data to the browser.

    >>> from docsmith.sitemap import Sitemap, SitemapNode
    >>> navigation_prelude(Sitemap("", [SitemapNode.leaf("Home", "index.html")]), {})
    'window.docsmith = {"sitemap":[{"title":"Home","url":"index.html"}],"config":{}};'
    """
    payload = {"sitemap": list(sitemap.nodes), "config": dict(template_data)}
    encoded = msgspec_json.encode(payload, enc_hook=_encode_fallback).decode("utf-8")
    return f"window.{NAVIGATION_GLOBAL} = {encoded};"


def _encode_fallback(value: object) -> object:
    """Encode values msgspec does not support natively as strings."""
    return str(value)


class AssetBundler:
    """Concatenate source files into a single output file."""

    @staticmethod
    def merged_content(
        sources: cabc.Iterable[Path], prelude: str | None = None
    ) -> str:
        """Return ``prelude`` followed by each source, one per line block."""
        parts: list[str] = []
        if prelude:
            parts.append(prelude)
        parts.extend(path.read_text(encoding="utf-8") for path in sources)
        return "".join(f"{part}\n" for part in parts)

    def bundle(
        self,
        sources: cabc.Iterable[Path],
        output_path: Path,
        prelude: str | None = None,
    ) -> Path:
        """Write the concatenated ``sources`` to ``output_path``."""
        content = self.merged_content(sources, prelude)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        return output_path


@dc.dataclass(slots=True)
class WriteSummary:
    """Paths produced by a :class:`DocumentationWriter` run."""

    written: list[Path] = dc.field(default_factory=list)
    total_steps: int = 0


class DocumentationWriter:
    """Write the theme-derived output files of a documentation run."""

    def __init__(
        self,
        output_dir: Path,
        *,
        bundler: AssetBundler | None = None,
        index_file: str = "index.html",
        assets: cabc.Mapping[str, Path] | None = None,
        style_prelude: str | None = None,
    ) -> None:
        self.output_dir = output_dir
        self.bundler = bundler or AssetBundler()
        self.index_file = index_file
        self.assets = dict(assets or {})
        self.style_prelude = style_prelude

    def asset_files(self, theme: Theme) -> dict[str, Path]:
        """Return every file to copy keyed by its output-relative path.

        Configured assets replace theme assets that target the same path,
        compared case-insensitively.
        """
        files = {
            relative.casefold(): (relative, source)
            for relative, source in theme.assets.items()
        }
        for relative, source in self.assets.items():
            files[relative.casefold()] = (relative, source)
        return dict(files.values())

    def total_steps(self, render: RenderContext) -> int:
        """Return the progress total: pages, bundles, and copied files."""
        theme = render.renderer.theme
        return (
            render.context.sitemap.page_count
            + len(theme.scripts)
            + len(theme.styles)
            + len(self.asset_files(theme))
        )

    def write(self, render: RenderContext) -> WriteSummary:
        """Write navigation data, bundles, assets, and the optional index page."""
        summary = WriteSummary(total_steps=self.total_steps(render))
        theme = render.renderer.theme
        sitemap = render.context.sitemap
        self.output_dir.mkdir(parents=True, exist_ok=True)

        sitemap_path = self.output_dir / SITEMAP_FILE_NAME
        sitemap_path.write_bytes(msgspec_json.format(sitemap.to_json(), indent=2))
        summary.written.append(sitemap_path)

        summary.written.extend(self._write_scripts(theme, sitemap, render.data.values))
        summary.written.extend(self._write_styles(theme))
        summary.written.extend(self._copy_assets(theme))

        if render.renderer.has_template(INDEX_TEMPLATE):
            index_path = self.output_dir / self.index_file
            index_path.write_text(render.render(INDEX_TEMPLATE), encoding="utf-8")
            summary.written.append(index_path)
        return summary

    def _target(self, relative: str) -> Path:
        return self.output_dir / Path(relative)

    def _write_scripts(
        self, theme: Theme, sitemap: Sitemap, template_data: cabc.Mapping[str, object]
    ) -> list[Path]:
        written: list[Path] = []
        prelude: str | None = navigation_prelude(sitemap, template_data)
        for target, sources in theme.scripts.items():
            written.append(self.bundler.bundle(sources, self._target(target), prelude))
            prelude = None
        return written

    def _write_styles(self, theme: Theme) -> list[Path]:
        written: list[Path] = []
        prelude = self.style_prelude
        for target, sources in theme.styles.items():
            written.append(self.bundler.bundle(sources, self._target(target), prelude))
            prelude = None
        return written

    def _copy_assets(self, theme: Theme) -> list[Path]:
        written: list[Path] = []
        for relative, source in self.asset_files(theme).items():
            target = self._target(relative)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
            written.append(target)
        logger.debug("Copied %d asset files", len(written))
        return written


__all__ = [
    "INDEX_TEMPLATE",
    "AssetBundler",
    "DocumentationWriter",
    "WriteSummary",
    "navigation_prelude",
]
