"""Tests for writing navigation data, bundles, and assets."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
import pytest
from bs4 import BeautifulSoup

from docsmith.context import DocContext, RenderContext
from docsmith.metadata import build_metadata_model
from docsmith.rendering import MarkdownTransformer
from docsmith.rendering.builder import build_render_context
from docsmith.sitemap import Sitemap, SitemapNode
from docsmith.theme import DocConvention, ThemeLoader, load_theme
from docsmith.writer import AssetBundler, DocumentationWriter, navigation_prelude

if typ.TYPE_CHECKING:
    from conftest import ThemeFactory


def test_prelude_publishes_sitemap_and_config() -> None:
    sitemap = Sitemap("", [SitemapNode.leaf("Home", "index.html")])
    prelude = navigation_prelude(sitemap, {"title": "Docs", "root": Path("x")})

    assert prelude.startswith("window.docsmith = ")
    assert prelude.endswith(";")
    payload = msgspec_json.decode(prelude.removeprefix("window.docsmith = ")[:-1])
    assert payload == {
        "sitemap": [{"title": "Home", "url": "index.html"}],
        "config": {"title": "Docs", "root": "x"},
    }


def test_bundler_concatenates_sources_in_order(tmp_path: Path) -> None:
    first = tmp_path / "a.js"
    second = tmp_path / "b.js"
    first.write_text("a();", encoding="utf-8")
    second.write_text("b();", encoding="utf-8")
    output = tmp_path / "out" / "nested" / "script.js"

    AssetBundler().bundle([first, second], output, prelude="init();")

    assert output.read_text(encoding="utf-8") == "init();\na();\nb();\n"


@pytest.fixture
def render_context(
    make_theme: ThemeFactory,
    themes_root: Path,
    metadata_payload: dict[str, typ.Any],
) -> RenderContext:
    make_theme(
        "base",
        {
            "scripts": {"source": ["scripts/"]},
            "styles": {"source": ["styles/"]},
            "assets": ["assets/**"],
        },
        {
            "scripts/base.js": "base();",
            "styles/base.css": "body{}",
            "assets/img/logo.svg": "<svg/>",
        },
    )
    make_theme(
        "site",
        {
            "base": "base",
            "scripts": {"source": ["extra/"], "targetPath": "extra.js"},
            "templates": ["templates/"],
        },
        {
            "extra/extra.js": "extra();",
            "templates/index.jinja": "<ul>{% for node in sitemap %}<li>{{ node.title }}</li>{% endfor %}</ul>",
        },
    )
    theme = ThemeLoader(themes_root / "html").load("site")
    context = DocContext(build_metadata_model(metadata_payload))
    return build_render_context(context, theme, {"title": "Widgets"})


def test_writer_outputs_every_artifact(
    tmp_path: Path, render_context: RenderContext
) -> None:
    output_dir = tmp_path / "public"
    summary = DocumentationWriter(output_dir).write(render_context)

    relative = [path.relative_to(output_dir).as_posix() for path in summary.written]
    assert relative == [
        "sitemap.json",
        "extra.js",
        "script.js",
        "styles.css",
        "assets/img/logo.svg",
        "index.html",
    ]
    sitemap = msgspec_json.decode((output_dir / "sitemap.json").read_bytes())
    assert [node["title"] for node in sitemap] == ["API", "Topics"]


def test_prelude_only_prefixes_first_script_bundle(
    tmp_path: Path, render_context: RenderContext
) -> None:
    DocumentationWriter(tmp_path).write(render_context)

    first = (tmp_path / "extra.js").read_text(encoding="utf-8")
    second = (tmp_path / "script.js").read_text(encoding="utf-8")
    assert first.startswith("window.docsmith = ")
    assert '"title":"Widgets"' in first
    assert first.endswith("extra();\n")
    assert second == "base();\n"


def test_index_page_renders_sitemap(
    tmp_path: Path, render_context: RenderContext
) -> None:
    DocumentationWriter(tmp_path).write(render_context)
    soup = BeautifulSoup((tmp_path / "index.html").read_text(encoding="utf-8"), "html.parser")
    assert [item.get_text() for item in soup.find_all("li")] == ["API", "Topics"]


def test_total_steps_counts_pages_bundles_and_assets(
    tmp_path: Path, render_context: RenderContext
) -> None:
    # 11 sitemap pages, 2 script bundles, 1 style bundle, 1 asset
    assert DocumentationWriter(tmp_path).total_steps(render_context) == 15


def test_configured_assets_override_theme_assets(
    tmp_path: Path, render_context: RenderContext
) -> None:
    logo = tmp_path / "project" / "logo.svg"
    guide = tmp_path / "project" / "guide.pdf"
    logo.parent.mkdir()
    logo.write_text("<svg id='project'/>", encoding="utf-8")
    guide.write_bytes(b"%PDF")
    output_dir = tmp_path / "public"
    writer = DocumentationWriter(
        output_dir,
        assets={"assets/IMG/logo.svg": logo, "files/guide.pdf": guide},
    )

    assert writer.total_steps(render_context) == 16
    summary = writer.write(render_context)

    relative = [path.relative_to(output_dir).as_posix() for path in summary.written]
    assert relative[-3:] == ["assets/IMG/logo.svg", "files/guide.pdf", "index.html"]
    copied = output_dir / "assets" / "IMG" / "logo.svg"
    assert copied.read_text(encoding="utf-8") == "<svg id='project'/>"


def test_style_prelude_starts_the_first_style_bundle(
    tmp_path: Path, render_context: RenderContext
) -> None:
    DocumentationWriter(tmp_path, style_prelude=".codehilite{}").write(render_context)
    assert (tmp_path / "styles.css").read_text(encoding="utf-8") == ".codehilite{}\nbody{}\n"


def test_bundled_classic_theme_builds_a_site(
    tmp_path: Path, metadata_payload: dict[str, typ.Any]
) -> None:
    transformer = MarkdownTransformer()
    theme = load_theme("classic", DocConvention.DOTNET, transform=transformer)
    context = DocContext(build_metadata_model(metadata_payload))
    render = build_render_context(
        context, theme, {"title": "Widgets API"}, transform=transformer
    )
    DocumentationWriter(tmp_path).write(render)

    soup = BeautifulSoup((tmp_path / "index.html").read_text(encoding="utf-8"), "html.parser")
    assert soup.title is not None
    assert soup.title.get_text() == "Welcome"
    footer = soup.find("footer")
    assert footer is not None
    assert "Generated by docsmith" in footer.get_text()
    assert soup.select_one('script[src="script.js"]') is not None
    assert (tmp_path / "styles.css").read_text(encoding="utf-8")
    assert (tmp_path / "assets" / "images" / "favicon.svg").is_file()
