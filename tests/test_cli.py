"""Tests for the ``docsmith`` console commands."""

from __future__ import annotations

import typing as typ
from pathlib import Path
from textwrap import dedent

import msgspec.json as msgspec_json
import pytest

from docsmith import cli
from docsmith.errors import ConfigError, ValidationError
from docsmith.rendering import MarkdownTransformer

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

    from conftest import ThemeFactory


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "docsmith.yaml"
    path.write_text(dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_build_writes_site_with_bundled_theme(
    tmp_path: Path, metadata_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = _write_config(
        tmp_path,
        f"""
        output_dir: public
        metadata: {metadata_file.name}
        theme_settings:
          title: Widgets API
          navigationDepth: lots
        """,
    )
    cli.build(config=config)

    output = capsys.readouterr().out
    public = tmp_path / "public"
    for name in ("sitemap.json", "script.js", "styles.css", "index.html"):
        assert (public / name).is_file(), f"{name} was not written"
        assert name in output
    script = (public / "script.js").read_text(encoding="utf-8")
    assert script.startswith("window.docsmith = ")
    assert '"title":"Widgets API"' in script
    assert '"navigationDepth":2.0' in script


def test_build_copies_configured_assets_and_highlight_styles(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    media = tmp_path / "media"
    media.mkdir()
    (media / "diagram.png").write_bytes(b"png")
    (media / "notes.txt").write_text("skip", encoding="utf-8")
    config = _write_config(
        tmp_path,
        """
        output_dir: public
        assets:
          - source: ["media/*.png"]
            target_path: images
        """,
    )
    cli.build(config=config)

    public = tmp_path / "public"
    assert (public / "images" / "diagram.png").read_bytes() == b"png"
    assert not (public / "images" / "notes.txt").exists()
    assert "images/diagram.png" in capsys.readouterr().out
    styles = (public / "styles.css").read_text(encoding="utf-8")
    assert styles.startswith(MarkdownTransformer().stylesheet)


def test_build_output_dir_override(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = _write_config(tmp_path, "output_dir: public")
    target = tmp_path / "elsewhere"
    cli.build(config=config, output_dir=target)

    assert (target / "sitemap.json").is_file()
    assert not (tmp_path / "public").exists()
    assert msgspec_json.decode((target / "sitemap.json").read_bytes()) == []
    assert "wrote" in capsys.readouterr().out


def test_build_uses_custom_themes_directory(
    tmp_path: Path, make_theme: ThemeFactory, themes_root: Path
) -> None:
    make_theme(
        "wiki",
        {"templates": ["templates/"]},
        {"templates/index.jinja": "# {{ title }}\n"},
        theme_format="md",
    )
    config = _write_config(
        tmp_path,
        f"""
        output_dir: out
        convention: devops
        theme: wiki
        themes_dir: {themes_root}
        theme_settings:
          title: A & B
        """,
    )
    cli.build(config=config)

    assert (tmp_path / "out" / "index.md").read_text(encoding="utf-8") == "# A & B"


def test_sitemap_command_writes_json(
    tmp_path: Path, metadata_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    output = tmp_path / "nav"
    output.mkdir()
    cli.sitemap(metadata_file, granularity="type", output=output)

    written = msgspec_json.decode((output / "sitemap.json").read_bytes())
    assert [node["title"] for node in written[0]["items"]] == ["Gadget", "Color"]
    assert "(5 pages)" in capsys.readouterr().out


def test_sitemap_command_prints_json(
    metadata_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.sitemap(metadata_file, base_url="https://example.com/")
    printed = msgspec_json.decode(capsys.readouterr().out)
    assert printed[1]["items"][0] == {"title": "Welcome", "url": "index.html"}


def test_main_reports_unknown_granularity(
    metadata_file: Path, mocker: MockerFixture, capsys: pytest.CaptureFixture[str]
) -> None:
    mocker.patch(
        "sys.argv",
        ["docsmith", "sitemap", str(metadata_file), "--granularity", "chapters"],
    )
    with pytest.raises(SystemExit) as excinfo:
        cli.main()

    assert excinfo.value.code == 1
    assert "'chapters'" in capsys.readouterr().err


def test_theme_command_lists_resolved_files(
    make_theme: ThemeFactory, themes_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    make_theme(
        "base",
        {
            "metadata": {"name": "Base"},
            "scripts": {"source": ["s/"]},
            "parameters": {"title": {"type": "string"}},
        },
        {"s/app.js": ""},
    )
    cli.theme("base", themes_dir=themes_root)

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "theme: base"
    assert "  name: Base" in lines
    assert "script script.js:" in lines
    assert any(line.endswith("app.js") for line in lines)
    assert "parameter title (string)" in lines


def test_main_reports_every_violation_and_exits(
    mocker: MockerFixture, capsys: pytest.CaptureFixture[str]
) -> None:
    error = ConfigError("Configuration file is invalid: docsmith.yaml", ["a", "b"])
    mocker.patch.object(cli, "app", side_effect=error)

    with pytest.raises(SystemExit) as excinfo:
        cli.main()

    assert excinfo.value.code == 1
    assert capsys.readouterr().err.splitlines() == [
        "Configuration file is invalid: docsmith.yaml",
        "  - a",
        "  - b",
    ]


def test_main_reports_missing_files(
    mocker: MockerFixture, capsys: pytest.CaptureFixture[str]
) -> None:
    mocker.patch.object(
        cli, "app", side_effect=FileNotFoundError("Theme 'ghost' could not be found")
    )
    with pytest.raises(SystemExit):
        cli.main()
    assert "ghost" in capsys.readouterr().err


def test_invalid_theme_stops_build_before_writing(
    tmp_path: Path, make_theme: ThemeFactory, themes_root: Path
) -> None:
    make_theme("broken", {"parameters": {"n": {"type": "number", "defaultValue": "x"}}})
    config = _write_config(
        tmp_path,
        f"""
        output_dir: out
        theme: broken
        themes_dir: {themes_root}
        """,
    )
    with pytest.raises(ValidationError):
        cli.build(config=config)
    assert not (tmp_path / "out").exists()
