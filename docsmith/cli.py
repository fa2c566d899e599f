"""Cyclopts CLI entrypoint for building docsmith documentation artifacts.

The ``docsmith`` console script resolves a theme through its inheritance
chain, builds the navigation sitemap from an extractor metadata dump, and
writes the bundled scripts, styles, assets and ``sitemap.json`` into the
output directory. ``docsmith sitemap`` and ``docsmith theme`` expose the two
halves of that pipeline on their own for inspection.

Examples
--------
Build the site described by ``docsmith.yaml``:

>>> from docsmith.cli import main
>>> main()  # doctest: +SKIP

Print the resolved files of the bundled theme:

>>> from docsmith.cli import app
>>> app(["theme", "classic"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from ._constants import DEFAULT_THEME, SITEMAP_FILE_NAME
from .config import load_build_config
from .context import DocContext
from .errors import ValidationError
from .metadata import MetadataModel, load_metadata
from .rendering import MarkdownTransformer
from .rendering.builder import build_render_context
from .sitemap import PageGranularity, SitemapBuilder
from .theme import DocConvention, load_theme
from .writer import DocumentationWriter

DEFAULT_CONFIG = Path("docsmith.yaml")

logger = logging.getLogger(__name__)

app = App(name="docsmith", config=cyclopts.config.Env("DOCSMITH_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("docsmith").setLevel(
        logging.DEBUG if verbose else logging.WARNING
    )


@app.command(help="Build documentation bundles and navigation data.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to build config", env_var="DOCSMITH_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="DOCSMITH_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log progress details")] = False,
) -> None:
    """Build the documentation described by a ``docsmith.yaml`` file.

    Parameters
    ----------
    config : Path, optional
        Path to the build configuration (overridable via ``DOCSMITH_CONFIG``).
    output_dir : Path or None, optional
        Output directory overriding ``output_dir`` from the configuration.
    verbose : bool, optional
        Emit debug logging while building.

    Returns
    -------
    None
        Writes the output files and prints each written path.

    Raises
    ------
    ValidationError
        If the configuration, a theme declaration, or the metadata dump is
        invalid. Nothing is written in that case.
    """
    _configure_logging(verbose=verbose)
    build_config = load_build_config(config)
    transformer = MarkdownTransformer(pygments_style=build_config.pygments_style)
    resolved_theme = load_theme(
        build_config.theme,
        build_config.convention,
        themes_root=build_config.themes_dir,
        transform=transformer,
    )
    model = (
        load_metadata(build_config.metadata)
        if build_config.metadata
        else MetadataModel()
    )
    context = DocContext(
        model,
        granularity=build_config.granularity,
        base_url=build_config.base_url,
        language=build_config.language,
    )
    theme_format = build_config.convention.theme_format
    render = build_render_context(
        context,
        resolved_theme,
        build_config.theme_settings,
        transform=transformer,
        autoescape=theme_format == "html",
    )
    writer = DocumentationWriter(
        output_dir or build_config.output_dir,
        index_file=f"index.{theme_format}",
        assets=build_config.asset_files(),
        style_prelude=transformer.stylesheet if theme_format == "html" else None,
    )
    summary = writer.write(render)
    logger.debug("Build covers %d steps", summary.total_steps)
    for path in summary.written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Write the navigation sitemap for a metadata dump.")
def sitemap(
    metadata: typ.Annotated[Path, Parameter(help="Extractor metadata JSON dump")],
    *,
    base_url: typ.Annotated[
        str, Parameter(help="Site URL links are made relative to")
    ] = "",
    granularity: typ.Annotated[
        str, Parameter(help="Page granularity, e.g. 'namespace,type,member'")
    ] = "namespace,type,member",
    output: typ.Annotated[
        Path | None, Parameter(help="Write to this file instead of stdout")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log progress details")] = False,
) -> None:
    """Print or write the sitemap JSON built from ``metadata``.

    Parameters
    ----------
    metadata : Path
        Extractor dump describing assemblies and topics.
    base_url : str, optional
        Absolute site URL; leave empty for root-relative links.
    granularity : str, optional
        Which API elements receive their own pages.
    output : Path or None, optional
        Destination file; the JSON is printed when ``None``.
    verbose : bool, optional
        Emit debug logging.
    """
    _configure_logging(verbose=verbose)
    try:
        pages = PageGranularity.parse(granularity)
    except ValueError as exc:
        msg = f"Invalid --granularity: {exc}"
        raise ValidationError(msg, [str(exc)]) from exc
    builder = SitemapBuilder(base_url, pages)
    tree = builder.build(load_metadata(metadata))
    payload = msgspec_json.format(tree.to_json(), indent=2)
    if output is None:
        print(payload.decode("utf-8"))
        return
    if output.is_dir():
        output /= SITEMAP_FILE_NAME
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(payload)
    print(f"wrote {_format_path(output)} ({tree.page_count} pages)")


@app.command(help="Show the files and parameters of a resolved theme.")
def theme(
    name: typ.Annotated[str, Parameter(help="Theme identifier")] = DEFAULT_THEME,
    *,
    convention: typ.Annotated[
        DocConvention, Parameter(help="Output convention selecting the theme format")
    ] = DocConvention.DOTNET,
    themes_dir: typ.Annotated[
        Path | None, Parameter(help="Root holding <format>/<theme> directories")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log progress details")] = False,
) -> None:
    """Resolve theme ``name`` and print what it contributes."""
    _configure_logging(verbose=verbose)
    resolved = load_theme(
        name, convention, themes_root=themes_dir, transform=MarkdownTransformer()
    )
    metadata = resolved.metadata.as_dict() if resolved.metadata else {}
    print(f"theme: {resolved.id}")
    for key, value in metadata.items():
        print(f"  {key}: {value}")
    for label, bundles in (("script", resolved.scripts), ("style", resolved.styles)):
        for target, sources in bundles.items():
            print(f"{label} {target}:")
            for source in sources:
                print(f"  {_format_path(source)}")
    for template, path in resolved.templates.items():
        print(f"template {template}: {_format_path(path)}")
    for relative in resolved.assets:
        print(f"asset {relative}")
    for parameter_name, parameter in resolved.parameters.items():
        print(f"parameter {parameter_name} ({parameter.type})")


def main() -> None:
    """Invoke the Cyclopts application behind the ``docsmith`` console command.

    Validation failures are reported on stderr with every collected violation
    and end the process with exit status 1.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    try:
        app()
    except ValidationError as exc:
        print(exc.describe(), file=sys.stderr)
        raise SystemExit(1) from exc
    except FileNotFoundError as exc:
        print(exc, file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
