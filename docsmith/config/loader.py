"""Load build configuration YAML into a :class:`BuildConfig`."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from docsmith._constants import DEFAULT_THEME
from docsmith.errors import ConfigError

from .helpers import (
    _optional_str,
    _parse_assets,
    _parse_base_url,
    _parse_convention,
    _parse_granularity,
    _parse_settings,
    _resolve_path,
)
from .models import BuildConfig

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_build_config(path: Path) -> BuildConfig:
    """Load the YAML configuration describing one documentation build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration (for example
        ``docsmith.yaml``). Relative paths inside it resolve against its
        directory unless ``base_dir`` says otherwise.

    Returns
    -------
    BuildConfig
        Parsed configuration with absolute paths.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ConfigError
        If the YAML cannot be parsed or any field is missing or invalid; the
        error lists every violation found.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_build_config(Path("docsmith.yaml"))  # doctest: +SKIP
    >>> config.theme  # doctest: +SKIP
    'classic'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Configuration file could not be parsed: {path}"
        raise ConfigError(msg, [str(exc)]) from exc
    if not isinstance(loaded, dict):
        msg = f"Configuration file is invalid: {path}"
        raise ConfigError(msg, ["Top-level YAML structure must be a mapping."])
    raw: dict[str, typ.Any] = dict(loaded)

    errors: list[str] = []
    config_dir = path.resolve().parent
    base_dir = _resolve_path(config_dir, raw.get("base_dir"), "base_dir", errors)
    base_dir = base_dir or config_dir
    if not base_dir.is_dir():
        errors.append(f"base_dir: directory '{base_dir}' does not exist.")

    output_dir = _resolve_path(base_dir, raw.get("output_dir"), "output_dir", errors)
    if output_dir is None:
        errors.append("output_dir: the output directory is required.")

    theme = _optional_str(raw.get("theme", DEFAULT_THEME))
    if theme is None:
        errors.append("theme: the theme is required.")

    metadata = _resolve_path(base_dir, raw.get("metadata"), "metadata", errors)
    if metadata is not None and not metadata.is_file():
        errors.append(f"metadata: file '{metadata}' does not exist.")

    themes_dir = _resolve_path(base_dir, raw.get("themes_dir"), "themes_dir", errors)
    if themes_dir is not None and not themes_dir.is_dir():
        errors.append(f"themes_dir: directory '{themes_dir}' does not exist.")

    config = BuildConfig(
        base_dir=base_dir,
        output_dir=output_dir or base_dir,
        convention=_parse_convention(raw.get("convention"), errors),
        theme=theme or DEFAULT_THEME,
        base_url=_parse_base_url(raw.get("base_url"), errors),
        granularity=_parse_granularity(raw.get("granularity"), errors),
        theme_settings=_parse_settings(raw.get("theme_settings"), errors),
        metadata=metadata,
        themes_dir=themes_dir,
        language=_optional_str(raw.get("language")) or "csharp",
        pygments_style=_optional_str(raw.get("pygments_style")) or "default",
        assets=_parse_assets(raw.get("assets"), errors),
    )
    if errors:
        msg = f"Configuration file is invalid: {path}"
        raise ConfigError(msg, errors)
    return config


__all__ = ["load_build_config"]
