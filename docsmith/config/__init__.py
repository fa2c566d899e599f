"""Load and validate build configuration YAML for docsmith runs.

This subpackage parses a ``docsmith.yaml`` file, resolves its paths against
the configuration directory, and produces a :class:`BuildConfig` consumed by
the CLI. The primary entry point is :func:`load_build_config`, which reports
every invalid field together in a single :class:`ConfigError`.

Examples
--------
>>> from pathlib import Path
>>> from docsmith.config import load_build_config
>>> config = load_build_config(Path("docsmith.yaml"))  # doctest: +SKIP
>>> config.convention  # doctest: +SKIP
<DocConvention.DOTNET: 'dotnet'>
"""

from docsmith.errors import ConfigError

from .loader import load_build_config
from .models import AssetTransfer, BuildConfig

__all__ = ["AssetTransfer", "BuildConfig", "ConfigError", "load_build_config"]
