"""Theme declarations, parameter validation, and inheritance-chain loading.

This subpackage reads ``theme.json`` declarations, validates typed parameters,
selects template, script, style, and asset files through glob patterns, and
merges a theme with its ancestors into an immutable :class:`Theme`. The
primary entry point is :func:`load_theme`.

Examples
--------
>>> from docsmith.theme import DocConvention, load_theme
>>> theme = load_theme("classic", DocConvention.DOTNET)  # doctest: +SKIP
>>> list(theme.scripts)  # doctest: +SKIP
['script.js']
"""

from .declaration import build_theme_declaration, load_theme_declaration
from .globbing import FileGlobFilter, add_extension_if_missing
from .loader import (
    DEFAULT_THEMES_ROOT,
    DocConvention,
    ThemeBuilder,
    ThemeLoader,
    load_theme,
    themes_directory,
)
from .models import (
    BundleSpec,
    CaseInsensitiveMapping,
    Theme,
    ThemeDeclaration,
    ThemeMetadata,
)
from .parameters import (
    ParameterFormatError,
    TextTransform,
    ThemeParameter,
    ThemeParameterType,
    validate_parameter_value,
)

__all__ = [
    "DEFAULT_THEMES_ROOT",
    "BundleSpec",
    "CaseInsensitiveMapping",
    "DocConvention",
    "FileGlobFilter",
    "ParameterFormatError",
    "TextTransform",
    "Theme",
    "ThemeBuilder",
    "ThemeDeclaration",
    "ThemeLoader",
    "ThemeMetadata",
    "ThemeParameter",
    "ThemeParameterType",
    "add_extension_if_missing",
    "build_theme_declaration",
    "load_theme",
    "load_theme_declaration",
    "themes_directory",
    "validate_parameter_value",
]
