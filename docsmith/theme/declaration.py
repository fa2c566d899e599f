"""Read ``theme.json`` declarations into :class:`ThemeDeclaration` objects.

A declaration names its parent theme, publishes metadata, declares typed
parameters, and lists glob patterns for templates, scripts, styles, and
assets. Structural problems are gathered while the payload is walked and
raised together in one :class:`~docsmith.errors.ValidationError`, so theme
authors see every mistake in a single run.

Examples
--------
>>> from pathlib import Path
>>> declaration = load_theme_declaration(Path("themes/html/classic/theme.json"))  # doctest: +SKIP
>>> declaration.scripts.target_path  # doctest: +SKIP
'script.js'
"""

from __future__ import annotations

import typing as typ

import msgspec
import msgspec.json as msgspec_json

from docsmith._constants import DEFAULT_SCRIPT_TARGET, DEFAULT_STYLE_TARGET
from docsmith.errors import ThemeNotFoundError, ValidationError

from .globbing import FileGlobFilter
from .models import BundleSpec, CaseInsensitiveMapping, ThemeDeclaration, ThemeMetadata
from .parameters import ParameterFormatError, TextTransform, ThemeParameter

if typ.TYPE_CHECKING:
    from pathlib import Path

_METADATA_FIELDS = (
    "format",
    "name",
    "version",
    "description",
    "author",
    "license",
    "homepage",
)


def _lower_keys(payload: typ.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
    """Return ``payload`` with keys folded, matching property names loosely."""
    return {str(key).casefold(): value for key, value in payload.items()}


def _build_metadata(value: object, errors: list[str]) -> ThemeMetadata:
    if value is None:
        return ThemeMetadata()
    if not isinstance(value, dict):
        errors.append("metadata: an object was expected.")
        return ThemeMetadata()
    data = _lower_keys(value)
    fields: dict[str, str | None] = {}
    for name in _METADATA_FIELDS:
        item = data.get(name)
        if item is not None and not isinstance(item, str):
            errors.append(f"metadata.{name}: a string was expected.")
            continue
        fields[name] = item
    return ThemeMetadata(**fields)


def _build_glob_filter(value: object, key: str, errors: list[str]) -> FileGlobFilter:
    if value is None:
        return FileGlobFilter()
    if not isinstance(value, list):
        errors.append(f"{key}: an array of glob patterns was expected.")
        return FileGlobFilter()
    patterns: list[str] = []
    for index, pattern in enumerate(value):
        if not isinstance(pattern, str):
            errors.append(f"{key}[{index}]: a glob pattern string was expected.")
            continue
        patterns.append(pattern)
    return FileGlobFilter(patterns)


def _build_bundle(
    value: object, key: str, default_target: str, errors: list[str]
) -> BundleSpec:
    if value is None:
        return BundleSpec(default_target)
    if not isinstance(value, dict):
        errors.append(f"{key}: an object with 'source' and 'targetPath' was expected.")
        return BundleSpec(default_target)
    data = _lower_keys(value)
    target = data.get("targetpath", default_target)
    if not isinstance(target, str) or not target.strip():
        errors.append(f"{key}.targetPath: a non-empty path was expected.")
        target = default_target
    source = _build_glob_filter(data.get("source"), f"{key}.source", errors)
    return BundleSpec(target_path=target.strip(), source=source)


def _build_parameter(
    name: str,
    value: object,
    errors: list[str],
    transform: TextTransform | None,
) -> ThemeParameter | None:
    key = f"parameters.{name}"
    if not isinstance(value, dict):
        errors.append(f"{key}: an object was expected.")
        return None
    data = _lower_keys(value)
    if "type" not in data:
        errors.append(f"{key}.type: a parameter type is required.")
        return None
    description = data.get("description")
    if description is not None and not isinstance(description, str):
        errors.append(f"{key}.description: a string was expected.")
        description = None
    try:
        return ThemeParameter.create(
            data["type"],
            description,
            data.get("defaultvalue"),
            transform=transform,
        )
    except ParameterFormatError as exc:
        errors.append(f"{key}: {exc}")
        return None


def _build_parameters(
    value: object, errors: list[str], transform: TextTransform | None
) -> CaseInsensitiveMapping[ThemeParameter]:
    if value is None:
        return CaseInsensitiveMapping()
    if not isinstance(value, dict):
        errors.append("parameters: an object was expected.")
        return CaseInsensitiveMapping()
    parameters: list[tuple[str, ThemeParameter]] = []
    seen: set[str] = set()
    for name, payload in value.items():
        if name.casefold() in seen:
            errors.append(f"parameters.{name}: duplicate parameter name.")
            continue
        seen.add(name.casefold())
        parameter = _build_parameter(name, payload, errors, transform)
        if parameter is not None:
            parameters.append((name, parameter))
    return CaseInsensitiveMapping(parameters)


def _build_base(value: object, errors: list[str]) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        errors.append("base: a theme identifier string was expected.")
        return None
    return value.strip() or None


def build_theme_declaration(
    payload: typ.Mapping[str, typ.Any],
    *,
    source: str = "theme.json",
    transform: TextTransform | None = None,
) -> ThemeDeclaration:
    """Build a declaration from decoded JSON, collecting every violation.

    Parameters
    ----------
    payload : Mapping[str, Any]
        Decoded top-level JSON object.
    source : str, optional
        Label used in the error message, normally the file path.
    transform : callable, optional
        Text transform applied to markdown parameter defaults.

    Raises
    ------
    ValidationError
        If any section has the wrong shape or any parameter default does not
        match its declared type.
    """
    data = _lower_keys(payload)
    errors: list[str] = []
    declaration = ThemeDeclaration(
        base=_build_base(data.get("base"), errors),
        metadata=_build_metadata(data.get("metadata"), errors),
        parameters=_build_parameters(data.get("parameters"), errors, transform),
        templates=_build_glob_filter(data.get("templates"), "templates", errors),
        scripts=_build_bundle(
            data.get("scripts"), "scripts", DEFAULT_SCRIPT_TARGET, errors
        ),
        styles=_build_bundle(data.get("styles"), "styles", DEFAULT_STYLE_TARGET, errors),
        assets=_build_glob_filter(data.get("assets"), "assets", errors),
    )
    if errors:
        msg = f"Theme declaration contains errors: {source}"
        raise ValidationError(msg, errors)
    return declaration


def load_theme_declaration(
    path: Path, *, transform: TextTransform | None = None
) -> ThemeDeclaration:
    """Load and validate the theme declaration stored at ``path``.

    Raises
    ------
    ThemeNotFoundError
        If ``path`` does not exist.
    ValidationError
        If the file is not valid JSON, is not a JSON object, or contains
        structural violations.
    """
    if not path.is_file():
        msg = f"Theme declaration file could not be found: {path}"
        raise ThemeNotFoundError(msg)
    try:
        loaded = msgspec_json.decode(path.read_bytes())
    except msgspec.DecodeError as exc:
        msg = f"Theme declaration could not be parsed: {path}"
        raise ValidationError(msg, [str(exc)]) from exc
    if not isinstance(loaded, dict):
        msg = f"Theme declaration could not be parsed: {path}"
        raise ValidationError(msg, ["The top-level JSON value must be an object."])
    return build_theme_declaration(loaded, source=str(path), transform=transform)


__all__ = ["build_theme_declaration", "load_theme_declaration"]
