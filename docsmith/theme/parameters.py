"""Typed theme parameters and the validation applied to their values.

Theme declarations describe named parameters with a type tag, an optional
description, and an optional default value. Values arrive as loosely typed
JSON or YAML data, so :func:`validate_parameter_value` dispatches on the type
tag and either returns the normalized value or raises
:class:`ParameterFormatError`.

Markdown-typed values are passed through the supplied text transform once they
pass the type check, so stored values are ready to render.

Examples
--------
>>> validate_parameter_value(3, ThemeParameterType.NUMBER)
3.0
>>> validate_parameter_value("*hi*", "markdown", transform=str.upper)
'*HI*'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import re
import typing as typ
from urllib.parse import urlsplit

TextTransform = cabc.Callable[[str], str]

_URI_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")
_URI_FORBIDDEN_PATTERN = re.compile(r"[\s<>\"{}|\\^`]")


class ParameterFormatError(ValueError):
    """Raised when a value does not match the declared parameter type."""


class ThemeParameterType(enum.StrEnum):
    """Type tags accepted by theme parameter declarations."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    MARKDOWN = "markdown"
    URI = "uri"
    ARRAY = "array"
    OBJECT = "object"

    @classmethod
    def parse(cls, value: object) -> ThemeParameterType:
        """Return the type matching ``value`` case-insensitively."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        allowed = ", ".join(member.value for member in cls)
        msg = f"Unknown parameter type {value!r}; expected one of: {allowed}."
        raise ParameterFormatError(msg)


def _describe(value: object) -> str:
    match value:
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case cabc.Mapping():
            return "object"
        case cabc.Sequence():
            return "array"
        case _:
            return type(value).__name__


def _mismatch(expected: ThemeParameterType, value: object) -> ParameterFormatError:
    return ParameterFormatError(
        f"{expected.value} was expected but {_describe(value)} was provided: {value!r}"
    )


def _is_uri_reference(text: str) -> bool:
    """Return whether ``text`` parses as an absolute or relative URI reference.

    Relative references are accepted as written, including spaces and template
    expressions. Absolute URIs must not contain characters that need escaping.
    """
    try:
        parts = urlsplit(text)
    except ValueError:
        return False
    if not parts.scheme:
        return ":" not in text.split("/", 1)[0]
    return bool(_URI_SCHEME_PATTERN.match(parts.scheme)) and not (
        _URI_FORBIDDEN_PATTERN.search(text)
    )


def _check_value(value: object, expected: ThemeParameterType) -> object:
    match expected:
        case ThemeParameterType.STRING | ThemeParameterType.MARKDOWN if isinstance(
            value, str
        ):
            return value
        case ThemeParameterType.NUMBER if isinstance(value, int | float) and not (
            isinstance(value, bool)
        ):
            return float(value)
        case ThemeParameterType.BOOLEAN if isinstance(value, bool):
            return value
        case ThemeParameterType.URI if isinstance(value, str):
            if not _is_uri_reference(value):
                msg = f"A valid URI was expected: {value!r}"
                raise ParameterFormatError(msg)
            return value
        case ThemeParameterType.ARRAY if isinstance(
            value, cabc.Sequence
        ) and not isinstance(value, str | bytes):
            return list(value)
        case ThemeParameterType.OBJECT if isinstance(value, cabc.Mapping) and all(
            isinstance(key, str) for key in value
        ):
            return dict(value)
        case _:
            raise _mismatch(expected, value)


def validate_parameter_value(
    value: object,
    expected: ThemeParameterType | str,
    *,
    transform: TextTransform | None = None,
) -> object:
    """Validate ``value`` against ``expected`` and return the normalized value.

    Parameters
    ----------
    value : object
        Raw value decoded from JSON or YAML; ``None`` is returned unchanged.
    expected : ThemeParameterType or str
        Declared parameter type.
    transform : callable, optional
        Text transform applied to markdown values after validation.

    Returns
    -------
    object
        The validated value: numbers become ``float``, sequences become
        ``list``, mappings become ``dict``, markdown becomes transformed text.

    Raises
    ------
    ParameterFormatError
        If ``value`` does not have the shape required by ``expected``.
    """
    if value is None:
        return None
    param_type = ThemeParameterType.parse(expected)
    checked = _check_value(value, param_type)
    if param_type is ThemeParameterType.MARKDOWN and transform is not None:
        return transform(typ.cast("str", checked))
    return checked


@dc.dataclass(frozen=True, slots=True)
class ThemeParameter:
    """A parameter declared by a theme.

    Attributes
    ----------
    type : ThemeParameterType
        Declared value type.
    description : str | None
        Human-readable description shown to theme users.
    default_value : object
        Validated default. Markdown defaults hold the transformed output.
    """

    type: ThemeParameterType
    description: str | None = None
    default_value: object = None

    @classmethod
    def create(
        cls,
        param_type: ThemeParameterType | str,
        description: str | None = None,
        default_value: object = None,
        *,
        transform: TextTransform | None = None,
    ) -> ThemeParameter:
        """Build a parameter, validating ``default_value`` against its type."""
        resolved = ThemeParameterType.parse(param_type)
        validated = validate_parameter_value(
            default_value, resolved, transform=transform
        )
        return cls(type=resolved, description=description, default_value=validated)

    def validate(
        self, value: object, *, transform: TextTransform | None = None
    ) -> object:
        """Validate a user-supplied value for this parameter."""
        return validate_parameter_value(value, self.type, transform=transform)


__all__ = [
    "ParameterFormatError",
    "TextTransform",
    "ThemeParameter",
    "ThemeParameterType",
    "validate_parameter_value",
]
