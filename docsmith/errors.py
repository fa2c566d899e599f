"""Exception types shared by the theme, metadata, and configuration loaders."""

from __future__ import annotations

import collections.abc as cabc


class ValidationError(ValueError):
    """Raised when a declaration or configuration file contains violations.

    Every violation detected while reading the file is collected in
    :attr:`errors` so callers can report them together rather than one at a
    time.

    Examples
    --------
    >>> error = ValidationError("theme.json is invalid", ["templates: list expected"])
    >>> str(error)
    'theme.json is invalid'
    >>> error.errors
    ('templates: list expected',)
    """

    def __init__(self, message: str, errors: cabc.Iterable[str] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.errors: tuple[str, ...] = tuple(errors)

    def __str__(self) -> str:
        return self.message

    def describe(self) -> str:
        """Return the message followed by one indented line per violation."""
        lines = [self.message]
        lines.extend(f"  - {error}" for error in self.errors)
        return "\n".join(lines)


class ConfigError(ValidationError):
    """Raised when the build configuration is invalid or incomplete."""


class ThemeNotFoundError(FileNotFoundError):
    """Raised when a theme directory or its ``theme.json`` does not exist."""


__all__ = ["ConfigError", "ThemeNotFoundError", "ValidationError"]
