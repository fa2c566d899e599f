"""Shared fixtures for docsmith tests.

The fixtures build throwaway theme directories and metadata dumps under
``tmp_path`` so each test controls exactly which files a theme contributes.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
import pytest

ThemeFactory = cabc.Callable[..., Path]


@pytest.fixture
def themes_root(tmp_path: Path) -> Path:
    """Return the ``themes`` root holding the ``html`` and ``md`` formats."""
    root = tmp_path / "themes"
    (root / "html").mkdir(parents=True)
    (root / "md").mkdir(parents=True)
    return root


@pytest.fixture
def make_theme(themes_root: Path) -> ThemeFactory:
    """Return a factory writing ``theme.json`` and theme files.

    The factory accepts the theme name, the declaration mapping, a mapping of
    relative file paths to contents, and the format directory (``html`` by
    default). It returns the theme directory.
    """

    def _make(
        name: str,
        declaration: cabc.Mapping[str, typ.Any] | None = None,
        files: cabc.Mapping[str, str] | None = None,
        *,
        theme_format: str = "html",
    ) -> Path:
        directory = themes_root / theme_format / name
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "theme.json").write_bytes(
            msgspec_json.encode(dict(declaration or {}))
        )
        for relative, content in (files or {}).items():
            path = directory / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return directory

    return _make


@pytest.fixture
def metadata_payload() -> dict[str, typ.Any]:
    """Return an extractor dump with one assembly, two namespaces, and topics."""
    return {
        "assemblies": [
            {
                "name": "Widgets",
                "namespaces": [
                    {
                        "name": "Widgets.Core",
                        "url": "/api/widgets.core.html",
                        "types": [
                            {
                                "name": "Gadget",
                                "url": "/api/widgets.core.gadget.html",
                                "kind": "class",
                                "members": [
                                    {
                                        "name": "Gadget",
                                        "url": "/api/widgets.core.gadget.-ctor.html#ctor-1",
                                        "kind": "constructor",
                                    },
                                    {
                                        "name": "Gadget",
                                        "url": "/api/widgets.core.gadget.-ctor.html#ctor-2",
                                        "kind": "constructor",
                                    },
                                    {
                                        "name": "Size",
                                        "url": "/api/widgets.core.gadget.size.html",
                                        "kind": "property",
                                    },
                                    {
                                        "name": "Dispose",
                                        "url": "/api/widgets.core.gadget.dispose.html",
                                        "kind": "method",
                                    },
                                    {
                                        "name": "IDisposable.Dispose",
                                        "url": "/api/widgets.core.gadget.idisposable-dispose.html",
                                        "kind": "method",
                                        "explicitInterfaceImplementation": True,
                                    },
                                ],
                            },
                            {
                                "name": "Color",
                                "url": "/api/widgets.core.color.html",
                                "kind": "enum",
                                "members": [
                                    {
                                        "name": "Red",
                                        "url": "/api/widgets.core.color.html#red",
                                        "kind": "field",
                                    }
                                ],
                            },
                        ],
                    },
                    {
                        "name": "Widgets.Extras",
                        "url": "/api/widgets.extras.html",
                        "types": [],
                    },
                ],
            }
        ],
        "topics": [
            {
                "id": "WELCOME",
                "name": "Welcome",
                "url": "/index.html",
            },
            {
                "name": "Guides",
                "url": "/guides/index.html",
                "subtopics": [
                    {"name": "Install", "url": "/guides/install.html"},
                ],
            },
        ],
    }


@pytest.fixture
def metadata_file(tmp_path: Path, metadata_payload: dict[str, typ.Any]) -> Path:
    """Write ``metadata_payload`` to ``metadata.json`` and return its path."""
    path = tmp_path / "metadata.json"
    path.write_bytes(msgspec_json.encode(metadata_payload))
    return path
