"""Theme composition and navigation sitemap building for API documentation.

This package resolves documentation themes through their inheritance chain,
validates theme parameters and per-build settings, groups API members into
navigation sections, and writes the bundled client assets of a site.

Exports
-------
- ``app``: Cyclopts application behind the ``docsmith`` console script.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docsmith import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
