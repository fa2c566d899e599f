"""Jinja template environment assembled from a resolved theme.

Theme templates are addressed by file name without extension, so a template
overridden by a derived theme replaces its ancestor's file under the same
name. :class:`ThemeTemplateLoader` resolves those names through
:attr:`Theme.templates`; :class:`TemplateRenderer` wraps the environment
together with the data shared by every rendered page.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    DictLoader,
    Environment,
    TemplateNotFound,
)
from markupsafe import Markup

if typ.TYPE_CHECKING:
    from docsmith.theme import TextTransform, Theme

PARTIAL_SUFFIX = "_partial"


class ThemeTemplateLoader(BaseLoader):
    """Load templates from the files selected by a resolved theme."""

    def __init__(self, theme: Theme) -> None:
        self.theme = theme

    def get_source(
        self, environment: Environment, template: str
    ) -> tuple[str, str, cabc.Callable[[], bool]]:
        if template not in self.theme.templates:
            raise TemplateNotFound(template)
        path = self.theme.templates[template]
        mtime = path.stat().st_mtime
        source = path.read_text(encoding="utf-8")

        def _uptodate() -> bool:
            try:
                return path.stat().st_mtime == mtime
            except OSError:
                return False

        return source, str(path), _uptodate

    def list_templates(self) -> list[str]:
        return sorted(self.theme.templates)


class TemplateRenderer:
    """Render theme templates with shared common data.

    Parameters
    ----------
    theme : Theme
        Resolved theme providing the template files.
    common_data : Mapping[str, object], optional
        Values available to every template render.
    transform : callable, optional
        Text transform exposed as the ``markdown`` filter.
    autoescape : bool, optional
        Whether expressions are HTML-escaped; disable for markdown themes.
    """

    def __init__(
        self,
        theme: Theme,
        common_data: cabc.Mapping[str, object] | None = None,
        *,
        transform: TextTransform | None = None,
        autoescape: bool = True,
    ) -> None:
        self.theme = theme
        self.common_data: dict[str, object] = dict(common_data or {})
        self._inline_templates: dict[str, str] = {}
        self.env = Environment(
            loader=ChoiceLoader(
                [DictLoader(self._inline_templates), ThemeTemplateLoader(theme)]
            ),
            autoescape=autoescape,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        if transform is not None:
            self.env.filters["markdown"] = lambda text: Markup(transform(str(text)))

    def add_inline_template(self, name: str, source: str) -> None:
        """Register ``source`` as a template named ``name``."""
        self._inline_templates[name] = source

    def add_partial(self, parameter: str, source: str) -> None:
        """Register a markdown parameter value as ``<parameter>_partial``."""
        self.add_inline_template(f"{parameter}{PARTIAL_SUFFIX}", source)

    def has_template(self, name: str) -> bool:
        """Return whether ``name`` resolves to an inline or theme template."""
        return name in self._inline_templates or name in self.theme.templates

    def render(self, name: str, **data: object) -> str:
        """Render template ``name`` with common data overlaid by ``data``."""
        template = self.env.get_template(name)
        return template.render({**self.common_data, **data})


__all__ = ["PARTIAL_SUFFIX", "TemplateRenderer", "ThemeTemplateLoader"]
