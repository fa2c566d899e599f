"""Run-scoped documentation context and the explicit render context.

:class:`DocContext` bundles everything a documentation run knows about its
input: the metadata model, page granularity, base URL, and language. Its
:attr:`DocContext.sitemap` is built on first access and reused for the rest
of the run.

:class:`RenderContext` is passed explicitly down the render call chain so
nested rendering code reaches the active renderer and data through its
arguments rather than through global state.
"""

from __future__ import annotations

import dataclasses as dc
import functools
import typing as typ
from importlib import metadata as importlib_metadata
from urllib.parse import urlsplit

from docsmith.sitemap import PageGranularity, Sitemap, SitemapBuilder

if typ.TYPE_CHECKING:
    from docsmith.metadata import MetadataModel
    from docsmith.rendering import TemplateRenderer
    from docsmith.settings import TemplateData

HOME_TOPIC_ID = "WELCOME"
API_TOPIC_ID = "API"


def generator_label() -> str:
    """Return the generator name and version advertised in rendered pages."""
    try:
        version = importlib_metadata.version("docsmith")
    except importlib_metadata.PackageNotFoundError:  # pragma: no cover - dev checkout
        version = "0.0.0"
    return f"docsmith [Version {version}]"


class DocContext:
    """The input model of one documentation run."""

    def __init__(
        self,
        model: MetadataModel,
        *,
        granularity: PageGranularity = PageGranularity.NAMESPACE_TYPE_MEMBER,
        base_url: str = "",
        language: str = "csharp",
    ) -> None:
        self.model = model
        self.granularity = granularity
        self.base_url = base_url
        self.language = language

    @functools.cached_property
    def sitemap(self) -> Sitemap:
        """Return the navigation tree, building it on first access."""
        return SitemapBuilder(self.base_url, self.granularity).build(self.model)

    def _has_pages(self, flag: PageGranularity) -> bool:
        return bool(self.model.assemblies) and flag in self.granularity

    @property
    def has_namespace_pages(self) -> bool:
        return self._has_pages(PageGranularity.NAMESPACE)

    @property
    def has_type_pages(self) -> bool:
        return self._has_pages(PageGranularity.TYPE)

    @property
    def has_member_pages(self) -> bool:
        return self._has_pages(PageGranularity.MEMBER)

    def common_data(self) -> dict[str, object]:
        """Return the run-wide values every template receives."""
        data: dict[str, object] = {
            "language": self.language,
            "generator": generator_label(),
            "absoluteUrls": bool(urlsplit(self.base_url).scheme),
            "hasNamespacePages": self.has_namespace_pages,
            "hasTypePages": self.has_type_pages,
            "hasMemberPages": self.has_member_pages,
        }
        if home := self.model.find_topic(HOME_TOPIC_ID):
            data["homePageTitle"] = home.name
        if api := self.model.find_topic(API_TOPIC_ID):
            data["apiPageTitle"] = api.name
        return data


@dc.dataclass(frozen=True, slots=True)
class RenderContext:
    """Renderer, documentation context, and template data for one run."""

    renderer: TemplateRenderer
    context: DocContext
    data: TemplateData

    def render(self, template: str, **values: object) -> str:
        """Render ``template`` with the run's sitemap and ``values``."""
        return self.renderer.render(template, sitemap=self.context.sitemap, **values)


__all__ = [
    "API_TOPIC_ID",
    "HOME_TOPIC_ID",
    "DocContext",
    "RenderContext",
    "generator_label",
]
