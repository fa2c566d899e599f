"""Build the navigation tree for API reference and conceptual topics.

:class:`SitemapBuilder` turns a :class:`~docsmith.metadata.MetadataModel`
into a :class:`~docsmith.sitemap.models.Sitemap`. The API branch adapts to the
configured :class:`PageGranularity`: namespaces, types, and member groups
appear only when they receive their own pages. The Topics branch mirrors the
topic hierarchy one to one. Every URL is made root-relative and stripped of
its fragment because navigation entries always target whole pages.

Example
-------
>>> from docsmith.metadata import MetadataModel, TopicModel
>>> model = MetadataModel(topics=[TopicModel("intro", "Introduction", "intro.html")])
>>> sitemap = SitemapBuilder().build(model)
>>> [node.title for node in sitemap]
['Topics']
>>> sitemap.page_count
1
"""

from __future__ import annotations

import collections.abc as cabc
import posixpath
import typing as typ
from urllib.parse import urldefrag, urljoin, urlsplit, urlunsplit

from .grouping import CONSTRUCTORS, group_members
from .models import PageGranularity, Sitemap, SitemapNode

if typ.TYPE_CHECKING:
    from docsmith.metadata import (
        MemberModel,
        MetadataModel,
        NamespaceModel,
        TopicModel,
        TypeModel,
    )

API_TITLE = "API"
TOPICS_TITLE = "Topics"


def make_relative_url(url: str, base_url: str = "") -> str:
    """Strip the fragment from ``url`` and express it relative to ``base_url``.

    URLs are only rewritten when ``base_url`` is absolute and ``url`` points
    at the same site; otherwise the fragment-free URL is returned as is.

    >>> make_relative_url("api/widget.html#dispose")
    'api/widget.html'
    >>> make_relative_url("https://example.org/docs/api/widget.html", "https://example.org/docs/")
    'api/widget.html'
    """
    without_fragment = urldefrag(url).url
    base = urlsplit(base_url)
    if not (base.scheme and base.netloc):
        return without_fragment
    target = urlsplit(urljoin(base_url, without_fragment))
    if (target.scheme, target.netloc) != (base.scheme, base.netloc):
        return without_fragment
    base_dir = base.path if base.path.endswith("/") else posixpath.dirname(base.path) + "/"
    if target.path.startswith(base_dir):
        path = target.path[len(base_dir) :]
    else:
        path = posixpath.relpath(target.path or "/", base_dir)
    return urlunsplit(("", "", path, target.query, "")) or "./"


class SitemapBuilder:
    """Build :class:`Sitemap` trees for one base URL and page granularity."""

    def __init__(
        self,
        base_url: str = "",
        granularity: PageGranularity = PageGranularity.NAMESPACE_TYPE_MEMBER,
    ) -> None:
        self.base_url = base_url
        self.granularity = granularity

    def _url(self, url: str) -> str:
        return make_relative_url(url, self.base_url)

    def build(self, model: MetadataModel) -> Sitemap:
        """Return the sitemap for ``model``.

        Parameters
        ----------
        model : MetadataModel
            Assemblies and the topic tree.

        Returns
        -------
        Sitemap
            Tree with an ``API`` node when at least one assembly exists and a
            ``Topics`` node when at least one top-level topic exists.
        """
        roots = model.top_level_topics
        nodes: list[SitemapNode] = []
        if model.assemblies:
            nodes.append(self._api_node(model))
        if roots:
            nodes.append(SitemapNode.group(TOPICS_TITLE, self._topic_nodes(roots)))
        return Sitemap(self.base_url, nodes)

    def _api_node(self, model: MetadataModel) -> SitemapNode:
        if PageGranularity.NAMESPACE in self.granularity:
            children = [self._namespace_node(ns) for ns in model.namespaces]
        else:
            children = [self._type_node(type_) for type_ in model.types]
        return SitemapNode.group(API_TITLE, children)

    def _namespace_node(self, namespace: NamespaceModel) -> SitemapNode:
        types: list[SitemapNode] = []
        if PageGranularity.TYPE in self.granularity:
            types = [self._type_node(type_) for type_ in namespace.types]
        return SitemapNode.page(namespace.name, self._url(namespace.url), types)

    def _type_node(self, type_: TypeModel) -> SitemapNode:
        groups: list[SitemapNode] = []
        if PageGranularity.MEMBER in self.granularity and not type_.is_enum:
            groups = self._member_group_nodes(type_.members)
        return SitemapNode.page(type_.name, self._url(type_.url), groups)

    def _member_group_nodes(
        self, members: cabc.Iterable[MemberModel]
    ) -> list[SitemapNode]:
        nodes: list[SitemapNode] = []
        for group in group_members(members):
            if group.name == CONSTRUCTORS:
                nodes.append(SitemapNode.leaf(group.name, self._url(group.entries[0].url)))
                continue
            nodes.append(
                SitemapNode.group(
                    group.name,
                    [
                        SitemapNode.leaf(member.name, self._url(member.url))
                        for member in group.entries
                    ],
                )
            )
        return nodes

    def _topic_nodes(self, topics: cabc.Iterable[TopicModel]) -> list[SitemapNode]:
        return [
            SitemapNode.page(
                topic.name, self._url(topic.url), self._topic_nodes(topic.subtopics)
            )
            for topic in topics
        ]


def build_sitemap(
    model: MetadataModel,
    *,
    base_url: str = "",
    granularity: PageGranularity = PageGranularity.NAMESPACE_TYPE_MEMBER,
) -> Sitemap:
    """Build the sitemap of ``model`` with a one-off :class:`SitemapBuilder`."""
    return SitemapBuilder(base_url, granularity).build(model)


__all__ = [
    "API_TITLE",
    "TOPICS_TITLE",
    "SitemapBuilder",
    "build_sitemap",
    "make_relative_url",
]
