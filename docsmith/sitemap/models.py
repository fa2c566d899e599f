"""Navigation tree structures produced by the sitemap builder.

:class:`SitemapNode` is a ``msgspec`` struct so it serializes straight into
the shape client-side navigation scripts read: ``{"title", "url"?, "items"?}``
with ``url`` omitted on pure group nodes and ``items`` omitted on leaf pages.

Examples
--------
>>> node = SitemapNode.group("API", [SitemapNode.leaf("Widget", "api/widget.html")])
>>> node.page_count()
1
>>> Sitemap("", [node]).to_json()
b'[{"title":"API","items":[{"title":"Widget","url":"api/widget.html"}]}]'
"""

from __future__ import annotations

import collections.abc as cabc
import enum
import functools

import msgspec
import msgspec.json as msgspec_json


class PageGranularity(enum.Flag):
    """Which API elements receive dedicated pages."""

    NONE = 0
    NAMESPACE = 1
    TYPE = 2
    MEMBER = 4
    NAMESPACE_TYPE = NAMESPACE | TYPE
    TYPE_MEMBER = TYPE | MEMBER
    NAMESPACE_TYPE_MEMBER = NAMESPACE | TYPE | MEMBER

    @classmethod
    def parse(cls, value: str | PageGranularity) -> PageGranularity:
        """Parse a comma, plus, or pipe separated list of granularity names.

        >>> PageGranularity.parse("namespace, type") is PageGranularity.NAMESPACE_TYPE
        True
        """
        if isinstance(value, PageGranularity):
            return value
        result = cls.NONE
        normalized = value.replace("+", ",").replace("|", ",")
        for token in normalized.split(","):
            name = token.strip().upper().replace("-", "_")
            if not name:
                continue
            try:
                result |= cls[name]
            except KeyError as exc:
                msg = f"Unknown page granularity {token.strip()!r}."
                raise ValueError(msg) from exc
        return result


class SitemapNode(msgspec.Struct, frozen=True, omit_defaults=True):
    """A navigation entry: a page, a group of entries, or both.

    Attributes
    ----------
    title : str
        Label shown in navigation.
    url : str | None
        Root-relative page address without fragment; ``None`` for groups.
    items : tuple[SitemapNode, ...] | None
        Child entries; ``None`` for leaf pages.
    """

    title: str
    url: str | None = None
    items: tuple[SitemapNode, ...] | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            msg = "A sitemap node requires a non-blank title."
            raise ValueError(msg)
        if self.url is None and self.items is None:
            msg = f"Sitemap node {self.title!r} has neither a URL nor child items."
            raise ValueError(msg)

    @classmethod
    def leaf(cls, title: str, url: str) -> SitemapNode:
        """Return a page entry without children."""
        return cls(title=title, url=url)

    @classmethod
    def group(cls, title: str, children: cabc.Iterable[SitemapNode]) -> SitemapNode:
        """Return a group entry; an empty group keeps an empty item list."""
        return cls(title=title, items=tuple(children))

    @classmethod
    def page(
        cls, title: str, url: str, children: cabc.Iterable[SitemapNode]
    ) -> SitemapNode:
        """Return a page entry whose children are dropped when there are none."""
        items = tuple(children)
        return cls(title=title, url=url, items=items or None)

    def page_count(self) -> int:
        """Return the number of entries with a URL in this subtree."""
        own = 1 if self.url is not None else 0
        return own + sum(child.page_count() for child in self.items or ())

    def __str__(self) -> str:
        return self.title


class Sitemap:
    """The navigation tree of a documentation run."""

    def __init__(self, base_url: str, nodes: cabc.Iterable[SitemapNode]) -> None:
        self.base_url = base_url
        self.nodes: tuple[SitemapNode, ...] = tuple(nodes)

    def __iter__(self) -> cabc.Iterator[SitemapNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    @functools.cached_property
    def page_count(self) -> int:
        """Return the number of entries carrying a URL, at any depth."""
        return sum(node.page_count() for node in self.nodes)

    def find(self, title: str) -> SitemapNode | None:
        """Return the top-level node titled ``title``, if present."""
        return next((node for node in self.nodes if node.title == title), None)

    def to_builtins(self) -> list[object]:
        """Return the tree as plain lists and dictionaries."""
        return msgspec.to_builtins(list(self.nodes))

    def to_json(self) -> bytes:
        """Return the tree serialized as a JSON array of nodes."""
        return msgspec_json.encode(list(self.nodes))


__all__ = ["PageGranularity", "Sitemap", "SitemapNode"]
