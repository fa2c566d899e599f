"""Navigation tree construction for generated documentation sites.

The sitemap spans the API reference (namespaces, types, and member groups,
depending on page granularity) and the conceptual topic hierarchy. It seeds
progress totals and is serialized for client-side navigation scripts.
"""

from .builder import (
    API_TITLE,
    TOPICS_TITLE,
    SitemapBuilder,
    build_sitemap,
    make_relative_url,
)
from .grouping import GROUP_ORDER, MemberGroup, group_members, member_group_name
from .models import PageGranularity, Sitemap, SitemapNode

__all__ = [
    "API_TITLE",
    "GROUP_ORDER",
    "TOPICS_TITLE",
    "MemberGroup",
    "PageGranularity",
    "Sitemap",
    "SitemapBuilder",
    "SitemapNode",
    "build_sitemap",
    "group_members",
    "make_relative_url",
    "member_group_name",
]
