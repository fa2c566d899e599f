"""Dataclasses describing the metadata model consumed by the sitemap builder.

The model mirrors what an external extractor reports about a compiled
library: assemblies contain namespaces, namespaces contain types, and types
contain members. Conceptual topics arrive as an already-ordered hierarchy.
Every page-bearing element carries the URL its page is written to.
"""

from __future__ import annotations

import dataclasses as dc
import enum


class TypeKind(enum.StrEnum):
    """Kinds of types reported by the extractor."""

    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"
    ENUM = "enum"
    DELEGATE = "delegate"


class MemberKind(enum.StrEnum):
    """Kinds of type members reported by the extractor."""

    CONSTRUCTOR = "constructor"
    FIELD = "field"
    PROPERTY = "property"
    METHOD = "method"
    EVENT = "event"
    OPERATOR = "operator"


@dc.dataclass(slots=True)
class MemberModel:
    """A member of a type.

    Attributes
    ----------
    name : str
        Display name; overloads share it.
    url : str
        Address of the page documenting the member, possibly with a fragment.
    kind : MemberKind
        Member category.
    explicit_interface_implementation : bool
        Whether the member explicitly implements an interface member.
    """

    name: str
    url: str
    kind: MemberKind
    explicit_interface_implementation: bool = False


@dc.dataclass(slots=True)
class TypeModel:
    """A documented type and its members in declaration order."""

    name: str
    url: str
    kind: TypeKind = TypeKind.CLASS
    members: list[MemberModel] = dc.field(default_factory=list)

    @property
    def is_enum(self) -> bool:
        """Return whether this type is an enumeration."""
        return self.kind is TypeKind.ENUM


@dc.dataclass(slots=True)
class NamespaceModel:
    """A namespace and the types it contains."""

    name: str
    url: str
    types: list[TypeModel] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class AssemblyModel:
    """A compiled library and the namespaces it contributes."""

    name: str
    namespaces: list[NamespaceModel] = dc.field(default_factory=list)


@dc.dataclass(slots=True, eq=False)
class TopicModel:
    """A conceptual topic, optionally nested under a parent topic.

    Attributes
    ----------
    id : str
        Identifier unique within the topic collection.
    name : str
        Title shown in navigation.
    url : str
        Address of the topic page.
    subtopics : list[TopicModel]
        Child topics in display order.
    parent : TopicModel | None
        Parent topic, or ``None`` for top-level topics.
    """

    id: str
    name: str
    url: str
    subtopics: list[TopicModel] = dc.field(default_factory=list)
    parent: TopicModel | None = dc.field(default=None, repr=False)

    def walk(self) -> list[TopicModel]:
        """Return this topic followed by all descendants in depth-first order."""
        topics = [self]
        for subtopic in self.subtopics:
            topics.extend(subtopic.walk())
        return topics


@dc.dataclass(slots=True)
class MetadataModel:
    """Everything the extractor reported for one documentation run."""

    assemblies: list[AssemblyModel] = dc.field(default_factory=list)
    topics: list[TopicModel] = dc.field(default_factory=list)

    @property
    def namespaces(self) -> list[NamespaceModel]:
        """Return namespaces across assemblies, merging repeated names.

        A namespace declared by several assemblies keeps the position of its
        first occurrence and lists its types in assembly order.
        """
        merged: dict[str, NamespaceModel] = {}
        for assembly in self.assemblies:
            for namespace in assembly.namespaces:
                existing = merged.get(namespace.name)
                if existing is None:
                    merged[namespace.name] = NamespaceModel(
                        namespace.name, namespace.url, list(namespace.types)
                    )
                else:
                    existing.types.extend(namespace.types)
        return list(merged.values())

    @property
    def types(self) -> list[TypeModel]:
        """Return every type in namespace order."""
        return [type_ for namespace in self.namespaces for type_ in namespace.types]

    @property
    def top_level_topics(self) -> list[TopicModel]:
        """Return topics that have no parent topic."""
        return [topic for topic in self.topics if topic.parent is None]

    def find_topic(self, topic_id: str) -> TopicModel | None:
        """Return the topic with ``topic_id`` (case-insensitive) at any depth."""
        wanted = topic_id.casefold()
        for root in self.topics:
            for topic in root.walk():
                if topic.id.casefold() == wanted:
                    return topic
        return None


__all__ = [
    "AssemblyModel",
    "MemberKind",
    "MemberModel",
    "MetadataModel",
    "NamespaceModel",
    "TopicModel",
    "TypeKind",
    "TypeModel",
]
