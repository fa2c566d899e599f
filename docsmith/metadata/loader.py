"""Load an extractor's JSON dump into :class:`MetadataModel` dataclasses.

The dump lists assemblies (with nested namespaces, types, and members) and an
optional topic tree. Order is significant and preserved exactly as supplied.
Every structural problem is collected and raised together.

Examples
--------
>>> model = build_metadata_model({"assemblies": [], "topics": []})
>>> model.assemblies
[]
"""

from __future__ import annotations

import typing as typ

import msgspec
import msgspec.json as msgspec_json

from docsmith.errors import ValidationError

from .models import (
    AssemblyModel,
    MemberKind,
    MemberModel,
    MetadataModel,
    NamespaceModel,
    TopicModel,
    TypeKind,
    TypeModel,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


class _Collector:
    """Accumulate violations while walking the decoded payload."""

    def __init__(self) -> None:
        self.errors: list[str] = []

    def mapping(self, value: object, key: str) -> dict[str, typ.Any] | None:
        if isinstance(value, dict):
            return value
        self.errors.append(f"{key}: an object was expected.")
        return None

    def items(self, value: object, key: str) -> list[typ.Any]:
        if value is None:
            return []
        if isinstance(value, list):
            return value
        self.errors.append(f"{key}: an array was expected.")
        return []

    def text(self, data: dict[str, typ.Any], field: str, key: str) -> str:
        value = data.get(field)
        if isinstance(value, str) and value.strip():
            return value
        self.errors.append(f"{key}.{field}: a non-empty string is required.")
        return ""

    def choice(
        self,
        enum_type: type[typ.Any],
        value: object,
        key: str,
        default: typ.Any = None,
    ) -> typ.Any:
        if value is None and default is not None:
            return default
        if isinstance(value, str):
            try:
                return enum_type(value.strip().lower())
            except ValueError:
                pass
        allowed = ", ".join(member.value for member in enum_type)
        self.errors.append(f"{key}.kind: expected one of {allowed}, got {value!r}.")
        return None


def _build_member(
    payload: object, key: str, collector: _Collector
) -> MemberModel | None:
    data = collector.mapping(payload, key)
    if data is None:
        return None
    name = collector.text(data, "name", key)
    url = collector.text(data, "url", key)
    kind = collector.choice(MemberKind, data.get("kind"), key)
    explicit = data.get("explicitInterfaceImplementation", False)
    if not isinstance(explicit, bool):
        collector.errors.append(
            f"{key}.explicitInterfaceImplementation: a boolean was expected."
        )
        explicit = False
    if kind is None:
        return None
    return MemberModel(
        name=name, url=url, kind=kind, explicit_interface_implementation=explicit
    )


def _build_type(payload: object, key: str, collector: _Collector) -> TypeModel | None:
    data = collector.mapping(payload, key)
    if data is None:
        return None
    kind = collector.choice(TypeKind, data.get("kind"), key, TypeKind.CLASS)
    members = [
        member
        for index, item in enumerate(collector.items(data.get("members"), f"{key}.members"))
        if (member := _build_member(item, f"{key}.members[{index}]", collector))
    ]
    return TypeModel(
        name=collector.text(data, "name", key),
        url=collector.text(data, "url", key),
        kind=kind or TypeKind.CLASS,
        members=members,
    )


def _build_namespace(
    payload: object, key: str, collector: _Collector
) -> NamespaceModel | None:
    data = collector.mapping(payload, key)
    if data is None:
        return None
    types = [
        type_
        for index, item in enumerate(collector.items(data.get("types"), f"{key}.types"))
        if (type_ := _build_type(item, f"{key}.types[{index}]", collector))
    ]
    return NamespaceModel(
        name=collector.text(data, "name", key),
        url=collector.text(data, "url", key),
        types=types,
    )


def _build_assembly(
    payload: object, key: str, collector: _Collector
) -> AssemblyModel | None:
    data = collector.mapping(payload, key)
    if data is None:
        return None
    namespaces = [
        namespace
        for index, item in enumerate(
            collector.items(data.get("namespaces"), f"{key}.namespaces")
        )
        if (namespace := _build_namespace(item, f"{key}.namespaces[{index}]", collector))
    ]
    return AssemblyModel(name=collector.text(data, "name", key), namespaces=namespaces)


def _build_topic(
    payload: object,
    key: str,
    collector: _Collector,
    seen_ids: set[str],
    parent: TopicModel | None = None,
) -> TopicModel | None:
    data = collector.mapping(payload, key)
    if data is None:
        return None
    name = collector.text(data, "name", key)
    topic_id = data.get("id") or name
    if not isinstance(topic_id, str):
        collector.errors.append(f"{key}.id: a string was expected.")
        topic_id = name
    if topic_id.casefold() in seen_ids:
        collector.errors.append(f"{key}.id: duplicate topic identifier {topic_id!r}.")
    seen_ids.add(topic_id.casefold())
    topic = TopicModel(
        id=topic_id, name=name, url=collector.text(data, "url", key), parent=parent
    )
    for index, item in enumerate(
        collector.items(data.get("subtopics"), f"{key}.subtopics")
    ):
        child = _build_topic(
            item, f"{key}.subtopics[{index}]", collector, seen_ids, topic
        )
        if child is not None:
            topic.subtopics.append(child)
    return topic


def build_metadata_model(
    payload: typ.Mapping[str, typ.Any], *, source: str = "metadata"
) -> MetadataModel:
    """Build a metadata model from a decoded payload.

    Raises
    ------
    ValidationError
        If any element is missing required fields or has the wrong shape.
    """
    collector = _Collector()
    assemblies = [
        assembly
        for index, item in enumerate(
            collector.items(payload.get("assemblies"), "assemblies")
        )
        if (assembly := _build_assembly(item, f"assemblies[{index}]", collector))
    ]
    seen_ids: set[str] = set()
    topics = [
        topic
        for index, item in enumerate(collector.items(payload.get("topics"), "topics"))
        if (topic := _build_topic(item, f"topics[{index}]", collector, seen_ids))
    ]
    if collector.errors:
        msg = f"Metadata model contains errors: {source}"
        raise ValidationError(msg, collector.errors)
    return MetadataModel(assemblies=assemblies, topics=topics)


def load_metadata(path: Path) -> MetadataModel:
    """Load the metadata dump stored at ``path``.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ValidationError
        If the file is not a JSON object or contains structural violations.
    """
    if not path.is_file():
        msg = f"Metadata file '{path}' not found."
        raise FileNotFoundError(msg)
    try:
        loaded = msgspec_json.decode(path.read_bytes())
    except msgspec.DecodeError as exc:
        msg = f"Metadata file could not be parsed: {path}"
        raise ValidationError(msg, [str(exc)]) from exc
    if not isinstance(loaded, dict):
        msg = f"Metadata file could not be parsed: {path}"
        raise ValidationError(msg, ["The top-level JSON value must be an object."])
    return build_metadata_model(loaded, source=str(path))


__all__ = ["build_metadata_model", "load_metadata"]
