"""Metadata model consumed from the external extractor.

The extractor reports assemblies, namespaces, types, members, and the topic
hierarchy; this subpackage holds the dataclasses for that model and
:func:`load_metadata`, which reads the extractor's JSON dump.
"""

from .loader import build_metadata_model, load_metadata
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

__all__ = [
    "AssemblyModel",
    "MemberKind",
    "MemberModel",
    "MetadataModel",
    "NamespaceModel",
    "TopicModel",
    "TypeKind",
    "TypeModel",
    "build_metadata_model",
    "load_metadata",
]
