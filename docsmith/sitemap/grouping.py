"""Classify type members into the navigation groups shown under a type.

Members are bucketed by kind, with explicitly implemented interface members
of the property, method, and event kinds redirected into their own group.
Overloads share one page, so each group keeps only the first member of every
display name; constructors share a single page and collapse to one entry.

Examples
--------
>>> from docsmith.metadata import MemberKind, MemberModel
>>> members = [
...     MemberModel("Foo", "t.html#foo-int", MemberKind.METHOD),
...     MemberModel("Foo", "t.html#foo-string", MemberKind.METHOD),
... ]
>>> [(group.name, [m.name for m in group.entries]) for group in group_members(members)]
[('Methods', ['Foo'])]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc

from docsmith.metadata import MemberKind, MemberModel

PROPERTIES = "Properties"
METHODS = "Methods"
EVENTS = "Events"
OPERATORS = "Operators"
FIELDS = "Fields"
CONSTRUCTORS = "Constructors"
EXPLICIT_INTERFACE_IMPLEMENTATIONS = "Explicit Interface Implementations"

GROUP_ORDER: tuple[str, ...] = (
    PROPERTIES,
    METHODS,
    EVENTS,
    OPERATORS,
    FIELDS,
    CONSTRUCTORS,
    EXPLICIT_INTERFACE_IMPLEMENTATIONS,
)

_KIND_GROUPS: dict[MemberKind, str] = {
    MemberKind.PROPERTY: PROPERTIES,
    MemberKind.METHOD: METHODS,
    MemberKind.EVENT: EVENTS,
    MemberKind.OPERATOR: OPERATORS,
    MemberKind.FIELD: FIELDS,
    MemberKind.CONSTRUCTOR: CONSTRUCTORS,
}
_EXPLICIT_CAPABLE = frozenset({MemberKind.PROPERTY, MemberKind.METHOD, MemberKind.EVENT})


@dc.dataclass(frozen=True, slots=True)
class MemberGroup:
    """A navigation group and its representative members."""

    name: str
    entries: tuple[MemberModel, ...]


def member_group_name(member: MemberModel) -> str | None:
    """Return the navigation group of ``member``, or ``None`` if it has none."""
    if member.explicit_interface_implementation and member.kind in _EXPLICIT_CAPABLE:
        return EXPLICIT_INTERFACE_IMPLEMENTATIONS
    return _KIND_GROUPS.get(member.kind)


def group_members(members: cabc.Iterable[MemberModel]) -> list[MemberGroup]:
    """Group ``members`` into navigation groups in the fixed group order.

    Parameters
    ----------
    members : Iterable[MemberModel]
        Members of one type in declaration order.

    Returns
    -------
    list[MemberGroup]
        Non-empty groups ordered as :data:`GROUP_ORDER`. The constructors
        group holds one entry; every other group holds the first member of
        each distinct display name, in declaration order.
    """
    buckets: dict[str, dict[str, MemberModel]] = {}
    for member in members:
        group = member_group_name(member)
        if group is None:
            continue
        bucket = buckets.setdefault(group, {})
        key = "" if group == CONSTRUCTORS else member.name
        bucket.setdefault(key, member)
    return [
        MemberGroup(name, tuple(buckets[name].values()))
        for name in GROUP_ORDER
        if name in buckets
    ]


__all__ = [
    "CONSTRUCTORS",
    "EVENTS",
    "EXPLICIT_INTERFACE_IMPLEMENTATIONS",
    "FIELDS",
    "GROUP_ORDER",
    "METHODS",
    "OPERATORS",
    "PROPERTIES",
    "MemberGroup",
    "group_members",
    "member_group_name",
]
