"""Relationship labels for adjacent members on a path."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .models import Family, Member
from .names import _display_first_name


class RelationshipType(str, Enum):
    PARENT = "PARENT"
    CHILD = "CHILD"
    SPOUSE = "SPOUSE"
    SIBLING = "SIBLING"
    RELATED = "RELATED"


@dataclass(frozen=True)
class Relationship:
    type: RelationshipType
    description: str


_PHRASES = {
    RelationshipType.PARENT: "is parent of",
    RelationshipType.CHILD: "is child of",
    RelationshipType.SPOUSE: "is spouse of",
    RelationshipType.SIBLING: "is sibling of",
    RelationshipType.RELATED: "is related to",
}


def _relationship_type(a: Member, b: Member) -> RelationshipType:
    # Order matters: direct links win over inferred siblinghood.
    if b.id in a.children:
        return RelationshipType.PARENT
    if b.id in a.parents:
        return RelationshipType.CHILD
    if a.spouse is not None and a.spouse == b.id:
        return RelationshipType.SPOUSE
    if set(a.parents) & set(b.parents):
        return RelationshipType.SIBLING
    return RelationshipType.RELATED


def classify(a: Member, b: Member) -> Relationship:
    rtype = _relationship_type(a, b)
    return Relationship(
        type=rtype,
        description=f"{_display_first_name(a)} {_PHRASES[rtype]} {_display_first_name(b)}",
    )


def describe_path(family: Family, member_ids: list[str]) -> list[str]:
    """One description per consecutive pair of `member_ids`.

    A matrix edge without a matching list entry comes out as "related"; an id
    missing from the family is described by the id itself.
    """

    out: list[str] = []
    for a_id, b_id in zip(member_ids, member_ids[1:]):
        a = family.get(a_id)
        b = family.get(b_id)
        if a is None or b is None:
            out.append(f"{a_id} {_PHRASES[RelationshipType.RELATED]} {b_id}")
            continue
        out.append(classify(a, b).description)
    return out
