"""Family, member and relation mutators.

Every function edits the Family it is given, which callers get fresh from the
store for each request. The parents/children/spouse lists and the relation
matrix are updated together so that they always describe the same relations.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from .models import Family, Gender, Member, RelationType, _parse_gender, _relation_weight

log = logging.getLogger(__name__)


class MemberNotFoundError(LookupError):
    pass


class RelationConflictError(ValueError):
    pass


# Fields that update_member()/search_members() may touch. Relation fields are
# only changed through add_relation()/remove_relation().
_DESCRIPTIVE_FIELDS = ("first_name", "last_name", "birth_date", "death_date", "gender", "metadata")


def _new_id() -> str:
    return str(uuid.uuid4())


def _require(family: Family, member_id: str) -> Member:
    member = family.get(member_id)
    if member is None:
        raise MemberNotFoundError(f"member not found in family {family.id}: {member_id}")
    return member


def _sync_pair(family: Family, a: Member, b: Member) -> None:
    """Derive both matrix cells between a and b from their relation lists."""

    ai = family.graph.index_of(a.id)
    bi = family.graph.index_of(b.id)
    family.graph.set_edge(ai, bi, _relation_weight(a, b))
    family.graph.set_edge(bi, ai, _relation_weight(b, a))


def create_family(
    name: str,
    description: str = "",
    initial_member: Optional[dict[str, Any]] = None,
) -> Family:
    family = Family(id=_new_id(), name=name, description=description or "")
    if initial_member:
        new_member(family, **initial_member)
    log.info("created family %s (%s)", family.id, family.name)
    return family


def update_family(family: Family, *, name: str | None = None, description: str | None = None) -> Family:
    if name is not None:
        family.name = name
    if description is not None:
        family.description = description
    family.touch()
    return family


def add_member(family: Family, member: Member) -> Member:
    if member.id in family.members:
        raise RelationConflictError(f"member already in family {family.id}: {member.id}")
    if member.parents or member.children or member.spouse:
        raise RelationConflictError("new members start without relations; use add_relation()")

    member.family_id = family.id
    family.graph.add_member(member.id)
    family.members[member.id] = member
    family.touch()
    return member


def new_member(
    family: Family,
    *,
    first_name: str,
    last_name: str,
    birth_date: str,
    gender: Gender | str,
    death_date: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Member:
    member = Member(
        id=_new_id(),
        family_id=family.id,
        first_name=first_name,
        last_name=last_name,
        birth_date=birth_date,
        gender=_parse_gender(gender),
        death_date=death_date,
        metadata=dict(metadata or {}),
    )
    add_member(family, member)
    log.info("added member %s to family %s", member.id, family.id)
    return member


def update_member(family: Family, member_id: str, **changes: Any) -> Member | None:
    member = family.get(member_id)
    if member is None:
        return None

    unknown = set(changes) - set(_DESCRIPTIVE_FIELDS)
    if unknown:
        raise ValueError(f"cannot update member fields: {sorted(unknown)}")

    for key, value in changes.items():
        if value is None and key != "death_date":
            continue
        if key == "gender":
            value = _parse_gender(value)
        elif key == "metadata":
            value = dict(value)
        setattr(member, key, value)

    family.touch()
    return member


def remove_member(family: Family, member_id: str) -> bool:
    """Remove a member, every reference to it, and its matrix row/column."""

    if member_id not in family.members:
        return False

    del family.members[member_id]
    for other in family.members.values():
        other.parents = [p for p in other.parents if p != member_id]
        other.children = [c for c in other.children if c != member_id]
        if other.spouse == member_id:
            other.spouse = None

    family.graph.remove_member(member_id)
    family.touch()
    log.info("removed member %s from family %s", member_id, family.id)
    return True


def add_relation(family: Family, from_id: str, to_id: str, relation_type: RelationType | int) -> bool:
    """Record a parent->child or spouse relation.

    Returns False when the relation already exists, True when it was added.
    """

    rtype = RelationType(relation_type)
    src = _require(family, from_id)
    dst = _require(family, to_id)
    if src.id == dst.id:
        raise RelationConflictError("a member cannot be related to itself")

    if rtype == RelationType.PARENT_CHILD:
        if dst.id in src.children and src.id in dst.parents:
            return False
        if src.id in dst.children:
            raise RelationConflictError(f"{to_id} is already a parent of {from_id}")
        if src.spouse == dst.id:
            raise RelationConflictError(f"{from_id} and {to_id} are spouses")
        if dst.id not in src.children:
            src.children.append(dst.id)
        if src.id not in dst.parents:
            dst.parents.append(src.id)
    else:
        if src.spouse == dst.id and dst.spouse == src.id:
            return False
        for m, other in ((src, dst), (dst, src)):
            if m.spouse is not None and m.spouse != other.id:
                raise RelationConflictError(f"{m.id} already has a spouse")
        if dst.id in src.children or src.id in dst.children:
            raise RelationConflictError(f"{from_id} and {to_id} are parent and child")
        src.spouse = dst.id
        dst.spouse = src.id

    _sync_pair(family, src, dst)
    family.touch()
    log.info("added %s relation %s -> %s in family %s", rtype.name.lower(), from_id, to_id, family.id)
    return True


def remove_relation(family: Family, a_id: str, b_id: str) -> bool:
    """Remove any parent/child (either direction) and spouse link between a and b."""

    a = _require(family, a_id)
    b = _require(family, b_id)

    found = False
    if b.id in a.children or a.id in b.parents:
        a.children = [c for c in a.children if c != b.id]
        b.parents = [p for p in b.parents if p != a.id]
        found = True
    if a.id in b.children or b.id in a.parents:
        b.children = [c for c in b.children if c != a.id]
        a.parents = [p for p in a.parents if p != b.id]
        found = True
    if a.spouse == b.id or b.spouse == a.id:
        if a.spouse == b.id:
            a.spouse = None
        if b.spouse == a.id:
            b.spouse = None
        found = True

    if not found:
        return False

    _sync_pair(family, a, b)
    family.touch()
    log.info("removed relation %s - %s in family %s", a_id, b_id, family.id)
    return True


def search_members(family: Family, **criteria: Any) -> list[Member]:
    """Members matching every given descriptive field (names case-insensitive)."""

    active = {k: v for k, v in criteria.items() if v is not None}
    unknown = set(active) - set(_DESCRIPTIVE_FIELDS)
    if unknown:
        raise ValueError(f"cannot search on member fields: {sorted(unknown)}")

    def _matches(member: Member) -> bool:
        for key, want in active.items():
            have = getattr(member, key)
            if key in ("first_name", "last_name"):
                if str(have).casefold() != str(want).casefold():
                    return False
            elif key == "gender":
                if have != _parse_gender(want):
                    return False
            elif have != want:
                return False
        return True

    return [m for m in family.members.values() if _matches(m)]
