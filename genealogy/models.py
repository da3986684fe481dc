"""Domain objects for families, members and query results."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any, Optional

from .matrix import RelationMatrix


class RelationType(IntEnum):
    PARENT_CHILD = 1
    SPOUSE = 2


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


_GENDER_ALIASES = {"M": "MALE", "F": "FEMALE"}


def _parse_gender(raw: Any) -> Gender:
    s = str(raw or "").strip().upper()
    return Gender(_GENDER_ALIASES.get(s, s))


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Member:
    id: str
    family_id: str
    first_name: str
    last_name: str
    birth_date: str
    gender: Gender
    death_date: Optional[str] = None
    parents: list[str] = field(default_factory=list)
    children: list[str] = field(default_factory=list)
    spouse: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "familyId": self.family_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "birthDate": self.birth_date,
            "deathDate": self.death_date,
            "gender": self.gender.value,
            "parents": list(self.parents),
            "children": list(self.children),
            "spouse": self.spouse,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Member:
        return cls(
            id=str(d["id"]),
            family_id=str(d.get("familyId") or ""),
            first_name=str(d.get("firstName") or ""),
            last_name=str(d.get("lastName") or ""),
            birth_date=str(d.get("birthDate") or ""),
            death_date=d.get("deathDate") or None,
            gender=_parse_gender(d.get("gender")),
            parents=[str(x) for x in d.get("parents") or []],
            children=[str(x) for x in d.get("children") or []],
            spouse=d.get("spouse") or None,
            metadata=dict(d.get("metadata") or {}),
        )


def _relation_weight(x: Member, y: Member) -> int:
    """Matrix weight from x to y implied by the relation lists."""
    if y.id in x.children:
        return int(RelationType.PARENT_CHILD)
    if x.spouse == y.id:
        return int(RelationType.SPOUSE)
    return 0


def _check_consistent(by_id: dict[str, Member], graph: RelationMatrix) -> None:
    """Raise ValueError unless the relation lists and the matrix agree."""

    for m in by_id.values():
        refs = [*m.parents, *m.children, *([m.spouse] if m.spouse else [])]
        dangling = [r for r in refs if r not in by_id]
        if dangling:
            raise ValueError(f"member {m.id} references unknown members {dangling}")
        if any(m.id not in by_id[p].children for p in m.parents):
            raise ValueError(f"member {m.id} has a parent that does not list it as a child")
        if any(m.id not in by_id[c].parents for c in m.children):
            raise ValueError(f"member {m.id} has a child that does not list it as a parent")

    for x in by_id.values():
        xi = graph.index_of(x.id)
        for y in by_id.values():
            if x.id == y.id:
                continue
            want = _relation_weight(x, y)
            have = graph.weight(xi, graph.index_of(y.id))
            if have != want:
                raise ValueError(f"relation matrix has {have} for {x.id} -> {y.id}, lists imply {want}")


@dataclass
class Family:
    """A family snapshot: members plus the weighted relation matrix.

    The parents/children/spouse lists on each member and the matrix describe
    the same relations; `genealogy.mutations` keeps them in sync.
    """

    id: str
    name: str
    description: str = ""
    created_at: str = field(default_factory=_utc_now_iso)
    updated_at: str = field(default_factory=_utc_now_iso)
    members: dict[str, Member] = field(default_factory=dict)
    graph: RelationMatrix = field(default_factory=RelationMatrix)

    def get(self, member_id: str) -> Member | None:
        return self.members.get(member_id)

    def touch(self) -> None:
        self.updated_at = _utc_now_iso()

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "members": [m.to_dict() for m in self.members.values()],
        }
        out.update(self.graph.to_dict())
        return out

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Family:
        members = [Member.from_dict(m) for m in d.get("members") or []]
        graph = RelationMatrix.from_dict(
            d.get("memberIndexMap") or {},
            d.get("relationMatrix") or {"size": 0, "values": []},
        )
        by_id = {m.id: m for m in members}
        if set(by_id) != set(graph.ids()):
            raise ValueError("member ids do not match the relation matrix index map")
        _check_consistent(by_id, graph)

        return cls(
            id=str(d["id"]),
            name=str(d.get("name") or ""),
            description=str(d.get("description") or ""),
            created_at=str(d.get("createdAt") or _utc_now_iso()),
            updated_at=str(d.get("updatedAt") or _utc_now_iso()),
            # Keep matrix order so listing matches index order.
            members={mid: by_id[mid] for mid in graph.ids()},
            graph=graph,
        )


@dataclass(frozen=True)
class Path:
    source: str
    target: str
    path: list[str]
    relation_path: list[str]
    distance: float

    @property
    def reachable(self) -> bool:
        return not math.isinf(self.distance)

    @classmethod
    def unreachable(cls, source: str, target: str) -> Path:
        return cls(source=source, target=target, path=[], relation_path=[], distance=math.inf)


@dataclass(frozen=True)
class IndirectRelation:
    path: Path
    has_cycle: bool


@dataclass(frozen=True)
class SpanningEdge:
    from_id: str
    to_id: str
    weight: int

    @property
    def relation(self) -> RelationType:
        return RelationType(self.weight)
