from __future__ import annotations

from typing import Any

from .models import Family, IndirectRelation, Member, Path, SpanningEdge
from .names import _display_name


def _member_to_public(m: Member) -> dict[str, Any]:
    return {
        "id": m.id,
        "family_id": m.family_id,
        "display_name": _display_name(m),
        "first_name": m.first_name,
        "last_name": m.last_name,
        "birth_date": m.birth_date,
        "death_date": m.death_date,
        "gender": m.gender.value,
        "parents": list(m.parents),
        "children": list(m.children),
        "spouse": m.spouse,
        "metadata": dict(m.metadata),
    }


def _members_to_public(members: list[Member]) -> list[dict[str, Any]]:
    return [_member_to_public(m) for m in members]


def _family_to_public(f: Family, *, include_graph: bool = False) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": f.id,
        "name": f.name,
        "description": f.description,
        "created_at": f.created_at,
        "updated_at": f.updated_at,
        "members_total": len(f.members),
        "members": _members_to_public(list(f.members.values())),
    }
    if include_graph:
        # Same layout as the stored file.
        out.update(f.graph.to_dict())
    return out


def _path_to_public(p: Path) -> dict[str, Any]:
    # JSON has no infinity; unreachable paths carry distance=None.
    return {
        "source": p.source,
        "target": p.target,
        "reachable": p.reachable,
        "path": list(p.path),
        "relation_path": list(p.relation_path),
        "distance": p.distance if p.reachable else None,
        "hops": max(0, len(p.path) - 1),
    }


def _indirect_to_public(r: IndirectRelation) -> dict[str, Any]:
    return {"path": _path_to_public(r.path), "has_cycle": r.has_cycle}


def _edge_to_public(e: SpanningEdge) -> dict[str, Any]:
    return {
        "from": e.from_id,
        "to": e.to_id,
        "weight": e.weight,
        "type": e.relation.name.lower(),
    }
