from __future__ import annotations

from typing import Any, Callable, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from .. import graph as family_graph
from ..models import Family, Member
from ..resolve import _require_family
from ..serialize import _edge_to_public, _members_to_public
from ..store import FamilyStore, get_store

router = APIRouter(tags=["graph"])


@router.get("/families/{family_id}/spanning-tree")
def spanning_tree(
    family_id: str,
    algorithm: Literal["prim", "kruskal"] = "prim",
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    """Minimum-weight edges connecting the family.

    Prim grows from the first member and only spans its component; Kruskal
    returns a spanning forest covering every component.
    """

    family = _require_family(store.load(family_id), family_id)
    edges = family_graph.find_spanning_tree(family, algorithm=algorithm)
    return {
        "family_id": family.id,
        "algorithm": algorithm,
        "edges": [_edge_to_public(e) for e in edges],
        "total_weight": sum(e.weight for e in edges),
    }


@router.get("/families/{family_id}/subfamilies")
def subfamilies(family_id: str, store: FamilyStore = Depends(get_store)) -> dict[str, Any]:
    family = _require_family(store.load(family_id), family_id)
    groups = family_graph.identify_subfamilies(family)
    return {"family_id": family.id, "subfamilies": groups, "total": len(groups)}


def _lineage_response(
    store: FamilyStore,
    family_id: str,
    member_id: str,
    query: Callable[..., Optional[list[Member]]],
    **kwargs: Any,
) -> dict[str, Any]:
    family: Family = _require_family(store.load(family_id), family_id)
    members = query(family, member_id, **kwargs)
    if members is None:
        raise HTTPException(status_code=404, detail=f"member not found: {member_id}")
    return {
        "family_id": family.id,
        "member_id": member_id,
        "results": _members_to_public(members),
    }


@router.get("/families/{family_id}/members/{member_id}/ancestors")
def ancestors(
    family_id: str,
    member_id: str,
    depth: Optional[int] = Query(default=None, ge=0, le=1000),
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    return _lineage_response(store, family_id, member_id, family_graph.find_ancestors, depth=depth)


@router.get("/families/{family_id}/members/{member_id}/descendants")
def descendants(
    family_id: str,
    member_id: str,
    depth: Optional[int] = Query(default=None, ge=0, le=1000),
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    return _lineage_response(store, family_id, member_id, family_graph.find_descendants, depth=depth)


@router.get("/families/{family_id}/members/{member_id}/siblings")
def siblings(family_id: str, member_id: str, store: FamilyStore = Depends(get_store)) -> dict[str, Any]:
    return _lineage_response(store, family_id, member_id, family_graph.find_siblings)


@router.get("/families/{family_id}/members/{member_id}/uncles-aunts")
def uncles_aunts(family_id: str, member_id: str, store: FamilyStore = Depends(get_store)) -> dict[str, Any]:
    return _lineage_response(store, family_id, member_id, family_graph.find_uncles_aunts)


@router.get("/families/{family_id}/members/{member_id}/cousins")
def cousins(family_id: str, member_id: str, store: FamilyStore = Depends(get_store)) -> dict[str, Any]:
    return _lineage_response(store, family_id, member_id, family_graph.find_cousins)
