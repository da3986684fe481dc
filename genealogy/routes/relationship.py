from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..graph import find_indirect_relations, find_relation_path, find_shortest_path
from ..resolve import _require_family
from ..serialize import _indirect_to_public, _path_to_public
from ..store import FamilyStore, get_store

router = APIRouter(tags=["relationship"])


class RelationPathRequest(BaseModel):
    from_id: str = Field(min_length=1, max_length=64)
    to_id: str = Field(min_length=1, max_length=64)
    algorithm: Literal["dijkstra", "bellman-ford"] = "dijkstra"


def _member_missing(source_id: str, target_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"member not found: {source_id} or {target_id}")


@router.get("/families/{family_id}/shortest-path/{source_id}/{target_id}")
def shortest_path(
    family_id: str,
    source_id: str,
    target_id: str,
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    """Cheapest relation path, following parent->child edges downwards only.

    An unreachable target is not an error: the payload carries
    ``reachable: false`` and an empty path.
    """

    family = _require_family(store.load(family_id), family_id)
    path = find_shortest_path(family, source_id, target_id)
    if path is None:
        raise _member_missing(source_id, target_id)
    return _path_to_public(path)


@router.get("/families/{family_id}/indirect-relations/{source_id}/{target_id}")
def indirect_relations(
    family_id: str,
    source_id: str,
    target_id: str,
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    family = _require_family(store.load(family_id), family_id)
    result = find_indirect_relations(family, source_id, target_id)
    if result is None:
        raise _member_missing(source_id, target_id)
    return _indirect_to_public(result)


@router.post("/families/{family_id}/relation-path")
def relation_path(
    family_id: str,
    body: RelationPathRequest,
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    family = _require_family(store.load(family_id), family_id)
    path = find_relation_path(family, body.from_id, body.to_id, algorithm=body.algorithm)
    if path is None:
        raise _member_missing(body.from_id, body.to_id)
    return {"algorithm": body.algorithm, **_path_to_public(path)}
