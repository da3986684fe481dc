from __future__ import annotations

from typing import Any, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from ..mutations import RelationConflictError, create_family as _create_family, update_family as _update_family
from ..resolve import _require_family, _resolve_family
from ..serialize import _family_to_public
from ..store import FamilyStore, get_store

router = APIRouter(tags=["families"])


class MemberCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=200)
    last_name: str = Field(min_length=1, max_length=200)
    birth_date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}")
    gender: Literal["MALE", "FEMALE", "M", "F"]
    death_date: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}")
    metadata: dict[str, Any] = Field(default_factory=dict)


class FamilyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    initial_member: Optional[MemberCreate] = None


class FamilyUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None


@router.get("/families")
def list_families(
    include_members: bool = False,
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    results: list[dict[str, Any]] = []
    for f in store.list_families():
        out = _family_to_public(f)
        if not include_members:
            out.pop("members", None)
        results.append(out)
    return {"results": results, "total": len(results)}


@router.get("/families/{family_ref}")
def get_family(
    family_ref: str,
    include_graph: bool = False,
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    """Fetch one family by id, falling back to a case-insensitive name match."""
    family = _resolve_family(store, family_ref)
    return _family_to_public(family, include_graph=include_graph)


@router.post("/families", status_code=201)
def create_family(body: FamilyCreate, store: FamilyStore = Depends(get_store)) -> dict[str, Any]:
    initial = body.initial_member.model_dump() if body.initial_member else None
    try:
        family = _create_family(body.name, body.description, initial)
    except RelationConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    store.save(family)
    return _family_to_public(family)


@router.put("/families/{family_id}")
def update_family(
    family_id: str,
    body: FamilyUpdate,
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    """Rename or re-describe a family. Members and relations are not touched here."""
    with store.edit(family_id) as family:
        family = _require_family(family, family_id)
        _update_family(family, name=body.name, description=body.description)
    return _family_to_public(family)


@router.delete("/families/{family_id}", status_code=204)
def delete_family(family_id: str, store: FamilyStore = Depends(get_store)) -> Response:
    if not store.delete(family_id):
        raise HTTPException(status_code=404, detail=f"family not found: {family_id}")
    return Response(status_code=204)
