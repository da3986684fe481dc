from __future__ import annotations

from typing import Any, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel, Field

from ..models import Family
from ..mutations import new_member, remove_member as _remove_member, search_members as _search_members
from ..mutations import update_member as _update_member
from ..resolve import _require_family, _resolve_member
from ..serialize import _member_to_public, _members_to_public
from ..store import FamilyStore, get_store
from .families import MemberCreate

router = APIRouter(tags=["members"])


class MemberUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    birth_date: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}")
    death_date: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}")
    gender: Optional[Literal["MALE", "FEMALE", "M", "F"]] = None
    metadata: Optional[dict[str, Any]] = None


def _load(store: FamilyStore, family_id: str) -> Family:
    return _require_family(store.load(family_id), family_id)


@router.get("/families/{family_id}/members")
def list_members(family_id: str, store: FamilyStore = Depends(get_store)) -> dict[str, Any]:
    family = _load(store, family_id)
    return {"family_id": family.id, "results": _members_to_public(list(family.members.values()))}


# Declared before /members/{member_id} so "search" is not taken for an id.
@router.get("/families/{family_id}/members/search")
def search_members(
    family_id: str,
    first_name: Optional[str] = Query(default=None, max_length=200),
    last_name: Optional[str] = Query(default=None, max_length=200),
    gender: Optional[Literal["MALE", "FEMALE", "M", "F"]] = None,
    birth_date: Optional[str] = Query(default=None, max_length=32),
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    family = _load(store, family_id)
    found = _search_members(
        family,
        first_name=first_name,
        last_name=last_name,
        gender=gender,
        birth_date=birth_date,
    )
    return {"family_id": family.id, "results": _members_to_public(found)}


@router.get("/families/{family_id}/members/{member_id}")
def get_member(family_id: str, member_id: str, store: FamilyStore = Depends(get_store)) -> dict[str, Any]:
    family = _load(store, family_id)
    return _member_to_public(_resolve_member(family, member_id))


@router.post("/families/{family_id}/members", status_code=201)
def add_member(
    family_id: str,
    body: MemberCreate,
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    with store.edit(family_id) as family:
        family = _require_family(family, family_id)
        member = new_member(family, **body.model_dump())
    return _member_to_public(member)


@router.put("/families/{family_id}/members/{member_id}")
def update_member(
    family_id: str,
    member_id: str,
    body: MemberUpdate,
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    """Update descriptive fields only; relations go through /relations."""
    changes = body.model_dump(exclude_unset=True)
    with store.edit(family_id) as family:
        family = _require_family(family, family_id)
        member = _update_member(family, member_id, **changes)
        if member is None:
            raise HTTPException(status_code=404, detail=f"member not found: {member_id}")
    return _member_to_public(member)


@router.delete("/families/{family_id}/members/{member_id}", status_code=204)
def remove_member(family_id: str, member_id: str, store: FamilyStore = Depends(get_store)) -> Response:
    with store.edit(family_id) as family:
        family = _require_family(family, family_id)
        if not _remove_member(family, member_id):
            raise HTTPException(status_code=404, detail=f"member not found: {member_id}")
    return Response(status_code=204)
