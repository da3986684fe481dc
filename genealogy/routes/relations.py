from __future__ import annotations

from typing import Any, Union

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator

from ..models import RelationType
from ..mutations import MemberNotFoundError, RelationConflictError, add_relation as _add_relation
from ..mutations import remove_relation as _remove_relation
from ..resolve import _require_family
from ..store import FamilyStore, get_store

router = APIRouter(tags=["relations"])

_RELATION_NAMES = {
    "parent_child": RelationType.PARENT_CHILD,
    "parent-child": RelationType.PARENT_CHILD,
    "parent": RelationType.PARENT_CHILD,
    "spouse": RelationType.SPOUSE,
}


class RelationCreate(BaseModel):
    from_id: str = Field(min_length=1, max_length=64)
    to_id: str = Field(min_length=1, max_length=64)
    type: Union[int, str]

    @field_validator("type")
    @classmethod
    def _parse_type(cls, v: Union[int, str]) -> int:
        if isinstance(v, str) and not v.strip().isdigit():
            rtype = _RELATION_NAMES.get(v.strip().lower())
            if rtype is None:
                raise ValueError(f"unknown relation type {v!r}")
            return int(rtype)
        try:
            return int(RelationType(int(v)))
        except ValueError as exc:
            raise ValueError(f"unknown relation type {v!r}") from exc


class RelationDelete(BaseModel):
    from_id: str = Field(min_length=1, max_length=64)
    to_id: str = Field(min_length=1, max_length=64)


@router.post("/families/{family_id}/relations")
def add_relation(
    family_id: str,
    body: RelationCreate,
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    """Add a parent->child (type 1) or spouse (type 2) relation."""
    rtype = RelationType(body.type)
    with store.edit(family_id) as family:
        family = _require_family(family, family_id)
        try:
            created = _add_relation(family, body.from_id, body.to_id, rtype)
        except MemberNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except RelationConflictError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    return {
        "from_id": body.from_id,
        "to_id": body.to_id,
        "type": rtype.name.lower(),
        "created": created,
    }


@router.delete("/families/{family_id}/relations")
def remove_relation(
    family_id: str,
    body: RelationDelete = Body(...),
    store: FamilyStore = Depends(get_store),
) -> dict[str, Any]:
    with store.edit(family_id) as family:
        family = _require_family(family, family_id)
        try:
            removed = _remove_relation(family, body.from_id, body.to_id)
        except MemberNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        if not removed:
            raise HTTPException(status_code=404, detail="relation not found")

    return {"from_id": body.from_id, "to_id": body.to_id, "removed": True}
