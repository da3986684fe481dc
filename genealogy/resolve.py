from __future__ import annotations

from fastapi import HTTPException

from .models import Family, Member
from .store import FamilyStore


def _resolve_family(store: FamilyStore, family_ref: str) -> Family:
    """Resolve either a family id or a family name (case-insensitive) to a Family."""

    family = store.load(family_ref)
    if family is None:
        family = store.find_by_name(family_ref)
    if family is None:
        raise HTTPException(status_code=404, detail=f"family not found: {family_ref}")
    return family


def _require_family(family: Family | None, family_id: str) -> Family:
    if family is None:
        raise HTTPException(status_code=404, detail=f"family not found: {family_id}")
    return family


def _resolve_member(family: Family, member_id: str) -> Member:
    member = family.get(member_id)
    if member is None:
        raise HTTPException(status_code=404, detail=f"member not found: {member_id}")
    return member
