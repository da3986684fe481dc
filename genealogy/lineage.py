"""Depth-bounded lineage queries over the parents/children lists.

These walk the convenience lists on each member rather than the weighted
matrix, so ancestors are reachable even though matrix edges only point from
parent to child.
"""

from __future__ import annotations

from typing import Callable, Iterable

from .models import Family, Member


def _walk(
    family: Family,
    start_id: str,
    next_ids: Callable[[Member], Iterable[str]],
    depth: int | None,
) -> list[Member]:
    """Pre-order walk with an explicit stack of (member id, remaining depth).

    Each relative is emitted once, the first time it is reached. A member is
    expanded again only when reached with more remaining depth than before,
    which keeps depth limits exact on pedigrees with shared ancestors.
    """

    start = family.get(start_id)
    if start is None or (depth is not None and depth <= 0):
        return []

    out: list[Member] = []
    emitted: set[str] = {start_id}
    # remaining depth (None = unbounded) at which each id was last expanded
    expanded: dict[str, int | None] = {start_id: depth}

    first_level = None if depth is None else depth - 1
    stack: list[tuple[str, int | None]] = [
        (rid, first_level) for rid in reversed(list(next_ids(start)))
    ]

    while stack:
        mid, remaining = stack.pop()
        member = family.get(mid)
        if member is None:
            continue

        if mid not in emitted:
            emitted.add(mid)
            out.append(member)

        if remaining is not None and remaining <= 0:
            continue
        if mid in expanded:
            prev = expanded[mid]
            if prev is None or (remaining is not None and prev >= remaining):
                continue
        expanded[mid] = remaining

        nxt = None if remaining is None else remaining - 1
        for rid in reversed(list(next_ids(member))):
            stack.append((rid, nxt))

    return out


def find_ancestors(family: Family, member_id: str, depth: int | None = None) -> list[Member]:
    return _walk(family, member_id, lambda m: m.parents, depth)


def find_descendants(family: Family, member_id: str, depth: int | None = None) -> list[Member]:
    return _walk(family, member_id, lambda m: m.children, depth)


def _unique(family: Family, ids: Iterable[str], *, exclude: set[str]) -> list[Member]:
    seen = set(exclude)
    out: list[Member] = []
    for mid in ids:
        if mid in seen:
            continue
        seen.add(mid)
        member = family.get(mid)
        if member is not None:
            out.append(member)
    return out


def _sibling_ids(family: Family, member: Member) -> list[str]:
    ids: list[str] = []
    for pid in member.parents:
        parent = family.get(pid)
        if parent is None:
            continue
        ids.extend(cid for cid in parent.children if cid != member.id)
    return ids


def find_siblings(family: Family, member_id: str) -> list[Member]:
    """Members sharing at least one parent (half-siblings included)."""
    member = family.get(member_id)
    if member is None:
        return []
    return _unique(family, _sibling_ids(family, member), exclude={member_id})


def find_uncles_aunts(family: Family, member_id: str) -> list[Member]:
    """Siblings of each parent, plus the spouse of each such sibling."""

    member = family.get(member_id)
    if member is None:
        return []

    ids: list[str] = []
    for pid in member.parents:
        parent = family.get(pid)
        if parent is None:
            continue
        for sid in _sibling_ids(family, parent):
            ids.append(sid)
            sibling = family.get(sid)
            if sibling is not None and sibling.spouse:
                ids.append(sibling.spouse)

    # Own parents are never listed, even on inconsistent data.
    return _unique(family, ids, exclude={member_id, *member.parents})


def find_cousins(family: Family, member_id: str) -> list[Member]:
    member = family.get(member_id)
    if member is None:
        return []

    ids: list[str] = []
    for ua in find_uncles_aunts(family, member_id):
        ids.extend(ua.children)
    return _unique(family, ids, exclude={member_id})
