"""Relationship queries over a family snapshot.

Translates member ids to matrix indices, runs the matrix or lineage
algorithms, and maps the results back to id-based records with relation
descriptions. Functions here are pure: they never modify the family.

A member id that is not part of the family yields None; an existing but
unreachable member yields a Path with an empty id list and infinite distance.
"""

from __future__ import annotations

from typing import Callable

from . import lineage
from .classify import describe_path
from .models import Family, IndirectRelation, Member, Path, SpanningEdge
from .pathfinding import dijkstra, find_path_bellman_ford
from .spanning import Edge, identify_subfamilies as _identify_subfamilies, kruskal, prim

PATH_ALGORITHMS = ("dijkstra", "bellman-ford")
SPANNING_ALGORITHMS = ("prim", "kruskal")


def _resolve_pair(family: Family, source_id: str, target_id: str) -> tuple[int, int] | None:
    si = family.graph.index_of(source_id)
    ti = family.graph.index_of(target_id)
    if si is None or ti is None:
        return None
    return si, ti


def _to_path(family: Family, source_id: str, target_id: str, distance: float, indices: list[int]) -> Path:
    if not indices:
        return Path.unreachable(source_id, target_id)

    ids = [family.graph.id_at(i) for i in indices]
    return Path(
        source=source_id,
        target=target_id,
        path=ids,
        relation_path=describe_path(family, ids),
        distance=distance,
    )


def find_shortest_path(family: Family, source_id: str, target_id: str) -> Path | None:
    pair = _resolve_pair(family, source_id, target_id)
    if pair is None:
        return None
    distance, indices = dijkstra(family.graph.values, *pair)
    return _to_path(family, source_id, target_id, distance, indices)


def find_indirect_relations(family: Family, source_id: str, target_id: str) -> IndirectRelation | None:
    pair = _resolve_pair(family, source_id, target_id)
    if pair is None:
        return None
    distance, indices, has_cycle = find_path_bellman_ford(family.graph.values, *pair)
    return IndirectRelation(
        path=_to_path(family, source_id, target_id, distance, indices),
        has_cycle=has_cycle,
    )


def find_relation_path(
    family: Family,
    source_id: str,
    target_id: str,
    algorithm: str = "dijkstra",
) -> Path | None:
    algo = algorithm.strip().lower()
    if algo == "dijkstra":
        return find_shortest_path(family, source_id, target_id)
    if algo == "bellman-ford":
        res = find_indirect_relations(family, source_id, target_id)
        return res.path if res is not None else None
    raise ValueError(f"unknown path algorithm {algorithm!r}; expected one of {PATH_ALGORITHMS}")


def find_spanning_tree(family: Family, algorithm: str = "prim") -> list[SpanningEdge]:
    algo = algorithm.strip().lower()
    builders: dict[str, Callable[[list[list[int]]], list[Edge]]] = {"prim": prim, "kruskal": kruskal}
    build = builders.get(algo)
    if build is None:
        raise ValueError(f"unknown spanning algorithm {algorithm!r}; expected one of {SPANNING_ALGORITHMS}")

    return [
        SpanningEdge(
            from_id=family.graph.id_at(e.source),
            to_id=family.graph.id_at(e.target),
            weight=e.weight,
        )
        for e in build(family.graph.values)
    ]


def identify_subfamilies(family: Family) -> list[list[str]]:
    return [
        [family.graph.id_at(i) for i in group]
        for group in _identify_subfamilies(family.graph.values)
    ]


def _lineage(family: Family, member_id: str, query: Callable[..., list[Member]], **kwargs) -> list[Member] | None:
    if family.get(member_id) is None:
        return None
    return query(family, member_id, **kwargs)


def find_ancestors(family: Family, member_id: str, depth: int | None = None) -> list[Member] | None:
    return _lineage(family, member_id, lineage.find_ancestors, depth=depth)


def find_descendants(family: Family, member_id: str, depth: int | None = None) -> list[Member] | None:
    return _lineage(family, member_id, lineage.find_descendants, depth=depth)


def find_siblings(family: Family, member_id: str) -> list[Member] | None:
    return _lineage(family, member_id, lineage.find_siblings)


def find_uncles_aunts(family: Family, member_id: str) -> list[Member] | None:
    return _lineage(family, member_id, lineage.find_uncles_aunts)


def find_cousins(family: Family, member_id: str) -> list[Member] | None:
    return _lineage(family, member_id, lineage.find_cousins)
