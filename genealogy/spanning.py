"""Spanning structures and sub-family partitioning over a relation matrix."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Edge:
    source: int
    target: int
    weight: int


def _undirected_weight(values: list[list[int]], i: int, j: int) -> int:
    """Smallest positive weight between i and j in either direction, else 0."""
    a = values[i][j]
    b = values[j][i]
    if a > 0 and b > 0:
        return min(a, b)
    return a if a > 0 else max(b, 0)


def _oriented(values: list[list[int]], i: int, j: int, w: int) -> Edge:
    # Report the pair in the direction the matrix stores it (parent -> child).
    if values[i][j] != w and values[j][i] == w:
        return Edge(j, i, w)
    return Edge(i, j, w)


def prim(values: list[list[int]]) -> list[Edge]:
    """Vertex-centric greedy spanning edges, grown from vertex 0.

    Each round takes the cheapest edge between an included and an excluded
    vertex (first in index order on ties). A disconnected graph yields fewer
    than N-1 edges: only vertex 0's component is spanned.
    """

    size = len(values)
    if size == 0:
        return []

    included = [False] * size
    included[0] = True
    result: list[Edge] = []

    for _ in range(size - 1):
        best = math.inf
        best_from = best_to = -1
        for i in range(size):
            if not included[i]:
                continue
            for j in range(size):
                if included[j]:
                    continue
                w = _undirected_weight(values, i, j)
                if 0 < w < best:
                    best = w
                    best_from, best_to = i, j

        if best_from == -1:
            break

        result.append(_oriented(values, best_from, best_to, int(best)))
        included[best_to] = True

    return result


class _UnionFind:
    def __init__(self, size: int) -> None:
        self.parent = list(range(size))
        self.rank = [0] * size

    def find(self, i: int) -> int:
        root = i
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression.
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return root

    def union(self, a: int, b: int) -> bool:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        return True


def _undirected_edges(values: list[list[int]]) -> list[Edge]:
    # One edge per connected pair, oriented as stored.
    size = len(values)
    edges: list[Edge] = []
    for i in range(size):
        for j in range(i + 1, size):
            w = _undirected_weight(values, i, j)
            if w > 0:
                edges.append(_oriented(values, i, j, w))
    return edges


def kruskal(values: list[list[int]]) -> list[Edge]:
    """Weight-sorted union-find spanning forest (one tree per component)."""

    edges = sorted(_undirected_edges(values), key=lambda e: e.weight)
    uf = _UnionFind(len(values))
    return [e for e in edges if uf.union(e.source, e.target)]


def identify_subfamilies(values: list[list[int]]) -> list[list[int]]:
    """Group vertices into connected components, ignoring edge direction.

    Groups are ordered by their lowest index and list their indices ascending,
    so isolated members come back as singleton groups.
    """

    size = len(values)
    uf = _UnionFind(size)
    for e in kruskal(values):
        uf.union(e.source, e.target)

    groups: dict[int, list[int]] = {}
    for i in range(size):
        groups.setdefault(uf.find(i), []).append(i)
    return list(groups.values())
