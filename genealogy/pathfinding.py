"""Path search over a relation matrix.

Both searches work on matrix indices and treat the matrix as directed:
parent -> child edges are only walkable downwards. Ancestor paths are a
lineage query (see `genealogy.lineage`), not a path search.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def dijkstra(values: list[list[int]], source: int, target: int) -> tuple[float, list[int]]:
    """Label-setting shortest path for non-negative weights.

    Selection is a linear scan; on equal tentative distance the lowest index
    wins. Returns (distance, index path) or (inf, []) when unreachable.
    """

    size = len(values)
    distance = [math.inf] * size
    previous = [-1] * size
    visited = [False] * size
    distance[source] = 0

    for _ in range(size):
        current = -1
        best = math.inf
        for j in range(size):
            if not visited[j] and distance[j] < best:
                best = distance[j]
                current = j

        if current == -1:
            break

        visited[current] = True
        if current == target:
            break

        row = values[current]
        for j in range(size):
            w = row[j]
            if w > 0 and distance[current] + w < distance[j]:
                distance[j] = distance[current] + w
                previous[j] = current

    if math.isinf(distance[target]):
        return math.inf, []

    path = [target]
    while path[-1] != source:
        path.append(previous[path[-1]])
    path.reverse()
    return distance[target], path


@dataclass(frozen=True)
class Relaxation:
    distance: list[float]
    predecessor: list[int]
    has_negative_cycle: bool


def _edge_list(values: list[list[int]]) -> list[tuple[int, int, int]]:
    return [
        (i, j, w)
        for i, row in enumerate(values)
        for j, w in enumerate(row)
        if w != 0
    ]


def bellman_ford(values: list[list[int]], source: int) -> Relaxation:
    size = len(values)
    edges = _edge_list(values)
    distance = [math.inf] * size
    predecessor = [-1] * size
    distance[source] = 0

    for _ in range(size - 1):
        changed = False
        for u, v, w in edges:
            if distance[u] + w < distance[v]:
                distance[v] = distance[u] + w
                predecessor[v] = u
                changed = True
        if not changed:
            break

    # Weights in this domain are 1 or 2, so this never fires for stored
    # families; it still guards matrices handed in from elsewhere.
    has_negative_cycle = any(distance[u] + w < distance[v] for u, v, w in edges)

    return Relaxation(distance=distance, predecessor=predecessor, has_negative_cycle=has_negative_cycle)


def find_path_bellman_ford(
    values: list[list[int]],
    source: int,
    target: int,
) -> tuple[float, list[int], bool]:
    """Return (distance, index path, has_negative_cycle).

    A negative cycle or a broken predecessor chain yields (inf, [], flag).
    """

    result = bellman_ford(values, source)
    if result.has_negative_cycle:
        return math.inf, [], True
    if math.isinf(result.distance[target]):
        return math.inf, [], False

    path = [target]
    current = target
    seen = {target}
    while current != source:
        current = result.predecessor[current]
        if current == -1 or current in seen:
            return math.inf, [], False
        seen.add(current)
        path.append(current)
    path.reverse()
    return result.distance[target], path, False
