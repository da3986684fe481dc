"""Dense weighted adjacency matrix for one family.

Owns the member id <-> matrix index bijection. Indices are dense (0..N-1) and
assigned in insertion order; removing a member shifts every higher index down
by one so the bijection stays dense.

Weights: 0 = no edge, 1 = parent -> child (directed), 2 = spouse (symmetric).
"""

from __future__ import annotations

from typing import Any

_SPOUSE = 2
_WEIGHTS = (0, 1, _SPOUSE)


class RelationMatrix:
    def __init__(self) -> None:
        self._ids: list[str] = []
        self._index: dict[str, int] = {}
        self._values: list[list[int]] = []

    @property
    def values(self) -> list[list[int]]:
        """Read-only view for the algorithms (do not mutate)."""
        return self._values

    @property
    def index_map(self) -> dict[str, int]:
        return dict(self._index)

    def size(self) -> int:
        return len(self._ids)

    def index_of(self, member_id: str) -> int | None:
        return self._index.get(member_id)

    def id_at(self, index: int) -> str:
        self._check(index)
        return self._ids[index]

    def ids(self) -> list[str]:
        return list(self._ids)

    def _check(self, *indices: int) -> None:
        n = len(self._ids)
        for i in indices:
            if not isinstance(i, int) or i < 0 or i >= n:
                raise IndexError(f"matrix index out of range: {i} (size {n})")

    def weight(self, i: int, j: int) -> int:
        self._check(i, j)
        return self._values[i][j]

    def add_member(self, member_id: str) -> int:
        if member_id in self._index:
            raise ValueError(f"member already indexed: {member_id}")

        idx = len(self._ids)
        for row in self._values:
            row.append(0)
        self._values.append([0] * (idx + 1))
        self._ids.append(member_id)
        self._index[member_id] = idx
        return idx

    def set_edge(self, i: int, j: int, weight: int) -> None:
        self._check(i, j)
        if i == j:
            raise ValueError(f"self-loop not allowed at index {i}")
        if weight < 0:
            raise ValueError(f"negative weight: {weight}")
        self._values[i][j] = int(weight)

    def clear_edge(self, i: int, j: int) -> None:
        self._check(i, j)
        self._values[i][j] = 0

    def remove_member(self, member_id: str) -> int:
        """Drop a member's row and column and re-derive the index map.

        Returns the index the member had before removal.
        """

        removed = self._index.get(member_id)
        if removed is None:
            raise KeyError(member_id)

        self._values = [
            [w for j, w in enumerate(row) if j != removed]
            for i, row in enumerate(self._values)
            if i != removed
        ]
        del self._ids[removed]
        self._index = {mid: i for i, mid in enumerate(self._ids)}
        return removed

    def to_dict(self) -> dict[str, Any]:
        return {
            "memberIndexMap": dict(self._index),
            "relationMatrix": {
                "size": len(self._ids),
                "values": [list(row) for row in self._values],
            },
        }

    @classmethod
    def from_dict(cls, index_map: dict[str, int], matrix: dict[str, Any]) -> RelationMatrix:
        """Rebuild from the persisted layout, validating shape and bijection."""

        values = [[int(w) for w in row] for row in (matrix.get("values") or [])]
        size = int(matrix.get("size", len(values)))

        if len(values) != size or any(len(row) != size for row in values):
            raise ValueError(f"relation matrix is not {size}x{size}")
        if len(index_map) != size:
            raise ValueError(f"index map has {len(index_map)} entries for matrix size {size}")

        ids: list[str | None] = [None] * size
        for mid, idx in index_map.items():
            idx = int(idx)
            if idx < 0 or idx >= size or ids[idx] is not None:
                raise ValueError(f"index map is not a bijection onto [0, {size})")
            ids[idx] = mid

        for i in range(size):
            if values[i][i] != 0:
                raise ValueError(f"self-loop at index {i}")
            for j in range(size):
                w = values[i][j]
                if w not in _WEIGHTS:
                    raise ValueError(f"invalid relation weight {w} at ({i}, {j})")
                if w == _SPOUSE and values[j][i] != _SPOUSE:
                    raise ValueError(f"spouse edge ({i}, {j}) is not symmetric")

        out = cls()
        out._ids = [str(mid) for mid in ids]
        out._index = {mid: i for i, mid in enumerate(out._ids)}
        out._values = values
        return out
