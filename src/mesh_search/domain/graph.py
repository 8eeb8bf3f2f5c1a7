# mesh_search/domain/graph.py
import math
from collections.abc import Iterable, Mapping

import numpy as np

from mesh_search.domain.entities.geometry import Point3, Pt, distance, to_point
from mesh_search.domain.entities.vertex import Vertex
from mesh_search.domain.errors import EmptyGraphError, MalformedMeshError


def _as_positions(positions) -> np.ndarray:
    xyz = np.asarray(positions, dtype=np.float64)
    if xyz.size == 0:
        return np.empty((0, 3), dtype=np.float64)
    if xyz.ndim != 2 or xyz.shape[1] != 3:
        raise MalformedMeshError(f"positions must have shape (N, 3), got {xyz.shape}")
    if not np.all(np.isfinite(xyz)):
        raise MalformedMeshError("positions must be finite")
    return xyz


def _as_index_pairs(rows, width: int, n: int, what: str) -> np.ndarray:
    idx = np.asarray(rows)
    if idx.size == 0:
        return np.empty((0, width), dtype=np.int64)
    if idx.ndim != 2 or idx.shape[1] != width:
        raise MalformedMeshError(f"{what} must have shape (M, {width}), got {idx.shape}")
    if not np.issubdtype(idx.dtype, np.integer):
        raise MalformedMeshError(f"{what} must hold integer vertex indices")
    bad = (idx < 0) | (idx >= n)
    if bad.any():
        row = int(np.argwhere(bad)[0][0])
        raise MalformedMeshError(
            f"{what}[{row}] = {idx[row].tolist()} references a vertex outside [0, {n})"
        )
    return idx.astype(np.int64, copy=False)


class MeshGraph:
    """
    Adjacency-list graph over mesh vertices.

    Vertex identity is the index into ``vertices``. Neighbor lists are
    directed and keep duplicates: a face (i, j, k) contributes i->j, j->k
    and k->i only, so reverse edges exist only where another face (or
    ``bidirectional=True``) supplies them.
    """

    def __init__(
        self,
        xyz: np.ndarray,
        vertices: list[Vertex],
        lengths: Mapping[tuple[int, int], float] | None = None,
    ):
        self._xyz = xyz
        self._vertices = vertices
        self._lengths = dict(lengths or {})

    # ---------------- construction -----------------------------

    @classmethod
    def build(cls, positions, faces, *, bidirectional: bool = False) -> "MeshGraph":
        xyz = _as_positions(positions)
        tris = _as_index_pairs(faces, 3, len(xyz), "faces")
        vertices = cls._make_vertices(xyz)
        for i, j, k in tris.tolist():
            vertices[i].neighbors.append(j)
            vertices[j].neighbors.append(k)
            vertices[k].neighbors.append(i)
            if bidirectional:
                vertices[j].neighbors.append(i)
                vertices[k].neighbors.append(j)
                vertices[i].neighbors.append(k)
        return cls(xyz, vertices)

    @classmethod
    def from_edges(
        cls,
        positions,
        edges: Iterable[tuple[int, int]],
        *,
        lengths: Mapping[tuple[int, int], float] | None = None,
    ) -> "MeshGraph":
        xyz = _as_positions(positions)
        pairs = _as_index_pairs(list(edges), 2, len(xyz), "edges")
        vertices = cls._make_vertices(xyz)
        for u, v in pairs.tolist():
            vertices[u].neighbors.append(v)
        lengths = dict(lengths or {})
        for (u, v), L in lengths.items():
            if not (0 <= u < len(xyz) and 0 <= v < len(xyz)):
                raise MalformedMeshError(f"length given for unknown edge ({u}, {v})")
            if not np.isfinite(L) or L < 0:
                raise MalformedMeshError(f"edge ({u}, {v}) length must be finite and >= 0")
        return cls(xyz, vertices, lengths)

    @staticmethod
    def _make_vertices(xyz: np.ndarray) -> list[Vertex]:
        return [Vertex(index=n, position=Point3(*row)) for n, row in enumerate(xyz.tolist())]

    # ---------------- accessors ----------------------------------

    def __len__(self) -> int:
        return len(self._vertices)

    @property
    def vertices(self) -> list[Vertex]:
        return self._vertices

    @property
    def positions(self) -> np.ndarray:
        return self._xyz

    @property
    def edge_count(self) -> int:
        return sum(len(v.neighbors) for v in self._vertices)

    def vertex(self, v: int) -> Vertex:
        return self._vertices[v]

    def position(self, v: int) -> Point3:
        return self._vertices[v].position

    def neighbors(self, v: int) -> list[int]:
        return self._vertices[v].neighbors

    def distance(self, u: int, v: int) -> float:
        L = self._lengths.get((u, v))
        if L is not None:
            return L
        return distance(self._vertices[u].position, self._vertices[v].position)

    def check_index(self, v: int, what: str = "vertex") -> int:
        if not 0 <= v < len(self._vertices):
            raise IndexError(f"{what} {v} out of range [0, {len(self._vertices)})")
        return v

    # ---------------- queries ------------------------------------

    def find_nearest_vertex(self, point: Pt) -> int:
        """Index of the vertex closest to ``point``; ties go to the lowest index."""
        if not self._vertices:
            raise EmptyGraphError("nearest-vertex query on an empty graph")
        p = to_point(point)
        if not all(math.isfinite(c) for c in p.as_tuple()):
            raise ValueError(f"query point must be finite, got {p.as_tuple()}")
        d = self._xyz - np.array(p.as_tuple(), dtype=np.float64)
        return int(np.argmin(np.einsum("ij,ij->i", d, d)))

    def reset_search_state(self) -> None:
        for v in self._vertices:
            v.reset()
