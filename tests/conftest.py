import numpy as np
import pytest

from mesh_search.domain.graph import MeshGraph


def grid_mesh(nx: int, ny: int, spacing: float = 1.0):
    """Flat nx-by-ny vertex grid in z=0, two consistently wound triangles per cell."""
    positions = [(i * spacing, j * spacing, 0.0) for j in range(ny) for i in range(nx)]
    faces = []
    for j in range(ny - 1):
        for i in range(nx - 1):
            v00 = j * nx + i
            v10, v01, v11 = v00 + 1, v00 + nx, v00 + nx + 1
            faces.append((v00, v10, v11))
            faces.append((v00, v11, v01))
    return np.array(positions, dtype=np.float64), np.array(faces, dtype=np.int64)


def random_mesh(rng: np.random.Generator, n: int, m: int):
    positions = rng.uniform(-1.0, 1.0, size=(n, 3))
    faces = np.array([rng.choice(n, size=3, replace=False) for _ in range(m)], dtype=np.int64)
    return positions, faces


def brute_force_distances(graph: MeshGraph, start: int) -> list[float]:
    """Bellman-Ford over the directed neighbor lists."""
    dist = [float("inf")] * len(graph)
    dist[start] = 0.0
    for _ in range(len(graph)):
        changed = False
        for u in range(len(graph)):
            if dist[u] == float("inf"):
                continue
            for v in graph.neighbors(u):
                d = dist[u] + graph.distance(u, v)
                if d < dist[v] - 1e-12:
                    dist[v] = d
                    changed = True
        if not changed:
            break
    return dist


@pytest.fixture
def grid4() -> MeshGraph:
    return MeshGraph.build(*grid_mesh(4, 4))


@pytest.fixture
def chain4() -> MeshGraph:
    # 0->1->2->3 at unit spacing plus a direct 0->3 that costs 5
    positions = [(float(i), 0.0, 0.0) for i in range(4)]
    edges = [(0, 1), (1, 2), (2, 3), (0, 3)]
    return MeshGraph.from_edges(positions, edges, lengths={(0, 3): 5.0})
