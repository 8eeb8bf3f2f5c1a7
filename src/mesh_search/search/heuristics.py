from collections.abc import Callable

from mesh_search.domain.entities.geometry import distance
from mesh_search.domain.graph import MeshGraph

Heuristic = Callable[[MeshGraph, int, int], float]


def euclidean(graph: MeshGraph, v: int, goal: int) -> float:
    # admissible while edge lengths are >= straight-line distance
    return distance(graph.position(v), graph.position(goal))


def zero(graph: MeshGraph, v: int, goal: int) -> float:
    return 0.0
