# search/session.py
from dataclasses import dataclass, field
from enum import Enum

from mesh_search.domain.graph import MeshGraph
from mesh_search.search.frontier import Frontier
from mesh_search.search.heuristics import Heuristic, euclidean
from mesh_search.search.hooks import NoopHooks, SearchHooks


class SearchState(str, Enum):
    READY = "ready"
    STEPPING = "stepping"
    DONE = "done"


class SearchOutcome(str, Enum):
    PENDING = "pending"
    FOUND = "found"  # goal closed, path reconstructed
    UNREACHABLE = "unreachable"  # goal-directed frontier ran dry
    EXHAUSTED = "exhausted"  # shortest-path tree complete


@dataclass
class SearchSession:
    """
    Everything one search owns besides the per-vertex closed/previous fields,
    which live on the graph. The driver holds the session and hands it to
    every engine call; ``initialize`` overwrites all of it.
    """

    graph: MeshGraph
    tree_mode: bool = False
    use_heuristic: bool = False
    heuristic: Heuristic = euclidean
    hooks: SearchHooks = field(default_factory=NoopHooks)
    strict: bool = True

    start: int = -1
    goal: int | None = None
    frontier: Frontier = field(default_factory=Frontier)
    state: SearchState = SearchState.READY
    outcome: SearchOutcome = SearchOutcome.PENDING

    path: list[int] = field(default_factory=list)  # goal -> start
    goal_cost: float | None = None
    closed_order: list[int] = field(default_factory=list)
    cost: dict[int, float] = field(default_factory=dict)  # key each vertex closed at
    steps: int = 0
    stale: int = 0

    @property
    def done(self) -> bool:
        return self.state is SearchState.DONE

    @property
    def found(self) -> bool:
        return self.outcome is SearchOutcome.FOUND
