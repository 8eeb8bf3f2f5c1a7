# mesh_search/app/controller.py
from typing import Literal

from mesh_search.domain.entities.geometry import Pt
from mesh_search.domain.graph import MeshGraph
from mesh_search.search.engine import initialize, run
from mesh_search.search.heuristics import Heuristic, euclidean
from mesh_search.search.hooks import NoopHooks, SearchHooks
from mesh_search.search.session import SearchSession

Mode = Literal["tree", "dijkstra", "astar"]


class PickController:
    """
    Turns picked points into searches, the way the interactive viewer does.

    Tree mode: every pick starts a shortest-path tree from the nearest vertex.
    Goal modes: picks alternate start, goal, start, goal...; each goal pick
    starts a search. With ``animate`` the search is advanced by ``tick``,
    ``batch_size`` steps at a time; otherwise it runs to completion inside
    ``pick``.
    """

    def __init__(
        self,
        graph: MeshGraph,
        *,
        mode: Mode = "astar",
        heuristic: Heuristic = euclidean,
        hooks: SearchHooks | None = None,
        animate: bool = True,
        batch_size: int = 32,
        strict: bool = True,
    ):
        self.graph = graph
        self.animate, self.batch_size = animate, batch_size
        self.session = SearchSession(graph=graph, heuristic=heuristic, strict=strict)
        self.session.hooks = hooks or NoopHooks()
        self.start: int | None = None
        self.goal: int | None = None
        self.searching = False
        self.mode: Mode = mode

    def set_mode(self, mode: Mode) -> None:
        if mode == "tree" and self.mode != "tree":
            self.start = None
        self.mode = mode

    def pick(self, point: Pt) -> SearchSession | None:
        nearest = self.graph.find_nearest_vertex(point)

        if self.mode == "tree":
            self.start, self.goal = nearest, None
        elif self.start is None or self.goal is not None:
            self.start, self.goal = nearest, None
            return None
        else:
            self.goal = nearest

        s = self.session
        s.tree_mode = self.mode == "tree"
        s.use_heuristic = self.mode == "astar"
        initialize(s, self.start, self.goal)

        if self.animate:
            self.searching = True
        else:
            run(s)
            self.searching = False
        return s

    def tick(self) -> bool:
        """Advance the active search by one batch. True when nothing is left to do."""
        if not self.searching:
            return True
        run(self.session, max_steps=self.batch_size)
        if self.session.done:
            self.searching = False
        return not self.searching
