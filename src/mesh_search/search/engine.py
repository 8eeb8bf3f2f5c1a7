# search/engine.py
"""
Incremental search over a MeshGraph.

Each call to ``step_tree`` / ``step`` performs exactly one frontier pop, so
a driver can interleave any number of steps with its own work and resume
later. ``run`` wraps the loop for the synchronous and batched cadences.
"""

import time

from mesh_search.domain.errors import SearchAlreadyTerminatedError
from mesh_search.domain.graph import MeshGraph
from mesh_search.search.frontier import Frontier, FrontierEntry
from mesh_search.search.heuristics import Heuristic, euclidean
from mesh_search.search.hooks import SearchHooks
from mesh_search.search.session import SearchOutcome, SearchSession, SearchState


def new_session(
    graph: MeshGraph,
    start: int,
    goal: int | None = None,
    *,
    tree_mode: bool = False,
    use_heuristic: bool = False,
    heuristic: Heuristic = euclidean,
    hooks: SearchHooks | None = None,
    strict: bool = True,
) -> SearchSession:
    session = SearchSession(
        graph=graph,
        tree_mode=tree_mode,
        use_heuristic=use_heuristic,
        heuristic=heuristic,
        strict=strict,
    )
    if hooks is not None:
        session.hooks = hooks
    initialize(session, start, goal)
    return session


def initialize(session: SearchSession, start: int, goal: int | None = None) -> None:
    graph = session.graph
    graph.check_index(start, "start")
    if not session.tree_mode:
        if goal is None:
            raise ValueError("goal-directed search needs a goal vertex")
        graph.check_index(goal, "goal")

    graph.reset_search_state()

    session.start, session.goal = start, goal
    session.frontier = Frontier()
    session.frontier.push(FrontierEntry(previous=None, target=start, f=0.0, g=0.0))
    session.state = SearchState.READY
    session.outcome = SearchOutcome.PENDING
    session.path = []
    session.goal_cost = None
    session.closed_order = []
    session.cost = {}
    session.steps = 0
    session.stale = 0

    session.hooks.on_search_reset()


def step_tree(session: SearchSession) -> bool:
    """One shortest-path-tree step. Returns True once the tree is complete."""
    if _enter(session):
        return True
    graph = session.graph

    entry = session.frontier.pop()
    if entry is None:
        return _finish(session, SearchOutcome.EXHAUSTED)

    target = graph.vertex(entry.target)
    if target.is_closed:
        session.stale += 1
        return False

    _close(session, entry, key=entry.f)
    if entry.previous is not None:
        session.hooks.on_traversal_edge(graph.position(entry.previous), target.position)

    for n in target.neighbors:
        if graph.vertex(n).is_closed:
            continue
        f = entry.f + graph.distance(target.index, n)
        session.frontier.push(FrontierEntry(previous=target.index, target=n, f=f, g=0.0))

    return False


def step(session: SearchSession) -> bool:
    """One goal-directed step (Dijkstra, or A* with ``use_heuristic``).

    Returns True when the goal was reached or the frontier ran dry; the two
    are told apart by ``session.outcome``.
    """
    if _enter(session):
        return True
    graph = session.graph
    goal = session.goal

    entry = session.frontier.pop()
    if entry is None:
        return _finish(session, SearchOutcome.UNREACHABLE)

    target = graph.vertex(entry.target)
    if target.is_closed:
        session.stale += 1
        return False

    _close(session, entry, key=entry.g)

    if target.index == goal:
        session.path = reconstruct_path(graph, goal)
        session.goal_cost = entry.g
        for v in session.path:
            session.hooks.on_path_vertex(graph.position(v))
        return _finish(session, SearchOutcome.FOUND)

    for n in target.neighbors:
        if graph.vertex(n).is_closed:
            continue
        g = entry.g + graph.distance(target.index, n)
        h = session.heuristic(graph, n, goal) if session.use_heuristic else 0.0
        session.frontier.push(FrontierEntry(previous=target.index, target=n, f=g + h, g=g))
        session.hooks.on_traversal_edge(target.position, graph.position(n))

    return False


def advance(session: SearchSession) -> bool:
    return step_tree(session) if session.tree_mode else step(session)


def run(session: SearchSession, max_steps: int | None = None) -> int:
    """Step until done, or at most ``max_steps`` times. Returns steps taken."""
    t0 = time.perf_counter()
    session.hooks.run_start(max_steps=max_steps, frontier=len(session.frontier))
    taken = 0
    done = session.done
    while not done and (max_steps is None or taken < max_steps):
        done = advance(session)
        taken += 1
    session.hooks.run_end(
        steps=taken,
        done=done,
        frontier=len(session.frontier),
        wall_ms=(time.perf_counter() - t0) * 1000,
    )
    return taken


def reconstruct_path(graph: MeshGraph, goal: int) -> list[int]:
    """Vertex indices from ``goal`` back to the search start, both included."""
    path: list[int] = []
    seen: set[int] = set()
    v: int | None = goal
    while v is not None:
        if v in seen:
            raise RuntimeError(f"predecessor cycle at vertex {v}")
        seen.add(v)
        path.append(v)
        v = graph.vertex(v).previous
    return path


# ---------------- internals ------------------------------------------


def _enter(session: SearchSession) -> bool:
    if session.state is SearchState.DONE:
        if session.strict:
            raise SearchAlreadyTerminatedError(
                f"search already finished ({session.outcome.value}); initialize again"
            )
        return True
    session.state = SearchState.STEPPING
    session.steps += 1
    return False


def _close(session: SearchSession, entry: FrontierEntry, *, key: float) -> None:
    target = session.graph.vertex(entry.target)
    target.is_closed = True
    target.previous = entry.previous
    session.closed_order.append(target.index)
    session.cost[target.index] = key


def _finish(session: SearchSession, outcome: SearchOutcome) -> bool:
    session.state = SearchState.DONE
    session.outcome = outcome
    session.hooks.on_search_done(
        outcome=outcome.value,
        steps=session.steps,
        closed=len(session.closed_order),
        stale=session.stale,
        pushed=session.frontier.pushed,
        cost=session.goal_cost,
    )
    return True
