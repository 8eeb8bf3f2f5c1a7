# mesh_search/io/events.py

from dataclasses import dataclass


# Base type for recorded trace events (not part of the search itself)
@dataclass
class TraceEvent:
    run_id: str
    seq: int  # emission order within a run
    name: str  # stable event name


@dataclass
class SearchResetRec(TraceEvent):
    pass


@dataclass
class TraversalEdgeRec(TraceEvent):
    a: tuple[float, float, float]
    b: tuple[float, float, float]


@dataclass
class PathVertexRec(TraceEvent):
    pos: tuple[float, float, float]


@dataclass
class SearchDoneRec(TraceEvent):
    outcome: str
    steps: int
    closed: int
    stale: int
    pushed: int
    cost: float | None = None
