# io/recorder.py
import json
import sys
from dataclasses import asdict
from typing import Protocol

import numpy as np

from mesh_search.domain.entities.geometry import Point3
from mesh_search.io.events import PathVertexRec, SearchResetRec, TraversalEdgeRec
from mesh_search.search.hooks import NoopHooks


class Sink(Protocol):
    def write(self, ev) -> None: ...


class JsonlSink:
    def __init__(self, fp=None):
        self.fp = fp or sys.stdout

    def write(self, ev) -> None:
        self.fp.write(json.dumps(asdict(ev)) + "\n")


class MemorySink:
    def __init__(self):
        self.events: list = []

    def write(self, ev) -> None:
        self.events.append(ev)


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, ev):
        for s in self.sinks:
            s.write(ev)


# ---------------- draw-side trace buffers -------------------------


class TraceBuffer:
    """Fixed-capacity xyz point buffer, float32, filled front to back.

    Points pushed past ``capacity`` are dropped and counted.
    """

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._xyz = np.zeros((capacity, 3), dtype=np.float32)
        self.count = 0
        self.dropped = 0

    def push(self, pos: Point3) -> None:
        if self.count >= self.capacity:
            self.dropped += 1
            return
        self._xyz[self.count] = (pos.x, pos.y, pos.z)
        self.count += 1

    def push_segment(self, a: Point3, b: Point3) -> None:
        # both endpoints or neither; a dropped segment counts once
        if self.count + 2 > self.capacity:
            self.dropped += 1
            return
        self.push(a)
        self.push(b)

    def clear(self) -> None:
        self.count = 0
        self.dropped = 0

    @property
    def points(self) -> np.ndarray:
        return self._xyz[: self.count]


class TraceBuffers(NoopHooks):
    """
    Search hooks that keep what a renderer would draw: traversal segments as
    point pairs and the found path as a polyline. Optionally mirrors every
    event to a Recorder.
    """

    def __init__(
        self,
        segment_capacity: int = 1 << 14,
        path_capacity: int = 1 << 10,
        recorder: Recorder | None = None,
        run_id: str = "local",
    ):
        self.segments = TraceBuffer(segment_capacity)
        self.path = TraceBuffer(path_capacity)
        self.recorder, self.run_id = recorder, run_id
        self._seq = 0

    def _record(self, cls, name: str, **fields):
        if self.recorder:
            self._seq += 1
            self.recorder.emit(cls(run_id=self.run_id, seq=self._seq, name=name, **fields))

    def on_search_reset(self):
        self.segments.clear()
        self.path.clear()
        self._record(SearchResetRec, "search_reset")

    def on_traversal_edge(self, from_pos, to_pos):
        self.segments.push_segment(from_pos, to_pos)
        self._record(TraversalEdgeRec, "traversal_edge", a=from_pos.as_tuple(), b=to_pos.as_tuple())

    def on_path_vertex(self, pos):
        self.path.push(pos)
        self._record(PathVertexRec, "path_vertex", pos=pos.as_tuple())
