# search/hooks.py
from typing import Protocol

from mesh_search.domain.entities.geometry import Point3


class SearchHooks(Protocol):
    def on_search_reset(self): ...
    def on_traversal_edge(self, from_pos: Point3, to_pos: Point3): ...
    def on_path_vertex(self, pos: Point3): ...
    def on_search_done(self, *, outcome, steps, closed, stale, pushed, cost): ...
    def run_start(self, *, max_steps, frontier): ...
    def run_end(self, *, steps, done, frontier, wall_ms): ...


class NoopHooks:
    def on_search_reset(self):
        pass

    def on_traversal_edge(self, *_):
        pass

    def on_path_vertex(self, *_):
        pass

    def on_search_done(self, **_):
        pass

    def run_start(self, **_):
        pass

    def run_end(self, **_):
        pass


class MultiHooks:
    """Fan every hook call out to several hook objects, in order."""

    def __init__(self, *hooks: SearchHooks):
        self.hooks = hooks

    def on_search_reset(self):
        for h in self.hooks:
            h.on_search_reset()

    def on_traversal_edge(self, from_pos, to_pos):
        for h in self.hooks:
            h.on_traversal_edge(from_pos, to_pos)

    def on_path_vertex(self, pos):
        for h in self.hooks:
            h.on_path_vertex(pos)

    def on_search_done(self, **kw):
        for h in self.hooks:
            h.on_search_done(**kw)

    def run_start(self, **kw):
        for h in self.hooks:
            h.run_start(**kw)

    def run_end(self, **kw):
        for h in self.hooks:
            h.run_end(**kw)
