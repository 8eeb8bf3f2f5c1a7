# io/search_logging.py
import json
import logging
import sys

from mesh_search.io.events import SearchDoneRec
from mesh_search.io.recorder import Recorder
from mesh_search.search.hooks import NoopHooks


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def default_json_logger(name="mesh_search", level="INFO", stream=None):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(stream or sys.stderr)
        h.setFormatter(JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class SearchLogging(NoopHooks):
    """
    Structured logs for the search lifecycle. Edge and path events are only
    logged in debug mode, one in every ``sample_every``.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.recorder = recorder
        self.log = logger or default_json_logger(level=level)
        self._edges = 0
        self._searches = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, "search": self._searches}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # search lifecycle

    def on_search_reset(self):
        self._searches += 1
        self._edges = 0
        self._emit("INFO", "search_reset")

    def on_traversal_edge(self, from_pos, to_pos):
        self._edges += 1
        if self.debug and (self._edges % self.sample_every) == 0:
            self._emit(
                "DEBUG", "traversal_edge", a=from_pos.as_tuple(), b=to_pos.as_tuple(), n=self._edges
            )

    def on_path_vertex(self, pos):
        if self.debug:
            self._emit("DEBUG", "path_vertex", pos=pos.as_tuple())

    def on_search_done(self, *, outcome, steps, closed, stale, pushed, cost):
        self._emit(
            "INFO",
            "search_done",
            outcome=outcome,
            steps=steps,
            closed=closed,
            stale=stale,
            pushed=pushed,
            cost=cost,
            edges=self._edges,
        )
        if self.recorder:
            self.recorder.emit(
                SearchDoneRec(
                    run_id=self.run_id,
                    seq=self._searches,
                    name="search_done",
                    outcome=outcome,
                    steps=steps,
                    closed=closed,
                    stale=stale,
                    pushed=pushed,
                    cost=cost,
                )
            )

    # stepping batches

    def run_start(self, *, max_steps, frontier):
        if self.debug:
            self._emit("DEBUG", "run_start", max_steps=max_steps, frontier=frontier)

    def run_end(self, *, steps, done, frontier, wall_ms):
        level = "INFO" if done else ("DEBUG" if self.debug else None)
        if level:
            self._emit(level, "run_end", steps=steps, done=done, frontier=frontier, wall_ms=wall_ms)
