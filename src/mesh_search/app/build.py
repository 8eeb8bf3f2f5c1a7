# mesh_search/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from mesh_search.app.controller import PickController
from mesh_search.config.models import ScenarioModel
from mesh_search.domain.graph import MeshGraph
from mesh_search.io.recorder import JsonlSink, MemorySink, Recorder, TraceBuffers
from mesh_search.io.search_logging import SearchLogging
from mesh_search.runtime.registries import make_heuristic
from mesh_search.runtime.resources import load_mesh_from_path
from mesh_search.search.hooks import MultiHooks, SearchHooks


@dataclass
class App:
    model: ScenarioModel
    graph: MeshGraph
    controller: PickController
    traces: TraceBuffers
    recorder: Recorder | None
    hooks: SearchHooks


def build(
    cfg: ScenarioModel | Mapping,
    *,
    graph: MeshGraph | None = None,
    use_logging: bool = True,
    trace: str | None = None,
) -> App:
    """
    Assemble graph, hooks and controller from a scenario.

    ``trace`` selects where recorded events go: ``"jsonl"`` (stdout),
    ``"memory"`` or None for no recorder. ``graph`` skips the mesh load.
    """
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Graph
    if graph is None:
        positions, faces = load_mesh_from_path(
            model.mesh.file, model.mesh.fmt, tuple(model.mesh.offset)
        )
        graph = MeshGraph.build(positions, faces, bidirectional=model.mesh.bidirectional)

    # 2) Recorder & hooks
    recorder = None
    if trace == "jsonl":
        recorder = Recorder(JsonlSink())
    elif trace == "memory":
        recorder = Recorder(MemorySink())
    elif trace is not None:
        raise ValueError(f"Unknown trace target {trace!r}")

    traces = TraceBuffers(recorder=recorder, run_id=model.run_id)
    hooks: SearchHooks = traces
    if use_logging:
        log_hooks = SearchLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
            recorder=recorder,
        )
        hooks = MultiHooks(traces, log_hooks)

    # 3) Controller
    controller = PickController(
        graph,
        mode=model.search.mode,
        heuristic=make_heuristic(model.search.heuristic),
        hooks=hooks,
        animate=model.search.animate,
        batch_size=model.search.batch_size,
        strict=model.search.strict,
    )

    return App(model, graph, controller, traces, recorder, hooks)


def replay(app: App, max_ticks: int | None = None) -> int:
    """Feed the scenario picks through the controller, ticking each search to the end."""
    ticks = 0
    for p in app.model.picks:
        app.controller.pick(p)
        while app.controller.searching:
            app.controller.tick()
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                return ticks
    return ticks
